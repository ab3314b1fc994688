from __future__ import annotations

DEFAULT_COLUMNS = 3


def adjacent_indices(index: int, size: int, columns: int = DEFAULT_COLUMNS) -> list[int]:
    """Orthogonal neighbours of ``index`` on a row-major board (up, down, left, right)."""
    row, col = divmod(index, columns)
    out: list[int] = []
    if row > 0:
        out.append(index - columns)
    if index + columns < size:
        out.append(index + columns)
    if col > 0:
        out.append(index - 1)
    if col < columns - 1 and index + 1 < size:
        out.append(index + 1)
    return out


def line_indices(index: int, size: int, is_row: bool, columns: int = DEFAULT_COLUMNS) -> list[int]:
    """Every index in the same row (``is_row``) or column as ``index``."""
    row, col = divmod(index, columns)
    if is_row:
        start = row * columns
        return [i for i in range(start, start + columns) if i < size]
    return list(range(col, size, columns))
