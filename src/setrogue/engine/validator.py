from __future__ import annotations

from collections import Counter
from collections.abc import Collection, Sequence
from dataclasses import dataclass

from .types import DEFAULT_ATTRIBUTES, AttributeName, Card

_PLURALS: dict[str, str] = {
    "shape": "shapes",
    "color": "colors",
    "number": "numbers",
    "shading": "shadings",
    "background": "backgrounds",
}

COUNT_ERROR = "A valid combination must consist of exactly 3 cards."


@dataclass(frozen=True)
class ValidationResult:
    is_valid: bool
    invalid_attributes: tuple[str, ...] = ()
    error_message: str | None = None


def _describe(attr: AttributeName, cards: Sequence[Card]) -> str:
    counts = Counter(str(c.attribute(attr)) for c in cards)
    parts = [f"{n} {value}" for value, n in sorted(counts.items())]
    return f"The {_PLURALS[attr]} ({' and '.join(parts)}) must be all the same or all different"


def validate(
    cards: Sequence[Card],
    active_attributes: Collection[AttributeName] = DEFAULT_ATTRIBUTES,
) -> ValidationResult:
    """Check whether three cards form a valid combination.

    For every active attribute the three values must be all equal or all
    distinct. Inactive attributes are ignored. The result does not depend on
    the order of ``cards``.
    """
    if len(cards) != 3:
        return ValidationResult(is_valid=False, invalid_attributes=("count",), error_message=COUNT_ERROR)

    invalid: list[AttributeName] = []
    for attr in active_attributes:
        distinct = {c.attribute(attr) for c in cards}
        if len(distinct) == 2:
            invalid.append(attr)

    if not invalid:
        return ValidationResult(is_valid=True)

    reasons = ", and ".join(_describe(a, cards) for a in invalid)
    return ValidationResult(
        is_valid=False,
        invalid_attributes=tuple(invalid),
        error_message=f"Not a valid combination: {reasons}.",
    )


def is_valid_combination(cards: Sequence[Card], active_attributes: Collection[AttributeName] = DEFAULT_ATTRIBUTES) -> bool:
    return validate(cards, active_attributes).is_valid


def find_all_combinations(
    board: Sequence[Card],
    active_attributes: Collection[AttributeName] = DEFAULT_ATTRIBUTES,
) -> list[tuple[Card, Card, Card]]:
    """Every valid triple on the board, in board order. Dud cards never count."""
    playable = [c for c in board if not c.is_dud]
    found: list[tuple[Card, Card, Card]] = []
    n = len(playable)
    for i in range(n):
        for j in range(i + 1, n):
            for k in range(j + 1, n):
                triple = (playable[i], playable[j], playable[k])
                if is_valid_combination(triple, active_attributes):
                    found.append(triple)
    return found


def find_valid_combination(
    board: Sequence[Card],
    active_attributes: Collection[AttributeName] = DEFAULT_ATTRIBUTES,
    exclude: Collection[str] = (),
) -> tuple[Card, Card, Card] | None:
    candidates = [c for c in board if c.id not in exclude]
    combos = find_all_combinations(candidates, active_attributes)
    return combos[0] if combos else None


def is_all_different(cards: Sequence[Card], active_attributes: Collection[AttributeName] = DEFAULT_ATTRIBUTES) -> bool:
    return all(len({c.attribute(a) for c in cards}) == len(cards) for a in active_attributes)


def is_all_same_color(cards: Sequence[Card]) -> bool:
    return len({c.color for c in cards}) == 1


def has_squiggle(cards: Sequence[Card]) -> bool:
    return any(c.shape == "squiggle" for c in cards)
