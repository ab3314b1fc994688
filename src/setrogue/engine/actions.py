from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class TickAction:
    elapsed_ms: int


@dataclass(frozen=True)
class MatchAction:
    card_ids: tuple[str, ...]


@dataclass(frozen=True)
class UseHintAction:
    pass


@dataclass(frozen=True)
class BurnCardAction:
    card_id: str


@dataclass(frozen=True)
class EndRoundAction:
    pass


@dataclass(frozen=True)
class CancelRoundAction:
    pass


Action = TickAction | MatchAction | UseHintAction | BurnCardAction | EndRoundAction | CancelRoundAction
