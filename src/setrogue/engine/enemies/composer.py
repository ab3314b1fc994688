from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING, Literal

from ..types import Card
from .behaviors import Behavior
from .results import (
    EnemyMatchResult,
    EnemyStartResult,
    EnemyStatModifiers,
    EnemyTickResult,
    EnemyUIModifiers,
)

if TYPE_CHECKING:
    from ..round_stats import RoundStats

DefeatPredicate = Callable[["RoundStats"], bool]
EnemyPhase = Literal["constructed", "active", "ended"]


def _never_defeated(stats: "RoundStats") -> bool:
    return False


def _fold_match(results: Sequence[EnemyMatchResult]) -> EnemyMatchResult:
    multiplier = 1.0
    for r in results:
        multiplier *= r.points_multiplier
    return EnemyMatchResult(
        cards_to_remove=tuple(x for r in results for x in r.cards_to_remove),
        cards_to_flip=tuple(x for r in results for x in r.cards_to_flip),
        card_modifications=tuple(x for r in results for x in r.card_modifications),
        points_multiplier=multiplier,
        time_delta=sum(r.time_delta for r in results),
        events=tuple(x for r in results for x in r.events),
    )


class EnemyInstance:
    """A named adversary composed from behavior modules.

    Hooks fan out to every behavior in order and fold the partial results:
    numeric deltas add, lists concatenate, points multipliers multiply and
    instant death is OR-ed. Card draws are threaded through each behavior in
    turn.
    """

    def __init__(
        self,
        *,
        name: str,
        tier: int,
        description: str,
        defeat_condition_text: str,
        icon: str,
        behaviors: Sequence[Behavior] = (),
        check_defeat: DefeatPredicate | None = None,
    ) -> None:
        self.name = name
        self.tier = tier
        self.description = description
        self.defeat_condition_text = defeat_condition_text
        self.icon = icon
        self.behaviors: tuple[Behavior, ...] = tuple(behaviors)
        self._check_defeat = check_defeat or _never_defeated
        self.phase: EnemyPhase = "constructed"

    def __repr__(self) -> str:
        return f"EnemyInstance(name={self.name!r}, tier={self.tier}, phase={self.phase!r})"

    def on_round_start(self, board: Sequence[Card]) -> EnemyStartResult:
        self.phase = "active"
        results = [b.on_round_start(board) for b in self.behaviors]
        return EnemyStartResult(
            card_modifications=tuple(x for r in results for x in r.card_modifications),
            events=tuple(x for r in results for x in r.events),
        )

    def on_tick(self, delta_ms: float, board: Sequence[Card]) -> EnemyTickResult:
        results = [b.on_tick(delta_ms, board) for b in self.behaviors]
        return EnemyTickResult(
            cards_to_remove=tuple(x for r in results for x in r.cards_to_remove),
            cards_to_flip=tuple(x for r in results for x in r.cards_to_flip),
            card_modifications=tuple(x for r in results for x in r.card_modifications),
            score_delta=sum(r.score_delta for r in results),
            health_delta=sum(r.health_delta for r in results),
            time_delta=sum(r.time_delta for r in results),
            instant_death=any(r.instant_death for r in results),
            events=tuple(x for r in results for x in r.events),
        )

    def on_valid_match(self, cards: Sequence[Card], board: Sequence[Card]) -> EnemyMatchResult:
        return _fold_match([b.on_valid_match(cards, board) for b in self.behaviors])

    def on_invalid_match(self, cards: Sequence[Card], board: Sequence[Card]) -> EnemyMatchResult:
        return _fold_match([b.on_invalid_match(cards, board) for b in self.behaviors])

    def on_card_draw(self, card: Card) -> Card:
        for b in self.behaviors:
            card = b.on_card_draw(card)
        return card

    def stat_modifiers(self) -> EnemyStatModifiers:
        merged = EnemyStatModifiers()
        for b in self.behaviors:
            merged = merged.merge(b.stat_modifiers())
        return merged

    def ui_modifiers(self) -> EnemyUIModifiers:
        merged = EnemyUIModifiers()
        for b in self.behaviors:
            merged = merged.merge(b.ui_modifiers())
        return merged

    def on_round_end(self) -> None:
        if self.phase == "ended":
            return
        self.phase = "ended"
        for b in self.behaviors:
            b.on_round_end()

    def check_defeat_condition(self, stats: "RoundStats") -> bool:
        return self._check_defeat(stats)


def create_dummy_enemy() -> EnemyInstance:
    return EnemyInstance(
        name="Dummy",
        tier=1,
        description="No effect",
        defeat_condition_text="Always defeated",
        icon="lorc/uncertainty",
        check_defeat=lambda stats: True,
    )
