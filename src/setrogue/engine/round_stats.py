from __future__ import annotations

import time
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field

from .types import Card


@dataclass(frozen=True)
class RoundStats:
    """Read-only view of one round's progress, consumed by defeat predicates."""

    total_matches: int = 0
    current_streak: int = 0
    max_streak: int = 0
    invalid_matches: int = 0
    match_times: tuple[float, ...] = ()
    time_remaining: float = 60
    cards_remaining: int = 12
    triple_cards_cleared: int = 0
    face_down_cards_matched: int = 0
    bombs_defused: int = 0
    countdown_cards_matched: int = 0
    shapes_matched: frozenset[str] = frozenset()
    colors_matched: frozenset[str] = frozenset()
    color_match_counts: Mapping[str, int] = field(default_factory=dict)
    all_different_matches: int = 0
    all_same_color_matches: int = 0
    squiggle_matches: int = 0
    graces_used: int = 0
    hints_used: int = 0
    hints_remaining: int = 0
    graces_remaining: int = 0
    damage_received: int = 0
    weapon_effects_triggered: frozenset[str] = frozenset()
    current_score: float = 0
    target_score: int = 0

    def to_dict(self) -> dict[str, object]:
        return {
            "total_matches": self.total_matches,
            "current_streak": self.current_streak,
            "max_streak": self.max_streak,
            "invalid_matches": self.invalid_matches,
            "match_times": list(self.match_times),
            "time_remaining": self.time_remaining,
            "cards_remaining": self.cards_remaining,
            "triple_cards_cleared": self.triple_cards_cleared,
            "face_down_cards_matched": self.face_down_cards_matched,
            "bombs_defused": self.bombs_defused,
            "countdown_cards_matched": self.countdown_cards_matched,
            "shapes_matched": sorted(self.shapes_matched),
            "colors_matched": sorted(self.colors_matched),
            "color_match_counts": dict(sorted(self.color_match_counts.items())),
            "all_different_matches": self.all_different_matches,
            "all_same_color_matches": self.all_same_color_matches,
            "squiggle_matches": self.squiggle_matches,
            "graces_used": self.graces_used,
            "hints_used": self.hints_used,
            "hints_remaining": self.hints_remaining,
            "graces_remaining": self.graces_remaining,
            "damage_received": self.damage_received,
            "weapon_effects_triggered": sorted(self.weapon_effects_triggered),
            "current_score": self.current_score,
            "target_score": self.target_score,
        }


def _monotonic_ms() -> float:
    return time.monotonic() * 1000


class RoundStatsTracker:
    """Accumulates per-round statistics.

    ``clock`` returns milliseconds; the round state machine injects its own
    round clock so that recorded match gaps are deterministic.
    """

    def __init__(self, clock: Callable[[], float] | None = None) -> None:
        self._clock = clock or _monotonic_ms
        self.reset()

    def reset(self, target_score: int = 0, hints: int = 0, graces: int = 0) -> None:
        self._total_matches = 0
        self._current_streak = 0
        self._max_streak = 0
        self._invalid_matches = 0
        self._match_times: list[float] = []
        self._last_match_at = self._clock()
        self._time_remaining: float = 60
        self._cards_remaining = 12
        self._triple_cards_cleared = 0
        self._face_down_cards_matched = 0
        self._bombs_defused = 0
        self._countdown_cards_matched = 0
        self._shapes: set[str] = set()
        self._colors: set[str] = set()
        self._color_counts: dict[str, int] = {}
        self._all_different = 0
        self._all_same_color = 0
        self._squiggle = 0
        self._graces_used = 0
        self._hints_used = 0
        self._hints_remaining = hints
        self._graces_remaining = graces
        self._damage_received = 0
        self._effects: set[str] = set()
        self._score: float = 0
        self._target_score = target_score

    def record_valid_match(
        self,
        cards: Sequence[Card],
        *,
        is_all_different: bool = False,
        is_all_same_color: bool = False,
        has_squiggle: bool = False,
        points_earned: float = 0,
    ) -> None:
        now = self._clock()
        self._match_times.append(now - self._last_match_at)
        self._last_match_at = now

        self._total_matches += 1
        self._current_streak += 1
        self._max_streak = max(self._max_streak, self._current_streak)

        for c in cards:
            self._shapes.add(c.shape)
            self._colors.add(c.color)
            self._color_counts[c.color] = self._color_counts.get(c.color, 0) + 1
            if c.is_face_down:
                self._face_down_cards_matched += 1
            if c.has_bomb:
                self._bombs_defused += 1
            if c.has_countdown:
                self._countdown_cards_matched += 1

        if is_all_different:
            self._all_different += 1
        if is_all_same_color:
            self._all_same_color += 1
        if has_squiggle:
            self._squiggle += 1
        self._score += points_earned

    def record_invalid_match(self) -> None:
        self._invalid_matches += 1
        self._current_streak = 0

    def record_grace_used(self) -> None:
        self._graces_used += 1
        self._graces_remaining = max(0, self._graces_remaining - 1)

    def record_hint_used(self) -> None:
        self._hints_used += 1
        self._hints_remaining = max(0, self._hints_remaining - 1)

    def record_damage(self, amount: int = 1) -> None:
        self._damage_received += amount

    def record_weapon_effect(self, kind: str) -> None:
        self._effects.add(kind)

    def record_triple_card_cleared(self) -> None:
        self._triple_cards_cleared += 1

    def update_time_remaining(self, seconds: float) -> None:
        self._time_remaining = seconds

    def update_cards_remaining(self, count: int) -> None:
        self._cards_remaining = count

    def update_score(self, score: float) -> None:
        self._score = score

    def update_hints_remaining(self, hints: int) -> None:
        self._hints_remaining = hints

    def update_graces_remaining(self, graces: int) -> None:
        self._graces_remaining = graces

    def get_stats(self) -> RoundStats:
        return RoundStats(
            total_matches=self._total_matches,
            current_streak=self._current_streak,
            max_streak=self._max_streak,
            invalid_matches=self._invalid_matches,
            match_times=tuple(self._match_times),
            time_remaining=self._time_remaining,
            cards_remaining=self._cards_remaining,
            triple_cards_cleared=self._triple_cards_cleared,
            face_down_cards_matched=self._face_down_cards_matched,
            bombs_defused=self._bombs_defused,
            countdown_cards_matched=self._countdown_cards_matched,
            shapes_matched=frozenset(self._shapes),
            colors_matched=frozenset(self._colors),
            color_match_counts=dict(self._color_counts),
            all_different_matches=self._all_different,
            all_same_color_matches=self._all_same_color,
            squiggle_matches=self._squiggle,
            graces_used=self._graces_used,
            hints_used=self._hints_used,
            hints_remaining=self._hints_remaining,
            graces_remaining=self._graces_remaining,
            damage_received=self._damage_received,
            weapon_effects_triggered=frozenset(self._effects),
            current_score=self._score,
            target_score=self._target_score,
        )
