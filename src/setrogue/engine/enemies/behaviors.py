"""Reusable enemy behavior modules.

Each behavior owns its private state (timers, tracked card ids) and draws all
randomness from the ``random.Random`` it was built with. Every hook defaults
to a no-op, so a behavior only overrides the moments it cares about.
"""

from __future__ import annotations

import random
from collections.abc import Sequence
from dataclasses import replace
from typing import Literal

from ..types import ATTRIBUTE_VALUES, CORE_ATTRIBUTES, Card, WeaponCounterType
from .results import (
    CardModification,
    CardRemoval,
    EnemyMatchResult,
    EnemyStartResult,
    EnemyStatModifiers,
    EnemyTickResult,
    EnemyUIModifiers,
    Event,
    WeaponCounter,
)

InactivityPenalty = Literal["damage", "death"]

WARNING_WINDOW_MS = (4000, 5000)


def _roll(rng: random.Random, chance: float) -> bool:
    return rng.random() * 100 < chance


def _eligible(board: Sequence[Card], *, allow_face_down: bool = True) -> list[Card]:
    return [c for c in board if not c.is_dud and (allow_face_down or not c.is_face_down)]


def _in_warning_window(remaining_ms: float) -> bool:
    low, high = WARNING_WINDOW_MS
    return low < remaining_ms <= high


class Behavior:
    def __init__(self, rng: random.Random) -> None:
        self._rng = rng

    def on_round_start(self, board: Sequence[Card]) -> EnemyStartResult:
        return EnemyStartResult()

    def on_tick(self, delta_ms: float, board: Sequence[Card]) -> EnemyTickResult:
        return EnemyTickResult()

    def on_valid_match(self, cards: Sequence[Card], board: Sequence[Card]) -> EnemyMatchResult:
        return EnemyMatchResult()

    def on_invalid_match(self, cards: Sequence[Card], board: Sequence[Card]) -> EnemyMatchResult:
        return EnemyMatchResult()

    def on_card_draw(self, card: Card) -> Card:
        return card

    def stat_modifiers(self) -> EnemyStatModifiers:
        return EnemyStatModifiers()

    def ui_modifiers(self) -> EnemyUIModifiers:
        return EnemyUIModifiers()

    def on_round_end(self) -> None:
        return None


class _IntervalBehavior(Behavior):
    """Fires ``_fire`` once per elapsed interval."""

    def __init__(self, rng: random.Random, interval_ms: int) -> None:
        super().__init__(rng)
        self.interval_ms = interval_ms
        self._elapsed = 0.0

    def on_tick(self, delta_ms: float, board: Sequence[Card]) -> EnemyTickResult:
        self._elapsed += delta_ms
        results: list[EnemyTickResult] = []
        while self._elapsed >= self.interval_ms:
            res = self._fire(board)
            if res is None:
                # Held: fires on the first tick the board allows it.
                self._elapsed = float(self.interval_ms)
                break
            self._elapsed -= self.interval_ms
            results.append(res)
            if res.cards_to_remove:
                gone = {r.card_id for r in res.cards_to_remove}
                board = [c for c in board if c.id not in gone]
        if not results:
            return EnemyTickResult()
        if len(results) == 1:
            return results[0]
        return EnemyTickResult(
            cards_to_remove=tuple(r for res in results for r in res.cards_to_remove),
            card_modifications=tuple(m for res in results for m in res.card_modifications),
            events=tuple(e for res in results for e in res.events),
        )

    def _fire(self, board: Sequence[Card]) -> EnemyTickResult | None:
        """Result of one interval, or None to hold the charge until a later tick."""
        raise NotImplementedError

    def on_round_end(self) -> None:
        self._elapsed = 0.0


class DudCard(Behavior):
    def __init__(self, rng: random.Random, chance: float) -> None:
        super().__init__(rng)
        self.chance = chance

    def on_card_draw(self, card: Card) -> Card:
        if card.is_dud or not _roll(self._rng, self.chance):
            return card
        return replace(card, is_dud=True)


class Inactivity(Behavior):
    def __init__(self, rng: random.Random, max_ms: int, penalty: InactivityPenalty = "damage") -> None:
        super().__init__(rng)
        self.max_ms = max_ms
        self.penalty = penalty
        self._idle = 0.0
        self._warned = False

    def on_tick(self, delta_ms: float, board: Sequence[Card]) -> EnemyTickResult:
        self._idle += delta_ms
        remaining = self.max_ms - self._idle
        if remaining <= 0:
            self._idle = 0.0
            self._warned = False
            event: Event = {"type": "INACTIVITY_PENALTY", "penalty": self.penalty}
            if self.penalty == "death":
                return EnemyTickResult(instant_death=True, events=(event,))
            return EnemyTickResult(health_delta=-1, events=(event,))
        if _in_warning_window(remaining) and not self._warned:
            self._warned = True
            return EnemyTickResult(
                events=({"type": "INACTIVITY_WARNING", "seconds_left": int(remaining // 1000)},)
            )
        return EnemyTickResult()

    def on_valid_match(self, cards: Sequence[Card], board: Sequence[Card]) -> EnemyMatchResult:
        self._idle = 0.0
        self._warned = False
        return EnemyMatchResult()

    def ui_modifiers(self) -> EnemyUIModifiers:
        return EnemyUIModifiers(show_inactivity_bar=True, inactivity_max_ms=self.max_ms)

    def on_round_end(self) -> None:
        self._idle = 0.0
        self._warned = False


class ScoreDecay(Behavior):
    def __init__(self, rng: random.Random, rate_per_second: float) -> None:
        super().__init__(rng)
        self.rate = rate_per_second

    def on_tick(self, delta_ms: float, board: Sequence[Card]) -> EnemyTickResult:
        return EnemyTickResult(score_delta=-(delta_ms / 1000) * self.rate)

    def ui_modifiers(self) -> EnemyUIModifiers:
        return EnemyUIModifiers(show_score_decay=True, score_decay_rate=self.rate)


class FaceDown(Behavior):
    def __init__(self, rng: random.Random, chance: float, flip_chance: float) -> None:
        super().__init__(rng)
        self.chance = chance
        self.flip_chance = flip_chance

    def on_card_draw(self, card: Card) -> Card:
        if card.is_face_down or not _roll(self._rng, self.chance):
            return card
        return replace(card, is_face_down=True)

    def on_valid_match(self, cards: Sequence[Card], board: Sequence[Card]) -> EnemyMatchResult:
        matched = {c.id for c in cards}
        flips: list[str] = []
        for c in board:
            if c.id in matched or not c.is_face_down:
                continue
            if _roll(self._rng, self.flip_chance):
                flips.append(c.id)
        events = tuple({"type": "CARD_FLIPPED", "card_id": cid} for cid in flips)
        return EnemyMatchResult(cards_to_flip=tuple(flips), events=events)


class CardRemovalTimer(_IntervalBehavior):
    def __init__(self, rng: random.Random, interval_ms: int, min_board_size: int) -> None:
        super().__init__(rng, interval_ms)
        self.min_board_size = min_board_size

    def _fire(self, board: Sequence[Card]) -> EnemyTickResult | None:
        if len(board) <= self.min_board_size:
            return None
        candidates = _eligible(board)
        if not candidates:
            return EnemyTickResult()
        victim = self._rng.choice(candidates)
        return EnemyTickResult(
            cards_to_remove=(CardRemoval(victim.id, "enemy_effect"),),
            events=({"type": "CARD_REMOVED", "card_id": victim.id, "reason": "enemy_effect"},),
        )


class TimerSpeed(Behavior):
    def __init__(self, rng: random.Random, multiplier: float) -> None:
        super().__init__(rng)
        self.multiplier = multiplier

    def ui_modifiers(self) -> EnemyUIModifiers:
        return EnemyUIModifiers(timer_speed_multiplier=self.multiplier)


class WeaponCounterBehavior(Behavior):
    def __init__(self, rng: random.Random, counter: WeaponCounterType, reduction: int) -> None:
        super().__init__(rng)
        self.counter = counter
        self.reduction = reduction

    def stat_modifiers(self) -> EnemyStatModifiers:
        return EnemyStatModifiers(reductions={self.counter: self.reduction})

    def ui_modifiers(self) -> EnemyUIModifiers:
        return EnemyUIModifiers(weapon_counters=(WeaponCounter(self.counter, self.reduction),))


class TimeSteal(Behavior):
    def __init__(self, rng: random.Random, amount: float) -> None:
        super().__init__(rng)
        self.amount = abs(amount)

    def on_valid_match(self, cards: Sequence[Card], board: Sequence[Card]) -> EnemyMatchResult:
        return EnemyMatchResult(
            time_delta=-self.amount,
            events=({"type": "TIME_STOLEN", "amount": self.amount},),
        )


class DamageMultiplier(Behavior):
    def __init__(self, rng: random.Random, multiplier: float) -> None:
        super().__init__(rng)
        self.multiplier = multiplier

    def stat_modifiers(self) -> EnemyStatModifiers:
        return EnemyStatModifiers(damage_multiplier=self.multiplier)


class PointsMultiplier(Behavior):
    def __init__(self, rng: random.Random, multiplier: float) -> None:
        super().__init__(rng)
        self.multiplier = multiplier

    def on_valid_match(self, cards: Sequence[Card], board: Sequence[Card]) -> EnemyMatchResult:
        return EnemyMatchResult(points_multiplier=self.multiplier)


class HintDisable(Behavior):
    def __init__(self, rng: random.Random, disable_auto: bool = True, disable_manual: bool = True) -> None:
        super().__init__(rng)
        self.disable_auto = disable_auto
        self.disable_manual = disable_manual

    def ui_modifiers(self) -> EnemyUIModifiers:
        return EnemyUIModifiers(disable_auto_hint=self.disable_auto, disable_manual_hint=self.disable_manual)


class PositionShuffle(_IntervalBehavior):
    def _fire(self, board: Sequence[Card]) -> EnemyTickResult:
        return EnemyTickResult(events=({"type": "POSITIONS_SHUFFLED"},))


class _ExtraRemoval(Behavior):
    reason = "enemy_effect"

    def __init__(self, rng: random.Random, count: int, min_board_size: int) -> None:
        super().__init__(rng)
        self.count = count
        self.min_board_size = min_board_size

    def _remove(self, cards: Sequence[Card], board: Sequence[Card]) -> EnemyMatchResult:
        matched = {c.id for c in cards}
        remaining = [c for c in board if c.id not in matched]
        budget = min(self.count, len(remaining) - self.min_board_size)
        candidates = _eligible(remaining)
        if budget <= 0 or not candidates:
            return EnemyMatchResult()
        victims = self._rng.sample(candidates, min(budget, len(candidates)))
        return EnemyMatchResult(
            cards_to_remove=tuple(CardRemoval(v.id, self.reason) for v in victims),
            events=tuple({"type": "CARD_REMOVED", "card_id": v.id, "reason": self.reason} for v in victims),
        )


class ExtraCardRemovalOnMatch(_ExtraRemoval):
    reason = "enemy_match_penalty"

    def on_valid_match(self, cards: Sequence[Card], board: Sequence[Card]) -> EnemyMatchResult:
        return self._remove(cards, board)


class ExtraCardRemovalOnInvalid(_ExtraRemoval):
    reason = "enemy_invalid_penalty"

    def on_invalid_match(self, cards: Sequence[Card], board: Sequence[Card]) -> EnemyMatchResult:
        return self._remove((), board)


class AttributeChange(_IntervalBehavior):
    def _fire(self, board: Sequence[Card]) -> EnemyTickResult:
        candidates = _eligible(board, allow_face_down=False)
        if not candidates:
            return EnemyTickResult()
        target = self._rng.choice(candidates)
        attr = self._rng.choice(CORE_ATTRIBUTES)
        current = target.attribute(attr)
        new_value = self._rng.choice([v for v in ATTRIBUTE_VALUES[attr] if v != current])
        return EnemyTickResult(
            card_modifications=(CardModification(target.id, {attr: new_value}),),
            events=(
                {
                    "type": "ATTRIBUTE_CHANGED",
                    "card_id": target.id,
                    "attribute": attr,
                    "old_value": current,
                    "new_value": new_value,
                },
            ),
        )


class Bomb(Behavior):
    def __init__(self, rng: random.Random, bomb_chance: float, bomb_timer_ms: int, min_board_size: int) -> None:
        super().__init__(rng)
        self.bomb_chance = bomb_chance
        self.bomb_timer_ms = bomb_timer_ms
        self.min_board_size = min_board_size
        self._timers: dict[str, float] = {}

    def on_card_draw(self, card: Card) -> Card:
        if card.has_bomb or card.is_dud or not _roll(self._rng, self.bomb_chance):
            return card
        self._timers[card.id] = self.bomb_timer_ms
        return replace(card, has_bomb=True, bomb_timer=self.bomb_timer_ms)

    def on_tick(self, delta_ms: float, board: Sequence[Card]) -> EnemyTickResult:
        on_board = {c.id: c for c in board}
        for cid in [cid for cid in self._timers if cid not in on_board]:
            del self._timers[cid]
        for c in board:
            if c.has_bomb and c.id not in self._timers:
                self._timers[c.id] = c.bomb_timer if c.bomb_timer is not None else self.bomb_timer_ms

        board_size = len(board)
        removals: list[CardRemoval] = []
        mods: list[CardModification] = []
        events: list[Event] = []
        for cid in list(self._timers):
            remaining = max(0.0, self._timers[cid] - delta_ms)
            self._timers[cid] = remaining
            if remaining <= 0 and board_size > self.min_board_size:
                del self._timers[cid]
                board_size -= 1
                removals.append(CardRemoval(cid, "bomb"))
                events.append({"type": "BOMB_EXPLODED", "card_id": cid})
            else:
                mods.append(CardModification(cid, {"bomb_timer": int(remaining)}))
        return EnemyTickResult(cards_to_remove=tuple(removals), card_modifications=tuple(mods), events=tuple(events))

    def on_valid_match(self, cards: Sequence[Card], board: Sequence[Card]) -> EnemyMatchResult:
        for c in cards:
            self._timers.pop(c.id, None)
        return EnemyMatchResult()

    def on_round_end(self) -> None:
        self._timers.clear()


class Countdown(Behavior):
    def __init__(self, rng: random.Random, countdown_ms: int) -> None:
        super().__init__(rng)
        self.countdown_ms = countdown_ms
        self._target: str | None = None
        self._remaining = 0.0
        self._warned = False

    def _pick(self, board: Sequence[Card], exclude: str | None = None) -> CardModification | None:
        candidates = [c for c in _eligible(board, allow_face_down=False) if c.id != exclude]
        if not candidates:
            self._target = None
            return None
        chosen = self._rng.choice(candidates)
        self._target = chosen.id
        self._remaining = self.countdown_ms
        self._warned = False
        return CardModification(chosen.id, {"has_countdown": True, "countdown_timer": self.countdown_ms})

    def on_round_start(self, board: Sequence[Card]) -> EnemyStartResult:
        mod = self._pick(board)
        return EnemyStartResult(card_modifications=(mod,) if mod else ())

    def on_tick(self, delta_ms: float, board: Sequence[Card]) -> EnemyTickResult:
        ids = {c.id for c in board}
        mods: list[CardModification] = []
        if self._target is None or self._target not in ids:
            mod = self._pick(board)
            if mod is None:
                return EnemyTickResult()
            mods.append(mod)
            return EnemyTickResult(card_modifications=tuple(mods))

        self._remaining -= delta_ms
        if self._remaining <= 0:
            expired = self._target
            mods.append(CardModification(expired, {"has_countdown": False, "countdown_timer": None}))
            new_mod = self._pick(board, exclude=expired)
            if new_mod is not None:
                mods.append(new_mod)
            return EnemyTickResult(
                card_modifications=tuple(mods),
                health_delta=-1,
                events=({"type": "COUNTDOWN_EXPIRED", "card_id": expired},),
            )

        mods.append(CardModification(self._target, {"countdown_timer": int(self._remaining)}))
        events: tuple[Event, ...] = ()
        if _in_warning_window(self._remaining) and not self._warned:
            self._warned = True
            events = ({"type": "COUNTDOWN_WARNING", "card_id": self._target, "seconds_left": int(self._remaining // 1000)},)
        return EnemyTickResult(card_modifications=tuple(mods), events=events)

    def on_valid_match(self, cards: Sequence[Card], board: Sequence[Card]) -> EnemyMatchResult:
        if self._target is not None and any(c.id == self._target for c in cards):
            self._target = None
        return EnemyMatchResult()

    def on_round_end(self) -> None:
        self._target = None


class TripleCard(Behavior):
    def __init__(self, rng: random.Random, count: int) -> None:
        super().__init__(rng)
        self.count = count
        self._health: dict[str, int] = {}

    def on_round_start(self, board: Sequence[Card]) -> EnemyStartResult:
        candidates = [c for c in _eligible(board, allow_face_down=False) if c.health is None]
        chosen = self._rng.sample(candidates, min(self.count, len(candidates)))
        for c in chosen:
            self._health[c.id] = 3
        return EnemyStartResult(card_modifications=tuple(CardModification(c.id, {"health": 3}) for c in chosen))

    def on_valid_match(self, cards: Sequence[Card], board: Sequence[Card]) -> EnemyMatchResult:
        for c in cards:
            if c.id not in self._health:
                continue
            self._health[c.id] -= 1
            if self._health[c.id] <= 0:
                del self._health[c.id]
        return EnemyMatchResult()

    def on_round_end(self) -> None:
        self._health.clear()
