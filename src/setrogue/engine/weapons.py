"""Weapon effect resolution after a valid match.

Effects resolve in a fixed order: echo, explosion, laser, ricochet, fire,
the scalar rolls (healing, hint, time, grace), XP and coin, board growth.
Every destructive step skips cards already claimed by an earlier step, so a
card is destroyed and rewarded at most once.
"""

from __future__ import annotations

import random
from collections.abc import Collection, Sequence
from dataclasses import dataclass, field, replace

from .grid import DEFAULT_COLUMNS, adjacent_indices, line_indices
from .stats import PlayerStats
from .types import DEFAULT_ATTRIBUTES, AttributeName, Card, Weapon
from .validator import find_all_combinations

DEFAULT_TIME_GAIN = 10


@dataclass
class WeaponEffectResult:
    auto_matched_sets: list[tuple[Card, Card, Card]] = field(default_factory=list)
    explosive_cards: list[Card] = field(default_factory=list)
    laser_cards: list[Card] = field(default_factory=list)
    laser_count: int = 0
    ricochet_cards: list[Card] = field(default_factory=list)
    ricochet_count: int = 0
    fire_cards: list[Card] = field(default_factory=list)
    bonus_points: int = 0
    bonus_money: int = 0
    bonus_time: int = 0
    bonus_graces: int = 0
    bonus_healing: int = 0
    bonus_hints: int = 0
    bonus_xp: int = 0
    bonus_coins: int = 0
    board_growth: int = 0
    notifications: list[str] = field(default_factory=list)

    def echo_cards(self) -> list[Card]:
        return [c for triple in self.auto_matched_sets for c in triple]

    def destroyed_cards(self) -> list[Card]:
        """Cards removed from the board by weapons, echoes included."""
        return self.echo_cards() + self.explosive_cards + self.laser_cards + self.ricochet_cards

    def triggered_effects(self) -> list[str]:
        kinds: list[str] = []
        if self.auto_matched_sets:
            kinds.append("echo")
        if self.explosive_cards:
            kinds.append("explosion")
        if self.laser_cards:
            kinds.append("laser")
        if self.ricochet_cards:
            kinds.append("ricochet")
        if self.fire_cards:
            kinds.append("fire")
        if self.bonus_healing:
            kinds.append("healing")
        if self.bonus_hints:
            kinds.append("hint")
        if self.bonus_time:
            kinds.append("time")
        if self.bonus_graces:
            kinds.append("grace")
        if self.bonus_xp:
            kinds.append("xp")
        if self.bonus_coins:
            kinds.append("coin")
        if self.board_growth:
            kinds.append("board_growth")
        return kinds


def _roll(rng: random.Random, chance: float) -> bool:
    return chance > 0 and rng.random() * 100 < chance


def _stacked(rng: random.Random, chance: float) -> int:
    """Chances above 100 grant one guaranteed unit per full hundred plus a roll on the rest."""
    if chance <= 0:
        return 0
    guaranteed = int(chance // 100)
    return guaranteed + (1 if _roll(rng, chance % 100) else 0)


def _laser_instance_chances(weapons: Sequence[Weapon]) -> list[float]:
    """One independent chance per owned laser weapon, as authored on the weapon."""
    return [w.effect("laser_chance") for w in weapons if w.special_effect == "laser" and w.effect("laser_chance") > 0]


def resolve_match(
    board: Sequence[Card],
    matched_cards: Sequence[Card],
    stats: PlayerStats,
    weapons: Sequence[Weapon],
    active_attributes: Collection[AttributeName] = DEFAULT_ATTRIBUTES,
    is_echo_match: bool = False,
    *,
    rng: random.Random,
    now_ms: int = 0,
    columns: int = DEFAULT_COLUMNS,
) -> WeaponEffectResult:
    result = WeaponEffectResult()
    size = len(board)
    matched_ids = {c.id for c in matched_cards}
    matched_idx = [i for i, c in enumerate(board) if c.id in matched_ids]
    claimed: set[str] = set(matched_ids)

    # Echo
    if not is_echo_match and _roll(rng, stats.capped("echo_chance", "echo")):
        pool = [c for c in board if c.id not in claimed and not c.is_dud]
        combos = find_all_combinations(pool, active_attributes)
        if combos:
            first = rng.choice(combos)
            result.auto_matched_sets.append(first)
            claimed.update(c.id for c in first)
            if _roll(rng, stats.chain_reaction_chance):
                pool = [c for c in pool if c.id not in claimed]
                combos = find_all_combinations(pool, active_attributes)
                if combos:
                    second = rng.choice(combos)
                    result.auto_matched_sets.append(second)
                    claimed.update(c.id for c in second)
        echoed = len(result.echo_cards())
        if echoed:
            result.bonus_points += echoed
            result.bonus_money += echoed
            result.notifications.append("Echo!" if len(result.auto_matched_sets) == 1 else "Echo x2!")

    # Explosion
    explosion = stats.capped("explosion_chance", "explosion")
    if explosion > 0:
        rolled: set[int] = set()
        for i in matched_idx:
            for j in adjacent_indices(i, size, columns):
                if j in rolled or board[j].id in claimed:
                    continue
                rolled.add(j)
                if _roll(rng, explosion):
                    result.explosive_cards.append(board[j])
                    claimed.add(board[j].id)
        if result.explosive_cards:
            n = len(result.explosive_cards)
            result.bonus_points += n
            result.bonus_money += n
            result.notifications.append(f"Explosion! +{n}")

    # Laser
    if matched_idx:
        for chance in _laser_instance_chances(weapons):
            if not _roll(rng, chance):
                continue
            result.laser_count += 1
            origin = rng.choice(matched_idx)
            is_row = rng.random() < 0.5
            for j in line_indices(origin, size, is_row, columns):
                if board[j].id in claimed:
                    continue
                result.laser_cards.append(board[j])
                claimed.add(board[j].id)
        if result.laser_count:
            n = len(result.laser_cards)
            result.bonus_points += 2 * n
            result.bonus_money += n
            if result.laser_count == 1:
                result.notifications.append(f"Laser! +{2 * n}")
            else:
                result.notifications.append(f"{result.laser_count}x Laser! +{2 * n}")

    # Ricochet
    if _roll(rng, stats.capped("ricochet_chance", "ricochet")):
        while True:
            candidates = [c for c in board if c.id not in claimed]
            if not candidates:
                break
            hit = rng.choice(candidates)
            result.ricochet_cards.append(hit)
            claimed.add(hit.id)
            result.ricochet_count += 1
            if not _roll(rng, stats.ricochet_chain_chance):
                break
        if result.ricochet_count:
            n = result.ricochet_count
            result.bonus_points += n
            result.bonus_money += n
            result.notifications.append("Ricochet!" if n == 1 else f"Ricochet x{n}!")

    # Fire
    fire = stats.capped("fire_spread_chance", "fire")
    if fire > 0:
        rolled = set()
        for i in matched_idx:
            for j in adjacent_indices(i, size, columns):
                card = board[j]
                if j in rolled or card.id in claimed or card.on_fire:
                    continue
                rolled.add(j)
                if _roll(rng, fire):
                    result.fire_cards.append(replace(card, on_fire=True, on_fire_since=now_ms))
                    claimed.add(card.id)
        if result.fire_cards:
            result.notifications.append(f"Fire! {len(result.fire_cards)} cards")

    # Scalar rolls
    if _roll(rng, stats.capped("healing_chance", "healing")):
        result.bonus_healing = 1
        result.notifications.append("+1 HP")
    if _roll(rng, stats.capped("hint_gain_chance", "hint_gain")):
        result.bonus_hints = 1
        result.notifications.append("+1 Hint")
    if _roll(rng, stats.capped("time_gain_chance", "time_gain")):
        result.bonus_time = stats.time_gain_amount or DEFAULT_TIME_GAIN
        result.notifications.append(f"+{result.bonus_time}s")
    if _roll(rng, stats.capped("grace_gain_chance", "grace_gain")):
        result.bonus_graces = 1
        result.notifications.append("+1 Grace")

    # XP / coin stack past 100 using the uncapped value.
    result.bonus_xp = _stacked(rng, stats.xp_gain_chance)
    if result.bonus_xp:
        result.notifications.append(f"+{result.bonus_xp} XP")
    result.bonus_coins = _stacked(rng, stats.coin_gain_chance)
    if result.bonus_coins:
        result.notifications.append(f"+{result.bonus_coins} Coins")

    # Board growth
    if _roll(rng, stats.capped("board_growth_chance", "board_growth")):
        result.board_growth = stats.board_growth_amount or 1
        result.notifications.append(f"+{result.board_growth} Cards")

    return result
