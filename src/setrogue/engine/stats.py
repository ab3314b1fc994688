from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, fields, replace
from typing import TYPE_CHECKING

from .caps import EffectCaps, compute_caps, effective_probability
from .types import CapKind, Item, Weapon

if TYPE_CHECKING:
    from .enemies.results import EnemyStatModifiers


@dataclass(frozen=True)
class PlayerStats:
    level: int = 1
    money: int = 0
    experience: int = 0
    health: int = 3
    max_health: int = 3
    hints: int = 1
    max_hints: int = 5
    graces: int = 0
    max_graces: int = 5
    field_size: int = 12
    explosion_chance: float = 0
    auto_hint_chance: float = 0
    auto_hint_interval: int = 10000
    board_growth_chance: float = 0
    board_growth_amount: int = 0
    fire_spread_chance: float = 0
    grace_gain_chance: float = 0
    healing_chance: float = 0
    hint_gain_chance: float = 0
    xp_gain_chance: float = 0
    coin_gain_chance: float = 0
    time_gain_chance: float = 0
    time_gain_amount: int = 0
    laser_chance: float = 0
    starting_time: int = 0
    ricochet_chance: float = 0
    ricochet_chain_chance: float = 0
    enhanced_hint_chance: float = 0
    echo_chance: float = 0
    chain_reaction_chance: float = 0
    caps: EffectCaps = field(default_factory=EffectCaps.default)

    def capped(self, stat: str, kind: CapKind) -> float:
        return effective_probability(getattr(self, stat), self.caps.get(kind))


STAT_NAMES: frozenset[str] = frozenset(f.name for f in fields(PlayerStats) if f.name != "caps")

# Enemy counter type -> the chance stat it suppresses.
COUNTERED_STATS: dict[str, str] = {
    "fire": "fire_spread_chance",
    "explosion": "explosion_chance",
    "laser": "laser_chance",
    "hint": "hint_gain_chance",
    "grace": "grace_gain_chance",
    "time": "time_gain_chance",
    "healing": "healing_chance",
}


def aggregate_stats(base: PlayerStats, weapons: Iterable[Weapon], items: Iterable[Item] = ()) -> PlayerStats:
    """Base stats plus every owned weapon's and item's additive effects, with raised caps.

    Item drawbacks are added the same way as effects; they carry negative values.
    Caps are only raised by mastery weapons.
    """
    owned = list(weapons)
    totals: dict[str, float] = {}

    def _add(source: str, bag: Mapping[str, float]) -> None:
        for key, value in bag.items():
            if key not in STAT_NAMES:
                raise ValueError(f"Unknown {source} stat: {key}")
            totals[key] = totals.get(key, 0) + value

    for w in owned:
        _add("weapon effect", w.effects)
    for item in items:
        _add("item effect", item.effects)
        _add("item drawback", item.drawbacks)

    changes: dict[str, object] = {}
    for key, delta in totals.items():
        current = getattr(base, key)
        total = current + delta
        changes[key] = int(total) if isinstance(current, int) and float(total).is_integer() else total
    changes["caps"] = compute_caps(owned)
    return replace(base, **changes)


def _round_half_up(x: float) -> int:
    return int(x + 0.5) if x >= 0 else -int(-x + 0.5)


def apply_enemy_stat_modifiers(stats: PlayerStats, modifiers: "EnemyStatModifiers | None") -> PlayerStats:
    """Divide every countered chance by three.

    The per-counter reduction amount only decides *whether* a stat is
    countered; the suppression itself is always a third, rounded half up.
    """
    if modifiers is None:
        return stats
    changes: dict[str, object] = {}
    for counter, stat in COUNTERED_STATS.items():
        if modifiers.reduction(counter) > 0:
            changes[stat] = _round_half_up(getattr(stats, stat) / 3)
    if not changes:
        return stats
    return replace(stats, **changes)
