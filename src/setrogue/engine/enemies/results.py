from __future__ import annotations

from dataclasses import dataclass, field

from ..types import WeaponCounterType

Event = dict[str, object]


@dataclass(frozen=True)
class CardModification:
    card_id: str
    changes: dict[str, object]


@dataclass(frozen=True)
class CardRemoval:
    card_id: str
    reason: str = "enemy_effect"


@dataclass(frozen=True)
class EnemyStartResult:
    card_modifications: tuple[CardModification, ...] = ()
    events: tuple[Event, ...] = ()


@dataclass(frozen=True)
class EnemyTickResult:
    cards_to_remove: tuple[CardRemoval, ...] = ()
    cards_to_flip: tuple[str, ...] = ()
    card_modifications: tuple[CardModification, ...] = ()
    score_delta: float = 0
    health_delta: int = 0
    time_delta: float = 0
    instant_death: bool = False
    events: tuple[Event, ...] = ()


@dataclass(frozen=True)
class EnemyMatchResult:
    cards_to_remove: tuple[CardRemoval, ...] = ()
    cards_to_flip: tuple[str, ...] = ()
    card_modifications: tuple[CardModification, ...] = ()
    points_multiplier: float = 1.0
    time_delta: float = 0
    events: tuple[Event, ...] = ()


@dataclass(frozen=True)
class WeaponCounter:
    type: WeaponCounterType
    reduction: int


@dataclass(frozen=True)
class EnemyStatModifiers:
    reductions: dict[str, int] = field(default_factory=dict)
    damage_multiplier: float = 1.0

    def reduction(self, counter: str) -> int:
        return self.reductions.get(counter, 0)

    def merge(self, other: "EnemyStatModifiers") -> "EnemyStatModifiers":
        reductions = dict(self.reductions)
        for k, v in other.reductions.items():
            reductions[k] = reductions.get(k, 0) + v
        return EnemyStatModifiers(
            reductions=reductions,
            damage_multiplier=self.damage_multiplier * other.damage_multiplier,
        )


@dataclass(frozen=True)
class EnemyUIModifiers:
    timer_speed_multiplier: float = 1.0
    disable_auto_hint: bool = False
    disable_manual_hint: bool = False
    weapon_counters: tuple[WeaponCounter, ...] = ()
    show_inactivity_bar: bool = False
    inactivity_max_ms: int | None = None
    show_score_decay: bool = False
    score_decay_rate: float = 0

    def merge(self, other: "EnemyUIModifiers") -> "EnemyUIModifiers":
        return EnemyUIModifiers(
            timer_speed_multiplier=self.timer_speed_multiplier * other.timer_speed_multiplier,
            disable_auto_hint=self.disable_auto_hint or other.disable_auto_hint,
            disable_manual_hint=self.disable_manual_hint or other.disable_manual_hint,
            weapon_counters=self.weapon_counters + other.weapon_counters,
            show_inactivity_bar=self.show_inactivity_bar or other.show_inactivity_bar,
            inactivity_max_ms=other.inactivity_max_ms if other.inactivity_max_ms is not None else self.inactivity_max_ms,
            show_score_decay=self.show_score_decay or other.show_score_decay,
            score_decay_rate=self.score_decay_rate + other.score_decay_rate,
        )
