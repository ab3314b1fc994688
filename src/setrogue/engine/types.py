from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Literal

Shape = Literal["oval", "squiggle", "diamond"]
Color = Literal["red", "green", "purple"]
Number = Literal[1, 2, 3]
Shading = Literal["solid", "striped", "open"]
Background = Literal["white", "beige", "charcoal"]

AttributeName = Literal["shape", "color", "number", "shading", "background"]

Rarity = Literal["common", "rare", "epic", "legendary"]

ItemTier = Literal["tier_1", "tier_2", "tier_3", "tier_4"]

SpecialEffect = Literal[
    "explosive",
    "fire",
    "laser",
    "ricochet",
    "echo",
    "chain_reaction",
    "auto_hint",
    "heal",
    "grace_gain",
    "hint_gain",
    "xp_gain",
    "coin_gain",
    "time_gain",
    "board_growth",
    "cap_increase",
    "bridge",
]

CapKind = Literal[
    "echo",
    "laser",
    "grace_gain",
    "explosion",
    "hint_gain",
    "time_gain",
    "healing",
    "fire",
    "ricochet",
    "board_growth",
    "coin_gain",
    "xp_gain",
]

BridgeTrigger = Literal[
    "on_heal",
    "on_explosion",
    "on_time_gain",
    "on_destruction",
    "on_echo",
    "on_coin_gain",
    "on_xp_gain",
    "on_grace_use",
    "on_hint_use",
    "on_health_loss",
]

BridgeEffectKind = Literal[
    "make_holographic",
    "gain_grace",
    "trigger_echo",
    "heal",
    "fire_card",
    "gain_hint",
    "gain_coin",
    "trigger_laser",
    "explosion",
]

# Weapon families an enemy can counter; each maps to a "<type>_chance" stat.
WeaponCounterType = Literal[
    "fire",
    "explosion",
    "laser",
    "hint",
    "grace",
    "time",
    "healing",
]

SHAPES: tuple[Shape, ...] = ("oval", "squiggle", "diamond")
COLORS: tuple[Color, ...] = ("red", "green", "purple")
NUMBERS: tuple[Number, ...] = (1, 2, 3)
SHADINGS: tuple[Shading, ...] = ("solid", "striped", "open")
BACKGROUNDS: tuple[Background, ...] = ("white", "beige", "charcoal")

ATTRIBUTE_VALUES: dict[AttributeName, tuple[object, ...]] = {
    "shape": SHAPES,
    "color": COLORS,
    "number": NUMBERS,
    "shading": SHADINGS,
    "background": BACKGROUNDS,
}

ALL_ATTRIBUTES: tuple[AttributeName, ...] = ("shape", "color", "number", "shading", "background")
DEFAULT_ATTRIBUTES: tuple[AttributeName, ...] = ("shape", "color", "number", "shading")
CORE_ATTRIBUTES: tuple[AttributeName, ...] = DEFAULT_ATTRIBUTES


@dataclass(frozen=True)
class Card:
    id: str
    shape: Shape
    color: Color
    number: Number
    shading: Shading
    background: Background = "white"
    # Multi-hit cards; None means an ordinary one-hit card.
    health: int | None = None
    is_dud: bool = False
    is_face_down: bool = False
    has_bomb: bool = False
    bomb_timer: int | None = None
    has_countdown: bool = False
    countdown_timer: int | None = None
    on_fire: bool = False
    on_fire_since: int | None = None
    is_holographic: bool = False

    def attribute(self, name: AttributeName) -> object:
        return getattr(self, name)


@dataclass(frozen=True)
class CapIncrease:
    kind: CapKind
    amount: int


@dataclass(frozen=True)
class BridgeEffect:
    trigger: BridgeTrigger
    effect: BridgeEffectKind
    chance: float
    amount: int = 1


@dataclass(frozen=True)
class Weapon:
    id: str
    name: str
    rarity: Rarity
    level: int
    price: int
    description: str
    icon: str
    effects: Mapping[str, float] = field(default_factory=dict)
    special_effect: SpecialEffect | None = None
    cap_increase: CapIncrease | None = None
    bridge_effect: BridgeEffect | None = None
    max_count: int | None = None

    def effect(self, key: str) -> float:
        return self.effects.get(key, 0)


@dataclass(frozen=True)
class WeaponCatalog:
    """Immutable weapon database used by the engine."""

    weapons: dict[str, Weapon]

    def get(self, weapon_id: str) -> Weapon:
        return self.weapons[weapon_id]

    def all_ids(self) -> Sequence[str]:
        return list(self.weapons.keys())

    def all(self) -> list[Weapon]:
        return list(self.weapons.values())

    def by_name(self, name: str) -> list[Weapon]:
        return [w for w in self.weapons.values() if w.name == name]

    def by_rarity(self, rarity: Rarity) -> list[Weapon]:
        return [w for w in self.weapons.values() if w.rarity == rarity]


@dataclass(frozen=True)
class Item:
    """A passive trinket: additive stat effects paired with drawbacks that lower other stats."""

    id: str
    name: str
    tier: ItemTier
    price: int
    description: str
    icon: str
    effects: Mapping[str, float] = field(default_factory=dict)
    drawbacks: Mapping[str, float] = field(default_factory=dict)
    limit: int | None = None


@dataclass(frozen=True)
class ItemCatalog:
    items: dict[str, Item]

    def get(self, item_id: str) -> Item:
        return self.items[item_id]

    def all_ids(self) -> Sequence[str]:
        return list(self.items.keys())

    def all(self) -> list[Item]:
        return list(self.items.values())

    def by_tier(self, tier: ItemTier) -> list[Item]:
        return [i for i in self.items.values() if i.tier == tier]
