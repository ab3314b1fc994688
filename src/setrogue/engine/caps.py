from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field, replace

from .types import CapKind, Weapon

DEFAULT_CAPS: dict[CapKind, int] = {
    "echo": 25,
    "laser": 30,
    "grace_gain": 30,
    "explosion": 40,
    "hint_gain": 40,
    "time_gain": 40,
    "healing": 50,
    "fire": 50,
    "ricochet": 60,
    "board_growth": 60,
    "coin_gain": 70,
    "xp_gain": 100,
}

# Amount a single mastery weapon raises each ceiling by.
CAP_INCREASES: dict[CapKind, int] = {
    "echo": 5,
    "laser": 5,
    "grace_gain": 5,
    "explosion": 10,
    "hint_gain": 10,
    "time_gain": 10,
    "healing": 10,
    "fire": 10,
    "ricochet": 10,
    "board_growth": 10,
    "coin_gain": 15,
    "xp_gain": 0,
}


@dataclass(frozen=True)
class EffectCaps:
    values: dict[CapKind, int] = field(default_factory=lambda: dict(DEFAULT_CAPS))

    @staticmethod
    def default() -> "EffectCaps":
        return EffectCaps()

    def get(self, kind: CapKind) -> int:
        return self.values.get(kind, DEFAULT_CAPS[kind])

    def raised(self, kind: CapKind, amount: int) -> "EffectCaps":
        values = dict(self.values)
        values[kind] = self.get(kind) + amount
        return replace(self, values=values)


def effective_probability(accumulated: float, cap: float) -> float:
    return min(accumulated, cap)


def is_capped(accumulated: float, cap: float) -> bool:
    return accumulated >= cap


def compute_caps(weapons: Iterable[Weapon]) -> EffectCaps:
    """Default ceilings raised additively by every owned cap-increase weapon."""
    caps = EffectCaps.default()
    for w in weapons:
        if w.cap_increase is not None:
            caps = caps.raised(w.cap_increase.kind, w.cap_increase.amount)
    return caps
