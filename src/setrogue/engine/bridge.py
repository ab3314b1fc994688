from __future__ import annotations

import random
from collections.abc import Sequence
from dataclasses import dataclass

from .types import BridgeEffectKind, BridgeTrigger, Weapon


@dataclass(frozen=True)
class BridgeEffectResult:
    weapon_name: str
    effect: BridgeEffectKind
    amount: int = 1


def get_bridge_weapons_for_trigger(weapons: Sequence[Weapon], trigger: BridgeTrigger) -> list[Weapon]:
    return [w for w in weapons if w.bridge_effect is not None and w.bridge_effect.trigger == trigger]


def has_bridge_weapons_for_trigger(weapons: Sequence[Weapon], trigger: BridgeTrigger) -> bool:
    return any(w.bridge_effect is not None and w.bridge_effect.trigger == trigger for w in weapons)


def resolve_bridge(
    trigger: BridgeTrigger,
    weapons: Sequence[Weapon],
    is_cascade: bool = False,
    *,
    rng: random.Random,
) -> list[BridgeEffectResult]:
    """Roll every owned bridge weapon listening on ``trigger``.

    Effects produced by a bridge never trigger further bridges: callers
    resolving a bridge result pass ``is_cascade=True`` and get nothing back.
    """
    if is_cascade:
        return []
    results: list[BridgeEffectResult] = []
    for w in get_bridge_weapons_for_trigger(weapons, trigger):
        bridge = w.bridge_effect
        assert bridge is not None
        if rng.random() * 100 < bridge.chance:
            results.append(BridgeEffectResult(weapon_name=w.name, effect=bridge.effect, amount=bridge.amount or 1))
    return results
