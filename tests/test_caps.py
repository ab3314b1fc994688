from __future__ import annotations

from setrogue.engine.caps import (
    CAP_INCREASES,
    DEFAULT_CAPS,
    EffectCaps,
    compute_caps,
    effective_probability,
    is_capped,
)
from setrogue.engine.types import CapIncrease, Weapon


def _mastery(kind: str, amount: int) -> Weapon:
    return Weapon(
        id=f"{kind}_mastery_rare",
        name=f"{kind} mastery",
        rarity="rare",
        level=2,
        price=10,
        description="",
        icon="",
        special_effect="cap_increase",
        cap_increase=CapIncrease(kind=kind, amount=amount),  # type: ignore[arg-type]
    )


def test_default_ceilings() -> None:
    caps = EffectCaps.default()
    assert caps.get("echo") == 25
    assert caps.get("laser") == 30
    assert caps.get("coin_gain") == 70
    assert caps.get("xp_gain") == 100
    assert set(DEFAULT_CAPS) == set(CAP_INCREASES)


def test_effective_probability_is_min_of_total_and_cap() -> None:
    assert effective_probability(50, 40) == 40
    assert effective_probability(12, 40) == 12
    assert is_capped(40, 40)
    assert not is_capped(39, 40)


def test_masteries_raise_caps_additively() -> None:
    weapons = [_mastery("echo", 5), _mastery("echo", 5), _mastery("fire", 10)]
    caps = compute_caps(weapons)
    assert caps.get("echo") == 35
    assert caps.get("fire") == 60
    # Untouched kinds keep their defaults.
    assert caps.get("laser") == 30


def test_raised_does_not_mutate_original() -> None:
    base = EffectCaps.default()
    raised = base.raised("laser", 5)
    assert base.get("laser") == 30
    assert raised.get("laser") == 35
