from __future__ import annotations

import random
from dataclasses import replace

from setrogue.engine.caps import EffectCaps
from setrogue.engine.deck import create_deck
from setrogue.engine.stats import PlayerStats
from setrogue.engine.types import Weapon
from setrogue.engine.weapons import resolve_match


def _uncapped() -> EffectCaps:
    caps = EffectCaps.default()
    for kind in ("echo", "explosion", "laser", "ricochet", "fire"):
        caps = caps.raised(kind, 100)  # type: ignore[arg-type]
    return caps


def _laser_weapon(chance: float) -> Weapon:
    return Weapon(
        id="test_laser",
        name="Test Laser",
        rarity="common",
        level=1,
        price=1,
        description="",
        icon="",
        effects={"laser_chance": chance},
        special_effect="laser",
    )


def test_explosion_hits_each_adjacent_card_once() -> None:
    board = create_deck()[:5]
    matched = board[:3]
    stats = PlayerStats(explosion_chance=100, caps=_uncapped())

    res = resolve_match(board, matched, stats, [], rng=random.Random(1))

    # Row 0 is matched; only indices 3 and 4 sit below it.
    assert [c.id for c in res.explosive_cards] == [board[3].id, board[4].id]
    assert res.bonus_points == 2
    assert res.bonus_money == 2
    assert res.triggered_effects() == ["explosion"]


def test_no_card_is_destroyed_twice() -> None:
    board = create_deck()[:9]
    matched = board[:3]
    stats = PlayerStats(
        explosion_chance=100,
        laser_chance=100,
        ricochet_chance=100,
        ricochet_chain_chance=100,
        fire_spread_chance=100,
        caps=_uncapped(),
    )

    res = resolve_match(board, matched, stats, [_laser_weapon(100)], rng=random.Random(7))

    destroyed = [c.id for c in res.destroyed_cards()]
    assert len(destroyed) == len(set(destroyed))
    assert not set(destroyed) & {c.id for c in matched}
    # Everything that was not matched is gone; fire has nothing left to ignite.
    assert len(destroyed) == 6
    assert res.fire_cards == []


def test_echo_is_skipped_for_echo_matches() -> None:
    board = create_deck()[:12]
    matched = board[:3]
    stats = PlayerStats(echo_chance=100, caps=_uncapped())

    res = resolve_match(board, matched, stats, [], is_echo_match=True, rng=random.Random(3))
    assert res.auto_matched_sets == []

    res = resolve_match(board, matched, stats, [], rng=random.Random(3))
    assert len(res.auto_matched_sets) == 1
    echoed = {c.id for c in res.echo_cards()}
    assert not echoed & {c.id for c in matched}
    assert res.bonus_points == 3
    assert res.bonus_money == 3


def test_xp_and_coin_stack_past_one_hundred() -> None:
    board = create_deck()[:3]
    stats = PlayerStats(xp_gain_chance=200, coin_gain_chance=100)
    res = resolve_match(board, board, stats, [], rng=random.Random(0))
    assert res.bonus_xp == 2
    assert res.bonus_coins == 1


def test_fire_marks_cards_instead_of_destroying() -> None:
    board = create_deck()[:6]
    matched = board[:3]
    stats = PlayerStats(fire_spread_chance=100, caps=_uncapped())

    res = resolve_match(board, matched, stats, [], rng=random.Random(0), now_ms=500)

    assert len(res.fire_cards) == 3
    assert all(c.on_fire and c.on_fire_since == 500 for c in res.fire_cards)
    assert res.destroyed_cards() == []


def test_each_laser_weapon_rolls_its_own_chance() -> None:
    board = create_deck()[:9]
    matched = board[:3]
    # The aggregate stat sits above the 30% ceiling; each weapon still rolls 30%.
    stats = PlayerStats(laser_chance=60)
    weapons = [_laser_weapon(30), _laser_weapon(30)]
    fired = 0
    rng = random.Random(11)
    for _ in range(2000):
        fired += resolve_match(board, matched, stats, weapons, rng=rng).laser_count
    # Expected 1200 instances over 2000 matches.
    assert 1080 < fired < 1320


def test_laser_notification_reports_points() -> None:
    board = create_deck()[:9]
    matched = board[:3]
    for seed in range(6):
        res = resolve_match(board, matched, PlayerStats(), [_laser_weapon(100)], rng=random.Random(seed))
        n = len(res.laser_cards)
        assert res.laser_count == 1
        assert res.notifications == [f"Laser! +{2 * n}"]
        assert res.bonus_points == 2 * n
        assert res.bonus_money == n


def test_chain_reaction_reserves_a_second_echo() -> None:
    board = create_deck()[:21]
    matched = board[:3]
    stats = PlayerStats(echo_chance=100, chain_reaction_chance=100, caps=_uncapped())

    res = resolve_match(board, matched, stats, [], rng=random.Random(4))

    assert len(res.auto_matched_sets) == 2
    first, second = ({c.id for c in t} for t in res.auto_matched_sets)
    assert not first & second
    assert not (first | second) & {c.id for c in matched}
    assert res.bonus_points == 6
    assert res.bonus_money == 6
    assert res.notifications == ["Echo x2!"]


def test_ricochet_chain_stops_when_its_roll_fails() -> None:
    board = create_deck()[:9]
    matched = board[:3]

    single = PlayerStats(ricochet_chance=100, ricochet_chain_chance=0, caps=_uncapped())
    res = resolve_match(board, matched, single, [], rng=random.Random(2))
    assert res.ricochet_count == 1
    assert res.notifications == ["Ricochet!"]

    chained = PlayerStats(ricochet_chance=100, ricochet_chain_chance=100, caps=_uncapped())
    res = resolve_match(board, matched, chained, [], rng=random.Random(2))
    # Continues until no unclaimed card is left.
    assert res.ricochet_count == 6
    assert res.notifications == ["Ricochet x6!"]
    assert res.bonus_points == 6


def test_scalar_rolls_grant_fixed_units() -> None:
    board = create_deck()[:3]
    caps = EffectCaps.default()
    for kind in ("healing", "hint_gain", "time_gain", "grace_gain"):
        caps = caps.raised(kind, 100)  # type: ignore[arg-type]
    stats = PlayerStats(
        healing_chance=100,
        hint_gain_chance=100,
        time_gain_chance=100,
        time_gain_amount=7,
        grace_gain_chance=100,
        caps=caps,
    )
    res = resolve_match(board, board, stats, [], rng=random.Random(0))
    assert (res.bonus_healing, res.bonus_hints, res.bonus_time, res.bonus_graces) == (1, 1, 7, 1)
    assert res.notifications == ["+1 HP", "+1 Hint", "+7s", "+1 Grace"]

    # Without a weapon-specified amount, time gain falls back to ten seconds.
    res = resolve_match(board, board, replace(stats, time_gain_amount=0), [], rng=random.Random(0))
    assert res.bonus_time == 10

    res = resolve_match(board, board, PlayerStats(), [], rng=random.Random(0))
    assert res.triggered_effects() == []


def test_echo_cards_are_never_destroyed_again() -> None:
    board = create_deck()[:21]
    matched = board[:3]
    stats = PlayerStats(
        echo_chance=100,
        chain_reaction_chance=100,
        explosion_chance=100,
        ricochet_chance=100,
        ricochet_chain_chance=100,
        caps=_uncapped(),
    )
    for seed in range(5):
        res = resolve_match(board, matched, stats, [_laser_weapon(100), _laser_weapon(100)], rng=random.Random(seed))
        assert res.auto_matched_sets
        destroyed = [c.id for c in res.destroyed_cards()]
        assert len(destroyed) == len(set(destroyed))
        assert not set(destroyed) & {c.id for c in matched}
        # Ricochet chains through everything the earlier steps left.
        assert len(destroyed) == 18
