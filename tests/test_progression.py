from __future__ import annotations

import random

import pytest

from setrogue.engine.progression import (
    challenge_bonus_money,
    level_from_xp,
    reward_rarity,
    round_requirement,
    xp_for_level,
)


def test_fixed_round_requirements() -> None:
    first = round_requirement(1)
    assert (first.target_score, first.time_seconds) == (3, 30)
    last = round_requirement(10)
    assert (last.target_score, last.time_seconds) == (100, 60)


def test_endless_rounds_grow_by_a_quarter() -> None:
    assert round_requirement(11).target_score == 125
    assert round_requirement(12).target_score == 157
    assert round_requirement(12).time_seconds == 60


def test_round_number_must_be_positive() -> None:
    with pytest.raises(ValueError):
        round_requirement(0)


def test_levels() -> None:
    assert xp_for_level(2) == 40
    assert level_from_xp(0) == 1
    assert level_from_xp(39) == 1
    assert level_from_xp(40) == 2
    assert level_from_xp(90) == 3


def test_challenge_bonus_range_by_tier() -> None:
    rng = random.Random(0)
    for _ in range(50):
        assert 10 <= challenge_bonus_money(1, rng) <= 15
        assert 50 <= challenge_bonus_money(4, rng) <= 100


def test_reward_rarity_by_tier() -> None:
    rng = random.Random(0)
    assert {reward_rarity(1, rng) for _ in range(50)} == {"rare"}
    assert {reward_rarity(4, rng) for _ in range(50)} == {"legendary"}
    assert {reward_rarity(3, rng) for _ in range(200)} == {"rare", "legendary"}
