from __future__ import annotations

import math
import random
from dataclasses import dataclass

from .types import Rarity


@dataclass(frozen=True)
class RoundRequirement:
    target_score: int
    time_seconds: int


ROUND_REQUIREMENTS: dict[int, RoundRequirement] = {
    1: RoundRequirement(3, 30),
    2: RoundRequirement(4, 45),
    3: RoundRequirement(6, 45),
    4: RoundRequirement(8, 45),
    5: RoundRequirement(10, 60),
    6: RoundRequirement(14, 60),
    7: RoundRequirement(20, 60),
    8: RoundRequirement(27, 60),
    9: RoundRequirement(35, 60),
    10: RoundRequirement(100, 60),
}

FINAL_ROUND = 10
ENDLESS_GROWTH = 1.25

CHALLENGE_BONUS_MONEY: dict[int, tuple[int, int]] = {
    1: (10, 15),
    2: (20, 30),
    3: (40, 60),
    4: (50, 100),
}

# Probability that a stretch-goal reward is rare (otherwise legendary).
REWARD_RARE_CHANCE: dict[int, float] = {1: 1.0, 2: 0.7, 3: 0.4, 4: 0.0}


def round_requirement(round_number: int) -> RoundRequirement:
    if round_number <= 0:
        raise ValueError("round_number must be >= 1")
    if round_number in ROUND_REQUIREMENTS:
        return ROUND_REQUIREMENTS[round_number]
    final = ROUND_REQUIREMENTS[FINAL_ROUND]
    extra = round_number - FINAL_ROUND
    return RoundRequirement(math.ceil(final.target_score * ENDLESS_GROWTH**extra), final.time_seconds)


def xp_for_level(level: int) -> int:
    """Total experience needed to reach ``level``."""
    return level * level * 10


def level_from_xp(experience: int) -> int:
    level = 1
    while experience >= xp_for_level(level + 1):
        level += 1
    return level


def challenge_bonus_money(tier: int, rng: random.Random) -> int:
    low, high = CHALLENGE_BONUS_MONEY[tier]
    return rng.randint(low, high)


def reward_rarity(tier: int, rng: random.Random) -> Rarity:
    rare_chance = REWARD_RARE_CHANCE.get(tier, 1.0)
    if rare_chance >= 1.0:
        return "rare"
    if rare_chance <= 0.0:
        return "legendary"
    return "rare" if rng.random() < rare_chance else "legendary"
