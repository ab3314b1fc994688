from __future__ import annotations

import logging
import random
from collections.abc import Callable, Collection, Sequence
from dataclasses import dataclass

from ..shop import generate_challenge_reward
from ..stats import PlayerStats
from ..types import Weapon, WeaponCatalog
from .composer import EnemyInstance, create_dummy_enemy
from .tier1 import TIER1_ENEMIES
from .tier2 import TIER2_ENEMIES
from .tier3 import TIER3_ENEMIES
from .tier4 import TIER4_ENEMIES

logger = logging.getLogger(__name__)

EnemyFactory = Callable[[random.Random], EnemyInstance]

ENEMY_REGISTRY: dict[str, EnemyFactory] = {
    **TIER1_ENEMIES,
    **TIER2_ENEMIES,
    **TIER3_ENEMIES,
    **TIER4_ENEMIES,
}

_TIERS: dict[str, int] = {}
for _tier, _table in ((1, TIER1_ENEMIES), (2, TIER2_ENEMIES), (3, TIER3_ENEMIES), (4, TIER4_ENEMIES)):
    for _name in _table:
        _TIERS[_name] = _tier


@dataclass(frozen=True)
class EnemyOption:
    enemy: EnemyInstance
    stretch_goal_reward: Weapon


def create_enemy(name: str, rng: random.Random | None = None) -> EnemyInstance:
    """Build a fresh enemy. Unknown names yield the always-defeated Dummy."""
    factory = ENEMY_REGISTRY.get(name)
    if factory is None:
        logger.warning("Unknown enemy %r; using Dummy", name)
        return create_dummy_enemy()
    return factory(rng or random.Random())


def get_enemy_names() -> list[str]:
    return sorted(ENEMY_REGISTRY)


def is_enemy_registered(name: str) -> bool:
    return name in ENEMY_REGISTRY


def register_enemy(name: str, factory: EnemyFactory, tier: int | None = None) -> None:
    if name in ENEMY_REGISTRY:
        logger.warning("Overwriting registered enemy %r", name)
    ENEMY_REGISTRY[name] = factory
    if tier is None:
        tier = factory(random.Random(0)).tier
    _TIERS[name] = tier


def get_enemies_by_tier(tier: int) -> list[str]:
    return sorted(name for name, t in _TIERS.items() if t == tier and name in ENEMY_REGISTRY)


def get_random_enemies(
    tier: int,
    count: int = 3,
    exclude: Collection[str] = (),
    rng: random.Random | None = None,
) -> list[EnemyInstance]:
    rng = rng or random.Random()
    names = [n for n in get_enemies_by_tier(tier) if n not in exclude]
    if not names:
        return [create_dummy_enemy() for _ in range(count)]
    picked = rng.sample(names, min(count, len(names)))
    return [create_enemy(n, rng) for n in picked]


def get_random_enemy_options(
    tier: int,
    count: int = 3,
    excluded_names: Collection[str] = (),
    excluded_reward_ids: Collection[str] = (),
    stats: PlayerStats | None = None,
    weapons: Sequence[Weapon] = (),
    *,
    catalog: WeaponCatalog,
    rng: random.Random,
) -> list[EnemyOption]:
    """Enemies for the pre-round choice, each paired with a distinct stretch-goal reward."""
    enemies = get_random_enemies(tier, count, excluded_names, rng)
    used = set(excluded_reward_ids)
    options: list[EnemyOption] = []
    for enemy in enemies:
        reward = generate_challenge_reward(
            catalog,
            enemy.tier,
            rng,
            player_weapons=weapons,
            excluded_ids=used,
            stats=stats,
        )
        used.add(reward.id)
        options.append(EnemyOption(enemy=enemy, stretch_goal_reward=reward))
    return options
