"""Enemy behaviors, their composition into named adversaries, and the registry."""

from .composer import EnemyInstance, create_dummy_enemy
from .registry import (
    ENEMY_REGISTRY,
    EnemyOption,
    create_enemy,
    get_enemies_by_tier,
    get_enemy_names,
    get_random_enemies,
    get_random_enemy_options,
    is_enemy_registered,
    register_enemy,
)
from .results import (
    CardModification,
    CardRemoval,
    EnemyMatchResult,
    EnemyStartResult,
    EnemyStatModifiers,
    EnemyTickResult,
    EnemyUIModifiers,
)

__all__ = [
    "CardModification",
    "CardRemoval",
    "ENEMY_REGISTRY",
    "EnemyInstance",
    "EnemyMatchResult",
    "EnemyOption",
    "EnemyStartResult",
    "EnemyStatModifiers",
    "EnemyTickResult",
    "EnemyUIModifiers",
    "create_dummy_enemy",
    "create_enemy",
    "get_enemies_by_tier",
    "get_enemy_names",
    "get_random_enemies",
    "get_random_enemy_options",
    "is_enemy_registered",
    "register_enemy",
]
