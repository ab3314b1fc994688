"""Deterministic, headless rules engine for setrogue.

IMPORTANT: This package does no I/O and must never import the services layer.
"""

from .actions import BurnCardAction, CancelRoundAction, EndRoundAction, MatchAction, TickAction, UseHintAction
from .bridge import resolve_bridge
from .enemies import create_enemy, get_random_enemy_options
from .round import RoundConfig, RoundState, new_round, replay, start_round, step
from .round_stats import RoundStats, RoundStatsTracker
from .stats import PlayerStats, aggregate_stats
from .types import Card, Item, ItemCatalog, Rarity, Weapon, WeaponCatalog
from .validator import validate
from .weapons import resolve_match

__all__ = [
    "BurnCardAction",
    "CancelRoundAction",
    "Card",
    "EndRoundAction",
    "Item",
    "ItemCatalog",
    "MatchAction",
    "PlayerStats",
    "Rarity",
    "RoundConfig",
    "RoundState",
    "RoundStats",
    "RoundStatsTracker",
    "TickAction",
    "UseHintAction",
    "Weapon",
    "WeaponCatalog",
    "aggregate_stats",
    "create_enemy",
    "get_random_enemy_options",
    "new_round",
    "replay",
    "resolve_bridge",
    "resolve_match",
    "start_round",
    "step",
    "validate",
]
