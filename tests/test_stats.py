from __future__ import annotations

import pytest

from setrogue.engine.enemies.results import EnemyStatModifiers
from setrogue.engine.stats import PlayerStats, aggregate_stats, apply_enemy_stat_modifiers
from setrogue.engine.types import Item, Weapon
from setrogue.paths import get_paths
from setrogue.services.content import ContentService


def _load_catalog():
    paths = get_paths()
    content = ContentService(paths.data_dir, paths.schema_dir)
    return content.load_weapons()


def test_aggregate_sums_weapon_effects() -> None:
    catalog = _load_catalog()
    weapons = [catalog.get("blast_powder_common"), catalog.get("blast_powder_rare"), catalog.get("life_vessel_common")]
    stats = aggregate_stats(PlayerStats(), weapons)
    assert stats.explosion_chance == 30
    assert stats.health == 4
    assert stats.max_health == 4
    # The cap still applies when reading the effective chance.
    assert stats.capped("explosion_chance", "explosion") == 30


def test_aggregate_applies_mastery_caps() -> None:
    catalog = _load_catalog()
    weapons = [
        catalog.get("echo_stone_legendary"),
        catalog.get("echo_stone_legendary"),
        catalog.get("echo_mastery_rare"),
    ]
    stats = aggregate_stats(PlayerStats(), weapons)
    assert stats.echo_chance == 40
    assert stats.capped("echo_chance", "echo") == 30


def test_aggregate_rejects_unknown_effect() -> None:
    bogus = Weapon(
        id="bogus_common",
        name="Bogus",
        rarity="common",
        level=1,
        price=1,
        description="",
        icon="",
        effects={"not_a_stat": 1},
    )
    with pytest.raises(ValueError):
        aggregate_stats(PlayerStats(), [bogus])


def test_countered_chance_is_divided_by_three() -> None:
    stats = PlayerStats(fire_spread_chance=40, laser_chance=20, healing_chance=9)
    mods = EnemyStatModifiers(reductions={"fire": 35, "laser": 1})
    out = apply_enemy_stat_modifiers(stats, mods)
    assert out.fire_spread_chance == 13
    assert out.laser_chance == 7
    # Not countered.
    assert out.healing_chance == 9


def test_no_modifiers_leaves_stats_untouched() -> None:
    stats = PlayerStats(fire_spread_chance=40)
    assert apply_enemy_stat_modifiers(stats, None) is stats
    assert apply_enemy_stat_modifiers(stats, EnemyStatModifiers()) is stats


def _item(effects: dict[str, float], drawbacks: dict[str, float]) -> Item:
    return Item(
        id="test_item",
        name="Test Item",
        tier="tier_1",
        price=1,
        description="",
        icon="",
        effects=effects,
        drawbacks=drawbacks,
    )


def test_item_drawback_lowers_a_stat() -> None:
    item = _item({"explosion_chance": 15}, {"coin_gain_chance": -10})
    stats = aggregate_stats(PlayerStats(coin_gain_chance=25), [], [item])
    assert stats.explosion_chance == 15
    assert stats.coin_gain_chance == 15


def test_items_stack_with_weapons() -> None:
    paths = get_paths()
    items = ContentService(paths.data_dir, paths.schema_dir).load_items()
    weapons = _load_catalog()
    stats = aggregate_stats(PlayerStats(), [weapons.get("field_stone_legendary")], [items.get("fortune_map")])
    assert stats.field_size == 12
    assert stats.xp_gain_chance == 50

    stats = aggregate_stats(PlayerStats(), [], [items.get("fortune_map")])
    assert stats.field_size == 9


def test_unknown_item_stat_is_rejected() -> None:
    with pytest.raises(ValueError, match="Unknown item drawback stat: luck"):
        aggregate_stats(PlayerStats(), [], [_item({}, {"luck": -1})])
