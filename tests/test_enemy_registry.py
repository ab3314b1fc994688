from __future__ import annotations

import random

from setrogue.engine.enemies import registry
from setrogue.engine.enemies.composer import create_dummy_enemy
from setrogue.engine.enemies.registry import (
    create_enemy,
    get_enemies_by_tier,
    get_enemy_names,
    get_random_enemies,
    get_random_enemy_options,
    is_enemy_registered,
    register_enemy,
)
from setrogue.paths import get_paths
from setrogue.services.content import ContentService


def _load_catalog():
    paths = get_paths()
    content = ContentService(paths.data_dir, paths.schema_dir)
    return content.load_weapons()


def test_all_enemies_are_registered() -> None:
    names = get_enemy_names()
    assert len(names) == 51
    assert [len(get_enemies_by_tier(t)) for t in (1, 2, 3, 4)] == [22, 12, 12, 5]


def test_every_enemy_builds_with_matching_name_and_tier() -> None:
    for tier in (1, 2, 3, 4):
        for name in get_enemies_by_tier(tier):
            enemy = create_enemy(name, random.Random(0))
            assert enemy.name == name
            assert enemy.tier == tier
            assert enemy.description
            assert enemy.defeat_condition_text
            assert enemy.icon
            assert enemy.phase == "constructed"


def test_instances_do_not_share_state() -> None:
    a = create_enemy("Trap Weaver", random.Random(0))
    b = create_enemy("Trap Weaver", random.Random(0))
    assert a is not b
    assert not set(map(id, a.behaviors)) & set(map(id, b.behaviors))
    a.on_round_end()
    assert b.phase == "constructed"


def test_unknown_enemy_falls_back_to_dummy() -> None:
    enemy = create_enemy("Nobody")
    assert enemy.name == "Dummy"
    assert enemy.tier == 1
    assert enemy.check_defeat_condition(None)  # type: ignore[arg-type]
    assert not is_enemy_registered("Nobody")


def test_register_enemy_adds_to_tier() -> None:
    try:
        register_enemy("Practice Target", lambda rng: create_dummy_enemy(), tier=2)
        assert is_enemy_registered("Practice Target")
        assert "Practice Target" in get_enemies_by_tier(2)
        assert create_enemy("Practice Target").name == "Dummy"
    finally:
        registry.ENEMY_REGISTRY.pop("Practice Target", None)
        registry._TIERS.pop("Practice Target", None)


def test_random_enemies_respect_exclusions() -> None:
    tier4 = get_enemies_by_tier(4)
    picked = get_random_enemies(4, count=3, exclude=tier4[:3], rng=random.Random(1))
    assert sorted(e.name for e in picked) == sorted(tier4[3:])


def test_empty_tier_yields_dummies() -> None:
    picked = get_random_enemies(9, count=2, rng=random.Random(1))
    assert [e.name for e in picked] == ["Dummy", "Dummy"]


def test_enemy_options_have_distinct_rewards() -> None:
    catalog = _load_catalog()
    options = get_random_enemy_options(1, count=3, catalog=catalog, rng=random.Random(3))
    assert len(options) == 3
    assert len({o.enemy.name for o in options}) == 3
    reward_ids = [o.stretch_goal_reward.id for o in options]
    assert len(set(reward_ids)) == 3
    # Tier 1 stretch goals always pay out a rare weapon.
    assert all(o.stretch_goal_reward.rarity == "rare" for o in options)
