from __future__ import annotations

import random

from setrogue.engine.actions import TickAction, UseHintAction
from setrogue.engine.bridge import get_bridge_weapons_for_trigger, has_bridge_weapons_for_trigger, resolve_bridge
from setrogue.engine.round import RoundConfig, new_round, start_round, step
from setrogue.engine.stats import PlayerStats
from setrogue.engine.types import BridgeEffect, Weapon
from setrogue.paths import get_paths
from setrogue.services.content import ContentService


def _load_catalog():
    paths = get_paths()
    content = ContentService(paths.data_dir, paths.schema_dir)
    return content.load_weapons()


def _bridge(trigger: str, effect: str, chance: float, amount: int = 1) -> Weapon:
    return Weapon(
        id=f"{trigger}_{effect}",
        name=f"{trigger} -> {effect}",
        rarity="legendary",
        level=4,
        price=40,
        description="",
        icon="",
        special_effect="bridge",
        bridge_effect=BridgeEffect(trigger=trigger, effect=effect, chance=chance, amount=amount),  # type: ignore[arg-type]
    )


def test_catalog_bridges_listen_on_their_trigger() -> None:
    catalog = _load_catalog()
    weapons = catalog.by_rarity("legendary")
    healers = get_bridge_weapons_for_trigger(weapons, "on_heal")
    assert [w.name for w in healers] == ["Phoenix Feather"]
    assert has_bridge_weapons_for_trigger(weapons, "on_health_loss")
    assert not has_bridge_weapons_for_trigger(catalog.by_rarity("common"), "on_health_loss")


def test_guaranteed_bridge_fires_once_per_weapon() -> None:
    weapons = [_bridge("on_heal", "gain_coin", 100, 2), _bridge("on_heal", "gain_hint", 100)]
    res = resolve_bridge("on_heal", weapons, rng=random.Random(0))
    assert [(r.effect, r.amount) for r in res] == [("gain_coin", 2), ("gain_hint", 1)]


def test_other_triggers_do_not_fire() -> None:
    weapons = [_bridge("on_heal", "gain_coin", 100)]
    assert resolve_bridge("on_echo", weapons, rng=random.Random(0)) == []


def test_cascade_never_triggers() -> None:
    weapons = [_bridge("on_destruction", "heal", 100)]
    assert resolve_bridge("on_destruction", weapons, is_cascade=True, rng=random.Random(0)) == []


def test_zero_chance_never_fires() -> None:
    weapons = [_bridge("on_echo", "fire_card", 0)]
    rng = random.Random(5)
    assert all(resolve_bridge("on_echo", weapons, rng=rng) == [] for _ in range(200))


def _hint_round(*weapons: Weapon, health: int = 3):
    """A started 21-card round where spending a hint fires ``on_hint_use`` bridges."""
    state = new_round(
        1,
        seed=5,
        base_stats=PlayerStats(hints=3, health=health),
        weapons=list(weapons),
        config=RoundConfig(initial_card_count=21, hint_drop_chance=0),
    )
    assert start_round(state).ok
    return state


def _spend_hint(state) -> list[str]:
    before = {c.id for c in state.board}
    res = step(state, UseHintAction())
    assert res.ok
    assert [e["type"] for e in res.events].count("BRIDGE_TRIGGERED") == 1
    return sorted(before - {c.id for c in state.board})


def test_make_holographic_marks_cards() -> None:
    state = _hint_round(_bridge("on_hint_use", "make_holographic", 100, 3))
    _spend_hint(state)
    assert sum(1 for c in state.board if c.is_holographic) == 3


def test_fire_card_ignites_at_the_current_clock() -> None:
    state = _hint_round(_bridge("on_hint_use", "fire_card", 100, 2))
    step(state, TickAction(elapsed_ms=120))
    _spend_hint(state)
    burning = [c for c in state.board if c.on_fire]
    assert len(burning) == 2
    assert all(c.on_fire_since == 120 for c in burning)


def test_triggered_echo_destroys_a_valid_combination_without_cascading() -> None:
    state = _hint_round(
        _bridge("on_hint_use", "trigger_echo", 100),
        _bridge("on_destruction", "gain_coin", 100, 50),
    )
    removed = _spend_hint(state)
    assert len(removed) == 3
    assert state.score == 3
    # The destruction bridge is not re-entered from a bridge effect.
    assert state.player.money == 3
    assert len(state.board) == 21


def test_triggered_laser_clears_a_row_or_column() -> None:
    state = _hint_round(_bridge("on_hint_use", "trigger_laser", 100))
    removed = _spend_hint(state)
    assert len(removed) in (3, 7)
    assert state.score == 2 * len(removed)
    assert state.player.money == len(removed)


def test_bridge_explosion_hits_a_card_and_its_neighbours() -> None:
    state = _hint_round(_bridge("on_hint_use", "explosion", 100))
    removed = _spend_hint(state)
    assert 3 <= len(removed) <= 5
    assert state.score == len(removed)
    assert state.player.money == len(removed)


def test_resource_bridges() -> None:
    state = _hint_round(_bridge("on_hint_use", "gain_grace", 100))
    _spend_hint(state)
    assert state.player.graces == 1

    state = _hint_round(_bridge("on_hint_use", "gain_hint", 100, 2))
    _spend_hint(state)
    assert state.player.hints == 4

    state = _hint_round(_bridge("on_hint_use", "gain_coin", 100, 4))
    _spend_hint(state)
    assert state.player.money == 4

    state = _hint_round(_bridge("on_hint_use", "heal", 100), health=2)
    _spend_hint(state)
    assert state.player.health == 3
