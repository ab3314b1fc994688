from __future__ import annotations

import json
from pathlib import Path

import pytest

from setrogue.engine.caps import CAP_INCREASES
from setrogue.paths import get_paths
from setrogue.services.content import ContentError, ContentService


def test_content_schemas_validate() -> None:
    paths = get_paths()
    content = ContentService(paths.data_dir, paths.schema_dir)
    content.validate_all()


def test_catalog_shape() -> None:
    paths = get_paths()
    catalog = ContentService(paths.data_dir, paths.schema_dir).load_weapons()
    assert len(catalog.all_ids()) == 95
    counts = {r: len(catalog.by_rarity(r)) for r in ("common", "rare", "epic", "legendary")}
    assert counts == {"common": 18, "rare": 29, "epic": 18, "legendary": 30}

    mastery = catalog.get("coin_mastery_rare")
    assert mastery.cap_increase is not None
    assert (mastery.cap_increase.kind, mastery.cap_increase.amount) == ("coin_gain", 15)

    link = catalog.get("life_link_legendary")
    assert link.bridge_effect is not None
    assert link.bridge_effect.trigger == "on_health_loss"
    assert link.bridge_effect.effect == "explosion"
    assert link.max_count == 2


def _write_catalog(tmp_path: Path, weapons: list[dict[str, object]]) -> ContentService:
    paths = get_paths()
    (tmp_path / "weapons.json").write_text(json.dumps({"weapons": weapons}), encoding="utf-8")
    return ContentService(tmp_path, paths.schema_dir)


def test_unknown_effect_stat_is_rejected(tmp_path: Path) -> None:
    content = _write_catalog(
        tmp_path,
        [
            {
                "id": "broken_common",
                "name": "Broken",
                "rarity": "common",
                "level": 1,
                "price": 5,
                "description": "",
                "icon": "",
                "effects": {"luck": 10},
            }
        ],
    )
    with pytest.raises(ContentError) as exc:
        content.load_weapons()
    assert "Schema validation failed" in str(exc.value)


def test_bridge_weapon_needs_bridge_block(tmp_path: Path) -> None:
    content = _write_catalog(
        tmp_path,
        [
            {
                "id": "hollow_legendary",
                "name": "Hollow",
                "rarity": "legendary",
                "level": 4,
                "price": 40,
                "description": "",
                "icon": "",
                "effects": {},
                "special_effect": "bridge",
            }
        ],
    )
    with pytest.raises(ContentError):
        content.load_weapons()


def test_missing_file(tmp_path: Path) -> None:
    paths = get_paths()
    with pytest.raises(ContentError):
        ContentService(tmp_path, paths.schema_dir).load_weapons()


def test_mastery_weapons_raise_caps_by_the_standard_amount() -> None:
    paths = get_paths()
    catalog = ContentService(paths.data_dir, paths.schema_dir).load_weapons()
    masteries = [w for w in catalog.all() if w.cap_increase is not None]
    assert masteries
    for w in masteries:
        assert w.cap_increase is not None
        assert w.cap_increase.amount == CAP_INCREASES[w.cap_increase.kind], w.id


def test_item_catalog_shape() -> None:
    paths = get_paths()
    items = ContentService(paths.data_dir, paths.schema_dir).load_items()
    assert len(items.all_ids()) == 10
    assert all(v <= 0 for item in items.all() for v in item.drawbacks.values())
    assert all(item.drawbacks for item in items.all())

    goggles = items.get("colorblind_goggles")
    assert goggles.tier == "tier_1"
    assert goggles.limit == 1
    assert dict(goggles.drawbacks) == {"coin_gain_chance": -10}


def test_positive_item_drawback_is_rejected(tmp_path: Path) -> None:
    paths = get_paths()
    item = {
        "id": "gift",
        "name": "Gift",
        "tier": "tier_1",
        "price": 3,
        "description": "",
        "icon": "",
        "effects": {},
        "drawbacks": {"hints": 1},
    }
    (tmp_path / "items.json").write_text(json.dumps({"items": [item]}), encoding="utf-8")
    with pytest.raises(ContentError) as exc:
        ContentService(tmp_path, paths.schema_dir).load_items()
    assert "Schema validation failed" in str(exc.value)
