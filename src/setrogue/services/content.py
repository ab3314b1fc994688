from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Mapping

from jsonschema import Draft202012Validator

from setrogue.engine.types import BridgeEffect, CapIncrease, Item, ItemCatalog, Weapon, WeaponCatalog

logger = logging.getLogger(__name__)


class ContentError(RuntimeError):
    pass


def _load_json(path: Path) -> object:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise ContentError(f"Missing content file: {path}") from e
    except json.JSONDecodeError as e:
        raise ContentError(f"Invalid JSON in {path}: {e}") from e


def _load_schema(path: Path) -> object:
    return _load_json(path)


def validate_json(instance: object, schema: object, *, context: str) -> None:
    validator = Draft202012Validator(schema)
    errors = sorted(validator.iter_errors(instance), key=lambda e: list(e.path))
    if errors:
        lines = [f"Schema validation failed for {context}:"]
        for err in errors[:10]:
            loc = "/".join(str(p) for p in err.absolute_path)
            lines.append(f"- {loc}: {err.message}")
        raise ContentError("\n".join(lines))


def _require_str(obj: Mapping[str, object], key: str) -> str:
    v = obj.get(key)
    if not isinstance(v, str):
        raise ContentError(f"Expected string for {key}")
    return v


def _require_int(obj: Mapping[str, object], key: str) -> int:
    v = obj.get(key)
    if not isinstance(v, int) or isinstance(v, bool):
        raise ContentError(f"Expected int for {key}")
    return v


def _require_number(obj: Mapping[str, object], key: str) -> float:
    v = obj.get(key)
    if not isinstance(v, (int, float)) or isinstance(v, bool):
        raise ContentError(f"Expected number for {key}")
    return v


def _optional_str(obj: Mapping[str, object], key: str) -> str | None:
    v = obj.get(key)
    if v is None:
        return None
    if not isinstance(v, str):
        raise ContentError(f"Expected string for {key}")
    return v


def _optional_int(obj: Mapping[str, object], key: str) -> int | None:
    if obj.get(key) is None:
        return None
    return _require_int(obj, key)


def _parse_effects(raw: object, *, field: str = "effects") -> dict[str, float]:
    if not isinstance(raw, dict):
        raise ContentError(f"{field} must be an object")
    out: dict[str, float] = {}
    for k, v in raw.items():
        if not isinstance(k, str) or not isinstance(v, (int, float)):
            raise ContentError(f"Invalid effect entry: {k!r}")
        out[k] = v
    return out


def _parse_cap_increase(raw: object) -> CapIncrease | None:
    if raw is None:
        return None
    if not isinstance(raw, dict):
        raise ContentError("cap_increase must be an object")
    return CapIncrease(
        kind=_require_str(raw, "kind"),  # type: ignore[arg-type]
        amount=_require_int(raw, "amount"),
    )


def _parse_bridge_effect(raw: object) -> BridgeEffect | None:
    if raw is None:
        return None
    if not isinstance(raw, dict):
        raise ContentError("bridge_effect must be an object")
    return BridgeEffect(
        trigger=_require_str(raw, "trigger"),  # type: ignore[arg-type]
        effect=_require_str(raw, "effect"),  # type: ignore[arg-type]
        chance=float(_require_number(raw, "chance")),
        amount=_optional_int(raw, "amount") or 1,
    )


class ContentService:
    def __init__(self, data_dir: Path, schema_dir: Path) -> None:
        self._data_dir = data_dir
        self._schema_dir = schema_dir

    def load_weapons(self) -> WeaponCatalog:
        path = self._data_dir / "weapons.json"
        schema = _load_schema(self._schema_dir / "weapons.schema.json")
        raw = _load_json(path)
        validate_json(raw, schema, context=str(path))

        if not isinstance(raw, dict):
            raise ContentError("weapons.json must be an object")
        raw_weapons = raw.get("weapons")
        if not isinstance(raw_weapons, list):
            raise ContentError("weapons.json.weapons must be a list")

        weapons: dict[str, Weapon] = {}
        for item in raw_weapons:
            if not isinstance(item, dict):
                continue
            weapon_id = _require_str(item, "id")
            if weapon_id in weapons:
                raise ContentError(f"Duplicate weapon id: {weapon_id}")
            special = _optional_str(item, "special_effect")
            cap_increase = _parse_cap_increase(item.get("cap_increase"))
            bridge_effect = _parse_bridge_effect(item.get("bridge_effect"))
            if special == "cap_increase" and cap_increase is None:
                raise ContentError(f"{weapon_id}: cap_increase weapons need a cap_increase block")
            if special == "bridge" and bridge_effect is None:
                raise ContentError(f"{weapon_id}: bridge weapons need a bridge_effect block")
            weapons[weapon_id] = Weapon(
                id=weapon_id,
                name=_require_str(item, "name"),
                rarity=_require_str(item, "rarity"),  # type: ignore[arg-type]
                level=_require_int(item, "level"),
                price=_require_int(item, "price"),
                description=_require_str(item, "description"),
                icon=_require_str(item, "icon"),
                effects=_parse_effects(item.get("effects", {})),
                special_effect=special,  # type: ignore[arg-type]
                cap_increase=cap_increase,
                bridge_effect=bridge_effect,
                max_count=_optional_int(item, "max_count"),
            )
        logger.debug("Loaded %d weapons from %s", len(weapons), path)
        return WeaponCatalog(weapons=weapons)

    def load_items(self) -> ItemCatalog:
        path = self._data_dir / "items.json"
        schema = _load_schema(self._schema_dir / "items.schema.json")
        raw = _load_json(path)
        validate_json(raw, schema, context=str(path))

        if not isinstance(raw, dict):
            raise ContentError("items.json must be an object")
        raw_items = raw.get("items")
        if not isinstance(raw_items, list):
            raise ContentError("items.json.items must be a list")

        items: dict[str, Item] = {}
        for entry in raw_items:
            if not isinstance(entry, dict):
                continue
            item_id = _require_str(entry, "id")
            if item_id in items:
                raise ContentError(f"Duplicate item id: {item_id}")
            items[item_id] = Item(
                id=item_id,
                name=_require_str(entry, "name"),
                tier=_require_str(entry, "tier"),  # type: ignore[arg-type]
                price=_require_int(entry, "price"),
                description=_require_str(entry, "description"),
                icon=_require_str(entry, "icon"),
                effects=_parse_effects(entry.get("effects", {})),
                drawbacks=_parse_effects(entry.get("drawbacks", {}), field="drawbacks"),
                limit=_optional_int(entry, "limit"),
            )
        logger.debug("Loaded %d items from %s", len(items), path)
        return ItemCatalog(items=items)

    def validate_all(self) -> None:
        # Load is validation (schema + parse)
        _ = self.load_weapons()
        _ = self.load_items()
