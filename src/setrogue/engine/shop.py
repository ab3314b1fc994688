from __future__ import annotations

import logging
import random
from collections.abc import Collection, Sequence

from .progression import reward_rarity
from .stats import PlayerStats
from .types import Rarity, Weapon, WeaponCatalog

logger = logging.getLogger(__name__)

# Last resort when every pool is exhausted.
FALLBACK_WEAPON = Weapon(
    id="field_stone_common",
    name="Field Stone",
    rarity="common",
    level=1,
    price=5,
    description="+1 card on the board",
    icon="lorc/stone-block",
    effects={"field_size": 1},
)

# Mastery cap kind -> the chance stat it is only useful with.
_MASTERY_STATS: dict[str, str] = {
    "echo": "echo_chance",
    "laser": "laser_chance",
    "grace_gain": "grace_gain_chance",
    "explosion": "explosion_chance",
    "hint_gain": "hint_gain_chance",
    "time_gain": "time_gain_chance",
    "healing": "healing_chance",
    "fire": "fire_spread_chance",
    "ricochet": "ricochet_chance",
    "board_growth": "board_growth_chance",
    "coin_gain": "coin_gain_chance",
    "xp_gain": "xp_gain_chance",
}


def get_player_weapon_count(player_weapons: Sequence[Weapon], name: str) -> int:
    return sum(1 for w in player_weapons if w.name == name)


def can_obtain_weapon(player_weapons: Sequence[Weapon], weapon: Weapon) -> bool:
    if weapon.max_count is None:
        return True
    return get_player_weapon_count(player_weapons, weapon.name) < weapon.max_count


def get_weapons_by_rarity(catalog: WeaponCatalog, rarity: Rarity) -> list[Weapon]:
    return sorted(catalog.by_rarity(rarity), key=lambda w: w.id)


def shop_rarity_weights(round_number: int) -> dict[Rarity, float]:
    legendary = 0.005 * round_number + 0.005
    epic = 0.02 * round_number + 0.005
    rare = 0.15 + 0.015 * round_number
    common = max(0.0, 1.0 - legendary - epic - rare)
    return {"common": common, "rare": rare, "epic": epic, "legendary": legendary}


def _roll_rarity(weights: dict[Rarity, float], rng: random.Random) -> Rarity:
    r = rng.random()
    acc = 0.0
    for rarity in ("legendary", "epic", "rare", "common"):
        acc += weights[rarity]  # type: ignore[index]
        if r < acc:
            return rarity  # type: ignore[return-value]
    return "common"


def pick_with_fallback(
    catalog: WeaponCatalog,
    rarity: Rarity,
    player_weapons: Sequence[Weapon],
    rng: random.Random,
    *,
    excluded_ids: Collection[str] = (),
    stats: PlayerStats | None = None,
) -> Weapon:
    """Pick a random weapon of ``rarity``, degrading gracefully.

    Order: the rarity filtered by ownership ceiling and exclusions, the same
    rarity ignoring the ceiling, the common pool, then ``FALLBACK_WEAPON``.
    """
    pool = [w for w in get_weapons_by_rarity(catalog, rarity) if w.id not in excluded_ids]
    if stats is not None:
        pool = [w for w in pool if _mastery_is_useful(w, stats)]

    eligible = [w for w in pool if can_obtain_weapon(player_weapons, w)]
    if eligible:
        return rng.choice(eligible)
    if pool:
        return rng.choice(pool)
    commons = get_weapons_by_rarity(catalog, "common")
    if commons:
        return rng.choice(commons)
    logger.warning("No weapons available for rarity %s; using fallback weapon", rarity)
    return FALLBACK_WEAPON


def _mastery_is_useful(weapon: Weapon, stats: PlayerStats) -> bool:
    if weapon.cap_increase is None:
        return True
    stat = _MASTERY_STATS.get(weapon.cap_increase.kind)
    return stat is None or getattr(stats, stat) > 0


def get_random_shop_weapon(
    catalog: WeaponCatalog,
    player_weapons: Sequence[Weapon],
    round_number: int,
    rng: random.Random,
    excluded_ids: Collection[str] = (),
) -> Weapon:
    rarity = _roll_rarity(shop_rarity_weights(round_number), rng)
    return pick_with_fallback(catalog, rarity, player_weapons, rng, excluded_ids=excluded_ids)


def generate_shop_weapons(
    catalog: WeaponCatalog,
    count: int,
    rng: random.Random,
    *,
    player_weapons: Sequence[Weapon] = (),
    round_number: int = 1,
) -> list[Weapon]:
    """Distinct offers when the catalog allows it."""
    offers: list[Weapon] = []
    for _ in range(count):
        offers.append(
            get_random_shop_weapon(
                catalog, player_weapons, round_number, rng, excluded_ids={w.id for w in offers}
            )
        )
    return offers


def generate_challenge_reward(
    catalog: WeaponCatalog,
    tier: int,
    rng: random.Random,
    *,
    player_weapons: Sequence[Weapon] = (),
    excluded_ids: Collection[str] = (),
    stats: PlayerStats | None = None,
) -> Weapon:
    rarity = reward_rarity(tier, rng)
    return pick_with_fallback(catalog, rarity, player_weapons, rng, excluded_ids=excluded_ids, stats=stats)
