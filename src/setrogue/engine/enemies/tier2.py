from __future__ import annotations

import random

from ..round_stats import RoundStats
from .behaviors import (
    AttributeChange,
    Bomb,
    CardRemovalTimer,
    DamageMultiplier,
    DudCard,
    ExtraCardRemovalOnInvalid,
    ExtraCardRemovalOnMatch,
    FaceDown,
    HintDisable,
    Inactivity,
    PointsMultiplier,
    PositionShuffle,
    TimerSpeed,
    TimeSteal,
    TripleCard,
    WeaponCounterBehavior,
)
from .composer import EnemyInstance

_DESTRUCTIVE = ("fire", "explosion", "laser")


def _two_destructive_effects(stats: RoundStats) -> bool:
    return sum(1 for e in _DESTRUCTIVE if e in stats.weapon_effects_triggered) >= 2


def create_armored_tusks(rng: random.Random) -> EnemyInstance:
    return EnemyInstance(
        name="Armored Tusks",
        tier=2,
        icon="lorc/boar-tusks",
        description="Fire -35%, explosion -35%",
        defeat_condition_text="Trigger 2 destruction effects",
        behaviors=[WeaponCounterBehavior(rng, "fire", 35), WeaponCounterBehavior(rng, "explosion", 35)],
        check_defeat=_two_destructive_effects,
    )


def create_cackling_hyena(rng: random.Random) -> EnemyInstance:
    return EnemyInstance(
        name="Cackling Hyena",
        tier=2,
        icon="caro-asercion/hyena-head",
        description="-3s per match, grace gain -35%",
        defeat_condition_text="Match 6 times with no grace used",
        behaviors=[TimeSteal(rng, 3), WeaponCounterBehavior(rng, "grace", 35)],
        check_defeat=lambda s: s.total_matches >= 6 and s.graces_used == 0,
    )


def create_charging_boar(rng: random.Random) -> EnemyInstance:
    return EnemyInstance(
        name="Charging Boar",
        tier=2,
        icon="caro-asercion/boar",
        description="35s inactivity → lose 1HP",
        defeat_condition_text="Get 3 matches each under 10s",
        behaviors=[Inactivity(rng, max_ms=35000, penalty="damage")],
        check_defeat=lambda s: sum(1 for t in s.match_times if t < 10000) >= 3,
    )


def create_creeping_shadow(rng: random.Random) -> EnemyInstance:
    return EnemyInstance(
        name="Creeping Shadow",
        tier=2,
        icon="lorc/beast-eye",
        description="No auto or manual hints, hint gain -35%",
        defeat_condition_text="Match all 3 colors at least once",
        behaviors=[HintDisable(rng), WeaponCounterBehavior(rng, "hint", 35)],
        check_defeat=lambda s: len(s.colors_matched) >= 3,
    )


def create_diving_hawk(rng: random.Random) -> EnemyInstance:
    return EnemyInstance(
        name="Diving Hawk",
        tier=2,
        icon="lorc/hawk-emblem",
        description="Timer 35% faster, removes 1 card every 15s",
        defeat_condition_text="Get 2 all-different matches under 6s each",
        behaviors=[TimerSpeed(rng, 1.35), CardRemovalTimer(rng, interval_ms=15000, min_board_size=6)],
        check_defeat=lambda s: s.all_different_matches >= 2 and sum(1 for t in s.match_times if t < 6000) >= 2,
    )


def create_fierce_wolverine(rng: random.Random) -> EnemyInstance:
    return EnemyInstance(
        name="Fierce Wolverine",
        tier=2,
        icon="lorc/wolverine-claws",
        description="+2 cards removed on invalid match, 2x damage/points",
        defeat_condition_text="Make no invalid matches AND take no damage",
        behaviors=[
            ExtraCardRemovalOnInvalid(rng, count=2, min_board_size=6),
            DamageMultiplier(rng, 2),
            PointsMultiplier(rng, 2),
        ],
        check_defeat=lambda s: s.invalid_matches == 0 and s.damage_received == 0 and s.total_matches >= 1,
    )


def create_hoarding_beaver(rng: random.Random) -> EnemyInstance:
    return EnemyInstance(
        name="Hoarding Beaver",
        tier=2,
        icon="delapouite/beaver",
        description="+1 card removed per match, removes 1 card every 18s",
        defeat_condition_text="Achieve minimum with 6+ cards remaining",
        behaviors=[
            ExtraCardRemovalOnMatch(rng, count=1, min_board_size=6),
            CardRemovalTimer(rng, interval_ms=18000, min_board_size=6),
        ],
        check_defeat=lambda s: s.current_score >= s.target_score and s.cards_remaining >= 6,
    )


def create_hunting_eagle(rng: random.Random) -> EnemyInstance:
    return EnemyInstance(
        name="Hunting Eagle",
        tier=2,
        icon="delapouite/eagle-head",
        description="One triple-health card, time gain -35%",
        defeat_condition_text="Clear triple card with 20s+ remaining",
        behaviors=[TripleCard(rng, count=1), WeaponCounterBehavior(rng, "time", 35)],
        check_defeat=lambda s: s.triple_cards_cleared >= 1 and s.time_remaining >= 20,
    )


def create_lurking_shark(rng: random.Random) -> EnemyInstance:
    return EnemyInstance(
        name="Lurking Shark",
        tier=2,
        icon="lorc/shark-jaws",
        description="25% of new cards start face-down (tap to reveal)",
        defeat_condition_text="Include 2 revealed cards in your matches",
        behaviors=[FaceDown(rng, chance=25, flip_chance=60)],
        check_defeat=lambda s: s.face_down_cards_matched >= 2,
    )


def create_polar_guardian(rng: random.Random) -> EnemyInstance:
    return EnemyInstance(
        name="Polar Guardian",
        tier=2,
        icon="sparker/bear-face",
        description="2x damage taken, 2x points earned, laser -40%",
        defeat_condition_text="Take no damage AND trigger 1 weapon effect",
        behaviors=[DamageMultiplier(rng, 2), PointsMultiplier(rng, 2), WeaponCounterBehavior(rng, "laser", 40)],
        check_defeat=lambda s: s.damage_received == 0 and len(s.weapon_effects_triggered) >= 1,
    )


def create_prowling_direwolf(rng: random.Random) -> EnemyInstance:
    return EnemyInstance(
        name="Prowling Direwolf",
        tier=2,
        icon="lorc/direwolf",
        description="6% dud chance, shuffles positions every 25s",
        defeat_condition_text="Get a 6-match streak",
        behaviors=[DudCard(rng, chance=6), PositionShuffle(rng, interval_ms=25000)],
        check_defeat=lambda s: s.max_streak >= 6,
    )


def create_venomous_cobra(rng: random.Random) -> EnemyInstance:
    return EnemyInstance(
        name="Venomous Cobra",
        tier=2,
        icon="skoll/cobra",
        description="Attributes change every 15s, random cards get bomb timers",
        defeat_condition_text="Match 4 bombs before they explode",
        behaviors=[
            AttributeChange(rng, interval_ms=15000),
            Bomb(rng, bomb_chance=15, bomb_timer_ms=10000, min_board_size=6),
        ],
        check_defeat=lambda s: s.bombs_defused >= 4,
    )


TIER2_ENEMIES = {
    "Armored Tusks": create_armored_tusks,
    "Cackling Hyena": create_cackling_hyena,
    "Charging Boar": create_charging_boar,
    "Creeping Shadow": create_creeping_shadow,
    "Diving Hawk": create_diving_hawk,
    "Fierce Wolverine": create_fierce_wolverine,
    "Hoarding Beaver": create_hoarding_beaver,
    "Hunting Eagle": create_hunting_eagle,
    "Lurking Shark": create_lurking_shark,
    "Polar Guardian": create_polar_guardian,
    "Prowling Direwolf": create_prowling_direwolf,
    "Venomous Cobra": create_venomous_cobra,
}
