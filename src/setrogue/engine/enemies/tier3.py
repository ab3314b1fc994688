from __future__ import annotations

import random

from .behaviors import (
    AttributeChange,
    Behavior,
    Bomb,
    CardRemovalTimer,
    Countdown,
    DamageMultiplier,
    DudCard,
    ExtraCardRemovalOnInvalid,
    ExtraCardRemovalOnMatch,
    FaceDown,
    HintDisable,
    Inactivity,
    PointsMultiplier,
    PositionShuffle,
    ScoreDecay,
    TimerSpeed,
    TimeSteal,
    TripleCard,
    WeaponCounterBehavior,
)
from .composer import EnemyInstance

COUNTER_TYPES = ("fire", "explosion", "laser", "hint", "grace", "time", "healing")


def create_abyssal_octopus(rng: random.Random) -> EnemyInstance:
    return EnemyInstance(
        name="Abyssal Octopus",
        tier=3,
        icon="lorc/octopus",
        description="30% face-down chance, shuffles every 20s, 10s countdown card",
        defeat_condition_text="Match 5 face-down cards",
        behaviors=[
            FaceDown(rng, chance=30, flip_chance=50),
            PositionShuffle(rng, interval_ms=20000),
            Countdown(rng, countdown_ms=10000),
        ],
        check_defeat=lambda s: s.face_down_cards_matched >= 5,
    )


def create_feral_fangs(rng: random.Random) -> EnemyInstance:
    return EnemyInstance(
        name="Feral Fangs",
        tier=3,
        icon="lorc/bestial-fangs",
        description="10% dud chance, one triple-health card, removes 1 card every 12s",
        defeat_condition_text="Clear triple card before 5 cards removed",
        behaviors=[
            DudCard(rng, chance=10),
            TripleCard(rng, count=1),
            CardRemovalTimer(rng, interval_ms=12000, min_board_size=6),
        ],
        check_defeat=lambda s: s.triple_cards_cleared >= 1,
    )


def create_goblin_saboteur(rng: random.Random) -> EnemyInstance:
    chosen = rng.sample(COUNTER_TYPES, 3)
    behaviors: list[Behavior] = [WeaponCounterBehavior(rng, t, 50) for t in chosen]  # type: ignore[arg-type]
    return EnemyInstance(
        name="Goblin Saboteur",
        tier=3,
        icon="caro-asercion/goblin",
        description="3 random weapon types -50% each",
        defeat_condition_text="Trigger 3 different weapon effects",
        behaviors=behaviors,
        check_defeat=lambda s: len(s.weapon_effects_triggered) >= 3,
    )


def create_merciless_porcupine(rng: random.Random) -> EnemyInstance:
    return EnemyInstance(
        name="Merciless Porcupine",
        tier=3,
        icon="caro-asercion/porcupine",
        description="+3 cards removed on invalid, 2x damage/points, 35s inactivity → instant death",
        defeat_condition_text="Make no invalid matches",
        behaviors=[
            ExtraCardRemovalOnInvalid(rng, count=3, min_board_size=5),
            DamageMultiplier(rng, 2),
            PointsMultiplier(rng, 2),
            Inactivity(rng, max_ms=35000, penalty="death"),
        ],
        check_defeat=lambda s: s.invalid_matches == 0 and s.total_matches >= 1,
    )


def create_nightmare_squid(rng: random.Random) -> EnemyInstance:
    return EnemyInstance(
        name="Nightmare Squid",
        tier=3,
        icon="delapouite/giant-squid",
        description="35% face-down (50% flip), shuffles every 15s, score drains 1pt/5s",
        defeat_condition_text="Score 200% of target",
        behaviors=[
            FaceDown(rng, chance=35, flip_chance=50),
            PositionShuffle(rng, interval_ms=15000),
            ScoreDecay(rng, rate_per_second=0.2),
        ],
        check_defeat=lambda s: s.current_score >= s.target_score * 2,
    )


def create_one_eyed_terror(rng: random.Random) -> EnemyInstance:
    return EnemyInstance(
        name="One-Eyed Terror",
        tier=3,
        icon="lorc/cyclops",
        description="No hints, attributes change every 12s, hint gain -55%",
        defeat_condition_text="Get 3 all-different matches",
        behaviors=[
            HintDisable(rng),
            AttributeChange(rng, interval_ms=12000),
            WeaponCounterBehavior(rng, "hint", 55),
        ],
        check_defeat=lambda s: s.all_different_matches >= 3,
    )


def create_raging_bear(rng: random.Random) -> EnemyInstance:
    return EnemyInstance(
        name="Raging Bear",
        tier=3,
        icon="sparker/bear-face",
        description="30s inactivity → instant death, 2x damage/points, score drains 1pt/5s",
        defeat_condition_text="7-match streak with no invalid matches",
        behaviors=[
            Inactivity(rng, max_ms=30000, penalty="death"),
            DamageMultiplier(rng, 2),
            PointsMultiplier(rng, 2),
            ScoreDecay(rng, rate_per_second=0.2),
        ],
        check_defeat=lambda s: s.max_streak >= 7 and s.invalid_matches == 0,
    )


def create_ravenous_tapir(rng: random.Random) -> EnemyInstance:
    return EnemyInstance(
        name="Ravenous Tapir",
        tier=3,
        icon="delapouite/tapir",
        description="+1 card removed per match, removes 1 card every 15s",
        defeat_condition_text="Beat target with 5+ cards remaining",
        behaviors=[
            ExtraCardRemovalOnMatch(rng, count=1, min_board_size=5),
            CardRemovalTimer(rng, interval_ms=15000, min_board_size=5),
        ],
        check_defeat=lambda s: s.current_score >= s.target_score and s.cards_remaining >= 5,
    )


def create_savage_claws(rng: random.Random) -> EnemyInstance:
    return EnemyInstance(
        name="Savage Claws",
        tier=3,
        icon="lorc/claw-slashes",
        description="-4s per match, timer 50% faster, random bomb cards",
        defeat_condition_text="Match 8 times total",
        behaviors=[
            TimeSteal(rng, 4),
            TimerSpeed(rng, 1.5),
            Bomb(rng, bomb_chance=15, bomb_timer_ms=10000, min_board_size=6),
        ],
        check_defeat=lambda s: s.total_matches >= 8,
    )


def create_stone_sentinel(rng: random.Random) -> EnemyInstance:
    return EnemyInstance(
        name="Stone Sentinel",
        tier=3,
        icon="delapouite/golem-head",
        description="2 triple-health cards, explosion -55%, laser -55%",
        defeat_condition_text="Clear both triple cards",
        behaviors=[
            TripleCard(rng, count=2),
            WeaponCounterBehavior(rng, "explosion", 55),
            WeaponCounterBehavior(rng, "laser", 55),
        ],
        check_defeat=lambda s: s.triple_cards_cleared >= 2,
    )


def create_swarming_ants(rng: random.Random) -> EnemyInstance:
    return EnemyInstance(
        name="Swarming Ants",
        tier=3,
        icon="delapouite/ant",
        description="Frequent bomb cards, fire -55%, 8s countdown card",
        defeat_condition_text="Defuse 5 bombs total",
        behaviors=[
            Bomb(rng, bomb_chance=25, bomb_timer_ms=10000, min_board_size=6),
            WeaponCounterBehavior(rng, "fire", 55),
            Countdown(rng, countdown_ms=8000),
        ],
        check_defeat=lambda s: s.bombs_defused >= 5,
    )


def create_wicked_imp(rng: random.Random) -> EnemyInstance:
    return EnemyInstance(
        name="Wicked Imp",
        tier=3,
        icon="lorc/imp",
        description="2x damage/points, grace -55%, time -55%",
        defeat_condition_text="Achieve minimum with 3+ graces unused",
        behaviors=[
            DamageMultiplier(rng, 2),
            PointsMultiplier(rng, 2),
            WeaponCounterBehavior(rng, "grace", 55),
            WeaponCounterBehavior(rng, "time", 55),
        ],
        check_defeat=lambda s: s.current_score >= s.target_score and s.graces_remaining >= 3,
    )


TIER3_ENEMIES = {
    "Abyssal Octopus": create_abyssal_octopus,
    "Feral Fangs": create_feral_fangs,
    "Goblin Saboteur": create_goblin_saboteur,
    "Merciless Porcupine": create_merciless_porcupine,
    "Nightmare Squid": create_nightmare_squid,
    "One-Eyed Terror": create_one_eyed_terror,
    "Raging Bear": create_raging_bear,
    "Ravenous Tapir": create_ravenous_tapir,
    "Savage Claws": create_savage_claws,
    "Stone Sentinel": create_stone_sentinel,
    "Swarming Ants": create_swarming_ants,
    "Wicked Imp": create_wicked_imp,
}
