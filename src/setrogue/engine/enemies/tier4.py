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
from .tier3 import COUNTER_TYPES


def create_ancient_dragon(rng: random.Random) -> EnemyInstance:
    return EnemyInstance(
        name="Ancient Dragon",
        tier=4,
        icon="lorc/dragon-head",
        description=(
            "2 triple cards, attributes shift every 8s, timer 40% faster, "
            "2x damage/points, score drains 1pt/3s"
        ),
        defeat_condition_text="Clear all 2 triple cards AND get 2 all-different matches",
        behaviors=[
            TripleCard(rng, count=2),
            AttributeChange(rng, interval_ms=8000),
            TimerSpeed(rng, 1.4),
            DamageMultiplier(rng, 2),
            PointsMultiplier(rng, 2),
            ScoreDecay(rng, rate_per_second=0.33),
        ],
        check_defeat=lambda s: s.triple_cards_cleared >= 2 and s.all_different_matches >= 2,
    )


def create_krakens_grasp(rng: random.Random) -> EnemyInstance:
    behaviors: list[Behavior] = [WeaponCounterBehavior(rng, t, 75) for t in COUNTER_TYPES]  # type: ignore[arg-type]
    behaviors += [
        PositionShuffle(rng, interval_ms=10000),
        CardRemovalTimer(rng, interval_ms=8000, min_board_size=5),
        DudCard(rng, chance=15),
    ]
    return EnemyInstance(
        name="Kraken's Grasp",
        tier=4,
        icon="delapouite/kraken-tentacle",
        description="Shuffles every 10s, removes card every 8s, 15% dud chance, all weapons -75%",
        defeat_condition_text="Survive with 5+ cards remaining on board",
        behaviors=behaviors,
        check_defeat=lambda s: s.current_score >= s.target_score and s.cards_remaining >= 5,
    )


def create_the_hydra(rng: random.Random) -> EnemyInstance:
    return EnemyInstance(
        name="The Hydra",
        tier=4,
        icon="lorc/hydra",
        description="20s inactivity → instant death, frequent bombs, 8s countdown, 40% face-down, -6s per match",
        defeat_condition_text="Match 10 times with no invalid matches",
        behaviors=[
            Inactivity(rng, max_ms=20000, penalty="death"),
            Bomb(rng, bomb_chance=30, bomb_timer_ms=10000, min_board_size=5),
            Countdown(rng, countdown_ms=8000),
            FaceDown(rng, chance=40, flip_chance=40),
            TimeSteal(rng, 6),
        ],
        check_defeat=lambda s: s.total_matches >= 10 and s.invalid_matches == 0,
    )


def create_the_reaper(rng: random.Random) -> EnemyInstance:
    return EnemyInstance(
        name="The Reaper",
        tier=4,
        icon="lorc/grim-reaper",
        description="Grace -60%, time -60%, 2x damage/points, score drains 1pt/3s, no hints",
        defeat_condition_text="Achieve minimum with 10+ seconds remaining AND 0 damage taken",
        behaviors=[
            WeaponCounterBehavior(rng, "grace", 60),
            WeaponCounterBehavior(rng, "time", 60),
            DamageMultiplier(rng, 2),
            PointsMultiplier(rng, 2),
            ScoreDecay(rng, rate_per_second=0.33),
            HintDisable(rng),
        ],
        # time_remaining is in seconds.
        check_defeat=lambda s: s.current_score >= s.target_score and s.time_remaining >= 10 and s.damage_received == 0,
    )


def create_world_eater(rng: random.Random) -> EnemyInstance:
    return EnemyInstance(
        name="World Eater",
        tier=4,
        icon="lorc/daemon-skull",
        description=(
            "+2 cards removed per match, +3 on invalid, removes every 10s, "
            "25s inactivity → death, timer 50% faster"
        ),
        defeat_condition_text="Achieve minimum with 4+ cards remaining AND no invalid matches",
        behaviors=[
            ExtraCardRemovalOnMatch(rng, count=2, min_board_size=4),
            ExtraCardRemovalOnInvalid(rng, count=3, min_board_size=4),
            CardRemovalTimer(rng, interval_ms=10000, min_board_size=4),
            Inactivity(rng, max_ms=25000, penalty="death"),
            TimerSpeed(rng, 1.5),
        ],
        check_defeat=lambda s: (
            s.current_score >= s.target_score and s.cards_remaining >= 4 and s.invalid_matches == 0
        ),
    )


TIER4_ENEMIES = {
    "Ancient Dragon": create_ancient_dragon,
    "Kraken's Grasp": create_krakens_grasp,
    "The Hydra": create_the_hydra,
    "The Reaper": create_the_reaper,
    "World Eater": create_world_eater,
}
