from __future__ import annotations

import logging
import math
import random
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field, replace
from typing import Literal

from .actions import (
    Action,
    BurnCardAction,
    CancelRoundAction,
    EndRoundAction,
    MatchAction,
    TickAction,
    UseHintAction,
)
from .bridge import BridgeEffectResult, resolve_bridge
from .deck import CardIdGenerator, shuffled_deck
from .enemies.composer import EnemyInstance, create_dummy_enemy
from .enemies.registry import create_enemy
from .enemies.results import CardModification, CardRemoval, EnemyMatchResult, EnemyTickResult
from .grid import adjacent_indices, line_indices
from .progression import challenge_bonus_money, level_from_xp, round_requirement
from .round_stats import RoundStats, RoundStatsTracker
from .stats import PlayerStats, aggregate_stats, apply_enemy_stat_modifiers
from .types import DEFAULT_ATTRIBUTES, AttributeName, BridgeTrigger, Card, Item, Weapon
from .validator import find_all_combinations, has_squiggle, is_all_different, is_all_same_color, validate
from .weapons import WeaponEffectResult, resolve_match

logger = logging.getLogger(__name__)

Event = dict[str, object]

RoundStatus = Literal["not_started", "active", "completed_success", "completed_failure", "cancelled"]

# Weapon effect kind -> bridge trigger it fires.
_EFFECT_TRIGGERS: dict[str, BridgeTrigger] = {
    "healing": "on_heal",
    "explosion": "on_explosion",
    "time": "on_time_gain",
    "echo": "on_echo",
    "coin": "on_coin_gain",
    "xp": "on_xp_gain",
}


@dataclass(frozen=True)
class RoundConfig:
    initial_card_count: int = 12
    max_board_size: int = 21
    columns: int = 3
    base_points_per_card: int = 1
    base_money_per_card: int = 1
    base_xp_per_card: int = 1
    hint_drop_chance: float = 1.0
    invalid_match_penalty: int = 1
    fire_burn_ms: int = 250


@dataclass
class PlayerResources:
    health: int
    max_health: int
    hints: int
    max_hints: int
    graces: int
    max_graces: int
    money: int
    experience: int
    level: int


@dataclass
class StepResult:
    ok: bool
    events: list[Event]
    error: str | None = None


@dataclass
class RoundState:
    config: RoundConfig
    seed: int
    rng: random.Random
    round_number: int
    base_stats: PlayerStats
    weapons: list[Weapon]
    enemy: EnemyInstance
    stats: PlayerStats
    active_attributes: tuple[AttributeName, ...]
    player: PlayerResources
    tracker: RoundStatsTracker
    ids: CardIdGenerator
    target_score: int
    base_time: float
    time_remaining: float
    board_target: int
    stretch_goal_reward: Weapon | None = None
    items: list[Item] = field(default_factory=list)
    board: list[Card] = field(default_factory=list)
    deck: list[Card] = field(default_factory=list)
    status: RoundStatus = "not_started"
    score: float = 0
    clock_ms: int = 0
    auto_hint_elapsed: int = 0
    hinted_card_ids: tuple[str, ...] = ()
    enemy_defeated: bool | None = None
    rewards: list[Weapon] = field(default_factory=list)
    action_log: list[Action] = field(default_factory=list)
    event_log: list[Event] = field(default_factory=list)

    @property
    def is_finished(self) -> bool:
        return self.status not in ("not_started", "active")

    def card(self, card_id: str) -> Card | None:
        for c in self.board:
            if c.id == card_id:
                return c
        return None


def _emit(state: RoundState, event: Event) -> None:
    state.event_log.append(event)


def _roll(state: RoundState, chance: float) -> bool:
    return chance > 0 and state.rng.random() * 100 < chance


def _sync_tracker(state: RoundState) -> None:
    t = state.tracker
    t.update_time_remaining(state.time_remaining)
    t.update_cards_remaining(len(state.board))
    t.update_score(state.score)
    t.update_hints_remaining(state.player.hints)
    t.update_graces_remaining(state.player.graces)


# --- board ---------------------------------------------------------------


def _draw_card(state: RoundState) -> Card | None:
    if not state.deck:
        state.deck = shuffled_deck(state.rng, state.active_attributes, state.ids)
        _emit(state, {"type": "DECK_REFRESHED", "size": len(state.deck)})
    if not state.deck:
        return None
    return state.enemy.on_card_draw(state.deck.pop())


def _replace_cards(state: RoundState, card_ids: set[str]) -> list[str]:
    """Swap destroyed cards for fresh draws in place. Returns the removed ids."""
    removed: list[str] = []
    new_board: list[Card] = []
    for c in state.board:
        if c.id not in card_ids:
            new_board.append(c)
            continue
        removed.append(c.id)
        fresh = _draw_card(state)
        if fresh is not None:
            new_board.append(fresh)
            _emit(state, {"type": "CARD_DRAWN", "card_id": fresh.id, "replaces": c.id})
    state.board = new_board
    return removed


def _remove_cards(state: RoundState, removals: Iterable[CardRemoval]) -> None:
    """Enemy removals shrink the board; they are never refilled."""
    ids = {r.card_id for r in removals}
    if ids:
        state.board = [c for c in state.board if c.id not in ids]


def _grow_board(state: RoundState, amount: int) -> None:
    room = state.config.max_board_size - len(state.board)
    for _ in range(max(0, min(amount, room))):
        fresh = _draw_card(state)
        if fresh is None:
            break
        state.board.append(fresh)
        _emit(state, {"type": "CARD_DRAWN", "card_id": fresh.id, "replaces": None})
    state.board_target = min(state.config.max_board_size, state.board_target + amount)


def _modify_card(state: RoundState, card_id: str, changes: dict[str, object]) -> None:
    for i, c in enumerate(state.board):
        if c.id == card_id:
            state.board[i] = replace(c, **changes)  # type: ignore[arg-type]
            return


def _apply_modifications(state: RoundState, mods: Sequence[CardModification]) -> None:
    for m in mods:
        _modify_card(state, m.card_id, m.changes)


def _flip_cards(state: RoundState, card_ids: Sequence[str]) -> None:
    for cid in card_ids:
        _modify_card(state, cid, {"is_face_down": False})


def _apply_enemy_events(state: RoundState, events: Sequence[Event]) -> None:
    for e in events:
        if e.get("type") == "POSITIONS_SHUFFLED":
            state.rng.shuffle(state.board)
        _emit(state, dict(e))


def _apply_enemy_match(state: RoundState, res: EnemyMatchResult, exclude: set[str]) -> None:
    _remove_cards(state, [r for r in res.cards_to_remove if r.card_id not in exclude])
    _flip_cards(state, res.cards_to_flip)
    _apply_modifications(state, res.card_modifications)
    if res.time_delta:
        state.time_remaining = max(0.0, state.time_remaining + res.time_delta)
    _apply_enemy_events(state, res.events)


# --- resources -----------------------------------------------------------


def _heal(state: RoundState, amount: int) -> int:
    p = state.player
    before = p.health
    p.health = min(p.max_health, p.health + amount)
    return p.health - before


def _gain_hints(state: RoundState, amount: int) -> None:
    p = state.player
    p.hints = min(p.max_hints, p.hints + amount)


def _gain_graces(state: RoundState, amount: int) -> None:
    p = state.player
    p.graces = min(p.max_graces, p.graces + amount)


def _gain_time(state: RoundState, seconds: float) -> None:
    state.time_remaining = min(state.base_time, state.time_remaining + seconds)


def _gain_xp(state: RoundState, amount: int) -> None:
    p = state.player
    p.experience += amount
    level = level_from_xp(p.experience)
    if level > p.level:
        p.level = level
        _emit(state, {"type": "LEVEL_UP", "level": level})


def _damage(state: RoundState, amount: int, *, source: str) -> None:
    if amount <= 0:
        return
    state.player.health -= amount
    state.tracker.record_damage(amount)
    _emit(state, {"type": "HEALTH_LOST", "amount": amount, "source": source, "health": state.player.health})
    _fire_bridges(state, "on_health_loss")


def _scaled_damage(state: RoundState, base: int) -> int:
    mult = state.enemy.stat_modifiers().damage_multiplier
    return int(math.ceil(base * mult))


# --- bridges -------------------------------------------------------------


def _destroy_for_reward(state: RoundState, cards: Sequence[Card], points_each: int, money_each: int) -> None:
    if not cards:
        return
    ids = {c.id for c in cards}
    state.score += points_each * len(ids)
    state.player.money += money_each * len(ids)
    _replace_cards(state, ids)


def _bridge_destroy(state: RoundState, cards: Sequence[Card], points_each: int) -> None:
    _destroy_for_reward(state, cards, points_each, 1)
    _fire_bridges(state, "on_destruction", is_cascade=True)


def _apply_bridge(state: RoundState, res: BridgeEffectResult) -> None:
    _emit(state, {"type": "BRIDGE_TRIGGERED", "weapon": res.weapon_name, "effect": res.effect, "amount": res.amount})
    rng = state.rng
    if res.effect == "make_holographic":
        pool = [c for c in state.board if not c.is_holographic and not c.is_dud]
        for c in rng.sample(pool, min(res.amount, len(pool))):
            _modify_card(state, c.id, {"is_holographic": True})
    elif res.effect == "gain_grace":
        _gain_graces(state, res.amount)
    elif res.effect == "heal":
        _heal(state, res.amount)
    elif res.effect == "gain_hint":
        _gain_hints(state, res.amount)
    elif res.effect == "gain_coin":
        state.player.money += res.amount
    elif res.effect == "fire_card":
        pool = [c for c in state.board if not c.on_fire]
        for c in rng.sample(pool, min(res.amount, len(pool))):
            _modify_card(state, c.id, {"on_fire": True, "on_fire_since": state.clock_ms})
    elif res.effect == "trigger_echo":
        combos = find_all_combinations(state.board, state.active_attributes)
        if combos:
            _bridge_destroy(state, rng.choice(combos), 1)
    elif res.effect == "trigger_laser":
        if state.board:
            origin = rng.randrange(len(state.board))
            line = line_indices(origin, len(state.board), rng.random() < 0.5, state.config.columns)
            _bridge_destroy(state, [state.board[i] for i in line], 2)
    elif res.effect == "explosion":
        if state.board:
            origin = rng.randrange(len(state.board))
            idx = [origin] + adjacent_indices(origin, len(state.board), state.config.columns)
            _bridge_destroy(state, [state.board[i] for i in idx], 1)


def _fire_bridges(state: RoundState, trigger: BridgeTrigger, *, is_cascade: bool = False) -> None:
    for res in resolve_bridge(trigger, state.weapons, is_cascade, rng=state.rng):
        _apply_bridge(state, res)


# --- completion ----------------------------------------------------------


def _complete(state: RoundState, success: bool, reason: str) -> None:
    state.status = "completed_success" if success else "completed_failure"
    _sync_tracker(state)
    state.enemy.on_round_end()
    snap = state.tracker.get_stats()
    defeated = state.enemy.check_defeat_condition(snap)
    state.enemy_defeated = defeated
    _emit(
        state,
        {
            "type": "ROUND_COMPLETED",
            "success": success,
            "reason": reason,
            "score": state.score,
            "target_score": state.target_score,
        },
    )
    if success and defeated:
        bonus = challenge_bonus_money(state.enemy.tier, state.rng)
        state.player.money += bonus
        _emit(state, {"type": "ENEMY_DEFEATED", "enemy": state.enemy.name, "bonus_money": bonus})
        if state.stretch_goal_reward is not None:
            state.rewards.append(state.stretch_goal_reward)
            _emit(state, {"type": "REWARD_GRANTED", "weapon_id": state.stretch_goal_reward.id})
    logger.debug("Round %d ended: %s (%s)", state.round_number, state.status, reason)


def _check_end(state: RoundState) -> None:
    if state.status != "active":
        return
    if state.player.health <= 0:
        _complete(state, False, "health_depleted")
    elif state.time_remaining <= 0:
        state.time_remaining = 0
        _complete(state, state.score >= state.target_score, "time_expired")


# --- actions -------------------------------------------------------------


def _burn(state: RoundState, card_ids: Sequence[str]) -> None:
    cards = [c for c in state.board if c.id in set(card_ids)]
    if not cards:
        return
    for c in cards:
        _emit(state, {"type": "CARD_BURNED", "card_id": c.id})
    _destroy_for_reward(state, cards, 1, 1)
    _fire_bridges(state, "on_destruction")


def _auto_hint(state: RoundState, elapsed_ms: int) -> None:
    stats = state.stats
    if stats.auto_hint_chance <= 0 or state.enemy.ui_modifiers().disable_auto_hint:
        return
    state.auto_hint_elapsed += elapsed_ms
    interval = max(1, stats.auto_hint_interval)
    while state.auto_hint_elapsed >= interval:
        state.auto_hint_elapsed -= interval
        if not _roll(state, stats.auto_hint_chance):
            continue
        combos = find_all_combinations(state.board, state.active_attributes)
        if not combos:
            continue
        triple = state.rng.choice(combos)
        shown = 2 if _roll(state, stats.enhanced_hint_chance) else 1
        state.hinted_card_ids = tuple(c.id for c in triple[:shown])
        _emit(state, {"type": "AUTO_HINT", "card_ids": list(state.hinted_card_ids)})


def _apply_tick_result(state: RoundState, res: EnemyTickResult) -> None:
    if res.score_delta:
        state.score = max(0.0, state.score + res.score_delta)
    if res.time_delta:
        state.time_remaining = max(0.0, state.time_remaining + res.time_delta)
    _remove_cards(state, res.cards_to_remove)
    _flip_cards(state, res.cards_to_flip)
    _apply_modifications(state, res.card_modifications)
    _apply_enemy_events(state, res.events)
    if res.health_delta < 0:
        _damage(state, _scaled_damage(state, -res.health_delta), source="enemy")
    if res.instant_death:
        state.player.health = 0
        _emit(state, {"type": "INSTANT_DEATH", "enemy": state.enemy.name})


def _tick(state: RoundState, action: TickAction) -> StepResult:
    if action.elapsed_ms < 0:
        return StepResult(ok=False, events=[], error="Elapsed time must be non-negative.")
    start = len(state.event_log)
    elapsed = action.elapsed_ms
    state.clock_ms += elapsed
    speed = state.enemy.ui_modifiers().timer_speed_multiplier
    state.time_remaining = max(0.0, state.time_remaining - (elapsed / 1000) * speed)

    _apply_tick_result(state, state.enemy.on_tick(elapsed, state.board))

    burn_ms = state.config.fire_burn_ms
    burning = [
        c.id
        for c in state.board
        if c.on_fire and c.on_fire_since is not None and state.clock_ms - c.on_fire_since >= burn_ms
    ]
    _burn(state, burning)
    _auto_hint(state, elapsed)

    _sync_tracker(state)
    _check_end(state)
    return StepResult(ok=True, events=state.event_log[start:])


def _select(state: RoundState, card_ids: Sequence[str]) -> list[Card] | str:
    if len(card_ids) != 3 or len(set(card_ids)) != 3:
        return "Select exactly 3 different cards."
    cards: list[Card] = []
    for cid in card_ids:
        c = state.card(cid)
        if c is None:
            return f"Card not on board: {cid}"
        if c.is_dud:
            return "Dud cards cannot be matched."
        cards.append(c)
    return cards


def _invalid_match(state: RoundState, cards: list[Card], message: str | None) -> None:
    state.tracker.record_invalid_match()
    _emit(state, {"type": "MATCH_INVALID", "card_ids": [c.id for c in cards], "message": message})
    if state.player.graces > 0:
        state.player.graces -= 1
        state.tracker.record_grace_used()
        _emit(state, {"type": "GRACE_USED", "graces": state.player.graces})
        _fire_bridges(state, "on_grace_use")
    else:
        _damage(state, _scaled_damage(state, state.config.invalid_match_penalty), source="invalid_match")
    _apply_enemy_match(state, state.enemy.on_invalid_match(cards, state.board), set())


def _apply_weapon_result(state: RoundState, wres: WeaponEffectResult) -> None:
    p = state.player
    state.score += wres.bonus_points
    p.money += wres.bonus_money + wres.bonus_coins
    if wres.bonus_xp:
        _gain_xp(state, wres.bonus_xp)
    if wres.bonus_healing:
        _heal(state, wres.bonus_healing)
    if wres.bonus_hints:
        _gain_hints(state, wres.bonus_hints)
    if wres.bonus_graces:
        _gain_graces(state, wres.bonus_graces)
    if wres.bonus_time:
        _gain_time(state, wres.bonus_time)
    for c in wres.fire_cards:
        _modify_card(state, c.id, {"on_fire": True, "on_fire_since": c.on_fire_since})
    for kind in wres.triggered_effects():
        state.tracker.record_weapon_effect(kind)
    if wres.notifications:
        _emit(state, {"type": "WEAPON_EFFECTS", "notifications": list(wres.notifications)})


def _valid_match(state: RoundState, cards: list[Card]) -> None:
    cfg = state.config
    wres = resolve_match(
        state.board,
        cards,
        state.stats,
        state.weapons,
        state.active_attributes,
        rng=state.rng,
        now_ms=state.clock_ms,
        columns=cfg.columns,
    )
    _emit(state, {"type": "MATCH_VALID", "card_ids": [c.id for c in cards]})
    _apply_weapon_result(state, wres)

    destroyed: set[str] = set()
    for c in cards:
        if c.health is not None and c.health > 1:
            _modify_card(state, c.id, {"health": c.health - 1})
            _emit(state, {"type": "CARD_DAMAGED", "card_id": c.id, "health": c.health - 1})
            continue
        if c.health is not None:
            state.tracker.record_triple_card_cleared()
        destroyed.add(c.id)
    weapon_destroyed = {c.id for c in wres.destroyed_cards()}
    _replace_cards(state, destroyed | weapon_destroyed)

    if wres.board_growth:
        _grow_board(state, wres.board_growth)

    for kind in wres.triggered_effects():
        trigger = _EFFECT_TRIGGERS.get(kind)
        if trigger is not None:
            _fire_bridges(state, trigger)
    if weapon_destroyed:
        _fire_bridges(state, "on_destruction")

    enemy_res = state.enemy.on_valid_match(cards, state.board)
    base = sum(cfg.base_points_per_card * (2 if c.is_holographic else 1) for c in cards)
    points = base * enemy_res.points_multiplier
    state.score += points
    state.player.money += cfg.base_money_per_card * len(cards)
    _gain_xp(state, cfg.base_xp_per_card * len(cards))

    for _ in cards:
        if _roll(state, cfg.hint_drop_chance):
            _gain_hints(state, 1)
            _emit(state, {"type": "HINT_DROPPED"})

    state.tracker.record_valid_match(
        cards,
        is_all_different=is_all_different(cards, state.active_attributes),
        is_all_same_color=is_all_same_color(cards),
        has_squiggle=has_squiggle(cards),
        points_earned=points + wres.bonus_points,
    )
    _emit(state, {"type": "MATCH_SCORED", "points": points, "bonus_points": wres.bonus_points})
    _apply_enemy_match(state, enemy_res, destroyed | weapon_destroyed)


def _match(state: RoundState, action: MatchAction) -> StepResult:
    selected = _select(state, action.card_ids)
    if isinstance(selected, str):
        return StepResult(ok=False, events=[], error=selected)
    start = len(state.event_log)
    state.hinted_card_ids = ()
    result = validate(selected, state.active_attributes)
    if result.is_valid:
        _valid_match(state, selected)
    else:
        _invalid_match(state, selected, result.error_message)
    _sync_tracker(state)
    _check_end(state)
    return StepResult(ok=True, events=state.event_log[start:])


def _use_hint(state: RoundState) -> StepResult:
    if state.enemy.ui_modifiers().disable_manual_hint:
        return StepResult(ok=False, events=[], error="Hints are disabled.")
    if state.player.hints <= 0:
        return StepResult(ok=False, events=[], error="No hints left.")
    combos = find_all_combinations(state.board, state.active_attributes)
    if not combos:
        return StepResult(ok=False, events=[], error="No valid combination on the board.")
    start = len(state.event_log)
    state.player.hints -= 1
    state.tracker.record_hint_used()
    state.hinted_card_ids = tuple(c.id for c in combos[0])
    _emit(state, {"type": "HINT_USED", "card_ids": list(state.hinted_card_ids), "hints": state.player.hints})
    _fire_bridges(state, "on_hint_use")
    _sync_tracker(state)
    return StepResult(ok=True, events=state.event_log[start:])


def _burn_card(state: RoundState, action: BurnCardAction) -> StepResult:
    c = state.card(action.card_id)
    if c is None or not c.on_fire:
        return StepResult(ok=False, events=[], error="Card is not burning.")
    start = len(state.event_log)
    _burn(state, [c.id])
    _sync_tracker(state)
    _check_end(state)
    return StepResult(ok=True, events=state.event_log[start:])


def _end_round(state: RoundState) -> StepResult:
    if state.score < state.target_score:
        return StepResult(ok=False, events=[], error="Target score not reached.")
    start = len(state.event_log)
    _complete(state, True, "ended_early")
    return StepResult(ok=True, events=state.event_log[start:])


def _cancel_round(state: RoundState) -> StepResult:
    state.status = "cancelled"
    state.enemy.on_round_end()
    _emit(state, {"type": "ROUND_CANCELLED"})
    return StepResult(ok=True, events=state.event_log[-1:])


def step(state: RoundState, action: Action) -> StepResult:
    """Apply a single action to the round state.

    This mutates ``state`` in place but is deterministic for a given
    (seed, round inputs, action sequence).
    """
    if state.status != "active":
        return StepResult(ok=False, events=[], error="Round is not active.")

    state.action_log.append(action)

    if isinstance(action, TickAction):
        return _tick(state, action)
    if isinstance(action, MatchAction):
        return _match(state, action)
    if isinstance(action, UseHintAction):
        return _use_hint(state)
    if isinstance(action, BurnCardAction):
        return _burn_card(state, action)
    if isinstance(action, EndRoundAction):
        return _end_round(state)
    if isinstance(action, CancelRoundAction):
        return _cancel_round(state)
    return StepResult(ok=False, events=[], error="Unknown action.")


def effective_stats(
    base: PlayerStats, weapons: Sequence[Weapon], enemy: EnemyInstance, items: Sequence[Item] = ()
) -> PlayerStats:
    return apply_enemy_stat_modifiers(aggregate_stats(base, weapons, items), enemy.stat_modifiers())


def new_round(
    round_number: int,
    seed: int,
    *,
    base_stats: PlayerStats | None = None,
    weapons: Sequence[Weapon] = (),
    items: Sequence[Item] = (),
    enemy_name: str | None = None,
    active_attributes: Sequence[AttributeName] = DEFAULT_ATTRIBUTES,
    stretch_goal_reward: Weapon | None = None,
    config: RoundConfig | None = None,
) -> RoundState:
    cfg = config or RoundConfig()
    base = base_stats or PlayerStats()
    rng = random.Random(seed)
    enemy = create_enemy(enemy_name, rng) if enemy_name is not None else create_dummy_enemy()
    owned = list(weapons)
    stats = effective_stats(base, owned, enemy, items)
    req = round_requirement(round_number)
    base_time = float(req.time_seconds + stats.starting_time)

    state = RoundState(
        config=cfg,
        seed=seed,
        rng=rng,
        round_number=round_number,
        base_stats=base,
        weapons=owned,
        enemy=enemy,
        stats=stats,
        active_attributes=tuple(active_attributes),
        player=PlayerResources(
            health=stats.health,
            max_health=stats.max_health,
            hints=stats.hints,
            max_hints=stats.max_hints,
            graces=min(stats.graces, stats.max_graces),
            max_graces=stats.max_graces,
            money=stats.money,
            experience=stats.experience,
            level=stats.level,
        ),
        tracker=RoundStatsTracker(clock=lambda: 0.0),
        ids=CardIdGenerator(),
        target_score=req.target_score,
        base_time=base_time,
        time_remaining=base_time,
        board_target=min(cfg.max_board_size, max(cfg.initial_card_count, stats.field_size)),
        stretch_goal_reward=stretch_goal_reward,
        items=list(items),
    )
    state.tracker =RoundStatsTracker(clock=lambda: float(state.clock_ms))
    return state


def start_round(state: RoundState) -> StepResult:
    if state.status != "not_started":
        return StepResult(ok=False, events=[], error="Round already started.")
    state.deck = shuffled_deck(state.rng, state.active_attributes, state.ids)
    state.board = []
    for _ in range(state.board_target):
        c = _draw_card(state)
        if c is None:
            break
        state.board.append(c)

    p = state.player
    state.tracker.reset(target_score=state.target_score, hints=p.hints, graces=p.graces)
    start_res = state.enemy.on_round_start(state.board)
    _apply_modifications(state, start_res.card_modifications)
    state.status = "active"
    _emit(
        state,
        {
            "type": "ROUND_STARTED",
            "round": state.round_number,
            "enemy": state.enemy.name,
            "target_score": state.target_score,
            "time": state.base_time,
        },
    )
    _apply_enemy_events(state, start_res.events)
    _sync_tracker(state)
    logger.debug("Round %d started against %s", state.round_number, state.enemy.name)
    return StepResult(ok=True, events=list(state.event_log))


def replay(
    round_number: int,
    seed: int,
    actions: Iterable[Action],
    *,
    base_stats: PlayerStats | None = None,
    weapons: Sequence[Weapon] = (),
    items: Sequence[Item] = (),
    enemy_name: str | None = None,
    active_attributes: Sequence[AttributeName] = DEFAULT_ATTRIBUTES,
    stretch_goal_reward: Weapon | None = None,
    config: RoundConfig | None = None,
) -> RoundState:
    state = new_round(
        round_number,
        seed,
        base_stats=base_stats,
        weapons=weapons,
        items=items,
        enemy_name=enemy_name,
        active_attributes=active_attributes,
        stretch_goal_reward=stretch_goal_reward,
        config=config,
    )
    start_round(state)
    for a in actions:
        step(state, a)
        if state.is_finished:
            break
    return state


def round_stats(state: RoundState) -> RoundStats:
    return state.tracker.get_stats()
