from __future__ import annotations

from .actions import (
    Action,
    BurnCardAction,
    CancelRoundAction,
    EndRoundAction,
    MatchAction,
    TickAction,
    UseHintAction,
)
from .round import PlayerResources, RoundState
from .types import Card


def action_to_dict(a: Action) -> dict[str, object]:
    if isinstance(a, TickAction):
        return {"type": "tick", "elapsed_ms": a.elapsed_ms}
    if isinstance(a, MatchAction):
        return {"type": "match", "card_ids": list(a.card_ids)}
    if isinstance(a, UseHintAction):
        return {"type": "hint"}
    if isinstance(a, BurnCardAction):
        return {"type": "burn", "card_id": a.card_id}
    if isinstance(a, EndRoundAction):
        return {"type": "end_round"}
    if isinstance(a, CancelRoundAction):
        return {"type": "cancel"}
    # should be unreachable
    return {"type": "unknown"}


def card_to_dict(c: Card) -> dict[str, object]:
    out: dict[str, object] = {
        "id": c.id,
        "shape": c.shape,
        "color": c.color,
        "number": c.number,
        "shading": c.shading,
        "background": c.background,
    }
    # Modifiers only when set, to keep snapshots readable.
    if c.health is not None:
        out["health"] = c.health
    for flag in ("is_dud", "is_face_down", "has_bomb", "has_countdown", "on_fire", "is_holographic"):
        if getattr(c, flag):
            out[flag] = True
    if c.bomb_timer is not None:
        out["bomb_timer"] = c.bomb_timer
    if c.countdown_timer is not None:
        out["countdown_timer"] = c.countdown_timer
    if c.on_fire_since is not None:
        out["on_fire_since"] = c.on_fire_since
    return out


def _player_to_dict(p: PlayerResources) -> dict[str, object]:
    return {
        "health": p.health,
        "max_health": p.max_health,
        "hints": p.hints,
        "max_hints": p.max_hints,
        "graces": p.graces,
        "max_graces": p.max_graces,
        "money": p.money,
        "experience": p.experience,
        "level": p.level,
    }


def snapshot(state: RoundState) -> dict[str, object]:
    """Return a JSON-serializable canonical snapshot of the current round state."""
    return {
        "seed": state.seed,
        "round_number": state.round_number,
        "status": state.status,
        "enemy": {"name": state.enemy.name, "tier": state.enemy.tier, "phase": state.enemy.phase},
        "enemy_defeated": state.enemy_defeated,
        "score": round(state.score, 6),
        "target_score": state.target_score,
        "time_remaining": round(state.time_remaining, 6),
        "clock_ms": state.clock_ms,
        "board": [card_to_dict(c) for c in state.board],
        "deck": [c.id for c in state.deck],
        "player": _player_to_dict(state.player),
        "weapons": [w.id for w in state.weapons],
        "items": [i.id for i in state.items],
        "rewards": [w.id for w in state.rewards],
        "stats": state.tracker.get_stats().to_dict(),
        "action_log": [action_to_dict(a) for a in state.action_log],
    }
