from __future__ import annotations

from setrogue.engine.round_stats import RoundStatsTracker
from setrogue.engine.types import Card


def _card(cid: str, shape="oval", color="red", **kw) -> Card:
    return Card(id=cid, shape=shape, color=color, number=1, shading="solid", **kw)


class _Clock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


def test_streak_resets_on_invalid_match() -> None:
    tracker = RoundStatsTracker(clock=_Clock())
    cards = [_card("a"), _card("b"), _card("c")]
    for outcome in ("v", "v", "i", "v", "v", "v"):
        if outcome == "v":
            tracker.record_valid_match(cards)
        else:
            tracker.record_invalid_match()
    stats = tracker.get_stats()
    assert stats.total_matches == 5
    assert stats.invalid_matches == 1
    assert stats.current_streak == 3
    assert stats.max_streak == 3


def test_match_times_are_gaps_between_matches() -> None:
    clock = _Clock()
    tracker = RoundStatsTracker(clock=clock)
    cards = [_card("a"), _card("b"), _card("c")]
    for now in (2000, 2500, 9000):
        clock.now = now
        tracker.record_valid_match(cards)
    assert tracker.get_stats().match_times == (2000, 500, 6500)


def test_card_properties_are_counted() -> None:
    tracker = RoundStatsTracker(clock=_Clock())
    cards = [
        _card("a", shape="squiggle", is_face_down=True),
        _card("b", shape="oval", has_bomb=True),
        _card("c", shape="diamond", color="green", has_countdown=True),
    ]
    tracker.record_valid_match(cards, is_all_different=True, has_squiggle=True, points_earned=3)
    stats = tracker.get_stats()
    assert stats.face_down_cards_matched == 1
    assert stats.bombs_defused == 1
    assert stats.countdown_cards_matched == 1
    assert stats.shapes_matched == {"squiggle", "oval", "diamond"}
    assert stats.colors_matched == {"red", "green"}
    assert stats.color_match_counts == {"red": 2, "green": 1}
    assert stats.all_different_matches == 1
    assert stats.squiggle_matches == 1
    assert stats.all_same_color_matches == 0
    assert stats.current_score == 3


def test_reset_and_resources() -> None:
    tracker = RoundStatsTracker(clock=_Clock())
    tracker.reset(target_score=10, hints=2, graces=1)
    tracker.record_hint_used()
    tracker.record_grace_used()
    tracker.record_grace_used()
    tracker.record_damage(2)
    tracker.record_weapon_effect("fire")
    tracker.record_weapon_effect("fire")
    stats = tracker.get_stats()
    assert stats.target_score == 10
    assert stats.hints_used == 1
    assert stats.hints_remaining == 1
    assert stats.graces_used == 2
    assert stats.graces_remaining == 0
    assert stats.damage_received == 2
    assert stats.weapon_effects_triggered == {"fire"}


def test_snapshot_is_detached_from_tracker() -> None:
    tracker = RoundStatsTracker(clock=_Clock())
    before = tracker.get_stats()
    tracker.record_invalid_match()
    assert before.invalid_matches == 0
    assert tracker.get_stats().to_dict()["invalid_matches"] == 1
