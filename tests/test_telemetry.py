from __future__ import annotations

import json
from pathlib import Path

from setrogue.engine.round_stats import RoundStats
from setrogue.services.telemetry import TelemetryService


def test_log_appends_json_lines(tmp_path: Path) -> None:
    path = tmp_path / "logs" / "telemetry.jsonl"
    telemetry = TelemetryService(path)
    telemetry.log("shop_purchase", {"weapon_id": "field_stone_common"})
    telemetry.log("shop_purchase", {"weapon_id": "echo_stone_rare"})

    lines = path.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 2
    rec = json.loads(lines[1])
    assert rec["type"] == "shop_purchase"
    assert rec["payload"] == {"weapon_id": "echo_stone_rare"}
    assert rec["ts"]


def test_round_stats_record(tmp_path: Path) -> None:
    path = tmp_path / "telemetry.jsonl"
    stats = RoundStats(total_matches=4, max_streak=3, shapes_matched=frozenset({"oval"}), target_score=10)
    TelemetryService(path).log_round_stats(stats, round_number=3, enemy_name="Junk Rat", outcome="completed_success")

    rec = json.loads(path.read_text(encoding="utf-8"))
    assert rec["type"] == "round_stats"
    payload = rec["payload"]
    assert payload["round_number"] == 3
    assert payload["enemy"] == "Junk Rat"
    assert payload["outcome"] == "completed_success"
    assert payload["total_matches"] == 4
    assert payload["shapes_matched"] == ["oval"]
