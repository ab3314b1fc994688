from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Mapping

from setrogue.engine.round_stats import RoundStats


@dataclass
class TelemetryService:
    path: Path

    def log(self, event_type: str, payload: Mapping[str, object]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        rec = {
            "ts": datetime.now(tz=timezone.utc).isoformat(),
            "type": event_type,
            "payload": dict(payload),
        }
        with self.path.open("a", encoding="utf-8") as f:
            f.write(json.dumps(rec, ensure_ascii=False) + "\n")

    def log_round_stats(
        self,
        stats: RoundStats,
        *,
        round_number: int,
        enemy_name: str,
        outcome: str,
    ) -> None:
        """Append one finished round's statistics for offline analysis."""
        payload: dict[str, object] = {
            "round_number": round_number,
            "enemy": enemy_name,
            "outcome": outcome,
        }
        payload.update(stats.to_dict())
        self.log("round_stats", payload)
