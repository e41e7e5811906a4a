from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional

from price_guesser.db.connection import get_conn

logger = logging.getLogger(__name__)

PROGRESS_STORAGE_KEY = "price-guesser-progress"


@dataclass
class ProgressRecord:
    date: str
    current_round: int = 0
    scores: list[float] = field(default_factory=list)
    completed: bool = False


def _decode_scores(raw: Optional[str]) -> Optional[list[float]]:
    try:
        values = json.loads(raw or "[]")
    except ValueError:
        return None
    if not isinstance(values, list):
        return None
    try:
        return [float(v) for v in values]
    except (TypeError, ValueError):
        return None


def save_progress(player_id: str, progress: ProgressRecord) -> None:
    with get_conn() as conn:
        conn.execute(
            """
            INSERT INTO daily_progress (
              storage_key, player_id, date_key, current_round, scores, completed, updated_at
            ) VALUES (?, ?, ?, ?, ?, ?, ?)
            ON CONFLICT(storage_key, player_id) DO UPDATE SET
              date_key = excluded.date_key,
              current_round = excluded.current_round,
              scores = excluded.scores,
              completed = excluded.completed,
              updated_at = excluded.updated_at
            """,
            (
                PROGRESS_STORAGE_KEY,
                player_id,
                progress.date,
                progress.current_round,
                json.dumps(progress.scores),
                int(progress.completed),
                datetime.now(timezone.utc).isoformat(),
            ),
        )


def load_progress(player_id: str, date_key: str) -> Optional[ProgressRecord]:
    """Return the stored progress for ``date_key``, or None.

    A record left over from another day counts as no progress, and so does a
    row whose scores cannot be decoded.
    """
    with get_conn() as conn:
        row = conn.execute(
            """
            SELECT date_key, current_round, scores, completed FROM daily_progress
            WHERE storage_key = ? AND player_id = ?
            """,
            (PROGRESS_STORAGE_KEY, player_id),
        ).fetchone()

    if row is None or row["date_key"] != date_key:
        return None

    scores = _decode_scores(row["scores"])
    if scores is None:
        logger.warning("discarding unreadable progress for player %s", player_id)
        return None

    return ProgressRecord(
        date=row["date_key"],
        current_round=int(row["current_round"]),
        scores=scores,
        completed=bool(row["completed"]),
    )
