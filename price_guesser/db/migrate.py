from __future__ import annotations

import logging
from pathlib import Path

from price_guesser.db.connection import get_conn

logger = logging.getLogger(__name__)

MIGRATIONS_DIR = Path(__file__).resolve().parents[2] / "migrations"


def run_migrations(migrations_dir: Path = MIGRATIONS_DIR) -> None:
    migration_files = sorted(migrations_dir.glob("*.sql"))
    with get_conn() as conn:
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS schema_migrations (
              name TEXT PRIMARY KEY,
              applied_at TEXT DEFAULT CURRENT_TIMESTAMP
            )
            """
        )
        for migration_file in migration_files:
            already_applied = conn.execute(
                "SELECT 1 FROM schema_migrations WHERE name = ? LIMIT 1",
                (migration_file.name,),
            ).fetchone()
            if already_applied is not None:
                continue
            conn.executescript(migration_file.read_text(encoding="utf-8"))
            conn.execute(
                "INSERT INTO schema_migrations (name) VALUES (?)",
                (migration_file.name,),
            )
            logger.info("applied migration %s", migration_file.name)


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")
    run_migrations()
