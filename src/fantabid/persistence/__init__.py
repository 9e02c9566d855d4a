"""Persistence layer for storing draft snapshots."""

from __future__ import annotations

import json
import logging
import os
import sqlite3
import tempfile
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional

from fantabid.draft.state import DraftState, from_snapshot, to_snapshot


logger = logging.getLogger(__name__)

DB_PATH_ENV = "FANTABID_DB_PATH"
DEFAULT_DB_PATH = Path("data") / "fantabid.sqlite"


@dataclass
class SessionRecord:
    session_id: str
    created_at: datetime
    updated_at: datetime
    picked_count: int
    budget_remaining: float


class SnapshotStore:
    """Simple SQLite-backed store holding the latest snapshot per session."""

    def __init__(self, db_path: Path | str = DEFAULT_DB_PATH):
        self._use_uri = False
        env_db = os.getenv(DB_PATH_ENV)
        if env_db:
            if env_db.startswith("file:"):
                self.db_path: Path | str = env_db
                self._use_uri = True
            else:
                self.db_path = Path(env_db)
        elif os.getenv("PYTEST_CURRENT_TEST"):
            test_dir = Path(tempfile.gettempdir()) / "fantabid-test"
            test_dir.mkdir(parents=True, exist_ok=True)
            self.db_path = test_dir / "fantabid.sqlite"
        else:
            self.db_path = Path(db_path)
        self._ensure_schema()

    def _connect(self) -> sqlite3.Connection:
        if isinstance(self.db_path, Path):
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            conn = sqlite3.connect(self.db_path)
        else:
            conn = sqlite3.connect(self.db_path, uri=self._use_uri)
        conn.row_factory = sqlite3.Row
        return conn

    def _ensure_schema(self) -> None:
        with self._connect() as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS snapshots (
                    id TEXT PRIMARY KEY,
                    created_at TEXT NOT NULL,
                    updated_at TEXT NOT NULL,
                    picked_count INTEGER NOT NULL,
                    budget_remaining REAL NOT NULL,
                    state_json TEXT NOT NULL
                )
                """
            )
            conn.commit()

    def save(self, session_id: str, state: DraftState) -> None:
        now = datetime.now(timezone.utc).isoformat()
        payload = json.dumps(to_snapshot(state))
        with self._connect() as conn:
            existing = conn.execute(
                "SELECT created_at FROM snapshots WHERE id = ?", (session_id,)
            ).fetchone()
            created_at = existing["created_at"] if existing is not None else now
            conn.execute(
                """
                INSERT OR REPLACE INTO snapshots (
                    id, created_at, updated_at, picked_count, budget_remaining, state_json
                ) VALUES (?, ?, ?, ?, ?, ?)
                """,
                (
                    session_id,
                    created_at,
                    now,
                    len(state.picked),
                    state.budget_remaining,
                    payload,
                ),
            )
            conn.commit()
        logger.debug("Saved snapshot for session %s", session_id)

    def load(self, session_id: str) -> Optional[DraftState]:
        with self._connect() as conn:
            row = conn.execute(
                "SELECT state_json FROM snapshots WHERE id = ?", (session_id,)
            ).fetchone()
        if row is None:
            return None
        return from_snapshot(json.loads(row["state_json"]))

    def delete(self, session_id: str) -> bool:
        with self._connect() as conn:
            cursor = conn.execute("DELETE FROM snapshots WHERE id = ?", (session_id,))
            conn.commit()
            return cursor.rowcount > 0

    def list_sessions(self, limit: int = 50) -> List[SessionRecord]:
        with self._connect() as conn:
            rows = conn.execute(
                """
                SELECT id, created_at, updated_at, picked_count, budget_remaining
                FROM snapshots ORDER BY datetime(updated_at) DESC LIMIT ?
                """,
                (limit,),
            ).fetchall()
        return [
            SessionRecord(
                session_id=row["id"],
                created_at=datetime.fromisoformat(row["created_at"]),
                updated_at=datetime.fromisoformat(row["updated_at"]),
                picked_count=row["picked_count"],
                budget_remaining=row["budget_remaining"],
            )
            for row in rows
        ]


__all__ = [
    "DB_PATH_ENV",
    "SessionRecord",
    "SnapshotStore",
]
