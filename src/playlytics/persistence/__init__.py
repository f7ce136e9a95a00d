"""Persistence layer for player statistics."""

from __future__ import annotations

import logging
import sqlite3
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Iterable, Iterator, List, Optional
from uuid import uuid4

from playlytics.errors import StoreError
from playlytics.models import PlayerDraft, PlayerRecord, PlayerUpdate


logger = logging.getLogger(__name__)

_NOW_SQL = "strftime('%Y-%m-%dT%H:%M:%f+00:00', 'now')"


class PlayerStore:
    """Simple SQLite-backed store for player rows.

    Every ``sqlite3.Error``, and every row that cannot be read back as a
    record, surfaces as :class:`StoreError` with the original exception
    chained.
    """

    def __init__(self, db_path: Path | str):
        self.db_path = Path(db_path)
        self._ensure_schema()

    def _connect(self) -> sqlite3.Connection:
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    @contextmanager
    def _session(self) -> Iterator[sqlite3.Connection]:
        try:
            conn = self._connect()
        except (sqlite3.Error, OSError) as exc:
            raise StoreError(f"Unable to open player store: {exc}") from exc
        try:
            yield conn
            conn.commit()
        except sqlite3.Error as exc:
            conn.rollback()
            raise StoreError(str(exc)) from exc
        finally:
            conn.close()

    def _ensure_schema(self) -> None:
        with self._session() as conn:
            self._create_schema(conn)
        logger.debug("Player schema ready at %s", self.db_path)

    def _create_schema(self, conn: sqlite3.Connection) -> None:
        conn.execute(
            f"""
            CREATE TABLE IF NOT EXISTS players (
                id TEXT PRIMARY KEY,
                name TEXT NOT NULL,
                sport TEXT NOT NULL,
                matches INTEGER DEFAULT 0,
                score INTEGER DEFAULT 0,
                assists INTEGER DEFAULT 0,
                rebounds INTEGER DEFAULT 0,
                wins INTEGER DEFAULT 0,
                created_at TEXT NOT NULL DEFAULT ({_NOW_SQL}),
                updated_at TEXT NOT NULL DEFAULT ({_NOW_SQL})
            )
            """
        )
        conn.execute("CREATE INDEX IF NOT EXISTS idx_players_sport ON players(sport)")
        conn.execute(
            f"""
            CREATE TRIGGER IF NOT EXISTS update_players_updated_at
            AFTER UPDATE ON players
            FOR EACH ROW
            BEGIN
                UPDATE players SET updated_at = {_NOW_SQL} WHERE id = NEW.id;
            END
            """
        )

    def create_player(self, draft: PlayerDraft, *, player_id: Optional[str] = None) -> PlayerRecord:
        player_id = player_id or uuid4().hex
        with self._session() as conn:
            conn.execute(
                """
                INSERT INTO players (id, name, sport, matches, score, assists, rebounds, wins)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    player_id,
                    draft.name,
                    draft.sport,
                    draft.matches,
                    draft.score,
                    draft.assists,
                    draft.rebounds,
                    draft.wins,
                ),
            )
        player = self.get_player(player_id)
        if player is None:  # pragma: no cover
            raise KeyError(f"Player {player_id} not found after insert")
        return player

    def get_player(self, player_id: Optional[str]) -> Optional[PlayerRecord]:
        if not player_id:
            return None
        with self._session() as conn:
            row = conn.execute("SELECT * FROM players WHERE id = ?", (player_id,)).fetchone()
        if row is None:
            return None
        return self._row_to_player(row)

    def fetch_players(self, player_ids: Iterable[str]) -> List[PlayerRecord]:
        """Return the rows whose id is in ``player_ids`` (one query, any order)."""

        ids = list(player_ids)
        if not ids:
            return []
        placeholders = ", ".join("?" for _ in ids)
        with self._session() as conn:
            rows = conn.execute(
                f"SELECT * FROM players WHERE id IN ({placeholders})",
                tuple(ids),
            ).fetchall()
        return [self._row_to_player(row) for row in rows]

    def list_players(self, *, sport: str | None = None) -> List[PlayerRecord]:
        query = "SELECT * FROM players"
        params: list[str] = []
        if sport:
            query += " WHERE sport = ?"
            params.append(sport)
        query += " ORDER BY created_at DESC, rowid DESC"
        with self._session() as conn:
            rows = conn.execute(query, tuple(params)).fetchall()
        return [self._row_to_player(row) for row in rows]

    def update_player(self, player_id: str, update: PlayerUpdate) -> PlayerRecord:
        player = self.get_player(player_id)
        if player is None:
            raise KeyError(f"Player {player_id} not found")

        updated = player.with_overrides(update)
        with self._session() as conn:
            conn.execute(
                """
                UPDATE players
                SET name = ?,
                    sport = ?,
                    matches = ?,
                    score = ?,
                    assists = ?,
                    rebounds = ?,
                    wins = ?
                WHERE id = ?
                """,
                (
                    updated.name,
                    updated.sport,
                    updated.matches,
                    updated.score,
                    updated.assists,
                    updated.rebounds,
                    updated.wins,
                    player_id,
                ),
            )

        stored = self.get_player(player_id)
        if stored is None:  # pragma: no cover
            raise KeyError(f"Player {player_id} not found after update")
        return stored

    def delete_player(self, player_id: str) -> bool:
        with self._session() as conn:
            cursor = conn.execute("DELETE FROM players WHERE id = ?", (player_id,))
            deleted = cursor.rowcount > 0
        return deleted

    def _row_to_player(self, row: sqlite3.Row) -> PlayerRecord:
        def _count(value: Optional[int]) -> int:
            return int(value) if value is not None else 0

        try:
            return PlayerRecord(
                id=row["id"],
                name=row["name"],
                sport=row["sport"],
                matches=_count(row["matches"]),
                score=_count(row["score"]),
                assists=_count(row["assists"]),
                rebounds=_count(row["rebounds"]),
                wins=_count(row["wins"]),
                created_at=datetime.fromisoformat(row["created_at"]),
                updated_at=datetime.fromisoformat(row["updated_at"]),
            )
        except (ValueError, TypeError) as exc:
            raise StoreError(f"Malformed player row {row['id']!r}: {exc}") from exc


__all__ = ["PlayerStore"]
