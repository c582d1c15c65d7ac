"""SQLite-backed store for players, RSVPs and team labels."""

from __future__ import annotations

import logging
import sqlite3
import threading
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional

from teamgen.models import PlayerRecord

from .base import (
    DuplicateConfirmation,
    NoConfirmedPlayers,
    PersistenceFailure,
    TeamsByLabel,
    check_team_number,
    group_by_team,
)


logger = logging.getLogger(__name__)


class SQLiteTeamStore:
    """Store backed by a single SQLite file.

    Team writes for one game go through :meth:`transaction`, which holds a
    per-game lock in this process and a ``BEGIN IMMEDIATE`` write lock in the
    database, so concurrent runs for the same game never interleave.
    """

    def __init__(self, db_path: Path | str, *, timeout: float = 5.0):
        self.db_path = Path(db_path)
        self.timeout = timeout
        self._locks: Dict[str, threading.Lock] = {}
        self._guard = threading.Lock()
        self._local = threading.local()
        self._ensure_schema()

    def _connect(self) -> sqlite3.Connection:
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(self.db_path, timeout=self.timeout, isolation_level=None)
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA foreign_keys = ON")
        return conn

    def _ensure_schema(self) -> None:
        conn = self._connect()
        try:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS players (
                    id TEXT PRIMARY KEY,
                    name TEXT NOT NULL,
                    skill REAL NOT NULL,
                    goalkeeper INTEGER NOT NULL DEFAULT 0
                )
                """
            )
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS game_players (
                    game_id TEXT NOT NULL,
                    player_id TEXT NOT NULL REFERENCES players(id),
                    team INTEGER,
                    created_at TEXT NOT NULL,
                    PRIMARY KEY (game_id, player_id)
                )
                """
            )
        except sqlite3.Error as exc:
            logger.error("Could not prepare schema in %s: %s", self.db_path, exc)
            raise PersistenceFailure(None, str(exc)) from exc
        finally:
            conn.close()

    def upsert_player(self, player: PlayerRecord) -> None:
        conn = self._connect()
        try:
            conn.execute(
                """
                INSERT INTO players (id, name, skill, goalkeeper) VALUES (?, ?, ?, ?)
                ON CONFLICT(id) DO UPDATE SET
                    name = excluded.name,
                    skill = excluded.skill,
                    goalkeeper = excluded.goalkeeper
                """,
                (player.player_id, player.name, player.skill, int(player.goalkeeper)),
            )
        except sqlite3.Error as exc:
            logger.error("Could not store player %s: %s", player.player_id, exc)
            raise PersistenceFailure(None, str(exc)) from exc
        finally:
            conn.close()

    def get_player(self, player_id: str) -> Optional[PlayerRecord]:
        conn = self._connect()
        try:
            row = conn.execute("SELECT * FROM players WHERE id = ?", (player_id,)).fetchone()
        finally:
            conn.close()
        return None if row is None else self._row_to_player(row)

    def confirm_player(self, game_id: str, player_id: str) -> None:
        conn = self._connect()
        try:
            known = conn.execute("SELECT 1 FROM players WHERE id = ?", (player_id,)).fetchone()
            if known is None:
                raise KeyError(player_id)
            try:
                conn.execute(
                    "INSERT INTO game_players (game_id, player_id, created_at) VALUES (?, ?, ?)",
                    (game_id, player_id, datetime.now(timezone.utc).isoformat()),
                )
            except sqlite3.IntegrityError as exc:
                raise DuplicateConfirmation(game_id, player_id) from exc
        except sqlite3.Error as exc:
            logger.error("Could not confirm %s for game %s: %s", player_id, game_id, exc)
            raise PersistenceFailure(game_id, str(exc)) from exc
        finally:
            conn.close()

    def load_roster(self, game_id: str) -> List[PlayerRecord]:
        rows = self._execute_read(
            """
            SELECT p.* FROM game_players gp
            JOIN players p ON p.id = gp.player_id
            WHERE gp.game_id = ?
            ORDER BY p.skill ASC, gp.created_at ASC
            """,
            (game_id,),
        )
        return [self._row_to_player(row) for row in rows]

    def teams_by_game(self, game_id: str) -> TeamsByLabel:
        rows = self._execute_read(
            """
            SELECT p.*, gp.team FROM game_players gp
            JOIN players p ON p.id = gp.player_id
            WHERE gp.game_id = ?
            ORDER BY p.skill ASC, gp.created_at ASC
            """,
            (game_id,),
        )
        if not rows:
            raise NoConfirmedPlayers(game_id)
        return group_by_team((self._row_to_player(row), row["team"]) for row in rows)

    @contextmanager
    def transaction(self, game_id: str) -> Iterator[None]:
        if getattr(self._local, "conn", None) is not None:
            raise RuntimeError("A team transaction is already open in this thread")

        with self._lock_for(game_id):
            conn = None
            try:
                conn = self._connect()
                conn.execute("BEGIN IMMEDIATE")
                conn.execute("UPDATE game_players SET team = NULL WHERE game_id = ?", (game_id,))
            except sqlite3.Error as exc:
                if conn is not None:
                    conn.close()
                logger.error("Could not open transaction for game %s: %s", game_id, exc)
                raise PersistenceFailure(game_id, str(exc)) from exc

            self._local.conn = conn
            try:
                yield
                conn.execute("COMMIT")
            except sqlite3.Error as exc:
                self._rollback(conn)
                logger.error("Team assignment for game %s rolled back: %s", game_id, exc)
                raise PersistenceFailure(game_id, str(exc)) from exc
            except BaseException:
                self._rollback(conn)
                raise
            finally:
                self._local.conn = None
                conn.close()

    def assign_team(self, player_ids: Iterable[str], game_id: str, team_number: int) -> None:
        """Set ``team`` for the given players of ``game_id``; safe to repeat."""

        check_team_number(team_number)
        ids = list(player_ids)
        if not ids:
            return
        placeholders = ", ".join("?" for _ in ids)
        statement = (
            f"UPDATE game_players SET team = ? WHERE game_id = ? AND player_id IN ({placeholders})"
        )
        params = (team_number, game_id, *ids)

        conn = getattr(self._local, "conn", None)
        if conn is not None:
            conn.execute(statement, params)
            return

        conn = self._connect()
        try:
            conn.execute(statement, params)
        except sqlite3.Error as exc:
            logger.error("Could not store team %d for game %s: %s", team_number, game_id, exc)
            raise PersistenceFailure(game_id, str(exc)) from exc
        finally:
            conn.close()

    def _execute_read(self, query: str, params: tuple) -> List[sqlite3.Row]:
        conn = getattr(self._local, "conn", None)
        if conn is not None:
            return conn.execute(query, params).fetchall()
        conn = self._connect()
        try:
            return conn.execute(query, params).fetchall()
        finally:
            conn.close()

    def _lock_for(self, game_id: str) -> threading.Lock:
        with self._guard:
            return self._locks.setdefault(game_id, threading.Lock())

    @staticmethod
    def _rollback(conn: sqlite3.Connection) -> None:
        try:
            conn.execute("ROLLBACK")
        except sqlite3.Error as exc:
            logger.warning("Rollback failed: %s", exc)

    @staticmethod
    def _row_to_player(row: sqlite3.Row) -> PlayerRecord:
        return PlayerRecord(
            player_id=row["id"],
            name=row["name"],
            skill=row["skill"],
            goalkeeper=bool(row["goalkeeper"]),
        )
