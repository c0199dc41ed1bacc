from __future__ import annotations

import json
import os
import sqlite3
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import date, datetime
from typing import Generator, List, Optional

from .models import Priority, TodoEntity
from .repositories import Repository, utc_now
from .schemas import TodoCreate


@dataclass(frozen=True)
class _Cols:
    table: str = "todos"
    id: str = "id"
    name: str = "name"
    description: str = "description"
    is_complete: str = "is_complete"
    created_date: str = "created_date"
    due_date: str = "due_date"
    priority: str = "priority"
    tags: str = "tags"


_COLS = _Cols()

# SQLite INTEGER is a signed 64-bit value; larger ids cannot exist in the table
_MIN_ROWID = -(2 ** 63)
_MAX_ROWID = 2 ** 63 - 1


def _storable_id(todo_id: int) -> bool:
    return _MIN_ROWID <= todo_id <= _MAX_ROWID


class SQLiteRepository(Repository):
    """
    Lightweight SQLite repository implementing the Repository interface.

    Tags are stored as a JSON array in a text column; dates as ISO8601 text.
    """

    def __init__(self, db_path: str) -> None:
        os.makedirs(os.path.dirname(db_path) or ".", exist_ok=True)
        self._db_path = db_path
        self._init_db()

    @contextmanager
    def _conn(self) -> Generator[sqlite3.Connection, None, None]:
        conn = sqlite3.connect(self._db_path)
        conn.row_factory = sqlite3.Row
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def _init_db(self) -> None:
        with self._conn() as conn:
            # AUTOINCREMENT keeps deleted ids from being handed out again
            conn.execute(
                f"""
                CREATE TABLE IF NOT EXISTS {_COLS.table} (
                    {_COLS.id} INTEGER PRIMARY KEY AUTOINCREMENT,
                    {_COLS.name} TEXT NOT NULL,
                    {_COLS.description} TEXT NULL,
                    {_COLS.is_complete} INTEGER NOT NULL DEFAULT 0,
                    {_COLS.created_date} TEXT NOT NULL,
                    {_COLS.due_date} TEXT NULL,
                    {_COLS.priority} TEXT NOT NULL DEFAULT '{Priority.MEDIUM.value}',
                    {_COLS.tags} TEXT NOT NULL DEFAULT '[]'
                )
                """
            )
            conn.execute(
                f"CREATE INDEX IF NOT EXISTS idx_{_COLS.table}_is_complete ON {_COLS.table}({_COLS.is_complete})"
            )

    def _row_to_entity(self, row: sqlite3.Row) -> TodoEntity:
        due = row[_COLS.due_date]
        return {
            "id": int(row[_COLS.id]),
            "name": str(row[_COLS.name]),
            "description": row[_COLS.description],
            "is_complete": bool(row[_COLS.is_complete]),
            "created_date": datetime.fromisoformat(row[_COLS.created_date]),
            "due_date": date.fromisoformat(due) if due else None,
            "priority": Priority(row[_COLS.priority]),
            "tags": list(json.loads(row[_COLS.tags] or "[]")),
        }

    def _fetch(self, conn: sqlite3.Connection, todo_id: int) -> Optional[sqlite3.Row]:
        return conn.execute(
            f"SELECT * FROM {_COLS.table} WHERE {_COLS.id} = ?", (todo_id,)
        ).fetchone()

    @staticmethod
    def _field_values(data: TodoCreate) -> tuple:
        return (
            data.name,
            data.description,
            1 if data.is_complete else 0,
            data.due_date.isoformat() if data.due_date else None,
            data.priority.value,
            json.dumps(list(data.tags)),
        )

    def create(self, data: TodoCreate) -> TodoEntity:
        with self._conn() as conn:
            cur = conn.execute(
                f"""
                INSERT INTO {_COLS.table} ({_COLS.name}, {_COLS.description}, {_COLS.is_complete},
                    {_COLS.due_date}, {_COLS.priority}, {_COLS.tags}, {_COLS.created_date})
                VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                (*self._field_values(data), utc_now().isoformat()),
            )
            row = self._fetch(conn, cur.lastrowid)
            assert row is not None
            return self._row_to_entity(row)

    def get(self, todo_id: int) -> Optional[TodoEntity]:
        if not _storable_id(todo_id):
            return None
        with self._conn() as conn:
            row = self._fetch(conn, todo_id)
            return self._row_to_entity(row) if row else None

    def replace(self, todo_id: int, data: TodoCreate) -> Optional[TodoEntity]:
        if not _storable_id(todo_id):
            return None
        with self._conn() as conn:
            cur = conn.execute(
                f"""
                UPDATE {_COLS.table}
                SET {_COLS.name} = ?, {_COLS.description} = ?, {_COLS.is_complete} = ?,
                    {_COLS.due_date} = ?, {_COLS.priority} = ?, {_COLS.tags} = ?
                WHERE {_COLS.id} = ?
                """,
                (*self._field_values(data), todo_id),
            )
            if cur.rowcount == 0:
                return None
            row = self._fetch(conn, todo_id)
            assert row is not None
            return self._row_to_entity(row)

    def delete(self, todo_id: int) -> bool:
        if not _storable_id(todo_id):
            return False
        with self._conn() as conn:
            cur = conn.execute(f"DELETE FROM {_COLS.table} WHERE {_COLS.id} = ?", (todo_id,))
            return cur.rowcount > 0

    def list_all(self) -> List[TodoEntity]:
        with self._conn() as conn:
            rows = conn.execute(
                f"SELECT * FROM {_COLS.table} ORDER BY {_COLS.id} ASC"
            ).fetchall()
            return [self._row_to_entity(r) for r in rows]
