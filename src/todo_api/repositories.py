from __future__ import annotations

import copy
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from threading import RLock
from typing import List, Optional

from .models import TodoEntity
from .schemas import TodoCreate
from .settings import Settings


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


# PUBLIC_INTERFACE
class Repository(ABC):
    """Abstract repository contract for todo storage backends."""

    @abstractmethod
    def create(self, data: TodoCreate) -> TodoEntity:
        """Create and return a new TodoEntity with a freshly assigned id."""

    @abstractmethod
    def get(self, todo_id: int) -> Optional[TodoEntity]:
        """Return a TodoEntity by id, or None if not found."""

    @abstractmethod
    def replace(self, todo_id: int, data: TodoCreate) -> Optional[TodoEntity]:
        """
        Overwrite every mutable field of an existing TodoEntity.
        id and created_date are preserved. Return the updated entity or None if not found.
        """

    @abstractmethod
    def delete(self, todo_id: int) -> bool:
        """Delete a TodoEntity by id. Return True if deleted, False if not found."""

    @abstractmethod
    def list_all(self) -> List[TodoEntity]:
        """Return every TodoEntity in ascending id order."""


class InMemoryRepository(Repository):
    """
    Thread-safe in-memory repository suitable for testing and default runtime.
    Ids are never reused, even after deletes.
    """

    def __init__(self) -> None:
        self._lock = RLock()
        self._items: dict[int, TodoEntity] = {}
        self._next_id = 1

    def _allocate_id(self) -> int:
        with self._lock:
            i = self._next_id
            self._next_id += 1
            return i

    def create(self, data: TodoCreate) -> TodoEntity:
        entity: TodoEntity = {
            "id": self._allocate_id(),
            "name": data.name,
            "description": data.description,
            "is_complete": data.is_complete,
            "created_date": utc_now(),
            "due_date": data.due_date,
            "priority": data.priority,
            "tags": list(data.tags),
        }
        with self._lock:
            self._items[entity["id"]] = entity
        return copy.deepcopy(entity)

    def get(self, todo_id: int) -> Optional[TodoEntity]:
        with self._lock:
            item = self._items.get(todo_id)
            return None if item is None else copy.deepcopy(item)

    def replace(self, todo_id: int, data: TodoCreate) -> Optional[TodoEntity]:
        with self._lock:
            existing = self._items.get(todo_id)
            if existing is None:
                return None

            updated: TodoEntity = {
                "id": existing["id"],
                "name": data.name,
                "description": data.description,
                "is_complete": data.is_complete,
                "created_date": existing["created_date"],
                "due_date": data.due_date,
                "priority": data.priority,
                "tags": list(data.tags),
            }
            self._items[todo_id] = updated
            return copy.deepcopy(updated)

    def delete(self, todo_id: int) -> bool:
        with self._lock:
            return self._items.pop(todo_id, None) is not None

    def list_all(self) -> List[TodoEntity]:
        with self._lock:
            return [copy.deepcopy(self._items[k]) for k in sorted(self._items)]


# PUBLIC_INTERFACE
def build_repository(settings: Settings) -> Repository:
    """
    Return the repository configured by settings.
    - memory: InMemoryRepository
    - sqlite: SQLiteRepository backed by settings.sqlite_db_path
    """
    if settings.persistence_backend == "sqlite":
        from .db import SQLiteRepository

        return SQLiteRepository(settings.sqlite_db_path)
    return InMemoryRepository()
