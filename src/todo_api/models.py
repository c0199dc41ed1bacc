from __future__ import annotations

from datetime import date, datetime
from enum import Enum
from typing import List, Optional, TypedDict


# PUBLIC_INTERFACE
class Priority(str, Enum):
    """Todo priority. Serialized by name; ordered Low < Medium < High."""

    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"

    @classmethod
    def _missing_(cls, value: object) -> Optional["Priority"]:
        # Accept names regardless of case ("low", "HIGH")
        if isinstance(value, str):
            wanted = value.strip().lower()
            for member in cls:
                if member.value.lower() == wanted:
                    return member
        return None

    @property
    def ordinal(self) -> int:
        return _PRIORITY_ORDER[self]


_PRIORITY_ORDER = {Priority.LOW: 0, Priority.MEDIUM: 1, Priority.HIGH: 2}


# PUBLIC_INTERFACE
class TodoEntity(TypedDict):
    """
    A lightweight domain model representing a Todo item as held by the
    storage backends.

    Fields:
    - id: Unique integer identifier assigned by the repository
    - name: Short name (trimmed on input via schemas)
    - description: Optional detailed description
    - is_complete: Boolean completion flag
    - created_date: UTC creation timestamp, never modified after create
    - due_date: Optional calendar date
    - priority: Priority enum member
    - tags: Normalized, de-duplicated tag strings
    """

    id: int
    name: str
    description: Optional[str]
    is_complete: bool
    created_date: datetime
    due_date: Optional[date]
    priority: Priority
    tags: List[str]
