from __future__ import annotations

from datetime import date, datetime
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from .models import Priority
from .tags import normalize_tags

# Shared type for incoming dueDate which can be a date, datetime, or ISO8601 string
DueDateInput = Union[date, datetime, str]

# camelCase on the wire, snake_case in Python; either is accepted on input
_CAMEL_CONFIG = dict(alias_generator=to_camel, populate_by_name=True)

_DATETIME = TypeAdapter(datetime)


def _parse_due_date(value: Optional[DueDateInput]) -> Optional[date]:
    """
    Internal helper to normalize dueDate input into a calendar date.
    - If value is a string, parse it as an ISO date; a full ISO datetime (offset or "Z" suffix
      allowed) keeps only its date part.
    - If value is a datetime, drop the time component.
    - If value is a date, return as-is.
    """
    if value is None:
        return None

    if isinstance(value, datetime):
        return value.date()

    if isinstance(value, date):
        return value

    if isinstance(value, str):
        s = value.strip()
        if not s:
            return None
        try:
            return date.fromisoformat(s)
        except ValueError:
            try:
                return _DATETIME.validate_python(s).date()
            except ValidationError as e:
                raise ValueError(
                    "Invalid dueDate format. Use an ISO8601 date (e.g., '2025-01-31')."
                ) from e

    raise ValueError("Invalid type for dueDate; expected an ISO8601 date string.")


def _parse_priority(value: Union[Priority, str, None]) -> Priority:
    """Resolve priority names case-insensitively; null means the default."""
    if value is None:
        return Priority.MEDIUM
    if isinstance(value, Priority):
        return value
    if isinstance(value, str):
        try:
            return Priority(value)
        except ValueError as e:
            raise ValueError("priority must be one of 'Low', 'Medium', 'High'") from e
    raise ValueError("Invalid type for priority; expected 'Low', 'Medium' or 'High'.")


# PUBLIC_INTERFACE
def parse_priority_param(value: Optional[str]) -> Optional[Priority]:
    """Parse an optional priority query value; raises ValueError when unrecognized."""
    if value is None:
        return None
    return _parse_priority(value)


# PUBLIC_INTERFACE
class TodoCreate(BaseModel):
    """
    Schema carrying the full set of writable Todo fields.

    Used both for POST (create) and PUT (full replacement): any field omitted
    from the request takes its default here, so a PUT never keeps old values.
    """

    model_config = ConfigDict(
        **_CAMEL_CONFIG,
        json_schema_extra={
            "example": {
                "name": "Buy milk",
                "description": "Semi-skimmed, two bottles",
                "isComplete": False,
                "dueDate": "2025-02-01",
                "priority": "High",
                "tags": ["Shopping", " Personal "],
            }
        },
    )

    name: str = Field(..., description="Short name of the todo item", min_length=1, max_length=200)
    description: Optional[str] = Field(default=None, description="Optional detailed description")
    is_complete: bool = Field(default=False, description="Completion status flag")
    due_date: Optional[date] = Field(
        default=None,
        description="Due date of the todo item. Accepts an ISO8601 date; a datetime keeps only its date",
    )
    priority: Priority = Field(default=Priority.MEDIUM, description="One of Low, Medium, High")
    tags: List[str] = Field(
        default_factory=list,
        description="Tags; stored trimmed, lower-cased and de-duplicated",
    )

    @field_validator("name", mode="before")
    @classmethod
    def validate_name(cls, v: Optional[str]) -> str:
        """
        Strip whitespace and enforce 1..200 length.
        """
        if v is None:
            raise ValueError("name is required")
        if not isinstance(v, str):
            raise ValueError("name must be a string")
        s = v.strip()
        if not (1 <= len(s) <= 200):
            raise ValueError("name length must be between 1 and 200 characters")
        return s

    @field_validator("is_complete", mode="before")
    @classmethod
    def default_is_complete(cls, v: Optional[bool]) -> bool:
        """
        Treat an explicit null as the default (false).
        """
        return False if v is None else v

    @field_validator("due_date", mode="before")
    @classmethod
    def parse_due_date(cls, v: Optional[DueDateInput]) -> Optional[date]:
        """
        Normalize dueDate from str/date/datetime to date.
        """
        return _parse_due_date(v)

    @field_validator("priority", mode="before")
    @classmethod
    def parse_priority(cls, v: Union[Priority, str, None]) -> Priority:
        return _parse_priority(v)

    @field_validator("tags", mode="before")
    @classmethod
    def validate_tags(cls, v: Optional[List[str]]) -> List[str]:
        """
        Normalize tags; null means no tags.
        """
        if v is None:
            return []
        if isinstance(v, str) or not isinstance(v, (list, tuple, set)):
            raise ValueError("tags must be a list of strings")
        if not all(isinstance(t, str) for t in v):
            raise ValueError("tags must be a list of strings")
        return normalize_tags(v)


# PUBLIC_INTERFACE
class TodoOut(BaseModel):
    """
    Schema returned by the API for a Todo item.
    """

    model_config = ConfigDict(
        **_CAMEL_CONFIG,
        json_schema_extra={
            "example": {
                "id": 123,
                "name": "Buy milk",
                "description": "Semi-skimmed, two bottles",
                "isComplete": False,
                "createdDate": "2025-01-25T10:15:30.123456Z",
                "dueDate": "2025-02-01",
                "priority": "High",
                "tags": ["shopping", "personal"],
            }
        },
    )

    id: int = Field(..., description="Unique identifier of the todo item")
    name: str = Field(..., description="Short name of the todo item")
    description: Optional[str] = Field(default=None, description="Optional detailed description")
    is_complete: bool = Field(..., description="Completion status flag")
    created_date: datetime = Field(..., description="Creation timestamp (UTC)")
    due_date: Optional[date] = Field(default=None, description="Due date as an ISO8601 date")
    priority: Priority = Field(..., description="One of Low, Medium, High")
    tags: List[str] = Field(default_factory=list, description="Normalized tags")


# PUBLIC_INTERFACE
class TodoPage(BaseModel):
    """
    Envelope for paginated list responses.
    """

    model_config = ConfigDict(**_CAMEL_CONFIG)

    data: List[TodoOut] = Field(..., description="Todo items on this page")
    page_number: int = Field(..., description="1-based page number actually served")
    page_size: int = Field(..., description="Page size actually applied")
    total_count: int = Field(..., description="Number of items matching the filters")
    total_pages: int = Field(..., description="ceil(totalCount / pageSize)")
    has_next_page: bool = Field(..., description="Whether a later page has items")
    has_previous_page: bool = Field(..., description="Whether this is not the first page")
