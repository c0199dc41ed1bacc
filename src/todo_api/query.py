"""
Query engine for the todo collection.

Everything here is a pure function of its arguments: callers hand in the
full collection (in id order) and a TodoQuery, and get back a Page. Steps run
in a fixed order: tag filter, free-text search, priority filter, completion
filter, sort, paginate.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, Optional

from .models import Priority, TodoEntity
from .tags import has_tag


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"

    @classmethod
    def _missing_(cls, value: object) -> Optional["SortDirection"]:
        if isinstance(value, str):
            wanted = value.strip().lower()
            for member in cls:
                if member.value == wanted:
                    return member
        return None


# Sort keys by field. Keys are compared ascending; direction is applied afterwards.
_SORT_KEYS: Dict[str, Callable[[TodoEntity], Any]] = {
    "name": lambda t: t["name"] or "",
    "priority": lambda t: t["priority"].ordinal,
    "duedate": lambda t: t["due_date"],
    "iscomplete": lambda t: t["is_complete"],
    "createddate": lambda t: t["created_date"],
}


@dataclass(frozen=True)
class TodoQuery:
    """
    Parameters for a filtered, sorted, paginated listing.

    None means "no filter" for every filter field. An unrecognized sort_by
    keeps the incoming order.
    """
    search_query: Optional[str] = None
    priority: Optional[Priority] = None
    is_complete: Optional[bool] = None
    tag: Optional[str] = None
    sort_by: Optional[str] = None
    sort_direction: SortDirection = SortDirection.ASC
    page_number: int = 1
    page_size: int = 10


@dataclass(frozen=True)
class Page:
    """One page of results plus the metadata describing where it sits."""
    data: List[TodoEntity]
    page_number: int
    page_size: int
    total_count: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total_count / self.page_size)

    @property
    def has_next_page(self) -> bool:
        return self.page_number < self.total_pages

    @property
    def has_previous_page(self) -> bool:
        return self.page_number > 1


# PUBLIC_INTERFACE
def resolve_sort_field(sort_by: Optional[str]) -> Optional[str]:
    """
    Map a requested sort field onto a known one.

    Matching ignores case and underscores, so 'dueDate', 'due_date' and
    'DUEDATE' all resolve to the same field. Returns None if unrecognized.
    """
    if not sort_by:
        return None
    key = sort_by.strip().replace("_", "").lower()
    return key if key in _SORT_KEYS else None


def _matches_search(todo: TodoEntity, needle: str) -> bool:
    name = (todo["name"] or "").lower()
    description = (todo["description"] or "").lower()
    return needle in name or needle in description


# PUBLIC_INTERFACE
def filter_todos(todos: Iterable[TodoEntity], query: TodoQuery) -> List[TodoEntity]:
    """Apply the tag, search, priority and completion filters in that order."""
    items = list(todos)

    if query.tag is not None:
        items = [t for t in items if has_tag(t["tags"], query.tag)]

    if query.search_query is not None:
        needle = query.search_query.lower()
        items = [t for t in items if _matches_search(t, needle)]

    if query.priority is not None:
        items = [t for t in items if t["priority"] == query.priority]

    if query.is_complete is not None:
        items = [t for t in items if t["is_complete"] == query.is_complete]

    return items


# PUBLIC_INTERFACE
def sort_todos(
    todos: List[TodoEntity],
    sort_by: Optional[str],
    direction: SortDirection = SortDirection.ASC,
) -> List[TodoEntity]:
    """
    Stable sort by a known field.

    Missing dueDates always go last, whatever the direction. An unrecognized
    field returns the items in their incoming order.
    """
    field = resolve_sort_field(sort_by)
    if field is None:
        return list(todos)

    key = _SORT_KEYS[field]
    reverse = direction == SortDirection.DESC

    if field == "duedate":
        dated = [t for t in todos if t["due_date"] is not None]
        undated = [t for t in todos if t["due_date"] is None]
        return sorted(dated, key=key, reverse=reverse) + undated

    return sorted(todos, key=key, reverse=reverse)


# PUBLIC_INTERFACE
def paginate(items: List[TodoEntity], page_number: int, page_size: int) -> Page:
    """
    Slice one page out of items. Page number and size below 1 are clamped to 1;
    a page past the end is empty.
    """
    page_number = max(page_number, 1)
    page_size = max(page_size, 1)
    start = (page_number - 1) * page_size
    return Page(
        data=items[start:start + page_size],
        page_number=page_number,
        page_size=page_size,
        total_count=len(items),
    )


# PUBLIC_INTERFACE
def run_query(todos: Iterable[TodoEntity], query: TodoQuery) -> Page:
    """Filter, sort and paginate the collection according to query."""
    filtered = filter_todos(todos, query)
    ordered = sort_todos(filtered, query.sort_by, query.sort_direction)
    return paginate(ordered, query.page_number, query.page_size)
