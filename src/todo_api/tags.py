"""
Tag normalization and tag-set helpers.

Stored tags are always in normalized form (trimmed, lower-cased), so every
comparison normalizes the probe and then tests exact membership.
"""
from __future__ import annotations

from typing import Iterable, List, Mapping, Optional


# PUBLIC_INTERFACE
def normalize_tag(raw: str) -> str:
    """Return the trimmed, lower-cased form of a tag."""
    return raw.strip().lower()


# PUBLIC_INTERFACE
def add_tag(tags: List[str], raw: str) -> None:
    """Insert the normalized tag unless it is empty or already present."""
    tag = normalize_tag(raw)
    if tag and tag not in tags:
        tags.append(tag)


# PUBLIC_INTERFACE
def remove_tag(tags: List[str], raw: str) -> None:
    """Remove the normalized tag if present. Removing an absent tag is a no-op."""
    tag = normalize_tag(raw)
    if tag in tags:
        tags.remove(tag)


# PUBLIC_INTERFACE
def has_tag(tags: Iterable[str], raw: str) -> bool:
    """Report whether the normalized tag is in the tag set."""
    return normalize_tag(raw) in tags


# PUBLIC_INTERFACE
def normalize_tags(raws: Optional[Iterable[str]]) -> List[str]:
    """
    Build a normalized, de-duplicated tag list from raw input.

    None yields an empty list. Empty and all-whitespace entries are dropped.
    """
    tags: List[str] = []
    for raw in raws or ():
        add_tag(tags, raw)
    return tags


# PUBLIC_INTERFACE
def unique_tags_across(todos: Iterable[Mapping]) -> List[str]:
    """Return every distinct tag used by the given todos, sorted ascending."""
    found = set()
    for todo in todos:
        found.update(todo.get("tags") or ())
    return sorted(found)
