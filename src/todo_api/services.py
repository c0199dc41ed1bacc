"""Todo entity operations on top of a repository."""
from __future__ import annotations

import logging
from typing import List

from .errors import TodoNotFoundError
from .models import TodoEntity
from .query import Page, TodoQuery, run_query
from .repositories import Repository
from .schemas import TodoCreate
from .tags import has_tag, unique_tags_across

logger = logging.getLogger(__name__)


class TodoService:
    """
    Orchestrates todo operations between the HTTP layer and the repository.

    Lookups that miss raise TodoNotFoundError; list and query operations are
    evaluated in memory over the repository's id-ordered collection.
    """

    def __init__(self, repository: Repository) -> None:
        self._repo = repository

    def create(self, data: TodoCreate) -> TodoEntity:
        """Persist a new todo and return it with its assigned id."""
        todo = self._repo.create(data)
        logger.info("Created todo %s", todo["id"])
        return todo

    def get(self, todo_id: int) -> TodoEntity:
        todo = self._repo.get(todo_id)
        if todo is None:
            raise TodoNotFoundError(todo_id)
        return todo

    def update(self, todo_id: int, data: TodoCreate) -> TodoEntity:
        """Replace every mutable field of a todo; omitted fields take their defaults."""
        todo = self._repo.replace(todo_id, data)
        if todo is None:
            raise TodoNotFoundError(todo_id)
        logger.info("Updated todo %s", todo_id)
        return todo

    def delete(self, todo_id: int) -> None:
        if not self._repo.delete(todo_id):
            raise TodoNotFoundError(todo_id)
        logger.info("Deleted todo %s", todo_id)

    def list_all(self) -> List[TodoEntity]:
        return self._repo.list_all()

    def list_complete(self) -> List[TodoEntity]:
        return [t for t in self._repo.list_all() if t["is_complete"]]

    def list_by_tag(self, tag: str) -> List[TodoEntity]:
        return [t for t in self._repo.list_all() if has_tag(t["tags"], tag)]

    def list_tags(self) -> List[str]:
        return unique_tags_across(self._repo.list_all())

    def query(self, query: TodoQuery) -> Page:
        return run_query(self._repo.list_all(), query)
