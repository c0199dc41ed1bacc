from __future__ import annotations


class TodoServiceError(Exception):
    """Base exception for todo service errors."""


# PUBLIC_INTERFACE
class TodoNotFoundError(TodoServiceError):
    """Raised when a referenced todo id does not exist."""

    def __init__(self, todo_id: int) -> None:
        self.todo_id = todo_id
        super().__init__(f"Todo with ID {todo_id} not found")
