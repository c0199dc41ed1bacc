from __future__ import annotations

from fastapi import Request

from .services import TodoService


# PUBLIC_INTERFACE
def get_todo_service(request: Request) -> TodoService:
    """
    Return the TodoService owned by the running application.

    The service and its repository are created in the app lifespan and kept on
    app.state, so every request shares the same store.
    """
    return request.app.state.todo_service
