from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends

from ..dependencies import get_todo_service
from ..services import TodoService

router = APIRouter(
    prefix="/tags",
    tags=["tags"],
)


# PUBLIC_INTERFACE
@router.get(
    "",
    response_model=List[str],
    summary="List Tags",
    description="Return every distinct tag in use, sorted ascending.",
)
def list_tags(service: TodoService = Depends(get_todo_service)) -> List[str]:
    return service.list_tags()
