from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response, status

from ..dependencies import get_todo_service
from ..query import SortDirection, TodoQuery
from ..schemas import TodoCreate, TodoOut, TodoPage, parse_priority_param
from ..services import TodoService

router = APIRouter(
    prefix="/todoitems",
    tags=["todos"],
)


def _page_size_default(request: Request) -> int:
    return request.app.state.settings.default_page_size


# PUBLIC_INTERFACE
@router.get(
    "",
    response_model=TodoPage,
    summary="List Todos",
    description=(
        "List todos with optional filters, sorting and pagination.\n\n"
        "Query parameters:\n"
        "- pageNumber: 1-based page number (values below 1 are treated as 1)\n"
        "- pageSize: items per page (values below 1 are treated as 1)\n"
        "- sortBy: one of name, priority, dueDate, isComplete, createdDate; "
        "anything else keeps id order\n"
        "- sortDirection: asc (default) or desc\n"
        "- priority: Low, Medium or High\n"
        "- isComplete: filter by completion status\n"
        "- searchQuery: case-insensitive substring of name or description\n"
        "- tag: only todos carrying this tag\n\n"
        "Returns a page envelope with data and paging metadata."
    ),
    responses={
        200: {"description": "Page retrieved successfully"},
        400: {"description": "Invalid query parameters"},
    },
)
def list_todos(
    request: Request,
    page_number: int = Query(1, alias="pageNumber", description="1-based page number"),
    page_size: Optional[int] = Query(None, alias="pageSize", description="Items per page"),
    sort_by: Optional[str] = Query(None, alias="sortBy", description="Field to sort by"),
    sort_direction: Optional[str] = Query(None, alias="sortDirection", description="'asc' or 'desc'"),
    priority: Optional[str] = Query(None, description="Filter by priority: Low, Medium, High"),
    is_complete: Optional[bool] = Query(None, alias="isComplete", description="Filter by completion status"),
    search_query: Optional[str] = Query(None, alias="searchQuery", description="Search text for name/description"),
    tag: Optional[str] = Query(None, description="Filter by tag"),
    service: TodoService = Depends(get_todo_service),
) -> TodoPage:
    """
    List todos with pagination and filters.
    """
    try:
        direction = SortDirection(sort_direction) if sort_direction else SortDirection.ASC
    except ValueError:
        raise HTTPException(status_code=400, detail="sortDirection must be 'asc' or 'desc'")

    try:
        priority_filter = parse_priority_param(priority)
    except ValueError:
        raise HTTPException(status_code=400, detail="priority must be one of 'Low', 'Medium', 'High'")

    query = TodoQuery(
        search_query=search_query,
        priority=priority_filter,
        is_complete=is_complete,
        tag=tag,
        sort_by=sort_by,
        sort_direction=direction,
        page_number=page_number,
        page_size=page_size if page_size is not None else _page_size_default(request),
    )
    page = service.query(query)
    return TodoPage(
        data=[TodoOut(**t) for t in page.data],
        page_number=page.page_number,
        page_size=page.page_size,
        total_count=page.total_count,
        total_pages=page.total_pages,
        has_next_page=page.has_next_page,
        has_previous_page=page.has_previous_page,
    )


# PUBLIC_INTERFACE
@router.get(
    "/all",
    response_model=List[TodoOut],
    summary="List All Todos",
    description="Return every todo in id order, without paging.",
)
def list_all_todos(service: TodoService = Depends(get_todo_service)) -> List[TodoOut]:
    return [TodoOut(**t) for t in service.list_all()]


# PUBLIC_INTERFACE
@router.get(
    "/complete",
    response_model=List[TodoOut],
    summary="List Completed Todos",
    description="Return every completed todo in id order.",
)
def list_complete_todos(service: TodoService = Depends(get_todo_service)) -> List[TodoOut]:
    return [TodoOut(**t) for t in service.list_complete()]


# PUBLIC_INTERFACE
@router.get(
    "/tag/{tag}",
    response_model=List[TodoOut],
    summary="List Todos By Tag",
    description="Return every todo carrying the tag. Matching ignores case and surrounding whitespace.",
)
def list_todos_by_tag(tag: str, service: TodoService = Depends(get_todo_service)) -> List[TodoOut]:
    return [TodoOut(**t) for t in service.list_by_tag(tag)]


# PUBLIC_INTERFACE
@router.get(
    "/{todo_id}",
    response_model=TodoOut,
    summary="Get Todo",
    description="Get a single Todo item by ID.",
    responses={
        200: {"description": "Todo found"},
        404: {"description": "Todo not found"},
    },
)
def get_todo(todo_id: int, service: TodoService = Depends(get_todo_service)) -> TodoOut:
    """
    Retrieve a single Todo item by its ID.
    """
    return TodoOut(**service.get(todo_id))


# PUBLIC_INTERFACE
@router.post(
    "",
    response_model=TodoOut,
    status_code=status.HTTP_201_CREATED,
    summary="Create Todo",
    description="Create a new Todo item and return the created resource with its Location.",
    responses={
        201: {"description": "Todo created successfully"},
        400: {"description": "Validation error"},
    },
)
def create_todo(
    payload: TodoCreate,
    request: Request,
    response: Response,
    service: TodoService = Depends(get_todo_service),
) -> TodoOut:
    """
    Create a new Todo.
    """
    created = service.create(payload)
    response.headers["Location"] = request.app.url_path_for("get_todo", todo_id=str(created["id"]))
    return TodoOut(**created)


# PUBLIC_INTERFACE
@router.put(
    "/{todo_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Replace Todo",
    description=(
        "Replace an existing Todo item. Any fields omitted will be set to their default/null "
        "equivalent as per the schema. id and createdDate are kept."
    ),
    responses={
        204: {"description": "Todo updated"},
        400: {"description": "Validation error"},
        404: {"description": "Todo not found"},
    },
)
def put_todo(todo_id: int, payload: TodoCreate, service: TodoService = Depends(get_todo_service)) -> Response:
    """
    Full update (replace) semantics.
    """
    service.update(todo_id, payload)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# PUBLIC_INTERFACE
@router.delete(
    "/{todo_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Todo",
    description="Delete a Todo item by ID.",
    responses={
        204: {"description": "Todo deleted"},
        404: {"description": "Todo not found"},
    },
)
def delete_todo(todo_id: int, service: TodoService = Depends(get_todo_service)) -> Response:
    """
    Delete a Todo. Returns 204 on success, 404 if not found.
    """
    service.delete(todo_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
