"""Routes handling task CRUD, listing and completion toggling."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Query, Response, status

from ...deps import CurrentUserDependency, require_user_id
from ...schemas import (
    PaginationMeta,
    TaskCreate,
    TaskListResponse,
    TaskMutationResponse,
    TaskRead,
    TaskResponse,
    TaskUpdate,
)
from ...services import TaskQuery, TaskService
from ...services.task_query import DEFAULT_PAGE_SIZE
from ...services.tasks import TaskView

router = APIRouter(prefix="/tasks", tags=["tasks"])

ProjectIdQuery = Annotated[
    str | None,
    Query(
        alias="projectId",
        description='Restrict to one project; the literal "null" selects tasks without a project.',
    ),
]
PriorityQuery = Annotated[int | None, Query(ge=1, le=4, description="Exact priority (1 is most urgent).")]
CompletedQuery = Annotated[bool | None, Query(description="Filter by completion state.")]
SearchQuery = Annotated[
    str | None,
    Query(description="Case-insensitive text matched against title and description."),
]
PageQuery = Annotated[int, Query(ge=1, description="1-based page number.")]
LimitQuery = Annotated[int, Query(ge=0, description="Page size; 0 returns only the totals.")]
SortByQuery = Annotated[str, Query(alias="sortBy", description="Field to order by.")]
SortOrderQuery = Annotated[str, Query(alias="sortOrder", description="asc or desc.")]


def _map_task(view: TaskView) -> TaskRead:
    return TaskRead.from_document(view.task, view.project)


@router.get(
    "",
    response_model=TaskListResponse,
    summary="List tasks with filtering, search, sorting and pagination",
)
async def list_tasks(
    current_user: CurrentUserDependency,
    project_id: ProjectIdQuery = None,
    priority: PriorityQuery = None,
    completed: CompletedQuery = None,
    q: SearchQuery = None,
    page: PageQuery = 1,
    limit: LimitQuery = DEFAULT_PAGE_SIZE,
    sort_by: SortByQuery = "createdAt",
    sort_order: SortOrderQuery = "desc",
) -> TaskListResponse:
    query = TaskQuery(
        project_id=project_id,
        priority=priority,
        completed=completed,
        q=q,
        page=page,
        limit=limit,
        sort_by=sort_by,
        sort_order=sort_order,
    )
    result = await TaskService().list_tasks(require_user_id(current_user), query)
    return TaskListResponse(
        tasks=[_map_task(view) for view in result.items],
        pagination=PaginationMeta(
            page=result.page,
            limit=result.limit,
            total=result.total,
            pages=result.pages,
        ),
    )


@router.get(
    "/{task_id}",
    response_model=TaskResponse,
    summary="Retrieve a task by id",
)
async def get_task(task_id: str, current_user: CurrentUserDependency) -> TaskResponse:
    view = await TaskService().get_task(task_id, require_user_id(current_user))
    return TaskResponse(task=_map_task(view))


@router.post(
    "",
    response_model=TaskMutationResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new task",
)
async def create_task(payload: TaskCreate, current_user: CurrentUserDependency) -> TaskMutationResponse:
    view = await TaskService().create_task(
        owner_id=require_user_id(current_user),
        title=payload.title,
        description=payload.description,
        priority=payload.priority,
        due_date=payload.due_date,
        project_id=payload.project_id,
        tags=payload.tags,
        completed=payload.completed,
    )
    return TaskMutationResponse(message="Task created successfully.", task=_map_task(view))


@router.put(
    "/{task_id}",
    response_model=TaskMutationResponse,
    summary="Update an existing task",
)
async def update_task(
    task_id: str,
    payload: TaskUpdate,
    current_user: CurrentUserDependency,
) -> TaskMutationResponse:
    view = await TaskService().update_task(
        task_id,
        require_user_id(current_user),
        payload.model_dump(exclude_unset=True),
    )
    return TaskMutationResponse(message="Task updated successfully.", task=_map_task(view))


@router.delete(
    "/{task_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a task",
)
async def delete_task(task_id: str, current_user: CurrentUserDependency) -> Response:
    await TaskService().delete_task(task_id, require_user_id(current_user))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.patch(
    "/{task_id}/toggle",
    response_model=TaskMutationResponse,
    summary="Flip a task between completed and open",
)
async def toggle_task(task_id: str, current_user: CurrentUserDependency) -> TaskMutationResponse:
    view = await TaskService().toggle_task(task_id, require_user_id(current_user))
    state = "completed" if view.task.completed else "reopened"
    return TaskMutationResponse(message=f"Task {state}.", task=_map_task(view))
