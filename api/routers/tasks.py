"""Task endpoints.

Mutations return an empty 200 and don't distinguish a missing task from a
successful write. Handlers are plain functions so FastAPI runs the blocking
SQLite calls on its threadpool.
"""

from typing import Annotated, List, Optional

from fastapi import APIRouter, Path, Query, Response, status

from api.dependencies import ServicesDep
from api.schemas import (
    SQLITE_INT_MAX,
    SQLITE_INT_MIN,
    ReorderRequest,
    TaskRequest,
    TaskResponse,
)
from logger import get_logger
from models.task import TaskPosition

logger = get_logger()

router = APIRouter()

TaskId = Annotated[
    int, Path(ge=SQLITE_INT_MIN, le=SQLITE_INT_MAX, description="Task ID")
]


@router.get("/tasks", response_model=List[TaskResponse])
def list_tasks(
    services: ServicesDep,
    category_id: Annotated[
        Optional[int],
        Query(
            ge=SQLITE_INT_MIN,
            le=SQLITE_INT_MAX,
            description="Only return tasks in this category",
        ),
    ] = None,
):
    """List open tasks, ordered by category then position."""
    return [
        TaskResponse.model_validate(task)
        for task in services.tasks.find_all(category_id=category_id)
    ]


@router.post(
    "/tasks", response_model=TaskResponse, status_code=status.HTTP_201_CREATED
)
def create_task(request: TaskRequest, services: ServicesDep):
    """Create a task at the end of its sibling group."""
    task = services.tasks.create(
        title=request.title,
        description=request.description,
        category_id=request.category_id,
        parent_id=request.parent_id,
    )
    logger.debug(f"Created task {task.id} (category {task.category_id}, order {task.order})")
    return TaskResponse.model_validate(task)


@router.post("/tasks/reorder")
def reorder_tasks(request: ReorderRequest, services: ServicesDep):
    """Set each listed task's order to its position in the list, and its parent."""
    services.tasks.reorder(
        [TaskPosition(id=entry.id, parent_id=entry.parent_id) for entry in request.tasks]
    )
    logger.debug(f"Reordered {len(request.tasks)} task(s)")
    return Response(status_code=status.HTTP_200_OK)


@router.put("/tasks/{task_id}")
def update_task(task_id: TaskId, request: TaskRequest, services: ServicesDep):
    """Overwrite a task; its direct subtasks follow it to the new category."""
    services.tasks.update(
        task_id,
        title=request.title,
        description=request.description,
        category_id=request.category_id,
        parent_id=request.parent_id,
    )
    logger.debug(f"Updated task {task_id}")
    return Response(status_code=status.HTTP_200_OK)


@router.post("/tasks/{task_id}/complete")
def complete_task(task_id: TaskId, services: ServicesDep):
    """Complete a task. The task and all of its subtasks are deleted."""
    services.tasks.complete(task_id)
    logger.debug(f"Completed task {task_id}")
    return Response(status_code=status.HTTP_200_OK)
