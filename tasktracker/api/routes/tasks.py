"""Task Routes - owner-scoped CRUD over /api/v1/tasks.

Invariants:
    - Every route requires a bearer token (get_credential_payload)
    - Routes decode input and delegate; ordering of validation, lookup and
      ownership checks belongs to TaskService
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status

from tasktracker.api.dependencies import get_credential_payload, get_task_service
from tasktracker.core.credentials import CredentialPayload
from tasktracker.schemas.task import (
    TaskCreate, TaskListQuery, TaskListResponse, TaskResponse, TaskUpdate,
)
from tasktracker.services.task_service import TaskService

router = APIRouter(prefix="/api/v1/tasks", tags=["tasks"])


@router.post(
    "", response_model=TaskResponse, status_code=status.HTTP_201_CREATED,
)
async def create_task(
    body: TaskCreate,
    payload: CredentialPayload = Depends(get_credential_payload),
    service: TaskService = Depends(get_task_service),
):
    """Create a task owned by the caller."""
    task = await service.create(payload, body)
    return TaskResponse.model_validate(task)


@router.get("", response_model=TaskListResponse)
async def list_tasks(
    limit: int = Query(10),
    offset: int = Query(0),
    payload: CredentialPayload = Depends(get_credential_payload),
    service: TaskService = Depends(get_task_service),
):
    """List the caller's tasks, newest first."""
    query = TaskListQuery(limit=limit, offset=offset)
    tasks = await service.list_owned(payload, query)
    return TaskListResponse(
        tasks=[TaskResponse.model_validate(t) for t in tasks],
        pagination={"limit": limit, "offset": offset},
    )


@router.get("/{task_id}", response_model=TaskResponse)
async def get_task(
    task_id: UUID,
    payload: CredentialPayload = Depends(get_credential_payload),
    service: TaskService = Depends(get_task_service),
):
    """Get one of the caller's tasks."""
    task = await service.get(payload, task_id)
    return TaskResponse.model_validate(task)


@router.put("/{task_id}", response_model=TaskResponse)
async def update_task(
    task_id: UUID,
    body: TaskUpdate,
    payload: CredentialPayload = Depends(get_credential_payload),
    service: TaskService = Depends(get_task_service),
):
    """Replace title, description and done on one of the caller's tasks."""
    task = await service.update(payload, task_id, body)
    return TaskResponse.model_validate(task)


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_task(
    task_id: UUID,
    payload: CredentialPayload = Depends(get_credential_payload),
    service: TaskService = Depends(get_task_service),
):
    """Delete one of the caller's tasks."""
    await service.delete(payload, task_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
