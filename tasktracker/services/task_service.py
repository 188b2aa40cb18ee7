"""Task Service - owner-scoped task CRUD.

Invariants:
    - Order per operation: validate record -> locate task -> authorize -> store
    - A rejected request (validation, 404, 403) performs no writes
    - The owner of a new task is the credential's subject, never a body field
    - Listing returns only the caller's tasks
"""

import logging
from uuid import UUID

from tasktracker.core.credentials import CredentialPayload
from tasktracker.core.domain_types import ResourceType, TaskId
from tasktracker.core.enforce_ownership import authorize
from tasktracker.core.repository_protocols import TaskLike, TaskRepository
from tasktracker.core.requirements import verify_requirements
from tasktracker.schemas.task import (
    TASK_CREATE_RECORD, TASK_LIST_RECORD, TASK_UPDATE_RECORD,
    TaskCreate, TaskListQuery, TaskUpdate,
)

logger = logging.getLogger(__name__)


class TaskService:

    def __init__(self, tasks: TaskRepository):
        self._tasks = tasks

    async def create(self, payload: CredentialPayload, body: TaskCreate) -> TaskLike:
        verify_requirements(TASK_CREATE_RECORD, body)
        task = await self._tasks.create(
            owner_id=payload.user_id,
            title=body.title,
            description=body.description,
        )
        logger.info(
            "Task created",
            extra={"user_id": str(payload.user_id), "task_id": str(task.id)},
        )
        return task

    async def list_owned(
        self, payload: CredentialPayload, query: TaskListQuery,
    ) -> list[TaskLike]:
        verify_requirements(TASK_LIST_RECORD, query)
        return await self._tasks.list_by_owner(
            payload.user_id, query.limit, query.offset,
        )

    async def get(self, payload: CredentialPayload, task_id: UUID) -> TaskLike:
        return await self._locate_owned(payload, task_id)

    async def update(
        self, payload: CredentialPayload, task_id: UUID, body: TaskUpdate,
    ) -> TaskLike:
        verify_requirements(TASK_UPDATE_RECORD, body)
        await self._locate_owned(payload, task_id)
        task = await self._tasks.update(
            TaskId(task_id), body.title, body.description, body.done,
        )
        logger.info(
            "Task updated",
            extra={"user_id": str(payload.user_id), "task_id": str(task_id)},
        )
        return task

    async def delete(self, payload: CredentialPayload, task_id: UUID) -> None:
        await self._locate_owned(payload, task_id)
        await self._tasks.delete(TaskId(task_id))
        logger.info(
            "Task deleted",
            extra={"user_id": str(payload.user_id), "task_id": str(task_id)},
        )

    async def _locate_owned(self, payload: CredentialPayload, task_id: UUID) -> TaskLike:
        task = await self._tasks.get(TaskId(task_id))
        authorize(payload, task, ResourceType.TASK.value, task_id)
        return task
