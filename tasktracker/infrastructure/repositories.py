"""SQL Repositories - SQLAlchemy implementations of the core storage Protocols.

Invariants:
    - Each repository wraps one request-scoped AsyncSession
    - Mutations commit before returning; reads never commit
    - Duplicate username maps to ConflictError; a row vanishing between lookup
      and mutation maps to ResourceNotFoundError
    - Task.owner_id is written by create() only

Design Decisions:
    - Repositories return ORM objects (they satisfy UserLike / TaskLike)
"""

from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from tasktracker.core.domain_types import ResourceType, TaskId, UserId
from tasktracker.core.errors import ConflictError, ResourceNotFoundError
from tasktracker.models.task import Task
from tasktracker.models.user import User


class SqlUserRepository:
    """UserRepository backed by SQLAlchemy."""

    def __init__(self, db: AsyncSession):
        self._db = db

    async def get(self, user_id: UserId) -> User | None:
        return await self._db.get(User, user_id)

    async def get_by_username(self, username: str) -> User | None:
        result = await self._db.execute(
            select(User).where(User.username == username),
        )
        return result.scalar_one_or_none()

    async def create(
        self, username: str, email: str, hashed_password: str,
    ) -> User:
        if await self.get_by_username(username) is not None:
            raise ConflictError(f"Username '{username}' is already taken")
        user = User(
            username=username, email=email, hashed_password=hashed_password,
        )
        self._db.add(user)
        try:
            await self._db.commit()
        except IntegrityError:
            await self._db.rollback()
            raise ConflictError(f"Username '{username}' is already taken")
        await self._db.refresh(user)
        return user


class SqlTaskRepository:
    """TaskRepository backed by SQLAlchemy."""

    def __init__(self, db: AsyncSession):
        self._db = db

    async def get(self, task_id: TaskId) -> Task | None:
        return await self._db.get(Task, task_id)

    async def list_by_owner(
        self, owner_id: UserId, limit: int, offset: int,
    ) -> list[Task]:
        result = await self._db.execute(
            select(Task)
            .where(Task.owner_id == owner_id)
            .order_by(Task.created_at.desc(), Task.id)
            .limit(limit)
            .offset(offset),
        )
        return list(result.scalars().all())

    async def create(
        self, owner_id: UserId, title: str, description: str,
    ) -> Task:
        task = Task(owner_id=owner_id, title=title, description=description)
        self._db.add(task)
        await self._db.commit()
        await self._db.refresh(task)
        return task

    async def update(
        self, task_id: TaskId, title: str, description: str, done: bool,
    ) -> Task:
        task = await self._require(task_id)
        task.title = title
        task.description = description
        task.done = done
        task.updated_at = datetime.now(timezone.utc)
        await self._db.commit()
        await self._db.refresh(task)
        return task

    async def delete(self, task_id: TaskId) -> None:
        task = await self._require(task_id)
        await self._db.delete(task)
        await self._db.commit()

    async def _require(self, task_id: TaskId) -> Task:
        task = await self.get(task_id)
        if task is None:
            raise ResourceNotFoundError(ResourceType.TASK.value, str(task_id))
        return task
