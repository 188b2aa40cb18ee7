"""Boundary Protocols - contracts between core and shell.

Invariants:
    - Core NEVER imports from shell; dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by shell via constructor injection

Design Decisions:
    - Protocol over ABC: structural subtyping, test fakes need no inheritance
    - Async in Protocol: implementations do IO; the pure functions that judge
      their results (requirements, enforce_ownership) stay synchronous
"""

from datetime import datetime, timedelta
from typing import Protocol
from uuid import UUID

from tasktracker.core.credentials import CredentialPayload
from tasktracker.core.domain_types import TaskId, UserId


class UserLike(Protocol):
    """Structural contract for User objects returned by UserRepository."""
    id: UUID
    username: str
    email: str
    hashed_password: str
    created_at: datetime

    @property
    def owner_id(self) -> UUID: ...


class TaskLike(Protocol):
    """Structural contract for Task objects returned by TaskRepository."""
    id: UUID
    owner_id: UUID
    title: str
    description: str
    done: bool
    created_at: datetime
    updated_at: datetime


class UserRepository(Protocol):
    """Contract for user persistence - implemented by shell."""
    async def get(self, user_id: UserId) -> UserLike | None: ...
    async def get_by_username(self, username: str) -> UserLike | None: ...
    async def create(
        self, username: str, email: str, hashed_password: str,
    ) -> UserLike: ...


class TaskRepository(Protocol):
    """Contract for task persistence - implemented by shell."""
    async def get(self, task_id: TaskId) -> TaskLike | None: ...
    async def list_by_owner(
        self, owner_id: UserId, limit: int, offset: int,
    ) -> list[TaskLike]: ...
    async def create(
        self, owner_id: UserId, title: str, description: str,
    ) -> TaskLike: ...
    async def update(
        self, task_id: TaskId, title: str, description: str, done: bool,
    ) -> TaskLike: ...
    async def delete(self, task_id: TaskId) -> None: ...


class TokenMaker(Protocol):
    """Contract for access token issuance and verification."""
    def create_token(
        self, user_id: UserId, username: str, duration: timedelta,
    ) -> tuple[str, CredentialPayload]: ...
    def verify_token(self, token: str) -> CredentialPayload: ...
