"""API Dependencies - wire request-scoped collaborators into routes.

Invariants:
    - Process resources (token maker, DB manager) come from request.app.state,
      set by the lifespan; nothing is read from module globals
    - get_credential_payload is the only place a bearer token is verified
    - Services are built per request around the request's DB session
"""

from datetime import timedelta

from fastapi import Depends, Header, Request
from sqlalchemy.ext.asyncio import AsyncSession

from tasktracker.config import Settings, get_settings
from tasktracker.core.credentials import CredentialPayload, extract_bearer_token
from tasktracker.core.repository_protocols import TokenMaker
from tasktracker.infrastructure.database import get_db
from tasktracker.infrastructure.repositories import (
    SqlTaskRepository, SqlUserRepository,
)
from tasktracker.services.task_service import TaskService
from tasktracker.services.user_service import UserService


def get_token_maker(request: Request) -> TokenMaker:
    maker = getattr(request.app.state, "token_maker", None)
    if maker is None:
        raise RuntimeError("Token maker not initialized")
    return maker


def get_credential_payload(
    authorization: str | None = Header(None),
    token_maker: TokenMaker = Depends(get_token_maker),
) -> CredentialPayload:
    """Authenticate the request from its Authorization header."""
    token = extract_bearer_token(authorization)
    return token_maker.verify_token(token)


def get_task_service(db: AsyncSession = Depends(get_db)) -> TaskService:
    return TaskService(SqlTaskRepository(db))


def get_user_service(
    db: AsyncSession = Depends(get_db),
    token_maker: TokenMaker = Depends(get_token_maker),
    settings: Settings = Depends(get_settings),
) -> UserService:
    return UserService(
        SqlUserRepository(db),
        token_maker,
        timedelta(minutes=settings.access_token_duration_minutes),
    )
