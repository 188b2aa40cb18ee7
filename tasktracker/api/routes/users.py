"""User Routes - registration, login and account lookup.

Invariants:
    - POST /users and POST /users/login are public
    - GET /users/{id} requires a bearer token for that same user
"""

from uuid import UUID

from fastapi import APIRouter, Depends, status

from tasktracker.api.dependencies import get_credential_payload, get_user_service
from tasktracker.core.credentials import CredentialPayload
from tasktracker.schemas.user import (
    LoginRequest, LoginResponse, UserCreate, UserResponse,
)
from tasktracker.services.user_service import UserService

router = APIRouter(prefix="/api/v1/users", tags=["users"])


@router.post(
    "", response_model=UserResponse, status_code=status.HTTP_201_CREATED,
)
async def create_user(
    body: UserCreate, service: UserService = Depends(get_user_service),
):
    """Register a new user."""
    user = await service.register(body)
    return UserResponse.model_validate(user)


@router.post("/login", response_model=LoginResponse)
async def login_user(
    body: LoginRequest, service: UserService = Depends(get_user_service),
):
    """Exchange username and password for an access token."""
    token, payload, user = await service.login(body)
    return LoginResponse(
        access_token=token,
        access_token_expires_at=payload.expired_at,
        user=UserResponse.model_validate(user),
    )


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: UUID,
    payload: CredentialPayload = Depends(get_credential_payload),
    service: UserService = Depends(get_user_service),
):
    """Get the caller's own account."""
    user = await service.get(payload, user_id)
    return UserResponse.model_validate(user)
