"""User Service - registration, login and account lookup.

Invariants:
    - Request records are validated before any storage call
    - Login failures (unknown user, wrong password) are one AuthenticationError
    - Only the account owner may read the account
"""

import logging
from datetime import timedelta
from uuid import UUID

from tasktracker.core.credentials import CredentialPayload
from tasktracker.core.domain_types import ResourceType, UserId
from tasktracker.core.enforce_ownership import authorize
from tasktracker.core.errors import AuthenticationError
from tasktracker.core.repository_protocols import (
    TokenMaker, UserLike, UserRepository,
)
from tasktracker.core.requirements import verify_requirements
from tasktracker.infrastructure.passwords import check_password, hash_password
from tasktracker.schemas.user import (
    LOGIN_RECORD, USER_CREATE_RECORD, LoginRequest, UserCreate,
)

logger = logging.getLogger(__name__)


class UserService:

    def __init__(
        self,
        users: UserRepository,
        token_maker: TokenMaker,
        access_token_duration: timedelta,
    ):
        self._users = users
        self._token_maker = token_maker
        self._access_token_duration = access_token_duration

    async def register(self, body: UserCreate) -> UserLike:
        verify_requirements(USER_CREATE_RECORD, body)
        user = await self._users.create(
            username=body.username,
            email=body.email,
            hashed_password=hash_password(body.password),
        )
        logger.info("User registered", extra={"user_id": str(user.id)})
        return user

    async def login(self, body: LoginRequest) -> tuple[str, CredentialPayload, UserLike]:
        """Check credentials and issue an access token."""
        verify_requirements(LOGIN_RECORD, body)
        user = await self._users.get_by_username(body.username)
        if user is None or not check_password(body.password, user.hashed_password):
            raise AuthenticationError("incorrect username or password")
        token, payload = self._token_maker.create_token(
            UserId(user.id), user.username, self._access_token_duration,
        )
        logger.info("User logged in", extra={"user_id": str(user.id)})
        return token, payload, user

    async def get(self, payload: CredentialPayload, user_id: UUID) -> UserLike:
        user = await self._users.get(UserId(user_id))
        authorize(payload, user, ResourceType.USER.value, user_id)
        return user
