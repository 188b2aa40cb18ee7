"""JWT Token Maker - issues and verifies signed, expiring access tokens.

Invariants:
    - Tokens are HS256-signed with a symmetric key of at least 32 characters
    - Every token carries jti, sub (user id), username, iat and exp claims
    - verify_token raises AuthenticationError for any failure (bad signature,
      malformed token, missing claim, expiry); only the log says which

Design Decisions:
    - PyJWT validates signature and exp; claim shape is checked here
    - Implements core TokenMaker Protocol; services never import jwt
"""

import logging
import uuid
from datetime import datetime, timedelta, timezone

import jwt

from tasktracker.config import MIN_TOKEN_KEY_LENGTH
from tasktracker.core.credentials import CredentialPayload
from tasktracker.core.domain_types import UserId
from tasktracker.core.errors import AuthenticationError

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"
REQUIRED_CLAIMS = ["jti", "sub", "username", "iat", "exp"]


class JWTTokenMaker:
    """Symmetric-key JWT maker."""

    def __init__(self, secret_key: str):
        if len(secret_key) < MIN_TOKEN_KEY_LENGTH:
            raise ValueError(
                f"invalid key size: must be at least {MIN_TOKEN_KEY_LENGTH} characters",
            )
        self._secret_key = secret_key

    def create_token(
        self, user_id: UserId, username: str, duration: timedelta,
    ) -> tuple[str, CredentialPayload]:
        """Create a token for user_id valid for duration. Returns (token, payload)."""
        issued_at = datetime.now(timezone.utc).replace(microsecond=0)
        payload = CredentialPayload(
            token_id=uuid.uuid4(),
            user_id=user_id,
            username=username,
            issued_at=issued_at,
            expired_at=issued_at + duration,
        )
        claims = {
            "jti": str(payload.token_id),
            "sub": str(payload.user_id),
            "username": payload.username,
            "iat": payload.issued_at,
            "exp": payload.expired_at,
        }
        token = jwt.encode(claims, self._secret_key, algorithm=ALGORITHM)
        return token, payload

    def verify_token(self, token: str) -> CredentialPayload:
        """Verify signature and expiry. Raises AuthenticationError on any failure."""
        try:
            claims = jwt.decode(
                token,
                self._secret_key,
                algorithms=[ALGORITHM],
                options={"require": REQUIRED_CLAIMS},
            )
        except jwt.ExpiredSignatureError:
            raise AuthenticationError("token has expired") from None
        except jwt.PyJWTError as e:
            raise AuthenticationError(f"token is invalid: {e}") from None
        payload = _payload_from_claims(claims)
        if payload.is_expired(datetime.now(timezone.utc)):
            raise AuthenticationError("token has expired")
        return payload


def _payload_from_claims(claims: dict) -> CredentialPayload:
    try:
        return CredentialPayload(
            token_id=uuid.UUID(claims["jti"]),
            user_id=UserId(uuid.UUID(claims["sub"])),
            username=str(claims["username"]),
            issued_at=datetime.fromtimestamp(claims["iat"], timezone.utc),
            expired_at=datetime.fromtimestamp(claims["exp"], timezone.utc),
        )
    except (TypeError, ValueError) as e:
        raise AuthenticationError(f"token claims are malformed: {e}") from None
