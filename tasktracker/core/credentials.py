"""Credentials - authenticated identity carried through one request.

Invariants:
    - CredentialPayload is immutable and request-scoped (never persisted)
    - extract_bearer_token raises AuthenticationError for every malformed header;
      the client-facing message is the same for all of them

Design Decisions:
    - Header parsing lives in core (pure) so the shell dependency only wires
      FastAPI's Header() to it
"""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from tasktracker.core.domain_types import UserId
from tasktracker.core.errors import AuthenticationError

AUTHORIZATION_TYPE_BEARER = "bearer"


@dataclass(frozen=True)
class CredentialPayload:
    """Identity extracted from a verified access token."""
    token_id: UUID
    user_id: UserId
    username: str
    issued_at: datetime
    expired_at: datetime

    def is_expired(self, now: datetime) -> bool:
        return now >= self.expired_at


def extract_bearer_token(authorization_header: str | None) -> str:
    """Return the token from an `Authorization: Bearer <token>` header value."""
    if not authorization_header:
        raise AuthenticationError("authorization header is not provided")

    fields = authorization_header.split()
    if len(fields) < 2:
        raise AuthenticationError("invalid authorization header format")

    authorization_type = fields[0].lower()
    if authorization_type != AUTHORIZATION_TYPE_BEARER:
        raise AuthenticationError(
            f"unsupported authorization type {authorization_type}",
        )
    return fields[1]
