"""Ownership Enforcement - existence then ownership, for every owned-resource operation.

Invariants:
    - All functions are PURE: no IO, no async, no DB, no side effects
    - Existence is checked before ownership: a missing resource is always
      ResourceNotFoundError, whoever asks
    - Owner mismatch is always OwnershipError; nothing is filtered silently
    - Raised errors record the AccessStage at which the request was rejected

Design Decisions:
    - The caller performs the lookup (storage is shell) and hands the result,
      possibly None, to authorize()
    - Exceptions rather than error dicts: the FastAPI handler maps them to
      404 / 403 envelopes directly
"""

from typing import Protocol
from uuid import UUID

from tasktracker.core.credentials import CredentialPayload
from tasktracker.core.domain_types import AccessStage
from tasktracker.core.errors import (
    ErrorContext, OwnershipError, ResourceNotFoundError,
)


class OwnedResource(Protocol):
    """Anything with a single, immutable owner."""
    @property
    def owner_id(self) -> UUID: ...


def check_resource_exists(
    resource: OwnedResource | None, resource_type: str, resource_id: UUID,
) -> AccessStage:
    """Stage 1: the resource must exist."""
    if resource is None:
        raise ResourceNotFoundError(resource_type, str(resource_id))
    return AccessStage.RESOURCE_LOCATED


def check_ownership(
    payload: CredentialPayload,
    resource: OwnedResource,
    resource_type: str,
    resource_id: UUID,
) -> AccessStage:
    """Stage 2: the caller must be the resource's owner."""
    if resource.owner_id != payload.user_id:
        raise OwnershipError(
            resource_type, str(resource_id),
            ErrorContext(user_id=str(payload.user_id), resource_id=str(resource_id)),
        )
    return AccessStage.OWNERSHIP_CONFIRMED


def authorize(
    payload: CredentialPayload,
    resource: OwnedResource | None,
    resource_type: str,
    resource_id: UUID,
) -> AccessStage:
    """Run existence then ownership. Returns AUTHORIZED or raises."""
    check_resource_exists(resource, resource_type, resource_id)
    check_ownership(payload, resource, resource_type, resource_id)
    return AccessStage.AUTHORIZED
