"""Domain Types - identity wrappers and closed enumerations shared by core and shell.

Invariants:
    - UserId and TaskId wrap UUIDs; domain logic never passes bare UUIDs around
    - FieldType and RuleName are closed vocabularies (no dynamic additions)
    - AccessStage encodes the per-request authorization state machine

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", UUID)
TaskId = NewType("TaskId", UUID)


# ─── Enums ───────────────────────────────────────────────────────

class FieldType(str, Enum):
    """Semantic type of a record field, as declared in a record schema."""
    TEXT = "text"
    INTEGER = "integer"
    FLOAT = "float"
    BOOLEAN = "boolean"

    @property
    def is_numeric(self) -> bool:
        return self in (FieldType.INTEGER, FieldType.FLOAT)


class RuleName(str, Enum):
    """The fixed rule vocabulary accepted in requirement tags."""
    REQUIRED = "required"
    EMAIL = "email"
    MIN = "min"
    MAX = "max"


class AccessStage(str, Enum):
    """Per-request authorization states. REJECTED is reachable from any stage."""
    UNAUTHENTICATED = "unauthenticated"
    CREDENTIAL_VERIFIED = "credential_verified"
    RESOURCE_LOCATED = "resource_located"
    OWNERSHIP_CONFIRMED = "ownership_confirmed"
    AUTHORIZED = "authorized"
    REJECTED = "rejected"


class ResourceType(str, Enum):
    """Owned resources exposed by the API."""
    USER = "User"
    TASK = "Task"
