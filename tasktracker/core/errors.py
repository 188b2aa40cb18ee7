"""Error Hierarchy - typed, categorized exceptions for all task tracker failure modes.

Invariants:
    - Every HTTP-facing error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are recoverable; infrastructure errors (500-level) are critical
    - to_response() produces the REST envelope; no internal details leak into it
    - SchemaDefinitionError is NOT part of the HTTP hierarchy: it is raised while
      record schemas are declared (import time) and is never caught at request time

Design Decisions:
    - Single hierarchy with TaskTrackerError base: one FastAPI handler catches all
    - ErrorContext as dataclass: observability fields without coupling to logging
    - AuthenticationError carries one fixed client message whatever the cause
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone

from tasktracker.core.domain_types import AccessStage


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    AUTHENTICATION = "authentication"
    AUTHORIZATION = "authorization"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Observability context attached to an error."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    user_id: str | None = None
    resource_id: str | None = None
    debug_info: dict[str, Any] | None = None


class SchemaDefinitionError(Exception):
    """A record schema is malformed (unknown rule, bad min/max argument, ...).

    Configuration defect: surfaces when the schema is declared, so a broken
    schema stops the process at startup instead of failing requests.
    """

    def __init__(self, message: str, record: str | None = None, field_name: str | None = None):
        prefix = ""
        if record and field_name:
            prefix = f"{record}.{field_name}: "
        elif field_name:
            prefix = f"{field_name}: "
        super().__init__(prefix + message)
        self.record = record
        self.field_name = field_name


class TaskTrackerError(Exception):
    """Base exception for all HTTP-facing task tracker errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        body = {
            "code": self.code,
            "message": self.message,
            "category": self.category.value,
            "severity": self.severity.value,
            "timestamp": self.context.timestamp.isoformat(),
        }
        details = self.details()
        if details is not None:
            body["details"] = details
        return {"error": body}

    def details(self) -> list[dict] | None:
        """Structured per-item details for the envelope. None omits the key."""
        return None


# ─── Domain Errors (400-level) ──────────────────────────────────

class RequirementsError(TaskTrackerError):
    """One or more field requirements failed for a record."""
    def __init__(self, record: str, violations: list, context: ErrorContext | None = None):
        super().__init__(
            "; ".join(v.message for v in violations),
            "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.record = record
        self.violations = list(violations)

    def details(self) -> list[dict]:
        return [v.to_dict() for v in self.violations]


class AuthenticationError(TaskTrackerError):
    """Credential missing, malformed, expired or forged.

    The client always sees the same message; `reason` is for server logs only.
    """
    CLIENT_MESSAGE = "Authentication required"

    def __init__(self, reason: str, context: ErrorContext | None = None):
        super().__init__(
            self.CLIENT_MESSAGE,
            "UNAUTHENTICATED", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )
        self.reason = reason


class OwnershipError(TaskTrackerError):
    """Authenticated subject does not own the requested resource."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
        rejected_at: AccessStage = AccessStage.RESOURCE_LOCATED,
    ):
        super().__init__(
            f"Not allowed to access {resource_type} '{resource_id}'",
            "FORBIDDEN", ErrorCategory.AUTHORIZATION,
            ErrorSeverity.WARNING, context, 403,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id
        self.rejected_at = rejected_at


class ResourceNotFoundError(TaskTrackerError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
        rejected_at: AccessStage = AccessStage.CREDENTIAL_VERIFIED,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id
        self.rejected_at = rejected_at


class ConflictError(TaskTrackerError):
    """Resource creation collides with an existing unique value."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "CONFLICT", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context, 409,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(TaskTrackerError):
    """Database operation failed. Message stays generic for clients."""
    def __init__(self, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.operation = operation
