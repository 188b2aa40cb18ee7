"""User Schemas - registration, login and public user representation.

Invariants:
    - UserResponse never exposes hashed_password
    - Password max of 72 characters keeps hashing input bounded
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from tasktracker.core.domain_types import FieldType
from tasktracker.core.requirements import define_record


class UserCreate(BaseModel):
    """Registration body."""
    username: str = ""
    email: str = ""
    password: str = ""


USER_CREATE_RECORD = define_record(
    "UserCreate",
    ("username", FieldType.TEXT, "required;min=3;max=50"),
    ("email", FieldType.TEXT, "required;email;max=255"),
    ("password", FieldType.TEXT, "required;min=8;max=72"),
)


class LoginRequest(BaseModel):
    """Login body."""
    username: str = ""
    password: str = ""


LOGIN_RECORD = define_record(
    "LoginRequest",
    ("username", FieldType.TEXT, "required"),
    ("password", FieldType.TEXT, "required"),
)


class UserResponse(BaseModel):
    """Public-facing user data."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    username: str
    email: str
    created_at: datetime


class LoginResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    access_token_expires_at: datetime
    user: UserResponse
