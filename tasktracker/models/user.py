"""User ORM - registered account that owns tasks.

Invariants:
    - id is UUID primary key
    - username is unique and non-nullable
    - hashed_password holds the password hash only, never the password
    - A user owns their own account (owner_id == id)
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, DateTime
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from tasktracker.db.base import Base


class User(Base):
    """User account."""
    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    username: Mapped[str] = mapped_column(
        String(50), nullable=False, unique=True,
    )
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    hashed_password: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    @property
    def owner_id(self) -> uuid.UUID:
        return self.id
