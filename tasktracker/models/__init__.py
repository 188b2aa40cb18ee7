"""ORM Models - SQLAlchemy declarative models for all domain entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - Every task is scoped by owner_id

Design Decisions:
    - One file per entity
    - All models imported here so Base.metadata knows every table before
      create_all() or an Alembic autogenerate runs
"""

from tasktracker.models.user import User  # noqa: F401
from tasktracker.models.task import Task  # noqa: F401
