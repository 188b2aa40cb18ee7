"""Task Schemas - create/update bodies, list query and task representation.

Invariants:
    - Request bodies never carry an owner: ownership comes from the credential
    - TaskUpdate replaces title, description and done together
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from tasktracker.core.domain_types import FieldType
from tasktracker.core.requirements import define_record


class TaskCreate(BaseModel):
    title: str = ""
    description: str = ""


TASK_CREATE_RECORD = define_record(
    "TaskCreate",
    ("title", FieldType.TEXT, "required;max=200"),
    ("description", FieldType.TEXT, "max=2000"),
)


class TaskUpdate(BaseModel):
    title: str = ""
    description: str = ""
    done: bool = False


TASK_UPDATE_RECORD = define_record(
    "TaskUpdate",
    ("title", FieldType.TEXT, "required;max=200"),
    ("description", FieldType.TEXT, "max=2000"),
    ("done", FieldType.BOOLEAN, ""),
)


class TaskListQuery(BaseModel):
    """Pagination for GET /tasks."""
    limit: int = 10
    offset: int = 0


TASK_LIST_RECORD = define_record(
    "TaskListQuery",
    ("limit", FieldType.INTEGER, "required;min=1;max=100"),
    ("offset", FieldType.INTEGER, "min=0;max=2147483647"),
)


class TaskResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    owner_id: UUID
    title: str
    description: str
    done: bool
    created_at: datetime
    updated_at: datetime


class TaskListResponse(BaseModel):
    tasks: list[TaskResponse]
    pagination: dict[str, int]
