from uuid import uuid4

from sqlmodel import Field, SQLModel


def new_task_id() -> str:
    """Generate a fresh task identifier (UUID4 as text)."""
    return str(uuid4())


class TaskBase(SQLModel):
    """Base model with shared fields"""

    title: str = Field(default="")
    description: str = Field(default="")


class Task(TaskBase, table=True):
    """Database model"""

    __tablename__ = "tasks"

    id: str = Field(default_factory=new_task_id, primary_key=True, max_length=36)
    is_completed: bool = Field(default=False)


class TaskCreate(TaskBase):
    """Schema for creating a task; any client-sent id is ignored"""

    is_completed: bool = Field(default=False, alias="isCompleted")

    model_config = {"populate_by_name": True}


class TaskUpdate(TaskBase):
    """Schema for replacing a task - the full record; a missing id is a mismatch"""

    id: str | None = None
    is_completed: bool = Field(default=False, alias="isCompleted")

    model_config = {"populate_by_name": True}


class TaskRead(TaskBase):
    """Schema for task responses"""

    id: str
    is_completed: bool = Field(default=False, alias="isCompleted")

    model_config = {"from_attributes": True, "populate_by_name": True}
