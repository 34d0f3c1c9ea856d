"""Task data model for the analytics core."""

import datetime as dt
from decimal import Decimal
from typing import Literal, Optional

from pydantic import Field, field_validator

from flowchain.models.base import BaseDataModel

TaskStatus = Literal["Planned", "In Progress", "Completed", "Blocked"]

TASK_STATUSES = ("Planned", "In Progress", "Completed", "Blocked")


class Task(BaseDataModel):
    """Represents a task assigned within a project.

    Attributes:
        id: Unique task identifier
        name: Optional task name
        project_id: Owning project (nullable)
        assignee_id: Assigned user (nullable)
        status: Task status
        is_billable: Whether work on the task is billable by default
        total_hours: Hours recorded against the task
        deadline: Optional task deadline

    Example:
        >>> task = Task(id="t1", projectId="p1", status="Completed")
        >>> task.project_id
        'p1'
    """

    id: str = Field(..., min_length=1, description="Unique task identifier")
    name: Optional[str] = Field(None, description="Task name")
    project_id: Optional[str] = Field(None, description="Owning project")
    assignee_id: Optional[str] = Field(None, description="Assigned user")
    status: TaskStatus = Field("Planned", description="Task status")
    is_billable: bool = Field(True, description="Billable by default")
    total_hours: Decimal = Field(Decimal("0"), ge=0, description="Total hours")
    deadline: Optional[dt.date] = Field(None, description="Task deadline")

    @field_validator("project_id", "assignee_id", mode="before")
    @classmethod
    def blank_to_none(cls, v):
        """Treat empty foreign keys as unset."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("total_hours", mode="before")
    @classmethod
    def default_hours(cls, v):
        if v is None:
            return Decimal("0")
        return Decimal(str(v)) if not isinstance(v, Decimal) else v

    @field_validator("deadline", mode="before")
    @classmethod
    def parse_deadline(cls, v):
        if isinstance(v, dt.datetime):
            return v.date()
        if isinstance(v, str) and len(v) > 10:
            try:
                return dt.datetime.fromisoformat(v.replace("Z", "+00:00")).date()
            except ValueError:
                return v
        return v
