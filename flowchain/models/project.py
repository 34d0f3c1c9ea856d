"""Project data model for the analytics core.

This module defines the Project model which carries the budget, cost,
revenue and task counters the analytics views read.
"""

import datetime as dt
from decimal import Decimal
from typing import Literal, Optional, Union

from pydantic import Field, field_validator, model_validator

from flowchain.models.base import BaseDataModel

ProjectStatus = Literal["Planned", "In Progress", "Completed", "On Hold"]

PROJECT_STATUSES = ("Planned", "In Progress", "Completed", "On Hold")


class Project(BaseDataModel):
    """Represents a project.

    Attributes:
        id: Unique project identifier
        name: Project name
        manager: Name of the project manager
        deadline: Project deadline (drives the revenue/expense trend month)
        status: Lifecycle status
        budget: Approved budget
        budget_spent: Budget consumed so far
        cost: Accumulated cost
        revenue: Accumulated revenue
        total_tasks: Number of tasks in the project
        completed_tasks: Number of completed tasks
        progress: Progress percentage (0-100)

    Example:
        >>> project = Project(
        ...     id="p1",
        ...     name="Website Redesign",
        ...     status="Completed",
        ...     cost=Decimal("1200"),
        ...     revenue=Decimal("2000"),
        ... )
        >>> project.progress
        100
    """

    id: str = Field(..., min_length=1, description="Unique project identifier")
    name: str = Field(..., min_length=1, description="Project name")
    manager: Optional[str] = Field(None, description="Project manager")
    deadline: Optional[dt.date] = Field(None, description="Project deadline")
    status: ProjectStatus = Field("Planned", description="Project status")
    budget: Decimal = Field(Decimal("0"), ge=0, description="Approved budget")
    budget_spent: Decimal = Field(Decimal("0"), ge=0, description="Budget spent")
    cost: Decimal = Field(Decimal("0"), description="Accumulated cost")
    revenue: Decimal = Field(Decimal("0"), description="Accumulated revenue")
    total_tasks: int = Field(0, ge=0, description="Number of tasks")
    completed_tasks: int = Field(0, ge=0, description="Number of completed tasks")
    progress: int = Field(0, ge=0, le=100, description="Progress percentage")

    @field_validator("id", "name")
    @classmethod
    def validate_not_empty(cls, v: str, info) -> str:
        """Validate that string fields are not empty or whitespace only.

        Raises:
            ValueError: If the value is empty or whitespace only
        """
        if not v or not v.strip():
            raise ValueError(f"{info.field_name} cannot be empty or whitespace")
        return v.strip()

    @field_validator("deadline", mode="before")
    @classmethod
    def parse_deadline(cls, v):
        """Accept full timestamps for the deadline and keep the date part."""
        if isinstance(v, dt.datetime):
            return v.date()
        if isinstance(v, str) and len(v) > 10:
            try:
                return dt.datetime.fromisoformat(v.replace("Z", "+00:00")).date()
            except ValueError:
                return v
        return v

    @field_validator(
        "budget", "budget_spent", "cost", "revenue", mode="before"
    )
    @classmethod
    def convert_to_decimal(cls, v: Union[str, int, float, Decimal, None]) -> Decimal:
        """Convert numeric values to Decimal for exact sums.

        Raises:
            ValueError: If the value cannot be converted to Decimal
        """
        if v is None:
            return Decimal("0")
        if isinstance(v, Decimal):
            return v
        try:
            return Decimal(str(v))
        except (ValueError, TypeError, ArithmeticError) as e:
            raise ValueError(f"Cannot convert {v} to Decimal: {e}")

    @model_validator(mode="before")
    @classmethod
    def default_progress(cls, data):
        """Default a missing or null progress to 0."""
        if isinstance(data, dict) and data.get("progress") is None:
            data = {k: v for k, v in data.items() if k != "progress"}
        return data

    @model_validator(mode="after")
    def validate_completed_progress(self) -> "Project":
        """Force progress to 100 for completed projects.

        Returns:
            The validated model instance
        """
        if self.status == "Completed" and self.progress != 100:
            # Bypass validate_assignment to avoid re-entering this validator
            object.__setattr__(self, "progress", 100)
        return self
