"""Timesheet data model for the analytics core.

This module defines the Timesheet model which represents time logged by
an employee against a task.
"""

import datetime as dt
from decimal import Decimal
from typing import Optional, Union

from pydantic import Field, field_validator

from flowchain.models.base import BaseDataModel


class Timesheet(BaseDataModel):
    """Represents a single timesheet record.

    Attributes:
        id: Unique timesheet identifier
        task_id: Task the time was logged against
        employee_id: User who logged the time
        time_logged: Hours logged (never negative)
        billable: Whether the logged time is billable
        created_at: When the record was created (drives date filters and
            the workload trend month)

    Example:
        >>> entry = Timesheet(
        ...     id="ts1",
        ...     taskId="t1",
        ...     employeeId="u1",
        ...     timeLogged=5,
        ...     billable=True,
        ...     createdAt="2024-03-15T10:00:00",
        ... )
        >>> entry.time_logged
        Decimal('5')
    """

    id: str = Field(..., min_length=1, description="Unique timesheet identifier")
    task_id: str = Field(..., min_length=1, description="Task identifier")
    employee_id: str = Field(..., min_length=1, description="Employee identifier")
    time_logged: Decimal = Field(..., ge=0, description="Hours logged")
    billable: bool = Field(True, description="Whether the time is billable")
    created_at: Optional[dt.datetime] = Field(None, description="Creation time")

    @field_validator("time_logged", mode="before")
    @classmethod
    def convert_to_decimal(cls, v: Union[str, int, float, Decimal]) -> Decimal:
        """Convert numeric values to Decimal so hour sums stay exact.

        Raises:
            ValueError: If the value cannot be converted to Decimal
        """
        if isinstance(v, Decimal):
            return v
        try:
            return Decimal(str(v))
        except (ValueError, TypeError, ArithmeticError) as e:
            raise ValueError(f"Cannot convert {v} to Decimal: {e}")

    @field_validator("created_at", mode="before")
    @classmethod
    def parse_created_at(cls, v):
        """Accept plain dates and "Z"-suffixed ISO timestamps."""
        if v is None or v == "":
            return None
        if isinstance(v, dt.datetime):
            return v
        if isinstance(v, dt.date):
            return dt.datetime.combine(v, dt.time.min)
        if isinstance(v, str) and v.endswith("Z"):
            return v[:-1] + "+00:00"
        return v
