"""Normalized analytics filter criteria.

FilterCriteria is the typed record every analytics view consumes. It is
produced from raw query-string values by
:func:`flowchain.aggregators.filter_normalizer.normalize_filters`.
"""

import datetime as dt
from typing import Optional

from pydantic import ConfigDict, Field

from flowchain.models.base import BaseDataModel


class FilterCriteria(BaseDataModel):
    """Optional restrictions applied uniformly across analytics views.

    A value of None means "no restriction on this dimension".

    Attributes:
        project: Project id to restrict to
        employee: User id to restrict to
        status: Task status to restrict to
        billable: Required billable flag of timesheets
        start: Inclusive lower bound on timesheet creation time
        end: Inclusive upper bound on timesheet creation time

    Example:
        >>> criteria = FilterCriteria(project="p1")
        >>> criteria.has_date_bounds
        False
    """

    model_config = ConfigDict(frozen=True, validate_assignment=False)

    project: Optional[str] = Field(None, description="Project id")
    employee: Optional[str] = Field(None, description="Employee (user) id")
    status: Optional[str] = Field(None, description="Task status")
    billable: Optional[bool] = Field(None, description="Billable flag")
    start: Optional[dt.datetime] = Field(None, description="Inclusive start")
    end: Optional[dt.datetime] = Field(None, description="Inclusive end")

    @property
    def has_date_bounds(self) -> bool:
        """Whether a start or end bound is set."""
        return self.start is not None or self.end is not None

    @property
    def is_unrestricted(self) -> bool:
        """Whether no dimension is restricted at all."""
        return (
            self.project is None
            and self.employee is None
            and self.status is None
            and self.billable is None
            and not self.has_date_bounds
        )
