"""Filter option provider for the analytics filter bar."""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List

from flowchain.models.task import TASK_STATUSES
from flowchain.storage.interface import AnalyticsStorage

logger = logging.getLogger(__name__)


@dataclass
class FilterOptions:
    """Choices available to the analytics filter UI.

    Attributes:
        projects: ``{"id", "name"}`` of every project
        employees: ``{"id", "name"}`` of every user
        statuses: The task status enumeration
    """

    projects: List[Dict[str, str]]
    employees: List[Dict[str, str]]
    statuses: List[str] = field(default_factory=lambda: list(TASK_STATUSES))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "projects": self.projects,
            "employees": self.employees,
            "statuses": self.statuses,
        }


class FilterOptionProvider:
    """Lists the projects, employees and statuses a user can filter by.

    Example:
        >>> options = FilterOptionProvider(storage).get_filter_options()
        >>> options.statuses
        ['Planned', 'In Progress', 'Completed', 'Blocked']
    """

    def __init__(self, storage: AnalyticsStorage):
        self.storage = storage

    def get_filter_options(self) -> FilterOptions:
        """Load the current filter choices from storage."""
        projects = [{"id": p.id, "name": p.name} for p in self.storage.list_projects()]
        employees = [{"id": u.id, "name": u.name} for u in self.storage.list_users()]

        logger.info(
            f"Filter options: {len(projects)} projects, {len(employees)} employees"
        )
        return FilterOptions(projects=projects, employees=employees)
