"""Abstract storage interface consumed by the analytics core.

The analytics views and the filter option provider only ever read full
collections. Any backend (relational database adapter, in-memory store,
JSON snapshot) implements these four methods.
"""

from abc import ABC, abstractmethod
from typing import List

from flowchain.models.project import Project
from flowchain.models.task import Task
from flowchain.models.timesheet import Timesheet
from flowchain.models.user import User


class StorageError(Exception):
    """Raised by storage implementations when a read fails."""

    pass


class AnalyticsStorage(ABC):
    """Read-only collection access for the analytics core.

    Implementations must return complete snapshots. No transactional
    isolation across calls is assumed.
    """

    @abstractmethod
    def list_projects(self) -> List[Project]:
        """Return all projects."""

    @abstractmethod
    def list_tasks(self) -> List[Task]:
        """Return all tasks."""

    @abstractmethod
    def list_timesheets(self) -> List[Timesheet]:
        """Return all timesheets."""

    @abstractmethod
    def list_users(self) -> List[User]:
        """Return all users without credentials."""
