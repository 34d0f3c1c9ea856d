"""In-memory storage backend.

Holds collections keyed by id for tests, the CLI and any caller that
already has the records in hand. Each ``list_*`` call returns a fresh
list so callers can filter without touching the store.
"""

import logging
from typing import Dict, Iterable, List, Optional

from flowchain.models.project import Project
from flowchain.models.task import Task
from flowchain.models.timesheet import Timesheet
from flowchain.models.user import User
from flowchain.storage.interface import AnalyticsStorage

logger = logging.getLogger(__name__)


class InMemoryStorage(AnalyticsStorage):
    """Dictionary-backed implementation of :class:`AnalyticsStorage`.

    Example:
        >>> storage = InMemoryStorage(
        ...     projects=[Project(id="p1", name="Website")],
        ... )
        >>> [p.id for p in storage.list_projects()]
        ['p1']
    """

    def __init__(
        self,
        projects: Optional[Iterable[Project]] = None,
        tasks: Optional[Iterable[Task]] = None,
        timesheets: Optional[Iterable[Timesheet]] = None,
        users: Optional[Iterable[User]] = None,
    ):
        self._projects: Dict[str, Project] = {}
        self._tasks: Dict[str, Task] = {}
        self._timesheets: Dict[str, Timesheet] = {}
        self._users: Dict[str, User] = {}

        for project in projects or []:
            self.add_project(project)
        for task in tasks or []:
            self.add_task(task)
        for timesheet in timesheets or []:
            self.add_timesheet(timesheet)
        for user in users or []:
            self.add_user(user)

    def add_project(self, project: Project) -> None:
        if project.id in self._projects:
            logger.warning(f"Replacing duplicate project id: {project.id}")
        self._projects[project.id] = project

    def add_task(self, task: Task) -> None:
        if task.id in self._tasks:
            logger.warning(f"Replacing duplicate task id: {task.id}")
        self._tasks[task.id] = task

    def add_timesheet(self, timesheet: Timesheet) -> None:
        if timesheet.id in self._timesheets:
            logger.warning(f"Replacing duplicate timesheet id: {timesheet.id}")
        self._timesheets[timesheet.id] = timesheet

    def add_user(self, user: User) -> None:
        if user.id in self._users:
            logger.warning(f"Replacing duplicate user id: {user.id}")
        self._users[user.id] = user

    def list_projects(self) -> List[Project]:
        return list(self._projects.values())

    def list_tasks(self) -> List[Task]:
        return list(self._tasks.values())

    def list_timesheets(self) -> List[Timesheet]:
        return list(self._timesheets.values())

    def list_users(self) -> List[User]:
        return list(self._users.values())
