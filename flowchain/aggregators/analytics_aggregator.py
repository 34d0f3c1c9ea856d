"""Analytics aggregator for project, task and timesheet reporting views.

This module computes the seven read-only analytics views (KPIs, project
costs, resource utilization, project completion, workload trend,
revenue/expense trend and task status distribution) from the collections
of a storage backend. Every view re-reads the storage and recomputes from
scratch; nothing is cached between calls.
"""

import datetime as dt
import logging
from collections import defaultdict
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, List

from flowchain.aggregators.filter_normalizer import RawFilters, normalize_filters
from flowchain.calculators.metrics import (
    MONTHS,
    calculate_percentage,
    month_label,
    sum_hours,
)
from flowchain.models.filters import FilterCriteria
from flowchain.models.project import Project
from flowchain.models.task import Task
from flowchain.models.timesheet import Timesheet
from flowchain.storage.interface import AnalyticsStorage
from flowchain.utils.logging_utils import LogContext

logger = logging.getLogger(__name__)


@dataclass
class KpiSummary:
    """Headline numbers for the analytics dashboard.

    Attributes:
        total_projects: Number of filtered projects
        tasks_completed: Number of filtered tasks with status Completed
        total_hours: Sum of filtered logged hours
        billable_hours: Sum of filtered billable logged hours
        non_billable_hours: total_hours minus billable_hours
        billable_percentage: Rounded billable share of total hours (0-100)
    """

    total_projects: int
    tasks_completed: int
    total_hours: Decimal
    billable_hours: Decimal
    non_billable_hours: Decimal
    billable_percentage: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalProjects": self.total_projects,
            "tasksCompleted": self.tasks_completed,
            "totalHours": self.total_hours,
            "billableHours": self.billable_hours,
            "nonBillableHours": self.non_billable_hours,
            "billablePercentage": self.billable_percentage,
        }


@dataclass
class ProjectCost:
    """Cost and revenue of a single project."""

    name: str
    cost: Decimal
    revenue: Decimal

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "cost": self.cost, "revenue": self.revenue}


@dataclass
class NamedValue:
    """Chart point with a label and a value."""

    name: str
    value: Any

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "value": self.value}


@dataclass
class MonthlyHours:
    """Logged hours for one month bucket."""

    month: str
    hours: Decimal

    def to_dict(self) -> Dict[str, Any]:
        return {"month": self.month, "hours": self.hours}


@dataclass
class MonthlyRevenueExpense:
    """Revenue and expense for one month bucket."""

    month: str
    revenue: Decimal
    expense: Decimal

    def to_dict(self) -> Dict[str, Any]:
        return {"month": self.month, "revenue": self.revenue, "expense": self.expense}


@dataclass
class FilteredCollections:
    """Collections that survived the shared filter pipeline.

    Attributes:
        projects: Projects restricted by the project filter
        tasks: Tasks restricted by project, employee and status
        timesheets: Timesheets of surviving tasks, restricted by billable
            flag and date range
    """

    projects: List[Project]
    tasks: List[Task]
    timesheets: List[Timesheet]


class AnalyticsAggregator:
    """Computes analytics views over projects, tasks and timesheets.

    Every public view accepts either a raw filter mapping (query-string
    style) or a :class:`FilterCriteria`, normalizes it with
    :func:`normalize_filters`, loads the collections it needs from the
    storage and returns plain dataclasses.

    Shared filter pipeline:
    1. Restrict tasks by project, employee (assignee) and status
    2. Restrict projects by id
    3. Keep timesheets of the surviving tasks
    4. Apply the billable flag to timesheets
    5. Apply the inclusive date range to timesheet creation times; records
       without a creation time drop out whenever a bound is set

    Attributes:
        storage: Storage backend providing the collections

    Example:
        >>> aggregator = AnalyticsAggregator(storage)
        >>> kpis = aggregator.get_kpis({"project": "all", "billable": "true"})
        >>> kpis.billable_percentage
        100
    """

    def __init__(self, storage: AnalyticsStorage):
        """Initialize the aggregator.

        Args:
            storage: Storage backend providing the collections
        """
        self.storage = storage

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------

    def get_kpis(self, filters: RawFilters = None) -> KpiSummary:
        """Compute headline KPIs.

        Args:
            filters: Raw filters or normalized criteria

        Returns:
            KpiSummary for the filtered data
        """
        criteria = normalize_filters(filters)
        with LogContext(analytics_view="kpis"):
            data = self.load_filtered(criteria)

            total_hours = sum_hours(data.timesheets)
            billable_hours = sum_hours(t for t in data.timesheets if t.billable)

            summary = KpiSummary(
                total_projects=len(data.projects),
                tasks_completed=sum(1 for t in data.tasks if t.status == "Completed"),
                total_hours=total_hours,
                billable_hours=billable_hours,
                non_billable_hours=total_hours - billable_hours,
                billable_percentage=calculate_percentage(billable_hours, total_hours),
            )
            logger.info(
                f"KPIs: {summary.total_projects} projects, "
                f"{summary.total_hours} hours ({summary.billable_percentage}% billable)"
            )
            return summary

    def get_project_costs(self, filters: RawFilters = None) -> List[ProjectCost]:
        """Project each filtered project onto its cost and revenue.

        Args:
            filters: Raw filters or normalized criteria

        Returns:
            One ProjectCost per filtered project
        """
        criteria = normalize_filters(filters)
        with LogContext(analytics_view="project_costs"):
            projects = self._filter_projects(self.storage.list_projects(), criteria)
            logger.info(f"Project costs for {len(projects)} projects")
            return [
                ProjectCost(name=p.name, cost=p.cost, revenue=p.revenue)
                for p in projects
            ]

    def get_resource_utilization(self, filters: RawFilters = None) -> List[NamedValue]:
        """Split logged hours into billable and non-billable buckets.

        Timesheets are restricted by project, employee, billable flag and
        date range; the task status filter does not apply.

        Args:
            filters: Raw filters or normalized criteria

        Returns:
            Two points: "Billable" and "Non-Billable"
        """
        criteria = normalize_filters(filters)
        with LogContext(analytics_view="resource_utilization"):
            timesheets = self.load_utilization_timesheets(criteria)

            billable = sum_hours(t for t in timesheets if t.billable)
            non_billable = sum_hours(t for t in timesheets if not t.billable)

            logger.info(
                f"Resource utilization: {billable} billable, "
                f"{non_billable} non-billable hours"
            )
            return [
                NamedValue(name="Billable", value=billable),
                NamedValue(name="Non-Billable", value=non_billable),
            ]

    def get_project_completion(self, filters: RawFilters = None) -> List[NamedValue]:
        """Compute the completed-task percentage of each filtered project.

        Args:
            filters: Raw filters or normalized criteria

        Returns:
            One point per project, value in 0-100 (0 when it has no tasks).
            A completed count above the total counts as fully complete.
        """
        criteria = normalize_filters(filters)
        with LogContext(analytics_view="project_completion"):
            projects = self._filter_projects(self.storage.list_projects(), criteria)
            logger.info(f"Project completion for {len(projects)} projects")
            return [
                NamedValue(
                    name=p.name,
                    value=calculate_percentage(
                        min(p.completed_tasks, p.total_tasks), p.total_tasks
                    ),
                )
                for p in projects
            ]

    def get_workload_trend(self, filters: RawFilters = None) -> List[MonthlyHours]:
        """Sum logged hours per calendar month of creation.

        Uses the same timesheet restriction as resource utilization. Months
        of different years fall into the same bucket.

        Args:
            filters: Raw filters or normalized criteria

        Returns:
            Exactly twelve entries, January to December
        """
        criteria = normalize_filters(filters)
        with LogContext(analytics_view="workload_trend"):
            timesheets = self.load_utilization_timesheets(criteria)

            monthly: Dict[str, Decimal] = defaultdict(lambda: Decimal("0"))
            for timesheet in timesheets:
                if timesheet.created_at is None:
                    continue
                monthly[month_label(timesheet.created_at)] += timesheet.time_logged

            logger.info(f"Workload trend over {len(timesheets)} timesheets")
            return [
                MonthlyHours(month=month, hours=monthly.get(month, Decimal("0")))
                for month in MONTHS
            ]

    def get_revenue_expense(
        self, filters: RawFilters = None
    ) -> List[MonthlyRevenueExpense]:
        """Sum project revenue and cost per calendar month of the deadline.

        Projects without a deadline are skipped. Months of different years
        fall into the same bucket.

        Args:
            filters: Raw filters or normalized criteria

        Returns:
            Exactly twelve entries, January to December
        """
        criteria = normalize_filters(filters)
        with LogContext(analytics_view="revenue_expense"):
            projects = self._filter_projects(self.storage.list_projects(), criteria)

            revenue: Dict[str, Decimal] = defaultdict(lambda: Decimal("0"))
            expense: Dict[str, Decimal] = defaultdict(lambda: Decimal("0"))
            for project in projects:
                if project.deadline is None:
                    continue
                month = month_label(project.deadline)
                revenue[month] += project.revenue
                expense[month] += project.cost

            logger.info(f"Revenue/expense trend over {len(projects)} projects")
            return [
                MonthlyRevenueExpense(
                    month=month,
                    revenue=revenue.get(month, Decimal("0")),
                    expense=expense.get(month, Decimal("0")),
                )
                for month in MONTHS
            ]

    def get_task_status_distribution(
        self, filters: RawFilters = None
    ) -> List[NamedValue]:
        """Count filtered tasks per status.

        Only statuses with at least one task appear, in first-seen order.

        Args:
            filters: Raw filters or normalized criteria

        Returns:
            One point per present status
        """
        criteria = normalize_filters(filters)
        with LogContext(analytics_view="task_status"):
            tasks = self._filter_tasks(self.storage.list_tasks(), criteria)

            counts: Dict[str, int] = {}
            for task in tasks:
                counts[task.status] = counts.get(task.status, 0) + 1

            logger.info(f"Task status distribution: {counts}")
            return [NamedValue(name=name, value=value) for name, value in counts.items()]

    # ------------------------------------------------------------------
    # Filter pipeline
    # ------------------------------------------------------------------

    def load_filtered(self, filters: RawFilters = None) -> FilteredCollections:
        """Load all collections and run the shared filter pipeline.

        Args:
            filters: Raw filters or normalized criteria

        Returns:
            FilteredCollections with projects, tasks and timesheets
        """
        criteria = normalize_filters(filters)

        projects = self.storage.list_projects()
        tasks = self.storage.list_tasks()
        timesheets = self.storage.list_timesheets()
        logger.debug(
            f"Loaded {len(projects)} projects, {len(tasks)} tasks, "
            f"{len(timesheets)} timesheets"
        )

        tasks = self._filter_tasks(tasks, criteria)
        projects = self._filter_projects(projects, criteria)

        task_ids = {t.id for t in tasks}
        timesheets = [t for t in timesheets if t.task_id in task_ids]
        timesheets = self._filter_billable(timesheets, criteria)
        timesheets = self._filter_date_range(timesheets, criteria)

        logger.debug(
            f"After filtering: {len(projects)} projects, {len(tasks)} tasks, "
            f"{len(timesheets)} timesheets"
        )
        return FilteredCollections(projects=projects, tasks=tasks, timesheets=timesheets)

    def load_utilization_timesheets(self, filters: RawFilters = None) -> List[Timesheet]:
        """Load timesheets restricted for utilization-style views.

        The project filter goes through the task's project, the employee
        filter matches the timesheet's own employee. The task status
        filter is not applied.

        Args:
            filters: Raw filters or normalized criteria

        Returns:
            Filtered timesheets
        """
        criteria = normalize_filters(filters)
        timesheets = self.storage.list_timesheets()

        if criteria.project is not None:
            task_ids = {
                t.id
                for t in self.storage.list_tasks()
                if t.project_id == criteria.project
            }
            timesheets = [t for t in timesheets if t.task_id in task_ids]

        if criteria.employee is not None:
            timesheets = [t for t in timesheets if t.employee_id == criteria.employee]

        timesheets = self._filter_billable(timesheets, criteria)
        timesheets = self._filter_date_range(timesheets, criteria)

        logger.debug(f"Utilization timesheets after filtering: {len(timesheets)}")
        return timesheets

    @staticmethod
    def _filter_tasks(tasks: List[Task], criteria: FilterCriteria) -> List[Task]:
        if criteria.project is not None:
            tasks = [t for t in tasks if t.project_id == criteria.project]
        if criteria.employee is not None:
            tasks = [t for t in tasks if t.assignee_id == criteria.employee]
        if criteria.status is not None:
            tasks = [t for t in tasks if t.status == criteria.status]
        return tasks

    @staticmethod
    def _filter_projects(
        projects: List[Project], criteria: FilterCriteria
    ) -> List[Project]:
        if criteria.project is not None:
            projects = [p for p in projects if p.id == criteria.project]
        return projects

    @staticmethod
    def _filter_billable(
        timesheets: List[Timesheet], criteria: FilterCriteria
    ) -> List[Timesheet]:
        if criteria.billable is None:
            return timesheets
        return [t for t in timesheets if t.billable is criteria.billable]

    @staticmethod
    def _filter_date_range(
        timesheets: List[Timesheet], criteria: FilterCriteria
    ) -> List[Timesheet]:
        if not criteria.has_date_bounds:
            return timesheets

        result = []
        for timesheet in timesheets:
            created_at = _naive_utc(timesheet.created_at)
            if created_at is None:
                continue
            if criteria.start is not None and created_at < criteria.start:
                continue
            if criteria.end is not None and created_at > criteria.end:
                continue
            result.append(timesheet)
        return result


def _naive_utc(value):
    """Convert an aware datetime to naive UTC; pass naive values through."""
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(dt.timezone.utc).replace(tzinfo=None)
