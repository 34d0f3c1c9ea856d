"""Data models for the analytics core.

This package contains Pydantic models for all entities the core reads:
- BaseDataModel: Base class with common configuration
- Project: Project budget, cost, revenue and task counters
- Task: Task with project, assignee and status
- Timesheet: Time logged against a task
- User: Application user, exposed as an employee
- FilterCriteria: Normalized analytics filters
- ReceiptExtraction: OCR heuristic result
- ExpenseDraft: Expense form pre-fill built from a receipt
"""

from flowchain.models.base import BaseDataModel
from flowchain.models.filters import FilterCriteria
from flowchain.models.project import PROJECT_STATUSES, Project
from flowchain.models.receipt import (
    ExpenseDraft,
    ExtractedReceiptData,
    ReceiptExtraction,
)
from flowchain.models.task import TASK_STATUSES, Task
from flowchain.models.timesheet import Timesheet
from flowchain.models.user import User

__all__ = [
    "BaseDataModel",
    "ExpenseDraft",
    "ExtractedReceiptData",
    "FilterCriteria",
    "PROJECT_STATUSES",
    "Project",
    "ReceiptExtraction",
    "TASK_STATUSES",
    "Task",
    "Timesheet",
    "User",
]
