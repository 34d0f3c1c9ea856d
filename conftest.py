"""
Global pytest configuration and fixtures.
"""
import datetime as dt
import logging
import os
from decimal import Decimal
from typing import Dict

import pytest

from flowchain.config import FlowChainConfig, reload_config
from flowchain.models import Project, Task, Timesheet, User
from flowchain.storage import InMemoryStorage


@pytest.fixture(scope="session")
def test_env_vars() -> Dict[str, str]:
    """Test environment variables for configuration."""
    return {
        'FLOWCHAIN_DATA_FILE': 'tests/data/snapshot.json',
        'REPORT_OUTPUT_DIR': 'test-reports',
        'OCR_LANGUAGE': 'eng',
        'ENVIRONMENT': 'testing',
        'DEBUG': 'true',
        'LOG_LEVEL': 'DEBUG',
        'LOG_CONSOLE': 'false',
    }


@pytest.fixture
def mock_env(test_env_vars, monkeypatch):
    """Mock environment variables for testing."""
    for key, value in test_env_vars.items():
        monkeypatch.setenv(key, value)

    # Clear the global config to force reload with test values
    import flowchain.config.settings
    flowchain.config.settings._config = None

    yield test_env_vars

    flowchain.config.settings._config = None


@pytest.fixture
def test_config(mock_env) -> FlowChainConfig:
    """Test configuration instance."""
    return reload_config()


@pytest.fixture
def sample_users():
    return [
        User(id="u1", name="Jane Doe", role="team_member"),
        User(id="u2", name="John Smith", role="project_manager"),
    ]


@pytest.fixture
def sample_projects():
    """Two projects with deadlines in different months."""
    return [
        Project(
            id="p1",
            name="Website Redesign",
            manager="John Smith",
            deadline=dt.date(2024, 3, 31),
            status="In Progress",
            cost=Decimal("1200"),
            revenue=Decimal("2000"),
            total_tasks=4,
            completed_tasks=1,
        ),
        Project(
            id="p2",
            name="Mobile App",
            manager="John Smith",
            deadline=dt.date(2024, 7, 15),
            status="Planned",
            cost=Decimal("500"),
            revenue=Decimal("0"),
            total_tasks=0,
            completed_tasks=0,
        ),
    ]


@pytest.fixture
def sample_tasks():
    return [
        Task(id="t1", project_id="p1", assignee_id="u1", status="Completed"),
        Task(id="t2", project_id="p1", assignee_id="u2", status="In Progress"),
        Task(id="t3", project_id="p2", assignee_id="u1", status="Blocked"),
        Task(id="t4", project_id=None, assignee_id=None, status="Planned"),
    ]


@pytest.fixture
def sample_timesheets():
    return [
        Timesheet(
            id="ts1",
            task_id="t1",
            employee_id="u1",
            time_logged=Decimal("5"),
            billable=True,
            created_at=dt.datetime(2024, 1, 10, 9, 0),
        ),
        Timesheet(
            id="ts2",
            task_id="t1",
            employee_id="u1",
            time_logged=Decimal("2.5"),
            billable=False,
            created_at=dt.datetime(2024, 2, 5, 14, 30),
        ),
        Timesheet(
            id="ts3",
            task_id="t2",
            employee_id="u2",
            time_logged=Decimal("3"),
            billable=True,
            created_at=dt.datetime(2024, 2, 20, 11, 0),
        ),
        Timesheet(
            id="ts4",
            task_id="t3",
            employee_id="u1",
            time_logged=Decimal("1.5"),
            billable=False,
            created_at=None,
        ),
    ]


@pytest.fixture
def sample_storage(sample_projects, sample_tasks, sample_timesheets, sample_users):
    """In-memory storage populated with the sample collections."""
    return InMemoryStorage(
        projects=sample_projects,
        tasks=sample_tasks,
        timesheets=sample_timesheets,
        users=sample_users,
    )


@pytest.fixture
def sample_snapshot() -> dict:
    """Snapshot payload in the camelCase JSON wire format."""
    return {
        "projects": [
            {
                "id": "p1",
                "name": "Website Redesign",
                "manager": "John Smith",
                "deadline": "2024-03-31",
                "status": "Completed",
                "budget": 5000,
                "budgetSpent": 1200,
                "cost": 1200,
                "revenue": 2000,
                "totalTasks": 1,
                "completedTasks": 1,
                "progress": 40,
            }
        ],
        "tasks": [
            {
                "id": "t1",
                "projectId": "p1",
                "assigneeId": "u1",
                "status": "Completed",
                "isBillable": True,
                "totalHours": 5,
                "tags": ["frontend"],
            }
        ],
        "timesheets": [
            {
                "id": "ts1",
                "taskId": "t1",
                "employeeId": "u1",
                "timeLogged": 5,
                "billable": True,
                "createdAt": "2024-03-15T10:00:00.000Z",
            }
        ],
        "users": [
            {
                "id": "u1",
                "name": "Jane Doe",
                "email": "jane@example.com",
                "password": "$2b$10$hash",
                "role": "team_member",
            }
        ],
    }


@pytest.fixture(autouse=True)
def quiet_console_logging(monkeypatch):
    """Keep CLI log output out of captured command output."""
    monkeypatch.setenv("LOG_CONSOLE", "false")
    root_logger = logging.getLogger()
    original_handlers = list(root_logger.handlers)
    original_level = root_logger.level

    yield

    # configure_logging() replaces root handlers; restore pytest's own
    for handler in root_logger.handlers[:]:
        if handler not in original_handlers:
            root_logger.removeHandler(handler)
            handler.close()
    for handler in original_handlers:
        if handler not in root_logger.handlers:
            root_logger.addHandler(handler)
    root_logger.setLevel(original_level)


@pytest.fixture(autouse=True)
def cleanup_test_files():
    """Clean up any test files created during testing."""
    yield

    test_files = ['coverage.xml', '.coverage']
    for file in test_files:
        if os.path.exists(file):
            os.remove(file)


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test"
    )
    config.addinivalue_line(
        "markers", "e2e: mark test as an end-to-end pipeline test"
    )
    config.addinivalue_line(
        "markers", "slow: mark test as slow running"
    )


def pytest_collection_modifyitems(config, items):
    """Add the unit marker to tests under tests/unit/."""
    for item in items:
        if "tests/unit/" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
