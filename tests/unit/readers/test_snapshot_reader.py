"""Tests for the JSON snapshot reader."""

import datetime as dt
import json
from decimal import Decimal

import pytest

from flowchain.aggregators.analytics_aggregator import AnalyticsAggregator
from flowchain.readers.snapshot_reader import SnapshotLoadError, SnapshotReader
from flowchain.storage import StorageError


@pytest.fixture
def snapshot_file(tmp_path, sample_snapshot):
    path = tmp_path / "snapshot.json"
    path.write_text(json.dumps(sample_snapshot), encoding="utf-8")
    return path


class TestSnapshotReaderLoad:
    """Test reading snapshot files."""

    def test_load_builds_storage(self, snapshot_file):
        storage = SnapshotReader(snapshot_file).load()

        assert [p.id for p in storage.list_projects()] == ["p1"]
        assert [t.id for t in storage.list_tasks()] == ["t1"]
        assert [t.id for t in storage.list_timesheets()] == ["ts1"]
        assert [u.id for u in storage.list_users()] == ["u1"]

    def test_camel_case_fields_mapped(self, snapshot_file):
        storage = SnapshotReader(str(snapshot_file)).load()

        project = storage.list_projects()[0]
        timesheet = storage.list_timesheets()[0]
        assert project.budget_spent == Decimal("1200")
        assert timesheet.task_id == "t1"
        assert timesheet.created_at == dt.datetime(2024, 3, 15, 10, 0, tzinfo=dt.timezone.utc)

    def test_completed_project_progress_forced(self, snapshot_file):
        storage = SnapshotReader(snapshot_file).load()

        assert storage.list_projects()[0].progress == 100

    def test_password_never_loaded(self, snapshot_file):
        user = SnapshotReader(snapshot_file).load().list_users()[0]

        assert "password" not in user.model_dump()

    def test_missing_file(self, tmp_path):
        reader = SnapshotReader(tmp_path / "missing.json")

        with pytest.raises(SnapshotLoadError, match="not found"):
            reader.load()

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(SnapshotLoadError):
            SnapshotReader(path).load()

    def test_load_error_is_storage_error(self, tmp_path):
        with pytest.raises(StorageError):
            SnapshotReader(tmp_path / "missing.json").load()


class TestSnapshotReaderPayload:
    """Test building storage from decoded payloads."""

    def test_non_object_payload_rejected(self):
        with pytest.raises(SnapshotLoadError, match="JSON object"):
            SnapshotReader("unused.json").load_from_dict([1, 2, 3])

    def test_missing_collections_load_empty(self):
        storage = SnapshotReader("unused.json").load_from_dict({"projects": []})

        assert storage.list_tasks() == []
        assert storage.list_users() == []

    def test_invalid_records_skipped(self, caplog):
        payload = {
            "timesheets": [
                {"id": "ok", "taskId": "t1", "employeeId": "u1", "timeLogged": 2},
                {"id": "neg", "taskId": "t1", "employeeId": "u1", "timeLogged": -4},
                "garbage",
            ]
        }

        storage = SnapshotReader("unused.json").load_from_dict(payload)

        assert [t.id for t in storage.list_timesheets()] == ["ok"]
        assert "id=neg" in caplog.text
        assert "not an object" in caplog.text

    def test_project_with_more_completed_than_total_tasks_kept(self):
        payload = {
            "projects": [
                {
                    "id": "p1",
                    "name": "Rollout",
                    "cost": 100,
                    "revenue": 500,
                    "deadline": "2024-02-10",
                    "totalTasks": 2,
                    "completedTasks": 3,
                }
            ]
        }

        storage = SnapshotReader("unused.json").load_from_dict(payload)
        aggregator = AnalyticsAggregator(storage)

        assert aggregator.get_kpis().total_projects == 1
        assert aggregator.get_project_completion()[0].value == 100
        assert aggregator.get_revenue_expense()[1].revenue == Decimal("500")

    def test_non_list_collection_ignored(self):
        storage = SnapshotReader("unused.json").load_from_dict({"projects": {"id": "p1"}})

        assert storage.list_projects() == []
