"""
End-to-end pipeline integration tests.

These tests verify the complete data flow from a JSON snapshot on disk
through filtering, aggregation and CSV export, and the receipt flow from a
real image through Tesseract.

The OCR test requires the tesseract binary and is skipped without it.
"""

import asyncio
import json
import shutil

import pandas as pd
import pytest
from PIL import Image, ImageDraw

from flowchain.aggregators import AnalyticsAggregator, FilterOptionProvider
from flowchain.ocr import ReceiptTextExtractor, TesseractOCREngine
from flowchain.readers import SnapshotReader
from flowchain.writers import AnalyticsReportGenerator, write_report_csv


@pytest.fixture
def snapshot_path(tmp_path):
    """Snapshot spanning two years and both billable flags."""
    payload = {
        "projects": [
            {
                "id": "p1",
                "name": "Website Redesign",
                "deadline": "2024-03-31",
                "status": "Completed",
                "cost": 1200,
                "revenue": 2000,
                "totalTasks": 2,
                "completedTasks": 2,
            },
            {
                "id": "p2",
                "name": "Mobile App",
                "deadline": "2023-03-01",
                "status": "On Hold",
                "cost": 300,
                "revenue": 100,
                "totalTasks": 1,
            },
        ],
        "tasks": [
            {"id": "t1", "projectId": "p1", "assigneeId": "u1", "status": "Completed"},
            {"id": "t2", "projectId": "p1", "assigneeId": "u2", "status": "Completed"},
            {"id": "t3", "projectId": "p2", "assigneeId": "u2", "status": "Blocked"},
        ],
        "timesheets": [
            {
                "id": "ts1",
                "taskId": "t1",
                "employeeId": "u1",
                "timeLogged": 6,
                "billable": True,
                "createdAt": "2024-01-15T09:00:00Z",
            },
            {
                "id": "ts2",
                "taskId": "t2",
                "employeeId": "u2",
                "timeLogged": 2,
                "billable": False,
                "createdAt": "2023-01-20T09:00:00Z",
            },
            {
                "id": "ts3",
                "taskId": "t3",
                "employeeId": "u2",
                "timeLogged": 4,
                "billable": True,
                "createdAt": "2024-02-02T16:00:00Z",
            },
        ],
        "users": [
            {"id": "u1", "name": "Jane Doe", "password": "hash"},
            {"id": "u2", "name": "John Smith", "password": "hash"},
        ],
    }
    path = tmp_path / "snapshot.json"
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


@pytest.mark.e2e
@pytest.mark.integration
class TestAnalyticsPipeline:
    """Test the analytics flow from snapshot file to CSV export."""

    def test_snapshot_to_views(self, snapshot_path):
        storage = SnapshotReader(snapshot_path).load()
        aggregator = AnalyticsAggregator(storage)

        kpis = aggregator.get_kpis({"project": "all", "billable": "all"})
        assert kpis.to_dict()["totalHours"] == 12
        assert kpis.billable_percentage == 83

        trend = {m.month: m.hours for m in aggregator.get_workload_trend()}
        assert trend["Jan"] == 8  # 2023 and 2024 share the bucket

        revenue = {m.month: m.revenue for m in aggregator.get_revenue_expense()}
        assert revenue["Mar"] == 2100

        completion = {p.name: p.value for p in aggregator.get_project_completion()}
        assert completion == {"Website Redesign": 100, "Mobile App": 0}

        options = FilterOptionProvider(storage).get_filter_options()
        assert [e["name"] for e in options.employees] == ["Jane Doe", "John Smith"]

    def test_snapshot_to_csv(self, snapshot_path, tmp_path):
        storage = SnapshotReader(snapshot_path).load()
        report = AnalyticsReportGenerator(AnalyticsAggregator(storage)).generate(
            {"employee": "u2", "start": "2024-01-01"}
        )

        paths = write_report_csv(report, tmp_path / "reports")

        assert len(paths) == 7
        utilization = pd.read_csv(tmp_path / "reports" / "resource_utilization.csv")
        assert list(utilization["value"]) == [4.0, 0.0]


@pytest.mark.e2e
@pytest.mark.integration
@pytest.mark.slow
@pytest.mark.skipif(shutil.which("tesseract") is None, reason="tesseract not installed")
class TestReceiptPipeline:
    """Test the receipt flow against the real OCR engine."""

    def test_rendered_receipt(self, tmp_path):
        image_path = tmp_path / "receipt.png"
        image = Image.new("RGB", (600, 200), "white")
        draw = ImageDraw.Draw(image)
        draw.text((20, 20), "CORNER CAFE", fill="black")
        draw.text((20, 80), "TOTAL 12.50", fill="black")
        image.save(image_path)

        extractor = ReceiptTextExtractor(TesseractOCREngine())
        result = asyncio.run(extractor.extract(image_path))

        # Recognition quality depends on the installed language data
        assert isinstance(result.raw_text, str)
        assert result.model_dump(by_alias=True)["extractedData"].keys() == {
            "possibleVendor",
            "possibleAmount",
            "possibleDate",
        }
