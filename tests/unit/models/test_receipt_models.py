"""Tests for receipt extraction and filter criteria models."""

import datetime as dt

from flowchain.models.filters import FilterCriteria
from flowchain.models.receipt import ExpenseDraft, ReceiptExtraction


class TestReceiptExtraction:
    """Test the OCR result wire shape."""

    def test_empty_extraction_shape(self):
        dumped = ReceiptExtraction().model_dump(by_alias=True)

        assert dumped == {
            "rawText": "",
            "extractedData": {
                "possibleVendor": None,
                "possibleAmount": None,
                "possibleDate": None,
            },
        }

    def test_expense_draft_aliases(self):
        draft = ExpenseDraft(name="Acme", period_start=dt.date(2024, 3, 15))

        dumped = draft.model_dump(by_alias=True, mode="json")

        assert dumped["periodStart"] == "2024-03-15"
        assert dumped["projectId"] is None


class TestFilterCriteria:
    """Test FilterCriteria helpers."""

    def test_default_is_unrestricted(self):
        criteria = FilterCriteria()

        assert criteria.is_unrestricted
        assert not criteria.has_date_bounds

    def test_single_bound_counts_as_date_bounds(self):
        criteria = FilterCriteria(end=dt.datetime(2024, 1, 31))

        assert criteria.has_date_bounds
        assert not criteria.is_unrestricted

    def test_billable_false_is_a_restriction(self):
        assert not FilterCriteria(billable=False).is_unrestricted
