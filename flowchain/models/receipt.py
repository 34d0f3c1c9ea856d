"""Receipt OCR result and expense draft models.

These models carry best-effort guesses for an expense form pre-fill. None
of the extracted values is validated beyond its type.
"""

import datetime as dt
from typing import Any, Dict, Optional

from pydantic import Field

from flowchain.models.base import BaseDataModel


class ExtractedReceiptData(BaseDataModel):
    """Heuristic field guesses extracted from recognized receipt text.

    Attributes:
        possible_vendor: First plausible vendor line
        possible_amount: First amount-like value with "$" and "," removed
        possible_date: First date-like value, verbatim
    """

    possible_vendor: Optional[str] = None
    possible_amount: Optional[str] = None
    possible_date: Optional[str] = None


class ReceiptExtraction(BaseDataModel):
    """OCR extraction result returned to the expense form.

    Serializes to ``{"rawText": ..., "extractedData": {"possibleVendor": ...,
    "possibleAmount": ..., "possibleDate": ...}}`` with
    ``model_dump(by_alias=True)``.

    Attributes:
        raw_text: Full text recognized by the OCR engine
        extracted_data: Heuristic field guesses
    """

    raw_text: str = ""
    extracted_data: ExtractedReceiptData = Field(default_factory=ExtractedReceiptData)


class ExpenseDraft(BaseDataModel):
    """Unsaved expense pre-filled from a receipt extraction.

    Attributes:
        name: Expense name (the vendor guess when available)
        project_id: Optional project the expense is booked against
        period_start: Expense period start (the receipt date when readable)
        period_end: Expense period end
        description: Free text, carries the amount guess
        image_url: Location of the uploaded receipt image
        ocr_data: Raw extraction result for later review
    """

    name: str = Field(..., min_length=1)
    project_id: Optional[str] = None
    period_start: Optional[dt.date] = None
    period_end: Optional[dt.date] = None
    description: Optional[str] = None
    image_url: Optional[str] = None
    ocr_data: Optional[Dict[str, Any]] = None
