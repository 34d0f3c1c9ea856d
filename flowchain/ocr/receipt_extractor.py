"""Receipt text extraction for expense form pre-fill.

This module turns OCR text of a receipt or invoice into best-effort guesses
for vendor, amount and date. The heuristic is a single pass over the
non-empty lines where the first matching line wins for each field:

- amount: first line containing an amount-like token (``$`` and ``,``
  removed from the guess)
- date: first line containing a ``M/D/Y`` or ``M-D-Y`` token
- vendor: first line that matches neither pattern and is longer than 3
  and shorter than 50 characters

Only ASCII digits count for amounts and dates. A field nothing matched
stays None; that is not an error.
"""

import datetime as dt
import logging
import re
from typing import Optional

from flowchain.models.receipt import (
    ExpenseDraft,
    ExtractedReceiptData,
    ReceiptExtraction,
)
from flowchain.ocr.engine import ImagePath, OCREngine

logger = logging.getLogger(__name__)

AMOUNT_PATTERN = re.compile(r"\$?\d+[,.]?\d*\.?\d{2}", re.ASCII)
DATE_PATTERN = re.compile(r"\b\d{1,2}[/-]\d{1,2}[/-]\d{2,4}\b", re.ASCII)

VENDOR_MIN_LENGTH = 3
VENDOR_MAX_LENGTH = 50

RECEIPT_DATE_FORMATS = ("%m/%d/%Y", "%m/%d/%y", "%m-%d-%Y", "%m-%d-%y")


class OCRProcessingError(Exception):
    """Raised when the OCR engine fails on an image."""

    def __init__(self, message: str = "Failed to process image with OCR"):
        super().__init__(message)


def parse_receipt_text(text: str) -> ReceiptExtraction:
    """Extract vendor, amount and date guesses from recognized text.

    Args:
        text: Multi-line text recognized from a receipt

    Returns:
        ReceiptExtraction with the raw text and the field guesses

    Example:
        >>> result = parse_receipt_text("Acme Hardware\\n03/15/2024\\nTOTAL $1,234.56")
        >>> result.extracted_data.possible_vendor
        'Acme Hardware'
        >>> result.extracted_data.possible_amount
        '2024'
    """
    data = ExtractedReceiptData()
    lines = [line for line in (text or "").split("\n") if line.strip()]

    for line in lines:
        amount_match = AMOUNT_PATTERN.search(line)
        date_match = DATE_PATTERN.search(line)

        if data.possible_amount is None and amount_match:
            data.possible_amount = amount_match.group(0).replace("$", "").replace(",", "")

        if data.possible_date is None and date_match:
            data.possible_date = date_match.group(0)

        if (
            data.possible_vendor is None
            and VENDOR_MIN_LENGTH < len(line) < VENDOR_MAX_LENGTH
            and not amount_match
            and not date_match
        ):
            data.possible_vendor = line.strip()

    logger.debug(
        f"Receipt guesses from {len(lines)} lines: vendor={data.possible_vendor!r}, "
        f"amount={data.possible_amount!r}, date={data.possible_date!r}"
    )
    return ReceiptExtraction(raw_text=text or "", extracted_data=data)


def parse_receipt_date(value: Optional[str]) -> Optional[dt.date]:
    """Read a receipt date guess as month/day/year.

    Args:
        value: Date guess such as ``"03/15/2024"`` or ``"3-15-24"``

    Returns:
        The date, or None when the guess is absent or not a valid date
    """
    if not value:
        return None
    for fmt in RECEIPT_DATE_FORMATS:
        try:
            return dt.datetime.strptime(value, fmt).date()
        except ValueError:
            continue
    return None


def build_expense_draft(
    extraction: ReceiptExtraction,
    project_id: Optional[str] = None,
    image_url: Optional[str] = None,
    default_name: str = "Receipt expense",
) -> ExpenseDraft:
    """Pre-fill an expense from a receipt extraction.

    The user is expected to review every field; nothing here is
    authoritative.

    Args:
        extraction: Result of :func:`parse_receipt_text`
        project_id: Optional project to book the expense against
        image_url: Location of the uploaded receipt image
        default_name: Name used when no vendor was found

    Returns:
        Unsaved ExpenseDraft
    """
    guesses = extraction.extracted_data
    receipt_date = parse_receipt_date(guesses.possible_date)

    description = None
    if guesses.possible_amount is not None:
        description = f"Amount: {guesses.possible_amount}"

    return ExpenseDraft(
        name=guesses.possible_vendor or default_name,
        project_id=project_id,
        period_start=receipt_date,
        period_end=receipt_date,
        description=description,
        image_url=image_url,
        ocr_data=extraction.model_dump(by_alias=True),
    )


class ReceiptTextExtractor:
    """Runs OCR on a receipt image and parses the recognized text.

    Attributes:
        engine: OCR engine used for recognition
        language: Language model passed to the engine

    Example:
        >>> extractor = ReceiptTextExtractor(TesseractOCREngine())
        >>> result = await extractor.extract("receipt.png")
        >>> result.model_dump(by_alias=True)["extractedData"]["possibleAmount"]
        '42.50'
    """

    def __init__(self, engine: OCREngine, language: str = "eng"):
        self.engine = engine
        self.language = language

    async def extract(self, image_path: ImagePath) -> ReceiptExtraction:
        """Recognize and parse a receipt image.

        Args:
            image_path: Location of the uploaded image

        Returns:
            ReceiptExtraction with raw text and field guesses

        Raises:
            OCRProcessingError: If the OCR engine fails for any reason
        """
        try:
            text = await self.engine.recognize(image_path, self.language)
        except Exception as e:
            logger.error(f"OCR processing error for {image_path}: {e}")
            raise OCRProcessingError() from e

        return parse_receipt_text(text)
