"""OCR-assisted expense entry."""

from flowchain.ocr.engine import OCREngine, TesseractOCREngine
from flowchain.ocr.receipt_extractor import (
    OCRProcessingError,
    ReceiptTextExtractor,
    build_expense_draft,
    parse_receipt_date,
    parse_receipt_text,
)

__all__ = [
    "OCREngine",
    "OCRProcessingError",
    "ReceiptTextExtractor",
    "TesseractOCREngine",
    "build_expense_draft",
    "parse_receipt_date",
    "parse_receipt_text",
]
