"""Tests for the Tesseract OCR engine adapter."""

import asyncio
from unittest.mock import MagicMock, patch

import pytest

from flowchain.ocr.engine import OCREngine, TesseractOCREngine


class TestTesseractOCREngine:
    """Test TesseractOCREngine."""

    @patch("flowchain.ocr.engine.pytesseract")
    @patch("flowchain.ocr.engine.Image")
    def test_recognize_runs_pytesseract(self, mock_image, mock_pytesseract):
        image = MagicMock()
        mock_image.open.return_value.__enter__.return_value = image
        mock_pytesseract.image_to_string.return_value = "Corner Cafe\n12.00"

        text = asyncio.run(TesseractOCREngine().recognize("receipt.png", "eng"))

        assert text == "Corner Cafe\n12.00"
        mock_image.open.assert_called_once_with("receipt.png")
        mock_pytesseract.image_to_string.assert_called_once_with(image, lang="eng")

    @patch("flowchain.ocr.engine.pytesseract")
    @patch("flowchain.ocr.engine.Image")
    def test_open_failure_propagates(self, mock_image, mock_pytesseract):
        mock_image.open.side_effect = OSError("cannot identify image file")

        with pytest.raises(OSError):
            asyncio.run(TesseractOCREngine().recognize("notes.txt"))

        mock_pytesseract.image_to_string.assert_not_called()

    @patch("flowchain.ocr.engine.pytesseract")
    def test_custom_tesseract_cmd(self, mock_pytesseract):
        engine = TesseractOCREngine(tesseract_cmd="/opt/tesseract/bin/tesseract")

        assert engine.tesseract_cmd == "/opt/tesseract/bin/tesseract"
        assert mock_pytesseract.pytesseract.tesseract_cmd == "/opt/tesseract/bin/tesseract"

    def test_engine_interface_is_abstract(self):
        with pytest.raises(TypeError):
            OCREngine()
