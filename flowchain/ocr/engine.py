"""OCR engine adapters.

The receipt extractor only needs ``recognize(image_path, language)``.
:class:`TesseractOCREngine` implements it with pytesseract; recognition is
CPU bound and runs in the event loop's default executor so the caller can
await it.
"""

import asyncio
import functools
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional, Union

import pytesseract
from PIL import Image

logger = logging.getLogger(__name__)

ImagePath = Union[str, Path]


class OCREngine(ABC):
    """Black-box text recognizer."""

    @abstractmethod
    async def recognize(self, image_path: ImagePath, language: str = "eng") -> str:
        """Recognize the text of an image.

        Args:
            image_path: Location of the image file
            language: Tesseract language model name

        Returns:
            Recognized text as a single multi-line string
        """


class TesseractOCREngine(OCREngine):
    """OCR engine backed by the Tesseract binary through pytesseract.

    Attributes:
        tesseract_cmd: Optional path of the tesseract executable

    Example:
        >>> engine = TesseractOCREngine()
        >>> text = await engine.recognize("receipt.png", "eng")
    """

    def __init__(self, tesseract_cmd: Optional[str] = None):
        self.tesseract_cmd = tesseract_cmd
        if tesseract_cmd:
            pytesseract.pytesseract.tesseract_cmd = tesseract_cmd

    async def recognize(self, image_path: ImagePath, language: str = "eng") -> str:
        loop = asyncio.get_running_loop()
        logger.info(f"Running OCR on {image_path} (language={language})")
        text = await loop.run_in_executor(
            None, functools.partial(self._recognize_sync, image_path, language)
        )
        logger.debug(f"OCR recognized {len(text)} characters")
        return text

    @staticmethod
    def _recognize_sync(image_path: ImagePath, language: str) -> str:
        with Image.open(image_path) as image:
            return pytesseract.image_to_string(image, lang=language)
