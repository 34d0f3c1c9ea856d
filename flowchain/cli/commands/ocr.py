"""Receipt OCR command."""

import asyncio
from typing import Optional

import click

from flowchain.cli.error_handlers import with_error_handling
from flowchain.cli.utils.formatters import (
    format_info,
    format_json,
    format_table,
    format_warning,
)
from flowchain.config.settings import get_config
from flowchain.ocr.engine import TesseractOCREngine
from flowchain.ocr.receipt_extractor import ReceiptTextExtractor, build_expense_draft


@click.command(name="ocr")
@click.argument("image", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--language",
    type=str,
    default=None,
    help="Tesseract language model (optional, uses OCR_LANGUAGE from config)",
)
@click.option("--project", default=None, help="Project id for the expense draft")
@click.option(
    "--expense-draft", is_flag=True, help="Print the pre-filled expense instead"
)
@click.option("--json", "as_json", is_flag=True, help="Print the raw JSON shape")
@click.option("--debug", is_flag=True, help="Show full stack traces on errors")
def ocr_receipt(
    image: str,
    language: Optional[str],
    project: Optional[str],
    expense_draft: bool,
    as_json: bool,
    debug: bool,
):
    """Extract vendor, amount and date guesses from a receipt IMAGE.

    The guesses are a pre-fill aid; review them before saving an expense.

    Example:
        flowchain ocr receipt.png
        flowchain ocr receipt.png --expense-draft --project p1 --json
    """
    with with_error_handling(debug):
        settings = get_config()
        extractor = ReceiptTextExtractor(
            TesseractOCREngine(tesseract_cmd=settings.tesseract_cmd),
            language=language or settings.ocr_language,
        )

        click.echo(format_info(f"Running OCR on {image}..."), err=True)
        extraction = asyncio.run(extractor.extract(image))

        if expense_draft:
            draft = build_expense_draft(extraction, project_id=project, image_url=image)
            payload = draft.model_dump(by_alias=True, mode="json")
        else:
            payload = extraction.model_dump(by_alias=True)

        if as_json:
            click.echo(format_json(payload))
            return

        fields = payload if expense_draft else payload["extractedData"]
        rows = [[k, v] for k, v in fields.items() if k != "ocrData"]
        click.echo(format_table(["Field", "Value"], rows))

        if not any(extraction.extracted_data.model_dump().values()):
            click.echo(format_warning("No vendor, amount or date could be recognized"))
