"""
Receipt ingestion.

Turns the AI service's answer into a fresh draft. Every failure raises one
of the ``Ingestion*Error`` kinds before a draft exists, so a failed scan
never leaves a half-filled bill behind.
"""

import json
import logging
import re

from django.conf import settings

from apps.bills.domain import BillDraft, DraftItem, ReceiptExtraction
from apps.bills.exceptions import IngestionEmptyError, IngestionMalformedError
from apps.bills.serializers import ReceiptExtractionSerializer

from .extraction_client import ReceiptExtractionClient

logger = logging.getLogger(__name__)

CODE_FENCE_RE = re.compile(r'^```[\w-]*[ \t]*\n(.*?)\n?[ \t]*```$', re.DOTALL)


def strip_code_fences(text: str) -> str:
    """Remove a surrounding ```json ... ``` block if present."""
    text = text.strip()
    match = CODE_FENCE_RE.match(text)
    if match:
        return match.group(1).strip()
    return text


def parse_extraction(text) -> ReceiptExtraction:
    """
    Parse and validate the raw model output.

    Args:
        text: Model output, possibly wrapped in a Markdown code fence

    Returns:
        ReceiptExtraction

    Raises:
        IngestionEmptyError: If text is None or blank
        IngestionMalformedError: If text is not JSON of the expected shape
    """
    if text is None or not text.strip():
        raise IngestionEmptyError("Receipt extraction returned no text")

    try:
        payload = json.loads(strip_code_fences(text))
    except ValueError as e:
        raise IngestionMalformedError(f"Receipt extraction returned invalid JSON: {e}") from e

    serializer = ReceiptExtractionSerializer(data=payload)
    if not serializer.is_valid():
        raise IngestionMalformedError(f"Unexpected receipt format: {serializer.errors}")
    return serializer.to_extraction()


def draft_from_extraction(extraction: ReceiptExtraction) -> BillDraft:
    """
    Build a draft with every item unassigned.

    The title falls back to ``SCANNED_BILL_TITLE`` when no restaurant name
    was found.
    """
    title = (extraction.restaurant_name or '').strip() or settings.SCANNED_BILL_TITLE
    return BillDraft(
        title=title,
        items=[
            DraftItem(name=raw.name, price=raw.price, quantity=raw.quantity)
            for raw in extraction.items
        ],
        tax=extraction.total_tax,
        service_charge=extraction.total_service_charge,
    )


async def ingest_receipt(
    image: bytes,
    *,
    client: ReceiptExtractionClient,
    mime_type: str = 'image/jpeg',
) -> BillDraft:
    """
    Scan a receipt image into a new draft.

    Makes exactly one call to the extraction service. Cancellation and
    timeouts are up to the caller.

    Raises:
        IngestionUnavailableError: If the service call fails
        IngestionEmptyError: If the service returns no text
        IngestionMalformedError: If the response cannot be parsed
    """
    text = await client.extract(image, mime_type=mime_type)
    logger.debug("Raw receipt extraction response: %r", text)

    try:
        extraction = parse_extraction(text)
    except (IngestionEmptyError, IngestionMalformedError) as e:
        logger.warning("Receipt ingestion failed (%s): %s", e.kind, e)
        raise

    draft = draft_from_extraction(extraction)
    logger.info("Ingested receipt %r with %d items", draft.title, len(draft.items))
    return draft
