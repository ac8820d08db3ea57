"""
AI receipt extraction client.

Talks to any OpenAI-compatible chat completions endpoint. The defaults in
settings point at Gemini's compatibility endpoint.
"""

import base64
import logging
from typing import Optional, Protocol

from django.conf import settings
from openai import AsyncOpenAI, OpenAIError

from apps.bills.exceptions import IngestionUnavailableError

logger = logging.getLogger(__name__)


RECEIPT_PROMPT = """\
Analyze this receipt image. Extract every line item with its name, unit price and quantity.
If the quantity is not printed, infer it or use 1.
Do NOT put tax, service charge or total lines in "items".
Put the sum of all taxes (CGST, SGST, VAT, etc.) in "totalTax" and any service charge
in "totalServiceCharge"; use 0 when absent.
Put the restaurant or store name in "restaurantName".

Return ONLY raw JSON in exactly this format, without explanations or markdown:
{
    "restaurantName": "string",
    "items": [{"name": "string", "price": number, "quantity": number}],
    "totalTax": number,
    "totalServiceCharge": number
}
"""


class ReceiptExtractionClient(Protocol):
    async def extract(self, image: bytes, *, mime_type: str = 'image/jpeg') -> Optional[str]:
        """Return the raw model text for a receipt image, or None if empty."""
        ...


class OpenAIReceiptClient:
    """
    Extraction client backed by the ``openai`` SDK.

    One request per scan, never retried. Any SDK error (connection,
    timeout, HTTP status) is raised as ``IngestionUnavailableError``.
    Call ``close`` once done; the connection pool belongs to the event
    loop that made the request.
    """

    def __init__(self, *, api_key: str, model: str, base_url: Optional[str] = None, timeout: float = 60.0):
        self.model = model
        self._client = AsyncOpenAI(
            api_key=api_key,
            base_url=base_url or None,
            timeout=timeout,
            max_retries=0,
        )

    @classmethod
    def from_settings(cls) -> 'OpenAIReceiptClient':
        return cls(
            api_key=settings.RECEIPT_AI_API_KEY,
            model=settings.RECEIPT_AI_MODEL,
            base_url=settings.RECEIPT_AI_BASE_URL,
            timeout=settings.RECEIPT_AI_TIMEOUT,
        )

    async def extract(self, image: bytes, *, mime_type: str = 'image/jpeg') -> Optional[str]:
        encoded = base64.b64encode(image).decode('ascii')
        try:
            response = await self._client.chat.completions.create(
                model=self.model,
                messages=[{
                    'role': 'user',
                    'content': [
                        {'type': 'text', 'text': RECEIPT_PROMPT},
                        {'type': 'image_url', 'image_url': {'url': f'data:{mime_type};base64,{encoded}'}},
                    ],
                }],
                response_format={'type': 'json_object'},
            )
        except OpenAIError as e:
            logger.warning("Receipt extraction request failed: %s", e)
            raise IngestionUnavailableError(f"Receipt extraction service failed: {e}") from e

        if not response.choices:
            return None
        return response.choices[0].message.content

    async def close(self) -> None:
        """Release the SDK's HTTP connection pool."""
        await self._client.close()
