"""
Tests for receipt ingestion.

The extraction service is replaced with an AsyncMock; coroutines are driven
with async_to_sync.
"""

import pytest
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock, patch

import openai
from asgiref.sync import async_to_sync
from django.test import override_settings

from apps.bills.domain import BillDraft, DraftItem
from apps.bills.exceptions import (
    IngestionEmptyError,
    IngestionError,
    IngestionMalformedError,
    IngestionUnavailableError,
)
from apps.bills.services import BillEditor, OpenAIReceiptClient, ingest_receipt, parse_extraction
from apps.bills.services.ingestion import strip_code_fences
from apps.people.models import CURRENT_USER_ID

from .conftest import RECEIPT_JSON


IMAGE = b'\xff\xd8\xff\xe0fake-jpeg'


# =============================================================================
# Parsing
# =============================================================================

class TestStripCodeFences:

    def test_plain_text_unchanged(self):
        assert strip_code_fences('  {"a": 1} ') == '{"a": 1}'

    def test_json_fence(self):
        assert strip_code_fences('```json\n{"a": 1}\n```') == '{"a": 1}'

    def test_bare_fence(self):
        assert strip_code_fences('```\n{"a": 1}\n```\n') == '{"a": 1}'


class TestParseExtraction:
    """Tests for parse_extraction."""

    def test_valid_payload(self):
        extraction = parse_extraction(RECEIPT_JSON)

        assert extraction.restaurant_name == 'Spice Route'
        assert [item.name for item in extraction.items] == ['Paneer Tikka', 'Butter Naan']
        assert extraction.items[1].price == Decimal('45.5')
        assert extraction.items[1].quantity == 4
        assert extraction.total_tax == Decimal('21.1')
        assert extraction.total_service_charge == Decimal('22')

    def test_fenced_payload(self):
        extraction = parse_extraction(f"```json\n{RECEIPT_JSON}\n```")

        assert len(extraction.items) == 2

    def test_missing_quantity_defaults_to_one(self):
        extraction = parse_extraction(
            '{"items": [{"name": "Chai", "price": 20}], "totalTax": 0, "totalServiceCharge": 0}'
        )

        assert extraction.items[0].quantity == 1
        assert extraction.restaurant_name is None

    @pytest.mark.parametrize('text', [None, '', '   \n'])
    def test_empty(self, text):
        with pytest.raises(IngestionEmptyError) as exc_info:
            parse_extraction(text)

        assert exc_info.value.kind == 'empty'

    @pytest.mark.parametrize('text', [
        'Sorry, I cannot read this receipt.',
        '{"items": [}',
        '[1, 2, 3]',
        '{"items": [], "totalTax": 0}',
        '{"items": [{"name": "Chai", "price": -20}], "totalTax": 0, "totalServiceCharge": 0}',
        '{"items": [{"name": "Chai", "price": 20, "quantity": 0}], "totalTax": 0, "totalServiceCharge": 0}',
        '{"items": [{"name": "Chai", "price": "lots"}], "totalTax": 0, "totalServiceCharge": 0}',
    ])
    def test_malformed(self, text):
        with pytest.raises(IngestionMalformedError) as exc_info:
            parse_extraction(text)

        assert exc_info.value.kind == 'malformed'
        assert isinstance(exc_info.value, IngestionError)


# =============================================================================
# ingest_receipt
# =============================================================================

class TestIngestReceipt:
    """Tests for the async ingestion entry point."""

    def test_builds_unassigned_draft(self, extraction_client):
        draft = async_to_sync(ingest_receipt)(IMAGE, client=extraction_client, mime_type='image/png')

        extraction_client.extract.assert_awaited_once_with(IMAGE, mime_type='image/png')
        assert draft.title == 'Spice Route'
        assert draft.tax == Decimal('21.1')
        assert draft.service_charge == Decimal('22')
        assert draft.subtotal == Decimal('422.0')
        assert all(item.assigned_person_ids == [] for item in draft.items)
        assert len({item.id for item in draft.items}) == 2

    @override_settings(SCANNED_BILL_TITLE='Scanned')
    def test_blank_restaurant_name_gets_default_title(self):
        client = AsyncMock()
        client.extract.return_value = (
            '{"restaurantName": "  ", "items": [{"name": "Chai", "price": 20}], '
            '"totalTax": 0, "totalServiceCharge": 0}'
        )

        draft = async_to_sync(ingest_receipt)(IMAGE, client=client)

        assert draft.title == 'Scanned'

    def test_unavailable_propagates(self):
        client = AsyncMock()
        client.extract.side_effect = IngestionUnavailableError('connection refused')

        with pytest.raises(IngestionUnavailableError):
            async_to_sync(ingest_receipt)(IMAGE, client=client)

        client.extract.assert_awaited_once()


class TestEditorScan:
    """A failed scan never touches the current draft."""

    @pytest.fixture
    def editor(self):
        editor = BillEditor(current_user_id=CURRENT_USER_ID)
        editor.load(BillDraft(title='Manual', items=[DraftItem(name='Tea', price=Decimal('2'))]))
        return editor

    def test_scan_replaces_draft(self, editor, extraction_client):
        draft = async_to_sync(editor.scan)(IMAGE, client=extraction_client)

        assert editor.draft is draft
        assert editor.draft.title == 'Spice Route'

    @pytest.mark.parametrize('response, error', [
        (None, IngestionEmptyError),
        ('', IngestionEmptyError),
        ('not json', IngestionMalformedError),
    ])
    def test_failed_scan_keeps_draft(self, editor, response, error):
        before = editor.draft
        client = AsyncMock()
        client.extract.return_value = response

        with pytest.raises(error):
            async_to_sync(editor.scan)(IMAGE, client=client)

        assert editor.draft is before
        assert editor.draft.title == 'Manual'
        assert [item.name for item in editor.draft.items] == ['Tea']

    def test_unavailable_scan_keeps_empty_editor_empty(self):
        editor = BillEditor(current_user_id=CURRENT_USER_ID)
        client = AsyncMock()
        client.extract.side_effect = IngestionUnavailableError('down')

        with pytest.raises(IngestionUnavailableError):
            async_to_sync(editor.scan)(IMAGE, client=client)

        assert editor.draft is None


# =============================================================================
# OpenAIReceiptClient
# =============================================================================

class TestOpenAIReceiptClient:
    """The SDK call is mocked; no network access."""

    def make_response(self, content):
        message = MagicMock(content=content)
        return MagicMock(choices=[MagicMock(message=message)])

    def test_sends_image_as_data_url(self):
        client = OpenAIReceiptClient(api_key='test', model='test-model')
        create = AsyncMock(return_value=self.make_response(RECEIPT_JSON))

        with patch.object(client._client.chat.completions, 'create', create):
            text = async_to_sync(client.extract)(b'abc', mime_type='image/png')

        assert text == RECEIPT_JSON
        kwargs = create.await_args.kwargs
        assert kwargs['model'] == 'test-model'
        assert kwargs['response_format'] == {'type': 'json_object'}
        image_part = kwargs['messages'][0]['content'][1]
        assert image_part['image_url']['url'] == 'data:image/png;base64,YWJj'

    def test_no_choices_returns_none(self):
        client = OpenAIReceiptClient(api_key='test', model='test-model')
        create = AsyncMock(return_value=MagicMock(choices=[]))

        with patch.object(client._client.chat.completions, 'create', create):
            assert async_to_sync(client.extract)(b'abc') is None

    def test_sdk_errors_become_unavailable(self):
        client = OpenAIReceiptClient(api_key='test', model='test-model')
        create = AsyncMock(side_effect=openai.OpenAIError("Connection error."))

        with patch.object(client._client.chat.completions, 'create', create):
            with pytest.raises(IngestionUnavailableError) as exc_info:
                async_to_sync(client.extract)(b'abc')

        assert exc_info.value.kind == 'unavailable'

    def test_close_releases_sdk_client(self):
        client = OpenAIReceiptClient(api_key='test', model='test-model')

        async_to_sync(client.close)()

        assert client._client.is_closed()

    @override_settings(RECEIPT_AI_MODEL='configured-model', RECEIPT_AI_API_KEY='secret')
    def test_from_settings(self):
        client = OpenAIReceiptClient.from_settings()

        assert client.model == 'configured-model'
