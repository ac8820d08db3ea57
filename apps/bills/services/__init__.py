"""
Bills app services layer.

Services contain business logic and orchestrate operations across models.
Settlement and aggregation are pure functions over snapshots; everything
that touches the database runs in a transaction.
"""

from apps.bills.exceptions import (
    BillsServiceError,
    IngestionError,
    IngestionUnavailableError,
    IngestionMalformedError,
    IngestionEmptyError,
    ValidationFailedError,
    ItemNotFoundError,
    BillNotFoundError,
    SettledBillImmutableError,
)

from .settlement import (
    Settlement,
    raw_item_share,
    share_of,
    settle,
    unassigned_items,
)

from .bill_management import (
    validate_amounts,
    finalize_draft,
    get_bill,
    list_bills,
    delete_bill,
)

from .extraction_client import (
    ReceiptExtractionClient,
    OpenAIReceiptClient,
)

from .ingestion import (
    parse_extraction,
    draft_from_extraction,
    ingest_receipt,
)

from .assignment import (
    BillEditor,
    EditorState,
)


__all__ = [
    # Exceptions
    'BillsServiceError',
    'IngestionError',
    'IngestionUnavailableError',
    'IngestionMalformedError',
    'IngestionEmptyError',
    'ValidationFailedError',
    'ItemNotFoundError',
    'BillNotFoundError',
    'SettledBillImmutableError',

    # Settlement
    'Settlement',
    'raw_item_share',
    'share_of',
    'settle',
    'unassigned_items',

    # Bill Management
    'validate_amounts',
    'finalize_draft',
    'get_bill',
    'list_bills',
    'delete_bill',

    # Ingestion
    'ReceiptExtractionClient',
    'OpenAIReceiptClient',
    'parse_extraction',
    'draft_from_extraction',
    'ingest_receipt',

    # Editor
    'BillEditor',
    'EditorState',
]
