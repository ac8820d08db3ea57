"""
Domain exceptions for bills app.

This module defines the exception hierarchy for bill-related errors,
providing specific error types for better error handling and testing.

Exception Hierarchy:
    BillsServiceError (base)
    ├── IngestionError
    │   ├── IngestionUnavailableError
    │   ├── IngestionMalformedError
    │   └── IngestionEmptyError
    ├── ValidationFailedError
    ├── ItemNotFoundError
    ├── BillNotFoundError
    └── SettledBillImmutableError
"""


class BillsServiceError(Exception):
    """Base exception for bill service errors."""
    pass


class IngestionError(BillsServiceError):
    """Receipt extraction failed; the current draft is left untouched."""
    kind = 'ingestion_failed'


class IngestionUnavailableError(IngestionError):
    """The extraction service could not be reached or returned an error."""
    kind = 'unavailable'


class IngestionMalformedError(IngestionError):
    """The extraction response is not JSON of the expected shape."""
    kind = 'malformed'


class IngestionEmptyError(IngestionError):
    """The extraction service returned no text."""
    kind = 'empty'


class ValidationFailedError(BillsServiceError):
    """Raised when a draft edit or finalize request is invalid."""
    pass


class ItemNotFoundError(BillsServiceError):
    """Raised when a draft item id does not exist."""
    pass


class BillNotFoundError(BillsServiceError):
    """Raised when a bill record does not exist."""
    pass


class SettledBillImmutableError(BillsServiceError):
    """Raised when something tries to modify a settled bill."""
    pass
