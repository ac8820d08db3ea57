"""Domain-specific exceptions for people services."""


class PeopleServiceError(Exception):
    """Base exception for people services."""
    pass


class PersonNotFoundError(PeopleServiceError):
    """Raised when a person does not exist."""
    pass


class InvalidPersonError(PeopleServiceError):
    """Raised when person data is invalid (e.g. blank name)."""
    pass


class CannotDeleteCurrentUserError(PeopleServiceError):
    """Raised when attempting to delete the device owner."""
    pass
