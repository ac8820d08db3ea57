"""
People app services layer.

Services contain business logic and orchestrate operations across models.
"""

from .exceptions import (
    PeopleServiceError,
    PersonNotFoundError,
    InvalidPersonError,
    CannotDeleteCurrentUserError,
)

from .person_management import (
    REMOVED_CONTACT_NAME,
    get_current_user,
    create_person,
    get_person_by_id,
    delete_person,
    list_friends,
    resolve_participants,
)


__all__ = [
    # Exceptions
    'PeopleServiceError',
    'PersonNotFoundError',
    'InvalidPersonError',
    'CannotDeleteCurrentUserError',

    # Person Management
    'REMOVED_CONTACT_NAME',
    'get_current_user',
    'create_person',
    'get_person_by_id',
    'delete_person',
    'list_friends',
    'resolve_participants',
]
