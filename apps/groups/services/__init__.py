"""
Groups app services layer.

Services contain business logic and orchestrate operations across models.
"""

from .exceptions import (
    GroupsServiceError,
    GroupNotFoundError,
    InvalidGroupError,
)

from .group_management import (
    create_group,
    get_group_by_id,
    delete_group,
    list_groups,
    record_group_bills,
)


__all__ = [
    # Exceptions
    'GroupsServiceError',
    'GroupNotFoundError',
    'InvalidGroupError',

    # Group Management
    'create_group',
    'get_group_by_id',
    'delete_group',
    'list_groups',
    'record_group_bills',
]
