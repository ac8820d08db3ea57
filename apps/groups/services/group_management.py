"""
Group management service.

Handles group CRUD operations with proper transaction safety.
"""

import logging
from typing import Iterable, List

from django.db import transaction
from django.db.models import F, QuerySet

from apps.groups.models import Group
from apps.people.models import Person

from .exceptions import (
    GroupNotFoundError,
    InvalidGroupError,
)

logger = logging.getLogger(__name__)


@transaction.atomic
def create_group(*, name: str, member_ids: Iterable[str]) -> Group:
    """
    Create a new group of contacts.

    Args:
        name: Group name (required)
        member_ids: Ids of the people in the group (at least one)

    Returns:
        Created Group instance

    Raises:
        InvalidGroupError: If name is blank, no members are given,
            or a member id is unknown
    """
    name = (name or '').strip()
    if not name:
        raise InvalidGroupError("Group name is required")

    member_ids = list(dict.fromkeys(member_ids))
    if not member_ids:
        raise InvalidGroupError("A group needs at least one member")

    members = list(Person.objects.filter(id__in=member_ids))
    found = {person.id for person in members}
    missing = [person_id for person_id in member_ids if person_id not in found]
    if missing:
        raise InvalidGroupError(f"Unknown people: {', '.join(missing)}")

    group = Group.objects.create(name=name)
    group.members.set(members)

    logger.info("Created group %s with %d members", group.id, len(members))
    return group


def get_group_by_id(*, group_id: str) -> Group:
    """
    Get a group by ID.

    Raises:
        GroupNotFoundError: If group doesn't exist
    """
    try:
        return Group.objects.prefetch_related('members').get(id=group_id)
    except Group.DoesNotExist:
        raise GroupNotFoundError(f"Group with ID {group_id} not found")


@transaction.atomic
def delete_group(*, group_id: str) -> None:
    """
    Delete a group. Its members are left untouched.

    Raises:
        GroupNotFoundError: If group doesn't exist
    """
    deleted, _ = Group.objects.filter(id=group_id).delete()
    if not deleted:
        raise GroupNotFoundError(f"Group with ID {group_id} not found")
    logger.info("Deleted group %s", group_id)


def list_groups() -> QuerySet[Group]:
    """All groups sorted by name, members prefetched."""
    return Group.objects.prefetch_related('members').order_by('name')


def record_group_bills(*, group_ids: Iterable[str]) -> None:
    """Increment the settled-bill counter of each group."""
    group_ids: List[str] = list(set(group_ids))
    if group_ids:
        Group.objects.filter(id__in=group_ids).update(total_bills=F('total_bills') + 1)
