"""
Person management service.

The current device user is passed around explicitly as a Person (or its id);
nothing in the project keeps it in module state.
"""

import logging
import random
from typing import Iterable, List, Optional

from django.conf import settings
from django.db import transaction
from django.db.models import QuerySet

from apps.people.models import Person, CURRENT_USER_ID, VIBRANT_COLORS

from .exceptions import (
    PersonNotFoundError,
    InvalidPersonError,
    CannotDeleteCurrentUserError,
)

logger = logging.getLogger(__name__)

REMOVED_CONTACT_NAME = 'Removed contact'
REMOVED_CONTACT_COLOR = 'slate-500'


def get_current_user() -> Person:
    """
    Return the device owner, creating it on first use.

    Returns:
        Person with the reserved ``local_me`` id
    """
    person, created = Person.objects.get_or_create(
        id=CURRENT_USER_ID,
        defaults={
            'name': settings.CURRENT_USER_NAME,
            'color_name': 'indigo-500',
        },
    )
    if created:
        logger.info("Created current user %r", person.name)
    return person


def create_person(*, name: str, color_name: Optional[str] = None) -> Person:
    """
    Add a contact.

    Args:
        name: Display name (required, stripped)
        color_name: Display colour tag; a random vibrant one when omitted

    Returns:
        Created Person

    Raises:
        InvalidPersonError: If name is blank
    """
    name = (name or '').strip()
    if not name:
        raise InvalidPersonError("Name is required")

    person = Person.objects.create(
        name=name,
        color_name=color_name or random.choice(VIBRANT_COLORS),
    )
    logger.info("Created person %s (%s)", person.id, person.name)
    return person


def get_person_by_id(*, person_id: str) -> Person:
    """
    Raises:
        PersonNotFoundError: If person doesn't exist
    """
    try:
        return Person.objects.get(id=person_id)
    except Person.DoesNotExist:
        raise PersonNotFoundError(f"Person with ID {person_id} not found")


@transaction.atomic
def delete_person(*, person_id: str) -> None:
    """
    Remove a contact.

    Past bills keep their recorded amounts; they only reference the id,
    which resolves to a placeholder afterwards.

    Raises:
        CannotDeleteCurrentUserError: If person_id is the device owner
        PersonNotFoundError: If person doesn't exist
    """
    if person_id == CURRENT_USER_ID:
        raise CannotDeleteCurrentUserError("The current user cannot be removed")

    deleted, _ = Person.objects.filter(id=person_id).delete()
    if not deleted:
        raise PersonNotFoundError(f"Person with ID {person_id} not found")
    logger.info("Deleted person %s", person_id)


def list_friends() -> QuerySet[Person]:
    """All contacts except the current user, sorted by name."""
    return Person.objects.exclude(id=CURRENT_USER_ID).order_by('name')


def resolve_participants(person_ids: Iterable[str]) -> List[dict]:
    """
    Resolve stored participant ids against the live registry.

    Order of ``person_ids`` is preserved. Ids with no live Person come back
    as a "Removed contact" placeholder so past bills still render.

    Returns:
        List of dicts with id, name, color_name and is_removed
    """
    person_ids = list(person_ids)
    people = Person.objects.in_bulk(person_ids)

    resolved = []
    for person_id in person_ids:
        person = people.get(person_id)
        if person is None:
            resolved.append({
                'id': person_id,
                'name': REMOVED_CONTACT_NAME,
                'color_name': REMOVED_CONTACT_COLOR,
                'is_removed': True,
            })
        else:
            resolved.append({
                'id': person.id,
                'name': person.name,
                'color_name': person.color_name,
                'is_removed': False,
            })
    return resolved
