import pytest
from decimal import Decimal
from unittest.mock import AsyncMock
from rest_framework.test import APIClient

from apps.bills.domain import BillDraft, BillSnapshot, BillStatus, DraftItem, ItemSnapshot
from apps.bills.services import finalize_draft
from apps.groups.models import Group
from apps.people.models import Person
from apps.people.services import get_current_user


RECEIPT_JSON = """{
    "restaurantName": "Spice Route",
    "items": [
        {"name": "Paneer Tikka", "price": 240, "quantity": 1},
        {"name": "Butter Naan", "price": 45.5, "quantity": 4}
    ],
    "totalTax": 21.1,
    "totalServiceCharge": 22
}"""


def make_item(item_id, price, quantity=1, assigned=()):
    """Build an item snapshot for calculator tests."""
    return ItemSnapshot(
        id=item_id,
        name=item_id,
        price=Decimal(str(price)),
        quantity=quantity,
        assigned_person_ids=frozenset(assigned),
    )


def make_bill(items, tax=0, service_charge=0, participant_ids=(), status=BillStatus.SETTLED, bill_id='bill'):
    """Build a bill snapshot for calculator tests."""
    return BillSnapshot(
        id=bill_id,
        title=bill_id,
        items=tuple(items),
        tax=Decimal(str(tax)),
        service_charge=Decimal(str(service_charge)),
        participant_ids=tuple(participant_ids),
        status=status,
    )


@pytest.fixture
def api_client():
    """Return an API client. The app has no authentication."""
    return APIClient()


@pytest.fixture
def me(db):
    """Return the current device user."""
    return get_current_user()


@pytest.fixture
def alice(db):
    """Create and return a contact."""
    return Person.objects.create(name='Alice', color_name='pink-500')


@pytest.fixture
def bob(db):
    """Create and return a second contact."""
    return Person.objects.create(name='Bob', color_name='teal-500')


@pytest.fixture
def group(db, me, alice, bob):
    """Create a group with the current user and both contacts."""
    group = Group.objects.create(name='Flatmates')
    group.members.set([me, alice, bob])
    return group


@pytest.fixture
def draft(me, alice):
    """Return a two-item draft: pizza shared by me and Alice, wine for Alice."""
    return BillDraft(
        title='Pizza Night',
        items=[
            DraftItem(name='Pizza', price=Decimal('20.00'), quantity=2, assigned_person_ids=[me.id, alice.id]),
            DraftItem(name='Wine', price=Decimal('30.00'), quantity=1, assigned_person_ids=[alice.id]),
        ],
        tax=Decimal('7.00'),
        service_charge=Decimal('0.00'),
    )


@pytest.fixture
def settled_bill(draft, me, alice):
    """Persist the draft as a settled bill."""
    return finalize_draft(draft=draft, participant_ids=[me.id, alice.id], payer_id=me.id)


@pytest.fixture
def extraction_client():
    """Return a mock extraction client answering with a valid receipt."""
    client = AsyncMock()
    client.extract.return_value = RECEIPT_JSON
    return client
