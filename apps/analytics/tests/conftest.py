import pytest
from decimal import Decimal
from datetime import timedelta
from django.utils import timezone
from rest_framework.test import APIClient

from apps.bills.domain import BillDraft, DraftItem
from apps.bills.models import Bill
from apps.bills.services import finalize_draft
from apps.groups.models import Group
from apps.people.models import Person
from apps.people.services import get_current_user


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
def analytics_bills(me, alice):
    """
    Create four settled bills, oldest first.

    My shares: 55, 110, 0, 10 (total 175). Alice's: 55, 0, 30, 0.
    """
    specs = [
        # (title, items, tax)
        ('Dinner', [('Thali', '100', [me.id, alice.id])], '10'),
        ('Lunch', [('Biryani', '100', [me.id]), ('Lassi', '50', [])], '15'),
        ('Snacks', [('Samosa', '30', [alice.id])], '0'),
        ('Coffee', [('Filter Coffee', '10', [me.id])], '0'),
    ]

    bills = []
    now = timezone.now()
    for days_ago, (title, items, tax) in zip(range(len(specs), 0, -1), specs):
        draft = BillDraft(
            title=title,
            items=[
                DraftItem(name=name, price=Decimal(price), assigned_person_ids=assigned)
                for name, price, assigned in items
            ],
            tax=Decimal(tax),
        )
        bill = finalize_draft(draft=draft, participant_ids=[me.id, alice.id], payer_id=me.id)
        # settled bills refuse save(); backdate through the queryset
        Bill.objects.filter(id=bill.id).update(date=now - timedelta(days=days_ago))
        bills.append(bill)
    return bills


@pytest.fixture
def analytics_group(me, alice):
    """Create a group."""
    group = Group.objects.create(name='Office')
    group.members.set([me, alice])
    return group
