"""
Analytics Module
=================

This module aggregates settled bills into spending figures for the
dashboard.

Functions:
    total_spend: Sum of one person's shares across settled bills.

Classes:
    SpendAnalytics: Static methods that load bills from the store.

Example:
    Getting the current user's spend::

        from apps.analytics.analytics import SpendAnalytics

        spend = SpendAnalytics.person_spend(me.id)
        print(f"Total spent: {format_amount(spend)}")

Note:
    This module is read-only and doesn't modify any data. Drafts never
    count toward spending; only bills with status ``SETTLED`` do.
"""

import logging
from decimal import Decimal
from typing import Iterable

from apps.bills.domain import BillSnapshot, BillStatus
from apps.bills.models import Bill
from apps.bills.money import ZERO
from apps.bills.services import share_of
from apps.groups.models import Group

logger = logging.getLogger(__name__)

RECENT_BILLS_LIMIT = 3


def total_spend(person_id: str, bills: Iterable[BillSnapshot]) -> Decimal:
    """
    Calculate how much a person has spent across bills.

    Args:
        person_id: Id of the person
        bills: Bill snapshots in any order; drafts are skipped

    Returns:
        Decimal: Unrounded sum of the person's shares. Zero for an empty
        collection or a person who appears on no bill.
    """
    return sum(
        (share_of(person_id, bill) for bill in bills if bill.is_settled),
        ZERO
    )


class SpendAnalytics:
    """
    Spending queries over stored bills.

    Methods:
        settled_bills: Snapshots of every settled bill.
        person_spend: Total spend for one person.
        dashboard: Everything the dashboard shows in one dict.

    Note:
        All methods return plain values or dictionaries, not Django
        objects, making them suitable for JSON serialization.
    """

    @staticmethod
    def settled_bills():
        """Load settled bills as snapshots, items prefetched."""
        queryset = Bill.objects.filter(
            status=BillStatus.SETTLED
        ).prefetch_related('items').order_by('-date', '-created_at')
        return [bill.to_snapshot() for bill in queryset]

    @staticmethod
    def person_spend(person_id: str) -> Decimal:
        """
        Total a person owes across all settled bills.

        Args:
            person_id: Id of the person; need not exist any more

        Returns:
            Decimal: Unrounded total spend
        """
        return total_spend(person_id, SpendAnalytics.settled_bills())

    @staticmethod
    def dashboard(person_id: str) -> dict:
        """
        Dashboard summary for a person.

        Returns:
            dict: A dictionary containing:
                - total_spend (Decimal): Sum of the person's shares.
                - bills_count (int): Number of settled bills.
                - groups_count (int): Number of groups.
                - recent_bills (list): Newest settled bills with the
                  person's share of each.
        """
        bills = SpendAnalytics.settled_bills()

        recent_bills = [
            {
                'id': bill.id,
                'title': bill.title,
                'date': bill.date,
                'total': bill.total,
                'participant_count': len(bill.participant_ids),
                'my_share': share_of(person_id, bill),
            }
            for bill in bills[:RECENT_BILLS_LIMIT]
        ]

        spend = total_spend(person_id, bills)
        logger.debug("Dashboard for %s: %d bills, spend=%s", person_id, len(bills), spend)

        return {
            'total_spend': spend,
            'bills_count': len(bills),
            'groups_count': Group.objects.count(),
            'recent_bills': recent_bills,
        }
