"""
Settlement Calculation
======================

Computes what each participant owes for one bill.

A person's share is the sum of their cut of every item assigned to them
plus the same fraction of tax and service charge that their items make up
of the subtotal.

Example:
    Item A = 100 shared by P1 and P2, tax = 10::

        >>> share_of('p1', bill)
        Decimal('55')

Note:
    Items nobody is assigned to are counted in the subtotal but owed by no
    one, so the shares of a bill with unassigned items add up to less than
    its total. The difference is reported as ``unattributed``.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, Iterable, List, Optional

from apps.bills.domain import BillSnapshot, ItemSnapshot
from apps.bills.money import ZERO, safe_divide


@dataclass(frozen=True)
class Settlement:
    """Per-person breakdown of one bill."""
    shares: Dict[str, Decimal]
    total: Decimal
    unattributed: Decimal


def raw_item_share(person_id: str, items: Iterable[ItemSnapshot]) -> Decimal:
    """
    Sum of the person's cut of each item assigned to them.

    Each item's line total is divided by the number of distinct ids
    assigned to it. Ids that are not bill participants still count toward
    that divisor.
    """
    share = ZERO
    for item in items:
        assigned = item.assigned_person_ids
        if person_id in assigned:
            share += safe_divide(item.line_total, len(assigned))
    return share


def share_of(person_id: str, bill: BillSnapshot) -> Decimal:
    """
    Calculate one person's share of a bill.

    Algorithm:
        1. ``raw`` = sum of ``line_total / len(assigned)`` over the
           person's items
        2. If ``subtotal > 0``: add ``(tax + service_charge) * raw / subtotal``
        3. If ``subtotal == 0``: no tax or service charge is allocated

    Args:
        person_id: Id of the person
        bill: Draft or stored bill snapshot

    Returns:
        Decimal: Unrounded non-negative amount. Zero when the person has no
        assigned items.
    """
    raw = raw_item_share(person_id, bill.items)
    subtotal = bill.subtotal
    if subtotal > 0:
        return raw + safe_divide((bill.tax + bill.service_charge) * raw, subtotal)
    return raw


def settle(bill: BillSnapshot, participant_ids: Optional[Iterable[str]] = None) -> Settlement:
    """
    Compute every participant's share and the unattributed remainder.

    Args:
        bill: Bill snapshot
        participant_ids: People to include; defaults to ``bill.participant_ids``

    Returns:
        Settlement with shares keyed by person id in participant order
    """
    if participant_ids is None:
        participant_ids = bill.participant_ids

    shares = {}
    for person_id in participant_ids:
        if person_id not in shares:
            shares[person_id] = share_of(person_id, bill)

    total = bill.total
    return Settlement(
        shares=shares,
        total=total,
        unattributed=total - sum(shares.values(), ZERO),
    )


def unassigned_items(bill: BillSnapshot) -> List[ItemSnapshot]:
    """Items no one is assigned to."""
    return [item for item in bill.items if not item.assigned_person_ids]
