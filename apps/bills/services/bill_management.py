"""
Bill management service.

Freezes drafts into settled records and handles the whole-record
operations that remain afterwards (fetch and delete).
"""

import logging
from typing import Iterable, Optional

from django.conf import settings
from django.db import transaction
from django.db.models import QuerySet

from apps.bills.domain import BillDraft, BillStatus
from apps.bills.exceptions import BillNotFoundError, ValidationFailedError
from apps.bills.models import Bill, BillItem
from apps.bills.money import AMOUNT_DECIMAL_PLACES, MAX_AMOUNT, decimal_places
from apps.groups.services import record_group_bills

logger = logging.getLogger(__name__)


def validate_amounts(draft: BillDraft) -> None:
    """
    Check that every amount of the draft can be stored exactly.

    Raises:
        ValidationFailedError: If an amount has more decimal places than a
            settled bill keeps, or the total is too large
    """
    amounts = [item.price for item in draft.items] + [draft.tax, draft.service_charge]
    if any(decimal_places(amount) > AMOUNT_DECIMAL_PLACES for amount in amounts):
        raise ValidationFailedError(f"Amounts can have at most {AMOUNT_DECIMAL_PLACES} decimal places")
    if draft.total > MAX_AMOUNT:
        raise ValidationFailedError(f"Bill total cannot exceed {MAX_AMOUNT}")


def validate_finalizable(draft: BillDraft, participant_ids) -> None:
    """
    Raises:
        ValidationFailedError: If the draft has no items or no participants,
            or its amounts cannot be stored
    """
    if not draft.items:
        raise ValidationFailedError("A bill needs at least one item")
    if not participant_ids:
        raise ValidationFailedError("A bill needs at least one participant")
    validate_amounts(draft)


@transaction.atomic
def finalize_draft(
    *,
    draft: BillDraft,
    participant_ids: Iterable[str],
    payer_id: str,
    group_ids: Iterable[str] = (),
) -> Bill:
    """
    Persist a draft as an immutable settled bill.

    Amounts are stored exactly as they are in the draft, so the stored
    breakdown is the one the user saw while editing.

    Args:
        draft: The working copy to freeze (not modified)
        participant_ids: People splitting the bill, in display order
        payer_id: Person who paid; must be a participant
        group_ids: Groups the participants were picked from; their bill
            counters are incremented

    Returns:
        The created Bill with status SETTLED

    Raises:
        ValidationFailedError: If there are no items or no participants,
            an amount cannot be stored, or the payer is not a participant
    """
    participant_ids = list(dict.fromkeys(participant_ids))
    validate_finalizable(draft, participant_ids)
    if payer_id not in participant_ids:
        raise ValidationFailedError(f"Payer {payer_id} is not a participant of this bill")

    bill = Bill.objects.create(
        id=draft.id,
        title=draft.title.strip() or settings.DEFAULT_BILL_TITLE,
        subtotal=draft.subtotal,
        tax=draft.tax,
        service_charge=draft.service_charge,
        total=draft.total,
        payer_id=payer_id,
        participant_ids=participant_ids,
        status=BillStatus.SETTLED,
    )

    # bulk_create skips BillItem.save(), which refuses writes to settled bills
    BillItem.objects.bulk_create([
        BillItem(
            id=item.id,
            bill=bill,
            name=item.name,
            price=item.price,
            quantity=item.quantity,
            assigned_person_ids=list(dict.fromkeys(item.assigned_person_ids)),
            position=position,
        )
        for position, item in enumerate(draft.items)
    ])

    record_group_bills(group_ids=group_ids)

    logger.info(
        "Settled bill %s (%s) total=%s participants=%d",
        bill.id, bill.title, bill.total, len(participant_ids)
    )
    return bill


def get_bill(*, bill_id: str) -> Bill:
    """
    Raises:
        BillNotFoundError: If bill doesn't exist
    """
    try:
        return Bill.objects.prefetch_related('items').get(id=bill_id)
    except Bill.DoesNotExist:
        raise BillNotFoundError(f"Bill with ID {bill_id} not found")


def list_bills(*, status: Optional[str] = None) -> QuerySet[Bill]:
    """Bills newest first, items prefetched."""
    queryset = Bill.objects.prefetch_related('items').order_by('-date', '-created_at')
    if status:
        queryset = queryset.filter(status=status)
    return queryset


@transaction.atomic
def delete_bill(*, bill_id: str) -> None:
    """
    Delete a bill and its items.

    Raises:
        BillNotFoundError: If bill doesn't exist
    """
    deleted, _ = Bill.objects.filter(id=bill_id).delete()
    if not deleted:
        raise BillNotFoundError(f"Bill with ID {bill_id} not found")
    logger.info("Deleted bill %s", bill_id)
