"""
Bill editor.

``BillEditor`` owns the single draft of one editing session and is the only
thing allowed to change it. States::

    EMPTY --(load / scan / first edit)--> POPULATED --(finalize)--> EMPTY

A finalized draft becomes a settled ``Bill`` record; there is no way back
from a settled bill into the editor.
"""

import enum
import logging
from decimal import Decimal
from typing import List, Optional

from apps.bills.domain import MAX_QUANTITY, BillDraft, DraftItem, BillSnapshot
from apps.bills.exceptions import ItemNotFoundError, ValidationFailedError
from apps.bills.models import Bill
from apps.bills.money import to_money

from .bill_management import finalize_draft, validate_finalizable
from .extraction_client import ReceiptExtractionClient
from .ingestion import ingest_receipt
from .settlement import Settlement, settle

logger = logging.getLogger(__name__)

NEW_ITEM_NAME = 'New Item'


class EditorState(enum.Enum):
    EMPTY = 'empty'
    POPULATED = 'populated'


def _amount(value, field_name: str) -> Decimal:
    try:
        amount = to_money(value)
    except ValueError:
        raise ValidationFailedError(f"{field_name} must be a number")
    if amount < 0:
        raise ValidationFailedError(f"{field_name} cannot be negative")
    return amount


def _quantity(value) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationFailedError("Quantity must be a whole number")
    if value < 1:
        raise ValidationFailedError("Quantity must be at least 1")
    if value > MAX_QUANTITY:
        raise ValidationFailedError(f"Quantity cannot exceed {MAX_QUANTITY}")
    return value


class BillEditor:
    """
    Single-writer draft editing session.

    The current user is passed in explicitly; they are always a participant
    and the default payer.

    Example::

        editor = BillEditor(current_user_id=me.id)
        await editor.scan(image, client=OpenAIReceiptClient.from_settings())
        editor.toggle_participant(friend.id)
        editor.toggle_assignment(editor.draft.items[0].id, friend.id)
        editor.breakdown().shares
        bill = editor.finalize()
    """

    def __init__(self, *, current_user_id: str):
        self.current_user_id = current_user_id
        self._draft: Optional[BillDraft] = None
        self._participant_ids: List[str] = [current_user_id]
        self._group_ids: List[str] = []

    # -------------------------------------------------------------------------
    # State
    # -------------------------------------------------------------------------

    @property
    def state(self) -> EditorState:
        return EditorState.EMPTY if self._draft is None else EditorState.POPULATED

    @property
    def draft(self) -> Optional[BillDraft]:
        return self._draft

    @property
    def participant_ids(self) -> List[str]:
        return list(self._participant_ids)

    def _ensure_draft(self) -> BillDraft:
        if self._draft is None:
            self._draft = BillDraft()
        return self._draft

    def _get_item(self, item_id: str) -> DraftItem:
        item = self._draft.get_item(item_id) if self._draft else None
        if item is None:
            raise ItemNotFoundError(f"Item with ID {item_id} not found")
        return item

    def load(self, draft: BillDraft) -> None:
        """Replace the working draft, e.g. with an ingested one."""
        self._draft = draft

    async def scan(self, image: bytes, *, client: ReceiptExtractionClient, mime_type: str = 'image/jpeg') -> BillDraft:
        """
        Ingest a receipt image and load the result.

        The current draft is only replaced once ingestion has succeeded.
        """
        draft = await ingest_receipt(image, client=client, mime_type=mime_type)
        self.load(draft)
        return draft

    def reset(self) -> None:
        """Back to EMPTY with only the current user selected."""
        self._draft = None
        self._participant_ids = [self.current_user_id]
        self._group_ids = []

    # -------------------------------------------------------------------------
    # Items
    # -------------------------------------------------------------------------

    def add_item(self, name: str = NEW_ITEM_NAME, price=0, quantity: int = 1) -> DraftItem:
        item = DraftItem(
            name=name,
            price=_amount(price, 'Price'),
            quantity=_quantity(quantity),
        )
        self._ensure_draft().items.append(item)
        return item

    def remove_item(self, item_id: str) -> None:
        item = self._get_item(item_id)
        self._draft.items.remove(item)

    def update_item(self, item_id: str, *, name: str = None, price=None, quantity: int = None) -> DraftItem:
        """Edit name, unit price and/or quantity; all-or-nothing."""
        item = self._get_item(item_id)
        new_price = _amount(price, 'Price') if price is not None else item.price
        new_quantity = _quantity(quantity) if quantity is not None else item.quantity

        if name is not None:
            item.name = name
        item.price = new_price
        item.quantity = new_quantity
        return item

    def toggle_assignment(self, item_id: str, person_id: str) -> List[str]:
        """
        Assign the person to the item, or unassign them if already assigned.

        Returns:
            The item's assigned ids after the toggle
        """
        item = self._get_item(item_id)
        if person_id in item.assigned_person_ids:
            item.assigned_person_ids = [pid for pid in item.assigned_person_ids if pid != person_id]
        else:
            item.assigned_person_ids.append(person_id)
        return list(item.assigned_person_ids)

    # -------------------------------------------------------------------------
    # Bill fields
    # -------------------------------------------------------------------------

    def set_title(self, title: str) -> None:
        self._ensure_draft().title = title

    def set_tax(self, tax) -> None:
        amount = _amount(tax, 'Tax')
        self._ensure_draft().tax = amount

    def set_service_charge(self, service_charge) -> None:
        amount = _amount(service_charge, 'Service charge')
        self._ensure_draft().service_charge = amount

    # -------------------------------------------------------------------------
    # Participants
    # -------------------------------------------------------------------------

    def toggle_participant(self, person_id: str) -> List[str]:
        """Select or deselect a person. The current user stays selected."""
        if person_id in self._participant_ids:
            if person_id != self.current_user_id:
                self._participant_ids.remove(person_id)
        else:
            self._participant_ids.append(person_id)
        return self.participant_ids

    def select_group(self, group) -> List[str]:
        """Select every member of a group."""
        for person_id in group.member_ids():
            if person_id not in self._participant_ids:
                self._participant_ids.append(person_id)
        if group.id not in self._group_ids:
            self._group_ids.append(group.id)
        return self.participant_ids

    # -------------------------------------------------------------------------
    # Settlement
    # -------------------------------------------------------------------------

    def snapshot(self) -> BillSnapshot:
        draft = self._draft if self._draft is not None else BillDraft()
        return draft.snapshot(
            participant_ids=self._participant_ids,
            payer_id=self.current_user_id,
        )

    def breakdown(self) -> Settlement:
        """Live per-participant totals for the current draft."""
        return settle(self.snapshot())

    def finalize(self, *, payer_id: str = None) -> Bill:
        """
        Save the draft as a settled bill and return to EMPTY.

        Raises:
            ValidationFailedError: If there are no items or no participants;
                the draft is left as it was
        """
        draft = self._draft if self._draft is not None else BillDraft()
        validate_finalizable(draft, self._participant_ids)

        bill = finalize_draft(
            draft=draft,
            participant_ids=self._participant_ids,
            payer_id=payer_id or self.current_user_id,
            group_ids=self._group_ids,
        )
        self.reset()
        return bill
