"""
Value types shared by the settlement engine.

A ``BillDraft`` is the mutable working copy owned by one editor session.
A ``BillSnapshot`` is the immutable view the calculator and aggregator work
on; both drafts and stored bills can produce one.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import FrozenSet, List, Optional, Tuple
import uuid

from django.db import models

from .money import ZERO

MAX_QUANTITY = 9999


class BillStatus(models.TextChoices):
    DRAFT = 'DRAFT', 'Draft'
    SETTLED = 'SETTLED', 'Settled'


def new_id() -> str:
    return str(uuid.uuid4())


# =============================================================================
# Snapshots (read-only)
# =============================================================================

@dataclass(frozen=True)
class ItemSnapshot:
    """One line item as seen by the calculator."""
    id: str
    name: str
    price: Decimal
    quantity: int
    assigned_person_ids: FrozenSet[str] = frozenset()

    @property
    def line_total(self) -> Decimal:
        return self.price * self.quantity


@dataclass(frozen=True)
class BillSnapshot:
    """Immutable bill view; subtotal and total are always derived."""
    id: str
    title: str
    items: Tuple[ItemSnapshot, ...] = ()
    tax: Decimal = ZERO
    service_charge: Decimal = ZERO
    participant_ids: Tuple[str, ...] = ()
    payer_id: str = ''
    status: str = BillStatus.DRAFT
    date: Optional[datetime] = None

    @property
    def subtotal(self) -> Decimal:
        return sum((item.line_total for item in self.items), ZERO)

    @property
    def total(self) -> Decimal:
        return self.subtotal + self.tax + self.service_charge

    @property
    def is_settled(self) -> bool:
        return self.status == BillStatus.SETTLED


# =============================================================================
# Draft (mutable, single editor)
# =============================================================================

@dataclass
class DraftItem:
    name: str
    price: Decimal
    quantity: int = 1
    assigned_person_ids: List[str] = field(default_factory=list)
    id: str = field(default_factory=new_id)

    @property
    def line_total(self) -> Decimal:
        return self.price * self.quantity

    def snapshot(self) -> ItemSnapshot:
        return ItemSnapshot(
            id=self.id,
            name=self.name,
            price=self.price,
            quantity=self.quantity,
            assigned_person_ids=frozenset(self.assigned_person_ids),
        )


@dataclass
class BillDraft:
    title: str = ''
    items: List[DraftItem] = field(default_factory=list)
    tax: Decimal = ZERO
    service_charge: Decimal = ZERO
    id: str = field(default_factory=new_id)

    @property
    def subtotal(self) -> Decimal:
        return sum((item.line_total for item in self.items), ZERO)

    @property
    def total(self) -> Decimal:
        return self.subtotal + self.tax + self.service_charge

    def get_item(self, item_id: str) -> Optional[DraftItem]:
        for item in self.items:
            if item.id == item_id:
                return item
        return None

    def snapshot(self, participant_ids=(), payer_id: str = '') -> BillSnapshot:
        return BillSnapshot(
            id=self.id,
            title=self.title,
            items=tuple(item.snapshot() for item in self.items),
            tax=self.tax,
            service_charge=self.service_charge,
            participant_ids=tuple(participant_ids),
            payer_id=payer_id,
            status=BillStatus.DRAFT,
        )


# =============================================================================
# AI extraction result
# =============================================================================

@dataclass(frozen=True)
class RawReceiptItem:
    name: str
    price: Decimal
    quantity: int = 1


@dataclass(frozen=True)
class ReceiptExtraction:
    items: Tuple[RawReceiptItem, ...]
    total_tax: Decimal
    total_service_charge: Decimal
    restaurant_name: Optional[str] = None
