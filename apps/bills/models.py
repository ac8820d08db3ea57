from django.db import models
from django.core.validators import MinValueValidator
from django.utils import timezone
from decimal import Decimal

from .domain import BillStatus, BillSnapshot, ItemSnapshot, new_id
from .exceptions import SettledBillImmutableError
from .money import AMOUNT_DECIMAL_PLACES, AMOUNT_MAX_DIGITS


class Bill(models.Model):
    """
    Settled bill record.

    Participants are stored by id only and resolved against the live
    people registry when displayed.
    """

    id = models.CharField(primary_key=True, max_length=64, default=new_id, editable=False)
    title = models.CharField(max_length=200)
    date = models.DateTimeField(default=timezone.now)

    # Financial details (written once at finalize)
    subtotal = models.DecimalField(max_digits=AMOUNT_MAX_DIGITS, decimal_places=AMOUNT_DECIMAL_PLACES, default=Decimal('0'))
    tax = models.DecimalField(
        max_digits=AMOUNT_MAX_DIGITS,
        decimal_places=AMOUNT_DECIMAL_PLACES,
        default=Decimal('0'),
        validators=[MinValueValidator(Decimal('0.00'))]
    )
    service_charge = models.DecimalField(
        max_digits=AMOUNT_MAX_DIGITS,
        decimal_places=AMOUNT_DECIMAL_PLACES,
        default=Decimal('0'),
        validators=[MinValueValidator(Decimal('0.00'))]
    )
    total = models.DecimalField(max_digits=AMOUNT_MAX_DIGITS, decimal_places=AMOUNT_DECIMAL_PLACES, default=Decimal('0'))

    payer_id = models.CharField(max_length=64, blank=True)
    participant_ids = models.JSONField(default=list, blank=True)

    status = models.CharField(
        max_length=10,
        choices=BillStatus.choices,
        default=BillStatus.DRAFT
    )

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'bills'
        indexes = [
            models.Index(fields=['status', 'date'], name='bills_status_date_idx'),
        ]
        ordering = ['-date', '-created_at']

    def __str__(self):
        return f"{self.title} - {self.total} ({self.status})"

    def save(self, *args, **kwargs):
        """Settled bills can be created and deleted, never updated."""
        if not self._state.adding and self.status == BillStatus.SETTLED:
            raise SettledBillImmutableError(f"Bill {self.id} is settled and cannot be modified")
        super().save(*args, **kwargs)

    @property
    def is_settled(self):
        return self.status == BillStatus.SETTLED

    def to_snapshot(self) -> BillSnapshot:
        """Immutable view for settlement calculations (uses prefetched items)."""
        return BillSnapshot(
            id=self.id,
            title=self.title,
            items=tuple(item.to_snapshot() for item in self.items.all()),
            tax=self.tax,
            service_charge=self.service_charge,
            participant_ids=tuple(self.participant_ids),
            payer_id=self.payer_id,
            status=self.status,
            date=self.date,
        )


class BillItem(models.Model):
    """One line of a bill."""

    id = models.CharField(primary_key=True, max_length=64, default=new_id, editable=False)
    bill = models.ForeignKey(
        Bill,
        on_delete=models.CASCADE,
        related_name='items'
    )
    name = models.CharField(max_length=200)
    price = models.DecimalField(
        max_digits=AMOUNT_MAX_DIGITS,
        decimal_places=AMOUNT_DECIMAL_PLACES,
        validators=[MinValueValidator(Decimal('0.00'))]
    )
    quantity = models.PositiveIntegerField(default=1, validators=[MinValueValidator(1)])
    assigned_person_ids = models.JSONField(default=list, blank=True)
    position = models.PositiveIntegerField(default=0)

    class Meta:
        db_table = 'bill_items'
        ordering = ['position']

    def __str__(self):
        return f"{self.name} x{self.quantity} @ {self.price}"

    def save(self, *args, **kwargs):
        if self.bill.status == BillStatus.SETTLED:
            raise SettledBillImmutableError(f"Bill {self.bill_id} is settled and cannot be modified")
        super().save(*args, **kwargs)

    @property
    def line_total(self):
        return self.price * self.quantity

    def to_snapshot(self) -> ItemSnapshot:
        return ItemSnapshot(
            id=self.id,
            name=self.name,
            price=self.price,
            quantity=self.quantity,
            assigned_person_ids=frozenset(self.assigned_person_ids),
        )
