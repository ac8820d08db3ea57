from decimal import Decimal, ROUND_HALF_UP

from rest_framework import serializers

from .domain import (
    MAX_QUANTITY,
    BillDraft,
    BillStatus,
    DraftItem,
    RawReceiptItem,
    ReceiptExtraction,
)
from .models import Bill, BillItem
from apps.people.serializers import ParticipantSerializer
from apps.people.services import resolve_participants


def money_field(**kwargs):
    """Output amount rounded half-up to cents."""
    return serializers.DecimalField(max_digits=14, decimal_places=2, rounding=ROUND_HALF_UP, **kwargs)


# =============================================================================
# AI Extraction Payload
# =============================================================================

class RawReceiptItemSerializer(serializers.Serializer):
    """One item as returned by the extraction service."""

    name = serializers.CharField(allow_blank=True)
    price = serializers.DecimalField(max_digits=None, decimal_places=None, min_value=Decimal('0'))
    quantity = serializers.IntegerField(min_value=1, max_value=MAX_QUANTITY, default=1)


class ReceiptExtractionSerializer(serializers.Serializer):
    """
    Validate the extraction service's JSON document.

    Expected shape::

        {
            "restaurantName": "string",      (optional)
            "items": [{"name": "string", "price": number, "quantity": number}],
            "totalTax": number,
            "totalServiceCharge": number
        }
    """

    restaurantName = serializers.CharField(
        source='restaurant_name',
        required=False,
        allow_null=True,
        allow_blank=True,
    )
    items = RawReceiptItemSerializer(many=True)
    totalTax = serializers.DecimalField(
        source='total_tax',
        max_digits=None,
        decimal_places=None,
        min_value=Decimal('0'),
    )
    totalServiceCharge = serializers.DecimalField(
        source='total_service_charge',
        max_digits=None,
        decimal_places=None,
        min_value=Decimal('0'),
    )

    def to_extraction(self) -> ReceiptExtraction:
        data = self.validated_data
        return ReceiptExtraction(
            items=tuple(
                RawReceiptItem(name=item['name'], price=item['price'], quantity=item['quantity'])
                for item in data['items']
            ),
            total_tax=data['total_tax'],
            total_service_charge=data['total_service_charge'],
            restaurant_name=data.get('restaurant_name'),
        )


# =============================================================================
# Input Serializers
# =============================================================================

class DraftItemInputSerializer(serializers.Serializer):
    """A draft line item sent by the client."""

    name = serializers.CharField(max_length=200, allow_blank=True)
    price = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=Decimal('0'))
    quantity = serializers.IntegerField(min_value=1, max_value=MAX_QUANTITY, default=1)
    assigned_person_ids = serializers.ListField(
        child=serializers.CharField(max_length=64),
        required=False,
        default=list,
    )


class BillDraftInputSerializer(serializers.Serializer):
    """
    Validate a client-held draft for preview or finalize.

    Fields:
        title (str): Bill title; blank falls back to the default title
        tax (Decimal): Total tax
        service_charge (Decimal): Total service charge
        items (list): Line items with their assignments
        participant_ids (list[str]): People splitting the bill
        payer_id (str): Who paid; defaults to the current user
        group_ids (list[str]): Groups the participants were picked from
    """

    title = serializers.CharField(max_length=200, allow_blank=True, required=False, default='')
    tax = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=Decimal('0'), default=Decimal('0'))
    service_charge = serializers.DecimalField(
        max_digits=12,
        decimal_places=2,
        min_value=Decimal('0'),
        default=Decimal('0'),
    )
    items = DraftItemInputSerializer(many=True)
    participant_ids = serializers.ListField(
        child=serializers.CharField(max_length=64),
        required=False,
        default=list,
    )
    payer_id = serializers.CharField(max_length=64, required=False)
    group_ids = serializers.ListField(
        child=serializers.CharField(max_length=64),
        required=False,
        default=list,
    )

    def to_draft(self) -> BillDraft:
        data = self.validated_data
        items = []
        for item in data['items']:
            items.append(DraftItem(
                name=item['name'],
                price=item['price'],
                quantity=item['quantity'],
                assigned_person_ids=list(dict.fromkeys(item['assigned_person_ids'])),
            ))

        return BillDraft(
            title=data['title'],
            items=items,
            tax=data['tax'],
            service_charge=data['service_charge'],
        )


class ScanInputSerializer(serializers.Serializer):
    """Receipt image upload."""

    image = serializers.FileField()


class BillFilterSerializer(serializers.Serializer):
    """
    Validate query parameters for bill listing.

    Query Parameters:
        status (str): Filter by bill status
    """

    status = serializers.ChoiceField(choices=BillStatus.choices, required=False)


# =============================================================================
# Output Serializers
# =============================================================================

class BillItemSerializer(serializers.ModelSerializer):
    """Serializer for stored bill items."""

    price = money_field()
    line_total = money_field(read_only=True)

    class Meta:
        model = BillItem
        fields = ['id', 'name', 'price', 'quantity', 'line_total', 'assigned_person_ids']
        read_only_fields = fields


class BillListSerializer(serializers.ModelSerializer):
    """Lightweight serializer for list views."""

    total = money_field()
    participant_count = serializers.SerializerMethodField()

    class Meta:
        model = Bill
        fields = ['id', 'title', 'date', 'total', 'status', 'participant_count']
        read_only_fields = fields

    def get_participant_count(self, obj):
        return len(obj.participant_ids)


class BillSerializer(serializers.ModelSerializer):
    """Main serializer for bill records."""

    items = BillItemSerializer(many=True, read_only=True)
    participants = serializers.SerializerMethodField()
    subtotal = money_field()
    tax = money_field()
    service_charge = money_field()
    total = money_field()

    class Meta:
        model = Bill
        fields = [
            'id',
            'title',
            'date',
            'items',
            'subtotal',
            'tax',
            'service_charge',
            'total',
            'payer_id',
            'participants',
            'status',
            'created_at',
        ]
        read_only_fields = fields

    def get_participants(self, obj):
        return ParticipantSerializer(resolve_participants(obj.participant_ids), many=True).data


class PersonShareSerializer(ParticipantSerializer):
    """A participant with the amount they owe."""

    amount = money_field()


class SettlementSerializer(serializers.Serializer):
    """Per-person breakdown of a bill."""

    shares = PersonShareSerializer(many=True)
    subtotal = money_field()
    total = money_field()
    unattributed = money_field()


class DraftItemSerializer(serializers.Serializer):
    id = serializers.CharField()
    name = serializers.CharField()
    price = serializers.DecimalField(max_digits=None, decimal_places=None)
    quantity = serializers.IntegerField()
    assigned_person_ids = serializers.ListField(child=serializers.CharField())


class BillDraftSerializer(serializers.Serializer):
    """A draft as returned by a scan, amounts verbatim."""

    id = serializers.CharField()
    title = serializers.CharField()
    items = DraftItemSerializer(many=True)
    subtotal = serializers.DecimalField(max_digits=None, decimal_places=None)
    tax = serializers.DecimalField(max_digits=None, decimal_places=None)
    service_charge = serializers.DecimalField(max_digits=None, decimal_places=None)
    total = serializers.DecimalField(max_digits=None, decimal_places=None)
