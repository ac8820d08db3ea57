"""
Serializers for analytics app.

Response serializers only; they exist for API documentation and output
formatting. Amounts are rounded half-up to cents for display.

Response Serializers:
    PersonSpendSerializer - One person's total spend
    DashboardResponseSerializer - Dashboard summary
    ErrorSerializer - Standard error body
"""

from decimal import ROUND_HALF_UP

from rest_framework import serializers


def amount_field():
    """Cents, half-up. Spend sums many bills, so digits are not capped."""
    return serializers.DecimalField(max_digits=None, decimal_places=2, rounding=ROUND_HALF_UP)


# =============================================================================
# Response Serializers
# =============================================================================

class PersonSpendSerializer(serializers.Serializer):
    """Response serializer for a person's spend."""
    person_id = serializers.CharField()
    total_spend = amount_field()
    formatted = serializers.CharField()


class RecentBillSerializer(serializers.Serializer):
    """Nested serializer for recent bills in dashboard."""
    id = serializers.CharField()
    title = serializers.CharField()
    date = serializers.DateTimeField()
    total = amount_field()
    participant_count = serializers.IntegerField()
    my_share = amount_field()


class DashboardResponseSerializer(serializers.Serializer):
    """Response serializer for dashboard summary."""
    total_spend = amount_field()
    bills_count = serializers.IntegerField()
    groups_count = serializers.IntegerField()
    recent_bills = RecentBillSerializer(many=True)


class ErrorSerializer(serializers.Serializer):
    """Standard error response serializer."""
    error = serializers.CharField()
