from rest_framework.decorators import api_view
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from apps.bills.money import format_amount
from apps.people.services import get_current_user
from .analytics import SpendAnalytics
from .serializers import (
    PersonSpendSerializer,
    DashboardResponseSerializer,
)


@extend_schema(
    responses={200: PersonSpendSerializer},
    description="Get a person's total spend across settled bills. Unknown ids spend nothing.",
    tags=['analytics'],
)
@api_view(['GET'])
def person_spend(request, person_id):
    """Get a person's total spend - thin HTTP handler."""
    spend = SpendAnalytics.person_spend(person_id)

    return Response(PersonSpendSerializer({
        'person_id': person_id,
        'total_spend': spend,
        'formatted': format_amount(spend),
    }).data)


@extend_schema(
    responses={200: DashboardResponseSerializer},
    description="Get dashboard summary for the current user: total spend, counts and recent bills.",
    tags=['analytics'],
)
@api_view(['GET'])
def dashboard(request):
    """Get dashboard data for the current user."""
    me = get_current_user()
    data = SpendAnalytics.dashboard(me.id)
    return Response(DashboardResponseSerializer(data).data)
