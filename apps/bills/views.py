from asgiref.sync import async_to_sync
from django.conf import settings
from rest_framework import viewsets, mixins, status
from rest_framework.decorators import action
from rest_framework.pagination import PageNumberPagination
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from .models import Bill
from .serializers import (
    BillSerializer,
    BillListSerializer,
    BillDraftSerializer,
    SettlementSerializer,
    # Input serializers
    BillDraftInputSerializer,
    BillFilterSerializer,
    ScanInputSerializer,
)
from apps.bills.services import (
    BillEditor,
    OpenAIReceiptClient,
    get_bill,
    list_bills,
    delete_bill,
    ingest_receipt,
    settle,
    validate_amounts,
    # Exceptions
    BillNotFoundError,
    IngestionUnavailableError,
    IngestionMalformedError,
    IngestionEmptyError,
    ValidationFailedError,
)
from apps.groups.services import get_group_by_id, GroupNotFoundError
from apps.people.services import get_current_user, resolve_participants


def settlement_payload(settlement, subtotal):
    """Attach resolved participant details to each share."""
    shares = []
    for participant in resolve_participants(settlement.shares.keys()):
        shares.append({**participant, 'amount': settlement.shares[participant['id']]})
    return {
        'shares': shares,
        'subtotal': subtotal,
        'total': settlement.total,
        'unattributed': settlement.unattributed,
    }


def editor_from_request(data):
    """
    Rebuild an editing session from a client-held draft.

    Returns:
        Tuple of (BillEditor, payer_id or None)

    Raises:
        GroupNotFoundError: If a group id is unknown
    """
    serializer = BillDraftInputSerializer(data=data)
    serializer.is_valid(raise_exception=True)

    editor = BillEditor(current_user_id=get_current_user().id)
    editor.load(serializer.to_draft())
    for person_id in serializer.validated_data['participant_ids']:
        if person_id not in editor.participant_ids:
            editor.toggle_participant(person_id)
    for group_id in serializer.validated_data['group_ids']:
        editor.select_group(get_group_by_id(group_id=group_id))
    return editor, serializer.validated_data.get('payer_id')


async def scan_receipt(image: bytes, *, mime_type: str):
    """Ingest a receipt with a client built from settings, then close it."""
    client = OpenAIReceiptClient.from_settings()
    try:
        return await ingest_receipt(image, client=client, mime_type=mime_type)
    finally:
        await client.close()


class BillPagination(PageNumberPagination):
    """Custom pagination for bills."""
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


class BillViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.CreateModelMixin,
    mixins.DestroyModelMixin,
    viewsets.GenericViewSet,
):
    """
    ViewSet for bills.

    Drafts live on the client; the server only stores settled bills.

    list: Get bills, newest first (filterable by status)
    create: Finalize a draft into a settled bill
    retrieve: Get a bill with items and participants
    destroy: Delete a bill
    preview: Live per-person breakdown of a draft
    scan: Turn a receipt image into a draft
    breakdown: Per-person breakdown of a stored bill
    """

    queryset = Bill.objects.prefetch_related('items')
    serializer_class = BillSerializer
    pagination_class = BillPagination

    def get_queryset(self):
        filter_serializer = BillFilterSerializer(data=self.request.query_params)
        filter_serializer.is_valid(raise_exception=True)
        return list_bills(status=filter_serializer.validated_data.get('status'))

    def get_serializer_class(self):
        """Use different serializers for different actions."""
        if self.action == 'list':
            return BillListSerializer
        return BillSerializer

    def retrieve(self, request, *args, **kwargs):
        try:
            bill = get_bill(bill_id=self.kwargs['pk'])
        except BillNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        return Response(BillSerializer(bill).data)

    @extend_schema(request=BillDraftInputSerializer, responses={201: BillSerializer})
    def create(self, request, *args, **kwargs):
        """Finalize a draft. The current user is always a participant."""
        try:
            editor, payer_id = editor_from_request(request.data)
            bill = editor.finalize(payer_id=payer_id)
        except GroupNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)
        except ValidationFailedError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(BillSerializer(get_bill(bill_id=bill.id)).data, status=status.HTTP_201_CREATED)

    def destroy(self, request, *args, **kwargs):
        """Delete a bill."""
        try:
            delete_bill(bill_id=self.kwargs['pk'])
        except BillNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(request=BillDraftInputSerializer, responses={200: SettlementSerializer})
    @action(detail=False, methods=['post'])
    def preview(self, request):
        """Per-person totals for a draft, without saving anything."""
        try:
            editor, _ = editor_from_request(request.data)
            validate_amounts(editor.draft)
        except GroupNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)
        except ValidationFailedError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        payload = settlement_payload(editor.breakdown(), editor.draft.subtotal)
        return Response(SettlementSerializer(payload).data)

    @extend_schema(responses={200: SettlementSerializer})
    @action(detail=True, methods=['get'])
    def breakdown(self, request, pk=None):
        """Per-person totals for a stored bill."""
        try:
            bill = get_bill(bill_id=pk)
        except BillNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        snapshot = bill.to_snapshot()
        payload = settlement_payload(settle(snapshot), snapshot.subtotal)
        return Response(SettlementSerializer(payload).data)

    @extend_schema(request=ScanInputSerializer, responses={200: BillDraftSerializer})
    @action(detail=False, methods=['post'])
    def scan(self, request):
        """
        Extract a draft from a receipt image.

        Returns 503 when the extraction service is unreachable and 502 when
        its answer is empty or unreadable.
        """
        serializer = ScanInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        upload = serializer.validated_data['image']
        if upload.size > settings.RECEIPT_MAX_IMAGE_BYTES:
            return Response(
                {'error': f'Image is larger than {settings.RECEIPT_MAX_IMAGE_BYTES} bytes'},
                status=status.HTTP_400_BAD_REQUEST
            )

        try:
            draft = async_to_sync(scan_receipt)(
                upload.read(),
                mime_type=getattr(upload, 'content_type', None) or 'image/jpeg',
            )
        except IngestionUnavailableError as e:
            return Response(
                {'error': str(e), 'kind': e.kind},
                status=status.HTTP_503_SERVICE_UNAVAILABLE
            )
        except (IngestionMalformedError, IngestionEmptyError) as e:
            return Response(
                {'error': str(e), 'kind': e.kind},
                status=status.HTTP_502_BAD_GATEWAY
            )

        return Response(BillDraftSerializer(draft).data)
