from rest_framework import viewsets, mixins, status
from rest_framework.decorators import action
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from .models import Person
from .serializers import PersonSerializer, PersonCreateSerializer
from apps.people.services import (
    get_current_user,
    create_person,
    delete_person,
    list_friends,
    # Exceptions
    InvalidPersonError,
    PersonNotFoundError,
    CannotDeleteCurrentUserError,
)


class PersonViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.CreateModelMixin,
    mixins.DestroyModelMixin,
    viewsets.GenericViewSet,
):
    """
    ViewSet for contacts.

    Views are thin HTTP handlers only.

    list: Get all contacts except the current user
    create: Add a contact
    retrieve: Get a specific person
    destroy: Remove a contact
    """

    queryset = Person.objects.all()
    serializer_class = PersonSerializer

    def get_queryset(self):
        if self.action == 'list':
            return list_friends()
        return super().get_queryset()

    def get_serializer_class(self):
        if self.action == 'create':
            return PersonCreateSerializer
        return PersonSerializer

    @extend_schema(request=PersonCreateSerializer, responses={201: PersonSerializer})
    def create(self, request, *args, **kwargs):
        """Add a contact."""
        serializer = PersonCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            person = create_person(
                name=serializer.validated_data['name'],
                color_name=serializer.validated_data.get('color_name'),
            )
        except InvalidPersonError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(PersonSerializer(person).data, status=status.HTTP_201_CREATED)

    def destroy(self, request, *args, **kwargs):
        """Remove a contact."""
        try:
            delete_person(person_id=self.kwargs['pk'])
        except CannotDeleteCurrentUserError as e:
            return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
        except PersonNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(responses={200: PersonSerializer})
    @action(detail=False, methods=['get'])
    def me(self, request):
        """Get the current device user (created on first call)."""
        return Response(PersonSerializer(get_current_user()).data)
