from rest_framework import serializers
from .models import Person


class PersonSerializer(serializers.ModelSerializer):
    """Serializer for contacts."""

    is_current_user = serializers.BooleanField(read_only=True)

    class Meta:
        model = Person
        fields = ['id', 'name', 'avatar', 'color_name', 'is_current_user', 'created_at']
        read_only_fields = ['id', 'is_current_user', 'created_at']


class PersonCreateSerializer(serializers.Serializer):
    """Validate input for adding a contact."""

    name = serializers.CharField(max_length=100)
    color_name = serializers.CharField(max_length=30, required=False)


class ParticipantSerializer(serializers.Serializer):
    """A bill participant resolved against the live registry."""

    id = serializers.CharField()
    name = serializers.CharField()
    color_name = serializers.CharField()
    is_removed = serializers.BooleanField()
