from rest_framework import serializers
from .models import Group
from apps.people.serializers import PersonSerializer


class GroupSerializer(serializers.ModelSerializer):
    """Main serializer for groups."""

    members = PersonSerializer(many=True, read_only=True)
    member_count = serializers.SerializerMethodField()

    class Meta:
        model = Group
        fields = ['id', 'name', 'members', 'member_count', 'total_bills', 'created_at']
        read_only_fields = fields

    def get_member_count(self, obj):
        return len(obj.members.all())


class GroupListSerializer(serializers.ModelSerializer):
    """Lightweight serializer for list views."""

    member_count = serializers.SerializerMethodField()

    class Meta:
        model = Group
        fields = ['id', 'name', 'member_count', 'total_bills']
        read_only_fields = fields

    def get_member_count(self, obj):
        return len(obj.members.all())


class GroupCreateSerializer(serializers.Serializer):
    """Validate input for creating a group."""

    name = serializers.CharField(max_length=200)
    member_ids = serializers.ListField(
        child=serializers.CharField(max_length=64),
        allow_empty=False,
        help_text="Ids of the people in the group."
    )
