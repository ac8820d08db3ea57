# ==========================================
# apps/groups/admin.py
# ==========================================

from django.contrib import admin
from apps.groups.models import Group


@admin.register(Group)
class GroupAdmin(admin.ModelAdmin):
    """Admin interface for Groups."""

    list_display = ['name', 'member_count', 'total_bills', 'created_at']
    search_fields = ['name']
    readonly_fields = ['id', 'total_bills', 'created_at']
    filter_horizontal = ['members']
    ordering = ['name']

    def member_count(self, obj):
        """Show number of members."""
        return obj.members.count()
    member_count.short_description = 'Members'
