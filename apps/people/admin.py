# ==========================================
# apps/people/admin.py
# ==========================================

from django.contrib import admin
from apps.people.models import Person


@admin.register(Person)
class PersonAdmin(admin.ModelAdmin):
    """Admin interface for People."""

    list_display = ['name', 'id', 'color_name', 'created_at']
    search_fields = ['name', 'id']
    readonly_fields = ['id', 'created_at']
    ordering = ['name']
