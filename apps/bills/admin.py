from django.contrib import admin
from django.utils.html import format_html

from .domain import BillStatus
from .models import Bill, BillItem


class BillItemInline(admin.TabularInline):
    """Read-only items within a bill."""
    model = BillItem
    extra = 0
    fields = ['position', 'name', 'price', 'quantity', 'assigned_person_ids']
    readonly_fields = fields

    def has_add_permission(self, request, obj=None):
        """Items are written by the finalize service only."""
        return False


@admin.register(Bill)
class BillAdmin(admin.ModelAdmin):
    """
    Admin interface for bills.

    Settled bills cannot be edited, only inspected or deleted.
    """

    list_display = [
        'title',
        'total',
        'get_participant_count',
        'status_badge',
        'date',
    ]
    list_filter = ['status', 'date']
    search_fields = ['title', 'payer_id']
    readonly_fields = [
        'id',
        'title',
        'date',
        'subtotal',
        'tax',
        'service_charge',
        'total',
        'payer_id',
        'participant_ids',
        'status',
        'created_at',
    ]
    inlines = [BillItemInline]
    date_hierarchy = 'date'
    ordering = ['-date', '-created_at']

    def get_participant_count(self, obj):
        return len(obj.participant_ids)
    get_participant_count.short_description = 'Participants'

    def status_badge(self, obj):
        """Display bill status as colored badge."""
        colors = {
            BillStatus.DRAFT: ('#E5C49A', '#2C1810'),
            BillStatus.SETTLED: ('#6B8E5E', 'white'),
        }
        bg, fg = colors.get(obj.status, ('#ccc', '#666'))
        return format_html(
            '<span style="background: {}; color: {}; padding: 3px 8px; '
            'border-radius: 10px; font-size: 11px;">{}</span>',
            bg, fg, obj.get_status_display()
        )
    status_badge.short_description = 'Status'
    status_badge.admin_order_field = 'status'

    def has_add_permission(self, request):
        return False
