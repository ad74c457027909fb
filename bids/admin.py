"""
Bids Admin - Admin configuration for developer bids.

Bids are read-only here: status changes go through the bid workflow.
"""

from django.contrib import admin

from .models import Bid


@admin.register(Bid)
class BidAdmin(admin.ModelAdmin):
    list_display = ['project', 'developer', 'amount', 'currency', 'timeline', 'status', 'created_at']
    list_filter = ['status', 'timeline']
    search_fields = ['project__title', 'developer__user__email', 'developer__user__username']
    raw_id_fields = ['project', 'developer']
    readonly_fields = [
        'uuid', 'status', 'accepted_at', 'rejected_at', 'withdrawn_at',
        'rejection_reason', 'created_at', 'updated_at',
    ]
