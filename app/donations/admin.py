"""
Django admin configuration for donations.

Donations are an audit trail; the admin is read-only.
"""

from django.contrib import admin

from donations.models import Donation


@admin.register(Donation)
class DonationAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "devotee",
        "organization",
        "event",
        "amount",
        "status",
        "gateway_order_id",
        "created_at",
    )
    list_filter = ("status", "currency", "payment_method")
    search_fields = ("gateway_order_id", "gateway_payment_id", "utr", "devotee__mobile")
    raw_id_fields = ("devotee", "organization", "event")
    date_hierarchy = "created_at"

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
