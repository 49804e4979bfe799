"""
Django admin configuration for events.
"""

from django.contrib import admin

from events.models import Event


@admin.register(Event)
class EventAdmin(admin.ModelAdmin):
    list_display = (
        "title",
        "organization",
        "event_type",
        "start_date",
        "target_amount_paise",
        "raised_amount_paise",
        "is_active",
    )
    list_filter = ("event_type", "is_active")
    search_fields = ("title", "organization__name", "organization__email")
    raw_id_fields = ("organization",)
    # Credited only by captured donations
    readonly_fields = ("raised_amount_paise", "created_at", "updated_at")
