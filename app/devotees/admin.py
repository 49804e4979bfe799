"""
Django admin configuration for devotee models.
"""

from django.contrib import admin

from devotees.models import Devotee, DevoteeFavorite


class DevoteeFavoriteInline(admin.TabularInline):
    model = DevoteeFavorite
    extra = 0
    raw_id_fields = ("organization",)
    ordering = ("display_order",)


@admin.register(Devotee)
class DevoteeAdmin(admin.ModelAdmin):
    list_display = ("mobile", "name", "city", "is_active", "created_at")
    list_filter = ("is_active", "city")
    search_fields = ("mobile", "name", "email")
    readonly_fields = ("created_at", "updated_at")
    inlines = [DevoteeFavoriteInline]
