"""
Django app configuration for devotees.
"""

from django.apps import AppConfig


class DevoteesConfig(AppConfig):
    """Configuration for the devotees application."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "devotees"
    verbose_name = "Devotees"
