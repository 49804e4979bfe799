"""
Serializers for devotee endpoints.
"""

from django.contrib.auth import get_user_model
from rest_framework import serializers

from devotees.models import DevoteeFavorite

User = get_user_model()


class OrganizationSummarySerializer(serializers.ModelSerializer):
    """Public view of an organization account."""

    class Meta:
        model = User
        fields = ["id", "name", "email", "phone", "organization_type"]
        read_only_fields = fields


class FavoriteSerializer(serializers.ModelSerializer):
    organization = OrganizationSummarySerializer(read_only=True)

    class Meta:
        model = DevoteeFavorite
        fields = ["id", "display_order", "organization"]
        read_only_fields = fields


class SetFavoritesSerializer(serializers.Serializer):
    """Request body for replacing the favorite list."""

    organization_ids = serializers.ListField(
        child=serializers.IntegerField(min_value=1),
        allow_empty=True,
    )
