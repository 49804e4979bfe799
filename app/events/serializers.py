"""
Serializers for event endpoints.
"""

from rest_framework import serializers

from devotees.serializers import OrganizationSummarySerializer
from events.models import Event


class EventSerializer(serializers.ModelSerializer):
    """Event as shown to devotees, with fundraising progress."""

    target_amount = serializers.CharField(read_only=True, allow_null=True)
    raised_amount = serializers.CharField(read_only=True)
    progress_percent = serializers.DecimalField(
        max_digits=5, decimal_places=2, read_only=True, allow_null=True
    )

    class Meta:
        model = Event
        fields = [
            "id",
            "event_type",
            "title",
            "description",
            "start_date",
            "end_date",
            "location",
            "target_amount_paise",
            "target_amount",
            "raised_amount_paise",
            "raised_amount",
            "progress_percent",
        ]
        read_only_fields = fields


class OrganizationEventsSerializer(serializers.Serializer):
    organization = OrganizationSummarySerializer()
    events = EventSerializer(many=True)
    total = serializers.SerializerMethodField()

    def get_total(self, obj) -> int:
        return len(obj.events)
