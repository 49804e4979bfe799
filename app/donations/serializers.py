"""
Serializers for donation endpoints.

Amounts cross the API as rupee strings with 2 fraction digits, next to
the integer paise value they were derived from.
"""

from rest_framework import serializers

from donations.models import Donation


class CreateOrderSerializer(serializers.Serializer):
    """
    Request body for creating a donation order.

    The amount is validated for shape only; range checks and rounding
    happen in the orchestrator.
    """

    organization_id = serializers.IntegerField(min_value=1)
    amount = serializers.DecimalField(max_digits=12, decimal_places=3, coerce_to_string=False)
    event_id = serializers.IntegerField(min_value=1, required=False, allow_null=True)


class VerifyPaymentSerializer(serializers.Serializer):
    """Checkout response fields posted back by the client after payment."""

    razorpay_order_id = serializers.CharField(max_length=64)
    razorpay_payment_id = serializers.CharField(max_length=64)
    razorpay_signature = serializers.CharField(max_length=128)


class DonationSerializer(serializers.ModelSerializer):
    amount = serializers.CharField(read_only=True)
    organization_name = serializers.CharField(source="organization.name", read_only=True)
    event_title = serializers.CharField(source="event.title", read_only=True, allow_null=True, default=None)

    class Meta:
        model = Donation
        fields = [
            "id",
            "organization_id",
            "organization_name",
            "event_id",
            "event_title",
            "amount_paise",
            "amount",
            "currency",
            "status",
            "gateway_order_id",
            "gateway_payment_id",
            "utr",
            "payment_method",
            "captured_at",
            "created_at",
        ]
        read_only_fields = fields


class DonationOrderSerializer(serializers.Serializer):
    """Response body for a created order; everything the client checkout needs."""

    donation_id = serializers.IntegerField(source="donation.id")
    order_id = serializers.CharField(source="order.order_id")
    amount_paise = serializers.IntegerField(source="donation.amount_paise")
    amount = serializers.CharField(source="donation.amount")
    currency = serializers.CharField(source="order.currency")
    key_id = serializers.CharField(source="order.key_id")
    organization_id = serializers.IntegerField(source="organization.id")
    organization_name = serializers.CharField(source="organization.name")
    event_id = serializers.IntegerField(source="donation.event_id", allow_null=True)


class DonationStatsSerializer(serializers.Serializer):
    total_donations = serializers.IntegerField()
    total_amount_paise = serializers.IntegerField()
    total_amount = serializers.CharField()
