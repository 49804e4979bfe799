"""
Views for devotee donations.

URL Structure:
    /api/v1/devotee/donations/                 GET   - Donation history
    /api/v1/devotee/donations/stats/           GET   - Captured totals
    /api/v1/devotee/donations/create-order/    POST  - Create a gateway order
    /api/v1/devotee/donations/verify/          POST  - Verify a completed payment
"""

from __future__ import annotations

from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from core.views import error_response
from devotees.permissions import IsDevotee
from donations.serializers import (
    CreateOrderSerializer,
    DonationOrderSerializer,
    DonationSerializer,
    DonationStatsSerializer,
    VerifyPaymentSerializer,
)
from donations.services import DonationSettlementOrchestrator


def validation_failed(serializer):
    return Response(
        {
            "error": "Validation failed",
            "error_code": "VALIDATION_ERROR",
            "error_kind": "ValidationError",
            "errors": serializer.errors,
        },
        status=status.HTTP_422_UNPROCESSABLE_ENTITY,
    )


class CreateOrderView(APIView):
    """Create a payment gateway order for a donation."""

    permission_classes = [IsDevotee]

    @extend_schema(
        operation_id="create_donation_order",
        summary="Create donation order",
        request=CreateOrderSerializer,
        responses={
            201: DonationOrderSerializer,
            400: OpenApiResponse(description="Organization is not a favorite"),
            404: OpenApiResponse(description="Unknown organization or event"),
            422: OpenApiResponse(description="Malformed or out-of-range amount"),
            502: OpenApiResponse(description="Payment gateway failure"),
            503: OpenApiResponse(description="Gateway not configured or storage failure"),
        },
        tags=["Devotee - Donations"],
    )
    def post(self, request):
        serializer = CreateOrderSerializer(data=request.data)
        if not serializer.is_valid():
            return validation_failed(serializer)

        data = serializer.validated_data
        result = DonationSettlementOrchestrator().create_donation_order(
            devotee_id=request.user.id,
            organization_id=data["organization_id"],
            amount=data["amount"],
            event_id=data.get("event_id"),
        )
        if not result.success:
            return error_response(result)

        return Response(
            {
                "message": "Donation order created successfully.",
                **DonationOrderSerializer(result.data).data,
            },
            status=status.HTTP_201_CREATED,
        )


class VerifyPaymentView(APIView):
    """
    Verify a completed checkout and capture the donation.

    Repeating the call for an already captured donation returns the same
    donation without crediting the event again.
    """

    permission_classes = [IsDevotee]

    @extend_schema(
        operation_id="verify_donation_payment",
        summary="Verify donation payment",
        request=VerifyPaymentSerializer,
        responses={
            200: DonationSerializer,
            400: OpenApiResponse(description="Signature mismatch or payment failed"),
            404: OpenApiResponse(description="No donation for this order"),
        },
        tags=["Devotee - Donations"],
    )
    def post(self, request):
        serializer = VerifyPaymentSerializer(data=request.data)
        if not serializer.is_valid():
            return validation_failed(serializer)

        data = serializer.validated_data
        result = DonationSettlementOrchestrator().verify_donation_payment(
            gateway_order_id=data["razorpay_order_id"],
            payment_id=data["razorpay_payment_id"],
            signature=data["razorpay_signature"],
            devotee_id=request.user.id,
        )
        if not result.success:
            return error_response(result)

        message = (
            "Payment already verified."
            if result.data.already_captured
            else "Payment verified successfully."
        )
        return Response(
            {
                "message": message,
                "donation": DonationSerializer(result.data.donation).data,
            }
        )


class DonationListView(APIView):
    """The authenticated devotee's donations, newest first."""

    permission_classes = [IsDevotee]

    @extend_schema(
        operation_id="list_donations",
        summary="List my donations",
        parameters=[
            OpenApiParameter("page", int, description="Page number, from 1"),
            OpenApiParameter("limit", int, description="Page size, 1 to 50"),
        ],
        responses={200: DonationSerializer(many=True)},
        tags=["Devotee - Donations"],
    )
    def get(self, request):
        try:
            page = int(request.query_params.get("page", 1))
            limit = int(request.query_params["limit"]) if "limit" in request.query_params else None
        except ValueError:
            return Response(
                {
                    "error": "Invalid pagination parameters.",
                    "error_code": "INVALID_PAGINATION",
                    "error_kind": "ValidationError",
                },
                status=status.HTTP_422_UNPROCESSABLE_ENTITY,
            )

        result = DonationSettlementOrchestrator().list_donations(
            devotee_id=request.user.id, page=page, limit=limit
        )
        if not result.success:
            return error_response(result)

        pagination = result.data.pagination
        return Response(
            {
                "donations": DonationSerializer(result.data.donations, many=True).data,
                "total": pagination["total"],
                "page": pagination["page"],
                "limit": pagination["limit"],
                "total_pages": pagination["total_pages"],
            }
        )


class DonationStatsView(APIView):
    permission_classes = [IsDevotee]

    @extend_schema(
        operation_id="donation_stats",
        summary="My donation totals",
        responses={200: DonationStatsSerializer},
        tags=["Devotee - Donations"],
    )
    def get(self, request):
        result = DonationSettlementOrchestrator().get_donation_stats(request.user.id)
        return Response(DonationStatsSerializer(result.data).data)
