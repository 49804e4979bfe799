"""
Views for events.

URL Structure:
    /api/v1/devotee/organizations/{id}/events/    GET
"""

from __future__ import annotations

from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework.response import Response
from rest_framework.views import APIView

from core.views import error_response
from devotees.permissions import IsDevotee
from events.serializers import OrganizationEventsSerializer
from events.services import EventService


class OrganizationEventListView(APIView):
    """
    Active events of one organization.

    GET /api/v1/devotee/organizations/{id}/events/?include_past=true
    """

    permission_classes = [IsDevotee]

    @extend_schema(
        operation_id="list_organization_events",
        summary="List organization events",
        parameters=[
            OpenApiParameter(
                name="include_past",
                type=OpenApiTypes.BOOL,
                location=OpenApiParameter.QUERY,
                description="Include events that already ended (default false)",
                required=False,
            ),
        ],
        responses={
            200: OrganizationEventsSerializer,
            404: OpenApiResponse(description="Organization not found or inactive"),
        },
        tags=["Devotee - Events"],
    )
    def get(self, request, organization_id: int):
        include_past = request.query_params.get("include_past", "").lower() in ("1", "true", "yes")

        result = EventService.list_organization_events(
            organization_id, upcoming_only=not include_past
        )
        if not result.success:
            return error_response(result)

        return Response(OrganizationEventsSerializer(result.data).data)
