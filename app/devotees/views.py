"""
Views for devotee profile data.

URL Structure:
    /api/v1/devotee/favorites/    GET, PUT
"""

from __future__ import annotations

from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from core.views import error_response
from devotees.permissions import IsDevotee
from devotees.serializers import FavoriteSerializer, SetFavoritesSerializer
from devotees.services import FavoriteService


class FavoriteListView(APIView):
    """
    The authenticated devotee's favorite organizations.

    GET returns the list in display order.
    PUT replaces the whole list with the given organization ids.
    """

    permission_classes = [IsDevotee]

    @extend_schema(
        operation_id="list_favorites",
        summary="List favorite organizations",
        responses={200: FavoriteSerializer(many=True)},
        tags=["Devotee - Favorites"],
    )
    def get(self, request):
        favorites = FavoriteService.list_favorites(request.user)
        return Response(
            {
                "favorites": FavoriteSerializer(favorites, many=True).data,
                "total": len(favorites),
            }
        )

    @extend_schema(
        operation_id="set_favorites",
        summary="Replace favorite organizations",
        request=SetFavoritesSerializer,
        responses={
            200: FavoriteSerializer(many=True),
            404: OpenApiResponse(description="Unknown or inactive organization"),
            422: OpenApiResponse(description="Too many favorites or malformed ids"),
        },
        tags=["Devotee - Favorites"],
    )
    def put(self, request):
        serializer = SetFavoritesSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(
                {
                    "error": "Validation failed",
                    "error_code": "VALIDATION_ERROR",
                    "error_kind": "ValidationError",
                    "errors": serializer.errors,
                },
                status=status.HTTP_422_UNPROCESSABLE_ENTITY,
            )

        result = FavoriteService.set_favorites(
            request.user, serializer.validated_data["organization_ids"]
        )
        if not result.success:
            return error_response(result)

        return Response(
            {
                "message": "Favorites updated successfully.",
                "favorites": FavoriteSerializer(result.data, many=True).data,
                "total": len(result.data),
            }
        )
