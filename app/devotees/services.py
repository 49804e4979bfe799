"""
Devotee service layer.

Services:
    FavoriteService: Favorite organizations of a devotee

Design Principles:
    - Services are stateless (use class methods)
    - Expected failures return ServiceResult.failure()
    - The list is replaced wholesale; display order follows the request order

Usage:
    from devotees.services import FavoriteService

    result = FavoriteService.set_favorites(devotee, [7, 3, 12])
    if result.success:
        favorites = result.data

    if FavoriteService.is_favorite(devotee.id, organization_id):
        ...
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from django.conf import settings
from django.contrib.auth import get_user_model

from core.services import BaseService, ServiceResult
from devotees.models import DevoteeFavorite

if TYPE_CHECKING:
    from devotees.models import Devotee


class FavoriteService(BaseService):
    """Read and replace the favorite organizations of a devotee."""

    @classmethod
    def max_favorites(cls) -> int:
        return settings.DEVOTEE_MAX_FAVORITES

    @classmethod
    def list_favorites(cls, devotee: Devotee) -> list[DevoteeFavorite]:
        """Favorites in display order, with the organization preloaded."""
        return list(
            DevoteeFavorite.objects.filter(devotee=devotee)
            .select_related("organization")
            .order_by("display_order", "id")
        )

    @classmethod
    def is_favorite(cls, devotee_id: int, organization_id: int) -> bool:
        return DevoteeFavorite.objects.filter(
            devotee_id=devotee_id,
            organization_id=organization_id,
        ).exists()

    @classmethod
    def set_favorites(
        cls,
        devotee: Devotee,
        organization_ids: list[int],
    ) -> ServiceResult[list[DevoteeFavorite]]:
        """
        Replace the devotee's favorites with the given organizations.

        Duplicate ids are collapsed, keeping the first occurrence.

        Error codes:
            TOO_MANY_FAVORITES: More unique ids than the configured maximum
            ORGANIZATION_NOT_FOUND: An id is unknown, inactive, or not an organization
        """
        unique_ids = list(dict.fromkeys(organization_ids))
        limit = cls.max_favorites()

        if len(unique_ids) > limit:
            return ServiceResult.failure(
                f"Maximum {limit} favorites allowed.",
                error_code="TOO_MANY_FAVORITES",
                error_kind="ValidationError",
            )

        User = get_user_model()
        found = set(
            User.objects.organizations()
            .filter(id__in=unique_ids)
            .values_list("id", flat=True)
        )
        missing = [org_id for org_id in unique_ids if org_id not in found]
        if missing:
            return ServiceResult.failure(
                "One or more organizations not found or inactive.",
                error_code="ORGANIZATION_NOT_FOUND",
                error_kind="NotFoundError",
                errors={"organization_ids": [str(org_id) for org_id in missing]},
            )

        with cls.atomic():
            DevoteeFavorite.objects.filter(devotee=devotee).delete()
            DevoteeFavorite.objects.bulk_create(
                [
                    DevoteeFavorite(
                        devotee=devotee,
                        organization_id=org_id,
                        display_order=index,
                    )
                    for index, org_id in enumerate(unique_ids, start=1)
                ]
            )

        cls.get_logger().info(
            f"Devotee {devotee.id} set {len(unique_ids)} favorite organizations",
            extra={"devotee_id": devotee.id, "organization_ids": unique_ids},
        )

        return ServiceResult.success(cls.list_favorites(devotee))
