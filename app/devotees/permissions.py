"""
Permission classes for devotee endpoints.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rest_framework import permissions

from devotees.models import Devotee

if TYPE_CHECKING:
    from rest_framework.request import Request
    from rest_framework.views import APIView


class IsDevotee(permissions.BasePermission):
    """
    Allows access only to authenticated, active devotees.

    Organization and staff sessions are refused even when authenticated.
    """

    message = "Devotee access required."

    def has_permission(self, request: Request, view: APIView) -> bool:
        user = request.user
        return isinstance(user, Devotee) and user.is_active
