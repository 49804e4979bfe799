"""
Devotee token authentication.

Devotee access tokens are ordinary Simple JWT access tokens that carry a
devotee_id claim instead of a user_id claim, so a devotee token can never
be mistaken for an organization or staff session.

Usage:
    token = DevoteeAccessToken.for_devotee(devotee)
    client.credentials(HTTP_AUTHORIZATION=f"Bearer {token}")
"""

from __future__ import annotations

import logging

from django.conf import settings
from rest_framework_simplejwt.authentication import JWTAuthentication
from rest_framework_simplejwt.exceptions import AuthenticationFailed, InvalidToken
from rest_framework_simplejwt.tokens import AccessToken

from devotees.models import Devotee

logger = logging.getLogger(__name__)


class DevoteeAccessToken(AccessToken):
    """Access token identifying a devotee."""

    @classmethod
    def for_devotee(cls, devotee: Devotee) -> DevoteeAccessToken:
        token = cls()
        token[settings.DEVOTEE_ID_CLAIM] = devotee.pk
        return token


class DevoteeJWTAuthentication(JWTAuthentication):
    """
    Authenticate requests bearing a devotee access token.

    Sets request.user to the Devotee instance. Tokens without the devotee
    claim are rejected.
    """

    def get_user(self, validated_token):
        try:
            devotee_id = validated_token[settings.DEVOTEE_ID_CLAIM]
        except KeyError:
            raise InvalidToken("Token contained no recognizable devotee identification")

        devotee = Devotee.objects.filter(pk=devotee_id).first()
        if devotee is None:
            raise AuthenticationFailed("Devotee not found", code="user_not_found")

        if not devotee.is_active:
            logger.warning(
                f"Inactive devotee {devotee_id} presented a valid token",
                extra={"devotee_id": devotee_id},
            )
            raise AuthenticationFailed("Devotee is inactive", code="user_inactive")

        return devotee
