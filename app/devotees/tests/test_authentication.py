"""
Tests for devotee token authentication and the IsDevotee permission.
"""

import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import AccessToken

from devotees.authentication import DevoteeAccessToken
from devotees.tests.factories import DevoteeFactory

FAVORITES_URL = "/api/v1/devotee/favorites/"


@pytest.mark.django_db
class TestDevoteeJWTAuthentication:
    def test_valid_token_authenticates(self, devotee_client):
        response = devotee_client.get(FAVORITES_URL)

        assert response.status_code == 200

    def test_missing_token_is_rejected(self, api_client):
        response = api_client.get(FAVORITES_URL)

        assert response.status_code == 401

    def test_inactive_devotee_is_rejected(self):
        devotee = DevoteeFactory(is_active=False)
        client = APIClient()
        client.credentials(
            HTTP_AUTHORIZATION=f"Bearer {DevoteeAccessToken.for_devotee(devotee)}"
        )

        response = client.get(FAVORITES_URL)

        assert response.status_code == 401

    def test_user_token_without_devotee_claim_is_rejected(self, organization):
        client = APIClient()
        client.credentials(
            HTTP_AUTHORIZATION=f"Bearer {AccessToken.for_user(organization)}"
        )

        response = client.get(FAVORITES_URL)

        assert response.status_code == 401

    def test_organization_session_is_forbidden(self, organization):
        client = APIClient()
        client.force_authenticate(user=organization)

        response = client.get(FAVORITES_URL)

        assert response.status_code == 403
