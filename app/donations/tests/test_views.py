"""
Tests for the donation endpoints.

The orchestrator built by each view is swapped for one wired to the
in-memory FakeGateway.
"""

import pytest

from donations.models import Donation
from donations.services import DonationSettlementOrchestrator
from donations.state_machines import DonationStatus
from donations.tests.conftest import sign
from donations.tests.factories import CapturedDonationFactory, DonationFactory
from events.tests.factories import FundraisingEventFactory

CREATE_ORDER_URL = "/api/v1/devotee/donations/create-order/"
VERIFY_URL = "/api/v1/devotee/donations/verify/"
LIST_URL = "/api/v1/devotee/donations/"
STATS_URL = "/api/v1/devotee/donations/stats/"


@pytest.fixture(autouse=True)
def fake_gateway_orchestrator(monkeypatch, gateway):
    monkeypatch.setattr(
        "donations.views.DonationSettlementOrchestrator",
        lambda: DonationSettlementOrchestrator(gateway=gateway),
    )


@pytest.mark.django_db
class TestCreateOrderView:
    def test_creates_order(self, devotee_client, gateway, favorite_organization):
        event = FundraisingEventFactory(organization=favorite_organization)
        gateway.next_order_ids = ["order_abc"]

        response = devotee_client.post(
            CREATE_ORDER_URL,
            {"organization_id": favorite_organization.id, "amount": "500", "event_id": event.id},
            format="json",
        )

        assert response.status_code == 201
        assert response.data["order_id"] == "order_abc"
        assert response.data["amount_paise"] == 50_000
        assert response.data["amount"] == "500.00"
        assert response.data["currency"] == "INR"
        assert response.data["key_id"] == "rzp_test_key"
        assert response.data["organization_name"] == "Sri Ram Mandir"
        assert response.data["event_id"] == event.id
        assert Donation.objects.filter(pk=response.data["donation_id"]).exists()

    def test_not_favorited_returns_400(self, devotee_client, organization):
        response = devotee_client.post(
            CREATE_ORDER_URL,
            {"organization_id": organization.id, "amount": "500"},
            format="json",
        )

        assert response.status_code == 400
        assert response.data["error_code"] == "NOT_FAVORITED"
        assert response.data["error_kind"] == "PolicyError"
        assert response.data["details"] == {"organization_id": organization.id}

    def test_amount_below_minimum_returns_422(self, devotee_client, favorite_organization):
        response = devotee_client.post(
            CREATE_ORDER_URL,
            {"organization_id": favorite_organization.id, "amount": "0.50"},
            format="json",
        )

        assert response.status_code == 422
        assert response.data["error_code"] == "AMOUNT_BELOW_MINIMUM"

    def test_missing_fields_return_422(self, devotee_client):
        response = devotee_client.post(CREATE_ORDER_URL, {}, format="json")

        assert response.status_code == 422
        assert set(response.data["errors"]) == {"organization_id", "amount"}

    def test_gateway_timeout_returns_502(
        self, devotee_client, gateway, favorite_organization, timeout_error
    ):
        gateway.create_error = timeout_error

        response = devotee_client.post(
            CREATE_ORDER_URL,
            {"organization_id": favorite_organization.id, "amount": "500"},
            format="json",
        )

        assert response.status_code == 502
        assert response.data["error_code"] == "GATEWAY_TIMEOUT"

    def test_requires_devotee_token(self, api_client, favorite_organization):
        response = api_client.post(
            CREATE_ORDER_URL,
            {"organization_id": favorite_organization.id, "amount": "500"},
            format="json",
        )

        assert response.status_code == 401


@pytest.mark.django_db
class TestVerifyPaymentView:
    @pytest.fixture
    def donation(self, devotee, favorite_organization):
        return DonationFactory(
            devotee=devotee, organization=favorite_organization, gateway_order_id="order_abc"
        )

    def payload(self, signature=None):
        return {
            "razorpay_order_id": "order_abc",
            "razorpay_payment_id": "pay_1",
            "razorpay_signature": signature or sign("order_abc", "pay_1"),
        }

    def test_verifies_payment(self, devotee_client, donation):
        response = devotee_client.post(VERIFY_URL, self.payload(), format="json")

        assert response.status_code == 200
        assert response.data["message"] == "Payment verified successfully."
        assert response.data["donation"]["status"] == DonationStatus.CAPTURED
        assert response.data["donation"]["gateway_payment_id"] == "pay_1"

    def test_second_verify_reports_already_verified(self, devotee_client, donation):
        devotee_client.post(VERIFY_URL, self.payload(), format="json")

        response = devotee_client.post(VERIFY_URL, self.payload(), format="json")

        assert response.status_code == 200
        assert response.data["message"] == "Payment already verified."

    def test_tampered_signature_returns_400(self, devotee_client, donation):
        response = devotee_client.post(VERIFY_URL, self.payload("0" * 64), format="json")

        assert response.status_code == 400
        assert response.data["error_code"] == "SIGNATURE_MISMATCH"
        assert Donation.objects.get(pk=donation.pk).status == DonationStatus.FAILED

    def test_other_devotees_order_returns_404(self, devotee_client):
        DonationFactory(gateway_order_id="order_abc")

        response = devotee_client.post(VERIFY_URL, self.payload(), format="json")

        assert response.status_code == 404
        assert response.data["error_kind"] == "NotFoundError"

    def test_missing_signature_returns_422(self, devotee_client, donation):
        payload = self.payload()
        del payload["razorpay_signature"]

        response = devotee_client.post(VERIFY_URL, payload, format="json")

        assert response.status_code == 422
        assert Donation.objects.get(pk=donation.pk).status == DonationStatus.PENDING


@pytest.mark.django_db
class TestDonationListView:
    def test_lists_own_donations(self, devotee_client, devotee):
        DonationFactory.create_batch(3, devotee=devotee)
        DonationFactory()

        response = devotee_client.get(LIST_URL)

        assert response.status_code == 200
        assert response.data["total"] == 3
        assert response.data["page"] == 1
        assert response.data["limit"] == 20
        assert response.data["total_pages"] == 1
        assert len(response.data["donations"]) == 3

    def test_pagination_params(self, devotee_client, devotee):
        DonationFactory.create_batch(5, devotee=devotee)

        response = devotee_client.get(LIST_URL, {"page": 3, "limit": 2})

        assert response.data["total_pages"] == 3
        assert len(response.data["donations"]) == 1

    @pytest.mark.parametrize("params", [{"page": "x"}, {"limit": 500}, {"page": 0}])
    def test_invalid_pagination_returns_422(self, devotee_client, params):
        response = devotee_client.get(LIST_URL, params)

        assert response.status_code == 422
        assert response.data["error_code"] == "INVALID_PAGINATION"


@pytest.mark.django_db
class TestDonationStatsView:
    def test_stats(self, devotee_client, devotee):
        CapturedDonationFactory(devotee=devotee, amount_paise=50_000)
        CapturedDonationFactory(devotee=devotee, amount_paise=1_000)
        DonationFactory(devotee=devotee)

        response = devotee_client.get(STATS_URL)

        assert response.status_code == 200
        assert response.data == {
            "total_donations": 2,
            "total_amount_paise": 51_000,
            "total_amount": "510.00",
        }
