"""
Factory Boy factories for donations.

Usage:
    from donations.tests.factories import DonationFactory

    donation = DonationFactory(devotee=devotee, organization=temple)
    captured = CapturedDonationFactory(devotee=devotee)
"""

import factory
from django.utils import timezone

from authentication.tests.factories import OrganizationFactory
from devotees.tests.factories import DevoteeFactory
from donations.models import Donation
from donations.state_machines import DonationStatus


class DonationFactory(factory.django.DjangoModelFactory):
    """PENDING donation. Status can only be chosen at construction time."""

    class Meta:
        model = Donation

    devotee = factory.SubFactory(DevoteeFactory)
    organization = factory.SubFactory(OrganizationFactory)
    event = None
    amount_paise = 50_000
    currency = "INR"
    gateway_order_id = factory.Sequence(lambda n: f"order_test{n:06d}")


class CapturedDonationFactory(DonationFactory):
    status = DonationStatus.CAPTURED
    gateway_payment_id = factory.Sequence(lambda n: f"pay_test{n:06d}")
    gateway_signature = "f" * 64
    payment_method = "upi"
    captured_at = factory.LazyFunction(timezone.now)


class FailedDonationFactory(DonationFactory):
    status = DonationStatus.FAILED
    failed_at = factory.LazyFunction(timezone.now)
    failure_reason = "signature mismatch"
