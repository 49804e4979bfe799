"""
State enum for the donation lifecycle.

Donation States:
    pending → captured
    pending → failed

Captured and failed are terminal. Transitions are declared on the
Donation model with django-fsm.
"""

from django.db import models


class DonationStatus(models.TextChoices):
    """
    States for the Donation model lifecycle.

    PENDING: Gateway order created, waiting for the devotee to pay
    CAPTURED: Payment verified; counted in totals and event progress
    FAILED: Verification failed (signature mismatch); never resurrected
    """

    PENDING = "pending", "Pending"
    CAPTURED = "captured", "Captured"
    FAILED = "failed", "Failed"

