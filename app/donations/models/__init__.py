"""
Donation models.

Usage:
    from donations.models import Donation
"""

from donations.models.donation import Donation

__all__ = ["Donation"]
