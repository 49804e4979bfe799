"""
Payment gateway adapters.

All calls to the payment gateway go through these adapters to ensure
consistent timeouts, error handling and observability.

Usage:
    from donations.adapters import RazorpayAdapter

    gateway = RazorpayAdapter.from_settings()
    order = gateway.create_order(amount_paise=50000, receipt="don_7_3_1715300000")
"""

from donations.adapters.razorpay_adapter import (
    GatewayOrder,
    PaymentDetails,
    RazorpayAdapter,
    build_receipt,
)

__all__ = [
    "GatewayOrder",
    "PaymentDetails",
    "RazorpayAdapter",
    "build_receipt",
]
