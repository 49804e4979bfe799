"""
URL configuration for donation endpoints.

Mounted under /api/v1/devotee/donations/.
"""

from django.urls import path

from donations.views import (
    CreateOrderView,
    DonationListView,
    DonationStatsView,
    VerifyPaymentView,
)

app_name = "donations"

urlpatterns = [
    path("", DonationListView.as_view(), name="list"),
    path("stats/", DonationStatsView.as_view(), name="stats"),
    path("create-order/", CreateOrderView.as_view(), name="create-order"),
    path("verify/", VerifyPaymentView.as_view(), name="verify"),
]
