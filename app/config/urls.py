"""
Root URLconf.

    /                              ReDoc, rendered from /schema/
    /admin/                        Django admin (staff only)
    /health/                       Database liveness check
    /api/v1/devotee/               Devotee API (JWT with a devotee_id claim)
        favorites/                     GET, PUT
        organizations/{id}/events/     GET
        donations/                     GET  history
        donations/stats/               GET  captured totals
        donations/create-order/        POST
        donations/verify/              POST
"""

from django.contrib import admin
from django.urls import include, path
from drf_spectacular.views import SpectacularAPIView, SpectacularRedocView

from core.views import health_check

# Mounted under /api/v1/
api_v1_patterns = [
    path("devotee/", include("devotees.urls")),
    path("devotee/", include("events.urls")),
    path("devotee/donations/", include("donations.urls")),
]

urlpatterns = [
    path("", SpectacularRedocView.as_view(url_name="schema"), name="redoc"),
    path("schema/", SpectacularAPIView.as_view(), name="schema"),
    path("admin/", admin.site.urls),
    path("health/", health_check, name="health_check"),
    path("api/v1/", include(api_v1_patterns)),
]

admin.site.site_header = "Donation Platform Admin"
admin.site.site_title = "Donation Admin Portal"
admin.site.index_title = "Organizations, events and donations"
