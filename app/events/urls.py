"""
URL configuration for event endpoints.

Mounted under /api/v1/devotee/.
"""

from django.urls import path

from events.views import OrganizationEventListView

app_name = "events"

urlpatterns = [
    path(
        "organizations/<int:organization_id>/events/",
        OrganizationEventListView.as_view(),
        name="organization-events",
    ),
]
