"""
URL configuration for devotee profile endpoints.

Mounted under /api/v1/devotee/.
"""

from django.urls import path

from devotees.views import FavoriteListView

app_name = "devotees"

urlpatterns = [
    path("favorites/", FavoriteListView.as_view(), name="favorites"),
]
