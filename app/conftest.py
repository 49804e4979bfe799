"""
Shared pytest setup: Django configuration, test markers and the account
fixtures used across apps. App-specific fixtures (the fake payment
gateway, for one) live in each app's tests/conftest.py.
"""

import os

import django
import pytest

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings")


def pytest_configure():
    django.setup()

    from django.conf import settings

    # No rate limits in tests
    settings.REST_FRAMEWORK["DEFAULT_THROTTLE_CLASSES"] = []
    settings.REST_FRAMEWORK["DEFAULT_THROTTLE_RATES"] = {}

    # Fast hasher for account fixtures
    settings.PASSWORD_HASHERS = [
        "django.contrib.auth.hashers.MD5PasswordHasher",
    ]


def pytest_collection_modifyitems(items):
    """
    Tag every test unit, integration or e2e from its file name.

    Markers set explicitly on a test win. Unknown file names are integration.
    """
    by_file = {
        "e2e": ("test_integration.py", "test_concurrency.py"),
        "integration": (
            "test_views.py",
            "test_services.py",
            "test_orchestrator.py",
            "test_ledger.py",
            "test_aggregator.py",
            "test_authentication.py",
        ),
        "unit": (
            "test_models.py",
            "test_managers.py",
            "test_helpers.py",
            "test_exceptions.py",
            "test_razorpay_adapter.py",
        ),
    }

    for item in items:
        if {m.name for m in item.iter_markers()} & by_file.keys():
            continue
        filename = item.path.name
        marker = next(
            (name for name, files in by_file.items() if filename in files),
            "integration",
        )
        item.add_marker(getattr(pytest.mark, marker))


# =============================================================================
# Shared account fixtures
# =============================================================================


@pytest.fixture
def super_admin(db):
    """Platform staff account."""
    from authentication.tests.factories import SuperAdminFactory

    return SuperAdminFactory()


@pytest.fixture
def organization(db, super_admin):
    """Active temple onboarded by the super admin."""
    from authentication.tests.factories import OrganizationFactory

    return OrganizationFactory(created_by=super_admin, name="Sri Ram Mandir")


@pytest.fixture
def devotee(db):
    """Active devotee identified by mobile number."""
    from devotees.tests.factories import DevoteeFactory

    return DevoteeFactory()


@pytest.fixture
def favorite_organization(db, devotee, organization):
    """The organization fixture, marked as a favorite of the devotee fixture."""
    from devotees.models import DevoteeFavorite

    DevoteeFavorite.objects.create(devotee=devotee, organization=organization)
    return organization


@pytest.fixture
def devotee_client(devotee):
    """APIClient carrying a devotee access token."""
    from rest_framework.test import APIClient

    from devotees.authentication import DevoteeAccessToken

    client = APIClient()
    token = DevoteeAccessToken.for_devotee(devotee)
    client.credentials(HTTP_AUTHORIZATION=f"Bearer {token}")
    return client


@pytest.fixture
def api_client():
    """Unauthenticated APIClient."""
    from rest_framework.test import APIClient

    return APIClient()


def _flush_postgresql_with_cascade():
    """
    Make PostgreSQL table flushes use TRUNCATE ... CASCADE.

    The threaded settlement tests run with transaction=True, so tables are
    flushed between tests; donations reference devotees, events and
    organizations, and a plain TRUNCATE refuses referenced tables.
    """
    from django.db.backends.postgresql import operations

    base_sql_flush = operations.DatabaseOperations.sql_flush

    def sql_flush(self, style, tables, *, reset_sequences=False, allow_cascade=False):
        return base_sql_flush(
            self, style, tables, reset_sequences=reset_sequences, allow_cascade=True
        )

    operations.DatabaseOperations.sql_flush = sql_flush


_flush_postgresql_with_cascade()
