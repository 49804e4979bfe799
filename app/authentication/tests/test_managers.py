"""UserManager: email normalization, organization onboarding, staff accounts."""

import pytest

from authentication.models import User
from authentication.tests.factories import OrganizationFactory


class TestUserManagerCreateUser:
    def test_creates_user_with_email_and_password(self, db):
        user = User.objects.create_user(email="mgr@example.com", password="SecurePass123!")

        assert user.pk is not None
        assert user.check_password("SecurePass123!") is True

    def test_normalizes_email_domain_to_lowercase(self, db):
        user = User.objects.create_user(email="Office@TEMPLE.EXAMPLE")

        assert user.email == "Office@temple.example"

    def test_missing_email_raises(self, db):
        with pytest.raises(ValueError, match="Email"):
            User.objects.create_user(email="")

    def test_without_password_sets_unusable_password(self, db):
        user = User.objects.create_user(email="nopass@example.com")

        assert user.has_usable_password() is False


class TestUserManagerCreateOrganizationAdmin:
    def test_creates_admin_role_account(self, db, super_admin):
        org = User.objects.create_organization_admin(
            email="gurudwara@example.com",
            password="SecurePass123!",
            name="Gurudwara Sahib",
            organization_type=User.OrganizationType.GURUDWARA,
            created_by=super_admin,
        )

        assert org.role == User.Role.ADMIN
        assert org.is_organization is True
        assert org.is_staff is False
        assert org.created_by == super_admin

    def test_rejects_other_roles(self, db):
        with pytest.raises(ValueError, match="role=admin"):
            User.objects.create_organization_admin(
                email="x@example.com", role=User.Role.SUPER_ADMIN
            )


class TestUserManagerCreateSuperuser:

    def test_sets_staff_superuser_and_role(self, db):
        admin = User.objects.create_superuser(email="root@example.com", password="pw")

        assert admin.is_staff is True
        assert admin.is_superuser is True
        assert admin.role == User.Role.SUPER_ADMIN
        assert admin.is_organization is False

    def test_raises_if_is_staff_false(self, db):
        with pytest.raises(ValueError, match="is_staff"):
            User.objects.create_superuser(email="bad@example.com", is_staff=False)


class TestOrganizationsQueryset:
    def test_excludes_inactive_and_staff(self, db, super_admin):
        active = OrganizationFactory()
        OrganizationFactory(is_active=False)

        assert list(User.objects.organizations()) == [active]
