"""
Account factories.

Usage:
    from authentication.tests.factories import OrganizationFactory

    temple = OrganizationFactory(organization_type="temple")
    closed = OrganizationFactory(is_active=False)
"""

import factory

from authentication.models import User


class UserFactory(factory.django.DjangoModelFactory):
    """Active organization account; created through UserManager.create_user."""

    class Meta:
        model = User
        skip_postgeneration_save = True

    email = factory.Sequence(lambda n: f"org{n}@example.com")
    name = factory.Sequence(lambda n: f"Organization {n}")
    role = User.Role.ADMIN
    is_active = True
    is_staff = False

    @classmethod
    def _create(cls, model_class, *args, **kwargs):
        password = kwargs.pop("password", "TestPass123!")
        return model_class.objects.create_user(
            email=kwargs.pop("email"), password=password, **kwargs
        )


class OrganizationFactory(UserFactory):
    """Organization account (role=admin) with contact details."""

    organization_type = User.OrganizationType.TEMPLE
    phone = factory.Sequence(lambda n: f"+9198000{n:05d}")
    address = factory.Faker("address")


class SuperAdminFactory(UserFactory):
    """Platform staff account."""

    email = factory.Sequence(lambda n: f"staff{n}@example.com")
    role = User.Role.SUPER_ADMIN
    is_staff = True
    is_superuser = True
