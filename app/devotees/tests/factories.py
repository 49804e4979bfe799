"""
Factory Boy factories for devotee models.

Usage:
    from devotees.tests.factories import DevoteeFactory, DevoteeFavoriteFactory

    devotee = DevoteeFactory(city="Pune")
    DevoteeFavoriteFactory(devotee=devotee, organization=temple)
"""

import factory

from authentication.tests.factories import OrganizationFactory
from devotees.models import Devotee, DevoteeFavorite


class DevoteeFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Devotee

    mobile = factory.Sequence(lambda n: f"98{n:08d}")
    name = factory.Faker("name")
    city = "Hyderabad"
    is_active = True


class DevoteeFavoriteFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = DevoteeFavorite

    devotee = factory.SubFactory(DevoteeFactory)
    organization = factory.SubFactory(OrganizationFactory)
    display_order = factory.Sequence(lambda n: n + 1)
