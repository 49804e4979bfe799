"""
Factory Boy factories for events.

Usage:
    from events.tests.factories import EventFactory, FundraisingEventFactory

    event = EventFactory(organization=temple)
    drive = FundraisingEventFactory(organization=temple, target_amount_paise=1_000_000)
"""

from datetime import timedelta

import factory
from django.utils import timezone

from authentication.tests.factories import OrganizationFactory
from events.models import Event, EventType


class EventFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Event

    organization = factory.SubFactory(OrganizationFactory)
    event_type = EventType.GENERAL
    title = factory.Sequence(lambda n: f"Satsang {n}")
    start_date = factory.LazyFunction(lambda: timezone.localdate() + timedelta(days=7))
    end_date = None
    is_active = True


class FundraisingEventFactory(EventFactory):
    event_type = EventType.CROWDFUNDING
    title = factory.Sequence(lambda n: f"Temple renovation drive {n}")
    end_date = factory.LazyAttribute(lambda o: o.start_date + timedelta(days=30))
    target_amount_paise = 1_000_000
