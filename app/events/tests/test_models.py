"""
Tests for the Event model.
"""

from datetime import date
from decimal import Decimal

import pytest
from django.core.exceptions import ValidationError
from django.db import IntegrityError

from events.models import Event, EventType
from events.tests.factories import EventFactory, FundraisingEventFactory


class TestEventValidation:
    @pytest.mark.parametrize("event_type", [EventType.CROWDFUNDING, EventType.CHARITY])
    def test_clean_requires_target_for_fundraising(self, event_type):
        event = Event(event_type=event_type, title="Drive", start_date=date(2026, 1, 1))

        with pytest.raises(ValidationError) as exc_info:
            event.clean()

        assert "target_amount_paise" in exc_info.value.message_dict

    def test_clean_allows_general_without_target(self):
        Event(event_type=EventType.GENERAL, title="Aarti", start_date=date(2026, 1, 1)).clean()

    def test_clean_rejects_end_before_start(self):
        event = Event(
            title="Retreat", start_date=date(2026, 3, 5), end_date=date(2026, 3, 1)
        )

        with pytest.raises(ValidationError) as exc_info:
            event.clean()

        assert "end_date" in exc_info.value.message_dict

    @pytest.mark.parametrize("target", [None, 0])
    @pytest.mark.parametrize("event_type", [EventType.CROWDFUNDING, EventType.CHARITY])
    def test_database_rejects_fundraising_without_target(self, organization, event_type, target):
        with pytest.raises(IntegrityError):
            EventFactory(
                organization=organization,
                event_type=event_type,
                target_amount_paise=target,
            )

    def test_database_allows_general_without_target(self, organization):
        event = EventFactory(
            organization=organization,
            event_type=EventType.GENERAL,
            target_amount_paise=None,
        )

        assert event.pk is not None


class TestEventProgress:
    def test_progress_percent(self):
        event = Event(target_amount_paise=1_000_000, raised_amount_paise=50_000)

        assert event.progress_percent == Decimal("5.00")

    def test_progress_is_capped_at_100(self):
        event = Event(target_amount_paise=100, raised_amount_paise=250)

        assert event.progress_percent == Decimal("100.00")

    def test_progress_is_none_without_target(self):
        assert Event(raised_amount_paise=500).progress_percent is None

    def test_amount_strings(self, db):
        event = FundraisingEventFactory(target_amount_paise=1_000_000)

        assert event.target_amount == "10000.00"
        assert event.raised_amount == "0.00"
