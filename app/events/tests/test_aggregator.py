"""
Tests for EventFundingAggregator.

The aggregator must never lose an update: the final raised total equals
the sum of every credited amount, whatever the interleaving.
"""

import threading
from unittest.mock import patch

import pytest
from django.db import OperationalError, connection, connections

from core.exceptions import StorageError, ValidationError
from events.models import Event
from events.services import EventFundingAggregator
from events.tests.factories import FundraisingEventFactory


@pytest.fixture
def aggregator():
    return EventFundingAggregator()


@pytest.mark.django_db
class TestAddRaised:
    def test_credits_active_event(self, aggregator):
        event = FundraisingEventFactory()

        assert aggregator.add_raised(event.id, 50_000) is True

        event.refresh_from_db()
        assert event.raised_amount_paise == 50_000

    def test_repeated_credits_accumulate(self, aggregator):
        event = FundraisingEventFactory()

        for _ in range(3):
            aggregator.add_raised(event.id, 1_000)

        event.refresh_from_db()
        assert event.raised_amount_paise == 3_000

    def test_credits_from_stale_copies_are_not_lost(self, aggregator):
        """Both writers hold a copy read before either credit; both credits land."""
        event = FundraisingEventFactory()
        first_copy = Event.objects.get(pk=event.pk)
        second_copy = Event.objects.get(pk=event.pk)

        aggregator.add_raised(first_copy.id, 10_000)
        aggregator.add_raised(second_copy.id, 25_000)

        # A read-modify-write from either stale copy would have produced 10_000 or 25_000
        assert first_copy.raised_amount_paise == second_copy.raised_amount_paise == 0
        assert Event.objects.get(pk=event.pk).raised_amount_paise == 35_000

    def test_inactive_event_is_skipped_and_logged(self, aggregator, caplog):
        event = FundraisingEventFactory(is_active=False)

        with caplog.at_level("WARNING"):
            assert aggregator.add_raised(event.id, 5_000) is False

        event.refresh_from_db()
        assert event.raised_amount_paise == 0
        assert "skipped crediting" in caplog.text

    def test_missing_event_is_skipped(self, aggregator):
        assert aggregator.add_raised(987_654, 5_000) is False

    @pytest.mark.parametrize("amount", [0, -100])
    def test_non_positive_amount_is_rejected(self, aggregator, amount):
        event = FundraisingEventFactory()

        with pytest.raises(ValidationError):
            aggregator.add_raised(event.id, amount)

        event.refresh_from_db()
        assert event.raised_amount_paise == 0

    def test_database_error_raises_storage_error(self, aggregator):
        event = FundraisingEventFactory()

        with patch.object(Event.objects, "filter", side_effect=OperationalError("lock timeout")):
            with pytest.raises(StorageError) as exc_info:
                aggregator.add_raised(event.id, 5_000)

        assert exc_info.value.error_code == "EVENT_NOT_CREDITED"


@pytest.mark.django_db(transaction=True)
@pytest.mark.skipif(
    connection.vendor != "postgresql",
    reason="concurrent writers need a database with row-level locking",
)
def test_concurrent_credits_sum_exactly():
    event = FundraisingEventFactory()
    workers, amount = 8, 2_500
    barrier = threading.Barrier(workers)

    def credit():
        try:
            barrier.wait()
            EventFundingAggregator().add_raised(event.id, amount)
        finally:
            connections.close_all()

    threads = [threading.Thread(target=credit) for _ in range(workers)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    event.refresh_from_db()
    assert event.raised_amount_paise == workers * amount
