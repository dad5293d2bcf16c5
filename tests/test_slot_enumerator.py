"""
Tests for the available slot enumerator.
"""

import pendulum

from venuescheduler.domain.conflict_checker import ConflictChecker
from venuescheduler.domain.models import BufferPolicy, BusinessHours, ExistingBooking
from venuescheduler.domain.slot_enumerator import SlotEnumerator

TZ = "Europe/Belgrade"


def at(value: str):
    return pendulum.parse(value, tz=TZ)


def _enumerator(start_hour=9, end_hour=20, buffer_minutes=45):
    return SlotEnumerator(
        checker=ConflictChecker(BufferPolicy(buffer_minutes=buffer_minutes)),
        business_hours=BusinessHours(start_hour=start_hour, end_hour=end_hour),
    )


class TestSlotEnumerator:
    """Tests for SlotEnumerator."""

    def test_empty_day(self):
        slots = _enumerator().available_slots(at("2025-12-06"), [], slot_duration_minutes=120)

        # 09:00 through 18:00 in 30 minute steps; 18:00 + 120 min == closing
        assert len(slots) == 19
        assert slots[0] == at("2025-12-06 09:00")
        assert slots[-1] == at("2025-12-06 18:00")

    def test_morning_booking_scenario(self):
        """Booking at 09:00 for 120 min with a 45 minute buffer."""
        existing = [ExistingBooking(id="b1", start_time=at("2025-12-06 09:00"), duration_minutes=120)]

        slots = _enumerator().available_slots(at("2025-12-06"), existing, slot_duration_minutes=120)

        assert at("2025-12-06 09:00") not in slots
        assert at("2025-12-06 09:30") not in slots
        assert slots[0] == at("2025-12-06 10:00")
        assert slots[-1] == at("2025-12-06 18:00")
        assert len(slots) == 17

    def test_time_of_day_of_input_is_ignored(self):
        existing = [ExistingBooking(id="b1", start_time=at("2025-12-06 09:00"))]

        from_midnight = _enumerator().available_slots(at("2025-12-06 00:00"), existing)
        from_afternoon = _enumerator().available_slots(at("2025-12-06 15:20"), existing)

        assert from_midnight == from_afternoon

    def test_slots_fit_inside_business_hours(self):
        existing = [
            ExistingBooking(id="b1", start_time=at("2025-12-06 11:00")),
            ExistingBooking(id="b2", start_time=at("2025-12-06 15:30")),
        ]
        hours = BusinessHours(start_hour=9, end_hour=20)

        for duration in (30, 60, 90, 120, 240):
            slots = _enumerator().available_slots(at("2025-12-06"), existing, slot_duration_minutes=duration)

            for slot in slots:
                assert slot >= hours.opening(slot)
                assert slot.add(minutes=duration) <= hours.closing(slot)

    def test_slot_longer_than_day(self):
        enumerator = _enumerator()

        assert enumerator.available_slots(at("2025-12-06"), [], slot_duration_minutes=660) == [
            at("2025-12-06 09:00")
        ]
        assert enumerator.available_slots(at("2025-12-06"), [], slot_duration_minutes=661) == []

    def test_custom_business_hours(self):
        slots = _enumerator(start_hour=10, end_hour=12).available_slots(
            at("2025-12-06"), [], slot_duration_minutes=60
        )

        assert slots == [
            at("2025-12-06 10:00"),
            at("2025-12-06 10:30"),
            at("2025-12-06 11:00"),
        ]

    def test_bookings_on_other_days_do_not_block(self):
        existing = [ExistingBooking(id="b1", start_time=at("2025-12-05 09:00"))]

        slots = _enumerator().available_slots(at("2025-12-06"), existing)

        assert slots[0] == at("2025-12-06 09:00")

    def test_slots_are_chronological_and_conflict_free(self):
        checker = ConflictChecker(BufferPolicy(buffer_minutes=45))
        enumerator = SlotEnumerator(checker)
        existing = [
            ExistingBooking(id="b1", start_time=at("2025-12-06 10:15")),
            ExistingBooking(id="b2", start_time=at("2025-12-06 13:00")),
            ExistingBooking(id="b3", start_time=at("2025-12-06 17:45")),
        ]

        slots = enumerator.available_slots(at("2025-12-06"), existing)

        assert slots == sorted(slots)
        for slot in slots:
            assert not checker.check_time(slot, 120, existing).has_conflict
