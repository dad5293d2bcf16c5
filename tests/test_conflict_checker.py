"""
Tests for the conflict checker.
"""

import pendulum
import pytest

from venuescheduler.domain.conflict_checker import ConflictChecker, check_conflict
from venuescheduler.domain.models import (
    BufferPolicy,
    CandidateRequest,
    ConflictType,
    ExistingBooking,
)

TZ = "Europe/Belgrade"


def at(value: str):
    return pendulum.parse(value, tz=TZ)


@pytest.fixture
def morning_booking():
    """One booking at 09:00 for 120 minutes (occupies 09:00-11:00)."""
    return [ExistingBooking(id="b1", start_time=at("2025-12-06 09:00"), duration_minutes=120)]


@pytest.fixture
def checker():
    return ConflictChecker(BufferPolicy(buffer_minutes=45))


class TestConflictChecker:
    """Tests for ConflictChecker."""

    def test_same_start_is_double_booking(self, checker, morning_booking):
        result = checker.check(CandidateRequest(start_time=at("2025-12-06 09:00")), morning_booking)

        assert result.has_conflict
        assert result.conflict_type == ConflictType.DOUBLE_BOOKING
        assert result.conflicting_booking_id == "b1"
        assert result.message == "This time slot is already booked at 9:00 AM"
        assert result.suggested_times == []

    def test_close_start_is_buffer_violation(self, checker, morning_booking):
        result = checker.check(CandidateRequest(start_time=at("2025-12-06 09:30")), morning_booking)

        assert result.has_conflict
        assert result.conflict_type == ConflictType.BUFFER_VIOLATION
        assert result.conflicting_booking_id == "b1"
        assert "existing booking at 9:00 AM" in result.message
        assert "at least 45 minutes" in result.message

    def test_buffer_applies_before_existing_booking(self, checker, morning_booking):
        result = checker.check(CandidateRequest(start_time=at("2025-12-06 08:16")), morning_booking)

        assert result.conflict_type == ConflictType.BUFFER_VIOLATION

    def test_exactly_buffer_apart_is_allowed(self, checker, morning_booking):
        before = checker.check(CandidateRequest(start_time=at("2025-12-06 08:15")), morning_booking)
        after = checker.check(CandidateRequest(start_time=at("2025-12-06 09:45")), morning_booking)

        assert not before.has_conflict
        assert not after.has_conflict

    def test_far_start_has_no_conflict(self, checker, morning_booking):
        result = checker.check(CandidateRequest(start_time=at("2025-12-06 11:50")), morning_booking)

        assert not result.has_conflict
        assert result.conflict_type is None
        assert result.conflicting_booking_id is None
        assert result.message is None

    def test_classification_over_offsets(self, checker, morning_booking):
        """Every minute offset falls in exactly one class."""
        base = at("2025-12-06 09:00")
        for offset in range(-120, 121):
            result = checker.check(CandidateRequest(start_time=base.add(minutes=offset)), morning_booking)
            if offset == 0:
                assert result.conflict_type == ConflictType.DOUBLE_BOOKING
            elif abs(offset) < 45:
                assert result.conflict_type == ConflictType.BUFFER_VIOLATION
            else:
                assert not result.has_conflict

    def test_excluded_booking_is_ignored(self, checker, morning_booking):
        """A no-op update must not conflict with itself."""
        result = checker.check(
            CandidateRequest(start_time=at("2025-12-06 09:00"), exclude_booking_id="b1"),
            morning_booking,
        )

        assert not result.has_conflict

    def test_exclusion_only_skips_matching_id(self, checker):
        existing = [
            ExistingBooking(id="b1", start_time=at("2025-12-06 09:00")),
            ExistingBooking(id="b2", start_time=at("2025-12-06 09:20")),
        ]

        result = checker.check(
            CandidateRequest(start_time=at("2025-12-06 09:00"), exclude_booking_id="b1"),
            existing,
        )

        assert result.conflict_type == ConflictType.BUFFER_VIOLATION
        assert result.conflicting_booking_id == "b2"

    def test_first_conflict_in_list_order_wins(self, checker):
        """The first triggering booking is reported, not the closest one."""
        existing = [
            ExistingBooking(id="late", start_time=at("2025-12-06 09:20")),
            ExistingBooking(id="exact", start_time=at("2025-12-06 09:00")),
        ]

        result = checker.check(CandidateRequest(start_time=at("2025-12-06 09:00")), existing)

        assert result.conflict_type == ConflictType.BUFFER_VIOLATION
        assert result.conflicting_booking_id == "late"

    def test_start_distance_only_not_interval_overlap(self, checker):
        """A long booking is only guarded around its start time."""
        existing = [ExistingBooking(id="long", start_time=at("2025-12-06 09:00"), duration_minutes=300)]

        result = checker.check(CandidateRequest(start_time=at("2025-12-06 10:00")), existing)

        assert not result.has_conflict

    def test_zero_buffer_detects_exact_match_only(self, morning_booking):
        checker = ConflictChecker(BufferPolicy(buffer_minutes=0))

        exact = checker.check(CandidateRequest(start_time=at("2025-12-06 09:00")), morning_booking)
        near = checker.check(CandidateRequest(start_time=at("2025-12-06 09:01")), morning_booking)

        assert exact.conflict_type == ConflictType.DOUBLE_BOOKING
        assert not near.has_conflict

    def test_no_existing_bookings(self, checker):
        result = checker.check(CandidateRequest(start_time=at("2025-12-06 09:00")), [])

        assert not result.has_conflict

    def test_same_instant_in_other_timezone(self, checker, morning_booking):
        candidate = pendulum.parse("2025-12-06 08:00", tz="UTC")

        result = checker.check(CandidateRequest(start_time=candidate), morning_booking)

        assert result.conflict_type == ConflictType.DOUBLE_BOOKING

    def test_default_buffer_is_45_minutes(self, morning_booking):
        checker = ConflictChecker()

        assert checker.buffer_minutes == 45
        assert checker.check_time(at("2025-12-06 09:44"), 120, morning_booking).has_conflict
        assert not checker.check_time(at("2025-12-06 09:45"), 120, morning_booking).has_conflict


def test_check_conflict_function_uses_given_buffer(morning_booking):
    candidate = CandidateRequest(start_time=at("2025-12-06 09:50"))

    assert check_conflict(candidate, morning_booking, BufferPolicy(buffer_minutes=60)).has_conflict
    assert not check_conflict(candidate, morning_booking).has_conflict
