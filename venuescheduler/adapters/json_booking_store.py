"""
JSON-file booking store standing in for the booking database.
"""

import json
import logging
import uuid
from pathlib import Path
from typing import Any, Dict, List

import pendulum
from pendulum import DateTime

from ..domain.exceptions import BookingSourceError
from ..domain.models import DEFAULT_BOOKING_DURATION_MINUTES, ExistingBooking

logger = logging.getLogger(__name__)

ACTIVE_STATUSES = frozenset({"PENDING", "APPROVED", "COMPLETED"})


class JsonBookingStore:
    """
    Booking source backed by a JSON array of booking records.

    Each record looks like::

        {"id": "b1", "resource": "IGRAONICA", "date": "2025-12-06",
         "time": "09:00", "status": "APPROVED", "durationMinutes": 120}

    ``date`` and ``time`` are combined in the store's timezone. Only active
    bookings (pending, approved, completed) are ever handed to the engine;
    cancelled and rejected ones are filtered out here.
    """

    def __init__(
        self,
        data_file: Path,
        timezone: str = "Europe/Belgrade",
        persist: bool = False
    ):
        """
        Initialize the store.

        Args:
            data_file: Path to the JSON bookings file (a missing file means no bookings)
            timezone: IANA timezone the stored dates and times are expressed in
            persist: Write newly created bookings back to ``data_file``
        """
        self.data_file = data_file
        self.timezone = timezone
        self.persist = persist
        self.records: List[Dict[str, Any]] = self._load_records()

    def _load_records(self) -> List[Dict[str, Any]]:
        """Load raw booking records from the JSON file."""
        if not self.data_file.exists():
            logger.info("Bookings file %s not found; starting empty", self.data_file)
            return []

        try:
            with open(self.data_file, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as exc:
            raise BookingSourceError(f"Could not read bookings from {self.data_file}: {exc}") from exc

        if not isinstance(data, list):
            raise BookingSourceError(f"{self.data_file} must contain a JSON array of bookings")

        return data

    def _save_records(self) -> None:
        try:
            with open(self.data_file, "w", encoding="utf-8") as f:
                json.dump(self.records, f, indent=2)
        except OSError as exc:
            raise BookingSourceError(f"Could not write bookings to {self.data_file}: {exc}") from exc

    def _record_start(self, record: Dict[str, Any]) -> DateTime:
        return pendulum.from_format(
            f"{record['date']} {record['time']}", "YYYY-MM-DD HH:mm", tz=self.timezone
        )

    @staticmethod
    def _record_duration(record: Dict[str, Any]) -> int:
        raw = record.get("durationMinutes")
        return DEFAULT_BOOKING_DURATION_MINUTES if raw is None else int(raw)

    def _to_booking(self, record: Dict[str, Any]) -> ExistingBooking:
        return ExistingBooking(
            id=str(record["id"]),
            start_time=self._record_start(record),
            duration_minutes=self._record_duration(record),
        )

    async def list_bookings(
        self,
        resource: str,
        day_start: DateTime,
        day_end: DateTime
    ) -> List[ExistingBooking]:
        """
        Return active bookings for a resource starting within the window.

        Args:
            resource: Resource (venue area) name, case-insensitive
            day_start: Start of the window (inclusive)
            day_end: End of the window (inclusive)

        Returns:
            Bookings in file order
        """
        wanted = resource.upper()
        bookings: List[ExistingBooking] = []

        for record in self.records:
            if not isinstance(record, dict):
                logger.warning("Skipping malformed booking record %r: not an object", record)
                continue
            if str(record.get("resource", "")).upper() != wanted:
                continue
            if str(record.get("status", "")).upper() not in ACTIVE_STATUSES:
                continue

            try:
                booking = self._to_booking(record)
            except (KeyError, ValueError, TypeError) as exc:
                logger.warning("Skipping malformed booking record %r: %s", record.get("id"), exc)
                continue

            if day_start <= booking.start_time <= day_end:
                bookings.append(booking)

        return bookings

    async def create_booking(
        self,
        resource: str,
        start_time: DateTime,
        duration_minutes: int
    ) -> ExistingBooking:
        """Append a new pending booking and return it."""
        local_start = start_time.in_timezone(self.timezone)
        record = {
            "id": uuid.uuid4().hex,
            "resource": resource.upper(),
            "date": local_start.format("YYYY-MM-DD"),
            "time": local_start.format("HH:mm"),
            "status": "PENDING",
            "durationMinutes": duration_minutes,
        }
        self.records.append(record)
        if self.persist:
            self._save_records()

        logger.info("Created booking %s on %s at %s", record["id"], record["resource"], local_start)
        return self._to_booking(record)
