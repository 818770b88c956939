"""
Daily slot descriptors.

Doctors publish their availability as a list of ``"HH:MM - HH:MM"`` strings
that recur every day. Everything that compares slots does so on the parsed
``TimeSlot`` value, so ``"9:00-10:00"`` and ``"09:00 - 10:00"`` are the same
slot.
"""
import re
from datetime import date, datetime, time, timedelta
from typing import Iterable, List, NamedTuple

APPOINTMENT_DURATION = timedelta(hours=1)

_SLOT_RE = re.compile(r"^\s*(\d{1,2}):(\d{2})\s*-\s*(\d{1,2}):(\d{2})\s*$")


def _to_time(hour: str, minute: str) -> time:
    return time(int(hour), int(minute))


class TimeSlot(NamedTuple):
    start: time
    end: time

    @classmethod
    def parse(cls, descriptor: str) -> "TimeSlot":
        match = _SLOT_RE.match(descriptor or "")
        if not match:
            raise ValueError(f"Invalid time slot '{descriptor}', expected 'HH:MM - HH:MM'")
        try:
            start = _to_time(match.group(1), match.group(2))
            end = _to_time(match.group(3), match.group(4))
        except ValueError:
            raise ValueError(f"Invalid time slot '{descriptor}', hour or minute out of range")
        # an end of 00:00 closes a slot at midnight
        if end <= start and end != time(0, 0):
            raise ValueError(f"Invalid time slot '{descriptor}', end must be after start")
        return cls(start, end)

    @classmethod
    def starting_at(cls, start: time) -> "TimeSlot":
        """The one-hour slot an appointment starting at ``start`` occupies."""
        start = start.replace(second=0, microsecond=0)
        end = (datetime.combine(date.min, start) + APPOINTMENT_DURATION).time()
        return cls(start, end)

    @property
    def period(self) -> str:
        return "AM" if self.start.hour < 12 else "PM"

    def __str__(self) -> str:
        return f"{self.start:%H:%M} - {self.end:%H:%M}"


def parse_slots(descriptors: Iterable[str]) -> List[TimeSlot]:
    return [TimeSlot.parse(d) for d in descriptors]


def normalize_slots(descriptors: Iterable[str]) -> List[str]:
    """Canonical ``HH:MM - HH:MM`` form, order kept, duplicates dropped."""
    seen = set()
    normalized = []
    for slot in parse_slots(descriptors):
        if slot in seen:
            continue
        seen.add(slot)
        normalized.append(str(slot))
    return normalized


def has_slot_in_period(descriptors: Iterable[str], period: str) -> bool:
    period = period.strip().upper()
    for descriptor in descriptors:
        try:
            slot = TimeSlot.parse(descriptor)
        except ValueError:
            continue
        if slot.period == period:
            return True
    return False
