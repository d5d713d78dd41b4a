"""Assignment key codec: (date, slot) <-> ``YYYY-MM-DD_<slot>``.

The date prefix is always 10 characters, so the key is split at a fixed
position and slot names may contain ``_`` themselves.
"""

import re
from dataclasses import dataclass
from datetime import date, datetime

from family_meal_planner.planning.calendar import to_calendar_date

SEPARATOR = "_"
_DATE_PREFIX_LENGTH = 10
_DATE_PATTERN = re.compile(r"^([0-9]{4})-([0-9]{2})-([0-9]{2})$")


class AssignmentKeyError(ValueError):
    """Raised when a key cannot be encoded or a strict decode fails."""


@dataclass(frozen=True)
class AssignmentKey:
    """A decoded (date, slot) grid cell."""

    day: date
    slot: str

    def encode(self) -> str:
        return encode_assignment_key(self.day, self.slot)


def _check_slot(slot: str) -> None:
    if not isinstance(slot, str) or not slot.strip():
        raise AssignmentKeyError("Meal slot name cannot be empty")


def encode_assignment_key(day: date | datetime, slot: str) -> str:
    """Encode a date and slot name as an assignment key."""
    _check_slot(slot)
    d = to_calendar_date(day)
    return f"{d.year:04d}-{d.month:02d}-{d.day:02d}{SEPARATOR}{slot}"


def decode_assignment_key(key: str) -> AssignmentKey | None:
    """Decode a key. Returns None when it is not ``YYYY-MM-DD_<slot>``."""
    if not isinstance(key, str) or len(key) < _DATE_PREFIX_LENGTH + 2:
        return None
    date_part = key[:_DATE_PREFIX_LENGTH]
    separator = key[_DATE_PREFIX_LENGTH]
    slot = key[_DATE_PREFIX_LENGTH + 1 :]
    match = _DATE_PATTERN.match(date_part)
    if not match or separator != SEPARATOR or not slot.strip():
        return None
    try:
        day = date(int(match.group(1)), int(match.group(2)), int(match.group(3)))
    except ValueError:
        return None
    return AssignmentKey(day=day, slot=slot)


def parse_assignment_key(key: str) -> AssignmentKey:
    """Strict variant of :func:`decode_assignment_key`."""
    decoded = decode_assignment_key(key)
    if decoded is None:
        raise AssignmentKeyError(f"Invalid assignment key format: {key}")
    return decoded
