from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Employee role used for access decisions."""

    MANAGER = "MANAGER"
    EMPLOYEE = "EMPLOYEE"


class EntryType(str, Enum):
    """Kind of a recorded clock action."""

    CLOCK_IN = "CLOCK_IN"
    CLOCK_OUT = "CLOCK_OUT"
    BREAK_START = "BREAK_START"
    BREAK_END = "BREAK_END"


class DutyStatus(str, Enum):
    """Derived on-duty state of an employee."""

    OFF_DUTY = "OFF_DUTY"
    ON_DUTY = "ON_DUTY"
    ON_BREAK = "ON_BREAK"


class AnomalyKind(str, Enum):
    """Why an event was excluded from totals or flagged for review."""

    UNMATCHED_CLOCK_OUT = "UNMATCHED_CLOCK_OUT"
    DUPLICATE_CLOCK_IN = "DUPLICATE_CLOCK_IN"
    NEGATIVE_DURATION = "NEGATIVE_DURATION"
    INVALID_EVENT = "INVALID_EVENT"
    UNEXPECTED_TRANSITION = "UNEXPECTED_TRANSITION"


class SignupStatus(str, Enum):
    """Review state of a care-worker signup request."""

    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
    CONTACTED = "CONTACTED"
