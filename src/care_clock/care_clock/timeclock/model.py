from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Iterator, Optional

from ..core.enums import AnomalyKind, DutyStatus, EntryType
from ..geofence.model import GeoPoint


@dataclass(frozen=True)
class AttendanceEvent:
    """Domain entity: one recorded clock action. Never mutated after recording."""

    employee_id: Any
    kind: EntryType
    timestamp: datetime
    location: Optional[GeoPoint] = None
    note: Optional[str] = None
    entry_id: Optional[int] = None


@dataclass(frozen=True)
class AnomalousEvent:
    """Reported datum: an event excluded from totals or an unexpected transition."""

    kind: AnomalyKind
    event: Any
    reason: str


@dataclass(frozen=True)
class AttendanceState:
    """Read-model recomputed from the event sequence; never stored."""

    on_duty: bool = False
    on_break: bool = False
    last_clock_in: Optional[datetime] = None
    last_clock_out: Optional[datetime] = None
    anomalies: tuple[AnomalousEvent, ...] = ()

    @property
    def status(self) -> DutyStatus:
        if self.on_break:
            return DutyStatus.ON_BREAK
        if self.on_duty:
            return DutyStatus.ON_DUTY
        return DutyStatus.OFF_DUTY


@dataclass(frozen=True)
class ShiftSegment:
    start: datetime
    end: datetime
    duration_hours: float
    employee_id: Any = None


@dataclass(frozen=True)
class ShiftReconstruction:
    """Completed shifts plus the anomalies found while pairing them."""

    shifts: tuple[ShiftSegment, ...] = ()
    anomalies: tuple[AnomalousEvent, ...] = ()
    open_clock_ins: tuple[AttendanceEvent, ...] = ()

    def __iter__(self) -> Iterator:
        # Allows ``shifts, anomalies = reconstruct_shifts(events)``.
        yield self.shifts
        yield self.anomalies

    @property
    def open_clock_in(self) -> Optional[AttendanceEvent]:
        return self.open_clock_ins[-1] if self.open_clock_ins else None
