from __future__ import annotations

from datetime import datetime
from typing import Callable, Optional, Protocol, Sequence

from ..core.enums import EntryType
from ..geofence.model import GeoPoint
from .model import AttendanceEvent

# Called with the employee's events up to the new timestamp; raises to veto the insert.
EventGuard = Callable[[Sequence[AttendanceEvent]], None]


class TimeEntryRepository(Protocol):
    """Append-only event store.

    Implementations must return a consistent snapshot per call; ordering of the
    returned sequence is not relied upon.
    """

    def fetch_events(
        self,
        employee_id: int,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> Sequence[AttendanceEvent]:
        raise NotImplementedError

    def fetch_all_events(
        self,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> Sequence[AttendanceEvent]:
        raise NotImplementedError

    def last_event_before(self, employee_id: int, kind: EntryType, at: datetime) -> Optional[AttendanceEvent]:
        """Latest event of ``kind`` at or before ``at``."""
        raise NotImplementedError

    def first_event_after(self, employee_id: int, kind: EntryType, at: datetime) -> Optional[AttendanceEvent]:
        """Earliest event of ``kind`` at or after ``at``."""
        raise NotImplementedError

    def record_event(
        self,
        *,
        employee_id: int,
        kind: EntryType,
        timestamp: datetime,
        location: Optional[GeoPoint] = None,
        note: Optional[str] = None,
        guard: Optional[EventGuard] = None,
    ) -> AttendanceEvent:
        """Append one event.

        When ``guard`` is given it runs on the employee's history and the insert
        happens only if it returns. Implementations serialize guarded writes per
        employee, across processes where the store allows it.
        """
        raise NotImplementedError
