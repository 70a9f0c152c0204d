"""Rebuild attendance status and worked hours from raw clock events.

Events may arrive unordered, duplicated or half-broken. Nothing here raises
on bad data: malformed records and out-of-sequence actions are reported as
``AnomalousEvent`` values next to the normal result. Sorting is by timestamp
with ties kept in arrival order, so the same input always gives the same
output.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date, datetime, time, timezone
from typing import Iterable, Optional, Sequence, Union

from ..common.datetime_utils import ensure_utc
from ..core.enums import AnomalyKind, DutyStatus, EntryType
from ..core.exceptions import InvalidEvent
from .model import AnomalousEvent, AttendanceEvent, AttendanceState, ShiftReconstruction, ShiftSegment

logger = logging.getLogger(__name__)

_SECONDS_PER_HOUR = 3600.0

# Transitions the state machine expects; anything else is applied but reported.
_EXPECTED = {
    (DutyStatus.OFF_DUTY, EntryType.CLOCK_IN),
    (DutyStatus.ON_DUTY, EntryType.CLOCK_OUT),
    (DutyStatus.ON_DUTY, EntryType.BREAK_START),
    (DutyStatus.ON_BREAK, EntryType.BREAK_END),
}

_TARGET = {
    EntryType.CLOCK_IN: DutyStatus.ON_DUTY,
    EntryType.CLOCK_OUT: DutyStatus.OFF_DUTY,
    EntryType.BREAK_START: DutyStatus.ON_BREAK,
    EntryType.BREAK_END: DutyStatus.ON_DUTY,
}

Bound = Union[date, datetime]


def validate_event(event) -> AttendanceEvent:
    """Return ``event`` with a normalized kind and a UTC timestamp.

    Raises ``InvalidEvent`` when the timestamp is missing or the kind is unknown.
    """
    timestamp = getattr(event, "timestamp", None)
    if not isinstance(timestamp, datetime):
        raise InvalidEvent("Event has no valid timestamp")

    kind = getattr(event, "kind", None)
    try:
        kind = EntryType(kind)
    except (TypeError, ValueError):
        raise InvalidEvent(f"Unknown event kind: {kind!r}")

    if isinstance(event, AttendanceEvent):
        return replace(event, kind=kind, timestamp=ensure_utc(timestamp))
    return AttendanceEvent(
        employee_id=getattr(event, "employee_id", None),
        kind=kind,
        timestamp=ensure_utc(timestamp),
        location=getattr(event, "location", None),
        note=getattr(event, "note", None),
        entry_id=getattr(event, "entry_id", None),
    )


def order_events(events: Iterable) -> tuple[list[AttendanceEvent], list[AnomalousEvent]]:
    """Validate and sort events by timestamp, keeping arrival order on ties."""
    valid: list[AttendanceEvent] = []
    anomalies: list[AnomalousEvent] = []
    for event in events:
        try:
            valid.append(validate_event(event))
        except InvalidEvent as e:
            logger.debug("Skipping malformed attendance event: %s", e)
            anomalies.append(AnomalousEvent(kind=AnomalyKind.INVALID_EVENT, event=event, reason=str(e)))

    # list.sort is stable, so equal timestamps keep their input order.
    valid.sort(key=lambda e: e.timestamp)
    return valid, anomalies


def current_state(events: Iterable, as_of: datetime) -> AttendanceState:
    """Status after the last event at or before ``as_of``.

    Out-of-sequence actions are accepted (the event decides the new state)
    and listed in ``AttendanceState.anomalies``.
    """
    as_of = ensure_utc(as_of)
    ordered, anomalies = order_events(events)

    status = DutyStatus.OFF_DUTY
    last_clock_in: Optional[datetime] = None
    last_clock_out: Optional[datetime] = None

    for event in ordered:
        if event.timestamp > as_of:
            break

        if (status, event.kind) not in _EXPECTED:
            anomalies.append(
                AnomalousEvent(
                    kind=AnomalyKind.UNEXPECTED_TRANSITION,
                    event=event,
                    reason=f"{event.kind.value} while {status.value}",
                )
            )

        status = _TARGET[event.kind]
        if event.kind == EntryType.CLOCK_IN:
            last_clock_in = event.timestamp
        elif event.kind == EntryType.CLOCK_OUT:
            last_clock_out = event.timestamp

    return AttendanceState(
        on_duty=status in (DutyStatus.ON_DUTY, DutyStatus.ON_BREAK),
        on_break=status == DutyStatus.ON_BREAK,
        last_clock_in=last_clock_in,
        last_clock_out=last_clock_out,
        anomalies=tuple(anomalies),
    )


def reconstruct_shifts(events: Iterable) -> ShiftReconstruction:
    """Pair each CLOCK_IN with the nearest following CLOCK_OUT of the same employee.

    A clock-in still open at the end of the sequence is an ongoing shift and is
    returned in ``open_clock_ins`` rather than as an anomaly. Break events are
    ignored here.
    """
    ordered, anomalies = order_events(events)

    open_by_employee: dict = {}
    shifts: list[ShiftSegment] = []

    for event in ordered:
        if event.kind == EntryType.CLOCK_IN:
            if event.employee_id in open_by_employee:
                anomalies.append(
                    AnomalousEvent(
                        kind=AnomalyKind.DUPLICATE_CLOCK_IN,
                        event=event,
                        reason="Clock-in while a previous clock-in is still open",
                    )
                )
                continue
            open_by_employee[event.employee_id] = event

        elif event.kind == EntryType.CLOCK_OUT:
            clock_in = open_by_employee.pop(event.employee_id, None)
            if clock_in is None:
                anomalies.append(
                    AnomalousEvent(
                        kind=AnomalyKind.UNMATCHED_CLOCK_OUT,
                        event=event,
                        reason="Clock-out without a preceding clock-in",
                    )
                )
                continue

            seconds = (event.timestamp - clock_in.timestamp).total_seconds()
            if seconds < 0:
                anomalies.append(
                    AnomalousEvent(
                        kind=AnomalyKind.NEGATIVE_DURATION,
                        event=(clock_in, event),
                        reason="Clock-out is earlier than its clock-in",
                    )
                )
                continue

            shifts.append(
                ShiftSegment(
                    start=clock_in.timestamp,
                    end=event.timestamp,
                    duration_hours=seconds / _SECONDS_PER_HOUR,
                    employee_id=event.employee_id,
                )
            )

    if anomalies:
        logger.debug("Shift reconstruction found %d anomalies", len(anomalies))

    return ShiftReconstruction(
        shifts=tuple(shifts),
        anomalies=tuple(anomalies),
        open_clock_ins=tuple(open_by_employee.values()),
    )


def total_hours(shifts: Iterable[ShiftSegment]) -> float:
    return sum((max(s.duration_hours, 0.0) for s in shifts), 0.0)


def _lower(bound: Bound) -> datetime:
    if isinstance(bound, datetime):
        return ensure_utc(bound)
    return datetime.combine(bound, time.min, tzinfo=timezone.utc)


def _upper(bound: Bound) -> datetime:
    if isinstance(bound, datetime):
        return ensure_utc(bound)
    return datetime.combine(bound, time.max, tzinfo=timezone.utc)


def average_hours_per_day(shifts: Iterable[ShiftSegment], range_start: Bound, range_end: Bound) -> float:
    """Hours of in-range shifts divided by the distinct UTC days they start on.

    A shift is in range when its start lies within ``[range_start, range_end]``.
    Date bounds cover whole days.
    """
    lo, hi = _lower(range_start), _upper(range_end)
    in_range = [s for s in shifts if lo <= ensure_utc(s.start) <= hi]
    if not in_range:
        return 0.0

    days = {ensure_utc(s.start).date() for s in in_range}
    return total_hours(in_range) / len(days)


def _anomaly_time(anomaly: AnomalousEvent) -> Optional[datetime]:
    first = anomaly.event[0] if isinstance(anomaly.event, tuple) else anomaly.event
    ts = getattr(first, "timestamp", None)
    return ensure_utc(ts) if isinstance(ts, datetime) else None


def clip_to_range(
    result: ShiftReconstruction,
    range_start: Optional[Bound] = None,
    range_end: Optional[Bound] = None,
) -> ShiftReconstruction:
    """Keep the part of ``result`` that belongs to ``[range_start, range_end]``.

    A shift belongs to the range holding its clock-in, so one crossing a bound
    is counted exactly once. Anomalies are kept when their (first) event lies in
    range; malformed events without a usable timestamp are always kept.
    """
    lo = _lower(range_start) if range_start is not None else None
    hi = _upper(range_end) if range_end is not None else None

    def inside(ts: datetime) -> bool:
        ts = ensure_utc(ts)
        return (lo is None or ts >= lo) and (hi is None or ts <= hi)

    return ShiftReconstruction(
        shifts=tuple(s for s in result.shifts if inside(s.start)),
        anomalies=tuple(a for a in result.anomalies if _anomaly_time(a) is None or inside(_anomaly_time(a))),
        open_clock_ins=tuple(e for e in result.open_clock_ins if inside(e.timestamp)),
    )


class AttendanceReconstructor:
    """Object facade over the module functions, for injection into services."""

    def current_state(self, events: Sequence, as_of: datetime) -> AttendanceState:
        return current_state(events, as_of)

    def reconstruct_shifts(self, events: Sequence) -> ShiftReconstruction:
        return reconstruct_shifts(events)

    def total_hours(self, shifts: Sequence[ShiftSegment]) -> float:
        return total_hours(shifts)

    def average_hours_per_day(self, shifts: Sequence[ShiftSegment], range_start: Bound, range_end: Bound) -> float:
        return average_hours_per_day(shifts, range_start, range_end)

    def clip_to_range(
        self,
        result: ShiftReconstruction,
        range_start: Optional[Bound] = None,
        range_end: Optional[Bound] = None,
    ) -> ShiftReconstruction:
        return clip_to_range(result, range_start, range_end)
