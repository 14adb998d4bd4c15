"""
Appointment conflict detection.

A staff member cannot hold two active appointments whose [start, end)
intervals overlap on the same day. Completed and cancelled appointments are
history and never block a slot; appointments without a staff member never
conflict.
"""

import logging
from datetime import date, time
from typing import Optional

from sqlalchemy.orm import Session

from ...exceptions import ConflictError, InvalidInputError
from ...models import BLOCKING_APPOINTMENT_STATUSES, Appointment, Staff

logger = logging.getLogger(__name__)


def intervals_overlap(start_a: time, end_a: time, start_b: time, end_b: time) -> bool:
    """Half-open overlap test: touching endpoints do not overlap"""
    return start_a < end_b and end_a > start_b


def is_blocking_status(status: Optional[str]) -> bool:
    return status in BLOCKING_APPOINTMENT_STATUSES


def validate_time_range(start: time, end: time) -> None:
    if start >= end:
        raise InvalidInputError("Start time must be before end time", code="INVALID_TIME_RANGE")


def validate_not_in_past(day: date, today: Optional[date] = None) -> None:
    """Day granularity: booking later today is fine"""
    if day < (today or date.today()):
        raise InvalidInputError("Appointment date cannot be in the past", code="INVALID_DATE")


def find_conflicts(
    db: Session,
    staff_id: Optional[int],
    day: date,
    start: time,
    end: time,
    exclude_id: Optional[int] = None,
) -> list[Appointment]:
    """
    Active appointments of `staff_id` on `day` that overlap [start, end).

    Locks the staff row and that day's active appointments so the check and
    the following write happen in one serialized transaction per staff member.
    """
    if staff_id is None:
        return []

    db.query(Staff).filter(Staff.id == staff_id).with_for_update().first()

    query = db.query(Appointment).filter(
        Appointment.staff_id == staff_id,
        Appointment.date == day,
        Appointment.status.in_(BLOCKING_APPOINTMENT_STATUSES),
    )
    if exclude_id is not None:
        query = query.filter(Appointment.id != exclude_id)

    booked = query.with_for_update().all()
    return [a for a in booked if intervals_overlap(start, end, a.start_time, a.end_time)]


def ensure_slot_available(
    db: Session,
    staff_id: Optional[int],
    day: date,
    start: time,
    end: time,
    exclude_id: Optional[int] = None,
) -> None:
    conflicts = find_conflicts(db, staff_id, day, start, end, exclude_id)
    if conflicts:
        logger.info(
            f"⚠️ Schedule conflict for staff {staff_id} on {day} {start}-{end}: "
            f"appointment(s) {[a.id for a in conflicts]}"
        )
        raise ConflictError(
            "Staff member already booked in this time slot", code="SCHEDULE_CONFLICT"
        )
