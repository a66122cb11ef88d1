"""Client double-booking detection.

Only appointments of the same client on the same calendar date are compared;
cancelled and no-show appointments never block. Provider or room contention
is not modelled.
"""

import logging
from datetime import date
from typing import Optional

from sqlalchemy.orm import Session

from ...errors import SchedulingConflictError
from ...models import Appointment
from ..appointments.repository import AppointmentRepository
from .time_calculator import intervals_overlap, to_interval

logger = logging.getLogger(__name__)


def find_overlap(
    db: Session,
    client_id: str,
    appointment_date: date,
    start_time: str,
    duration_minutes: int,
    exclude_appointment_id: Optional[str] = None,
) -> Optional[Appointment]:
    """Return the first existing appointment that intersects the candidate, if any"""
    candidate = to_interval(start_time, duration_minutes)

    existing_appointments = AppointmentRepository.get_active_for_client_on_date(
        db, client_id, appointment_date, exclude_appointment_id
    )

    for existing in existing_appointments:
        # Stored rows carry only start_time; the length comes from the type
        existing_interval = to_interval(
            existing.start_time, existing.appointment_type.duration_minutes
        )
        if intervals_overlap(candidate, existing_interval):
            return existing

    return None


def check_for_overlap(
    db: Session,
    client_id: str,
    appointment_date: date,
    start_time: str,
    duration_minutes: int,
    exclude_appointment_id: Optional[str] = None,
) -> None:
    """Raise SchedulingConflictError on the first clash"""
    existing = find_overlap(
        db, client_id, appointment_date, start_time, duration_minutes, exclude_appointment_id
    )
    if existing is not None:
        logger.warning(
            f"⚠️ Overlap for client {client_id} on {appointment_date} at {start_time}: "
            f"clashes with appointment {existing.id} at {existing.start_time}"
        )
        raise SchedulingConflictError(existing.id, existing.start_time)
