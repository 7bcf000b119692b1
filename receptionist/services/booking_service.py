"""Turns appointment requests into calendar events.

No availability check is made before booking: two requests for the same
date and time both succeed with distinct ids.
"""

import logging
from datetime import date, datetime, time
from typing import Any

from receptionist.core.errors import BookingError
from receptionist.schemas.appointment import AppointmentRequest, CalendarEvent
from receptionist.services.identifiers import generate_id
from receptionist.services.slot_generator import APPOINTMENT_DURATION_MINUTES
from receptionist.services.time_utils import add_minutes, to_24_hour
from receptionist.storage.base import Repository

logger = logging.getLogger(__name__)

APPOINTMENT_ID_PREFIX = 'apt'


class BookingService:
    def __init__(
        self,
        store: Repository[CalendarEvent],
        duration_minutes: int = APPOINTMENT_DURATION_MINUTES,
    ) -> None:
        self._store = store
        self._duration_minutes = duration_minutes

    def build_event(self, request: AppointmentRequest) -> CalendarEvent:
        appointment_date = date.fromisoformat(request.preferred_date)
        start_time = time.fromisoformat(to_24_hour(request.preferred_time))
        end_time = time.fromisoformat(add_minutes(request.preferred_time, self._duration_minutes))

        return CalendarEvent(
            id=generate_id(APPOINTMENT_ID_PREFIX),
            title=f'Dental Appointment - {request.patient_name}',
            start=datetime.combine(appointment_date, start_time),
            end=datetime.combine(appointment_date, end_time),
            patient_name=request.patient_name,
            contact_number=request.contact_number,
            treatment_type=request.treatment_type,
            status='confirmed' if request.is_urgent else 'scheduled',
        )

    def book_appointment(self, request: AppointmentRequest) -> CalendarEvent:
        try:
            event = self._store.add(self.build_event(request))
        except Exception as exc:
            logger.exception('Error booking appointment for %s', request.patient_name)
            raise BookingError('Failed to book appointment') from exc

        logger.info('Booked appointment %s at %s (%s)', event.id, event.start.isoformat(), event.status)
        return event

    def get_appointment(self, appointment_id: str) -> CalendarEvent | None:
        return self._store.get(appointment_id)

    def list_appointments(self, **filters: Any) -> list[CalendarEvent]:
        return sorted(self._store.list(**filters), key=lambda event: event.start)
