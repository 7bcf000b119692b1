"""Dispatches voice platform webhook events.

Event ``type`` selects the handler::

    call-started / call-ended   logged only
    function-call               routed by ``functionCall.name``

Function-call handler errors are logged and swallowed so the platform always
gets an acknowledgement. Unknown types and function names raise
``UnhandledEventError`` internally and are logged the same way.
"""

import hashlib
import hmac
import logging
from typing import Any, Callable

from receptionist.core.errors import UnhandledEventError
from receptionist.schemas.appointment import AppointmentRequest
from receptionist.schemas.assistant import ClinicInfo
from receptionist.services.booking_service import BookingService
from receptionist.services.notifications import ConfirmationDispatcher
from receptionist.services.slot_generator import get_available_slots

logger = logging.getLogger(__name__)


def verify_signature(body: bytes, signature: str | None, secret: str) -> bool:
    """Check a hex HMAC-SHA256 of the raw body. No secret means no check."""
    if not secret:
        return True
    if not signature:
        return False

    expected = hmac.new(secret.encode('utf-8'), body, hashlib.sha256).hexdigest()
    return hmac.compare_digest(expected, signature.strip().lower())


def _as_object(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


class WebhookDispatcher:
    def __init__(
        self,
        booking_service: BookingService,
        notifier: ConfirmationDispatcher,
        clinic: ClinicInfo,
        duration_minutes: int = 30,
    ) -> None:
        self._booking_service = booking_service
        self._notifier = notifier
        self._clinic = clinic
        self._duration_minutes = duration_minutes
        self._function_handlers: dict[str, Callable[[dict[str, Any]], dict[str, Any]]] = {
            'bookAppointment': self._book_appointment,
            'checkAvailability': self._check_availability,
            'getClinicInfo': self._get_clinic_info,
            'sendConfirmation': self._send_confirmation,
        }

    def dispatch(self, payload: Any) -> dict[str, Any] | None:
        try:
            return self._route(payload)
        except UnhandledEventError as exc:
            logger.info('%s', exc)
            return None

    def _route(self, payload: Any) -> dict[str, Any] | None:
        if not isinstance(payload, dict):
            raise UnhandledEventError(f'Unhandled webhook payload: {type(payload).__name__}')

        event_type = payload.get('type')
        call = _as_object(payload.get('call'))

        if event_type == 'call-started':
            logger.info('Voice AI call started: %s', call.get('id'))
            return None

        if event_type == 'call-ended':
            logger.info('Voice AI call ended: %s', call.get('id'))
            return None

        if event_type == 'function-call':
            return self.handle_function_call(_as_object(payload.get('functionCall')), call)

        raise UnhandledEventError(f'Unhandled webhook type: {event_type}')

    def handle_function_call(self, function_call: dict[str, Any], call: dict[str, Any]) -> dict[str, Any] | None:
        name = function_call.get('name')
        handler = self._function_handlers.get(name)
        if handler is None:
            raise UnhandledEventError(f'Unhandled function call: {name}')

        try:
            return handler(_as_object(function_call.get('parameters')))
        except Exception:
            logger.exception('Error handling function call %s on call %s', name, call.get('id'))
            return None

    def _book_appointment(self, parameters: dict[str, Any]) -> dict[str, Any]:
        request = AppointmentRequest.model_validate(parameters)
        appointment = self._booking_service.book_appointment(request)
        confirmation_sent = self._notifier.send_confirmation(appointment)

        logger.info('Appointment booked successfully: %s', appointment.id)
        return {
            'appointment': appointment.model_dump(mode='json', by_alias=True),
            'confirmationSent': confirmation_sent,
        }

    def _check_availability(self, parameters: dict[str, Any]) -> dict[str, Any]:
        slot_date = parameters.get('date', '')
        slots = get_available_slots(slot_date, hours=self._clinic.hours, duration_minutes=self._duration_minutes)

        logger.info('Available slots for %s: %d', slot_date, len(slots))
        return {'date': slot_date, 'slots': [slot.model_dump(by_alias=True) for slot in slots]}

    def _get_clinic_info(self, parameters: dict[str, Any]) -> dict[str, Any]:
        del parameters
        logger.info('Clinic info requested: %s', self._clinic.name)
        return self._clinic.model_dump(mode='json', by_alias=True)

    def _send_confirmation(self, parameters: dict[str, Any]) -> dict[str, Any]:
        appointment_id = parameters.get('appointmentId')
        appointment = self._booking_service.get_appointment(appointment_id) if appointment_id else None
        if appointment is None:
            logger.warning(
                'Confirmation requested for unknown appointment %s (contact %s)',
                appointment_id,
                parameters.get('contactNumber'),
            )
            return {'confirmationSent': False}

        return {'confirmationSent': self._notifier.send_confirmation(appointment)}
