import logging
from datetime import date, datetime, timezone

from fastapi import APIRouter, Body, Depends, HTTPException, Query, Request, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from receptionist.core.errors import BookingError, InvalidTimeError, SlotLookupError
from receptionist.routes.dependencies import (
    get_assistant_settings,
    get_booking_service,
    get_appointment_duration,
    get_clinic_id,
    get_notifier,
)
from receptionist.schemas.appointment import (
    AppointmentRecord,
    AppointmentRequest,
    AppointmentResponse,
    AvailabilityResponse,
    CalendarEvent,
    SlotListResponse,
)
from receptionist.schemas.assistant import AssistantSettings
from receptionist.services.booking_service import APPOINTMENT_ID_PREFIX, BookingService
from receptionist.services.identifiers import generate_id
from receptionist.services.notifications import ConfirmationDispatcher
from receptionist.services.slot_generator import get_available_slots
from receptionist.services.time_utils import to_24_hour

router = APIRouter(tags=['appointments'])

logger = logging.getLogger(__name__)

MISSING_FIELDS_MESSAGE = 'Missing required appointment information'


def parse_appointment_request(payload) -> AppointmentRequest:
    try:
        return AppointmentRequest.model_validate(payload)
    except ValidationError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=MISSING_FIELDS_MESSAGE,
        ) from exc


def validate_appointment_time(appointment_request: AppointmentRequest) -> None:
    try:
        date.fromisoformat(appointment_request.preferred_date)
        to_24_hour(appointment_request.preferred_time)
    except (InvalidTimeError, ValueError) as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail='Preferred date must be YYYY-MM-DD and preferred time like 9:30 AM.',
        ) from exc


@router.post('', response_model=AppointmentResponse)
async def create_appointment(request: Request, clinic_id: str = Depends(get_clinic_id)):
    try:
        payload = await request.json()

        try:
            appointment_request = parse_appointment_request(payload)
        except HTTPException as exc:
            return JSONResponse(status_code=exc.status_code, content={'error': exc.detail})

        appointment = AppointmentRecord(
            **appointment_request.model_dump(),
            id=generate_id(APPOINTMENT_ID_PREFIX),
            status='pending',
            created_at=datetime.now(timezone.utc),
            clinic_id=clinic_id,
        )
        logger.info('Appointment request %s received for %s', appointment.id, appointment.patient_name)

        return AppointmentResponse(
            success=True,
            appointment=appointment,
            message=(
                f'Appointment scheduled for {appointment.patient_name} '
                f'on {appointment.preferred_date} at {appointment.preferred_time}'
            ),
        )
    except Exception:
        logger.exception('Error creating appointment')
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={'error': 'Failed to create appointment'},
        )


@router.get('', response_model=AvailabilityResponse)
def list_advertised_slots(
    date: str | None = Query(default=None),
    settings: AssistantSettings = Depends(get_assistant_settings),
):
    return AvailabilityResponse(
        date=date or datetime.now().date().isoformat(),
        available_slots=list(settings.clinic.advertised_slots),
    )


@router.get('/slots', response_model=SlotListResponse)
def list_available_slots(
    date: str = Query(...),
    settings: AssistantSettings = Depends(get_assistant_settings),
    duration_minutes: int = Depends(get_appointment_duration),
):
    try:
        slots = get_available_slots(date, hours=settings.clinic.hours, duration_minutes=duration_minutes)
    except SlotLookupError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail='Date must be YYYY-MM-DD.',
        ) from exc

    return SlotListResponse(date=date, slots=slots)


@router.post('/book', response_model=CalendarEvent, status_code=status.HTTP_201_CREATED)
def book_appointment(
    data: dict = Body(...),
    booking_service: BookingService = Depends(get_booking_service),
    notifier: ConfirmationDispatcher = Depends(get_notifier),
):
    appointment_request = parse_appointment_request(data)
    validate_appointment_time(appointment_request)

    try:
        appointment = booking_service.book_appointment(appointment_request)
    except BookingError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail='Failed to book appointment',
        ) from exc

    notifier.send_confirmation(appointment)
    return appointment


@router.get('/events', response_model=list[CalendarEvent])
def list_booked_appointments(
    appointment_status: str | None = Query(default=None, alias='status'),
    patient_name: str | None = Query(default=None, alias='patientName'),
    booking_service: BookingService = Depends(get_booking_service),
):
    return booking_service.list_appointments(status=appointment_status, patient_name=patient_name)


@router.post('/events/{appointment_id}/reminder')
def send_appointment_reminder(
    appointment_id: str,
    booking_service: BookingService = Depends(get_booking_service),
    notifier: ConfirmationDispatcher = Depends(get_notifier),
):
    appointment = booking_service.get_appointment(appointment_id)
    if appointment is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail='Appointment not found.',
        )

    return {'success': notifier.send_reminder(appointment)}
