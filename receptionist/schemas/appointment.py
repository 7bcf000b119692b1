"""Appointment and slot schemas exchanged with the voice platform and HTTP clients."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

AppointmentStatus = Literal['scheduled', 'confirmed', 'cancelled', 'completed']


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class TimeSlot(CamelModel):
    time: str
    available: bool = True
    duration_minutes: int


class AppointmentRequest(CamelModel):
    patient_name: str
    contact_number: str
    preferred_date: str
    preferred_time: str
    treatment_type: str | None = None
    is_urgent: bool = False

    @field_validator('patient_name', 'contact_number', 'preferred_date', 'preferred_time')
    @classmethod
    def validate_required_text(cls, value: str) -> str:
        normalized = value.strip()
        if not normalized:
            raise ValueError('Field is required.')
        return normalized

    @field_validator('treatment_type')
    @classmethod
    def validate_treatment_type(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return value.strip() or None


class CalendarEvent(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    id: str
    title: str
    start: datetime
    end: datetime
    patient_name: str
    contact_number: str
    treatment_type: str | None = None
    status: AppointmentStatus


class AppointmentRecord(AppointmentRequest):
    """Acknowledgement returned by the direct appointment endpoint."""

    id: str
    status: str = 'pending'
    created_at: datetime
    clinic_id: str


class AppointmentResponse(CamelModel):
    success: bool
    appointment: AppointmentRecord
    message: str


class AvailabilityResponse(CamelModel):
    date: str
    available_slots: list[str]
    message: str = 'Available appointment slots retrieved successfully'


class SlotListResponse(CamelModel):
    date: str
    slots: list[TimeSlot] = Field(default_factory=list)
