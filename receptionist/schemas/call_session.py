from datetime import datetime
from typing import Literal

from receptionist.schemas.appointment import CamelModel

CallType = Literal['inquiry', 'appointment', 'emergency', 'follow-up']
CallStatus = Literal['active', 'completed', 'disconnected']


class CallSession(CamelModel):
    id: str
    patient_id: str | None = None
    start_time: datetime
    end_time: datetime | None = None
    duration: int | None = None
    call_type: CallType = 'inquiry'
    status: CallStatus = 'active'
    transcript: str | None = None
    outcome: str | None = None
    updated_at: datetime | None = None


class CreateCallSessionRequest(CamelModel):
    patient_id: str | None = None
    call_type: CallType = 'inquiry'
    transcript: str | None = None
    outcome: str | None = None


class UpdateCallSessionRequest(CamelModel):
    call_id: str | None = None
    patient_id: str | None = None
    end_time: datetime | None = None
    duration: int | None = None
    call_type: CallType | None = None
    status: CallStatus | None = None
    transcript: str | None = None
    outcome: str | None = None


class CallSessionResponse(CamelModel):
    success: bool
    call_session: CallSession
    message: str


class CallSessionListResponse(CamelModel):
    success: bool
    sessions: list[CallSession]
    total: int


class OutboundCallRequest(CamelModel):
    phone_number_id: str
    assistant_id: str | None = None
