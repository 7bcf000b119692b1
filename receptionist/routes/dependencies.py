from dataclasses import dataclass

from fastapi import Request

from receptionist.schemas.assistant import AssistantSettings
from receptionist.schemas.call_session import CallSession
from receptionist.services.booking_service import BookingService
from receptionist.services.notifications import ConfirmationDispatcher
from receptionist.services.vapi_client import VapiClient
from receptionist.services.webhook_dispatcher import WebhookDispatcher
from receptionist.storage.base import Repository


@dataclass(frozen=True)
class WebhookSettings:
    secret: str
    signature_header: str


def get_assistant_settings(request: Request) -> AssistantSettings:
    return request.app.state.assistant_settings


def get_clinic_id(request: Request) -> str:
    return request.app.state.clinic_id


def get_appointment_duration(request: Request) -> int:
    return request.app.state.appointment_duration_minutes


def get_booking_service(request: Request) -> BookingService:
    return request.app.state.booking_service


def get_notifier(request: Request) -> ConfirmationDispatcher:
    return request.app.state.notifier


def get_call_store(request: Request) -> Repository[CallSession]:
    return request.app.state.call_sessions


def get_webhook_dispatcher(request: Request) -> WebhookDispatcher:
    return request.app.state.webhook_dispatcher


def get_vapi_client(request: Request) -> VapiClient:
    return request.app.state.vapi_client


def get_webhook_settings(request: Request) -> WebhookSettings:
    return request.app.state.webhook_settings
