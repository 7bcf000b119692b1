"""Voice assistant and clinic configuration schemas.

Both values are frozen: they are loaded once when the app is created and
shared read-only between requests. ``PUT /config`` returns a merged copy
instead of mutating the loaded value.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel


class FrozenCamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class VoiceConfig(FrozenCamelModel):
    voice_id: str
    provider: str


class Message(FrozenCamelModel):
    role: Literal['system', 'user', 'assistant']
    content: str


class ModelConfig(FrozenCamelModel):
    model: str
    messages: tuple[Message, ...] = ()
    provider: str


class TranscriberConfig(FrozenCamelModel):
    model: str
    language: str
    provider: str


class VirtualReceptionist(FrozenCamelModel):
    id: str
    org_id: str
    name: str
    voice: VoiceConfig
    created_at: str
    updated_at: str
    model: ModelConfig
    first_message: str
    voicemail_message: str
    end_call_message: str
    transcriber: TranscriberConfig
    is_server_url_secret_set: bool = False

    def platform_payload(self) -> dict:
        """Fields the voice platform accepts when creating an assistant."""
        return self.model_dump(
            by_alias=True,
            include={'name', 'model', 'voice', 'first_message', 'voicemail_message', 'end_call_message', 'transcriber'},
        )


class OpeningWindow(FrozenCamelModel):
    start: str
    end: str

    @field_validator('start', 'end')
    @classmethod
    def validate_clock_time(cls, value: str) -> str:
        hours, _, minutes = value.partition(':')
        if not (hours.isdigit() and minutes.isdigit() and 0 <= int(hours) <= 24 and 0 <= int(minutes) < 60):
            raise ValueError('Opening hours must use HH:MM.')
        return value


class ClinicHours(FrozenCamelModel):
    weekdays: OpeningWindow
    saturday: OpeningWindow | None = None
    sunday: OpeningWindow | None = None


class ClinicTimings(FrozenCamelModel):
    weekdays: str
    saturday: str
    sunday: str


class ClinicLocation(FrozenCamelModel):
    address: str
    phone: str
    email: str


class ClinicInfo(FrozenCamelModel):
    name: str
    type: str
    timings: ClinicTimings
    location: ClinicLocation
    services: tuple[str, ...] = ()
    consultation_fee: str
    emergency_available: bool = False
    hours: ClinicHours
    advertised_slots: tuple[str, ...] = ()


class AssistantSettings(FrozenCamelModel):
    assistant: VirtualReceptionist
    clinic: ClinicInfo
