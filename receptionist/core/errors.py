"""Error types raised by the receptionist services.

Routes translate ``ValidationError`` into 400 responses and ``UpstreamError``
into 500 responses with a generic message. ``UnhandledEventError`` never
reaches a caller; the webhook dispatcher logs it and acknowledges the event.
"""


class ReceptionistError(Exception):
    """Base class for receptionist errors."""


class ValidationError(ReceptionistError):
    """Request data is missing or malformed."""


class InvalidTimeError(ValidationError):
    """A time-of-day string does not match ``H:MM AM/PM`` or overflows the day."""


class UpstreamError(ReceptionistError):
    """A lookup, booking or external API call failed."""


class SlotLookupError(UpstreamError):
    pass


class BookingError(UpstreamError):
    pass


class VoiceAPIError(UpstreamError):
    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class UnhandledEventError(ReceptionistError):
    """Webhook event type or function name with no handler."""
