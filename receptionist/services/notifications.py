import logging

from receptionist.schemas.appointment import CalendarEvent

logger = logging.getLogger(__name__)

SUPPORTED_CHANNELS = ('sms', 'whatsapp')
REMINDER_TIME_FORMAT = '%A, %B %d at %I:%M %p'


class ConfirmationDispatcher:
    """Records the intent to notify a patient about an appointment.

    Nothing is delivered yet, so delivery failures cannot occur; ``False`` is
    returned only when building the notification itself fails.
    """

    def __init__(self, channel: str = 'sms') -> None:
        if channel not in SUPPORTED_CHANNELS:
            raise ValueError(f'Unsupported confirmation channel: {channel!r}')
        self.channel = channel

    def send_confirmation(self, event: CalendarEvent) -> bool:
        try:
            logger.info(
                'Sending confirmation via %s to %s for appointment on %s',
                self.channel,
                event.contact_number,
                event.start.isoformat(),
            )
            return True
        except Exception:
            logger.exception('Error sending confirmation')
            return False

    def send_reminder(self, event: CalendarEvent) -> bool:
        try:
            logger.info(
                'Sending reminder via %s to %s for appointment on %s',
                self.channel,
                event.contact_number,
                event.start.strftime(REMINDER_TIME_FORMAT),
            )
            return True
        except Exception:
            logger.exception('Error sending reminder')
            return False
