from datetime import date, datetime

from receptionist.core.errors import SlotLookupError
from receptionist.schemas.appointment import TimeSlot
from receptionist.schemas.assistant import ClinicHours, OpeningWindow

APPOINTMENT_DURATION_MINUTES = 30
LUNCH_BREAK_HOUR = 12
SATURDAY = 5
SUNDAY = 6

DEFAULT_CLINIC_HOURS = ClinicHours(
    weekdays=OpeningWindow(start='09:00', end='18:00'),
    saturday=OpeningWindow(start='09:00', end='14:00'),
    sunday=None,
)


def parse_slot_date(value: str | date) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    text = (value or '').strip()
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text).date()
    except ValueError as exc:
        raise SlotLookupError('Failed to fetch available slots') from exc


def opening_window_for(day: date, hours: ClinicHours) -> OpeningWindow | None:
    weekday = day.weekday()
    if weekday == SUNDAY:
        return hours.sunday
    if weekday == SATURDAY:
        return hours.saturday
    return hours.weekdays


def is_lunch_break_hour(hour: int) -> bool:
    return hour == LUNCH_BREAK_HOUR


def get_available_slots(
    slot_date: str | date,
    hours: ClinicHours = DEFAULT_CLINIC_HOURS,
    duration_minutes: int = APPOINTMENT_DURATION_MINUTES,
) -> list[TimeSlot]:
    """List the bookable slots for a day.

    One slot on every whole hour of the opening window and one on the half
    hour for every hour but the last. The lunch hour is skipped entirely.
    Slots are not checked against existing bookings.
    """
    window = opening_window_for(parse_slot_date(slot_date), hours)
    if window is None:
        return []

    start_hour = int(window.start.split(':')[0])
    end_hour = int(window.end.split(':')[0])

    slots: list[TimeSlot] = []
    for hour in range(start_hour, end_hour):
        if is_lunch_break_hour(hour):
            continue

        slots.append(TimeSlot(time=f'{hour:02d}:00', available=True, duration_minutes=duration_minutes))
        if hour < end_hour - 1:
            slots.append(TimeSlot(time=f'{hour:02d}:30', available=True, duration_minutes=duration_minutes))

    return slots
