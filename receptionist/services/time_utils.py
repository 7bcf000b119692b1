import re

from receptionist.core.errors import InvalidTimeError

MINUTES_PER_DAY = 24 * 60

_TIME_12H_PATTERN = re.compile(r'^(?P<hours>\d{1,2}):(?P<minutes>\d{2})\s+(?P<meridiem>AM|PM)$', re.IGNORECASE)


def _parse_12_hour(time_12h: str) -> tuple[int, int]:
    match = _TIME_12H_PATTERN.match((time_12h or '').strip())
    if match is None:
        raise InvalidTimeError(f'Expected a time like "9:30 AM", got {time_12h!r}.')

    hours = int(match.group('hours'))
    minutes = int(match.group('minutes'))
    if not 1 <= hours <= 12 or minutes > 59:
        raise InvalidTimeError(f'Time out of range: {time_12h!r}.')

    if hours == 12:
        hours = 0
    if match.group('meridiem').upper() == 'PM':
        hours += 12

    return hours, minutes


def _format(hours: int, minutes: int) -> str:
    return f'{hours:02d}:{minutes:02d}:00'


def to_24_hour(time_12h: str) -> str:
    """Convert ``"H:MM AM/PM"`` to ``"HH:MM:SS"``."""
    return _format(*_parse_12_hour(time_12h))


def add_minutes(time_12h: str, minutes: int) -> str:
    """Add ``minutes`` to a 12-hour time and return the 24-hour result.

    Results before midnight or at/after the following midnight raise
    ``InvalidTimeError``; appointments never span two days.
    """
    hours, mins = _parse_12_hour(time_12h)
    total_minutes = hours * 60 + mins + minutes
    if not 0 <= total_minutes < MINUTES_PER_DAY:
        raise InvalidTimeError(f'{time_12h!r} plus {minutes} minutes crosses midnight.')
    return _format(total_minutes // 60, total_minutes % 60)
