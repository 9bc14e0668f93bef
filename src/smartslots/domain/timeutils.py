"""Time helpers for a single business-local calendar day.

Times cross the boundary as 24-hour "HH:MM" strings and are handled
internally as integer minutes since midnight.
"""

from smartslots.domain.models import MINUTES_PER_DAY, InvalidSchedulingInput, TimePeriod

MORNING_END_MINUTES = 12 * 60
AFTERNOON_END_MINUTES = 17 * 60


def time_to_minutes(value: str) -> int:
    """Convert an "HH:MM" (or "HH:MM:SS") string to minutes since midnight.

    Raises:
        InvalidSchedulingInput: If the string is not a valid time of day.
    """
    parts = str(value).strip().split(":")
    if len(parts) not in (2, 3):
        raise InvalidSchedulingInput(f"Malformed time {value!r}, expected HH:MM")
    try:
        hours, minutes = int(parts[0]), int(parts[1])
    except ValueError:
        raise InvalidSchedulingInput(f"Malformed time {value!r}, expected HH:MM") from None
    # 24:00 is accepted as the end of the day
    if not (0 <= hours <= 24 and 0 <= minutes < 60) or (hours == 24 and minutes):
        raise InvalidSchedulingInput(f"Time {value!r} is out of range")
    return hours * 60 + minutes


def minutes_to_time(minutes: int) -> str:
    """Convert minutes since midnight to "HH:MM", wrapping around the day."""
    normalized = minutes % MINUTES_PER_DAY
    hours, mins = divmod(normalized, 60)
    return f"{hours:02d}:{mins:02d}"


def hour_of(minutes: int) -> int:
    """Hour-of-day bucket for a minute offset."""
    return minutes // 60


def get_time_period(minutes: int) -> TimePeriod:
    """Classify a start time into morning, afternoon or evening."""
    if minutes < MORNING_END_MINUTES:
        return TimePeriod.MORNING
    if minutes < AFTERNOON_END_MINUTES:
        return TimePeriod.AFTERNOON
    return TimePeriod.EVENING


def format_time_12h(minutes: int, locale: str = "en") -> str:
    """Format minutes since midnight as a localized 12-hour clock time.

    Examples:
        >>> format_time_12h(16 * 60)
        '4:00 PM'
        >>> format_time_12h(9 * 60 + 30, locale="ar")
        '9:30 ص'
    """
    from smartslots.domain.messages import day_half_suffix

    normalized = minutes % MINUTES_PER_DAY
    hours, mins = divmod(normalized, 60)
    hour12 = hours % 12 or 12
    return f"{hour12}:{mins:02d} {day_half_suffix(hours >= 12, locale)}"
