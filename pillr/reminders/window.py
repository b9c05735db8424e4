"""Decide whether a scheduled dose is due for an SMS reminder.

A sweep runs every few minutes. Each dose gets a window of ``window_minutes``
that starts ``lead_minutes`` before the dose time, floored to a window
boundary so every dose lands in exactly one sweep. All arithmetic is in UTC.
"""

import re
from datetime import UTC, datetime, time, timedelta

from pillr.reminders.exceptions import DoseTimeParseError

DEFAULT_LEAD_MINUTES = 15
DEFAULT_WINDOW_MINUTES = 5

_DOSE_TIME_PATTERN = re.compile(r"^(\d{2}):(\d{2})(?::(\d{2}))?$")


def schema_day_of_week(moment: datetime) -> int:
    """Get the stored day-of-week number for a moment.

    :param moment: The moment to convert. Naive values are treated as UTC.
    :returns: 1 for Monday through 7 for Sunday.
    """
    return _as_utc(moment).weekday() + 1


def parse_dose_time(value: str) -> time:
    """Parse a stored dose time.

    :param value: A time of day as ``HH:mm`` or ``HH:mm:ss``.
    :returns: The parsed time.
    :raises DoseTimeParseError: If the value is malformed or out of range.
    """
    match = _DOSE_TIME_PATTERN.match(value.strip())
    if match is None:
        raise DoseTimeParseError(value)

    hours, minutes, seconds = match.groups()
    try:
        return time(int(hours), int(minutes), int(seconds or 0))
    except ValueError as e:
        raise DoseTimeParseError(value) from e


def reminder_window(
    dose_time_utc: time,
    lead_minutes: int,
    now: datetime,
    window_minutes: int = DEFAULT_WINDOW_MINUTES,
) -> tuple[datetime, datetime]:
    """Compute today's reminder window for a dose.

    :param dose_time_utc: Dose time of day in UTC.
    :param lead_minutes: Minutes before the dose to remind.
    :param now: Current moment; its UTC date anchors the window.
    :param window_minutes: Window width in minutes.
    :returns: Inclusive ``(start, end)`` bounds as aware UTC datetimes.
    """
    now = _as_utc(now)
    dose_at = datetime.combine(now.date(), dose_time_utc.replace(tzinfo=None), tzinfo=UTC)
    target = dose_at - timedelta(minutes=lead_minutes)

    floored_minute = (target.minute // window_minutes) * window_minutes
    start = target.replace(minute=floored_minute, second=0, microsecond=0)
    return start, start + timedelta(minutes=window_minutes)


def should_send_reminder(
    dose_time_utc: time | str,
    day_of_week: int,
    lead_minutes: int = DEFAULT_LEAD_MINUTES,
    now: datetime | None = None,
    window_minutes: int = DEFAULT_WINDOW_MINUTES,
) -> bool:
    """Check whether a dose's reminder is due right now.

    :param dose_time_utc: Dose time of day in UTC, as a time or ``HH:mm[:ss]`` string.
    :param day_of_week: Stored day number, 1=Monday..7=Sunday.
    :param lead_minutes: Minutes before the dose to remind.
    :param now: Current moment. Defaults to the current UTC time.
    :param window_minutes: Window width in minutes.
    :returns: True if today matches and ``now`` falls inside the window.
    :raises DoseTimeParseError: If a string dose time is malformed.
    """
    now = _as_utc(now) if now is not None else datetime.now(UTC)

    if schema_day_of_week(now) != day_of_week:
        return False

    if isinstance(dose_time_utc, str):
        dose_time_utc = parse_dose_time(dose_time_utc)

    start, end = reminder_window(dose_time_utc, lead_minutes, now, window_minutes)
    return start <= now <= end


def _as_utc(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment.replace(tzinfo=UTC)
    return moment.astimezone(UTC)
