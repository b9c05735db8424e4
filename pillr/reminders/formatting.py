"""Render SMS reminder text for a scheduled dose."""

import logging
from collections.abc import Sequence
from datetime import UTC, date, datetime, time
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pillr.database.schedules import Medication, ScheduledDose

logger = logging.getLogger(__name__)

# Used when a dose has neither medications nor a description
GENERIC_MEDICATION_NAME = "your medication"

HOURS_PER_HALF_DAY = 12


def medication_display_name(medication: Medication) -> str:
    """Get the name a patient knows a medication by.

    :param medication: The medication row.
    :returns: Brand name, else generic name, else raw name, else ``"medication"``.
    """
    return medication.display_name


def join_medication_names(names: Sequence[str]) -> str:
    """Join medication names into readable English.

    :param names: Names in display order.
    :returns: ``"A"``, ``"A and B"`` or ``"A, B, and C"``.
    """
    if not names:
        return ""
    if len(names) == 1:
        return names[0]
    if len(names) == 2:  # noqa: PLR2004
        return f"{names[0]} and {names[1]}"
    return f"{', '.join(names[:-1])}, and {names[-1]}"


def resolve_medication_name(
    medications: Sequence[Medication],
    description: str | None,
) -> str:
    """Get the text that follows "Take" in a reminder.

    :param medications: Medications attached to the dose.
    :param description: Free-text dose description.
    :returns: Joined medication names, else the description, else a generic phrase.
    """
    if medications:
        return join_medication_names([medication_display_name(m) for m in medications])
    if description and description.strip():
        return description.strip()
    return GENERIC_MEDICATION_NAME


def format_local_time(dose_time_utc: time, timezone: str, on_date: date) -> str:
    """Render a UTC dose time in a local timezone as ``h:MM AM``.

    The date matters because the UTC offset changes across DST.

    :param dose_time_utc: Dose time of day in UTC.
    :param timezone: IANA timezone name.
    :param on_date: The UTC calendar date of the dose.
    :returns: 12-hour local time, e.g. ``"8:05 AM"``.
    """
    dose_at = datetime.combine(on_date, dose_time_utc.replace(tzinfo=None), tzinfo=UTC)
    local = dose_at.astimezone(ZoneInfo(timezone))
    hour = local.hour % HOURS_PER_HALF_DAY or HOURS_PER_HALF_DAY
    period = "AM" if local.hour < HOURS_PER_HALF_DAY else "PM"
    return f"{hour}:{local.minute:02d} {period}"


def format_reminder_message(
    medication_name: str,
    local_time: str,
    note: str | None = None,
) -> str:
    """Build the reminder SMS body.

    :param medication_name: What to take.
    :param local_time: When to take it, already localised.
    :param note: Optional note appended after a blank line.
    :returns: The SMS text.
    """
    message = f"Reminder: Take {medication_name} at {local_time}"
    if note:
        message += f"\n\nNote: {note}"
    return message


def resolve_display_timezone(profile_timezone: str | None, default_timezone: str) -> str:
    """Pick the timezone used to show a dose time.

    :param profile_timezone: Timezone stored on the profile, if any.
    :param default_timezone: Configured fallback timezone.
    :returns: The profile timezone when it is a valid IANA name, else the default.
    """
    if profile_timezone:
        try:
            ZoneInfo(profile_timezone)
            return profile_timezone
        except (ZoneInfoNotFoundError, ValueError):
            logger.warning(f"Ignoring invalid profile timezone: {profile_timezone!r}")
    return default_timezone


def build_reminder_message(dose: ScheduledDose, display_timezone: str, on_date: date) -> str:
    """Build the full reminder SMS for a dose.

    The description becomes a note only when the dose has medications;
    otherwise it already stands in for the medication name.

    :param dose: The scheduled dose, with medications loaded.
    :param display_timezone: IANA timezone to render the time in.
    :param on_date: UTC calendar date of the dose.
    :returns: The SMS text.
    """
    medications = list(dose.medications)
    medication_name = resolve_medication_name(medications, dose.description)
    local_time = format_local_time(dose.dose_time, display_timezone, on_date)

    note = None
    if medications and dose.description and dose.description.strip():
        note = dose.description.strip()

    return format_reminder_message(medication_name, local_time, note)
