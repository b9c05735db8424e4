"""SMS medication reminders: due-window evaluation, message rendering and dispatch."""

from pillr.reminders.config import ReminderSettings, get_reminder_settings
from pillr.reminders.dispatcher import ReminderDispatcher
from pillr.reminders.exceptions import DoseTimeParseError, ReminderError, ReminderSweepError
from pillr.reminders.models import ReminderResult, SweepResult
from pillr.reminders.window import parse_dose_time, schema_day_of_week, should_send_reminder

__all__ = [
    "DoseTimeParseError",
    "ReminderDispatcher",
    "ReminderError",
    "ReminderResult",
    "ReminderSettings",
    "ReminderSweepError",
    "SweepResult",
    "get_reminder_settings",
    "parse_dose_time",
    "schema_day_of_week",
    "should_send_reminder",
]
