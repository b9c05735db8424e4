"""Database model and operations for the SMS reminder log."""

from pillr.database.reminders.models import ReminderRecord
from pillr.database.reminders.operations import (
    claim_reminder,
    get_reminders_for_date,
    mark_reminder_sent,
    release_reminder,
)

__all__ = [
    # Models
    "ReminderRecord",
    # Operations
    "claim_reminder",
    "get_reminders_for_date",
    "mark_reminder_sent",
    "release_reminder",
]
