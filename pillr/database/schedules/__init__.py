"""Database models and operations for weekly dose schedules."""

from pillr.database.schedules.models import Medication, ScheduledDose
from pillr.database.schedules.operations import get_reminder_candidates

__all__ = [
    "Medication",
    "ScheduledDose",
    "get_reminder_candidates",
]
