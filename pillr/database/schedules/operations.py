"""Database operations for weekly dose schedules."""

from __future__ import annotations

import logging

from sqlalchemy.orm import Session, contains_eager, selectinload

from pillr.database.profiles.models import Profile
from pillr.database.schedules.models import ScheduledDose

logger = logging.getLogger(__name__)


def get_reminder_candidates(
    session: Session,
    day_of_week: int,
) -> list[ScheduledDose]:
    """Get doses on a weekday whose owners can receive SMS reminders.

    Only doses whose profile has SMS reminders enabled and a phone number set
    are returned. Profiles and medications are loaded up front so the sweep
    does not issue one query per dose.

    :param session: Database session.
    :param day_of_week: Weekday in schema form (1=Monday..7=Sunday).
    :returns: Candidate doses ordered by dose time.
    """
    doses = (
        session.query(ScheduledDose)
        .join(ScheduledDose.profile)
        .options(
            contains_eager(ScheduledDose.profile),
            selectinload(ScheduledDose.medications),
        )
        .filter(
            ScheduledDose.day_of_week == day_of_week,
            Profile.sms_notifications_enabled.is_(True),
            Profile.phone_number.is_not(None),
        )
        .order_by(ScheduledDose.dose_time)
        .all()
    )
    logger.debug(f"Loaded reminder candidates: day_of_week={day_of_week}, count={len(doses)}")
    return doses
