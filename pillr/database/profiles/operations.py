"""Database operations for user profiles."""

from __future__ import annotations

import logging
import uuid as uuid_module

from sqlalchemy.orm import Session

from pillr.database.profiles.models import Profile

logger = logging.getLogger(__name__)


def get_profile(
    session: Session,
    user_id: uuid_module.UUID,
) -> Profile | None:
    """Get a profile by user ID.

    :param session: Database session.
    :param user_id: User ID.
    :returns: The profile or None if not found.
    """
    return session.query(Profile).filter(Profile.id == user_id).first()


def update_sms_preferences(
    session: Session,
    profile: Profile,
    phone_number: str | None,
    enabled: bool,
) -> Profile:
    """Save a profile's SMS reminder preferences.

    Also marks the opt-in prompt as shown so it is not offered again.

    :param session: Database session.
    :param profile: The profile to update.
    :param phone_number: E.164 phone number, or None to clear it.
    :param enabled: Whether SMS reminders are enabled.
    :returns: The updated profile.
    """
    profile.phone_number = phone_number
    profile.sms_notifications_enabled = enabled
    profile.sms_opt_in_shown = True
    session.flush()
    logger.info(f"Updated SMS preferences: user_id={profile.id}, enabled={enabled}")
    return profile
