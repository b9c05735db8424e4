"""Database model and operations for user profiles."""

from pillr.database.profiles.models import Profile
from pillr.database.profiles.operations import get_profile, update_sms_preferences

__all__ = [
    "Profile",
    "get_profile",
    "update_sms_preferences",
]
