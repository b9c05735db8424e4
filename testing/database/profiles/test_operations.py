"""Tests for profile database operations."""

import unittest
from unittest.mock import MagicMock
from uuid import uuid4

from pillr.database.profiles.models import Profile
from pillr.database.profiles.operations import get_profile, update_sms_preferences


class TestGetProfile(unittest.TestCase):
    """Tests for get_profile operation."""

    def test_returns_profile_when_found(self) -> None:
        """Test the matching profile is returned."""
        mock_session = MagicMock()
        profile = Profile(id=uuid4())
        mock_session.query.return_value.filter.return_value.first.return_value = profile

        self.assertIs(get_profile(mock_session, profile.id), profile)
        mock_session.query.assert_called_once_with(Profile)

    def test_returns_none_when_not_found(self) -> None:
        """Test None is returned for an unknown user."""
        mock_session = MagicMock()
        mock_session.query.return_value.filter.return_value.first.return_value = None

        self.assertIsNone(get_profile(mock_session, uuid4()))


class TestUpdateSmsPreferences(unittest.TestCase):
    """Tests for update_sms_preferences operation."""

    def test_saves_preferences_and_marks_prompt_shown(self) -> None:
        """Test the phone, flag and prompt marker are updated."""
        mock_session = MagicMock()
        profile = Profile(id=uuid4(), sms_notifications_enabled=False, sms_opt_in_shown=False)

        update_sms_preferences(mock_session, profile, "+15551234567", True)

        self.assertEqual(profile.phone_number, "+15551234567")
        self.assertTrue(profile.sms_notifications_enabled)
        self.assertTrue(profile.sms_opt_in_shown)
        self.assertTrue(profile.can_receive_sms)
        mock_session.flush.assert_called_once()

    def test_opting_out_clears_number(self) -> None:
        """Test opting out without a number disables SMS."""
        profile = Profile(id=uuid4(), phone_number="+15551234567", sms_notifications_enabled=True)

        update_sms_preferences(MagicMock(), profile, None, False)

        self.assertIsNone(profile.phone_number)
        self.assertFalse(profile.can_receive_sms)


if __name__ == "__main__":
    unittest.main()
