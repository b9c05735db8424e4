"""Tests for ReminderDispatcher."""

import unittest
from datetime import UTC, date, datetime, time
from unittest.mock import MagicMock, patch
from uuid import uuid4

from sqlalchemy.exc import OperationalError

from pillr.database.profiles.models import Profile
from pillr.database.reminders.models import ReminderRecord
from pillr.database.schedules.models import Medication, ScheduledDose
from pillr.reminders.config import ReminderSettings
from pillr.reminders.dispatcher import ReminderDispatcher
from pillr.reminders.exceptions import ReminderSweepError
from pillr.sms.models import SMSSendResult

# Monday 2026-10-19, inside the window of an 11:37 dose
NOW = datetime(2026, 10, 19, 11, 22, tzinfo=UTC)
TODAY = date(2026, 10, 19)


def _profile(phone_number: str | None = "+15551234567", enabled: bool = True) -> Profile:
    return Profile(
        id=uuid4(),
        phone_number=phone_number,
        sms_notifications_enabled=enabled,
        timezone=None,
    )


def _dose(
    profile: Profile,
    dose_time: time = time(11, 37),
    day_of_week: int = 1,
) -> ScheduledDose:
    dose = ScheduledDose(
        id=uuid4(),
        user_id=profile.id,
        day_of_week=day_of_week,
        dose_time=dose_time,
        description=None,
    )
    dose.profile = profile
    dose.medications = [Medication(brand_name="Lipitor")]
    return dose


def _record(dose: ScheduledDose) -> ReminderRecord:
    return ReminderRecord(
        id=uuid4(),
        event_id=dose.id,
        user_id=dose.user_id,
        reminder_date=TODAY,
        message_sent="Reminder",
    )


@patch("pillr.reminders.dispatcher.release_reminder")
@patch("pillr.reminders.dispatcher.mark_reminder_sent")
@patch("pillr.reminders.dispatcher.claim_reminder")
@patch("pillr.reminders.dispatcher.get_reminder_candidates")
class TestReminderDispatcher(unittest.TestCase):
    """Tests for ReminderDispatcher.run_sweep."""

    def setUp(self) -> None:
        """Set up test fixtures."""
        self.mock_session = MagicMock()
        self.mock_provider = MagicMock()
        self.mock_provider.send_sms.return_value = SMSSendResult(success=True, message_id="msg_123")
        self.settings = ReminderSettings(
            lead_minutes=15,
            window_minutes=5,
            display_timezone="America/Denver",
        )
        self.dispatcher = ReminderDispatcher(self.mock_session, self.mock_provider, self.settings)

    def test_sends_due_reminder(
        self,
        mock_get_candidates: MagicMock,
        mock_claim: MagicMock,
        mock_mark_sent: MagicMock,
        mock_release: MagicMock,
    ) -> None:
        """Test one due dose is sent and recorded with the vendor message ID."""
        dose = _dose(_profile())
        record = _record(dose)
        mock_get_candidates.return_value = [dose]
        mock_claim.return_value = record

        result = self.dispatcher.run_sweep(now=NOW)

        self.assertEqual(result.sent, 1)
        self.assertEqual(result.errors, 0)
        self.assertEqual(result.skipped, 0)
        self.assertEqual(len(result.results), 1)
        self.assertTrue(result.results[0].success)
        self.assertEqual(result.results[0].message_id, "msg_123")
        self.assertEqual(result.results[0].event_id, dose.id)

        mock_get_candidates.assert_called_once_with(self.mock_session, 1)
        claim_args = mock_claim.call_args.args
        self.assertEqual(claim_args[1], dose.id)
        self.assertEqual(claim_args[3], TODAY)
        # 11:37 UTC is 5:37 AM in Denver in October
        self.assertEqual(claim_args[4], "Reminder: Take Lipitor at 5:37 AM")
        self.mock_provider.send_sms.assert_called_once_with(
            "+15551234567",
            "Reminder: Take Lipitor at 5:37 AM",
            user_id=str(dose.user_id),
        )
        mock_mark_sent.assert_called_once_with(self.mock_session, record, "msg_123")
        mock_release.assert_not_called()

    def test_uses_profile_timezone(
        self,
        mock_get_candidates: MagicMock,
        mock_claim: MagicMock,
        mock_mark_sent: MagicMock,
        mock_release: MagicMock,
    ) -> None:
        """Test the message time is rendered in the profile's timezone."""
        profile = _profile()
        profile.timezone = "UTC"
        dose = _dose(profile)
        mock_get_candidates.return_value = [dose]
        mock_claim.return_value = _record(dose)

        self.dispatcher.run_sweep(now=NOW)

        self.assertEqual(mock_claim.call_args.args[4], "Reminder: Take Lipitor at 11:37 AM")

    def test_skips_dose_outside_window(
        self,
        mock_get_candidates: MagicMock,
        mock_claim: MagicMock,
        mock_mark_sent: MagicMock,
        mock_release: MagicMock,
    ) -> None:
        """Test doses that are not due are skipped silently."""
        mock_get_candidates.return_value = [_dose(_profile(), dose_time=time(18, 0))]

        result = self.dispatcher.run_sweep(now=NOW)

        self.assertEqual(result.candidates, 1)
        self.assertEqual(result.sent, 0)
        self.assertEqual(result.skipped, 0)
        self.assertEqual(result.results, [])
        mock_claim.assert_not_called()
        self.mock_provider.send_sms.assert_not_called()

    def test_skips_profile_without_phone(
        self,
        mock_get_candidates: MagicMock,
        mock_claim: MagicMock,
        mock_mark_sent: MagicMock,
        mock_release: MagicMock,
    ) -> None:
        """Test profiles that cannot receive SMS are skipped silently."""
        mock_get_candidates.return_value = [
            _dose(_profile(phone_number=None)),
            _dose(_profile(enabled=False)),
        ]

        result = self.dispatcher.run_sweep(now=NOW)

        self.assertEqual(result.sent, 0)
        self.assertEqual(result.errors, 0)
        mock_claim.assert_not_called()
        self.mock_provider.send_sms.assert_not_called()

    def test_already_claimed_is_skipped(
        self,
        mock_get_candidates: MagicMock,
        mock_claim: MagicMock,
        mock_mark_sent: MagicMock,
        mock_release: MagicMock,
    ) -> None:
        """Test an existing reminder for today prevents another send."""
        mock_get_candidates.return_value = [_dose(_profile())]
        mock_claim.return_value = None

        result = self.dispatcher.run_sweep(now=NOW)

        self.assertEqual(result.sent, 0)
        self.assertEqual(result.skipped, 1)
        self.assertEqual(result.errors, 0)
        self.mock_provider.send_sms.assert_not_called()
        mock_mark_sent.assert_not_called()

    def test_vendor_failure_releases_claim_and_continues(
        self,
        mock_get_candidates: MagicMock,
        mock_claim: MagicMock,
        mock_mark_sent: MagicMock,
        mock_release: MagicMock,
    ) -> None:
        """Test a failed send removes the claim, records the error and moves on."""
        failing = _dose(_profile(phone_number="+15550000001"))
        working = _dose(_profile(phone_number="+15550000002"))
        failing_record = _record(failing)
        working_record = _record(working)
        mock_get_candidates.return_value = [failing, working]
        mock_claim.side_effect = [failing_record, working_record]
        self.mock_provider.send_sms.side_effect = [
            SMSSendResult(success=False, error="Surge API error: Internal Server Error"),
            SMSSendResult(success=True, message_id="msg_456"),
        ]

        result = self.dispatcher.run_sweep(now=NOW)

        self.assertEqual(result.sent, 1)
        self.assertEqual(result.errors, 1)
        self.assertFalse(result.results[0].success)
        self.assertEqual(result.results[0].error, "Surge API error: Internal Server Error")
        self.assertTrue(result.results[1].success)
        mock_release.assert_called_once_with(self.mock_session, failing_record)
        mock_mark_sent.assert_called_once_with(self.mock_session, working_record, "msg_456")

    def test_provider_exception_is_recorded(
        self,
        mock_get_candidates: MagicMock,
        mock_claim: MagicMock,
        mock_mark_sent: MagicMock,
        mock_release: MagicMock,
    ) -> None:
        """Test an unexpected provider exception becomes a per-dose error."""
        dose = _dose(_profile())
        record = _record(dose)
        mock_get_candidates.return_value = [dose]
        mock_claim.return_value = record
        self.mock_provider.send_sms.side_effect = RuntimeError("boom")

        result = self.dispatcher.run_sweep(now=NOW)

        self.assertEqual(result.errors, 1)
        self.assertIn("boom", result.results[0].error)
        mock_release.assert_called_once_with(self.mock_session, record)

    def test_claim_database_error_is_per_dose(
        self,
        mock_get_candidates: MagicMock,
        mock_claim: MagicMock,
        mock_mark_sent: MagicMock,
        mock_release: MagicMock,
    ) -> None:
        """Test a database error while claiming is rolled back and recorded."""
        mock_get_candidates.return_value = [_dose(_profile())]
        mock_claim.side_effect = OperationalError("INSERT", {}, Exception("connection lost"))

        result = self.dispatcher.run_sweep(now=NOW)

        self.assertEqual(result.errors, 1)
        self.assertFalse(result.results[0].success)
        self.mock_session.rollback.assert_called_once()
        self.mock_provider.send_sms.assert_not_called()

    def test_bookkeeping_failure_after_send_counts_as_sent(
        self,
        mock_get_candidates: MagicMock,
        mock_claim: MagicMock,
        mock_mark_sent: MagicMock,
        mock_release: MagicMock,
    ) -> None:
        """Test the SMS still counts as sent when recording it fails."""
        dose = _dose(_profile())
        mock_get_candidates.return_value = [dose]
        mock_claim.return_value = _record(dose)
        mock_mark_sent.side_effect = OperationalError("UPDATE", {}, Exception("connection lost"))

        result = self.dispatcher.run_sweep(now=NOW)

        self.assertEqual(result.sent, 1)
        self.assertEqual(result.errors, 1)
        self.assertTrue(result.results[0].success)
        self.assertEqual(result.results[0].message_id, "msg_123")
        self.assertIsNotNone(result.results[0].error)
        mock_release.assert_not_called()

    def test_fetch_failure_is_fatal(
        self,
        mock_get_candidates: MagicMock,
        mock_claim: MagicMock,
        mock_mark_sent: MagicMock,
        mock_release: MagicMock,
    ) -> None:
        """Test a failure to load candidates raises ReminderSweepError."""
        mock_get_candidates.side_effect = OperationalError("SELECT", {}, Exception("down"))

        with self.assertRaises(ReminderSweepError):
            self.dispatcher.run_sweep(now=NOW)

        mock_claim.assert_not_called()

    def test_no_candidates(
        self,
        mock_get_candidates: MagicMock,
        mock_claim: MagicMock,
        mock_mark_sent: MagicMock,
        mock_release: MagicMock,
    ) -> None:
        """Test an empty day returns zero counts."""
        mock_get_candidates.return_value = []

        result = self.dispatcher.run_sweep(now=NOW)

        self.assertEqual(result.candidates, 0)
        self.assertEqual(result.sent, 0)
        self.assertEqual(result.results, [])

    def test_commits_after_each_reminder(
        self,
        mock_get_candidates: MagicMock,
        mock_claim: MagicMock,
        mock_mark_sent: MagicMock,
        mock_release: MagicMock,
    ) -> None:
        """Test the claim and the sent marker are committed separately."""
        dose = _dose(_profile())
        mock_get_candidates.return_value = [dose]
        mock_claim.return_value = _record(dose)

        self.dispatcher.run_sweep(now=NOW)

        self.assertEqual(self.mock_session.commit.call_count, 2)


if __name__ == "__main__":
    unittest.main()
