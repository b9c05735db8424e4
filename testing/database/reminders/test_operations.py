"""Tests for SMS reminder log database operations."""

import unittest
from datetime import UTC, date, datetime
from unittest.mock import MagicMock
from uuid import uuid4

from sqlalchemy import UniqueConstraint
from sqlalchemy.dialects import postgresql

from pillr.database.reminders.models import ReminderRecord
from pillr.database.reminders.operations import (
    claim_reminder,
    get_reminders_for_date,
    mark_reminder_sent,
    release_reminder,
)

TODAY = date(2026, 10, 19)


class TestClaimReminder(unittest.TestCase):
    """Tests for claim_reminder operation."""

    def test_returns_record_when_inserted(self) -> None:
        """Test the new record is returned when the insert wins."""
        mock_session = MagicMock()
        record_id = uuid4()
        record = ReminderRecord(id=record_id, reminder_date=TODAY, message_sent="Reminder")
        mock_session.execute.return_value.scalar_one_or_none.return_value = record_id
        mock_session.get.return_value = record

        result = claim_reminder(mock_session, uuid4(), uuid4(), TODAY, "Reminder")

        self.assertIs(result, record)
        mock_session.get.assert_called_once_with(ReminderRecord, record_id)

    def test_returns_none_when_already_claimed(self) -> None:
        """Test a conflicting insert returns None."""
        mock_session = MagicMock()
        mock_session.execute.return_value.scalar_one_or_none.return_value = None

        result = claim_reminder(mock_session, uuid4(), uuid4(), TODAY, "Reminder")

        self.assertIsNone(result)
        mock_session.get.assert_not_called()

    def test_uses_on_conflict_do_nothing(self) -> None:
        """Test the insert ignores conflicts on (event_id, reminder_date)."""
        mock_session = MagicMock()
        mock_session.execute.return_value.scalar_one_or_none.return_value = None

        claim_reminder(mock_session, uuid4(), uuid4(), TODAY, "Reminder")

        statement = mock_session.execute.call_args.args[0]
        sql = str(statement.compile(dialect=postgresql.dialect()))
        self.assertIn("INSERT INTO sms_reminders", sql)
        self.assertIn("ON CONFLICT (event_id, reminder_date) DO NOTHING", sql)
        self.assertIn("RETURNING sms_reminders.id", sql)


class TestMarkReminderSent(unittest.TestCase):
    """Tests for mark_reminder_sent operation."""

    def test_sets_message_id_and_time(self) -> None:
        """Test the vendor ID and sent time are stored."""
        mock_session = MagicMock()
        record = ReminderRecord(id=uuid4(), reminder_date=TODAY, message_sent="Reminder")
        sent_at = datetime(2026, 10, 19, 11, 22, tzinfo=UTC)

        mark_reminder_sent(mock_session, record, "msg_123", sent_at=sent_at)

        self.assertEqual(record.provider_message_id, "msg_123")
        self.assertEqual(record.sent_at, sent_at)
        self.assertTrue(record.is_sent)
        mock_session.flush.assert_called_once()

    def test_defaults_sent_time_to_now(self) -> None:
        """Test sent_at defaults to the current time."""
        record = ReminderRecord(id=uuid4(), reminder_date=TODAY, message_sent="Reminder")

        mark_reminder_sent(MagicMock(), record, "msg_123")

        self.assertIsNotNone(record.sent_at)


class TestReleaseReminder(unittest.TestCase):
    """Tests for release_reminder operation."""

    def test_deletes_record(self) -> None:
        """Test the claim is deleted and flushed."""
        mock_session = MagicMock()
        record = ReminderRecord(id=uuid4(), reminder_date=TODAY, message_sent="Reminder")

        release_reminder(mock_session, record)

        mock_session.delete.assert_called_once_with(record)
        mock_session.flush.assert_called_once()


class TestGetRemindersForDate(unittest.TestCase):
    """Tests for get_reminders_for_date operation."""

    def test_returns_query_results(self) -> None:
        """Test records for the day are returned."""
        mock_session = MagicMock()
        records = [ReminderRecord(id=uuid4(), reminder_date=TODAY, message_sent="Reminder")]
        query = mock_session.query.return_value
        query.filter.return_value.order_by.return_value.limit.return_value.all.return_value = (
            records
        )

        result = get_reminders_for_date(mock_session, TODAY, limit=10)

        self.assertEqual(result, records)
        mock_session.query.assert_called_once_with(ReminderRecord)
        query.filter.return_value.order_by.return_value.limit.assert_called_once_with(10)


class TestReminderRecordModel(unittest.TestCase):
    """Tests for the ReminderRecord model."""

    def test_unsent_claim(self) -> None:
        """Test a fresh claim is not marked sent."""
        record = ReminderRecord(id=uuid4(), reminder_date=TODAY, message_sent="Reminder")
        self.assertFalse(record.is_sent)

    def test_unique_constraint_on_event_and_date(self) -> None:
        """Test the table enforces one reminder per dose per day."""
        constraints = {
            tuple(column.name for column in constraint.columns)
            for constraint in ReminderRecord.__table__.constraints
            if isinstance(constraint, UniqueConstraint)
        }
        self.assertIn(("event_id", "reminder_date"), constraints)


if __name__ == "__main__":
    unittest.main()
