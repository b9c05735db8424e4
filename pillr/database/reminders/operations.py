"""Database operations for the SMS reminder log."""

from __future__ import annotations

import logging
import uuid as uuid_module
from datetime import UTC, date, datetime

from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.orm import Session

from pillr.database.reminders.models import ReminderRecord

logger = logging.getLogger(__name__)


def claim_reminder(
    session: Session,
    event_id: uuid_module.UUID,
    user_id: uuid_module.UUID,
    reminder_date: date,
    message: str,
) -> ReminderRecord | None:
    """Claim the reminder for a dose on a given day.

    Inserts the log row with ``ON CONFLICT DO NOTHING`` against the
    ``(event_id, reminder_date)`` unique constraint, so exactly one caller
    wins even when sweeps overlap.

    :param session: Database session.
    :param event_id: The dose the reminder is for.
    :param user_id: The dose owner.
    :param reminder_date: Calendar date (UTC) of the reminder.
    :param message: The rendered SMS text.
    :returns: The new record, or None if the reminder was already claimed.
    """
    statement = (
        insert(ReminderRecord)
        .values(
            id=uuid_module.uuid4(),
            event_id=event_id,
            user_id=user_id,
            reminder_date=reminder_date,
            message_sent=message,
            created_at=datetime.now(UTC),
        )
        .on_conflict_do_nothing(index_elements=["event_id", "reminder_date"])
        .returning(ReminderRecord.id)
    )
    record_id = session.execute(statement).scalar_one_or_none()
    if record_id is None:
        logger.info(f"Reminder already claimed: event_id={event_id}, date={reminder_date}")
        return None

    record = session.get(ReminderRecord, record_id)
    logger.info(f"Claimed reminder: id={record_id}, event_id={event_id}, date={reminder_date}")
    return record


def mark_reminder_sent(
    session: Session,
    record: ReminderRecord,
    provider_message_id: str | None,
    sent_at: datetime | None = None,
) -> None:
    """Record that the vendor accepted a claimed reminder.

    :param session: Database session.
    :param record: The claimed reminder.
    :param provider_message_id: The vendor's message ID.
    :param sent_at: When the SMS was sent (defaults to now).
    """
    if sent_at is None:
        sent_at = datetime.now(UTC)

    record.provider_message_id = provider_message_id
    record.sent_at = sent_at
    session.flush()
    logger.info(
        f"Marked reminder sent: id={record.id}, provider_message_id={provider_message_id}"
    )


def release_reminder(
    session: Session,
    record: ReminderRecord,
) -> None:
    """Delete a claim whose SMS could not be sent.

    Removing the row lets the next sweep try again while the dose is still
    inside its reminder window.

    :param session: Database session.
    :param record: The claimed reminder.
    """
    session.delete(record)
    session.flush()
    logger.info(f"Released reminder claim: event_id={record.event_id}, date={record.reminder_date}")


def get_reminders_for_date(
    session: Session,
    reminder_date: date,
    limit: int = 100,
) -> list[ReminderRecord]:
    """List reminders logged for a calendar day, newest first.

    :param session: Database session.
    :param reminder_date: Calendar date (UTC).
    :param limit: Maximum number of records to return.
    :returns: List of reminder records.
    """
    return (
        session.query(ReminderRecord)
        .filter(ReminderRecord.reminder_date == reminder_date)
        .order_by(ReminderRecord.created_at.desc())
        .limit(limit)
        .all()
    )
