"""SQLAlchemy ORM model for sent SMS reminders."""

import uuid as uuid_module
from datetime import UTC, date, datetime

from sqlalchemy import Date, DateTime, ForeignKey, Index, String, Text, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from pillr.database.core import Base

# Maximum length of message to show in repr
REPR_MESSAGE_MAX_LENGTH = 50


class ReminderRecord(Base):
    """ORM model for the log of SMS reminders.

    One row per dose per calendar day. The row is inserted (claimed) before
    the SMS goes out; ``provider_message_id`` and ``sent_at`` are filled in
    once the vendor accepts the message. The unique constraint on
    ``(event_id, reminder_date)`` is what stops two overlapping sweeps from
    texting the same dose twice.
    """

    __tablename__ = "sms_reminders"

    id: Mapped[uuid_module.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid_module.uuid4,
    )
    event_id: Mapped[uuid_module.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("weekly_events.id", ondelete="CASCADE"),
        nullable=False,
    )
    user_id: Mapped[uuid_module.UUID] = mapped_column(
        UUID(as_uuid=True),
        nullable=False,
    )
    reminder_date: Mapped[date] = mapped_column(
        Date,
        nullable=False,
    )
    message_sent: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )
    provider_message_id: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
    )
    sent_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(UTC),
    )

    __table_args__ = (
        UniqueConstraint("event_id", "reminder_date", name="uq_sms_reminders_event_date"),
        Index("idx_sms_reminders_reminder_date", "reminder_date"),
    )

    @property
    def is_sent(self) -> bool:
        """Check whether the vendor accepted this reminder."""
        return self.sent_at is not None

    def __repr__(self) -> str:
        """Return string representation of the reminder."""
        if len(self.message_sent) > REPR_MESSAGE_MAX_LENGTH:
            message_preview = self.message_sent[:REPR_MESSAGE_MAX_LENGTH] + "..."
        else:
            message_preview = self.message_sent
        return (
            f"<ReminderRecord(event_id={self.event_id}, date={self.reminder_date}, "
            f"message={message_preview!r})>"
        )
