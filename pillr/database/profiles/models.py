"""SQLAlchemy ORM model for user profiles."""

import uuid as uuid_module
from datetime import UTC, datetime

from sqlalchemy import Boolean, DateTime, String
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from pillr.database.core import Base


class Profile(Base):
    """ORM model for a patient or caregiver profile.

    Only the columns the reminder path reads or writes are mapped. The id is
    the authentication provider's user id.
    """

    __tablename__ = "profiles"

    id: Mapped[uuid_module.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid_module.uuid4,
    )
    phone_number: Mapped[str | None] = mapped_column(
        String(20),
        nullable=True,
    )
    sms_notifications_enabled: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
    )
    sms_opt_in_shown: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
    )
    timezone: Mapped[str | None] = mapped_column(
        String(64),
        nullable=True,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
    )

    @property
    def can_receive_sms(self) -> bool:
        """Check whether reminders may be texted to this profile."""
        return bool(self.sms_notifications_enabled and self.phone_number)

    def __repr__(self) -> str:
        """Return string representation of the profile."""
        return f"<Profile(id={self.id}, sms_enabled={self.sms_notifications_enabled})>"
