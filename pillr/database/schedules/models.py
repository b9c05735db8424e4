"""SQLAlchemy ORM models for weekly dose schedules."""

import uuid as uuid_module
from datetime import UTC, datetime, time

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Index, Integer, Text, Time
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from pillr.database.core import Base
from pillr.database.profiles.models import Profile

# Fallback when a medication row has no usable name at all
UNNAMED_MEDICATION = "medication"


class ScheduledDose(Base):
    """ORM model for one weekly dose slot.

    A dose recurs every week on ``day_of_week`` (1=Monday..7=Sunday) at
    ``dose_time``, which is stored as a UTC time-of-day.
    """

    __tablename__ = "weekly_events"

    id: Mapped[uuid_module.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid_module.uuid4,
    )
    user_id: Mapped[uuid_module.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("profiles.id"),
        nullable=False,
    )
    day_of_week: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
    )
    dose_time: Mapped[time] = mapped_column(
        Time(timezone=False),
        nullable=False,
    )
    description: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
    )
    inserted_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(UTC),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
    )

    profile: Mapped[Profile] = relationship(Profile)
    medications: Mapped[list["Medication"]] = relationship(
        "Medication",
        back_populates="dose",
        cascade="all, delete-orphan",
        order_by="Medication.created_at",
    )

    __table_args__ = (
        CheckConstraint("day_of_week BETWEEN 1 AND 7", name="ck_weekly_events_day_of_week"),
        Index("idx_weekly_events_day_of_week", "day_of_week"),
        Index("idx_weekly_events_user_id", "user_id"),
    )

    def __repr__(self) -> str:
        """Return string representation of the dose."""
        return (
            f"<ScheduledDose(id={self.id}, day_of_week={self.day_of_week}, "
            f"dose_time={self.dose_time})>"
        )


class Medication(Base):
    """ORM model for a medication attached to a dose slot."""

    __tablename__ = "medications"

    id: Mapped[uuid_module.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid_module.uuid4,
    )
    schedule_id: Mapped[uuid_module.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("weekly_events.id"),
        nullable=False,
    )
    name: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
    )
    brand_name: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
    )
    generic_name: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(UTC),
    )

    dose: Mapped["ScheduledDose"] = relationship(
        "ScheduledDose",
        back_populates="medications",
    )

    __table_args__ = (Index("idx_medications_schedule_id", "schedule_id"),)

    @property
    def display_name(self) -> str:
        """Name shown to patients: brand name, then generic name, then raw name."""
        return self.brand_name or self.generic_name or self.name or UNNAMED_MEDICATION

    def __repr__(self) -> str:
        """Return string representation of the medication."""
        return f"<Medication(id={self.id}, name={self.display_name!r})>"
