"""Pydantic models for SMS endpoints."""

import uuid as uuid_module
from datetime import date, datetime

from pydantic import BaseModel, Field

from pillr.reminders.models import ReminderResult


class SendRemindersResponse(BaseModel):
    """Response model for a reminder sweep."""

    success: bool = Field(..., description="Whether the sweep ran")
    message: str = Field(..., description="Summary of the sweep")
    sent: int = Field(..., description="Reminders the vendor accepted")
    errors: int = Field(..., description="Reminders that failed")
    skipped: int = Field(..., description="Reminders already sent by an earlier sweep")
    results: list[ReminderResult] = Field(
        default_factory=list,
        description="Per-dose results",
    )


class OptInRequest(BaseModel):
    """Request model for updating SMS preferences."""

    user_id: uuid_module.UUID = Field(..., description="Profile to update")
    phone_number: str | None = Field(
        None,
        max_length=32,
        description="Phone number; formatting characters are stripped",
    )
    sms_notifications_enabled: bool = Field(
        default=False,
        description="Whether to receive SMS reminders",
    )


class OptInResponse(BaseModel):
    """Response model for updating SMS preferences."""

    success: bool = Field(..., description="Whether the preferences were saved")
    message: str = Field(..., description="Result message")
    phone_number: str | None = Field(None, description="The saved E.164 phone number")
    sms_notifications_enabled: bool = Field(..., description="The saved preference")
    welcome_sent: bool = Field(default=False, description="Whether a welcome SMS went out")


class ReminderLogEntry(BaseModel):
    """One row of the SMS reminder log."""

    id: uuid_module.UUID = Field(..., description="Reminder record ID")
    event_id: uuid_module.UUID = Field(..., description="The scheduled dose")
    user_id: uuid_module.UUID = Field(..., description="The dose owner")
    reminder_date: date = Field(..., description="Calendar date (UTC) of the reminder")
    message_sent: str = Field(..., description="SMS text")
    provider_message_id: str | None = Field(None, description="Vendor message ID")
    sent_at: datetime | None = Field(None, description="When the vendor accepted the SMS")
    created_at: datetime = Field(..., description="When the reminder was claimed")


class ReminderLogResponse(BaseModel):
    """Response model for listing the reminder log."""

    results: list[ReminderLogEntry] = Field(..., description="Reminder records")
