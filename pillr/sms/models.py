"""Pydantic models and enums for SMS sending."""

from enum import StrEnum

from pydantic import BaseModel, Field


class SMSProviderKind(StrEnum):
    """Available SMS provider backends."""

    NULL = "null"
    SURGE = "surge"
    TWILIO = "twilio"


class SMSSendResult(BaseModel):
    """Result of sending one SMS."""

    success: bool = Field(..., description="Whether the vendor accepted the message")
    message_id: str | None = Field(None, description="Vendor message ID")
    error: str | None = Field(None, description="Error message when the send failed")
