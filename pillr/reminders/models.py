"""Pydantic models for reminder sweep results."""

import uuid as uuid_module

from pydantic import BaseModel, Field


class ReminderResult(BaseModel):
    """Outcome of one reminder attempt within a sweep."""

    event_id: uuid_module.UUID = Field(..., description="The scheduled dose")
    user_id: uuid_module.UUID = Field(..., description="The dose owner")
    success: bool = Field(..., description="Whether the vendor accepted the SMS")
    message_id: str | None = Field(None, description="Vendor message ID when sent")
    error: str | None = Field(None, description="Error message when something failed")


class SweepResult(BaseModel):
    """Aggregate result of one reminder sweep."""

    candidates: int = Field(default=0, description="Doses scheduled today for opted-in users")
    sent: int = Field(default=0, description="Reminders the vendor accepted")
    errors: int = Field(default=0, description="Reminders that failed")
    skipped: int = Field(default=0, description="Reminders already claimed by an earlier sweep")
    results: list[ReminderResult] = Field(
        default_factory=list,
        description="Per-dose results for every attempted reminder",
    )
