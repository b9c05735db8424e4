"""API endpoints for SMS reminders and SMS preferences."""

import logging
import time
from datetime import UTC, date, datetime

from fastapi import APIRouter, Depends, HTTPException, Query, status

from pillr.api.dependencies import get_request_sms_provider, verify_cron_secret, verify_token
from pillr.api.sms.models import (
    OptInRequest,
    OptInResponse,
    ReminderLogEntry,
    ReminderLogResponse,
    SendRemindersResponse,
)
from pillr.database.connection import get_session
from pillr.database.profiles import get_profile, update_sms_preferences
from pillr.database.reminders import ReminderRecord, get_reminders_for_date
from pillr.reminders import ReminderDispatcher, ReminderSweepError, get_reminder_settings
from pillr.sms import SMSProvider
from pillr.utils.phone import normalise_phone_number

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/sms", tags=["SMS"])

NO_REMINDERS_MESSAGE = "No reminders to send"


def _welcome_message(lead_minutes: int) -> str:
    return (
        "Welcome to Pillr! You're now subscribed to SMS medication reminders. "
        f"You'll receive notifications {lead_minutes} minutes before each scheduled dose."
    )


def _record_to_entry(record: ReminderRecord) -> ReminderLogEntry:
    """Convert a reminder record to its response model.

    :param record: The database model.
    :returns: API response model.
    """
    return ReminderLogEntry(
        id=record.id,
        event_id=record.event_id,
        user_id=record.user_id,
        reminder_date=record.reminder_date,
        message_sent=record.message_sent,
        provider_message_id=record.provider_message_id,
        sent_at=record.sent_at,
        created_at=record.created_at,
    )


@router.api_route(
    "/send-reminders",
    methods=["GET", "POST"],
    response_model=SendRemindersResponse,
    dependencies=[Depends(verify_cron_secret)],
    summary="Send due SMS reminders",
)
def send_reminders(
    provider: SMSProvider = Depends(get_request_sms_provider),
) -> SendRemindersResponse:
    """Run one reminder sweep.

    Called every five minutes by a cron service. Doses whose reminder window
    contains the current time are texted, at most once per dose per day.
    """
    start = time.perf_counter()
    logger.info("Send reminders: starting sweep")

    try:
        with get_session() as session:
            dispatcher = ReminderDispatcher(session, provider, get_reminder_settings())
            result = dispatcher.run_sweep()
    except ReminderSweepError as e:
        logger.error(f"Send reminders failed: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch events",
        ) from e

    if result.candidates == 0:
        message = NO_REMINDERS_MESSAGE
    else:
        message = f"Checked {result.candidates} scheduled doses"

    elapsed_ms = (time.perf_counter() - start) * 1000
    logger.info(
        f"Send reminders complete: sent={result.sent}, errors={result.errors}, "
        f"skipped={result.skipped}, elapsed={elapsed_ms:.0f}ms"
    )

    return SendRemindersResponse(
        success=True,
        message=message,
        sent=result.sent,
        errors=result.errors,
        skipped=result.skipped,
        results=result.results,
    )


@router.post(
    "/opt-in",
    response_model=OptInResponse,
    dependencies=[Depends(verify_token)],
    summary="Update SMS preferences",
)
def opt_in(
    request: OptInRequest,
    provider: SMSProvider = Depends(get_request_sms_provider),
) -> OptInResponse:
    """Save a user's phone number and SMS reminder preference.

    A welcome SMS goes out the first time a user opts in. A failed welcome
    SMS is logged and does not fail the request.
    """
    if request.sms_notifications_enabled and not request.phone_number:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Phone number is required when opting into SMS notifications",
        )

    phone_number = None
    if request.phone_number:
        try:
            phone_number = normalise_phone_number(request.phone_number)
        except ValueError as e:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=str(e),
            ) from e

    logger.info(
        f"SMS opt-in: user_id={request.user_id}, enabled={request.sms_notifications_enabled}"
    )

    with get_session() as session:
        profile = get_profile(session, request.user_id)
        if profile is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"Profile not found: {request.user_id}",
            )

        was_opted_in = profile.sms_notifications_enabled
        update_sms_preferences(
            session,
            profile,
            phone_number=phone_number,
            enabled=request.sms_notifications_enabled,
        )

    welcome_sent = False
    if request.sms_notifications_enabled and not was_opted_in and phone_number:
        welcome_sent = _send_welcome(provider, phone_number, str(request.user_id))

    return OptInResponse(
        success=True,
        message="SMS preferences updated successfully",
        phone_number=phone_number,
        sms_notifications_enabled=request.sms_notifications_enabled,
        welcome_sent=welcome_sent,
    )


def _send_welcome(provider: SMSProvider, phone_number: str, user_id: str) -> bool:
    """Send the welcome SMS, logging rather than raising on failure.

    :param provider: SMS provider.
    :param phone_number: E.164 destination.
    :param user_id: The user who opted in.
    :returns: True if the vendor accepted the message.
    """
    message = _welcome_message(get_reminder_settings().lead_minutes)
    try:
        result = provider.send_sms(phone_number, message, user_id=user_id)
    except Exception:
        logger.exception(f"Welcome SMS raised: user_id={user_id}")
        return False

    if not result.success:
        logger.error(f"Welcome SMS failed: user_id={user_id}, error={result.error}")
        return False

    logger.info(f"Welcome SMS sent: user_id={user_id}, message_id={result.message_id}")
    return True


@router.get(
    "/reminders",
    response_model=ReminderLogResponse,
    dependencies=[Depends(verify_token)],
    summary="List sent reminders",
)
def list_reminders(
    reminder_date: date | None = Query(None, description="UTC date, defaults to today"),
    limit: int = Query(100, ge=1, le=500, description="Maximum number of records"),
) -> ReminderLogResponse:
    """List the SMS reminder log for one day, newest first."""
    if reminder_date is None:
        reminder_date = datetime.now(UTC).date()

    with get_session() as session:
        records = get_reminders_for_date(session, reminder_date, limit=limit)
        results = [_record_to_entry(record) for record in records]

    logger.info(f"List reminders: date={reminder_date}, found={len(results)}")
    return ReminderLogResponse(results=results)
