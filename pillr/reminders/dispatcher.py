"""Reminder dispatcher that runs one sweep over today's scheduled doses."""

import logging
from datetime import UTC, datetime

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from pillr.database.reminders import (
    ReminderRecord,
    claim_reminder,
    mark_reminder_sent,
    release_reminder,
)
from pillr.database.schedules import ScheduledDose, get_reminder_candidates
from pillr.reminders.config import ReminderSettings
from pillr.reminders.exceptions import ReminderSweepError
from pillr.reminders.formatting import build_reminder_message, resolve_display_timezone
from pillr.reminders.models import ReminderResult, SweepResult
from pillr.reminders.window import schema_day_of_week, should_send_reminder
from pillr.sms.models import SMSSendResult
from pillr.sms.providers.base import SMSProvider

logger = logging.getLogger(__name__)


class ReminderDispatcher:
    """Send SMS reminders for doses that are due and log them in the database.

    Each reminder is claimed in the ``sms_reminders`` table before the SMS is
    sent. The claim is a unique row per dose per day, so overlapping sweeps
    cannot text the same dose twice. A failed send deletes the claim so the
    dose is retried on the next sweep.
    """

    def __init__(
        self,
        session: Session,
        provider: SMSProvider,
        settings: ReminderSettings,
    ) -> None:
        """Initialise the dispatcher.

        :param session: Database session; the dispatcher commits per reminder.
        :param provider: SMS provider used to send reminders.
        :param settings: Lead time, window width and display timezone.
        """
        self._session = session
        self._provider = provider
        self._settings = settings

    def run_sweep(self, now: datetime | None = None) -> SweepResult:
        """Run one sweep over today's doses.

        :param now: Current moment. Defaults to the current UTC time.
        :returns: Counts and per-dose results.
        :raises ReminderSweepError: If the candidate doses cannot be loaded.
        """
        if now is None:
            now = datetime.now(UTC)
        elif now.tzinfo is None:
            now = now.replace(tzinfo=UTC)
        else:
            now = now.astimezone(UTC)

        day_of_week = schema_day_of_week(now)
        try:
            doses = get_reminder_candidates(self._session, day_of_week)
        except SQLAlchemyError as e:
            logger.exception(f"Failed to fetch scheduled doses: day_of_week={day_of_week}")
            self._session.rollback()
            raise ReminderSweepError(f"Failed to fetch scheduled doses: {e}") from e

        result = SweepResult(candidates=len(doses))
        logger.info(f"Checking {len(doses)} doses for reminders: day_of_week={day_of_week}")

        for dose in doses:
            self._process_dose(dose, now, result)

        logger.info(
            f"Reminder sweep complete: "
            f"{result.sent} sent, {result.skipped} skipped, {result.errors} errors"
        )
        return result

    def _process_dose(self, dose: ScheduledDose, now: datetime, result: SweepResult) -> None:
        """Send the reminder for one dose if it is due.

        Failures are recorded on ``result`` and never raised.

        :param dose: The scheduled dose, with profile and medications loaded.
        :param now: Current moment in UTC.
        :param result: The sweep result to update.
        """
        if not should_send_reminder(
            dose.dose_time,
            dose.day_of_week,
            lead_minutes=self._settings.lead_minutes,
            now=now,
            window_minutes=self._settings.window_minutes,
        ):
            return

        profile = dose.profile
        if profile is None or not profile.can_receive_sms:
            return

        display_timezone = resolve_display_timezone(
            profile.timezone, self._settings.display_timezone
        )
        message = build_reminder_message(dose, display_timezone, now.date())

        try:
            record = claim_reminder(self._session, dose.id, dose.user_id, now.date(), message)
            self._session.commit()
        except SQLAlchemyError as e:
            self._session.rollback()
            self._record_failure(dose, result, f"Failed to claim reminder: {e}")
            return

        if record is None:
            result.skipped += 1
            return

        send_result = self._send(profile.phone_number, message, dose)

        if not send_result.success:
            self._release(record, dose)
            self._record_failure(dose, result, send_result.error or "Unknown SMS error")
            return

        try:
            mark_reminder_sent(self._session, record, send_result.message_id)
            self._session.commit()
        except SQLAlchemyError as e:
            # The SMS went out, so it still counts as sent
            self._session.rollback()
            error_msg = f"SMS sent but failed to record it: {e}"
            logger.exception(f"{error_msg}: event_id={dose.id}")
            result.sent += 1
            result.errors += 1
            result.results.append(
                ReminderResult(
                    event_id=dose.id,
                    user_id=dose.user_id,
                    success=True,
                    message_id=send_result.message_id,
                    error=error_msg,
                )
            )
            return

        result.sent += 1
        result.results.append(
            ReminderResult(
                event_id=dose.id,
                user_id=dose.user_id,
                success=True,
                message_id=send_result.message_id,
            )
        )
        logger.info(f"Sent reminder: event_id={dose.id}, message_id={send_result.message_id}")

    def _send(self, phone_number: str | None, message: str, dose: ScheduledDose) -> SMSSendResult:
        """Send the SMS, turning unexpected provider exceptions into a failed result.

        :param phone_number: Destination number in E.164 format.
        :param message: The SMS text.
        :param dose: The dose being reminded.
        :returns: The provider's send result.
        """
        try:
            return self._provider.send_sms(phone_number or "", message, user_id=str(dose.user_id))
        except Exception as e:
            logger.exception(f"SMS provider raised: event_id={dose.id}")
            return SMSSendResult(success=False, error=f"SMS provider error: {e}")

    def _release(self, record: ReminderRecord, dose: ScheduledDose) -> None:
        """Delete a claim after a failed send so the next sweep can retry.

        :param record: The claimed reminder record.
        :param dose: The dose being reminded.
        """
        try:
            release_reminder(self._session, record)
            self._session.commit()
        except SQLAlchemyError:
            self._session.rollback()
            logger.exception(f"Failed to release reminder claim: event_id={dose.id}")

    def _record_failure(self, dose: ScheduledDose, result: SweepResult, error: str) -> None:
        logger.error(f"Reminder failed: event_id={dose.id}, error={error}")
        result.errors += 1
        result.results.append(
            ReminderResult(
                event_id=dose.id,
                user_id=dose.user_id,
                success=False,
                error=error,
            )
        )
