"""Celery tasks for SMS reminder sweeps."""

import logging
from functools import lru_cache
from typing import Any

from celery import Celery, Task
from celery.exceptions import WorkerShutdown
from celery.schedules import crontab
from celery.signals import worker_init
from pydantic import ValidationError

from pillr.database.connection import get_session
from pillr.orchestration.celery_app import celery_app
from pillr.reminders import ReminderDispatcher, get_reminder_settings
from pillr.sms import SMSConfigurationError, SMSProvider, get_sms_provider

logger = logging.getLogger(__name__)

# Sweeps run every 5 minutes; a run must finish well before the next one starts
SWEEP_SOFT_TIME_LIMIT = 240
SWEEP_TIME_LIMIT = 280


@lru_cache
def get_worker_sms_provider() -> SMSProvider:
    """Get the SMS provider shared by every sweep in this worker.

    :returns: The configured SMS provider.
    :raises SMSConfigurationError: If the selected provider is missing credentials.
    """
    return get_sms_provider()


@worker_init.connect
def build_sms_provider_on_startup(**kwargs: Any) -> None:
    """Build the SMS provider before the worker accepts tasks.

    Pool processes are forked after this runs and inherit the cached provider.

    :raises WorkerShutdown: If the SMS settings are invalid.
    """
    try:
        get_worker_sms_provider()
    except (SMSConfigurationError, ValidationError) as e:
        logger.critical(f"SMS provider misconfigured, stopping worker: {e}")
        raise WorkerShutdown(1) from e


@celery_app.task(
    bind=True,
    name="pillr.orchestration.tasks.send_sms_reminders_task",
    soft_time_limit=SWEEP_SOFT_TIME_LIMIT,
    time_limit=SWEEP_TIME_LIMIT,
    max_retries=0,
)
def send_sms_reminders_task(self: Task) -> dict[str, Any]:
    """Run one SMS reminder sweep.

    Not retried: the next scheduled sweep picks up anything that failed while
    its window is still open.

    :param self: The Celery task instance (bound).
    :returns: The sweep result as a JSON-serialisable dict.
    """
    logger.info("Starting SMS reminder sweep task")

    try:
        provider = get_worker_sms_provider()

        with get_session() as session:
            dispatcher = ReminderDispatcher(session, provider, get_reminder_settings())
            result = dispatcher.run_sweep()

        logger.info(
            f"SMS reminder sweep complete: {result.sent} sent, "
            f"{result.skipped} skipped, {result.errors} errors"
        )
        return result.model_dump(mode="json")

    except Exception as exc:
        logger.exception(f"SMS reminder sweep failed: {exc}")
        raise


# Beat schedule for periodic tasks
@celery_app.on_after_configure.connect
def setup_periodic_tasks(sender: Celery, **kwargs: Any) -> None:
    """Set up periodic tasks."""
    sender.add_periodic_task(
        crontab(minute="*/5"),
        send_sms_reminders_task.s(),
        name="send-sms-reminders",
    )
