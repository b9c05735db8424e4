"""Celery application for the reminder worker and beat scheduler."""

import os

from celery import Celery
from dotenv import load_dotenv

from pillr.observability.sentry import init_sentry
from pillr.utils.logging import configure_logging

REMINDER_QUEUE = "pillr-reminders"
# Sweep results are only useful until the next tick
SWEEP_RESULT_TTL_SECONDS = 3600


def create_celery_app(redis_url: str) -> Celery:
    """Create the Celery app that runs reminder sweeps.

    :param redis_url: Redis URL used as broker and result backend.
    :returns: The configured Celery app.
    """
    app = Celery(
        "pillr",
        broker=redis_url,
        backend=redis_url,
        include=["pillr.orchestration.tasks"],
    )
    app.conf.update(
        task_serializer="json",
        accept_content=["json"],
        result_serializer="json",
        # Dose times are stored in UTC, so beat ticks are too
        timezone="UTC",
        enable_utc=True,
        task_default_queue=REMINDER_QUEUE,
        task_default_routing_key=REMINDER_QUEUE,
        # A sweep that dies mid-run is not redelivered; the next beat tick covers it
        task_acks_late=False,
        result_expires=SWEEP_RESULT_TTL_SECONDS,
        # One sweep at a time per worker
        worker_concurrency=1,
        worker_prefetch_multiplier=1,
        broker_connection_retry_on_startup=True,
        worker_hijack_root_logger=False,
        worker_redirect_stdouts=False,
    )
    return app


load_dotenv()
configure_logging()
init_sentry()

celery_app = create_celery_app(os.environ["REDIS_URL"])
