"""Shared dependencies for API endpoints."""

import logging
import os
import secrets

from fastapi import Header, HTTPException, Request, Security, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from pillr.reminders.config import get_reminder_settings
from pillr.sms import SMSProvider, get_sms_provider

logger = logging.getLogger(__name__)

security = HTTPBearer()


def _tokens_match(provided: str, expected: str) -> bool:
    """Compare two secrets in constant time."""
    return secrets.compare_digest(provided.encode(), expected.encode())


def get_api_token() -> str:
    """Retrieve the API authentication token from environment.

    :returns: The configured API token.
    :raises ValueError: If API_AUTH_TOKEN is not set.
    """
    token = os.environ.get("API_AUTH_TOKEN")
    if not token:
        raise ValueError(
            "API authentication token not configured. Set API_AUTH_TOKEN environment variable."
        )
    return token


def verify_token(
    credentials: HTTPAuthorizationCredentials = Security(security),
) -> str:
    """Verify the Bearer token from request headers.

    :param credentials: The HTTP Authorisation credentials.
    :returns: The validated token.
    :raises HTTPException: If token is invalid or missing.
    """
    try:
        expected_token = get_api_token()
    except ValueError as e:
        logger.error(f"API token configuration error: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="API authentication not configured",
        ) from e

    if not _tokens_match(credentials.credentials, expected_token):
        logger.warning("Invalid API token provided")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authentication token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return credentials.credentials


def verify_cron_secret(
    authorization: str | None = Header(default=None),
    x_cron_secret: str | None = Header(default=None),
) -> None:
    """Verify the shared secret sent by the cron service.

    Accepts ``Authorization: Bearer <secret>`` or ``x-cron-secret: <secret>``.
    When CRON_SECRET is not configured the endpoint is open.

    :param authorization: The Authorization header.
    :param x_cron_secret: The x-cron-secret header.
    :raises HTTPException: If a secret is configured and neither header matches.
    """
    expected = get_reminder_settings().cron_secret
    if not expected:
        return

    candidates = []
    if authorization and authorization.startswith("Bearer "):
        candidates.append(authorization.removeprefix("Bearer "))
    if x_cron_secret:
        candidates.append(x_cron_secret)

    if any(_tokens_match(candidate, expected) for candidate in candidates):
        return

    logger.warning("Reminder trigger called without a valid cron secret")
    raise HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Unauthorized",
    )


def get_request_sms_provider(request: Request) -> SMSProvider:
    """Get the SMS provider built at startup.

    Falls back to building one when the app was started without its lifespan.

    :param request: The incoming request.
    :returns: The SMS provider.
    """
    provider = getattr(request.app.state, "sms_provider", None)
    if provider is None:
        provider = get_sms_provider()
        request.app.state.sms_provider = provider
    return provider
