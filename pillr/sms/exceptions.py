"""Custom exceptions for the SMS module."""


class SMSError(Exception):
    """Base exception for SMS errors."""


class SMSConfigurationError(SMSError):
    """Raised when an SMS provider is selected but its credentials are missing."""
