"""Custom exceptions for the reminder module."""


class ReminderError(Exception):
    """Base exception for reminder errors."""


class DoseTimeParseError(ReminderError, ValueError):
    """Raised when a dose time string is not a valid ``HH:mm`` or ``HH:mm:ss`` value."""

    def __init__(self, value: str) -> None:
        """Initialise DoseTimeParseError.

        :param value: The string that failed to parse.
        """
        self.value = value
        super().__init__(f"Invalid dose time: {value!r}")


class ReminderSweepError(ReminderError):
    """Raised when a sweep cannot load its candidate doses."""
