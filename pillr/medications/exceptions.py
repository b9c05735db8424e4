"""Custom exceptions for the OpenFDA medication client."""


class OpenFDAClientError(Exception):
    """Raised when an OpenFDA request fails."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        """Initialise OpenFDAClientError.

        :param message: Error message.
        :param status_code: HTTP status code, if the API responded.
        """
        self.status_code = status_code
        super().__init__(message)


class OpenFDARateLimitError(OpenFDAClientError):
    """Raised when OpenFDA rejects a request for exceeding its rate limit."""


class MedicationNotFoundError(OpenFDAClientError):
    """Raised when no drug label matches a medication name."""

    def __init__(self, name: str) -> None:
        """Initialise MedicationNotFoundError.

        :param name: The medication name that was looked up.
        """
        self.name = name
        super().__init__(
            f'No medication found with the name "{name}". '
            "Please check the spelling and try again.",
            status_code=404,
        )
