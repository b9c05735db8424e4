"""Phone number normalisation."""

import re

# Characters people type between digits
_SEPARATORS = re.compile(r"[\s\-().]")
_E164 = re.compile(r"^\+[1-9]\d{7,14}$")


def normalise_phone_number(raw: str) -> str:
    """Normalise a phone number to E.164.

    Strips spaces, dashes, parentheses and dots, and adds a leading ``+``
    when missing. No country code is assumed.

    :param raw: The number as entered.
    :returns: The number in E.164 format, e.g. ``+15551234567``.
    :raises ValueError: If the result is not a plausible E.164 number.
    """
    cleaned = _SEPARATORS.sub("", raw.strip())
    if cleaned and not cleaned.startswith("+"):
        cleaned = f"+{cleaned}"

    if not _E164.match(cleaned):
        raise ValueError(f"Invalid phone number: {raw!r}")
    return cleaned
