"""Client for the OpenFDA drug label API."""

import logging
from typing import Any

import requests

from pillr.medications.config import DEFAULT_OPENFDA_BASE_URL
from pillr.medications.exceptions import (
    MedicationNotFoundError,
    OpenFDAClientError,
    OpenFDARateLimitError,
)
from pillr.medications.models import MedicationInfo, MedicationSearchResult

logger = logging.getLogger(__name__)

DEFAULT_SEARCH_LIMIT = 5
UNKNOWN_MEDICATION_NAME = "Unknown Medication"

HTTP_NOT_FOUND = 404
HTTP_TOO_MANY_REQUESTS = 429


class OpenFDAClient:
    """Look up medications by name against OpenFDA drug labels."""

    def __init__(
        self,
        base_url: str = DEFAULT_OPENFDA_BASE_URL,
        timeout: int = 10,
    ) -> None:
        """Initialise the OpenFDA client.

        :param base_url: Drug label endpoint URL.
        :param timeout: HTTP timeout in seconds.
        """
        self._base_url = base_url
        self._timeout = timeout

    def search_by_prefix(
        self,
        term: str,
        limit: int = DEFAULT_SEARCH_LIMIT,
    ) -> list[MedicationSearchResult]:
        """Suggest medications whose name starts with a term.

        Only labels whose brand or generic name has a first word starting with
        the term are kept, de-duplicated case-insensitively.

        :param term: The prefix typed so far.
        :param limit: Maximum number of suggestions.
        :returns: Matching suggestions; empty when nothing matches.
        :raises OpenFDARateLimitError: If OpenFDA rate-limits the request.
        :raises OpenFDAClientError: If the request fails.
        """
        term = term.strip().lower()
        if not term:
            return []

        query = f"openfda.brand_name:{term}* OR openfda.generic_name:{term}*"
        labels = self._search(query, limit, not_found_ok=True)

        results: list[MedicationSearchResult] = []
        seen_names: set[str] = set()

        for label in labels:
            brand_name, generic_name = _label_names(label)
            brand_first_word = _first_word(brand_name)
            generic_first_word = _first_word(generic_name)
            if not (brand_first_word.startswith(term) or generic_first_word.startswith(term)):
                continue

            name = brand_name or generic_name
            if not name or name.lower() in seen_names:
                continue

            seen_names.add(name.lower())
            results.append(
                MedicationSearchResult(name=name, brand_name=brand_name, generic_name=generic_name)
            )
            if len(results) >= limit:
                break

        logger.debug(f"OpenFDA prefix search: term={term!r}, results={len(results)}")
        return results

    def lookup(self, name: str) -> MedicationInfo:
        """Get drug-label details for a medication by exact name.

        :param name: Brand or generic name.
        :returns: The processed label of the first match.
        :raises MedicationNotFoundError: If no label matches.
        :raises OpenFDARateLimitError: If OpenFDA rate-limits the request.
        :raises OpenFDAClientError: If the request fails.
        """
        cleaned = name.strip()
        if not cleaned:
            raise MedicationNotFoundError(name)

        lowered = cleaned.lower()
        query = f'openfda.brand_name:"{lowered}" OR openfda.generic_name:"{lowered}"'
        labels = self._search(query, 1, not_found_ok=True)
        if not labels:
            raise MedicationNotFoundError(cleaned)

        return _process_label(labels[0])

    def _search(self, query: str, limit: int, *, not_found_ok: bool) -> list[dict[str, Any]]:
        """Run a label search.

        :param query: Lucene search expression.
        :param limit: Maximum number of labels.
        :param not_found_ok: Treat HTTP 404 (OpenFDA's "no matches") as empty.
        :returns: Raw label dicts.
        :raises OpenFDAClientError: If the request fails.
        """
        try:
            response = requests.get(
                self._base_url,
                params={"search": query, "limit": limit},
                timeout=self._timeout,
            )
        except requests.exceptions.Timeout as e:
            raise OpenFDAClientError(f"OpenFDA request timed out after {self._timeout}s") from e
        except requests.exceptions.RequestException as e:
            raise OpenFDAClientError(f"OpenFDA request failed: {e}") from e

        if response.status_code == HTTP_TOO_MANY_REQUESTS:
            logger.warning("OpenFDA rate limit exceeded")
            raise OpenFDARateLimitError(
                "API rate limit exceeded. Please try again in a moment.",
                status_code=HTTP_TOO_MANY_REQUESTS,
            )

        if response.status_code == HTTP_NOT_FOUND and not_found_ok:
            return []

        if not response.ok:
            logger.warning(f"OpenFDA request failed: status={response.status_code}")
            raise OpenFDAClientError(
                f"Failed to fetch medication data: {response.reason}",
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise OpenFDAClientError(f"OpenFDA returned invalid JSON: {e}") from e

        return list(data.get("results") or [])


def _label_names(label: dict[str, Any]) -> tuple[str | None, str | None]:
    openfda = label.get("openfda") or {}
    brand_names = openfda.get("brand_name") or []
    generic_names = openfda.get("generic_name") or []
    return (
        brand_names[0] if brand_names else None,
        generic_names[0] if generic_names else None,
    )


def _first_word(name: str | None) -> str:
    if not name:
        return ""
    words = name.lower().split()
    return words[0] if words else ""


def _as_list(value: Any) -> list[str]:
    """Normalise a label section that may be a string or a list of strings."""
    if isinstance(value, list):
        return [str(item) for item in value]
    if isinstance(value, str):
        return [value]
    return []


def _process_label(label: dict[str, Any]) -> MedicationInfo:
    """Convert a raw drug label into MedicationInfo.

    :param label: Raw label from the API.
    :returns: The processed medication details.
    """
    brand_name, generic_name = _label_names(label)
    warnings = _as_list(label.get("warnings_and_precautions"))
    side_effects = _as_list(label.get("adverse_reactions")) or list(warnings)

    return MedicationInfo(
        name=brand_name or generic_name or UNKNOWN_MEDICATION_NAME,
        brand_name=brand_name,
        generic_name=generic_name,
        dosages=_as_list(label.get("dosage_and_administration")),
        side_effects=side_effects,
        warnings=warnings,
        drug_interactions=_as_list(label.get("drug_interactions")),
    )
