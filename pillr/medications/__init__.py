"""Medication lookups against the OpenFDA drug label API."""

from pillr.medications.client import OpenFDAClient
from pillr.medications.config import OpenFDASettings, get_openfda_settings
from pillr.medications.exceptions import (
    MedicationNotFoundError,
    OpenFDAClientError,
    OpenFDARateLimitError,
)
from pillr.medications.models import MedicationInfo, MedicationSearchResult

__all__ = [
    "MedicationInfo",
    "MedicationNotFoundError",
    "MedicationSearchResult",
    "OpenFDAClient",
    "OpenFDAClientError",
    "OpenFDARateLimitError",
    "OpenFDASettings",
    "get_openfda_settings",
]
