"""API endpoints for OpenFDA medication lookups."""

import logging
import time

from fastapi import APIRouter, Depends, HTTPException, Query, status

from pillr.api.medications.models import MedicationSearchResponse
from pillr.medications import (
    MedicationInfo,
    MedicationNotFoundError,
    OpenFDAClient,
    OpenFDAClientError,
    OpenFDARateLimitError,
    get_openfda_settings,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/medications", tags=["Medications"])


def get_openfda_client() -> OpenFDAClient:
    """Build an OpenFDA client from settings.

    :returns: Configured OpenFDAClient.
    """
    settings = get_openfda_settings()
    return OpenFDAClient(base_url=settings.base_url, timeout=settings.timeout)


def _to_http_error(error: OpenFDAClientError) -> HTTPException:
    """Map an OpenFDA error to an HTTP error.

    :param error: The client error.
    :returns: HTTPException with 404, 429 or 502.
    """
    if isinstance(error, MedicationNotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(error))
    if isinstance(error, OpenFDARateLimitError):
        return HTTPException(status_code=status.HTTP_429_TOO_MANY_REQUESTS, detail=str(error))
    return HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(error))


@router.get(
    "/search",
    response_model=MedicationSearchResponse,
    summary="Autocomplete medication names",
)
def search_medications(
    q: str = Query(..., max_length=100, description="Name prefix"),
    limit: int = Query(5, ge=1, le=20, description="Maximum number of results"),
    client: OpenFDAClient = Depends(get_openfda_client),
) -> MedicationSearchResponse:
    """Suggest medications whose brand or generic name starts with a prefix."""
    start = time.perf_counter()
    try:
        results = client.search_by_prefix(q, limit=limit)
    except OpenFDAClientError as e:
        logger.warning(f"Medication search failed: q={q!r}, error={e}")
        raise _to_http_error(e) from e

    elapsed_ms = (time.perf_counter() - start) * 1000
    logger.info(f"Medication search: q={q!r}, found={len(results)}, elapsed={elapsed_ms:.0f}ms")
    return MedicationSearchResponse(results=results)


@router.get(
    "/lookup",
    response_model=MedicationInfo,
    summary="Look up medication details",
)
def lookup_medication(
    name: str = Query(..., min_length=1, max_length=200, description="Brand or generic name"),
    client: OpenFDAClient = Depends(get_openfda_client),
) -> MedicationInfo:
    """Get drug-label details for a medication."""
    try:
        info = client.lookup(name)
    except OpenFDAClientError as e:
        logger.warning(f"Medication lookup failed: name={name!r}, error={e}")
        raise _to_http_error(e) from e

    logger.info(f"Medication lookup: name={name!r}, matched={info.name!r}")
    return info
