"""Pydantic models for medication endpoints."""

from pydantic import BaseModel, Field

from pillr.medications.models import MedicationSearchResult


class MedicationSearchResponse(BaseModel):
    """Response model for medication autocomplete."""

    results: list[MedicationSearchResult] = Field(..., description="Matching medications")
