"""Pydantic models for OpenFDA drug-label data."""

from pydantic import BaseModel, Field


class MedicationSearchResult(BaseModel):
    """A medication suggestion for autocomplete."""

    name: str = Field(..., description="Brand name, else generic name")
    brand_name: str | None = Field(None, description="First brand name on the label")
    generic_name: str | None = Field(None, description="First generic name on the label")


class MedicationInfo(BaseModel):
    """Drug-label details for one medication."""

    name: str = Field(..., description="Brand name, else generic name")
    brand_name: str | None = Field(None, description="First brand name on the label")
    generic_name: str | None = Field(None, description="First generic name on the label")
    dosages: list[str] = Field(default_factory=list, description="Dosage and administration")
    side_effects: list[str] = Field(
        default_factory=list,
        description="Adverse reactions, or warnings when the label lists none",
    )
    warnings: list[str] = Field(default_factory=list, description="Warnings and precautions")
    drug_interactions: list[str] = Field(default_factory=list, description="Drug interactions")
