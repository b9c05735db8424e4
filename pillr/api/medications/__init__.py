"""Medication lookup endpoints."""

from pillr.api.medications.endpoints import router

__all__ = ["router"]
