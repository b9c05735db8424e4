"""Health check endpoints."""

from pillr.api.health.endpoints import router

__all__ = ["router"]
