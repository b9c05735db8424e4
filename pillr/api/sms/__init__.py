"""SMS reminder and preference endpoints."""

from pillr.api.sms.endpoints import router

__all__ = ["router"]
