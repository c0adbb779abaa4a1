"""API services module."""

from api.services.health_service import HealthService

__all__ = ["HealthService"]
