"""Health check service for component status monitoring.

Provides methods to check the health of the user store.
"""

import logging
from datetime import datetime, timezone

from sqlalchemy.engine import Engine
from sqlmodel import Session, text

logger = logging.getLogger(__name__)


class HealthService:
    """Service for checking system component health."""

    def __init__(self, engine: Engine):
        self.engine = engine

    def check_database(self) -> bool:
        """Check database connectivity.

        Returns:
            True if database is accessible, False otherwise.
        """
        try:
            with Session(self.engine) as session:
                # Simple query to verify connectivity
                result = session.exec(text("SELECT 1"))
                result.fetchone()
                return True

        except Exception as e:
            logger.error(f"Database health check failed: {e}")
            return False

    @staticmethod
    def timestamp() -> str:
        """Current UTC time in ISO-8601 with a Z suffix."""
        now = datetime.now(timezone.utc)
        return now.strftime("%Y-%m-%dT%H:%M:%S.") + f"{now.microsecond // 1000:03d}Z"
