"""Request-scoped access to the process-wide record storage."""

import logging

from fastapi import Request

from intake.core.config import Settings
from intake.storage.base import StoreError
from intake.storage.factory import Storage

logger = logging.getLogger(__name__)


def get_storage(request: Request) -> Storage:
    """Dependency that returns the Storage built once by create_app()."""
    return request.app.state.storage


async def check_storage_available(storage: Storage) -> bool:
    """Ping the config collection: a remote read, or a data-dir writability check for files."""
    try:
        await storage.config.ping()
        return True
    except (StoreError, OSError) as e:
        logger.warning("Storage health check failed", extra={"error": str(e)})
        return False


def get_app_settings(request: Request) -> Settings:
    """Dependency that returns the Settings the app was created with."""
    return request.app.state.settings
