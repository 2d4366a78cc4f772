"""Core app configuration and logging."""

from intake.core.config import get_settings, settings
from intake.core.logging import configure_logging

__all__ = ["configure_logging", "get_settings", "settings"]
