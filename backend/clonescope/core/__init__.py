from clonescope.core.config import Settings, get_settings, settings
from clonescope.core.logging import InsightsLogger, get_logger

__all__ = [
    "Settings",
    "get_settings",
    "settings",
    "get_logger",
    "InsightsLogger",
]
