"""
Rate limiter instance — shared by main.py and route decorators to avoid circular imports.
"""

import os

from slowapi import Limiter
from slowapi.util import get_remote_address

from domain import constants

limiter = Limiter(
    key_func=get_remote_address,
    enabled=os.getenv("RATE_LIMIT_ENABLED", "true").lower() != "false",
)


def settings_save_limit() -> str:
    """Resolved per request so init_settings() overrides apply."""
    return constants.SETTINGS_SAVE_RATE_LIMIT
