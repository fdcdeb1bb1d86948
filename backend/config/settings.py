"""
Config — 從環境變數覆寫 domain 常數。
在應用程式啟動時呼叫一次 init_settings()。
"""

import os

from domain import constants
from logging_config import get_logger

logger = get_logger(__name__)

_TRUTHY = {"1", "true", "yes", "on"}


def _parse_extra_models(raw: str) -> dict[str, str]:
    """Parse ``EXTRA_MODELS`` — comma separated ``id`` or ``id=Display Name`` entries."""
    models: dict[str, str] = {}
    for entry in raw.split(","):
        entry = entry.strip()
        if not entry:
            continue
        model_id, _, name = entry.partition("=")
        model_id = model_id.strip()
        models[model_id] = name.strip() or model_id
    return models


def init_settings() -> None:
    """Override domain constants from environment. Call once at startup."""
    tick = os.getenv("ROTATION_TICK_SECONDS")
    if tick:
        try:
            constants.ROTATION_TICK_SECONDS = max(int(tick), 1)
        except ValueError:
            logger.warning("ROTATION_TICK_SECONDS 無效（%s），沿用預設值。", tick)

    enabled = os.getenv("ROTATION_ENABLED")
    if enabled is not None:
        constants.ROTATION_ENABLED = enabled.strip().lower() in _TRUTHY

    extra = os.getenv("EXTRA_MODELS")
    if extra:
        constants.AVAILABLE_MODELS = {
            **constants.AVAILABLE_MODELS,
            **_parse_extra_models(extra),
        }
        logger.info("模型清單已擴充：%s", ", ".join(constants.AVAILABLE_MODELS))

    rate_limit = os.getenv("SETTINGS_SAVE_RATE_LIMIT")
    if rate_limit:
        constants.SETTINGS_SAVE_RATE_LIMIT = rate_limit
