"""
Frontend — 設定編輯 reducer（純函式）。
每個 setter 只改動自己的欄位並回傳新的 Settings；不同欄位的 setter 可任意順序套用。
數值輸入解析失敗時套用固定後備值（rotation_interval → 360，max_tokens → 0）。
"""

import math
import re
from enum import StrEnum

from frontend.config import (
    MAX_TOKENS_FALLBACK,
    ROTATION_INTERVAL_FALLBACK,
    TEMPERATURE_LABEL,
)
from frontend.models import Settings

_LEADING_INT = re.compile(r"^\s*([+-]?[0-9]+)")


class SettingsField(StrEnum):
    """Editable fields, keyed by their wire names."""

    SELECTED_PERSONA_ID = "selectedPersonaId"
    ROTATION_INTERVAL = "rotationInterval"
    MODEL_NAME = "modelName"
    TEMPERATURE = "temperature"
    MAX_TOKENS = "maxTokens"


def parse_int(raw: object) -> int | None:
    """Parse the leading integer of a raw input value.

    ``"42"`` -> 42, ``"12abc"`` -> 12, ``"3.7"`` -> 3, ``"abc"`` / ``""`` -> None.
    """
    if isinstance(raw, bool) or raw is None:
        return None
    if isinstance(raw, int):
        return raw
    if isinstance(raw, float):
        return int(raw) if math.isfinite(raw) else None
    match = _LEADING_INT.match(str(raw))
    return int(match.group(1)) if match else None


def set_active_persona(settings: Settings, persona_id: str | None) -> Settings:
    # The selector only offers loaded personas, so membership is not checked.
    return settings.model_copy(update={"selected_persona_id": persona_id})


def set_rotation_interval(settings: Settings, raw: object) -> Settings:
    """Unparseable input (and 0) falls back to the default interval."""
    minutes = parse_int(raw) or ROTATION_INTERVAL_FALLBACK
    return settings.model_copy(update={"rotation_interval": minutes})


def set_model_name(settings: Settings, model_id: str) -> Settings:
    return settings.model_copy(update={"model_name": model_id})


def set_temperature(settings: Settings, value: float) -> Settings:
    # Bounded by the slider (0..2, step 0.1); not re-clamped here.
    return settings.model_copy(update={"temperature": value})


def set_max_tokens(settings: Settings, raw: object) -> Settings:
    """Unparseable input falls back to 0, even though the declared minimum is 1."""
    tokens = parse_int(raw) or MAX_TOKENS_FALLBACK
    return settings.model_copy(update={"max_tokens": tokens})


_SETTERS = {
    SettingsField.SELECTED_PERSONA_ID: set_active_persona,
    SettingsField.ROTATION_INTERVAL: set_rotation_interval,
    SettingsField.MODEL_NAME: set_model_name,
    SettingsField.TEMPERATURE: set_temperature,
    SettingsField.MAX_TOKENS: set_max_tokens,
}


def apply_edit(settings: Settings, field: SettingsField | str, raw: object) -> Settings:
    """Dispatch one field edit by name. Raises ValueError for unknown fields."""
    return _SETTERS[SettingsField(field)](settings, raw)


def format_number(value: float) -> str:
    """Render like the UI label does: ``1.0`` -> ``"1"``, ``1.3`` -> ``"1.3"``."""
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def temperature_label(value: float) -> str:
    return TEMPERATURE_LABEL.format(value=format_number(value))
