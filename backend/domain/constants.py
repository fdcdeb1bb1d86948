"""
Domain — 集中管理所有常數與閾值。
避免散落在各模組中的 magic numbers / magic strings。
"""

import os as _os

# ---------------------------------------------------------------------------
# Settings Singleton
# ---------------------------------------------------------------------------
DEFAULT_SETTINGS_ID = "1"
DEFAULT_TEMPERATURE = 0.7
DEFAULT_MAX_TOKENS = 1000
DEFAULT_ROTATION_INTERVAL = 360  # minutes
DEFAULT_MODEL_NAME = "gpt-4-0125-preview"

# ---------------------------------------------------------------------------
# Validation Bounds
# ---------------------------------------------------------------------------
TEMPERATURE_MIN = 0.0
TEMPERATURE_MAX = 2.0
MAX_TOKENS_MIN = 1
MAX_TOKENS_MAX = 4000
ROTATION_INTERVAL_MIN = 1

# ---------------------------------------------------------------------------
# Model Catalog (id -> display name); extended at startup via EXTRA_MODELS
# ---------------------------------------------------------------------------
AVAILABLE_MODELS: dict[str, str] = {
    "gpt-4-0125-preview": "GPT-4 Turbo",
    "gpt-4": "GPT-4",
    "gpt-3.5-turbo": "GPT-3.5 Turbo",
    "gpt-4o": "GPT-4o",
    "gpt-4o-mini": "GPT-4o Mini",
}

# ---------------------------------------------------------------------------
# Persona Rotation
# ---------------------------------------------------------------------------
ROTATION_ENABLED = True
ROTATION_TICK_SECONDS = 60  # 背景排程檢查頻率
ROTATION_THREAD_NAME = "persona-rotation"

# ---------------------------------------------------------------------------
# Rate Limits (slowapi syntax)
# ---------------------------------------------------------------------------
SETTINGS_SAVE_RATE_LIMIT = "30/minute"

# ---------------------------------------------------------------------------
# Persistent Data Directory — root for all app-written state files
# ---------------------------------------------------------------------------
DATA_DIR = _os.getenv("DATA_DIR", "/app/data")
SYSTEM_PERSONAS_FILE = "system_personas.json"
DATABASE_FILENAME = "persona_console.db"

# ---------------------------------------------------------------------------
# Error Codes (machine-readable, returned as error_code)
# ---------------------------------------------------------------------------
ERROR_SETTINGS_INVALID = "SETTINGS_INVALID"
ERROR_PERSONA_NOT_FOUND = "PERSONA_NOT_FOUND"
ERROR_MODEL_NOT_SUPPORTED = "MODEL_NOT_SUPPORTED"
ERROR_SETTINGS_SAVE_FAILED = "SETTINGS_SAVE_FAILED"

# Generic user-facing messages (never leak internals)
GENERIC_SETTINGS_SAVE_ERROR = "Failed to save settings. Please try again."
GENERIC_VALIDATION_ERROR = "Invalid settings payload."
