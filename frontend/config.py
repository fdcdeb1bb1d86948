"""
Frontend — 集中管理設定客戶端的常數與設定。
避免散落在各模組中的 magic numbers / magic strings。
"""

import os

# ---------------------------------------------------------------------------
# Backend Connection
# ---------------------------------------------------------------------------
BACKEND_URL = os.getenv("BACKEND_URL", "http://backend:8000")

PERSONAS_PATH = "/api/personas"
SETTINGS_PATH = "/api/settings"

# ---------------------------------------------------------------------------
# API Timeouts (seconds)
# ---------------------------------------------------------------------------
API_GET_TIMEOUT = 30
API_POST_TIMEOUT = 60

# ---------------------------------------------------------------------------
# Settings Defaults (used before any record loads)
# ---------------------------------------------------------------------------
DEFAULT_SETTINGS_ID = "1"
DEFAULT_TEMPERATURE = 0.7
DEFAULT_MAX_TOKENS = 1000
DEFAULT_ROTATION_INTERVAL = 360
DEFAULT_MODEL_NAME = "gpt-4-0125-preview"

# Fallbacks applied when numeric inputs cannot be parsed
ROTATION_INTERVAL_FALLBACK = 360
MAX_TOKENS_FALLBACK = 0  # below MAX_TOKENS_MIN on purpose; the backend rejects it

# ---------------------------------------------------------------------------
# Input Bounds (enforced by the input surface, not re-clamped by the reducer)
# ---------------------------------------------------------------------------
TEMPERATURE_MIN = 0.0
TEMPERATURE_MAX = 2.0
TEMPERATURE_STEP = 0.1
MAX_TOKENS_MIN = 1
MAX_TOKENS_MAX = 4000
ROTATION_INTERVAL_MIN = 1

# ---------------------------------------------------------------------------
# Model Catalog (id -> display name), aligned with backend AVAILABLE_MODELS
# ---------------------------------------------------------------------------
AVAILABLE_MODELS = {
    "gpt-4-0125-preview": "GPT-4 Turbo",
    "gpt-4": "GPT-4",
    "gpt-3.5-turbo": "GPT-3.5 Turbo",
    "gpt-4o": "GPT-4o",
    "gpt-4o-mini": "GPT-4o Mini",
}

# ---------------------------------------------------------------------------
# Labels & Notifications
# ---------------------------------------------------------------------------
TEMPERATURE_LABEL = "Temperature ({value})"
SAVE_BUTTON_LABEL = "Save Changes"
SAVE_BUTTON_BUSY_LABEL = "Saving..."
PERSONA_PLACEHOLDER = "Select a persona"
MODEL_PLACEHOLDER = "Select a model"

SAVE_SUCCESS_TITLE = "Settings saved"
SAVE_SUCCESS_DESCRIPTION = "Your settings have been updated successfully."
SAVE_ERROR_TITLE = "Error saving settings"
SAVE_ERROR_DESCRIPTION = "There was a problem saving your settings. Please try again."

# ---------------------------------------------------------------------------
# Worker Pool
# ---------------------------------------------------------------------------
CLIENT_THREAD_POOL_SIZE = 3  # personas fetch + settings fetch + one save
