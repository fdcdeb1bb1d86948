"""
Persona Console — 設定客戶端。
讀取人格與設定單例、維護可編輯副本、整筆儲存。
"""

from frontend.api import LoadError, SaveError, SettingsApi  # noqa: F401
from frontend.controller import (  # noqa: F401
    Notification,
    SaveOutcome,
    SettingsController,
)
from frontend.models import DEFAULT_SETTINGS, Persona, Settings  # noqa: F401
from frontend.reducer import SettingsField  # noqa: F401
from frontend.store import SettingsStore  # noqa: F401
