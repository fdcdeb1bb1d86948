"""
Frontend — 設定表單狀態機 (SettingsStore)。

單一擁有者持有所有可變狀態：人格清單、可編輯設定副本、讀取 / 儲存旗標。
背景執行緒的完成事件皆在鎖內套用，因此行為等同單執行緒的事件迴圈。

狀態規則：
- 兩個讀取（personas、settings）共用同一個粗粒度 is_loading 旗標。
- settings 讀取完成時一律整筆覆寫可編輯副本（讀取完成優先於未儲存的編輯）。
- 讀取失敗時該資源維持 loading，直到重新 begin_load()。
- 每次 begin_load() 產生新的讀取世代；舊世代的完成事件直接丟棄。
- 儲存進行中時 begin_save() 一律拒絕，不排隊。
- dispose() 之後所有完成事件直接丟棄，不寫入任何狀態。
"""

import logging
import threading

from frontend.api import LoadError
from frontend.config import (
    AVAILABLE_MODELS,
    MODEL_PLACEHOLDER,
    PERSONA_PLACEHOLDER,
    SAVE_BUTTON_BUSY_LABEL,
    SAVE_BUTTON_LABEL,
    TEMPERATURE_MAX,
    TEMPERATURE_MIN,
    TEMPERATURE_STEP,
)
from frontend.models import DEFAULT_SETTINGS, Persona, Settings
from frontend.reducer import SettingsField, apply_edit, temperature_label

logger = logging.getLogger(__name__)


class SettingsStore:
    def __init__(self, initial: Settings = DEFAULT_SETTINGS):
        self._lock = threading.RLock()
        self._settings = initial
        self._personas: list[Persona] = []
        self._personas_loading = False
        self._settings_loading = False
        self._saving = False
        self._disposed = False
        self._load_error: LoadError | None = None
        self._load_generation = 0

    # ------------------------------------------------------------------
    # Read-only view
    # ------------------------------------------------------------------

    @property
    def settings(self) -> Settings:
        """The editable copy; always a complete record."""
        with self._lock:
            return self._settings

    @property
    def personas(self) -> list[Persona]:
        with self._lock:
            return list(self._personas)

    @property
    def personas_by_id(self) -> dict[str, Persona]:
        with self._lock:
            return {p.id: p for p in self._personas}

    @property
    def personas_loading(self) -> bool:
        return self._personas_loading

    @property
    def settings_loading(self) -> bool:
        return self._settings_loading

    @property
    def is_loading(self) -> bool:
        with self._lock:
            return self._personas_loading or self._settings_loading

    @property
    def is_saving(self) -> bool:
        return self._saving

    @property
    def disposed(self) -> bool:
        return self._disposed

    @property
    def load_error(self) -> LoadError | None:
        return self._load_error

    @property
    def can_edit(self) -> bool:
        with self._lock:
            return not (self._disposed or self.is_loading)

    @property
    def can_save(self) -> bool:
        with self._lock:
            return not (self._disposed or self.is_loading or self._saving)

    # View-model helpers consumed by whatever renders the form

    @property
    def selected_persona_value(self) -> str:
        """Selector value; "" means nothing selected."""
        return self.settings.selected_persona_id or ""

    @property
    def persona_options(self) -> list[tuple[str, str]]:
        return [(p.id, p.name) for p in self.personas]

    @property
    def model_options(self) -> list[tuple[str, str]]:
        return list(AVAILABLE_MODELS.items())

    @property
    def persona_display(self) -> str:
        """Name of the selected persona, or the placeholder while none is known."""
        persona = self.personas_by_id.get(self.selected_persona_value)
        return persona.name if persona else PERSONA_PLACEHOLDER

    @property
    def model_display(self) -> str:
        return AVAILABLE_MODELS.get(self.settings.model_name, MODEL_PLACEHOLDER)

    @property
    def temperature_label(self) -> str:
        return temperature_label(self.settings.temperature)

    @property
    def temperature_bounds(self) -> tuple[float, float, float]:
        """(min, max, step) for the temperature slider."""
        return TEMPERATURE_MIN, TEMPERATURE_MAX, TEMPERATURE_STEP

    @property
    def save_button_label(self) -> str:
        return SAVE_BUTTON_BUSY_LABEL if self._saving else SAVE_BUTTON_LABEL

    # ------------------------------------------------------------------
    # Load lifecycle
    # ------------------------------------------------------------------

    
    def load_generation(self) -> int:
        return self._load_generation

    def begin_load(self) -> int | None:
        """Mark both resources outstanding and return the new load generation.

        None once disposed. Completions tagged with an older generation are
        dropped, so only the latest load can clear the loading flags.
        """
        with self._lock:
            if self._disposed:
                return None
            self._load_generation += 1
            self._personas_loading = True
            self._settings_loading = True
            self._load_error = None
            return self._load_generation

    def _accepts(self, generation: int | None) -> bool:
        if self._disposed:
            return False
        if generation is not None and generation != self._load_generation:
            logger.debug(
                "Dropping completion from load %d (current %d).",
                generation,
                self._load_generation,
            )
            return False
        return True

    def personas_loaded(
        self, personas: list[Persona], generation: int | None = None
    ) -> bool:
        with self._lock:
            if not self._accepts(generation):
                return False
            self._personas = list(personas)
            self._personas_loading = False
            return True

    def settings_loaded(self, settings: Settings, generation: int | None = None) -> bool:
        """Replace the editable copy wholesale, discarding unsaved edits."""
        with self._lock:
            if not self._accepts(generation):
                return False
            if settings != self._settings:
                logger.debug("Settings loaded; replacing editable copy.")
            self._settings = settings
            self._settings_loading = False
            return True

    def load_failed(self, error: LoadError, generation: int | None = None) -> bool:
        """Record the failure. The resource stays loading until the next begin_load()."""
        with self._lock:
            if not self._accepts(generation):
                return False
            self._load_error = error
            return True

    # ------------------------------------------------------------------
    # Edits
    # ------------------------------------------------------------------

    def edit(self, field: SettingsField | str, raw: object) -> bool:
        """Apply one field edit. Ignored while loading or after dispose()."""
        with self._lock:
            if not self.can_edit:
                return False
            self._settings = apply_edit(self._settings, field, raw)
            return True

    # ------------------------------------------------------------------
    # Save lifecycle
    # ------------------------------------------------------------------

    def begin_save(self) -> Settings | None:
        """Claim the single save slot and return the record to submit, or None if rejected."""
        with self._lock:
            if not self.can_save:
                return None
            self._saving = True
            return self._settings

    def finish_save(self) -> bool:
        """Release the save slot. The editable copy is never touched here."""
        with self._lock:
            if self._disposed:
                return False
            self._saving = False
            return True

    def dispose(self) -> None:
        with self._lock:
            self._disposed = True
