"""Tests for frontend.store.SettingsStore — load / edit / save lifecycle rules."""

from frontend.api import LoadError
from frontend.config import (
    MODEL_PLACEHOLDER,
    PERSONA_PLACEHOLDER,
    SAVE_BUTTON_BUSY_LABEL,
    SAVE_BUTTON_LABEL,
)
from frontend.models import DEFAULT_SETTINGS, Persona, Settings
from frontend.store import SettingsStore

_PERSONAS = [Persona(id="p1", name="A"), Persona(id="p2", name="B")]
_LOADED = Settings(
    id="1",
    temperature=0.3,
    max_tokens=500,
    rotation_interval=15,
    selected_persona_id="p2",
    model_name="gpt-4",
)


def _ready_store() -> SettingsStore:
    store = SettingsStore()
    store.begin_load()
    store.personas_loaded(_PERSONAS)
    store.settings_loaded(_LOADED)
    return store


class TestInitialState:
    def test_starts_with_defaults_and_no_personas(self):
        store = SettingsStore()
        assert store.settings == DEFAULT_SETTINGS
        assert store.personas == []
        assert store.selected_persona_value == ""
        assert store.is_loading is False

    def test_model_options_come_from_catalog(self):
        store = SettingsStore()
        assert ("gpt-4o", "GPT-4o") in store.model_options

    def test_placeholders_until_persona_known(self):
        store = SettingsStore()
        assert store.persona_display == PERSONA_PLACEHOLDER
        assert store.model_display == "GPT-4 Turbo"

    def test_temperature_bounds(self):
        assert SettingsStore().temperature_bounds == (0.0, 2.0, 0.1)


class TestLoad:
    def test_loading_flag_clears_only_after_both_resources(self):
        store = SettingsStore()
        store.begin_load()
        assert store.is_loading is True

        store.personas_loaded(_PERSONAS)
        assert store.is_loading is True
        assert store.personas_loading is False

        store.settings_loaded(_LOADED)
        assert store.is_loading is False

    def test_loaded_settings_replace_defaults(self):
        store = _ready_store()
        assert store.settings == _LOADED
        assert store.selected_persona_value == "p2"
        assert store.settings.rotation_interval == 15
        assert store.persona_options == [("p1", "A"), ("p2", "B")]
        assert store.persona_display == "B"
        assert store.model_display == "GPT-4"

    def test_settings_load_overwrites_edits(self):
        store = _ready_store()
        store.edit("temperature", 1.9)

        store.begin_load()
        store.settings_loaded(_LOADED)

        assert store.settings.temperature == 0.3

    def test_failed_load_keeps_loading_and_records_error(self):
        store = SettingsStore()
        store.begin_load()
        error = LoadError("settings", "HTTP 500")

        store.personas_loaded(_PERSONAS)
        store.load_failed(error)

        assert store.is_loading is True
        assert store.load_error is error
        assert store.settings == DEFAULT_SETTINGS

    def test_retry_clears_previous_error(self):
        store = SettingsStore()
        store.begin_load()
        store.load_failed(LoadError("personas", "timeout"))

        store.begin_load()
        assert store.load_error is None

    def test_superseded_generation_cannot_finish_load(self):
        store = SettingsStore()
        first = store.begin_load()
        second = store.begin_load()
        assert second == first + 1

        assert store.personas_loaded(_PERSONAS, first) is False
        assert store.settings_loaded(_LOADED, first) is False
        assert store.is_loading is True
        assert store.settings == DEFAULT_SETTINGS

        store.personas_loaded(_PERSONAS, second)
        store.settings_loaded(_LOADED, second)
        assert store.is_loading is False
        assert store.settings == _LOADED

    def test_superseded_failure_is_not_recorded(self):
        store = SettingsStore()
        first = store.begin_load()
        store.begin_load()

        assert store.load_failed(LoadError("settings", "timeout"), first) is False
        assert store.load_error is None


class TestEdit:
    def test_edits_rejected_while_loading(self):
        store = SettingsStore()
        store.begin_load()
        assert store.edit("temperature", 1.1) is False
        assert store.settings.temperature == DEFAULT_SETTINGS.temperature

    def test_edit_applies_when_ready(self):
        store = _ready_store()
        assert store.edit("rotationInterval", "abc") is True
        assert store.settings.rotation_interval == 360

    def test_temperature_label_tracks_edits(self):
        store = _ready_store()
        store.edit("temperature", 1.3)
        assert store.temperature_label == "Temperature (1.3)"


class TestSave:
    def test_begin_save_returns_snapshot_and_blocks_second_save(self):
        store = _ready_store()

        snapshot = store.begin_save()
        assert snapshot == _LOADED
        assert store.is_saving is True
        assert store.save_button_label == SAVE_BUTTON_BUSY_LABEL
        assert store.begin_save() is None

    def test_finish_save_releases_slot_and_keeps_copy(self):
        store = _ready_store()
        store.edit("maxTokens", "42")
        submitted = store.begin_save()

        store.finish_save()

        assert store.is_saving is False
        assert store.save_button_label == SAVE_BUTTON_LABEL
        assert store.settings == submitted

    def test_save_rejected_while_loading(self):
        store = SettingsStore()
        store.begin_load()
        assert store.can_save is False
        assert store.begin_save() is None

    def test_edits_allowed_during_save(self):
        store = _ready_store()
        store.begin_save()
        assert store.edit("modelName", "gpt-4o") is True


class TestDispose:
    def test_completions_after_dispose_are_ignored(self):
        store = SettingsStore()
        store.begin_load()
        store.dispose()

        assert store.personas_loaded(_PERSONAS) is False
        assert store.settings_loaded(_LOADED) is False
        assert store.load_failed(LoadError("settings", "x")) is False
        assert store.personas == []
        assert store.settings == DEFAULT_SETTINGS

    def test_dispose_blocks_edit_load_and_save(self):
        store = _ready_store()
        store.dispose()

        assert store.edit("temperature", 0.1) is False
        assert store.begin_load() is None
        assert store.begin_save() is None
        assert store.finish_save() is False


def test_unknown_model_shows_placeholder():
    store = _ready_store()
    store.edit("modelName", "retired-model")
    assert store.model_display == MODEL_PLACEHOLDER
