"""
Frontend — 設定表單控制器。
負責並行讀取（人格、設定）、欄位編輯與整筆儲存，並把結果回報給 SettingsStore。
通知（成功 / 失敗）透過可注入的 notifier 發送，預設寫入 log。
"""

import logging
from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor, wait
from dataclasses import dataclass
from enum import StrEnum

from frontend.api import LoadError, SaveError, SettingsApi
from frontend.config import (
    CLIENT_THREAD_POOL_SIZE,
    SAVE_ERROR_DESCRIPTION,
    SAVE_ERROR_TITLE,
    SAVE_SUCCESS_DESCRIPTION,
    SAVE_SUCCESS_TITLE,
)
from frontend.models import Settings
from frontend.reducer import SettingsField
from frontend.store import SettingsStore

logger = logging.getLogger(__name__)


class SaveOutcome(StrEnum):
    SAVED = "saved"
    FAILED = "failed"
    REJECTED = "rejected"  # another save was outstanding, or the form was not ready


@dataclass(frozen=True)
class Notification:
    level: str  # "success" | "error"
    title: str
    description: str


_LOG_DISPATCH = {
    "success": logger.info,
    "error": logger.error,
    "warning": logger.warning,
}


def log_notifier(notification: Notification) -> None:
    """Default notifier: route by level to the module logger (unknown levels → error)."""
    _LOG_DISPATCH.get(notification.level, logger.error)(
        "%s: %s", notification.title, notification.description
    )


class SettingsController:
    """
    Drives one settings form.

    Usage::

        controller = SettingsController()
        controller.load(wait_for=True)
        controller.edit(SettingsField.TEMPERATURE, 1.3)
        controller.save()
        controller.close()
    """

    def __init__(
        self,
        api: SettingsApi | None = None,
        notifier: Callable[[Notification], None] | None = None,
        store: SettingsStore | None = None,
    ):
        self.store = store or SettingsStore()
        self._api = api or SettingsApi()
        self._notify = notifier or log_notifier
        self._executor = ThreadPoolExecutor(
            max_workers=CLIENT_THREAD_POOL_SIZE, thread_name_prefix="settings-client"
        )

    # ------------------------------------------------------------------
    # Load
    # ------------------------------------------------------------------

    def _load_personas(self, generation: int) -> None:
        try:
            personas = self._api.fetch_personas()
        except LoadError as e:
            logger.warning("%s", e)
            self.store.load_failed(e, generation)
            return
        self.store.personas_loaded(personas, generation)

    def _load_settings(self, generation: int) -> None:
        try:
            settings = self._api.fetch_settings()
        except LoadError as e:
            logger.warning("%s", e)
            self.store.load_failed(e, generation)
            return
        self.store.settings_loaded(settings, generation)

    def load(self, wait_for: bool = False) -> list[Future]:
        """Fetch personas and settings concurrently. Call again to retry after a LoadError."""
        generation = self.store.begin_load()
        if generation is None:
            return []
        try:
            futures = [
                self._executor.submit(self._load_personas, generation),
                self._executor.submit(self._load_settings, generation),
            ]
        except RuntimeError:
            # close() raced us and shut the pool down
            if self.store.disposed:
                logger.info("Load skipped: controller closed.")
                return []
            raise
        if wait_for:
            wait(futures)
        return futures

    # ------------------------------------------------------------------
    # Edit
    # ------------------------------------------------------------------

    def edit(self, field: SettingsField | str, raw: object) -> bool:
        return self.store.edit(field, raw)

    # ------------------------------------------------------------------
    # Save
    # ------------------------------------------------------------------

    def _submit(self, snapshot: Settings) -> SaveOutcome:
        try:
            self._api.save_settings(snapshot)
        except SaveError as e:
            logger.error("Failed to save settings: %s", e.message)
            if self.store.finish_save():
                self._notify(
                    Notification("error", SAVE_ERROR_TITLE, SAVE_ERROR_DESCRIPTION)
                )
            return SaveOutcome.FAILED
        if self.store.finish_save():
            self._notify(
                Notification("success", SAVE_SUCCESS_TITLE, SAVE_SUCCESS_DESCRIPTION)
            )
        return SaveOutcome.SAVED

    def save(self) -> SaveOutcome:
        """Submit the whole editable copy and block until the request finishes."""
        snapshot = self.store.begin_save()
        if snapshot is None:
            logger.info("Save rejected: form busy or not ready.")
            return SaveOutcome.REJECTED
        return self._submit(snapshot)

    def save_async(self) -> Future:
        """Like :meth:`save`, but the request runs on the worker pool.

        The save slot is claimed before returning, so a second call made while
        this one is in flight resolves to ``REJECTED`` without any request.
        """
        snapshot = self.store.begin_save()
        if snapshot is None:
            logger.info("Save rejected: form busy or not ready.")
            return self._resolved(SaveOutcome.REJECTED)
        try:
            return self._executor.submit(self._submit, snapshot)
        except RuntimeError:
            self.store.finish_save()
            if self.store.disposed:
                logger.info("Save skipped: controller closed.")
                return self._resolved(SaveOutcome.REJECTED)
            raise

    @staticmethod
    def _resolved(outcome: SaveOutcome) -> Future:
        done: Future = Future()
        done.set_result(outcome)
        return done

    # ------------------------------------------------------------------
    # Teardown
    # ------------------------------------------------------------------

    def close(self) -> None:
        """Tear down the form. In-flight requests finish but their results are discarded."""
        self.store.dispose()
        self._executor.shutdown(wait=False, cancel_futures=True)

    def __enter__(self) -> "SettingsController":
        return self

    def __exit__(self, *exc) -> None:
        self.close()
