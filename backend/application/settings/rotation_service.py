"""
Application — 人格輪替服務。
依設定單例的 rotation_interval 與 selected_persona_id 定期切換啟用中的人格，
並維持 selected_persona_id 與 Persona.is_active 一致。
背景排程以 daemon thread 執行，由 FastAPI lifespan 啟動與停止。
"""

from __future__ import annotations

import threading
from collections.abc import Callable
from datetime import UTC, datetime

from sqlmodel import Session

from domain import constants
from domain.rotation import is_rotation_due, next_persona_id, next_rotation_at
from domain.entities import AssistantSettings
from infrastructure import repositories as repo
from logging_config import get_logger

logger = get_logger(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


def _switch_to(
    session: Session, settings: AssistantSettings, persona_id: str | None, now: datetime
) -> None:
    repo.activate_persona(session, persona_id)
    settings.selected_persona_id = persona_id
    settings.rotated_at = now
    repo.save_settings(session, settings)


def rotate_if_due(session: Session, now: datetime | None = None) -> str | None:
    """
    Apply one rotation step.

    The first call only starts the clock (and aligns the active flag with the
    current selection); later calls advance to the next persona once the
    interval has elapsed.

    Returns:
        The newly selected persona id when a rotation happened, else None.
    """
    now = now or _utcnow()
    settings = repo.find_settings(session)
    if settings is None:
        return None

    ordered_ids = [p.id for p in repo.find_personas(session)]
    if not ordered_ids:
        return None

    if settings.rotated_at is None:
        _switch_to(session, settings, settings.selected_persona_id, now)
        logger.info("輪替計時開始：persona=%s", settings.selected_persona_id)
        return None

    if not is_rotation_due(settings.rotated_at, settings.rotation_interval, now):
        return None

    previous_id = settings.selected_persona_id
    new_id = next_persona_id(ordered_ids, previous_id)
    _switch_to(session, settings, new_id, now)
    logger.info("人格輪替：%s → %s", previous_id, new_id)
    return new_id


def get_rotation_status(session: Session) -> dict:
    """Return the current persona, last rotation time and next due time."""
    settings = repo.find_settings(session)
    if settings is None:
        return {
            "selectedPersonaId": None,
            "rotationInterval": constants.DEFAULT_ROTATION_INTERVAL,
            "rotatedAt": None,
            "nextRotationAt": None,
        }
    due = next_rotation_at(settings.rotated_at, settings.rotation_interval)
    return {
        "selectedPersonaId": settings.selected_persona_id,
        "rotationInterval": settings.rotation_interval,
        "rotatedAt": settings.rotated_at.isoformat() if settings.rotated_at else None,
        "nextRotationAt": due.isoformat() if due else None,
    }


class RotationScheduler:
    """Daemon thread that calls :func:`rotate_if_due` every ``tick_seconds``."""

    def __init__(
        self,
        session_factory: Callable[[], Session],
        tick_seconds: float | None = None,
    ):
        self._session_factory = session_factory
        self._tick = tick_seconds or constants.ROTATION_TICK_SECONDS
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def run_once(self) -> str | None:
        with self._session_factory() as session:
            return rotate_if_due(session)

    def _run(self) -> None:
        logger.info("人格輪替排程啟動（每 %s 秒檢查）。", self._tick)
        while not self._stop.wait(self._tick):
            try:
                self.run_once()
            except Exception as e:
                # 單次失敗不中止排程，下一輪重試
                logger.error("人格輪替失敗：%s", e, exc_info=True)
        logger.info("人格輪替排程已停止。")

    def start(self) -> None:
        if self.running:
            return
        self._stop.clear()
        self._thread = threading.Thread(
            target=self._run, name=constants.ROTATION_THREAD_NAME, daemon=True
        )
        self._thread.start()

    def stop(self, timeout: float = 5.0) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None
