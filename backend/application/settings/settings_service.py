"""
Application — Settings Service。
封裝助理設定單例的查詢與整筆覆寫邏輯，路由層不直接存取 ORM。
儲存語意為 last-write-wins：無版本號、無部分更新。
"""

from __future__ import annotations

from datetime import UTC, datetime

from fastapi import HTTPException
from sqlmodel import Session

from domain import constants
from domain.constants import (
    DEFAULT_MAX_TOKENS,
    DEFAULT_MODEL_NAME,
    DEFAULT_ROTATION_INTERVAL,
    DEFAULT_SETTINGS_ID,
    DEFAULT_TEMPERATURE,
    ERROR_MODEL_NOT_SUPPORTED,
    ERROR_PERSONA_NOT_FOUND,
    ERROR_SETTINGS_SAVE_FAILED,
    GENERIC_SETTINGS_SAVE_ERROR,
)
from domain.entities import AssistantSettings
from infrastructure import repositories as repo
from logging_config import get_logger

logger = get_logger(__name__)


def _utcnow() -> datetime:
    """Timezone-aware UTC now; UTCDateTime columns reject naive values."""
    return datetime.now(UTC)


def settings_to_dict(settings: AssistantSettings) -> dict:
    return {
        "id": settings.id,
        "temperature": settings.temperature,
        "maxTokens": settings.max_tokens,
        "rotationInterval": settings.rotation_interval,
        "selectedPersonaId": settings.selected_persona_id,
        "modelName": settings.model_name,
    }


def get_settings(session: Session) -> dict:
    """Return the settings singleton, using defaults if it was never created."""
    settings = repo.find_settings(session)
    if not settings:
        return {
            "id": DEFAULT_SETTINGS_ID,
            "temperature": DEFAULT_TEMPERATURE,
            "maxTokens": DEFAULT_MAX_TOKENS,
            "rotationInterval": DEFAULT_ROTATION_INTERVAL,
            "selectedPersonaId": None,
            "modelName": DEFAULT_MODEL_NAME,
        }
    return settings_to_dict(settings)


def list_models() -> list[dict]:
    """Return the model catalog as ``[{id, name}]`` in declaration order."""
    return [
        {"id": model_id, "name": name}
        for model_id, name in constants.AVAILABLE_MODELS.items()
    ]


def _validate_references(session: Session, payload: dict) -> None:
    if payload["model_name"] not in constants.AVAILABLE_MODELS:
        raise HTTPException(
            status_code=422,
            detail={
                "error_code": ERROR_MODEL_NOT_SUPPORTED,
                "message": f"Unsupported model: {payload['model_name']}",
            },
        )
    persona_id = payload.get("selected_persona_id")
    if persona_id is not None and not repo.find_persona_by_id(session, persona_id):
        raise HTTPException(
            status_code=422,
            detail={
                "error_code": ERROR_PERSONA_NOT_FOUND,
                "message": f"Persona not found: {persona_id}",
            },
        )


def replace_settings(session: Session, payload: dict) -> dict:
    """
    Overwrite the settings singleton with a complete record (upsert).

    Selecting a different persona activates it and restarts the rotation
    clock, so the scheduler counts the interval from the operator's choice.

    Args:
        session: DB session
        payload: snake_case settings fields (temperature, max_tokens,
            rotation_interval, selected_persona_id, model_name; id optional)

    Raises:
        HTTPException: 422 on an unknown model or persona, 500 on a
            persistence failure (generic message, details only in the log)
    """
    _validate_references(session, payload)

    if payload.get("id") not in (None, DEFAULT_SETTINGS_ID):
        logger.warning(
            "設定 id=%s 與單例 id=%s 不符，仍寫入單例。",
            payload["id"],
            DEFAULT_SETTINGS_ID,
        )

    try:
        settings = repo.find_settings(session)
        if settings is None:
            settings = AssistantSettings(id=DEFAULT_SETTINGS_ID)

        new_persona_id = payload.get("selected_persona_id")
        persona_changed = new_persona_id != settings.selected_persona_id

        settings.temperature = payload["temperature"]
        settings.max_tokens = payload["max_tokens"]
        settings.rotation_interval = payload["rotation_interval"]
        settings.selected_persona_id = new_persona_id
        settings.model_name = payload["model_name"]
        now = _utcnow()
        settings.updated_at = now
        if persona_changed:
            repo.activate_persona(session, new_persona_id)
            settings.rotated_at = now

        settings = repo.save_settings(session, settings)
    except Exception as e:
        session.rollback()
        logger.error("助理設定儲存失敗：%s", e, exc_info=True)
        raise HTTPException(
            status_code=500,
            detail={
                "error_code": ERROR_SETTINGS_SAVE_FAILED,
                "message": GENERIC_SETTINGS_SAVE_ERROR,
            },
        ) from e

    logger.info(
        "助理設定已更新：model=%s, temperature=%s, max_tokens=%s, "
        "rotation_interval=%s, persona=%s",
        settings.model_name,
        settings.temperature,
        settings.max_tokens,
        settings.rotation_interval,
        settings.selected_persona_id,
    )
    return settings_to_dict(settings)
