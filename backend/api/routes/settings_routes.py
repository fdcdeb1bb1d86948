"""
API — 助理設定路由。
設定為單例：GET 讀取、POST 整筆覆寫（last-write-wins）。
"""

from fastapi import APIRouter, Depends, Request
from sqlmodel import Session

from api.rate_limit import limiter, settings_save_limit
from api.schemas import (
    ErrorResponse,
    ModelResponse,
    RotationStatusResponse,
    SettingsRequest,
    SettingsResponse,
)
from application.settings import rotation_service, settings_service
from infrastructure.database import get_session

router = APIRouter()


@router.get(
    "/api/settings",
    response_model=SettingsResponse,
    summary="Get assistant settings",
)
def get_settings(
    session: Session = Depends(get_session),
) -> SettingsResponse:
    """取得目前的助理設定。"""
    return SettingsResponse(**settings_service.get_settings(session))


@router.post(
    "/api/settings",
    response_model=SettingsResponse,
    responses={422: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    summary="Replace assistant settings",
)
@limiter.limit(settings_save_limit)
def save_settings(
    request: Request,
    payload: SettingsRequest,
    session: Session = Depends(get_session),
) -> SettingsResponse:
    """以完整設定覆寫單例（非差異更新）。"""
    return SettingsResponse(
        **settings_service.replace_settings(session, payload.model_dump())
    )


@router.get(
    "/api/settings/rotation",
    response_model=RotationStatusResponse,
    summary="Get persona rotation status",
)
def get_rotation_status(
    session: Session = Depends(get_session),
) -> RotationStatusResponse:
    """取得人格輪替狀態（目前人格、上次與下次輪替時間）。"""
    return RotationStatusResponse(**rotation_service.get_rotation_status(session))


@router.get(
    "/api/models",
    response_model=list[ModelResponse],
    summary="List available models",
)
def list_models() -> list[ModelResponse]:
    """取得可選模型清單。"""
    return [ModelResponse(**m) for m in settings_service.list_models()]
