"""
API — 人格 (Persona) 路由（唯讀）。
"""

from fastapi import APIRouter, Depends
from sqlmodel import Session

from api.schemas import PersonaResponse
from application.settings import persona_service
from infrastructure.database import get_session

router = APIRouter()


@router.get(
    "/api/personas",
    response_model=list[PersonaResponse],
    summary="List personas in rotation order",
)
def list_personas(
    session: Session = Depends(get_session),
) -> list[PersonaResponse]:
    """取得所有人格（依輪替順序）。"""
    return [PersonaResponse(**p) for p in persona_service.list_personas(session)]
