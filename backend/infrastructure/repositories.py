"""
Infrastructure — Repository Pattern。
集中管理所有資料庫查詢，讓 Service 層不直接接觸 ORM 語法。
"""

from sqlmodel import Session, select

from domain.constants import DEFAULT_SETTINGS_ID
from domain.entities import AssistantSettings, Persona

# ===========================================================================
# Persona Repository
# ===========================================================================


def find_personas(session: Session) -> list[Persona]:
    """查詢所有人格（依 display_order、id 排序，即輪替順序）。"""
    statement = select(Persona).order_by(Persona.display_order, Persona.id)
    return list(session.exec(statement).all())


def find_persona_by_id(session: Session, persona_id: str) -> Persona | None:
    """根據 id 查詢單一人格。"""
    return session.get(Persona, persona_id)


def activate_persona(session: Session, persona_id: str | None) -> None:
    """將指定人格設為唯一啟用中的人格（None 表示全部停用）。不 commit。"""
    for persona in session.exec(select(Persona)).all():
        persona.is_active = persona.id == persona_id
        session.add(persona)


# ===========================================================================
# Settings Repository
# ===========================================================================


def find_settings(session: Session) -> AssistantSettings | None:
    """查詢設定單例。"""
    return session.get(AssistantSettings, DEFAULT_SETTINGS_ID)


def save_settings(session: Session, settings: AssistantSettings) -> AssistantSettings:
    """新增或更新設定單例。"""
    session.add(settings)
    session.commit()
    session.refresh(settings)
    return settings
