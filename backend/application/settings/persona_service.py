"""
Application — Persona Service。
封裝人格清單查詢，路由層不直接存取 ORM。人格內容由部署端維護（唯讀）。
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from sqlmodel import Session

from domain.entities import Persona
from infrastructure import repositories as repo


def persona_to_dict(persona: Persona) -> dict:
    return {
        "id": persona.id,
        "name": persona.name,
        "systemPrompt": persona.system_prompt,
        "isActive": persona.is_active,
    }


def list_personas(session: Session) -> list[dict]:
    """Return all personas in rotation order."""
    return [persona_to_dict(p) for p in repo.find_personas(session)]
