"""
Frontend — 客戶端資料模型（Persona / Settings）。
以 pydantic frozen model 表示，JSON 欄位為 camelCase；編輯時以 model_copy 產生新值。
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from frontend.config import (
    DEFAULT_MAX_TOKENS,
    DEFAULT_MODEL_NAME,
    DEFAULT_ROTATION_INTERVAL,
    DEFAULT_SETTINGS_ID,
    DEFAULT_TEMPERATURE,
)


class _WireModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        protected_namespaces=(),
    )

    def to_api(self) -> dict:
        """Serialize with the camelCase field names the backend expects."""
        return self.model_dump(by_alias=True)


class Persona(_WireModel):
    id: str
    name: str
    system_prompt: str = ""
    is_active: bool = False


class Settings(_WireModel):
    """The settings singleton. Every field is required so a copy is always complete."""

    id: str
    temperature: float
    max_tokens: int
    rotation_interval: int
    selected_persona_id: Optional[str]
    model_name: str


DEFAULT_SETTINGS = Settings(
    id=DEFAULT_SETTINGS_ID,
    temperature=DEFAULT_TEMPERATURE,
    max_tokens=DEFAULT_MAX_TOKENS,
    rotation_interval=DEFAULT_ROTATION_INTERVAL,
    selected_persona_id=None,
    model_name=DEFAULT_MODEL_NAME,
)
