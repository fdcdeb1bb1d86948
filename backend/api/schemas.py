"""
API — Pydantic Request / Response Schemas。
僅用於 HTTP 層的資料驗證與序列化，不含業務邏輯。
JSON 欄位名稱固定為 camelCase（alias），Python 端維持 snake_case。
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from domain.constants import (
    MAX_TOKENS_MAX,
    MAX_TOKENS_MIN,
    ROTATION_INTERVAL_MIN,
    TEMPERATURE_MAX,
    TEMPERATURE_MIN,
)


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, protected_namespaces=()
    )


# ---------------------------------------------------------------------------
# Request Schemas
# ---------------------------------------------------------------------------


class SettingsRequest(_CamelModel):
    """POST /api/settings 請求 Body — 完整設定（非差異）。"""

    id: Optional[str] = None
    temperature: float = Field(ge=TEMPERATURE_MIN, le=TEMPERATURE_MAX)
    max_tokens: int = Field(ge=MAX_TOKENS_MIN, le=MAX_TOKENS_MAX)
    rotation_interval: int = Field(ge=ROTATION_INTERVAL_MIN)
    selected_persona_id: Optional[str]
    model_name: str

    @field_validator("selected_persona_id")
    @classmethod
    def empty_persona_means_none(cls, v: Optional[str]) -> Optional[str]:
        """An empty selector value means no persona selected."""
        return v or None


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------


class PersonaResponse(_CamelModel):
    """GET /api/personas 單筆人格。"""

    id: str
    name: str
    system_prompt: str
    is_active: bool


class SettingsResponse(_CamelModel):
    """GET / POST /api/settings 回應。"""

    id: str
    temperature: float
    max_tokens: int
    rotation_interval: int
    selected_persona_id: Optional[str]
    model_name: str


class ModelResponse(BaseModel):
    """GET /api/models 單筆模型。"""

    id: str
    name: str


class RotationStatusResponse(_CamelModel):
    """GET /api/settings/rotation 回應。"""

    selected_persona_id: Optional[str]
    rotation_interval: int
    rotated_at: Optional[str]
    next_rotation_at: Optional[str]


class ErrorResponse(BaseModel):
    """錯誤回應（所有 4xx / 5xx 統一格式）。"""

    error_code: str
    message: str


class HealthResponse(BaseModel):
    """GET /health 回應。"""

    status: str
    service: str
