"""
Domain — 資料庫實體 (SQLModel Tables)。
定義人格 (Persona) 與全域助理設定 (AssistantSettings) 資料表。
"""

from datetime import UTC, datetime

from sqlmodel import Field, SQLModel

from domain.constants import (
    DEFAULT_MAX_TOKENS,
    DEFAULT_MODEL_NAME,
    DEFAULT_ROTATION_INTERVAL,
    DEFAULT_SETTINGS_ID,
    DEFAULT_TEMPERATURE,
)


class Persona(SQLModel, table=True):
    """助理人格（系統提示詞）。內容由部署端維護，本服務只讀取與切換啟用旗標。"""

    id: str = Field(primary_key=True, description="人格 ID")
    name: str = Field(description="顯示名稱")
    system_prompt: str = Field(default="", description="系統提示詞")
    is_active: bool = Field(default=False, description="是否為目前啟用中的人格")
    display_order: int = Field(default=0, description="輪替順位（數字越小越前面）")


class AssistantSettings(SQLModel, table=True):
    """全域助理設定（單例，每個部署一筆）。每次儲存整筆覆寫，last-write-wins。"""

    id: str = Field(default=DEFAULT_SETTINGS_ID, primary_key=True)
    temperature: float = Field(default=DEFAULT_TEMPERATURE, description="取樣溫度")
    max_tokens: int = Field(default=DEFAULT_MAX_TOKENS, description="最大生成 token 數")
    rotation_interval: int = Field(
        default=DEFAULT_ROTATION_INTERVAL, description="人格輪替間隔（分鐘）"
    )
    selected_persona_id: str | None = Field(
        default=None, foreign_key="persona.id", description="目前 / 起始人格"
    )
    model_name: str = Field(default=DEFAULT_MODEL_NAME, description="模型 ID")
    rotated_at: datetime | None = Field(
        default=None, description="上次切換人格的時間（UTC）"
    )
    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        description="最後更新時間",
    )
