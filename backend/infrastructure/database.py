"""
Infrastructure — 資料庫連線與 Session 管理。
使用 SQLite (透過 SQLModel / SQLAlchemy)。
"""

import os
from collections.abc import Generator

from sqlmodel import Session, SQLModel, create_engine

from domain.constants import DATA_DIR, DATABASE_FILENAME
from logging_config import get_logger

logger = get_logger(__name__)


def default_database_url(data_dir: str) -> str:
    """SQLite 檔案位於 DATA_DIR 之下（未設定 DATABASE_URL 時使用）。"""
    return f"sqlite:///{os.path.join(data_dir, DATABASE_FILENAME)}"


DATABASE_URL = os.getenv("DATABASE_URL")
if not DATABASE_URL:
    # 確保資料目錄存在
    os.makedirs(DATA_DIR, exist_ok=True)
    DATABASE_URL = default_database_url(DATA_DIR)

# SQLite 需要 check_same_thread=False 以支援多執行緒存取（輪替排程執行緒）
connect_args = {"check_same_thread": False}
engine = create_engine(DATABASE_URL, echo=False, connect_args=connect_args)

logger.info("資料庫連線位置：%s", DATABASE_URL)


def load_system_personas(session: Session) -> int:
    """從 JSON 檔案載入系統預設人格（upsert，保留既有的 is_active 旗標）。"""
    import json
    import pathlib

    from domain.constants import SYSTEM_PERSONAS_FILE
    from domain.entities import Persona

    persona_path = (
        pathlib.Path(__file__).parent.parent / "config" / SYSTEM_PERSONAS_FILE
    )
    if not persona_path.exists():
        logger.warning("%s 不存在，跳過載入。", SYSTEM_PERSONAS_FILE)
        return 0

    with open(persona_path, encoding="utf-8") as f:
        personas = json.load(f)

    for p in personas:
        existing = session.get(Persona, p["id"])
        if existing:
            existing.name = p["name"]
            existing.system_prompt = p.get("systemPrompt", "")
            existing.display_order = p.get("displayOrder", 0)
        else:
            session.add(
                Persona(
                    id=p["id"],
                    name=p["name"],
                    system_prompt=p.get("systemPrompt", ""),
                    display_order=p.get("displayOrder", 0),
                )
            )
    session.commit()
    logger.info("系統人格載入完成（%d 筆）。", len(personas))
    return len(personas)


def ensure_default_settings(session: Session) -> None:
    """建立設定單例（若不存在），使用預設值。"""
    from domain.constants import DEFAULT_SETTINGS_ID
    from domain.entities import AssistantSettings

    if session.get(AssistantSettings, DEFAULT_SETTINGS_ID):
        return
    session.add(AssistantSettings(id=DEFAULT_SETTINGS_ID))
    session.commit()
    logger.info("已建立預設助理設定（id=%s）。", DEFAULT_SETTINGS_ID)


def create_db_and_tables() -> None:
    """建立所有 SQLModel 定義的資料表（若不存在），並載入種子資料。"""
    # 確保所有 Entity 已被 import，SQLModel metadata 才會完整
    import domain.entities  # noqa: F401

    logger.info("建立資料表（若不存在）...")
    SQLModel.metadata.create_all(engine)
    logger.info("資料表就緒。")

    with Session(engine) as session:
        load_system_personas(session)
        ensure_default_settings(session)


def get_session() -> Generator[Session, None, None]:
    """FastAPI Dependency：提供一個 DB Session，結束後自動關閉。"""
    with Session(engine) as session:
        yield session
