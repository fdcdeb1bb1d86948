"""
Persona Console — FastAPI 應用程式進入點。
負責建立 App、註冊路由、錯誤處理與生命週期（資料表、種子資料、人格輪替排程）。
業務邏輯位於 application/settings/。
"""

import os
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from sqlmodel import Session
from starlette.exceptions import HTTPException as StarletteHTTPException

from api.middleware import RequestIdMiddleware
from api.rate_limit import limiter
from api.routes.persona_routes import router as persona_router
from api.routes.settings_routes import router as settings_router
from api.schemas import HealthResponse
from config.settings import init_settings
from domain import constants
from domain.constants import ERROR_SETTINGS_INVALID, GENERIC_VALIDATION_ERROR
from infrastructure.database import create_db_and_tables, engine
from logging_config import get_logger

# Load environment variables from .env file
load_dotenv()
init_settings()

logger = get_logger(__name__)


# ---------------------------------------------------------------------------
# Lifespan: 建立資料表、種入人格、啟動輪替排程
# ---------------------------------------------------------------------------


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    logger.info("Persona Console 後端啟動中 — 初始化資料庫...")
    create_db_and_tables()
    logger.info("資料庫初始化完成，服務就緒。")

    from application.settings.rotation_service import RotationScheduler

    scheduler = RotationScheduler(lambda: Session(engine))
    if constants.ROTATION_ENABLED:
        scheduler.start()
    else:
        logger.info("ROTATION_ENABLED=false，人格輪替排程未啟動。")

    yield

    logger.info("Persona Console 後端關閉中...")
    scheduler.stop()


# ---------------------------------------------------------------------------
# App Factory
# ---------------------------------------------------------------------------

app = FastAPI(
    title="Persona Console API",
    description="Persona Console — 助理人格與模型設定",
    version="1.0.0",
    lifespan=lifespan,
)

app.state.limiter = limiter

app.add_middleware(RequestIdMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=os.getenv("CORS_ALLOW_ORIGIN", "http://localhost:3000").split(","),
    allow_credentials=True,
    allow_methods=["GET", "POST"],
    allow_headers=["Content-Type", "X-Request-ID"],
)


# ---------------------------------------------------------------------------
# Error Handlers — 統一回應格式 {"error_code", "message"}
# ---------------------------------------------------------------------------


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(
    _request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    if isinstance(exc.detail, dict):
        content = {
            "error_code": exc.detail.get("error_code", "HTTP_ERROR"),
            "message": exc.detail.get("message", ""),
        }
    else:
        content = {"error_code": "HTTP_ERROR", "message": str(exc.detail)}
    return JSONResponse(status_code=exc.status_code, content=content)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    _request: Request, exc: RequestValidationError
) -> JSONResponse:
    problems = [
        f"{'.'.join(str(p) for p in err['loc'] if p != 'body')}: {err['msg']}"
        for err in exc.errors()
    ]
    logger.warning("請求驗證失敗：%s", problems)
    message = "; ".join(problems) if problems else GENERIC_VALIDATION_ERROR
    return JSONResponse(
        status_code=422,
        content={"error_code": ERROR_SETTINGS_INVALID, "message": message},
    )


@app.exception_handler(RateLimitExceeded)
async def rate_limit_handler(_request: Request, exc: RateLimitExceeded) -> JSONResponse:
    return JSONResponse(
        status_code=429,
        content={
            "error_code": "RATE_LIMITED",
            "message": f"Rate limit exceeded: {exc.detail}",
        },
    )


# ---------------------------------------------------------------------------
# Health Check
# ---------------------------------------------------------------------------


@app.get("/health", response_model=HealthResponse, summary="Health check")
def health_check() -> dict:
    """Health check endpoint (Docker healthcheck)."""
    return {"status": "ok", "service": "persona-console-backend"}


# ---------------------------------------------------------------------------
# 註冊路由
# ---------------------------------------------------------------------------

app.include_router(persona_router)
app.include_router(settings_router)
