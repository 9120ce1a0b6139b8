"""
FastAPI 애플리케이션

라우터 등록, 에러 응답 매핑, Rate Limit 설정.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from core.config.loader import get_settings
from core.constants import API_VERSION
from core.errors import (
    AuditError,
    InternalInconsistencyError,
    InvalidInputError,
    NotFoundError,
    UpstreamUnavailableError,
    error_body,
)
from core.logging import setup_logging

# 로깅 설정 (콘솔 + 파일)
setup_logging("web", console_level=get_settings().audit.log_level)

from web.rate_limit import FixedWindowRateLimiter, RateLimitExceeded
from web.routes import audit, health

logger = logging.getLogger(__name__)

# 에러 타입 → HTTP 상태
ERROR_STATUS: dict[type[AuditError], int] = {
    InvalidInputError: 400,
    NotFoundError: 404,
    UpstreamUnavailableError: 503,
    InternalInconsistencyError: 500,
}

AVAILABLE_ENDPOINTS = [
    "GET /api",
    "GET /api/health",
    "GET /api/audit/{account_id}",
    "GET /api/balance/{account_id}",
]


@asynccontextmanager
async def lifespan(app: FastAPI):
    """앱 생명주기 관리"""
    settings = get_settings()

    # 원장은 읽기 전용 - 스키마 생성은 scripts/init_db.py 담당
    if not settings.db_path.exists():
        logger.warning(
            f"원장 DB 없음: {settings.db_path} (scripts/init_db.py로 생성 필요)"
        )
    logger.info(
        f"Web 시작: db={settings.db_path}, max_trace_depth={settings.max_trace_depth}, "
        f"timeout={settings.audit_timeout_sec}s"
    )

    yield

    logger.info("Web 종료")


app = FastAPI(
    title="Ledger Audit API",
    description="다중 통화 원장 감사 (자금 출처 추적 / 잔고 대사)",
    version=API_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# CORS 설정 (개발용)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

_audit_settings = get_settings().audit
app.state.rate_limiter = FixedWindowRateLimiter(
    max_requests=_audit_settings.rate_limit_max_requests,
    window_sec=_audit_settings.rate_limit_window_sec,
)


@app.middleware("http")
async def rate_limit_middleware(request: Request, call_next):
    """/api 경로 Rate Limit (클라이언트 호스트 기준)"""
    if request.url.path.startswith("/api"):
        client_key = request.client.host if request.client else "unknown"
        try:
            request.app.state.rate_limiter.hit(client_key)
        except RateLimitExceeded as e:
            return JSONResponse(
                status_code=429,
                content=error_body("Too many requests", e.message, e.code),
                headers={"Retry-After": str(e.retry_after)},
            )
    return await call_next(request)


@app.exception_handler(AuditError)
async def audit_error_handler(request: Request, exc: AuditError) -> JSONResponse:
    """감사 에러 → HTTP 응답"""
    status_code = ERROR_STATUS.get(type(exc), 500)
    headers = None
    if isinstance(exc, UpstreamUnavailableError):
        headers = {"Retry-After": str(exc.retry_after)}

    if status_code >= 500:
        logger.error(f"감사 요청 실패 [{exc.code}] {request.url.path}: {exc.message}")
    else:
        logger.info(f"감사 요청 거부 [{exc.code}] {request.url.path}: {exc.message}")

    return JSONResponse(
        status_code=status_code,
        content=exc.to_dict(),
        headers=headers,
    )


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """404는 사용 가능한 엔드포인트 목록과 함께 응답"""
    if exc.status_code == 404:
        body = error_body(
            "Endpoint not found",
            f"The requested endpoint {request.url.path} was not found",
            "ENDPOINT_NOT_FOUND",
        )
        body["availableEndpoints"] = AVAILABLE_ENDPOINTS
        return JSONResponse(status_code=404, content=body)
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail},
        headers=getattr(exc, "headers", None),
    )


# =========================================================================
# API 라우터 등록
# =========================================================================

app.include_router(health.router)
app.include_router(audit.router)
