"""
헬스 체크 엔드포인트

GET /health - 서버 상태 확인
GET /api/health - 동일 (API 경로 호환)
"""

from fastapi import APIRouter

from core.constants import API_VERSION
from core.utils.timezone import now_utc
from web.models.responses import HealthResponse

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
@router.get("/api/health", response_model=HealthResponse, include_in_schema=False)
async def health_check() -> HealthResponse:
    """서버 상태 확인

    원장 연결은 확인하지 않음 (프로세스 생존 여부만).

    Returns:
        HealthResponse: status, version, timestamp
    """
    return HealthResponse(version=API_VERSION, timestamp=now_utc())
