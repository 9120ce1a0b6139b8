"""
감사 API 라우트

GET /api                      - API 안내
GET /api/audit/{account_id}   - 계정 감사 보고서
GET /api/balance/{account_id} - 잔고 대사 요약
"""

from fastapi import APIRouter, Depends

from audit.report import envelope
from audit.service import AuditService
from core.constants import API_VERSION
from web.dependencies import get_account_id, get_audit_service
from web.models.responses import (
    ApiIndexResponse,
    AuditReportResponse,
    BalanceSummaryResponse,
    ErrorResponse,
)

router = APIRouter(prefix="/api", tags=["audit"])

ENDPOINTS: dict[str, str] = {
    "GET /api/audit/{account_id}": "Get complete audit report for an account",
    "GET /api/balance/{account_id}": "Get account balance reconciliation summary",
    "GET /api/health": "Health check endpoint",
}

ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "잘못된 계정 ID"},
    404: {"model": ErrorResponse, "description": "계정 없음"},
    429: {"model": ErrorResponse, "description": "요청 한도 초과"},
    503: {"model": ErrorResponse, "description": "원장 접근 불가 / 타임아웃"},
}


@router.get("", response_model=ApiIndexResponse)
async def api_index() -> ApiIndexResponse:
    """API 안내"""
    return ApiIndexResponse(
        name="Ledger Audit API",
        version=API_VERSION,
        description=(
            "Multi-currency ledger audit: transaction history, fund provenance "
            "tracing, balance reconciliation and recommendations"
        ),
        endpoints=ENDPOINTS,
    )


@router.get(
    "/audit/{account_id}",
    response_model=AuditReportResponse,
    responses=ERROR_RESPONSES,
)
async def get_audit_report(
    account_id: int = Depends(get_account_id),
    service: AuditService = Depends(get_audit_service),
):
    """계정 감사 보고서

    거래 이력, 자금 출처 추적, 잔고 대사, 감사 권고 포함.
    """
    report = await service.build_audit_report(account_id)
    return envelope(report.to_dict(), report.generated_at)


@router.get(
    "/balance/{account_id}",
    response_model=BalanceSummaryResponse,
    responses=ERROR_RESPONSES,
)
async def get_balance_summary(
    account_id: int = Depends(get_account_id),
    service: AuditService = Depends(get_audit_service),
):
    """잔고 대사 요약 (출처 추적 없이 빠르게)"""
    summary = await service.get_balance_summary(account_id)
    return envelope(summary.to_dict(), service.clock())
