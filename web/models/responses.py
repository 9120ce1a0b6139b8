"""
응답 스키마 (Pydantic)

Web API 응답 데이터 직렬화.
감사 보고서 본문은 AuditReport.to_dict() 결과를 그대로 담음 (camelCase).
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """헬스 체크 응답"""

    status: str = Field(default="healthy", description="서비스 상태")
    service: str = Field(default="ledger-audit-api", description="서비스 이름")
    version: str = Field(..., description="API 버전")
    timestamp: datetime = Field(..., description="응답 시간 (UTC)")


class ResponseMetadata(BaseModel):
    """응답 메타데이터"""

    generatedAt: str = Field(..., description="생성 시각 (ISO 8601, UTC)")
    apiVersion: str = Field(..., description="API 버전")


class AuditReportResponse(BaseModel):
    """계정 감사 보고서 응답"""

    success: bool = Field(default=True)
    data: dict[str, Any] = Field(..., description="감사 보고서 (AuditReport)")
    metadata: ResponseMetadata


class BalanceSummaryResponse(BaseModel):
    """잔고 대사 요약 응답"""

    success: bool = Field(default=True)
    data: dict[str, Any] = Field(..., description="잔고 요약 (AuditSummary)")
    metadata: ResponseMetadata


class ErrorResponse(BaseModel):
    """에러 응답"""

    success: bool = Field(default=False)
    error: str = Field(..., description="에러 요약")
    message: str = Field(..., description="상세 메시지")
    code: str = Field(..., description="에러 코드")


class ApiIndexResponse(BaseModel):
    """API 안내"""

    name: str
    version: str
    description: str
    endpoints: dict[str, str]
