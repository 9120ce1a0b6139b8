"""
Web API 모델 (Pydantic)
"""

from web.models.responses import (
    ApiIndexResponse,
    AuditReportResponse,
    BalanceSummaryResponse,
    ErrorResponse,
    HealthResponse,
    ResponseMetadata,
)

__all__ = [
    "ApiIndexResponse",
    "AuditReportResponse",
    "BalanceSummaryResponse",
    "ErrorResponse",
    "HealthResponse",
    "ResponseMetadata",
]
