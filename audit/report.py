"""
감사 보고서

API 응답 봉투 형식:
{"success": true, "data": {...}, "metadata": {"generatedAt": ..., "apiVersion": ...}}
"""

import json
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from audit.impact import HistoryEntry
from audit.metrics import AuditMetrics
from audit.provenance import TrailEntry
from audit.reconciler import AuditSummary
from audit.recommendations import Recommendation
from core.constants import API_VERSION


@dataclass(frozen=True)
class AuditReport:
    """계정 감사 보고서 (요청마다 새로 계산, 저장하지 않음)"""

    account_id: int
    generated_at: datetime
    summary: AuditSummary
    metrics: AuditMetrics
    transaction_history: tuple[HistoryEntry, ...]
    provenance_trail: tuple[TrailEntry, ...]
    recommendations: tuple[Recommendation, ...]

    def to_dict(self) -> dict[str, Any]:
        """딕셔너리로 변환 (camelCase, 금액은 소수점 2자리 문자열)"""
        summary = self.summary.to_dict()
        summary.pop("accountId")
        return {
            "accountId": self.account_id,
            "generatedAt": self.generated_at.isoformat(),
            "summary": summary,
            "metrics": self.metrics.to_dict(),
            "transactionHistory": [entry.to_dict() for entry in self.transaction_history],
            "provenanceTrail": [entry.to_dict() for entry in self.provenance_trail],
            "recommendations": [rec.to_dict() for rec in self.recommendations],
        }

    def to_json(self, indent: int | None = None) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False, indent=indent)


def envelope(data: dict[str, Any], generated_at: datetime) -> dict[str, Any]:
    """성공 응답 봉투"""
    return {
        "success": True,
        "data": data,
        "metadata": {
            "generatedAt": generated_at.isoformat(),
            "apiVersion": API_VERSION,
        },
    }
