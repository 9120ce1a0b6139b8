"""
감사 엔진 (Audit Engine)

- currency: 통화 정규화 / 요청 단위 환율 스냅샷
- impact: 거래 영향 계산 / 누적 잔고
- provenance: 자금 출처 역추적 (BFS)
- reconciler: 잔고 대사
- metrics: 지표 / 자금 정당성 집계
- recommendations: 감사 권고 규칙
- service: build_audit_report 진입점
"""

from audit.currency import RateBook, convert, format_amount
from audit.impact import HistoryEntry, TransactionImpactCalculator, calculate_balance_impact
from audit.metrics import AuditMetrics, FundLegitimacy, aggregate_metrics, legitimacy_score
from audit.provenance import ProvenanceNode, ProvenanceTracer, TrailEntry
from audit.reconciler import AuditSummary, Reconciliation, reconcile
from audit.recommendations import Recommendation, generate_recommendations
from audit.report import AuditReport
from audit.service import AuditService, validate_account_id

__all__ = [
    "AuditMetrics",
    "AuditReport",
    "AuditService",
    "AuditSummary",
    "FundLegitimacy",
    "HistoryEntry",
    "ProvenanceNode",
    "ProvenanceTracer",
    "RateBook",
    "Reconciliation",
    "Recommendation",
    "TrailEntry",
    "TransactionImpactCalculator",
    "aggregate_metrics",
    "calculate_balance_impact",
    "convert",
    "format_amount",
    "generate_recommendations",
    "legitimacy_score",
    "reconcile",
    "validate_account_id",
]
