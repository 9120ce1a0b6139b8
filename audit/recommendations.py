"""
감사 권고 생성 (Recommendation Engine)

요약/지표에 대한 독립 규칙을 모두 평가 (short-circuit 없음).
각 규칙은 권고 0개 또는 1개를 반환.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Callable

from audit.currency import format_amount
from audit.metrics import AuditMetrics
from audit.reconciler import AuditSummary
from core.constants import AuditThresholds
from core.types import BalanceStatus, Severity


@dataclass(frozen=True)
class Recommendation:
    """감사 권고"""

    severity: Severity
    message: str
    action: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "severity": self.severity.value,
            "message": self.message,
            "action": self.action,
        }


Rule = Callable[[AuditSummary, AuditMetrics], Recommendation | None]


def balance_discrepancy_rule(summary: AuditSummary, metrics: AuditMetrics) -> Recommendation | None:
    if summary.balance_status != BalanceStatus.DISCREPANCY:
        return None
    return Recommendation(
        severity=Severity.CRITICAL,
        message=(
            f"Balance discrepancy detected: "
            f"{format_amount(summary.discrepancy)} {summary.base_currency}"
        ),
        action="Review all transactions for potential errors or unauthorized changes",
    )


def low_legitimacy_rule(summary: AuditSummary, metrics: AuditMetrics) -> Recommendation | None:
    score = metrics.fund_legitimacy.score
    if score >= AuditThresholds.LEGITIMACY_WARN_SCORE:
        return None
    return Recommendation(
        severity=Severity.WARNING,
        message=f"Low fund legitimacy score: {score}%",
        action="Investigate unverified fund sources and request additional documentation",
    )


def high_volume_rule(summary: AuditSummary, metrics: AuditMetrics) -> Recommendation | None:
    if metrics.total_transactions <= AuditThresholds.HIGH_VOLUME_TRANSACTIONS:
        return None
    return Recommendation(
        severity=Severity.INFO,
        message=f"High transaction volume detected: {metrics.total_transactions} transactions",
        action="Consider implementing additional monitoring for high-activity accounts",
    )


def withdrawal_ratio_rule(summary: AuditSummary, metrics: AuditMetrics) -> Recommendation | None:
    """출금/잔고 비율 규칙 (저장 잔고 0 이하면 평가하지 않음)"""
    if summary.stored_balance <= 0:
        return None
    ratio = metrics.total_withdrawn / summary.stored_balance
    if ratio <= AuditThresholds.WITHDRAWAL_RATIO_WARN:
        return None
    return Recommendation(
        severity=Severity.WARNING,
        message="High withdrawal-to-balance ratio detected",
        action="Monitor for potential account closure or suspicious activity",
    )


def high_frequency_rule(summary: AuditSummary, metrics: AuditMetrics) -> Recommendation | None:
    """관찰 기간(30일) 평균 일 거래 수 > 5"""
    total = metrics.total_transactions
    if total <= AuditThresholds.FREQUENCY_MIN_TRANSACTIONS:
        return None
    per_day = Decimal(total) / AuditThresholds.OBSERVATION_WINDOW_DAYS
    if per_day <= AuditThresholds.FREQUENCY_MAX_PER_DAY:
        return None
    return Recommendation(
        severity=Severity.INFO,
        message="High transaction frequency detected",
        action="Consider implementing velocity checks and enhanced monitoring",
    )


def multi_currency_rule(summary: AuditSummary, metrics: AuditMetrics) -> Recommendation | None:
    if metrics.fund_legitimacy.score >= AuditThresholds.LEGITIMACY_FULL_SCORE:
        return None
    if not metrics.has_cross_currency_transfers:
        return None
    return Recommendation(
        severity=Severity.INFO,
        message="Multi-currency transactions with unverified sources detected",
        action="Verify exchange rate accuracy and source documentation",
    )


RULES: tuple[Rule, ...] = (
    balance_discrepancy_rule,
    low_legitimacy_rule,
    high_volume_rule,
    withdrawal_ratio_rule,
    high_frequency_rule,
    multi_currency_rule,
)


def generate_recommendations(
    summary: AuditSummary,
    metrics: AuditMetrics,
) -> list[Recommendation]:
    """모든 규칙 평가 후 권고 목록 반환 (규칙 순서 유지)"""
    recommendations = []
    for rule in RULES:
        recommendation = rule(summary, metrics)
        if recommendation is not None:
            recommendations.append(recommendation)
    return recommendations
