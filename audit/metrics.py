"""
감사 지표 / 자금 정당성 집계
"""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Sequence

from audit.currency import format_amount
from audit.impact import HistoryEntry
from audit.provenance import TrailEntry
from core.constants import AuditThresholds, Money
from core.ledger.types import TransactionKind
from core.types import LegitimacyStatus


def legitimacy_score(trail: Sequence[TrailEntry]) -> int:
    """자금 정당성 점수 (0~100)

    round(100 × (LEGITIMATE + TRACEABLE) / 전체), 추적 결과가 없으면 100.
    """
    if not trail:
        return AuditThresholds.LEGITIMACY_FULL_SCORE
    legitimate = sum(1 for entry in trail if entry.legitimacy_status.is_legitimate)
    ratio = Decimal(100 * legitimate) / Decimal(len(trail))
    return int(ratio.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


@dataclass(frozen=True)
class FundLegitimacy:
    """자금 정당성 집계

    MAX_DEPTH_REACHED 노드는 legitimate/unverified 어느 쪽에도 세지 않음.
    """

    total_traced: int
    legitimate: int
    unverified: int
    max_depth_reached: int
    score: int

    @classmethod
    def from_trail(cls, trail: Sequence[TrailEntry]) -> "FundLegitimacy":
        statuses = [entry.legitimacy_status for entry in trail]
        return cls(
            total_traced=len(statuses),
            legitimate=sum(1 for status in statuses if status.is_legitimate),
            unverified=statuses.count(LegitimacyStatus.UNVERIFIED_SOURCE),
            max_depth_reached=statuses.count(LegitimacyStatus.MAX_DEPTH_REACHED),
            score=legitimacy_score(trail),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalTrails": self.total_traced,
            "legitimateTrails": self.legitimate,
            "unverifiedTrails": self.unverified,
            "maxDepthTrails": self.max_depth_reached,
            "legitimacyScore": self.score,
        }


@dataclass(frozen=True)
class AuditMetrics:
    """계정 감사 지표

    금액은 모두 계정 기준통화, 0 이상 (net_transfer_flow만 부호 있음).

    Attributes:
        total_transactions: 계산에 참여한 거래 수
        kind_counts: 유형별 거래 수
        total_deposited: deposit 영향 합계
        total_withdrawn: withdrawal 영향 절대값 합계
        total_transferred_out: 송금 transfer 절대값 합계
        total_transferred_in: 수신 transfer 합계
        total_refunded: refund 영향 절대값 합계
        total_reversed: reversal 영향 절대값 합계
        cross_currency_transfers: 송수신 통화가 다른 transfer 수
        fund_legitimacy: 자금 정당성 집계
    """

    total_transactions: int
    kind_counts: dict[str, int]
    total_deposited: Decimal
    total_withdrawn: Decimal
    total_transferred_out: Decimal
    total_transferred_in: Decimal
    total_refunded: Decimal
    total_reversed: Decimal
    cross_currency_transfers: int
    fund_legitimacy: FundLegitimacy

    @property
    def net_transfer_flow(self) -> Decimal:
        """순 이체 유입 (수신 - 송금)"""
        return self.total_transferred_in - self.total_transferred_out

    @property
    def has_cross_currency_transfers(self) -> bool:
        return self.cross_currency_transfers > 0

    def to_dict(self) -> dict[str, Any]:
        """딕셔너리로 변환 (직렬화용)"""
        return {
            "totalTransactions": self.total_transactions,
            "breakdownByKind": dict(self.kind_counts),
            "amountBreakdown": {
                "totalDeposited": format_amount(self.total_deposited),
                "totalWithdrawn": format_amount(self.total_withdrawn),
                "totalTransferredOut": format_amount(self.total_transferred_out),
                "totalTransferredIn": format_amount(self.total_transferred_in),
                "totalRefunded": format_amount(self.total_refunded),
                "totalReversed": format_amount(self.total_reversed),
                "netTransferFlow": format_amount(self.net_transfer_flow),
            },
            "crossCurrencyTransfers": self.cross_currency_transfers,
            "fundLegitimacy": self.fund_legitimacy.to_dict(),
        }


def aggregate_metrics(
    history: Sequence[HistoryEntry],
    trail: Sequence[TrailEntry],
) -> AuditMetrics:
    """거래 이력과 추적 결과로 지표 계산

    Args:
        history: 거래 이력 (successful만)
        trail: 분류된 추적 결과

    Returns:
        AuditMetrics
    """
    kind_counts = {kind.value: 0 for kind in TransactionKind}
    totals = {
        "deposited": Money.ZERO,
        "withdrawn": Money.ZERO,
        "out": Money.ZERO,
        "in": Money.ZERO,
        "refunded": Money.ZERO,
        "reversed": Money.ZERO,
    }
    cross_currency = 0

    for entry in history:
        tx = entry.transaction
        impact = entry.balance_impact
        kind_counts[tx.kind.value] += 1

        if tx.kind == TransactionKind.DEPOSIT:
            totals["deposited"] += impact
        elif tx.kind == TransactionKind.WITHDRAWAL:
            totals["withdrawn"] += abs(impact)
        elif tx.kind == TransactionKind.TRANSFER:
            if impact < 0:
                totals["out"] += -impact
            else:
                totals["in"] += impact
            if tx.is_cross_currency:
                cross_currency += 1
        elif tx.kind == TransactionKind.REFUND:
            totals["refunded"] += abs(impact)
        elif tx.kind == TransactionKind.REVERSAL:
            totals["reversed"] += abs(impact)

    return AuditMetrics(
        total_transactions=len(history),
        kind_counts=kind_counts,
        total_deposited=totals["deposited"],
        total_withdrawn=totals["withdrawn"],
        total_transferred_out=totals["out"],
        total_transferred_in=totals["in"],
        total_refunded=totals["refunded"],
        total_reversed=totals["reversed"],
        cross_currency_transfers=cross_currency,
        fund_legitimacy=FundLegitimacy.from_trail(trail),
    )
