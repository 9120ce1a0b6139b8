"""
테스트 헬퍼

시각 상수와 TrailEntry/지표 생성 함수.
"""

from datetime import datetime, timedelta, timezone
from decimal import Decimal

from audit.metrics import AuditMetrics, FundLegitimacy
from audit.provenance import ProvenanceNode, TrailEntry
from core.constants import Money
from core.ledger.models import Transfer
from core.types import LegitimacyStatus

BASE_TIME = datetime(2024, 1, 1, 10, 0, 0, tzinfo=timezone.utc)
FIXED_NOW = datetime(2024, 2, 1, 0, 0, 0, tzinfo=timezone.utc)


def at(hours: float) -> datetime:
    """BASE_TIME 기준 상대 시각"""
    return BASE_TIME + timedelta(hours=hours)


def make_trail_entry(
    status: LegitimacyStatus,
    transaction_id: int = 1,
    sender_id: int = 2,
    receiver_id: int = 1,
    depth: int = 1,
) -> TrailEntry:
    """분류된 추적 결과 1건 생성"""
    tx = Transfer(
        transaction_id=transaction_id,
        timestamp=at(transaction_id),
        status="successful",
        sender_id=sender_id,
        receiver_id=receiver_id,
        sender_amount=Decimal("10.00"),
        receiver_amount=Decimal("10.00"),
        sender_currency="USD",
        receiver_currency="USD",
    )
    node = ProvenanceNode(
        transaction=tx,
        depth=depth,
        transaction_path=(transaction_id,),
        account_path=(sender_id, receiver_id),
        traced_amount=Decimal("10.00"),
        traced_currency="USD",
        is_original_source=status == LegitimacyStatus.LEGITIMATE_DEPOSIT,
    )
    return TrailEntry(node=node, legitimacy_status=status)


def make_metrics(
    total_transactions: int = 0,
    total_withdrawn: Decimal = Money.ZERO,
    cross_currency_transfers: int = 0,
    legitimacy_score: int = 100,
) -> AuditMetrics:
    """권고 규칙 검증용 지표"""
    return AuditMetrics(
        total_transactions=total_transactions,
        kind_counts={},
        total_deposited=Money.ZERO,
        total_withdrawn=total_withdrawn,
        total_transferred_out=Money.ZERO,
        total_transferred_in=Money.ZERO,
        total_refunded=Money.ZERO,
        total_reversed=Money.ZERO,
        cross_currency_transfers=cross_currency_transfers,
        fund_legitimacy=FundLegitimacy(
            total_traced=0,
            legitimate=0,
            unverified=0,
            max_depth_reached=0,
            score=legitimacy_score,
        ),
    )
