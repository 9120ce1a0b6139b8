"""
잔고 대사 (Balance Reconciler)

원장 저장 잔고와 거래 이력으로 계산한 잔고를 비교.
허용 오차 0.01 미만 차이는 반올림 오차로 보고 BALANCED.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from audit.currency import format_amount
from core.constants import Money
from core.ledger.models import Account
from core.types import BalanceStatus

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Reconciliation:
    """대사 결과

    Attributes:
        status: BALANCED / DISCREPANCY
        discrepancy: |stored - calculated| (항상 0 이상)
    """

    status: BalanceStatus
    discrepancy: Decimal

    @property
    def is_balanced(self) -> bool:
        return self.status == BalanceStatus.BALANCED


def reconcile(stored_balance: Decimal, calculated_balance: Decimal) -> Reconciliation:
    """저장 잔고와 계산 잔고 비교

    Example:
        >>> reconcile(Decimal("950.00"), Decimal("750.00")).discrepancy
        Decimal('200.00')
    """
    discrepancy = abs(stored_balance - calculated_balance)
    if discrepancy < Money.RECONCILIATION_TOLERANCE:
        status = BalanceStatus.BALANCED
    else:
        status = BalanceStatus.DISCREPANCY
    return Reconciliation(status=status, discrepancy=discrepancy)


@dataclass(frozen=True)
class AuditSummary:
    """계정 감사 요약"""

    account_id: int
    base_currency: str
    stored_balance: Decimal
    calculated_balance: Decimal
    balance_status: BalanceStatus
    discrepancy: Decimal

    @classmethod
    def build(cls, account: Account, calculated_balance: Decimal) -> "AuditSummary":
        """계정 스냅샷과 계산 잔고로 요약 생성"""
        result = reconcile(account.stored_balance, calculated_balance)
        if not result.is_balanced:
            logger.warning(
                f"잔고 불일치: account={account.account_id}, "
                f"stored={account.stored_balance}, calculated={calculated_balance}, "
                f"discrepancy={result.discrepancy} {account.base_currency}"
            )
        return cls(
            account_id=account.account_id,
            base_currency=account.base_currency,
            stored_balance=account.stored_balance,
            calculated_balance=calculated_balance,
            balance_status=result.status,
            discrepancy=result.discrepancy,
        )

    def to_dict(self) -> dict[str, Any]:
        """딕셔너리로 변환 (직렬화용)"""
        return {
            "accountId": self.account_id,
            "baseCurrency": self.base_currency,
            "storedBalance": format_amount(self.stored_balance),
            "calculatedBalance": format_amount(self.calculated_balance),
            "balanceStatus": self.balance_status.value,
            "discrepancy": format_amount(self.discrepancy),
        }
