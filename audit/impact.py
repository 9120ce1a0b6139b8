"""
거래 영향 계산기

계정 기준통화로 각 거래의 부호 있는 잔고 영향을 계산하고
시간순 누적 잔고(running balance)를 붙임.

누적 잔고는 0에서 시작 (저장 잔고로 시드하지 않음) - 대사에서 drift를 잡기 위함.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Iterable, Iterator

from adapters.interfaces import ILedgerStore
from audit.currency import RateBook, format_amount
from core.constants import Money
from core.ledger.models import Account, Transaction
from core.ledger.types import TransactionKind

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HistoryEntry:
    """영향/누적 잔고가 붙은 거래

    Attributes:
        transaction: 원 거래
        balance_impact: 기준통화 부호 있는 영향
        running_balance: 이 거래까지의 누적 잔고
        base_currency: 계정 기준통화
    """

    transaction: Transaction
    balance_impact: Decimal
    running_balance: Decimal
    base_currency: str

    def to_dict(self) -> dict[str, Any]:
        """딕셔너리로 변환 (직렬화용)"""
        tx = self.transaction
        return {
            "id": tx.transaction_id,
            "kind": tx.kind.value,
            "timestamp": tx.timestamp.isoformat(),
            "senderAmount": format_amount(tx.sender_amount),
            "receiverAmount": format_amount(tx.receiver_amount),
            "senderCurrency": tx.sender_currency,
            "receiverCurrency": tx.receiver_currency,
            "senderId": tx.sender_id,
            "receiverId": tx.receiver_id,
            "balanceImpact": format_amount(self.balance_impact),
            "runningBalance": format_amount(self.running_balance),
            "baseCurrency": self.base_currency,
            "isRefund": tx.is_refund,
            "isReversal": tx.is_reversal,
            "refundOf": tx.refund_of,
            "reversalOf": tx.reversal_of,
            "reversalReason": tx.reversal_reason,
        }


def calculate_balance_impact(
    tx: Transaction,
    account_id: int,
    base_currency: str,
    rates: RateBook,
) -> Decimal:
    """거래 1건의 기준통화 잔고 영향

    - deposit: 수신 계정 +receiver_amount
    - withdrawal: 송신 계정 -sender_amount
    - refund: 수신 계정 +receiver_amount, 송신만 한 계정 -sender_amount
    - transfer/reversal: 송신 -sender_amount, 수신 +receiver_amount
      (자기 자신에게의 reversal은 자금 반환이므로 +receiver_amount만)

    Returns:
        부호 있는 영향 (당사자가 아니면 0)
    """
    is_sender = tx.sender_id == account_id
    is_receiver = tx.receiver_id == account_id

    def credit() -> Decimal:
        return rates.convert(tx.receiver_amount, tx.receiver_currency, base_currency)

    def debit() -> Decimal:
        return -rates.convert(tx.sender_amount, tx.sender_currency, base_currency)

    if tx.kind == TransactionKind.DEPOSIT:
        impact = credit() if is_receiver else Money.ZERO
    elif tx.kind == TransactionKind.WITHDRAWAL:
        impact = debit() if is_sender else Money.ZERO
    elif tx.kind == TransactionKind.REFUND:
        if is_receiver:
            impact = credit()
        elif is_sender:
            impact = debit()
        else:
            impact = Money.ZERO
    elif tx.kind == TransactionKind.REVERSAL and is_sender and is_receiver:
        impact = credit()
    else:
        impact = Money.ZERO
        if is_sender:
            impact += debit()
        if is_receiver:
            impact += credit()

    # -0.00 방지
    if impact == 0:
        return Money.ZERO
    return impact


def _chronological(tx: Transaction) -> tuple[Any, int]:
    return (tx.timestamp, tx.transaction_id)


def iter_history(
    transactions: Iterable[Transaction],
    account_id: int,
    base_currency: str,
    rates: RateBook,
) -> Iterator[HistoryEntry]:
    """시간순 거래 이력 생성 (lazy)

    running[i] = running[i-1] + impact[i], running[-1] = 0

    Args:
        transactions: 계정 관련 거래 (순서 무관, successful 외는 무시)
        account_id: 감사 대상 계정
        base_currency: 기준통화
        rates: 요청 단위 환율

    Yields:
        HistoryEntry
    """
    running = Money.ZERO
    for tx in sorted(transactions, key=_chronological):
        if not tx.is_successful:
            continue
        impact = calculate_balance_impact(tx, account_id, base_currency, rates)
        running += impact
        yield HistoryEntry(
            transaction=tx,
            balance_impact=impact,
            running_balance=running,
            base_currency=base_currency,
        )


def calculated_balance(history: Iterable[HistoryEntry]) -> Decimal:
    """거래 이력만으로 계산한 잔고 (영향 합계)"""
    total = Money.ZERO
    for entry in history:
        total += entry.balance_impact
    return total


class TransactionImpactCalculator:
    """거래 영향 계산기

    Args:
        store: 원장 저장소
        rates: 요청 단위 환율 스냅샷
    """

    def __init__(self, store: ILedgerStore, rates: RateBook):
        self.store = store
        self.rates = rates

    async def calculate(self, account: Account) -> list[HistoryEntry]:
        """계정 거래 이력 계산

        Args:
            account: 감사 대상 계정

        Returns:
            시간순 HistoryEntry 목록 (거래 없으면 빈 목록)
        """
        transactions = await self.store.list_relevant_transactions(account.account_id)
        history = list(
            iter_history(
                transactions,
                account.account_id,
                account.base_currency,
                self.rates,
            )
        )
        logger.debug(
            f"거래 영향 계산 완료: account={account.account_id}, count={len(history)}"
        )
        return history
