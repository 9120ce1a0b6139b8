"""
원장 도메인 모델

Ledger Store에서 읽어온 스냅샷을 표현하는 불변 모델.
모든 금액은 Decimal (소수점 2자리) 사용.

거래 유형은 닫힌 변형(tagged variant)으로 표현:
Deposit | Withdrawal | Transfer | Refund | Reversal
유형별 필드는 의미 있는 변형에만 존재 (reversal_reason은 Reversal 전용).
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Any, ClassVar

from core.ledger.types import TransactionKind, TransactionStatus


@dataclass(frozen=True)
class Transaction:
    """원장 거래 레코드 (공통 필드)

    직접 생성하지 않고 변형 클래스 또는 build_transaction() 사용.

    Attributes:
        transaction_id: 거래 ID
        timestamp: 거래 시각 (UTC)
        status: successful / failed / pending
        sender_id: 송신 계정
        receiver_id: 수신 계정
        sender_amount: 송신 금액 (sender_currency 기준)
        receiver_amount: 수신 금액 (receiver_currency 기준)
        sender_currency: 송신 통화
        receiver_currency: 수신 통화
    """

    kind: ClassVar[TransactionKind]

    transaction_id: int
    timestamp: datetime
    status: str
    sender_id: int
    receiver_id: int
    sender_amount: Decimal
    receiver_amount: Decimal
    sender_currency: str
    receiver_currency: str

    @property
    def is_successful(self) -> bool:
        """계산 참여 여부"""
        return self.status == TransactionStatus.SUCCESSFUL.value

    @property
    def is_cross_currency(self) -> bool:
        """송수신 통화가 다른 거래 여부"""
        return self.sender_currency != self.receiver_currency

    @property
    def is_refund(self) -> bool:
        return False

    @property
    def is_reversal(self) -> bool:
        return False

    @property
    def refund_of(self) -> int | None:
        return None

    @property
    def reversal_of(self) -> int | None:
        return None

    @property
    def reversal_reason(self) -> str | None:
        return None


@dataclass(frozen=True)
class Deposit(Transaction):
    """외부 입금 - 자금의 원천 (sender = receiver = 입금 계정)"""

    kind: ClassVar[TransactionKind] = TransactionKind.DEPOSIT


@dataclass(frozen=True)
class Withdrawal(Transaction):
    """외부 출금"""

    kind: ClassVar[TransactionKind] = TransactionKind.WITHDRAWAL


@dataclass(frozen=True)
class Transfer(Transaction):
    """계정 간 이체"""

    kind: ClassVar[TransactionKind] = TransactionKind.TRANSFER


@dataclass(frozen=True)
class Refund(Transaction):
    """환불

    Attributes:
        original_id: 환불 대상 거래 ID
    """

    kind: ClassVar[TransactionKind] = TransactionKind.REFUND

    original_id: int | None = None

    @property
    def is_refund(self) -> bool:
        return True

    @property
    def refund_of(self) -> int | None:
        return self.original_id


@dataclass(frozen=True)
class Reversal(Transaction):
    """거래 취소

    Attributes:
        original_id: 취소 대상 거래 ID
        reason: 취소 사유 (감사 추적용)
    """

    kind: ClassVar[TransactionKind] = TransactionKind.REVERSAL

    original_id: int | None = None
    reason: str | None = None

    @property
    def is_reversal(self) -> bool:
        return True

    @property
    def reversal_of(self) -> int | None:
        return self.original_id

    @property
    def reversal_reason(self) -> str | None:
        return self.reason


_VARIANTS: dict[TransactionKind, type[Transaction]] = {
    TransactionKind.DEPOSIT: Deposit,
    TransactionKind.WITHDRAWAL: Withdrawal,
    TransactionKind.TRANSFER: Transfer,
    TransactionKind.REFUND: Refund,
    TransactionKind.REVERSAL: Reversal,
}


def build_transaction(
    kind: str | TransactionKind,
    *,
    refund_of: int | None = None,
    reversal_of: int | None = None,
    reversal_reason: str | None = None,
    **fields: Any,
) -> Transaction:
    """유형 문자열로 알맞은 변형 생성

    유형에 맞지 않는 링크 필드(예: Transfer의 reversal_reason)는 버림.

    Args:
        kind: 거래 유형 ("deposit" 등)
        refund_of: Refund 전용 원거래 ID
        reversal_of: Reversal 전용 원거래 ID
        reversal_reason: Reversal 전용 사유
        **fields: Transaction 공통 필드

    Returns:
        Transaction 변형 인스턴스

    Raises:
        ValueError: 알 수 없는 거래 유형
    """
    kind = TransactionKind(kind)
    variant = _VARIANTS[kind]

    if variant is Refund:
        return Refund(original_id=refund_of, **fields)
    if variant is Reversal:
        return Reversal(original_id=reversal_of, reason=reversal_reason, **fields)
    return variant(**fields)


@dataclass(frozen=True)
class Account:
    """계정

    stored_balance는 원장이 관리하는 값이며 감사 코어는 절대 수정하지 않음.
    """

    account_id: int
    base_currency: str
    stored_balance: Decimal


@dataclass(frozen=True)
class RatePair:
    """방향성 환율 (from → to)"""

    from_currency: str
    to_currency: str
    rate: Decimal
