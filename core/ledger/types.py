"""
원장 타입 정의

TransactionKind, TransactionStatus 등 Ledger에서 사용하는 Enum 정의
"""

from enum import Enum


class TransactionKind(str, Enum):
    """거래 유형

    str을 상속하여 DB 값/JSON 직렬화와 그대로 호환.
    """

    DEPOSIT = "deposit"  # 외부 입금 (자금 원천)
    WITHDRAWAL = "withdrawal"  # 외부 출금
    TRANSFER = "transfer"  # 계정 간 이체
    REFUND = "refund"  # 환불
    REVERSAL = "reversal"  # 거래 취소


class TransactionStatus(str, Enum):
    """거래 상태 (successful만 계산에 참여)"""

    SUCCESSFUL = "successful"
    FAILED = "failed"
    PENDING = "pending"
