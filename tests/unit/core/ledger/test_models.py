"""
원장 도메인 모델 테스트
"""

from datetime import datetime, timezone
from decimal import Decimal

import pytest

from core.ledger.models import (
    Deposit,
    Refund,
    Reversal,
    Transaction,
    Transfer,
    Withdrawal,
    build_transaction,
)
from core.ledger.types import TransactionKind

TS = datetime(2024, 1, 1, 10, 0, 0, tzinfo=timezone.utc)


def fields(**overrides):
    base = {
        "transaction_id": 1,
        "timestamp": TS,
        "status": "successful",
        "sender_id": 1,
        "receiver_id": 2,
        "sender_amount": Decimal("100.00"),
        "receiver_amount": Decimal("100.00"),
        "sender_currency": "USD",
        "receiver_currency": "USD",
    }
    base.update(overrides)
    return base


class TestBuildTransaction:
    """build_transaction 테스트"""

    @pytest.mark.parametrize(
        "kind, variant",
        [
            ("deposit", Deposit),
            ("withdrawal", Withdrawal),
            ("transfer", Transfer),
            ("refund", Refund),
            ("reversal", Reversal),
        ],
    )
    def test_variant_by_kind(self, kind: str, variant: type[Transaction]) -> None:
        tx = build_transaction(kind, **fields())

        assert isinstance(tx, variant)
        assert tx.kind == TransactionKind(kind)

    def test_unknown_kind(self) -> None:
        with pytest.raises(ValueError):
            build_transaction("chargeback", **fields())

    def test_refund_link(self) -> None:
        tx = build_transaction("refund", refund_of=3, **fields())

        assert tx.is_refund
        assert tx.refund_of == 3
        assert tx.reversal_of is None

    def test_reversal_link_and_reason(self) -> None:
        tx = build_transaction(
            "reversal", reversal_of=6, reversal_reason="dispute resolved", **fields()
        )

        assert tx.is_reversal
        assert tx.reversal_of == 6
        assert tx.reversal_reason == "dispute resolved"

    def test_link_fields_dropped_for_other_kinds(self) -> None:
        """Transfer에는 reversal_reason이 없음"""
        tx = build_transaction("transfer", reversal_reason="ignored", refund_of=1, **fields())

        assert tx.reversal_reason is None
        assert tx.refund_of is None
        assert not tx.is_refund


class TestTransaction:
    """Transaction 공통 속성 테스트"""

    def test_successful(self) -> None:
        assert Transfer(**fields()).is_successful
        assert not Transfer(**fields(status="failed")).is_successful
        assert not Transfer(**fields(status="pending")).is_successful

    def test_cross_currency(self) -> None:
        assert not Transfer(**fields()).is_cross_currency
        assert Transfer(**fields(receiver_currency="KES")).is_cross_currency

    def test_frozen(self) -> None:
        tx = Deposit(**fields())

        with pytest.raises(AttributeError):
            tx.status = "failed"  # type: ignore
