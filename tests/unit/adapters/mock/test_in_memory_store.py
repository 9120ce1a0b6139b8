"""
InMemoryLedgerStore 테스트

SQLite 저장소와 같은 필터/정렬 규칙을 따르는지 확인.
"""

from decimal import Decimal

import pytest

from adapters.mock.ledger_store import InMemoryLedgerStore
from core.errors import UpstreamUnavailableError
from core.ledger.models import Refund, Reversal
from core.ledger.types import TransactionKind

from tests.helpers import at


class TestStateManipulation:
    """상태 조작 메서드 테스트"""

    @pytest.mark.asyncio
    async def test_add_and_get_account(self, ledger: InMemoryLedgerStore) -> None:
        """계정 추가 후 조회"""
        ledger.add_account(1, "USD", Decimal("1000.00"))

        account = await ledger.get_account(1)

        assert account is not None
        assert account.base_currency == "USD"
        assert account.stored_balance == Decimal("1000.00")

    @pytest.mark.asyncio
    async def test_missing_account_is_none(self, ledger: InMemoryLedgerStore) -> None:
        """없는 계정은 None"""
        assert await ledger.get_account(999) is None

    @pytest.mark.asyncio
    async def test_remove_account(self, ledger: InMemoryLedgerStore) -> None:
        """계정 제거"""
        ledger.add_account(1, "USD")
        ledger.remove_account(1)
        ledger.remove_account(1)

        assert await ledger.get_account(1) is None

    def test_add_transaction_builds_variant(self, ledger: InMemoryLedgerStore) -> None:
        """유형별 변형 생성"""
        refund = ledger.add_transaction(
            "refund", 10, at(0), 2, 1, Decimal("5.00"), refund_of=3,
        )
        reversal = ledger.add_transaction(
            TransactionKind.REVERSAL, 11, at(1), 1, 1, Decimal("5.00"),
            reversal_of=10, reversal_reason="dispute",
        )

        assert isinstance(refund, Refund)
        assert refund.refund_of == 3
        assert isinstance(reversal, Reversal)
        assert reversal.reversal_reason == "dispute"

    def test_single_currency_defaults(self, ledger: InMemoryLedgerStore) -> None:
        """수신 금액/통화 미지정 시 송신 측과 동일"""
        tx = ledger.add_transaction("transfer", 1, at(0), 1, 2, Decimal("10.00"), currency="KES")

        assert tx.receiver_amount == Decimal("10.00")
        assert tx.receiver_currency == "KES"
        assert tx.is_cross_currency is False


class TestQueries:
    """ILedgerStore 조회 테스트"""

    @pytest.mark.asyncio
    async def test_relevant_transactions_ordered(
        self, scenario_a_ledger: InMemoryLedgerStore
    ) -> None:
        """계정 관련 거래는 시간순"""
        txs = await scenario_a_ledger.list_relevant_transactions(1)

        assert [tx.transaction_id for tx in txs] == [1, 3, 4, 5]

    @pytest.mark.asyncio
    async def test_relevant_excludes_other_accounts_deposits(
        self, scenario_a_ledger: InMemoryLedgerStore
    ) -> None:
        """다른 계정의 deposit은 포함하지 않음"""
        txs = await scenario_a_ledger.list_relevant_transactions(3)

        assert [tx.transaction_id for tx in txs] == [2, 4]

    @pytest.mark.asyncio
    async def test_same_timestamp_ordered_by_id(self, ledger: InMemoryLedgerStore) -> None:
        """동시각 거래는 ID순"""
        ledger.add_transaction("deposit", 9, at(0), 1, 1, Decimal("1.00"))
        ledger.add_transaction("deposit", 2, at(0), 1, 1, Decimal("1.00"))

        txs = await ledger.list_relevant_transactions(1)

        assert [tx.transaction_id for tx in txs] == [2, 9]

    @pytest.mark.asyncio
    async def test_failed_transactions_excluded(self, ledger: InMemoryLedgerStore) -> None:
        """성공하지 않은 거래는 모든 조회에서 제외"""
        ledger.add_transaction("transfer", 1, at(0), 2, 1, Decimal("5.00"), status="failed")
        ledger.add_transaction("transfer", 2, at(1), 2, 1, Decimal("5.00"), status="pending")

        assert await ledger.list_relevant_transactions(1) == []
        assert await ledger.list_incoming_transfers(1) == []
        assert await ledger.list_transactions_received_by(1, at(5)) == []

    @pytest.mark.asyncio
    async def test_incoming_transfers_only(
        self, scenario_a_ledger: InMemoryLedgerStore
    ) -> None:
        """수신 이체만 시드로 반환"""
        txs = await scenario_a_ledger.list_incoming_transfers(1)

        assert [tx.transaction_id for tx in txs] == [4]

    @pytest.mark.asyncio
    async def test_received_by_respects_cutoff(
        self, scenario_a_ledger: InMemoryLedgerStore
    ) -> None:
        """기준 시각 포함, 이후 거래 제외"""
        assert [
            tx.transaction_id
            for tx in await scenario_a_ledger.list_transactions_received_by(1, at(0))
        ] == [1]
        assert [
            tx.transaction_id
            for tx in await scenario_a_ledger.list_transactions_received_by(1, at(3))
        ] == [1, 4]

    @pytest.mark.asyncio
    async def test_received_by_excludes_withdrawals(
        self, scenario_a_ledger: InMemoryLedgerStore
    ) -> None:
        """출금은 자금 원천 후보가 아님"""
        txs = await scenario_a_ledger.list_transactions_received_by(1, at(10))

        assert TransactionKind.WITHDRAWAL not in {tx.kind for tx in txs}

    @pytest.mark.asyncio
    async def test_rates(self, ledger: InMemoryLedgerStore) -> None:
        """환율 조회 및 스냅샷"""
        ledger.set_rate("USD", "KES", Decimal("150.00"))
        ledger.set_rate("KES", "USD", Decimal("0.0067"))

        assert await ledger.lookup_rate("USD", "KES") == Decimal("150.00")
        assert await ledger.lookup_rate("USD", "NGN") is None

        pairs = await ledger.list_rates()
        assert [(p.from_currency, p.to_currency) for p in pairs] == [
            ("KES", "USD"),
            ("USD", "KES"),
        ]


class TestFailureSimulation:
    """장애 시뮬레이션 테스트"""

    @pytest.mark.asyncio
    async def test_unavailable(self, ledger: InMemoryLedgerStore) -> None:
        """접근 불가 시 UpstreamUnavailableError"""
        ledger.set_unavailable()

        with pytest.raises(UpstreamUnavailableError) as exc_info:
            await ledger.get_account(1)

        assert exc_info.value.retryable is True

    @pytest.mark.asyncio
    async def test_call_count(self, ledger: InMemoryLedgerStore) -> None:
        """호출 횟수 기록"""
        await ledger.get_account(1)
        await ledger.get_account(2)

        assert ledger.call_count("get_account") == 2
        assert ledger.call_count("list_rates") == 0
