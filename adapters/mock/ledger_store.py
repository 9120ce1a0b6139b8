"""
메모리 원장 저장소

테스트/데모용 ILedgerStore 구현.
LedgerStore(SQLite)와 동일한 필터/정렬 규칙을 따름.
"""

import asyncio
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal

from core.errors import UpstreamUnavailableError
from core.ledger.models import Account, RatePair, Transaction, build_transaction
from core.ledger.types import TransactionKind, TransactionStatus
from core.utils.timezone import ensure_utc


@dataclass
class MockLedgerState:
    """Mock 상태 (메모리 내 저장)"""

    # 계정 (account_id -> Account)
    accounts: dict[int, Account] = field(default_factory=dict)

    # 거래 (transaction_id -> Transaction)
    transactions: dict[int, Transaction] = field(default_factory=dict)

    # 환율 ((from, to) -> rate)
    rates: dict[tuple[str, str], Decimal] = field(default_factory=dict)

    # 장애 시뮬레이션
    unavailable: bool = False
    delay_sec: float = 0.0

    # 조회 호출 횟수 (메서드명 -> 횟수)
    calls: dict[str, int] = field(default_factory=dict)


def _order_key(tx: Transaction) -> tuple[datetime, int]:
    return (tx.timestamp, tx.transaction_id)


class InMemoryLedgerStore:
    """메모리 원장 저장소

    ILedgerStore Protocol 구현.

    사용 예시:
    ```python
    store = InMemoryLedgerStore()
    store.add_account(1, "USD", Decimal("750.00"))
    store.add_transaction("deposit", 1, ts, sender_id=1, receiver_id=1, amount=Decimal("1000"))
    store.set_rate("KES", "USD", Decimal("0.0067"))
    ```
    """

    def __init__(self, state: MockLedgerState | None = None):
        self.state = state or MockLedgerState()

    # -------------------------------------------------------------------------
    # 상태 조작 메서드 (테스트용)
    # -------------------------------------------------------------------------

    def add_account(
        self,
        account_id: int,
        base_currency: str,
        stored_balance: Decimal = Decimal("0.00"),
    ) -> Account:
        """계정 추가"""
        account = Account(
            account_id=account_id,
            base_currency=base_currency,
            stored_balance=stored_balance,
        )
        self.state.accounts[account_id] = account
        return account

    def remove_account(self, account_id: int) -> None:
        """계정 제거"""
        self.state.accounts.pop(account_id, None)

    def add_transaction(
        self,
        kind: str | TransactionKind,
        transaction_id: int,
        timestamp: datetime,
        sender_id: int,
        receiver_id: int,
        amount: Decimal,
        currency: str = "USD",
        receiver_amount: Decimal | None = None,
        receiver_currency: str | None = None,
        status: str = TransactionStatus.SUCCESSFUL.value,
        refund_of: int | None = None,
        reversal_of: int | None = None,
        reversal_reason: str | None = None,
    ) -> Transaction:
        """거래 추가

        receiver_amount/receiver_currency 미지정 시 송신 측과 동일 (단일 통화 거래).
        """
        tx = build_transaction(
            kind,
            transaction_id=transaction_id,
            timestamp=ensure_utc(timestamp),
            status=status,
            sender_id=sender_id,
            receiver_id=receiver_id,
            sender_amount=amount,
            receiver_amount=amount if receiver_amount is None else receiver_amount,
            sender_currency=currency,
            receiver_currency=receiver_currency or currency,
            refund_of=refund_of,
            reversal_of=reversal_of,
            reversal_reason=reversal_reason,
        )
        self.state.transactions[transaction_id] = tx
        return tx

    def set_rate(self, from_currency: str, to_currency: str, rate: Decimal) -> None:
        """환율 설정"""
        self.state.rates[(from_currency, to_currency)] = rate

    def set_unavailable(self, unavailable: bool = True) -> None:
        """원장 접근 불가 시뮬레이션"""
        self.state.unavailable = unavailable

    def set_delay(self, delay_sec: float) -> None:
        """조회 지연 시뮬레이션 (타임아웃 테스트)"""
        self.state.delay_sec = delay_sec

    def call_count(self, method: str) -> int:
        """조회 메서드 호출 횟수"""
        return self.state.calls.get(method, 0)

    async def _touch(self, method: str) -> None:
        self.state.calls[method] = self.state.calls.get(method, 0) + 1
        if self.state.delay_sec > 0:
            await asyncio.sleep(self.state.delay_sec)
        if self.state.unavailable:
            raise UpstreamUnavailableError("Mock ledger store unavailable")

    def _successful(self) -> list[Transaction]:
        return sorted(
            (tx for tx in self.state.transactions.values() if tx.is_successful),
            key=_order_key,
        )

    # -------------------------------------------------------------------------
    # ILedgerStore 구현
    # -------------------------------------------------------------------------

    async def list_relevant_transactions(self, account_id: int) -> list[Transaction]:
        await self._touch("list_relevant_transactions")

        result = []
        for tx in self._successful():
            if tx.kind == TransactionKind.DEPOSIT:
                relevant = tx.receiver_id == account_id
            elif tx.kind == TransactionKind.WITHDRAWAL:
                relevant = tx.sender_id == account_id
            else:
                relevant = account_id in (tx.sender_id, tx.receiver_id)
            if relevant:
                result.append(tx)
        return result

    async def list_incoming_transfers(self, account_id: int) -> list[Transaction]:
        await self._touch("list_incoming_transfers")
        return [
            tx for tx in self._successful()
            if tx.kind == TransactionKind.TRANSFER and tx.receiver_id == account_id
        ]

    async def list_transactions_received_by(
        self,
        account_id: int,
        before: datetime,
    ) -> list[Transaction]:
        await self._touch("list_transactions_received_by")
        before = ensure_utc(before)
        return [
            tx for tx in self._successful()
            if tx.receiver_id == account_id
            and tx.timestamp <= before
            and tx.kind != TransactionKind.WITHDRAWAL
        ]

    async def get_account(self, account_id: int) -> Account | None:
        await self._touch("get_account")
        return self.state.accounts.get(account_id)

    async def lookup_rate(self, from_currency: str, to_currency: str) -> Decimal | None:
        await self._touch("lookup_rate")
        return self.state.rates.get((from_currency, to_currency))

    async def list_rates(self) -> list[RatePair]:
        await self._touch("list_rates")
        return [
            RatePair(from_currency=pair[0], to_currency=pair[1], rate=rate)
            for pair, rate in sorted(self.state.rates.items())
        ]
