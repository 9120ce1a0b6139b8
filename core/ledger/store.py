"""
원장 저장소 (읽기 전용)

감사 코어가 원장을 조회하는 유일한 경로.
ILedgerStore Protocol 구현 (SQLite).
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from datetime import datetime
from decimal import Decimal
from pathlib import Path
from typing import TYPE_CHECKING, Any, AsyncIterator

import aiosqlite

from core.errors import UpstreamUnavailableError
from core.ledger.models import Account, RatePair, Transaction, build_transaction
from core.ledger.types import TransactionKind, TransactionStatus
from core.utils.timezone import format_ledger_ts, parse_ledger_ts

if TYPE_CHECKING:
    from adapters.db.sqlite_adapter import SQLiteAdapter

logger = logging.getLogger(__name__)


_TRANSACTION_COLUMNS = """
    transaction_id, kind, ts, status,
    sender_id, receiver_id, sender_amount, receiver_amount,
    sender_currency, receiver_currency,
    refund_of, reversal_of, reversal_reason
"""

_SUCCESSFUL = TransactionStatus.SUCCESSFUL.value


def _row_to_transaction(row: tuple[Any, ...]) -> Transaction:
    """transactions 행 → Transaction 변형"""
    return build_transaction(
        row[1],
        transaction_id=row[0],
        timestamp=parse_ledger_ts(row[2]),
        status=row[3],
        sender_id=row[4],
        receiver_id=row[5],
        sender_amount=Decimal(row[6]),
        receiver_amount=Decimal(row[7]),
        sender_currency=row[8],
        receiver_currency=row[9],
        refund_of=row[10],
        reversal_of=row[11],
        reversal_reason=row[12],
    )


class LedgerStore:
    """원장 저장소

    거래/계정/환율을 조회하는 읽기 전용 클래스.
    SQLite 오류는 UpstreamUnavailableError로 변환 (재시도는 호출자 몫).

    Args:
        db: SQLite 어댑터 (readonly 권장)
    """

    def __init__(self, db: SQLiteAdapter):
        self.db = db

    async def _fetchall(
        self,
        sql: str,
        parameters: tuple[Any, ...] | None = None,
    ) -> list[tuple[Any, ...]]:
        try:
            return await self.db.fetchall(sql, parameters)
        except aiosqlite.Error as e:
            logger.error(f"원장 조회 실패: {e}")
            raise UpstreamUnavailableError(f"Ledger store query failed: {e}") from e

    async def _fetchone(
        self,
        sql: str,
        parameters: tuple[Any, ...] | None = None,
    ) -> tuple[Any, ...] | None:
        try:
            return await self.db.fetchone(sql, parameters)
        except aiosqlite.Error as e:
            logger.error(f"원장 조회 실패: {e}")
            raise UpstreamUnavailableError(f"Ledger store query failed: {e}") from e

    # -------------------------------------------------------------------------
    # 거래 조회
    # -------------------------------------------------------------------------

    async def list_relevant_transactions(self, account_id: int) -> list[Transaction]:
        """계정 관련 성공 거래 (시간순, 동시각은 ID순)

        - deposit: 입금 계정 (receiver)
        - withdrawal: 출금 계정 (sender)
        - transfer/refund/reversal: 송신 또는 수신 당사자

        Args:
            account_id: 계정 ID

        Returns:
            Transaction 목록
        """
        rows = await self._fetchall(
            f"""
            SELECT {_TRANSACTION_COLUMNS}
            FROM transactions
            WHERE status = ?
              AND (
                    (kind = 'deposit' AND receiver_id = ?)
                 OR (kind = 'withdrawal' AND sender_id = ?)
                 OR (kind IN ('transfer', 'refund', 'reversal')
                     AND (sender_id = ? OR receiver_id = ?))
              )
            ORDER BY julianday(ts) ASC, transaction_id ASC
            """,
            (_SUCCESSFUL, account_id, account_id, account_id, account_id),
        )
        return [_row_to_transaction(row) for row in rows]

    async def list_incoming_transfers(self, account_id: int) -> list[Transaction]:
        """계정으로 들어온 성공 이체 (provenance 시드)"""
        rows = await self._fetchall(
            f"""
            SELECT {_TRANSACTION_COLUMNS}
            FROM transactions
            WHERE receiver_id = ?
              AND status = ?
              AND kind = ?
            ORDER BY julianday(ts) ASC, transaction_id ASC
            """,
            (account_id, _SUCCESSFUL, TransactionKind.TRANSFER.value),
        )
        return [_row_to_transaction(row) for row in rows]

    async def list_transactions_received_by(
        self,
        account_id: int,
        before: datetime,
    ) -> list[Transaction]:
        """계정이 before 시각까지 수신한 성공 거래 (provenance 확장 단계)

        출금은 자금 원천이 될 수 없으므로 제외.
        ts 표기가 섞여 있을 수 있으므로 (T 구분자, 소수 초, UTC 오프셋) julianday로 비교.

        Args:
            account_id: 수신 계정 ID
            before: 기준 시각 (이 시각 포함)

        Returns:
            Transaction 목록
        """
        rows = await self._fetchall(
            f"""
            SELECT {_TRANSACTION_COLUMNS}
            FROM transactions
            WHERE receiver_id = ?
              AND status = ?
              AND julianday(ts) <= julianday(?)
              AND kind != ?
            ORDER BY julianday(ts) ASC, transaction_id ASC
            """,
            (
                account_id,
                _SUCCESSFUL,
                format_ledger_ts(before),
                TransactionKind.WITHDRAWAL.value,
            ),
        )
        return [_row_to_transaction(row) for row in rows]

    # -------------------------------------------------------------------------
    # 계정 / 환율
    # -------------------------------------------------------------------------

    async def get_account(self, account_id: int) -> Account | None:
        """계정 조회 (없으면 None)"""
        row = await self._fetchone(
            "SELECT account_id, currency, balance FROM accounts WHERE account_id = ?",
            (account_id,),
        )
        if row is None:
            return None

        return Account(
            account_id=row[0],
            base_currency=row[1],
            stored_balance=Decimal(row[2]),
        )

    async def lookup_rate(self, from_currency: str, to_currency: str) -> Decimal | None:
        """직접 환율 조회 (없으면 None - 오류 아님)"""
        row = await self._fetchone(
            """
            SELECT rate FROM currency_conversions
            WHERE from_currency = ? AND to_currency = ?
            """,
            (from_currency, to_currency),
        )
        return Decimal(row[0]) if row else None

    async def list_rates(self) -> list[RatePair]:
        """전체 환율 스냅샷"""
        rows = await self._fetchall(
            """
            SELECT from_currency, to_currency, rate
            FROM currency_conversions
            ORDER BY from_currency, to_currency
            """
        )
        return [
            RatePair(from_currency=row[0], to_currency=row[1], rate=Decimal(row[2]))
            for row in rows
        ]


@asynccontextmanager
async def open_ledger_store(db_path: Path | str) -> AsyncIterator[LedgerStore]:
    """읽기 전용 원장 저장소 열기

    연결 실패(파일 없음, 잠금 등)는 UpstreamUnavailableError로 변환.

    사용 예시:
    ```python
    async with open_ledger_store(settings.db_path) as store:
        report = await AuditService(store).build_audit_report(1)
    ```
    """
    from adapters.db.sqlite_adapter import SQLiteAdapter

    db = SQLiteAdapter(db_path, readonly=True)
    try:
        await db.connect()
    except aiosqlite.Error as e:
        logger.error(f"원장 DB 연결 실패: {db_path} ({e})")
        raise UpstreamUnavailableError(f"Ledger store unavailable: {e}") from e

    try:
        yield LedgerStore(db)
    finally:
        await db.close()
