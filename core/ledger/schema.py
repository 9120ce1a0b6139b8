"""
원장 스키마 초기화

accounts / transactions / currency_conversions 테이블과 인덱스 생성.
CREATE IF NOT EXISTS 패턴으로 여러 번 호출해도 안전.

주의: 금액/환율은 Decimal 정밀도 보존을 위해 TEXT로 저장
"""

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from adapters.db.sqlite_adapter import SQLiteAdapter

logger = logging.getLogger(__name__)


async def init_ledger_schema(db: "SQLiteAdapter") -> None:
    """원장 스키마 초기화 (테이블 + 인덱스)

    Args:
        db: 쓰기 가능한 SQLiteAdapter
    """
    await _create_ledger_tables(db)
    await _create_ledger_indexes(db)
    await db.commit()
    logger.info("원장 스키마 초기화 완료")


async def _create_ledger_tables(db: "SQLiteAdapter") -> None:
    """원장 테이블 생성"""

    await db.execute("""
        CREATE TABLE IF NOT EXISTS accounts (
            account_id       INTEGER PRIMARY KEY,
            balance          TEXT NOT NULL DEFAULT '0.00',
            currency         TEXT NOT NULL
        )
    """)

    await db.execute("""
        CREATE TABLE IF NOT EXISTS transactions (
            transaction_id    INTEGER PRIMARY KEY,
            kind              TEXT NOT NULL
                              CHECK (kind IN ('deposit', 'withdrawal', 'transfer', 'refund', 'reversal')),
            ts                TEXT NOT NULL
                              CHECK (julianday(ts) IS NOT NULL),
            status            TEXT NOT NULL
                              CHECK (status IN ('successful', 'failed', 'pending')),

            sender_id         INTEGER NOT NULL,
            receiver_id       INTEGER NOT NULL,
            sender_amount     TEXT NOT NULL,
            receiver_amount   TEXT NOT NULL,
            sender_currency   TEXT NOT NULL,
            receiver_currency TEXT NOT NULL,

            refund_of         INTEGER REFERENCES transactions(transaction_id),
            reversal_of       INTEGER REFERENCES transactions(transaction_id),
            reversal_reason   TEXT
        )
    """)

    await db.execute("""
        CREATE TABLE IF NOT EXISTS currency_conversions (
            from_currency    TEXT NOT NULL,
            to_currency      TEXT NOT NULL,
            rate             TEXT NOT NULL,
            PRIMARY KEY (from_currency, to_currency)
        )
    """)


async def _create_ledger_indexes(db: "SQLiteAdapter") -> None:
    """조회 인덱스 생성

    provenance 역추적은 receiver_id 인덱스 조회에 의존.
    """

    await db.execute("""
        CREATE INDEX IF NOT EXISTS ix_transactions_receiver_ts
        ON transactions(receiver_id, status, ts)
    """)

    await db.execute("""
        CREATE INDEX IF NOT EXISTS ix_transactions_sender_ts
        ON transactions(sender_id, status, ts)
    """)

    await db.execute("""
        CREATE INDEX IF NOT EXISTS ix_transactions_kind
        ON transactions(kind)
    """)
