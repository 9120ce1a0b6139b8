#!/usr/bin/env python3
"""
원장 DB 초기화 스크립트

스키마 생성 후 샘플 원장(계정 5개, 환율 6개, 거래 9건)을 적재.
여러 번 실행해도 안전 (이미 있는 행은 건너뜀).

실행 방법:
    python scripts/init_db.py
    python scripts/init_db.py --db data/ledger.db --schema-only
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from adapters.db.sqlite_adapter import SQLiteAdapter, init_schema
from core.config.loader import get_settings

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger("init_db")


# (account_id, balance, currency)
SAMPLE_ACCOUNTS = [
    (1, "1000.00", "USD"),
    (2, "50000.00", "KES"),
    (3, "200000.00", "NGN"),
    (4, "500.00", "USD"),
    (5, "75000.00", "KES"),
]

# (from, to, rate)
SAMPLE_RATES = [
    ("USD", "KES", "150.00"),
    ("KES", "USD", "0.0067"),
    ("USD", "NGN", "800.00"),
    ("NGN", "USD", "0.00125"),
    ("KES", "NGN", "5.33"),
    ("NGN", "KES", "0.1875"),
]

# (id, kind, ts, status, sender, receiver, sender_amount, receiver_amount,
#  sender_currency, receiver_currency, refund_of, reversal_of, reversal_reason)
SAMPLE_TRANSACTIONS = [
    (1, "deposit", "2024-01-01 10:00:00", "successful", 1, 1,
     "1000.00", "1000.00", "USD", "USD", None, None, None),
    (2, "deposit", "2024-01-01 11:00:00", "successful", 2, 2,
     "50000.00", "50000.00", "KES", "KES", None, None, None),
    (3, "transfer", "2024-01-02 14:30:00", "successful", 1, 3,
     "100.00", "80000.00", "USD", "NGN", None, None, None),
    (4, "transfer", "2024-01-03 09:15:00", "successful", 2, 1,
     "15000.00", "100.00", "KES", "USD", None, None, None),
    (5, "transfer", "2024-01-04 16:45:00", "successful", 3, 1,
     "40000.00", "50.00", "NGN", "USD", None, None, None),
    (6, "withdrawal", "2024-01-05 12:00:00", "successful", 1, 1,
     "200.00", "200.00", "USD", "USD", None, None, None),
    # 실패 거래 (계산에서 제외되어야 함)
    (7, "transfer", "2024-01-06 10:00:00", "failed", 1, 3,
     "500.00", "400000.00", "USD", "NGN", None, None, None),
    (10008, "refund", "2024-01-10 14:00:00", "successful", 3, 3,
     "50000.00", "50000.00", "NGN", "NGN", 3, None, None),
    (10009, "reversal", "2024-01-11 09:30:00", "successful", 1, 1,
     "100.00", "100.00", "USD", "USD", None, 6,
     "Incorrect withdrawal amount - customer dispute resolved"),
]


async def load_sample_ledger(db: SQLiteAdapter) -> None:
    """샘플 원장 적재

    Args:
        db: 스키마가 초기화된 쓰기 가능 SQLiteAdapter
    """
    async with db.transaction():
        await db.executemany(
            "INSERT OR IGNORE INTO accounts (account_id, balance, currency) VALUES (?, ?, ?)",
            SAMPLE_ACCOUNTS,
        )
        await db.executemany(
            """
            INSERT OR IGNORE INTO currency_conversions (from_currency, to_currency, rate)
            VALUES (?, ?, ?)
            """,
            SAMPLE_RATES,
        )
        await db.executemany(
            """
            INSERT OR IGNORE INTO transactions (
                transaction_id, kind, ts, status, sender_id, receiver_id,
                sender_amount, receiver_amount, sender_currency, receiver_currency,
                refund_of, reversal_of, reversal_reason
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
            SAMPLE_TRANSACTIONS,
        )

    logger.info(
        f"샘플 원장 적재 완료: accounts={len(SAMPLE_ACCOUNTS)}, "
        f"rates={len(SAMPLE_RATES)}, transactions={len(SAMPLE_TRANSACTIONS)}"
    )


async def main(db_path: Path, schema_only: bool) -> None:
    logger.info(f"원장 DB 초기화: {db_path}")

    async with SQLiteAdapter(db_path) as db:
        if await db.table_exists("transactions"):
            logger.info("기존 원장 스키마 발견 (누락된 테이블/인덱스만 생성)")
        await init_schema(db)
        if not schema_only:
            await load_sample_ledger(db)

    logger.info("원장 DB 초기화 완료 ✓")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="원장 DB 초기화")
    parser.add_argument(
        "--db",
        type=Path,
        default=None,
        help="원장 DB 경로 (기본: settings.yaml의 ledger.db_path)",
    )
    parser.add_argument(
        "--schema-only",
        action="store_true",
        help="샘플 데이터 없이 스키마만 생성",
    )
    args = parser.parse_args()

    asyncio.run(main(args.db or get_settings().db_path, args.schema_only))
