"""
통합 테스트 fixture

샘플 원장이 적재된 임시 SQLite DB.
"""

from pathlib import Path

import pytest_asyncio

from adapters.db.sqlite_adapter import SQLiteAdapter, init_schema
from scripts.init_db import load_sample_ledger


@pytest_asyncio.fixture
async def sample_db_path(tmp_path: Path) -> Path:
    """스키마 + 샘플 원장 (계정 5, 환율 6, 거래 9)"""
    db_path = tmp_path / "ledger.db"
    async with SQLiteAdapter(db_path) as db:
        await init_schema(db)
        await load_sample_ledger(db)
    return db_path
