"""
데이터베이스 어댑터

원장 SQLite 연결 관리.
"""

from adapters.db.sqlite_adapter import (
    SQLiteAdapter,
    create_connection,
    init_schema,
)

__all__ = [
    "SQLiteAdapter",
    "create_connection",
    "init_schema",
]
