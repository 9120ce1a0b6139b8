"""
SQLite 어댑터 테스트

SQLiteAdapter, create_connection, init_schema 테스트.
"""

from pathlib import Path

import aiosqlite
import pytest
import pytest_asyncio

from adapters.db.sqlite_adapter import (
    SQLiteAdapter,
    create_connection,
    init_schema,
)


class TestCreateConnection:
    """create_connection 테스트"""

    @pytest.mark.asyncio
    async def test_create_connection(self, tmp_path: Path) -> None:
        """쓰기 연결 생성 (WAL 모드)"""
        db_path = tmp_path / "test.db"

        conn = await create_connection(db_path)

        cursor = await conn.execute("PRAGMA journal_mode")
        row = await cursor.fetchone()
        assert row[0].upper() == "WAL"

        await conn.close()

    @pytest.mark.asyncio
    async def test_creates_parent_directory(self, tmp_path: Path) -> None:
        """부모 디렉토리 생성"""
        db_path = tmp_path / "subdir" / "test.db"

        conn = await create_connection(db_path)

        assert db_path.parent.exists()

        await conn.close()

    @pytest.mark.asyncio
    async def test_foreign_keys_enabled(self, tmp_path: Path) -> None:
        """외래키 제약 활성화"""
        conn = await create_connection(tmp_path / "fk.db")

        cursor = await conn.execute("PRAGMA foreign_keys")
        row = await cursor.fetchone()
        assert row[0] == 1

        await conn.close()

    @pytest.mark.asyncio
    async def test_readonly_missing_file_fails(self, tmp_path: Path) -> None:
        """읽기 전용 연결은 파일이 없으면 실패"""
        db_path = tmp_path / "missing.db"

        with pytest.raises(aiosqlite.OperationalError):
            await create_connection(db_path, readonly=True)

        assert not db_path.exists()

    @pytest.mark.asyncio
    async def test_readonly_rejects_writes(self, tmp_path: Path) -> None:
        """읽기 전용 연결로 쓰기 불가"""
        db_path = tmp_path / "ro.db"
        writer = await create_connection(db_path)
        await writer.execute("CREATE TABLE t (id INTEGER)")
        await writer.commit()
        await writer.close()

        reader = await create_connection(db_path, readonly=True)
        with pytest.raises(aiosqlite.OperationalError):
            await reader.execute("INSERT INTO t (id) VALUES (1)")
        await reader.close()


class TestSQLiteAdapter:
    """SQLiteAdapter 테스트"""

    @pytest_asyncio.fixture
    async def adapter(self, tmp_path: Path) -> SQLiteAdapter:
        """어댑터 픽스처"""
        adapter = SQLiteAdapter(tmp_path / "test.db")
        await adapter.connect()
        yield adapter
        await adapter.close()

    @pytest.mark.asyncio
    async def test_connect_and_close(self, tmp_path: Path) -> None:
        """연결 및 종료"""
        adapter = SQLiteAdapter(tmp_path / "test.db")

        assert adapter.is_connected is False

        await adapter.connect()
        assert adapter.is_connected is True

        await adapter.close()
        assert adapter.is_connected is False

    @pytest.mark.asyncio
    async def test_execute_and_fetchone(self, adapter: SQLiteAdapter) -> None:
        """SQL 실행 후 단건 조회"""
        await adapter.execute("CREATE TABLE test (id INTEGER PRIMARY KEY, name TEXT)")
        await adapter.execute("INSERT INTO test (name) VALUES (?)", ("원장",))
        await adapter.commit()

        row = await adapter.fetchone("SELECT name FROM test WHERE id = 1")
        assert row[0] == "원장"

    @pytest.mark.asyncio
    async def test_fetchall(self, adapter: SQLiteAdapter) -> None:
        """전체 조회"""
        await adapter.execute("CREATE TABLE items (value TEXT)")
        await adapter.executemany(
            "INSERT INTO items (value) VALUES (?)",
            [("KES",), ("NGN",), ("USD",)],
        )
        await adapter.commit()

        rows = await adapter.fetchall("SELECT value FROM items ORDER BY value")

        assert [row[0] for row in rows] == ["KES", "NGN", "USD"]

    @pytest.mark.asyncio
    async def test_transaction_commit(self, adapter: SQLiteAdapter) -> None:
        """트랜잭션 커밋"""
        await adapter.execute("CREATE TABLE tx_test (id INTEGER)")
        await adapter.commit()

        async with adapter.transaction() as conn:
            await conn.execute("INSERT INTO tx_test (id) VALUES (1)")
            await conn.execute("INSERT INTO tx_test (id) VALUES (2)")

        rows = await adapter.fetchall("SELECT id FROM tx_test")
        assert len(rows) == 2

    @pytest.mark.asyncio
    async def test_transaction_rollback(self, adapter: SQLiteAdapter) -> None:
        """예외 발생 시 롤백"""
        await adapter.execute("CREATE TABLE tx_test2 (id INTEGER)")
        await adapter.commit()

        with pytest.raises(ValueError):
            async with adapter.transaction() as conn:
                await conn.execute("INSERT INTO tx_test2 (id) VALUES (1)")
                raise ValueError("의도적 에러")

        rows = await adapter.fetchall("SELECT id FROM tx_test2")
        assert len(rows) == 0

    @pytest.mark.asyncio
    async def test_table_exists(self, adapter: SQLiteAdapter) -> None:
        """테이블 존재 확인"""
        assert await adapter.table_exists("nonexistent") is False

        await adapter.execute("CREATE TABLE existing (id INTEGER)")
        await adapter.commit()

        assert await adapter.table_exists("existing") is True

    @pytest.mark.asyncio
    async def test_context_manager(self, tmp_path: Path) -> None:
        """컨텍스트 매니저"""
        async with SQLiteAdapter(tmp_path / "ctx_test.db") as adapter:
            assert adapter.is_connected is True
            await adapter.execute("CREATE TABLE ctx (id INTEGER)")

        assert adapter.is_connected is False


class TestInitSchema:
    """init_schema 테스트"""

    @pytest.mark.asyncio
    async def test_init_schema_creates_tables(self, tmp_path: Path) -> None:
        """원장 테이블 생성"""
        async with SQLiteAdapter(tmp_path / "schema_test.db") as adapter:
            await init_schema(adapter)

            assert await adapter.table_exists("accounts") is True
            assert await adapter.table_exists("transactions") is True
            assert await adapter.table_exists("currency_conversions") is True

    @pytest.mark.asyncio
    async def test_init_schema_idempotent(self, tmp_path: Path) -> None:
        """여러 번 실행해도 에러 없음"""
        async with SQLiteAdapter(tmp_path / "idempotent_test.db") as adapter:
            await init_schema(adapter)
            await init_schema(adapter)

            assert await adapter.table_exists("transactions") is True

    @pytest.mark.asyncio
    async def test_receiver_index_exists(self, tmp_path: Path) -> None:
        """역추적용 receiver_id 인덱스 생성"""
        async with SQLiteAdapter(tmp_path / "index_test.db") as adapter:
            await init_schema(adapter)

            row = await adapter.fetchone(
                "SELECT name FROM sqlite_master WHERE type='index' AND name=?",
                ("ix_transactions_receiver_ts",),
            )
            assert row is not None

    @pytest.mark.asyncio
    async def test_kind_check_constraint(self, tmp_path: Path) -> None:
        """알 수 없는 거래 유형은 거부"""
        async with SQLiteAdapter(tmp_path / "check_test.db") as adapter:
            await init_schema(adapter)

            with pytest.raises(aiosqlite.IntegrityError):
                await adapter.execute("""
                    INSERT INTO transactions (
                        transaction_id, kind, ts, status,
                        sender_id, receiver_id, sender_amount, receiver_amount,
                        sender_currency, receiver_currency
                    ) VALUES (
                        1, 'airdrop', '2024-01-01 10:00:00', 'successful',
                        1, 1, '10.00', '10.00', 'USD', 'USD'
                    )
                """)

    @pytest.mark.asyncio
    async def test_rate_primary_key(self, tmp_path: Path) -> None:
        """같은 통화쌍 환율은 하나만 존재"""
        async with SQLiteAdapter(tmp_path / "pk_test.db") as adapter:
            await init_schema(adapter)

            await adapter.execute(
                "INSERT INTO currency_conversions VALUES ('USD', 'KES', '150.00')"
            )
            await adapter.commit()

            with pytest.raises(aiosqlite.IntegrityError):
                await adapter.execute(
                    "INSERT INTO currency_conversions VALUES ('USD', 'KES', '151.00')"
                )
