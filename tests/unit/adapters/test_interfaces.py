"""
Protocol 인터페이스 테스트

ILedgerStore Protocol 준수 확인.
"""

from pathlib import Path

from adapters.db.sqlite_adapter import SQLiteAdapter
from adapters.interfaces import ILedgerStore
from adapters.mock.ledger_store import InMemoryLedgerStore
from core.ledger.store import LedgerStore


REQUIRED_METHODS = [
    "list_relevant_transactions",
    "list_incoming_transfers",
    "list_transactions_received_by",
    "get_account",
    "lookup_rate",
    "list_rates",
]


class TestILedgerStore:
    """ILedgerStore Protocol 테스트"""

    def test_in_memory_store_implements_protocol(self) -> None:
        """메모리 저장소가 Protocol을 구현하는지 확인"""
        assert isinstance(InMemoryLedgerStore(), ILedgerStore)

    def test_sqlite_store_implements_protocol(self, tmp_path: Path) -> None:
        """SQLite 저장소가 Protocol을 구현하는지 확인 (연결 없이 생성만)"""
        store = LedgerStore(SQLiteAdapter(tmp_path / "ledger.db", readonly=True))

        assert isinstance(store, ILedgerStore)

    def test_protocol_has_required_methods(self) -> None:
        """필수 조회 메서드 존재"""
        store = InMemoryLedgerStore()

        for method_name in REQUIRED_METHODS:
            assert hasattr(store, method_name), f"Missing method: {method_name}"
            assert callable(getattr(store, method_name))

    def test_protocol_is_read_only(self) -> None:
        """Protocol에 쓰기 메서드가 없음"""
        for name in dir(ILedgerStore):
            if name.startswith("_"):
                continue
            assert not name.startswith(("add_", "update_", "delete_", "set_"))

    def test_incomplete_store_rejected(self) -> None:
        """일부 메서드만 구현한 객체는 Protocol 불일치"""

        class PartialStore:
            async def get_account(self, account_id: int) -> None:
                return None

        assert not isinstance(PartialStore(), ILedgerStore)
