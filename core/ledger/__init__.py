"""
원장 (Ledger) 패키지

감사 코어가 읽는 원장 스냅샷 모델과 읽기 전용 저장소.

사용 예시:
```python
from core.ledger import LedgerStore

async with SQLiteAdapter(db_path, readonly=True) as db:
    store = LedgerStore(db)
    account = await store.get_account(1)
    history = await store.list_relevant_transactions(1)
```
"""

from core.ledger.models import (
    Account,
    Deposit,
    RatePair,
    Refund,
    Reversal,
    Transaction,
    Transfer,
    Withdrawal,
    build_transaction,
)
from core.ledger.store import LedgerStore, open_ledger_store
from core.ledger.types import TransactionKind, TransactionStatus

__all__ = [
    # 저장소
    "LedgerStore",
    "open_ledger_store",
    # 모델
    "Account",
    "RatePair",
    "Transaction",
    "Deposit",
    "Withdrawal",
    "Transfer",
    "Refund",
    "Reversal",
    "build_transaction",
    # Enum
    "TransactionKind",
    "TransactionStatus",
]
