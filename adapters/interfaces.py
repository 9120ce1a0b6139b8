"""
어댑터 인터페이스 정의

Protocol 기반으로 정의하여 의존성 주입 및 Mock 교체 가능.
모든 원장 저장소 구현체는 이 Protocol을 준수해야 함.
"""

from datetime import datetime
from decimal import Decimal
from typing import Protocol, runtime_checkable

from core.ledger.models import Account, RatePair, Transaction


@runtime_checkable
class ILedgerStore(Protocol):
    """원장 저장소 인터페이스 (읽기 전용)

    감사 코어는 이 인터페이스로만 원장을 조회함.
    모든 조회는 successful 거래만 반환.
    금액/환율은 반드시 Decimal 타입 사용.
    """

    async def list_relevant_transactions(self, account_id: int) -> list[Transaction]:
        """계정이 행위자이거나 당사자인 거래 (시간순)

        Args:
            account_id: 계정 ID

        Returns:
            시간순 (동시각은 거래 ID순) Transaction 목록
        """
        ...

    async def list_incoming_transfers(self, account_id: int) -> list[Transaction]:
        """계정으로 들어온 이체 (provenance 시드)"""
        ...

    async def list_transactions_received_by(
        self,
        account_id: int,
        before: datetime,
    ) -> list[Transaction]:
        """계정이 before 시각 이전(포함)에 수신한 거래

        receiver_id 인덱스 조회를 전제로 함 (역추적 비용이 원장 크기에 비례하지 않도록).
        """
        ...

    async def get_account(self, account_id: int) -> Account | None:
        """계정 조회

        Returns:
            Account 또는 None (계정 없음)
        """
        ...

    async def lookup_rate(self, from_currency: str, to_currency: str) -> Decimal | None:
        """직접 환율 조회

        Returns:
            환율 또는 None (미설정 - 오류 아님)
        """
        ...

    async def list_rates(self) -> list[RatePair]:
        """요청 단위 환율 스냅샷"""
        ...
