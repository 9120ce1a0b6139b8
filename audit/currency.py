"""
통화 정규화

금액을 대상 통화로 변환. 직접 환율이 없으면 1:1로 변환 (의도된 손실 정책:
정확도보다 감사 지속성을 우선). 이 모듈의 변환은 절대 실패하지 않음.
"""

import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import Callable, Iterable

from adapters.interfaces import ILedgerStore
from core.constants import Money
from core.ledger.models import RatePair

logger = logging.getLogger(__name__)

RateLookup = Callable[[str, str], Decimal | None]

FALLBACK_RATE = Decimal("1")


def quantize_amount(amount: Decimal) -> Decimal:
    """소수점 2자리로 반올림 (ROUND_HALF_UP)"""
    return amount.quantize(Money.CENT, rounding=ROUND_HALF_UP)


def format_amount(amount: Decimal) -> str:
    """직렬화용 금액 문자열 (항상 소수점 2자리)

    Example:
        >>> format_amount(Decimal("750"))
        '750.00'
    """
    return str(quantize_amount(amount))


def convert(
    amount: Decimal,
    from_currency: str,
    to_currency: str,
    rate_lookup: RateLookup,
) -> Decimal:
    """통화 변환

    Args:
        amount: 변환할 금액
        from_currency: 원 통화
        to_currency: 대상 통화
        rate_lookup: (from, to) -> 환율 또는 None

    Returns:
        같은 통화면 amount 그대로, 아니면 환율 적용 후 소수점 2자리
    """
    if from_currency == to_currency:
        return amount

    rate = rate_lookup(from_currency, to_currency)
    if rate is None:
        logger.debug(f"환율 없음, 1:1 적용: {from_currency} → {to_currency}")
        rate = FALLBACK_RATE

    return quantize_amount(amount * rate)


class RateBook:
    """요청 단위 환율 스냅샷

    감사 1건 안의 모든 변환이 같은 환율을 보도록 요청 시작 시 한 번 적재.

    Args:
        pairs: 방향성 환율 목록
    """

    def __init__(self, pairs: Iterable[RatePair] = ()):
        self._rates: dict[tuple[str, str], Decimal] = {
            (pair.from_currency, pair.to_currency): pair.rate for pair in pairs
        }

    @classmethod
    async def load(cls, store: ILedgerStore) -> "RateBook":
        """원장 저장소에서 환율 스냅샷 적재"""
        return cls(await store.list_rates())

    def __len__(self) -> int:
        return len(self._rates)

    def lookup(self, from_currency: str, to_currency: str) -> Decimal | None:
        """직접 환율 조회 (없으면 None)"""
        return self._rates.get((from_currency, to_currency))

    def convert(self, amount: Decimal, from_currency: str, to_currency: str) -> Decimal:
        """스냅샷 환율로 변환 (convert() 위임)"""
        return convert(amount, from_currency, to_currency, self.lookup)
