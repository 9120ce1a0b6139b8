"""
감사 서비스

buildAuditReport 진입점. 계정 검증 → 환율 스냅샷 → 영향 계산/출처 추적 (동시 실행)
→ 집계 → 대사 → 권고.

전체 과정은 audit_timeout_sec 안에 끝나야 하며, 초과 시 UpstreamUnavailableError.
코어는 재시도하지 않음 (호출자 책임).
"""

import asyncio
import logging
from datetime import datetime
from typing import Any, Awaitable, Callable, TypeVar

from adapters.interfaces import ILedgerStore
from audit.currency import RateBook
from audit.impact import TransactionImpactCalculator, calculated_balance
from audit.metrics import aggregate_metrics
from audit.provenance import ProvenanceTracer
from audit.reconciler import AuditSummary
from audit.recommendations import generate_recommendations
from audit.report import AuditReport
from core.constants import Defaults
from core.errors import (
    InternalInconsistencyError,
    InvalidInputError,
    NotFoundError,
    UpstreamUnavailableError,
)
from core.ledger.models import Account
from core.utils.timezone import now_utc

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]
T = TypeVar("T")

INVALID_ACCOUNT_ID_MESSAGE = "Invalid account ID: must be a positive integer"


async def join_or_cancel(*aws: Awaitable[Any]) -> list[Any]:
    """모든 작업을 동시에 실행하고 결과를 순서대로 반환

    하나라도 실패(또는 취소)하면 나머지 작업을 취소하고 종료를 기다린 뒤 예외 전파.
    반환 또는 예외 시점에 실행 중인 원장 조회는 없음.
    """
    tasks = [asyncio.ensure_future(aw) for aw in aws]
    try:
        return list(await asyncio.gather(*tasks))
    except BaseException:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise


def validate_account_id(raw: object) -> int:
    """계정 ID 검증

    양의 정수 또는 숫자 문자열("42")만 허용. 원장 접근 전에 호출.

    Args:
        raw: 외부 입력 (경로 파라미터, CLI 인자 등)

    Returns:
        검증된 계정 ID

    Raises:
        InvalidInputError: 양의 정수가 아님
    """
    # bool은 int 하위 타입
    if isinstance(raw, bool):
        raise InvalidInputError(INVALID_ACCOUNT_ID_MESSAGE)

    if isinstance(raw, int):
        value = raw
    elif isinstance(raw, float) and raw.is_integer():
        value = int(raw)
    elif isinstance(raw, str) and raw.strip().isascii() and raw.strip().isdigit():
        value = int(raw.strip())
    else:
        raise InvalidInputError(INVALID_ACCOUNT_ID_MESSAGE)

    if value <= 0:
        raise InvalidInputError(INVALID_ACCOUNT_ID_MESSAGE)
    return value


class AuditService:
    """계정 감사 서비스

    요청 간 공유 상태 없음. 같은 스냅샷 + 고정 clock이면 보고서가 동일.

    Args:
        store: 원장 저장소 (읽기 전용)
        max_trace_depth: 출처 추적 최대 깊이
        timeout_sec: 요청 1건의 wall-clock 상한
        clock: generated_at 시각 공급자
    """

    def __init__(
        self,
        store: ILedgerStore,
        max_trace_depth: int = Defaults.MAX_TRACE_DEPTH,
        timeout_sec: float = Defaults.AUDIT_TIMEOUT_SEC,
        clock: Clock = now_utc,
    ):
        self.store = store
        self.max_trace_depth = max_trace_depth
        self.timeout_sec = timeout_sec
        self.clock = clock

    async def build_audit_report(self, account_id: object) -> AuditReport:
        """계정 감사 보고서 생성

        Raises:
            InvalidInputError: 잘못된 계정 ID
            NotFoundError: 계정 없음
            UpstreamUnavailableError: 원장 접근 불가 또는 타임아웃
            InternalInconsistencyError: 요청 도중 계정 소멸
        """
        valid_id = validate_account_id(account_id)
        logger.info(f"감사 시작: account={valid_id}")
        report = await self._bounded(self._build_report(valid_id), valid_id)
        logger.info(
            f"감사 완료: account={valid_id}, "
            f"transactions={report.metrics.total_transactions}, "
            f"trail={len(report.provenance_trail)}, "
            f"status={report.summary.balance_status.value}, "
            f"recommendations={len(report.recommendations)}"
        )
        return report

    async def get_balance_summary(self, account_id: object) -> AuditSummary:
        """잔고 대사 요약만 계산 (출처 추적 생략)"""
        valid_id = validate_account_id(account_id)
        return await self._bounded(self._build_summary(valid_id), valid_id)

    async def _bounded(self, coro: Awaitable[T], account_id: int) -> T:
        try:
            return await asyncio.wait_for(coro, timeout=self.timeout_sec)
        except asyncio.TimeoutError as e:
            logger.warning(
                f"감사 타임아웃: account={account_id}, timeout={self.timeout_sec}s"
            )
            raise UpstreamUnavailableError(
                f"Audit of account {account_id} timed out after {self.timeout_sec}s"
            ) from e

    async def _require_account(self, account_id: int) -> Account:
        account = await self.store.get_account(account_id)
        if account is None:
            raise NotFoundError(account_id)
        return account

    async def _ensure_still_present(self, account_id: int) -> None:
        if await self.store.get_account(account_id) is None:
            raise InternalInconsistencyError(
                f"Account {account_id} disappeared during audit"
            )

    async def _build_summary(self, account_id: int) -> AuditSummary:
        account = await self._require_account(account_id)
        rates = await RateBook.load(self.store)
        history = await TransactionImpactCalculator(self.store, rates).calculate(account)
        await self._ensure_still_present(account_id)
        return AuditSummary.build(account, calculated_balance(history))

    async def _build_report(self, account_id: int) -> AuditReport:
        account = await self._require_account(account_id)
        rates = await RateBook.load(self.store)

        calculator = TransactionImpactCalculator(self.store, rates)
        tracer = ProvenanceTracer(self.store, rates, self.max_trace_depth)
        history, trail = await join_or_cancel(
            calculator.calculate(account),
            tracer.trace(account_id),
        )
        await self._ensure_still_present(account_id)

        summary = AuditSummary.build(account, calculated_balance(history))
        metrics = aggregate_metrics(history, trail)
        recommendations = generate_recommendations(summary, metrics)

        return AuditReport(
            account_id=account_id,
            generated_at=self.clock(),
            summary=summary,
            metrics=metrics,
            transaction_history=tuple(history),
            provenance_trail=tuple(trail),
            recommendations=tuple(recommendations),
        )
