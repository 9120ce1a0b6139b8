"""
자금 출처 추적 (Provenance Tracer)

감사 계정으로 들어온 transfer에서 시작해 송신자의 과거 수신 거래를
역방향 BFS로 따라가며 자금 출처를 분류.

보장:
- 깊이 상한: depth < max_depth 인 노드만 확장
- 사이클 방지: 경로(account_path)에 이미 있는 계정으로는 확장하지 않음
- 시간 역행: 확장 후보는 부모 거래 시각 이하
- 추적 통화: 경로 전체에서 시드 거래의 수신 통화로 고정

deposit은 외부 자금 유입으로 sender = receiver = 입금 계정.
경로 안에 이미 있는 계정을 다시 방문하는 게 아니라 출처 자체이므로
사이클 검사 대상이 아니며 account_path에 추가하지 않음.
"""

import asyncio
import logging
from collections import deque
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Any, Iterable, Iterator

from adapters.interfaces import ILedgerStore
from audit.currency import RateBook, format_amount
from core.constants import Defaults
from core.ledger.models import Transaction
from core.ledger.types import TransactionKind
from core.types import LegitimacyStatus

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProvenanceNode:
    """추적 그래프 노드 (분류 전)

    Attributes:
        transaction: 이 노드의 거래
        depth: 시드 = 1, 자식 = 부모 + 1
        transaction_path: 시드부터 이 거래까지의 거래 ID
        account_path: 방문 계정 (중복 없음)
        traced_amount: 추적 통화로 변환된 금액
        traced_currency: 추적 통화 (시드의 receiver_currency)
        is_original_source: deposit 노드 여부
    """

    transaction: Transaction
    depth: int
    transaction_path: tuple[int, ...]
    account_path: tuple[int, ...]
    traced_amount: Decimal
    traced_currency: str
    is_original_source: bool

    @property
    def transaction_id(self) -> int:
        return self.transaction.transaction_id

    @property
    def sender_id(self) -> int:
        return self.transaction.sender_id

    @property
    def receiver_id(self) -> int:
        return self.transaction.receiver_id

    @property
    def timestamp(self) -> datetime:
        return self.transaction.timestamp

    @property
    def edge_key(self) -> tuple[int, int, int]:
        """중복 제거 키 (sender, receiver, 거래 ID)"""
        return (self.sender_id, self.receiver_id, self.transaction_id)


@dataclass(frozen=True)
class TrailEntry:
    """분류된 추적 결과"""

    node: ProvenanceNode
    legitimacy_status: LegitimacyStatus

    def to_dict(self) -> dict[str, Any]:
        """딕셔너리로 변환 (직렬화용)"""
        node = self.node
        return {
            "id": node.transaction_id,
            "senderId": node.sender_id,
            "receiverId": node.receiver_id,
            "amount": format_amount(node.traced_amount),
            "currency": node.traced_currency,
            "timestamp": node.timestamp.isoformat(),
            "depth": node.depth,
            "transactionPath": list(node.transaction_path),
            "accountPath": list(node.account_path),
            "legitimacyStatus": self.legitimacy_status.value,
        }


def classify_nodes(
    nodes: Iterable[ProvenanceNode],
    max_depth: int,
) -> list[TrailEntry]:
    """노드 분류

    우선순위:
    1. deposit 노드 → LEGITIMATE_DEPOSIT
    2. depth >= max_depth → MAX_DEPTH_REACHED
    3. 같은 sender/추적 통화의 LEGITIMATE 노드가 결과에 있음 → TRACEABLE_TO_DEPOSIT
    4. 나머지 → UNVERIFIED_SOURCE

    3번은 직접 일치만 봄 (TRACEABLE 노드를 거쳐 전이되지 않음).
    """
    nodes = list(nodes)
    deposit_sources = {
        (node.sender_id, node.traced_currency)
        for node in nodes
        if node.is_original_source
    }

    entries = []
    for node in nodes:
        if node.is_original_source:
            status = LegitimacyStatus.LEGITIMATE_DEPOSIT
        elif node.depth >= max_depth:
            status = LegitimacyStatus.MAX_DEPTH_REACHED
        elif (node.sender_id, node.traced_currency) in deposit_sources:
            status = LegitimacyStatus.TRACEABLE_TO_DEPOSIT
        else:
            status = LegitimacyStatus.UNVERIFIED_SOURCE
        entries.append(TrailEntry(node=node, legitimacy_status=status))
    return entries


def _trail_order(entry: TrailEntry) -> tuple[Any, ...]:
    node = entry.node
    return (node.depth, node.timestamp, node.transaction_id, node.account_path)


def deduplicate_trail(entries: Iterable[TrailEntry]) -> list[TrailEntry]:
    """(sender, receiver, 거래 ID) 기준 중복 제거

    (depth, timestamp, 거래 ID, account_path) 순으로 정렬 후 처음 나온 항목(가장 얕은 경로)만 유지.
    """
    seen: set[tuple[int, int, int]] = set()
    result = []
    for entry in sorted(entries, key=_trail_order):
        key = entry.node.edge_key
        if key in seen:
            continue
        seen.add(key)
        result.append(entry)
    return result


class ProvenanceTracer:
    """자금 출처 추적기

    Args:
        store: 원장 저장소
        rates: 요청 단위 환율 스냅샷
        max_depth: 최대 추적 깊이 (확장/분류 공통)
    """

    def __init__(
        self,
        store: ILedgerStore,
        rates: RateBook,
        max_depth: int = Defaults.MAX_TRACE_DEPTH,
    ):
        if max_depth < 1:
            raise ValueError(f"max_depth must be >= 1, got {max_depth}")
        self.store = store
        self.rates = rates
        self.max_depth = max_depth

    async def trace(self, account_id: int) -> list[TrailEntry]:
        """계정 자금 출처 추적

        Args:
            account_id: 감사 대상 계정

        Returns:
            분류/중복 제거된 추적 결과 (incoming transfer가 없으면 빈 목록)
        """
        nodes = await self.collect(account_id)
        trail = deduplicate_trail(classify_nodes(nodes, self.max_depth))
        logger.debug(
            f"출처 추적 완료: account={account_id}, nodes={len(nodes)}, trail={len(trail)}"
        )
        return trail

    async def collect(self, account_id: int) -> list[ProvenanceNode]:
        """역방향 BFS로 노드 수집 (분류 전)

        같은 깊이의 노드들은 동시에 확장 (asyncio.gather).
        """
        seeds = await self.store.list_incoming_transfers(account_id)

        nodes: list[ProvenanceNode] = []
        frontier: deque[ProvenanceNode] = deque()
        for tx in seeds:
            # 자기 자신에게의 이체는 출처가 아님
            if tx.sender_id == tx.receiver_id:
                continue
            seed = ProvenanceNode(
                transaction=tx,
                depth=1,
                transaction_path=(tx.transaction_id,),
                account_path=(tx.sender_id, tx.receiver_id),
                traced_amount=tx.receiver_amount,
                traced_currency=tx.receiver_currency,
                is_original_source=False,
            )
            nodes.append(seed)
            frontier.append(seed)

        # (계정, 시각) -> 후보 조회 결과 (요청 내 재사용)
        candidates_cache: dict[tuple[int, datetime], list[Transaction]] = {}

        while frontier:
            level = list(frontier)
            frontier.clear()

            expandable = [
                node for node in level
                if node.depth < self.max_depth and not node.is_original_source
            ]
            missing = list(dict.fromkeys(
                (node.sender_id, node.timestamp)
                for node in expandable
                if (node.sender_id, node.timestamp) not in candidates_cache
            ))
            fetched = await asyncio.gather(*(
                self.store.list_transactions_received_by(sender_id, before)
                for sender_id, before in missing
            ))
            candidates_cache.update(zip(missing, fetched))

            for node in expandable:
                candidates = candidates_cache[(node.sender_id, node.timestamp)]
                for child in self._expand(node, candidates):
                    nodes.append(child)
                    frontier.append(child)

        return nodes

    def _expand(
        self,
        node: ProvenanceNode,
        candidates: Iterable[Transaction],
    ) -> Iterator[ProvenanceNode]:
        """노드 1개의 자식 생성"""
        for tx in candidates:
            if tx.timestamp > node.timestamp:
                continue
            if tx.transaction_id in node.transaction_path:
                continue

            is_deposit = tx.kind == TransactionKind.DEPOSIT
            if is_deposit:
                account_path = node.account_path
            elif tx.sender_id in node.account_path:
                # 사이클
                continue
            else:
                account_path = node.account_path + (tx.sender_id,)

            yield ProvenanceNode(
                transaction=tx,
                depth=node.depth + 1,
                transaction_path=node.transaction_path + (tx.transaction_id,),
                account_path=account_path,
                traced_amount=self.rates.convert(
                    tx.receiver_amount, tx.receiver_currency, node.traced_currency
                ),
                traced_currency=node.traced_currency,
                is_original_source=is_deposit,
            )
