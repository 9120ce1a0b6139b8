"""
의존성 주입

FastAPI의 Depends를 사용한 의존성 관리.
"""

from typing import AsyncGenerator

from fastapi import Depends

from adapters.interfaces import ILedgerStore
from audit.service import AuditService, validate_account_id
from core.config.loader import Settings, get_settings
from core.ledger.store import open_ledger_store


def get_app_settings() -> Settings:
    """애플리케이션 설정 반환"""
    return get_settings()


def get_account_id(account_id: str) -> int:
    """경로 파라미터 계정 ID 검증

    원장 연결보다 먼저 평가되도록 라우트에서 첫 번째 의존성으로 선언.
    """
    return validate_account_id(account_id)


async def get_ledger_store(
    settings: Settings = Depends(get_app_settings),
) -> AsyncGenerator[ILedgerStore, None]:
    """원장 저장소 반환 (읽기 전용)

    Web은 원장을 절대 수정하지 않음.
    """
    async with open_ledger_store(settings.db_path) as store:
        yield store


def get_audit_service(
    store: ILedgerStore = Depends(get_ledger_store),
    settings: Settings = Depends(get_app_settings),
) -> AuditService:
    """요청 단위 감사 서비스"""
    return AuditService(
        store,
        max_trace_depth=settings.max_trace_depth,
        timeout_sec=settings.audit_timeout_sec,
    )
