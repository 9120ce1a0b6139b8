"""
pytest 공통 fixture 정의

감사 엔진 테스트용 메모리 원장, 시각 헬퍼, 설정 파일 fixture.
"""

from decimal import Decimal
from pathlib import Path

import pytest

from adapters.mock.ledger_store import InMemoryLedgerStore
from core.config.loader import Settings

from tests.helpers import FIXED_NOW, at


@pytest.fixture
def ledger() -> InMemoryLedgerStore:
    """빈 메모리 원장"""
    return InMemoryLedgerStore()


@pytest.fixture
def scenario_a_ledger(ledger: InMemoryLedgerStore) -> InMemoryLedgerStore:
    """기본 시나리오 원장

    계정 1 (USD, 저장 잔고 750.00):
    deposit +1000 → transfer -100 (→2) → transfer +50 (3→) → withdrawal -200
    """
    ledger.add_account(1, "USD", Decimal("750.00"))
    ledger.add_account(2, "USD", Decimal("100.00"))
    ledger.add_account(3, "USD", Decimal("450.00"))

    ledger.add_transaction("deposit", 1, at(0), 1, 1, Decimal("1000.00"))
    ledger.add_transaction("deposit", 2, at(1), 3, 3, Decimal("500.00"))
    ledger.add_transaction("transfer", 3, at(2), 1, 2, Decimal("100.00"))
    ledger.add_transaction("transfer", 4, at(3), 3, 1, Decimal("50.00"))
    ledger.add_transaction("withdrawal", 5, at(4), 1, 1, Decimal("200.00"))
    return ledger


@pytest.fixture
def fixed_clock():
    """고정 시계 (보고서 재현성 검증용)"""
    return lambda: FIXED_NOW


@pytest.fixture
def temp_settings_file(tmp_path: Path) -> Path:
    """테스트용 settings.yaml 파일 생성"""
    settings_content = """# 테스트용 settings.yaml
ledger:
  db_path: data/test_ledger.db

audit:
  max_trace_depth: 5
  timeout_sec: 2.5

web:
  host: 0.0.0.0
  port: 9000
  rate_limit_window_sec: 60
  rate_limit_max_requests: 3

log_level: DEBUG
"""
    settings_path = tmp_path / "settings.yaml"
    settings_path.write_text(settings_content, encoding="utf-8")
    return settings_path


@pytest.fixture(autouse=True)
def reset_settings():
    """Settings 싱글턴 초기화"""
    Settings.reset()
    yield
    Settings.reset()
