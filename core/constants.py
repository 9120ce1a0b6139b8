"""
하드코딩 상수 - 변경될 일이 거의 없는 고정값

중요: 경로는 반드시 pathlib.Path 사용 (Windows/Linux 크로스 플랫폼)
"""

from decimal import Decimal
from pathlib import Path


# 프로젝트 루트 (이 파일 기준 2단계 상위: core/constants.py → ledger-audit/)
PROJECT_ROOT: Path = Path(__file__).resolve().parent.parent

API_VERSION: str = "1.0.0"


class Defaults:
    """기본값 상수 (settings.yaml 미지정 시 사용)"""

    WEB_HOST: str = "127.0.0.1"
    WEB_PORT: int = 8000

    LOG_LEVEL: str = "INFO"

    # Provenance 추적 최대 깊이 (확장/분류 모두 이 값 하나만 사용)
    MAX_TRACE_DEPTH: int = 10

    # 감사 1건 전체 wall-clock 제한 (초)
    AUDIT_TIMEOUT_SEC: float = 10.0

    # /api Rate Limit (15분당 100회)
    RATE_LIMIT_WINDOW_SEC: int = 15 * 60
    RATE_LIMIT_MAX_REQUESTS: int = 100


class Paths:
    """프로젝트 경로 상수 (pathlib 사용 - OS 독립적)"""

    # 디렉토리
    CONFIG_DIR: Path = PROJECT_ROOT / "config"
    DATA_DIR: Path = PROJECT_ROOT / "data"
    LOGS_DIR: Path = PROJECT_ROOT / "logs"
    WEB_LOGS_DIR: Path = LOGS_DIR / "web"
    CLI_LOGS_DIR: Path = LOGS_DIR / "cli"

    # 설정 파일
    SETTINGS_FILE: Path = CONFIG_DIR / "settings.yaml"

    # DB 파일
    LEDGER_DB: Path = DATA_DIR / "ledger.db"


class Money:
    """금액 관련 상수"""

    # 모든 금액은 소수점 2자리 고정
    CENT: Decimal = Decimal("0.01")
    ZERO: Decimal = Decimal("0.00")

    # 잔고 대사 허용 오차 (|stored - calculated| < 0.01 → BALANCED)
    RECONCILIATION_TOLERANCE: Decimal = Decimal("0.01")


class AuditThresholds:
    """감사 권고 임계값"""

    # 자금 정당성 점수 경고 기준 (%)
    LEGITIMACY_WARN_SCORE: int = 80
    LEGITIMACY_FULL_SCORE: int = 100

    # 거래량 경고 기준
    HIGH_VOLUME_TRANSACTIONS: int = 100

    # 출금/잔고 비율 경고 기준
    WITHDRAWAL_RATIO_WARN: Decimal = Decimal("0.8")

    # 거래 빈도 휴리스틱 (30일 관측 창, 하루 평균 5건 초과)
    FREQUENCY_MIN_TRANSACTIONS: int = 10
    OBSERVATION_WINDOW_DAYS: int = 30
    FREQUENCY_MAX_PER_DAY: Decimal = Decimal("5")
