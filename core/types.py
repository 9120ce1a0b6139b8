"""
타입 정의 모듈

감사 결과에 쓰이는 Enum 정의
모든 Enum은 str을 상속하여 문자열 직렬화 가능
"""

from enum import Enum


class BalanceStatus(str, Enum):
    """잔고 대사 결과"""

    BALANCED = "BALANCED"
    DISCREPANCY = "DISCREPANCY"


class LegitimacyStatus(str, Enum):
    """자금 출처 정당성 분류 (우선순위 순)"""

    LEGITIMATE_DEPOSIT = "LEGITIMATE_DEPOSIT"  # 입금 원천 자체
    MAX_DEPTH_REACHED = "MAX_DEPTH_REACHED"  # 추적 한도 도달
    TRACEABLE_TO_DEPOSIT = "TRACEABLE_TO_DEPOSIT"  # 동일 송신자가 입금으로 확인됨
    UNVERIFIED_SOURCE = "UNVERIFIED_SOURCE"  # 출처 미확인

    @property
    def is_legitimate(self) -> bool:
        """입금 기반 자금 여부 (직접/간접)"""
        return self in (
            LegitimacyStatus.LEGITIMATE_DEPOSIT,
            LegitimacyStatus.TRACEABLE_TO_DEPOSIT,
        )


class Severity(str, Enum):
    """권고 심각도"""

    CRITICAL = "CRITICAL"
    WARNING = "WARNING"
    INFO = "INFO"
