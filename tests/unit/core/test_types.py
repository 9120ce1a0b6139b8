"""
core/types.py 테스트

모든 Enum이 문자열 직렬화 가능한지 확인
"""

import json

from core.types import BalanceStatus, LegitimacyStatus, Severity


class TestBalanceStatus:
    """BalanceStatus 테스트"""

    def test_values(self) -> None:
        assert BalanceStatus.BALANCED.value == "BALANCED"
        assert BalanceStatus.DISCREPANCY.value == "DISCREPANCY"

    def test_str_comparison(self) -> None:
        assert BalanceStatus.BALANCED == "BALANCED"


class TestLegitimacyStatus:
    """LegitimacyStatus 테스트"""

    def test_is_legitimate(self) -> None:
        assert LegitimacyStatus.LEGITIMATE_DEPOSIT.is_legitimate
        assert LegitimacyStatus.TRACEABLE_TO_DEPOSIT.is_legitimate
        assert not LegitimacyStatus.UNVERIFIED_SOURCE.is_legitimate
        assert not LegitimacyStatus.MAX_DEPTH_REACHED.is_legitimate

    def test_json_serializable(self) -> None:
        assert json.dumps([LegitimacyStatus.UNVERIFIED_SOURCE]) == '["UNVERIFIED_SOURCE"]'


class TestSeverity:
    """Severity 테스트"""

    def test_values(self) -> None:
        assert [s.value for s in Severity] == ["CRITICAL", "WARNING", "INFO"]
