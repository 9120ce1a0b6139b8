"""
core/errors.py 테스트

에러 코드, 재시도 여부, 공통 응답 본문
"""

import pytest

from core.errors import (
    AuditError,
    InternalInconsistencyError,
    InvalidInputError,
    NotFoundError,
    UpstreamUnavailableError,
    error_body,
)


class TestAuditErrors:
    """AuditError 계층 테스트"""

    @pytest.mark.parametrize(
        "error, code, retryable",
        [
            (InvalidInputError("bad id"), "VALIDATION_ERROR", False),
            (NotFoundError(3), "ACCOUNT_NOT_FOUND", False),
            (UpstreamUnavailableError("down"), "LEDGER_UNAVAILABLE", True),
            (InternalInconsistencyError("gone"), "INTERNAL_INCONSISTENCY", False),
        ],
    )
    def test_codes(self, error: AuditError, code: str, retryable: bool) -> None:
        assert error.code == code
        assert error.retryable is retryable

    def test_not_found_message(self) -> None:
        assert NotFoundError(42).message == "Account with ID 42 not found"

    def test_retry_after_default(self) -> None:
        assert UpstreamUnavailableError("down").retry_after == 5


class TestErrorBody:
    """Web/CLI 공통 실패 응답 본문"""

    def test_to_dict_is_flat(self) -> None:
        body = NotFoundError(7).to_dict()

        assert body == {
            "success": False,
            "error": "Account not found",
            "message": "Account with ID 7 not found",
            "code": "ACCOUNT_NOT_FOUND",
        }

    def test_error_body(self) -> None:
        body = error_body("Too many requests", "slow down", "RATE_LIMIT_EXCEEDED")

        assert list(body) == ["success", "error", "message", "code"]
        assert body["success"] is False
