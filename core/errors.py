"""
감사 에러 분류

InvalidInput / NotFound: 요청 종료 (부분 보고서 없음)
UpstreamUnavailable: 원장 접근 불가/타임아웃 (호출자가 재시도, 코어는 재시도 안 함)
InternalInconsistency: 요청 도중 스냅샷이 깨진 경우 (기본값으로 덮지 않고 노출)
"""


def error_body(error: str, message: str, code: str) -> dict[str, object]:
    """실패 응답 본문

    {"success": false, "error": 요약, "message": 상세, "code": 에러 코드}
    """
    return {"success": False, "error": error, "message": message, "code": code}


class AuditError(Exception):
    """감사 에러 기본 클래스

    Attributes:
        code: API 응답용 에러 코드
        summary: 에러 요약 (응답 본문의 error 필드)
        retryable: 호출자 재시도 가능 여부
    """

    code: str = "AUDIT_ERROR"
    summary: str = "Internal server error"
    retryable: bool = False

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)

    def to_dict(self) -> dict[str, object]:
        """에러 응답 본문 (Web/CLI 공통)"""
        return error_body(self.summary, self.message, self.code)


class InvalidInputError(AuditError):
    """잘못된 계정 ID (양의 정수가 아님)

    원장 접근 전에 발생.
    """

    code = "VALIDATION_ERROR"
    summary = "Validation error"


class NotFoundError(AuditError):
    """원장에 계정이 없음"""

    code = "ACCOUNT_NOT_FOUND"
    summary = "Account not found"

    def __init__(self, account_id: int):
        self.account_id = account_id
        super().__init__(f"Account with ID {account_id} not found")


class UpstreamUnavailableError(AuditError):
    """원장 접근 불가 또는 타임아웃

    retry_after 초 후 재시도 권장.
    """

    code = "LEDGER_UNAVAILABLE"
    summary = "Ledger unavailable"
    retryable = True

    def __init__(self, message: str, retry_after: int = 5):
        self.retry_after = retry_after
        super().__init__(message)


class InternalInconsistencyError(AuditError):
    """감사 요약을 계산할 수 없는 상태 (예: 요청 도중 계정 소멸)"""

    code = "INTERNAL_INCONSISTENCY"
    summary = "Internal inconsistency"
