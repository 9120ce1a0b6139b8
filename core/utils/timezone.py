"""
타임존 유틸리티

내부 처리: UTC aware datetime
원장 저장: ISO-8601 문자열 ("2024-01-01 10:00:00", "2024-01-01T10:00:00.5Z" 등 혼재 가능)
원장 비교: SQLite julianday() 기준 (문자열 비교 금지)
"""

from datetime import datetime, timezone


def ensure_utc(dt: datetime) -> datetime:
    """datetime을 UTC aware로 정규화

    Args:
        dt: datetime 객체 (naive면 UTC로 간주)

    Returns:
        tzinfo=timezone.utc datetime
    """
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def now_utc() -> datetime:
    """현재 UTC 시간 반환 (타임존 명시)"""
    return datetime.now(timezone.utc)


def parse_ledger_ts(value: str | datetime) -> datetime:
    """원장 타임스탬프 파싱

    공백/T 구분자, 소수 초, UTC 오프셋, Z 접미사 모두 허용.

    Example:
        >>> parse_ledger_ts("2024-01-01 10:00:00")
        datetime(2024, 1, 1, 10, 0, tzinfo=timezone.utc)
    """
    if isinstance(value, datetime):
        return ensure_utc(value)
    text = value.strip()
    # Python 3.10 fromisoformat은 Z 접미사 미지원
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    return ensure_utc(datetime.fromisoformat(text))


def format_ledger_ts(dt: datetime) -> str:
    """원장 조회 파라미터용 문자열 (UTC, ISO-8601, 마이크로초 유지)

    julianday()로 비교하므로 저장 형식과 달라도 시간 순서가 보존됨.
    """
    return ensure_utc(dt).isoformat()
