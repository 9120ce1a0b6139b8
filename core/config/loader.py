"""
설정 로더

settings.yaml 로드 및 감사 서비스 설정 생성
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from core.constants import Defaults, Paths


@dataclass(frozen=True)
class AuditSettings:
    """감사 서비스 설정 (settings.yaml에서 로드)

    불변 데이터 구조로 설정 변경 방지
    """

    db_path: Path
    max_trace_depth: int = Defaults.MAX_TRACE_DEPTH
    audit_timeout_sec: float = Defaults.AUDIT_TIMEOUT_SEC
    rate_limit_window_sec: int = Defaults.RATE_LIMIT_WINDOW_SEC
    rate_limit_max_requests: int = Defaults.RATE_LIMIT_MAX_REQUESTS
    web_host: str = Defaults.WEB_HOST
    web_port: int = Defaults.WEB_PORT
    log_level: str = Defaults.LOG_LEVEL


class SettingsLoadError(Exception):
    """Settings 로드 실패 예외"""

    pass


def _positive_int(section: dict[str, Any], key: str, default: int) -> int:
    value = section.get(key, default)
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise SettingsLoadError(f"'{key}'는 양의 정수여야 합니다: {value!r}")
    return value


def _positive_float(section: dict[str, Any], key: str, default: float) -> float:
    value = section.get(key, default)
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
        raise SettingsLoadError(f"'{key}'는 양수여야 합니다: {value!r}")
    return float(value)


def load_settings(path: Path | None = None) -> AuditSettings:
    """settings.yaml 파일 로드

    파일이 없으면 Defaults 기반 설정 반환.

    Args:
        path: settings.yaml 경로 (None이면 기본 경로 사용)

    Returns:
        AuditSettings 인스턴스

    Raises:
        SettingsLoadError: 형식이 잘못된 경우
    """
    if path is None:
        path = Paths.SETTINGS_FILE

    if not path.exists():
        return AuditSettings(db_path=Paths.LEDGER_DB)

    try:
        content = path.read_text(encoding="utf-8")
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise SettingsLoadError(f"settings.yaml 파싱 실패: {e}") from e

    if data is None:
        return AuditSettings(db_path=Paths.LEDGER_DB)

    if not isinstance(data, dict):
        raise SettingsLoadError("settings.yaml 최상위는 매핑이어야 합니다")

    ledger = data.get("ledger") or {}
    audit = data.get("audit") or {}
    web = data.get("web") or {}

    db_path_value = ledger.get("db_path")
    if db_path_value is None:
        db_path = Paths.LEDGER_DB
    else:
        db_path = Path(db_path_value)
        # 상대 경로는 설정 파일 위치 기준
        if not db_path.is_absolute():
            db_path = path.parent / db_path

    log_level = str(data.get("log_level", Defaults.LOG_LEVEL)).upper()

    return AuditSettings(
        db_path=db_path,
        max_trace_depth=_positive_int(audit, "max_trace_depth", Defaults.MAX_TRACE_DEPTH),
        audit_timeout_sec=_positive_float(audit, "timeout_sec", Defaults.AUDIT_TIMEOUT_SEC),
        rate_limit_window_sec=_positive_int(
            web, "rate_limit_window_sec", Defaults.RATE_LIMIT_WINDOW_SEC
        ),
        rate_limit_max_requests=_positive_int(
            web, "rate_limit_max_requests", Defaults.RATE_LIMIT_MAX_REQUESTS
        ),
        web_host=str(web.get("host", Defaults.WEB_HOST)),
        web_port=_positive_int(web, "port", Defaults.WEB_PORT),
        log_level=log_level,
    )


class Settings:
    """애플리케이션 설정 (싱글턴 패턴)

    settings.yaml을 로드하고 관련 설정을 제공
    """

    _instance: "Settings | None" = None
    _settings: AuditSettings | None = None

    def __new__(cls, settings_path: Path | None = None) -> "Settings":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self, settings_path: Path | None = None) -> None:
        if self._settings is None:
            self._settings = load_settings(settings_path)

    @property
    def audit(self) -> AuditSettings:
        """감사 설정 전체"""
        assert self._settings is not None
        return self._settings

    @property
    def db_path(self) -> Path:
        """원장 DB 경로"""
        return self.audit.db_path

    @property
    def max_trace_depth(self) -> int:
        """Provenance 추적 최대 깊이"""
        return self.audit.max_trace_depth

    @property
    def audit_timeout_sec(self) -> float:
        """감사 1건 타임아웃 (초)"""
        return self.audit.audit_timeout_sec

    @classmethod
    def reset(cls) -> None:
        """싱글턴 인스턴스 초기화 (테스트용)"""
        cls._instance = None
        cls._settings = None


def get_settings(settings_path: Path | None = None) -> Settings:
    """Settings 인스턴스 반환

    Args:
        settings_path: settings.yaml 경로 (None이면 기본 경로 사용)

    Returns:
        Settings 싱글턴 인스턴스
    """
    return Settings(settings_path)
