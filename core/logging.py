"""
로깅 설정 유틸리티

Web과 CLI 모두에서 사용하는 공통 로깅 설정.
- 콘솔: 설정 레벨 (기본 INFO)
- 파일: INFO 레벨 (TimedRotatingFileHandler, daily)

사용법:
    from core.logging import setup_logging
    setup_logging("web")  # API 서버용
    setup_logging("cli", file_enabled=False)  # 단발성 감사 실행
"""

import logging
import sys
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path

from core.constants import Paths


LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
LOG_FILE_BACKUP_COUNT = 7  # 최대 7일치 파일 유지

# 요청마다 상세 로그를 남기는 로거 (WARNING으로 낮춤)
NOISY_LOGGERS = [
    "aiosqlite",
    "httpcore",
    "httpx",
    "asyncio",
    "uvicorn.access",
]


def get_log_file_path(process_name: str) -> Path:
    """로그 파일 경로 반환

    Args:
        process_name: 프로세스 이름 ("web" 또는 "cli")

    Returns:
        로그 파일 Path
    """
    if process_name == "web":
        return Paths.WEB_LOGS_DIR / f"{process_name}.log"
    if process_name == "cli":
        return Paths.CLI_LOGS_DIR / f"{process_name}.log"
    return Paths.LOGS_DIR / f"{process_name}.log"


def setup_logging(
    process_name: str,
    console_level: int | str = logging.INFO,
    file_level: int = logging.INFO,
    file_enabled: bool = True,
) -> logging.Logger:
    """로깅 설정 초기화

    Args:
        process_name: 프로세스 이름 ("web" 또는 "cli")
        console_level: 콘솔 로그 레벨 (정수 또는 "DEBUG" 같은 이름)
        file_level: 파일 로그 레벨
        file_enabled: False면 파일 핸들러 생략 (CLI 단발 실행용)

    Returns:
        설정된 루트 Logger
    """
    if isinstance(console_level, str):
        console_level = logging.getLevelName(console_level.upper())

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)  # 루트는 DEBUG (핸들러에서 필터링)

    # 기존 핸들러 제거 (중복 방지)
    root_logger.handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    # CLI는 stdout에 JSON 보고서를 쓰므로 로그는 stderr로
    stream = sys.stderr if process_name == "cli" else sys.stdout
    console_handler = logging.StreamHandler(stream)
    console_handler.setLevel(console_level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    log_file = get_log_file_path(process_name)
    if file_enabled:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = TimedRotatingFileHandler(
            filename=log_file,
            when="midnight",
            interval=1,
            backupCount=LOG_FILE_BACKUP_COUNT,
            encoding="utf-8",
        )
        file_handler.suffix = "%Y-%m-%d"  # 백업 파일 형식: web.log.2026-02-21
        file_handler.setLevel(file_level)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    for logger_name in NOISY_LOGGERS:
        logging.getLogger(logger_name).setLevel(logging.WARNING)

    root_logger.info(f"로깅 초기화 완료: {process_name}")
    root_logger.info(f"  - 콘솔: {logging.getLevelName(console_level)}")
    if file_enabled:
        root_logger.info(
            f"  - 파일: {log_file} ({logging.getLevelName(file_level)}, daily rotation)"
        )

    return root_logger
