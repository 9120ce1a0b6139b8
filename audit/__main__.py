"""
감사 CLI 진입점

실행 방법:
    python -m audit 1
    python -m audit 1 --db data/ledger.db --indent 2

보고서(JSON 봉투)는 stdout, 로그는 stderr.

종료 코드:
    0: 성공
    2: 잘못된 계정 ID
    3: 계정 없음
    4: 원장 접근 불가 / 타임아웃
    5: 내부 불일치
"""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

from audit.report import envelope
from audit.service import AuditService, validate_account_id
from core.config.loader import get_settings
from core.errors import (
    AuditError,
    InternalInconsistencyError,
    InvalidInputError,
    NotFoundError,
    UpstreamUnavailableError,
)
from core.ledger.store import open_ledger_store
from core.logging import setup_logging

logger = logging.getLogger("audit")

EXIT_CODES: dict[type[AuditError], int] = {
    InvalidInputError: 2,
    NotFoundError: 3,
    UpstreamUnavailableError: 4,
    InternalInconsistencyError: 5,
}


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="원장 계정 감사 보고서 생성")
    parser.add_argument("account_id", help="감사할 계정 ID (양의 정수)")
    parser.add_argument(
        "--settings",
        type=Path,
        default=None,
        help="settings.yaml 경로 (기본: config/settings.yaml)",
    )
    parser.add_argument(
        "--db",
        type=Path,
        default=None,
        help="원장 DB 경로 (설정 파일 값보다 우선)",
    )
    parser.add_argument(
        "--indent",
        type=int,
        default=2,
        help="JSON 들여쓰기 (기본: 2)",
    )
    return parser.parse_args(argv)


async def run(args: argparse.Namespace) -> int:
    settings = get_settings(args.settings)
    setup_logging("cli", console_level=settings.audit.log_level, file_enabled=False)

    db_path = args.db or settings.db_path
    try:
        # 계정 ID는 원장 연결 전에 검증
        account_id = validate_account_id(args.account_id)
        async with open_ledger_store(db_path) as store:
            service = AuditService(
                store,
                max_trace_depth=settings.max_trace_depth,
                timeout_sec=settings.audit_timeout_sec,
            )
            report = await service.build_audit_report(account_id)
    except AuditError as e:
        logger.error(f"감사 실패 [{e.code}]: {e.message}")
        print(json.dumps(e.to_dict(), ensure_ascii=False, indent=args.indent))
        return EXIT_CODES.get(type(e), 1)

    print(
        json.dumps(
            envelope(report.to_dict(), report.generated_at),
            ensure_ascii=False,
            indent=args.indent,
        )
    )
    return 0


def main(argv: list[str] | None = None) -> int:
    return asyncio.run(run(parse_args(argv)))


if __name__ == "__main__":
    sys.exit(main())
