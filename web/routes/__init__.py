"""
API 라우트 패키지

각 기능별 라우터 모듈:
- health: 헬스 체크
- audit: API 안내 / 계정 감사 / 잔고 대사
"""
