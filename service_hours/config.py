"""애플리케이션 환경 설정 모듈.

Application configuration module using pydantic-settings.
All settings can be overridden via environment variables or a .env file.
"""

from pathlib import Path
from typing import List

from pydantic_settings import BaseSettings

# .env 파일 절대 경로 — CWD와 무관하게 항상 프로젝트 루트의 .env를 참조
# Absolute path to .env file — ensures correct loading regardless of CWD
_ENV_FILE: Path = Path(__file__).resolve().parent.parent / ".env"


class Settings(BaseSettings):
    """애플리케이션 전역 설정 — 환경 변수 기반 구성.

    Global application settings loaded from environment variables.
    Uses pydantic-settings for automatic env var parsing and .env file support.

    Attributes:
        APP_NAME: 애플리케이션 표시 이름 (Application display name)
        DEBUG: 디버그 모드 플래그 (Debug mode flag)
        RESTAURANT_API_BASE_URL: 레스토랑 백엔드 API 주소 (Restaurant backend base URL)
        RESTAURANT_API_TIMEOUT: 요청 타임아웃(초), None이면 무제한 (Request timeout in seconds)
        SCHEDULE_TIMEZONE: X-Timezone 헤더로 전송할 시간대 (Zone label sent as X-Timezone)
        CORS_ORIGINS: 허용된 CORS 출처 목록 (Allowed CORS origin URLs)
    """

    # 앱 메타데이터 — Application metadata
    APP_NAME: str = "Service Hours API"
    DEBUG: bool = False

    # 레스토랑 백엔드 — Upstream restaurant API (persistence collaborator)
    RESTAURANT_API_BASE_URL: str = "http://localhost:8000/api"
    RESTAURANT_API_TIMEOUT: float | None = 30.0  # None이면 타임아웃 없음 (None disables the timeout)
    SCHEDULE_TIMEZONE: str = "Asia/Calcutta"  # 단일 시간대 라벨, 변환 없음 (Label only, no conversion)

    # CORS 설정 — 관리자 프론트엔드 허용 (Admin frontend origins)
    CORS_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:8080"]

    # Axiom 로깅 설정 — Axiom observability platform settings
    AXIOM_API_TOKEN: str = ""  # Axiom API 토큰 (API token from Axiom dashboard)
    AXIOM_DATASET: str = ""  # Axiom 데이터셋 이름 (Dataset name for API logs)

    model_config = {"env_file": _ENV_FILE, "env_file_encoding": "utf-8"}


# 전역 설정 싱글턴 인스턴스 — Global settings singleton instance
settings: Settings = Settings()
