"""환경 변수 기반 애플리케이션 설정을 중앙에서 관리합니다."""

from pydantic_settings import BaseSettings
from typing import List
from pathlib import Path


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./taskline.db"
    DEBUG: bool = True
    ALLOWED_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:8000"]
    LOG_LEVEL: str = "INFO"

    # Task codes are rendered as "T" + zero-padded number (T001, T002, ...)
    TASK_CODE_WIDTH: int = 3

    # Timeline
    TIMELINE_VIEWPORT_LEAD_DAYS: int = 14

    # Bulk update
    BULK_UPDATE_MAX_TASKS: int = 500

    class Config:
        # 실행 cwd와 무관하게 backend/.env를 로드한다.
        env_file = str(Path(__file__).resolve().parents[1] / ".env")


settings = Settings()
