from functools import lru_cache
from typing import List, Optional
from urllib.parse import quote_plus

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file="sheetapi/.env",
        env_file_encoding="utf-8",
        extra="allow",
    )
    # Application
    APP_NAME: str = "Worksheet Share API"
    API_V1_STR: str = "/api/v1"
    ENVIRONMENT: str = "development"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    ALLOWED_ORIGINS: List[str] = Field(default_factory=lambda: ["*"])

    # Database
    POSTGRES_HOST: str = ""
    POSTGRES_PORT: int = 5432
    POSTGRES_USERNAME: str = ""
    POSTGRES_PASSWORD: str = ""
    POSTGRES_DATABASE: str = ""

    # 직접 지정하면 POSTGRES_* 값보다 우선한다
    DATABASE_URL: Optional[str] = None
    DB_POOL_SIZE: int = 10
    DB_MAX_OVERFLOW: int = 20
    AUTO_CREATE_TABLES: bool = False

    @property
    def database_url(self) -> str:
        """Resolve the SQLAlchemy URL (explicit URL > postgres components > local sqlite)"""
        if self.DATABASE_URL:
            return self.DATABASE_URL

        if not self.POSTGRES_HOST:
            return "sqlite:///./worksheets.db"

        # URL encode the password to handle special characters
        encoded_password = quote_plus(self.POSTGRES_PASSWORD)
        return f"postgresql+psycopg2://{self.POSTGRES_USERNAME}:{encoded_password}@{self.POSTGRES_HOST}:{self.POSTGRES_PORT}/{self.POSTGRES_DATABASE}"

    # Security
    SECRET_KEY: str = "change-me-in-production"
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 7

    # Point Management
    POINTS_VIEW_REWARD: int = 100  # 학습지 최초 조회 시 업로더 보상
    POINTS_QUIZ_PLAY_REWARD: int = 100  # 퀴즈 플레이 시 출제자 보상
    POINTS_WEEKLY_QUIZ_REWARD: int = 1000  # 주간 리더보드 1위 보상
    HISTORY_LIMIT: int = 50

    # Weekly reward job
    WEEKLY_REWARD_ENABLED: bool = True
    WEEKLY_REWARD_INTERVAL_HOURS: float = 6

    # Timezone (주간 경계 계산 기준)
    TIMEZONE: str = "Asia/Seoul"


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
