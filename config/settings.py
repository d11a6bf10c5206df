"""
Classroom Service - Central Configuration
Pydantic V2 settings loaded from the environment and .env
"""
from functools import lru_cache
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # ===== Database =====
    database_url: str = "sqlite:///./classrooms.db"

    # ===== Application =====
    service_name: str = "classroom-api"
    app_version: str = "1.0.0"
    debug: bool = False
    log_level: str = "INFO"

    # ===== Server =====
    host: str = "0.0.0.0"
    port: int = 8000

    # ===== CORS =====
    # Comma-separated list, "*" allows every origin
    allowed_origins: str = "*"

    # ===== Classrooms =====
    # Upper bound matches the classroom_code column width
    classroom_code_length: int = Field(6, ge=4, le=16)
    classroom_code_max_attempts: int = Field(10, ge=1)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    @property
    def cors_origins(self) -> List[str]:
        return [o.strip() for o in self.allowed_origins.split(",") if o.strip()]


@lru_cache()
def get_settings() -> Settings:
    """Singleton settings instance"""
    return Settings()
