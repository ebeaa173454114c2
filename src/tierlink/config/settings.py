from typing import List, Literal
from pydantic import field_validator
from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # App env
    app_env: Literal["dev", "prod", "test"] = "dev"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "WARNING"

    # EasyTier uptime API (node discovery)
    uptime_api_url: str = "https://uptime.easytier.cn/api"
    uptime_tags: str = "MC"  # comma-separated
    uptime_per_page: int = 200
    uptime_timeout_seconds: float = 30.0

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, v):
        return v.strip().upper() if isinstance(v, str) else v

    def uptime_tag_list(self) -> List[str]:
        return [t.strip() for t in (self.uptime_tags or "").split(",") if t.strip()]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
