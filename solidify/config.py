"""Application configuration via environment variables."""

from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # API Keys
    OPENAI_API_KEY: str = ""

    # Explanation requests
    EXPLANATION_MODEL: str = "gpt-4o-mini"
    EXPLANATION_TEMPERATURE: float = 0.3
    EXPLANATION_MAX_TOKENS: int = 1500
    EXPLANATION_TIMEOUT_SECONDS: float = 60.0

    # Scanning
    SOURCE_PATTERN: str = "*.cs"
    EXCLUDE_DIRS: list[str] = ["bin", "obj"]
    REPORT_PATH: str = "Report.html"

    # Heuristic thresholds
    SRP_MAX_METHODS: int = 10
    SRP_MAX_PROPERTIES: int = 10
    ISP_MAX_MEMBERS: int = 7
    ISP_MAX_CATEGORIES: int = 2
    LOGGING_RECEIVERS: list[str] = ["Console", "Debug"]

    # Logging
    DEBUG: bool = False
    LOG_LEVEL: str = "info"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


@lru_cache
def get_settings() -> Settings:
    return Settings()
