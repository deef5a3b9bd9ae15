"""Configuration settings for the Sustrato research-data API."""

import os
from functools import lru_cache

from dotenv import load_dotenv

load_dotenv()


class Settings:
    """Application settings loaded from environment variables."""

    # Database
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./sustrato.db")

    # Translation model (Gemini)
    GEMINI_API_KEY: str = os.getenv("GEMINI_API_KEY", "")
    GEMINI_MODEL: str = os.getenv("GEMINI_MODEL", "gemini-1.5-flash")
    # Empty means the SDK default endpoint
    GEMINI_API_BASE: str = os.getenv("GEMINI_API_BASE", "")
    TRANSLATION_TIMEOUT_SECONDS: float = float(os.getenv("TRANSLATION_TIMEOUT_SECONDS", "60"))

    # Transcription upload
    MAX_CSV_SIZE_MB: int = int(os.getenv("MAX_CSV_SIZE_MB", "10"))
    DEFAULT_LANGUAGE: str = os.getenv("DEFAULT_LANGUAGE", "es-ES")

    # Application
    APP_ENV: str = os.getenv("APP_ENV", "development")
    DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

    def validate(self) -> list[str]:
        """Validate settings and return list of warnings."""
        errors = []
        if not self.GEMINI_API_KEY:
            errors.append("GEMINI_API_KEY is not set - translation endpoint will be unavailable")
        if self.MAX_CSV_SIZE_MB <= 0:
            errors.append("MAX_CSV_SIZE_MB must be positive")
        return errors


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
