"""
Script Localizer - Configuration Module
"""
from pathlib import Path
from pydantic import PositiveInt
from pydantic_settings import BaseSettings
from typing import Optional

# Compute paths at module level for consistency
_BASE_DIR = Path(__file__).parent.parent


class Settings(BaseSettings):
    """Application settings"""

    # Application
    APP_NAME: str = "Script Localizer"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False  # Default to False for security; enable via env var in development

    # Paths
    BASE_DIR: Path = _BASE_DIR

    # Sarvam AI credentials (required by every upstream call)
    SARVAM_API_KEY: Optional[str] = None
    SARVAM_BASE_URL: str = "https://api.sarvam.ai"

    # Translation Settings
    # Source locale is fixed: scripts are expected to be written in Hindi
    TRANSLATE_SOURCE_LANG: str = "hi-IN"
    TRANSLATE_MODE: str = "formal"
    TRANSLATE_MODEL: str = "mayura:v1"
    TRANSLATE_SPEAKER_GENDER: str = "Female"
    TRANSLATE_PREPROCESSING: bool = True
    # Max simultaneous outbound translation calls (None = one per language, no cap)
    TRANSLATE_MAX_CONCURRENCY: Optional[PositiveInt] = None

    # TTS Settings
    TTS_SPEAKER: str = "meera"
    TTS_MODEL: str = "bulbul:v1"
    TTS_PITCH: float = 0
    TTS_PACE: float = 1.0
    TTS_LOUDNESS: float = 1.0
    TTS_SAMPLE_RATE: int = 8000
    TTS_PREPROCESSING: bool = True

    # HTTP client Settings
    # None keeps the httpx default timeout
    HTTP_TIMEOUT: Optional[float] = None
    PROXY_URL: Optional[str] = None

    # API Settings
    API_HOST: str = "127.0.0.1"  # Default to localhost; use 0.0.0.0 only in production with proper security
    API_PORT: int = 8888
    CORS_ORIGINS: str = "*"  # Comma separated list
    RATE_LIMIT: str = "60/minute"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"

    @property
    def cors_origins_list(self) -> list:
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]


settings = Settings()


def get_settings() -> Settings:
    """
    Load settings for a single request.

    Reads the environment again on every call so a rotated SARVAM_API_KEY
    is picked up without a restart. Used as a FastAPI dependency.
    """
    return Settings()
