"""
MedTrack Application Configuration
Loads settings from .env file using Pydantic v2 with BaseSettings
"""
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # ==================== Project Info ====================
    PROJECT_NAME: str = "MedTrack API"
    PROJECT_DESCRIPTION: str = "Medical Device Fleet Inventory & Workflow Tracker"
    VERSION: str = "1.0.0"
    API_PREFIX: str = "/api"

    # ==================== Storage ====================
    DATABASE_URL: str = "sqlite:///medtrack_local.db"
    STATE_KEY: str = "medicalDeviceState"
    SEED_DEMO_DATA: bool = True

    # ==================== Contracts ====================
    EXPIRING_SOON_DAYS: int = 30

    # ==================== Export ====================
    CSV_SEPARATOR: str = ","
    EXPORT_DIR: str = "exports"

    # ==================== Server Configuration ====================
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    # ==================== Features ====================
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # ==================== Configuration Loading ====================
    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="allow",
        validate_default=True,
    )


# ==================== Settings Singleton ====================
@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


settings = get_settings()
