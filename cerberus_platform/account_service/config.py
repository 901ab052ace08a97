"""
Configuration management for the account service
"""
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List, Optional


class Settings(BaseSettings):
    """Account service configuration loaded from environment variables"""

    # Application
    APP_NAME: str = "cerberus"
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    LOG_LEVEL: str = "INFO"
    LOG_DIR: Optional[str] = None

    # Token issuance
    JWT_SECRET_KEY: str = "change-this-secret-in-production-environments"
    ACCESS_TOKEN_VALIDITY_MINUTES: int = Field(60, gt=0)

    # Database Configuration
    DATABASE_URL: str = "sqlite:///./cerberus.db"
    DB_POOL_SIZE: int = 5
    DB_MAX_OVERFLOW: int = 10

    # CORS Configuration
    CORS_ORIGINS: List[str] = ["*"]

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True
    )


# Global settings instance
settings = Settings()
