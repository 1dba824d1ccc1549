"""
Configuration settings for EduVerse.

Uses Pydantic settings management for environment variables and configuration.
"""

from typing import List, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import AnyHttpUrl, field_validator


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.
    """

    # Application
    PROJECT_NAME: str = "EduVerse"
    VERSION: str = "1.0.0"
    DESCRIPTION: str = "Single-session learning management backend"

    # Storage
    STORAGE_BACKEND: str = "database"  # "database" or "memory"
    STORAGE_URL: str = "sqlite:///./eduverse.db"
    STORAGE_KEY_PREFIX: str = "eduverse_"

    # Course settings
    CERTIFICATE_PASSING_SCORE: int = 80  # Minimum quiz score for a certificate
    SEED_DEMO_DATA: bool = True
    AVATAR_URL_TEMPLATE: str = "https://picsum.photos/seed/{seed}/100"

    # Certificate tokens
    SECRET_KEY: Optional[str] = None  # Generated and kept in the store when unset
    ALGORITHM: str = "HS256"
    CERTIFICATE_TOKEN_EXPIRE_DAYS: int = 365 * 5

    # CORS
    BACKEND_CORS_ORIGINS: List[AnyHttpUrl] = []

    @field_validator("BACKEND_CORS_ORIGINS", mode="before")
    @classmethod
    def assemble_cors_origins(cls, v: str | List[str]) -> List[str] | str:
        if isinstance(v, str) and not v.startswith("["):
            return [i.strip() for i in v.split(",") if i.strip()]
        elif isinstance(v, (list, str)):
            return v
        raise ValueError(v)

    @field_validator("STORAGE_BACKEND")
    @classmethod
    def validate_storage_backend(cls, v: str) -> str:
        if v not in ("database", "memory"):
            raise ValueError("STORAGE_BACKEND must be 'database' or 'memory'")
        return v

    # Development settings
    DEBUG: bool = False
    TESTING: bool = False

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True
    )

    @property
    def uses_memory_store(self) -> bool:
        """Tests and explicit configuration keep state in memory only."""
        return self.TESTING or self.STORAGE_BACKEND == "memory"


# Create global settings instance
settings = Settings()
