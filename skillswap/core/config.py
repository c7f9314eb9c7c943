"""Application configuration management.

This module handles environment-specific configuration loading, parsing, and management
for the application. It includes environment detection, .env file loading, and
configuration value parsing.
"""

import os
from enum import Enum
from pathlib import Path

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings


class Environment(str, Enum):
    """Application environment types.

    Defines the possible environments the application can run in:
    development, staging, production, and test.
    """

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TEST = "test"


def get_environment() -> Environment:
    """Get the current environment.

    Returns:
        Environment: The current environment (development, staging, production, or test)
    """
    match os.getenv("APP_ENV", "development").lower():
        case "production" | "prod":
            return Environment.PRODUCTION
        case "staging" | "stage":
            return Environment.STAGING
        case "test":
            return Environment.TEST
        case _:
            return Environment.DEVELOPMENT


def load_env_file():
    """Load .env file."""
    if Path(".env").exists():
        load_dotenv(".env")

    # Environment specific overrides, e.g. .env.test
    env_specific = f".env.{get_environment().value}"
    if Path(env_specific).exists():
        load_dotenv(env_specific, override=True)


load_env_file()


class Settings(BaseSettings):
    """Application settings.

    This class defines all configuration settings for the application,
    including the Firestore connection, JWT secrets and rate limits.
    """

    # Application Settings
    APP_ENV: Environment = Field(default_factory=get_environment)
    PROJECT_NAME: str = Field(default="SkillSwap API")
    VERSION: str = Field(default="1.0.0")
    DESCRIPTION: str = Field(
        default="Peer-to-peer skill exchange: matching, messaging and session scheduling",
    )
    API_PREFIX: str = Field(default="/api")
    DEBUG: bool = Field(default=False)

    # CORS Settings
    ALLOWED_ORIGINS: str = Field(
        default="http://localhost:3000,http://127.0.0.1:3000",
    )

    @property
    def ALLOWED_ORIGINS_LIST(self) -> list[str]:
        """Parse ALLOWED_ORIGINS string into a list."""
        origins = [
            origin.strip() for origin in self.ALLOWED_ORIGINS.split(",") if origin.strip()
        ]
        if not origins:
            return ["*"]
        return origins

    # Logging Configuration
    LOG_LEVEL: str = Field(default="INFO")
    LOG_FORMAT: str = Field(default="console")

    # JWT Configuration
    JWT_SECRET_KEY: str = Field(
        default="your-secret-key-change-in-production",
    )
    JWT_ALGORITHM: str = Field(default="HS256")
    JWT_ACCESS_TOKEN_EXPIRE_DAYS: int = Field(default=7)

    # Firebase Configuration
    FIREBASE_PROJECT_ID: str = Field(default="")
    FIREBASE_CREDENTIALS_PATH: str = Field(default="")
    FIRESTORE_USERS_COLLECTION: str = Field(default="users")

    # Rate Limiting
    RATE_LIMIT_ENABLED: bool = Field(default=True)
    RATE_LIMIT_DEFAULT: str = Field(default="100 per 15 minutes")
    RATE_LIMIT_REGISTER: str = Field(default="20 per hour")
    RATE_LIMIT_LOGIN: str = Field(default="50 per minute")
    RATE_LIMIT_MESSAGES: str = Field(default="100 per minute")
    RATE_LIMIT_HEALTH: str = Field(default="100 per minute")

    @property
    def RATE_LIMIT_ENDPOINTS(self) -> dict:
        """Get rate limit configuration for endpoints."""
        return {
            "default": [self.RATE_LIMIT_DEFAULT],
            "register": [self.RATE_LIMIT_REGISTER],
            "login": [self.RATE_LIMIT_LOGIN],
            "messages": [self.RATE_LIMIT_MESSAGES],
            "health": [self.RATE_LIMIT_HEALTH],
        }

    class Config:
        """Pydantic configuration."""

        env_file = ".env"
        case_sensitive = True
        extra = "ignore"


settings = Settings()
