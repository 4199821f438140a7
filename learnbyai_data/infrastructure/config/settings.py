import logging
import os
from enum import Enum
from typing import Optional

from pydantic_settings import BaseSettings
from starlette.config import Config

logger = logging.getLogger(__name__)

current_file_dir = os.path.dirname(os.path.realpath(__file__))
project_root = os.path.abspath(os.path.join(current_file_dir, "..", "..", ".."))

env_paths = [
    os.path.join(project_root, ".env.local"),
    os.path.join(project_root, ".env"),
    "/.env",
]

env_path = next((path for path in env_paths if os.path.isfile(path)), None)
logger.info(f"Using environment file at: {env_path or '<environment only>'}")

config = Config(env_path)


class EnvironmentOption(str, Enum):
    """Environment options for the application."""

    PRODUCTION = "production"
    STAGING = "staging"
    DEVELOPMENT = "development"
    LOCAL = "local"


class EnvironmentSettings(BaseSettings):
    """Environment-related settings."""

    ENVIRONMENT: EnvironmentOption = config("ENVIRONMENT", default=EnvironmentOption.DEVELOPMENT, cast=EnvironmentOption)


class VectorStoreSettings(BaseSettings):
    """Pinecone settings."""

    PINECONE_API_KEY: Optional[str] = config("PINECONE_API_KEY", default=None)
    PINECONE_INDEX_NAME: str = config("PINECONE_INDEX_NAME", default="learnbyai-content")
    PINECONE_NAMESPACE: str = config("PINECONE_NAMESPACE", default="books")


class DocumentStoreSettings(BaseSettings):
    """MongoDB settings."""

    MONGODB_URI: Optional[str] = config("MONGODB_URI", default=None)
    MONGODB_DB_NAME: str = config("MONGODB_DB_NAME", default="learnbyai_platform")

    @property
    def MONGODB_HOST(self) -> str:
        """Host part of the connection URI, without credentials."""
        if not self.MONGODB_URI:
            return "MongoDB"
        _, at, host = self.MONGODB_URI.partition("@")
        if not at:
            host = self.MONGODB_URI.split("://", 1)[-1]
        return host or "MongoDB"


class RelationalStoreSettings(BaseSettings):
    """Supabase settings, only read by the connection diagnostics."""

    SUPABASE_URL: Optional[str] = config("SUPABASE_URL", default=None)
    SUPABASE_SERVICE_ROLE_KEY: Optional[str] = config("SUPABASE_SERVICE_ROLE_KEY", default=None)


class LoggingSettings(BaseSettings):
    """Centralized logging configuration settings."""

    LOG_LEVEL: str = config("LOG_LEVEL", default="INFO")
    LOG_FORMAT: str = config("LOG_FORMAT", default="structured")  # "simple", "detailed", "structured", "json"

    LOG_CONSOLE_ENABLED: bool = config("LOG_CONSOLE_ENABLED", default=True, cast=bool)
    LOG_FILE_ENABLED: bool = config("LOG_FILE_ENABLED", default=False, cast=bool)
    LOG_FILE_PATH: str = config("LOG_FILE_PATH", default="logs/learnbyai_data.log")
    LOG_FILE_MAX_SIZE: int = config("LOG_FILE_MAX_SIZE", default=10485760, cast=int)
    LOG_FILE_BACKUP_COUNT: int = config("LOG_FILE_BACKUP_COUNT", default=5, cast=int)

    LOG_DEVELOPMENT_VERBOSE: bool = config("LOG_DEVELOPMENT_VERBOSE", default=True, cast=bool)
    LOG_PRODUCTION_OPTIMIZE: bool = config("LOG_PRODUCTION_OPTIMIZE", default=True, cast=bool)

    @property
    def LOG_LEVEL_INT(self) -> int:
        """Convert string log level to integer."""
        level = logging.getLevelName(self.LOG_LEVEL.upper())
        return level if isinstance(level, int) else logging.INFO


class Settings(
    EnvironmentSettings,
    VectorStoreSettings,
    DocumentStoreSettings,
    RelationalStoreSettings,
    LoggingSettings,
):
    """Main settings class that combines all setting categories."""

    pass


settings = Settings()


def get_settings() -> Settings:
    """Get application settings.

    Returns:
        The application settings.
    """
    return settings
