# Standard library imports
from pathlib import Path
import secrets
from typing import Literal

# Third-party imports
from pydantic import computed_field
from pydantic_core import MultiHostUrl
from pydantic_settings import BaseSettings, SettingsConfigDict

BASE_DIR: Path = Path(__file__).resolve().parent.parent


class CommonSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_ignore_empty=True,
        extra="ignore",
    )

    # General settings
    API_V1_STR: str = "/api/v1"
    ENVIRONMENT: Literal["dev", "staging", "production"] = "dev"
    DEBUG_MODE: bool = False
    PROJECT_NAME: str = "VoteTrack"
    CREATE_TABLES_ON_STARTUP: bool = False

    # Database settings
    POSTGRES_SERVER: str = "localhost"
    POSTGRES_PORT: int = 5432
    POSTGRES_USER: str = "votetrack"
    POSTGRES_PASSWORD: str = "votetrack"
    POSTGRES_DB: str = "votetrack"
    # Full async URL override, e.g. sqlite+aiosqlite:///./votetrack.db
    DATABASE_URL: str | None = None
    SQL_ECHO: bool = False

    @computed_field  # type: ignore[prop-decorator, misc]
    @property
    def SQLALCHEMY_ASYNC_DATABASE_URI(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return str(
            MultiHostUrl.build(
                scheme="postgresql+asyncpg",  # async driver for async queries
                username=self.POSTGRES_USER,
                password=self.POSTGRES_PASSWORD,
                host=self.POSTGRES_SERVER,
                port=self.POSTGRES_PORT,
                path=self.POSTGRES_DB,
            )
        )

    # Optional settings
    SENTRY_DSN: str | None = None

    # Admin settings
    ADMIN_API_TOKEN: str = secrets.token_urlsafe(32)

    # Bulk import settings
    IMPORT_MAX_ROWS: int = 10_000
    IMPORT_DEFAULT_DELIMITER: str = ","

    # Pagination configurations
    PAGINATION_DEFAULT_LIMIT: int = 50
    PAGINATION_MAX_LIMIT: int = 500
