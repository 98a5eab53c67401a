from __future__ import annotations

import os
from decimal import Decimal

from dotenv import find_dotenv, load_dotenv
from pydantic import Field
from pydantic_settings import SettingsConfigDict
from unitrack_service_libs.config import ServiceSettings

# Load .env file from repository root, regardless of current working directory
load_dotenv(find_dotenv(".env"))


class Settings(ServiceSettings):
    """
    Configuration settings for the Grading Service.

    These settings can be overridden via environment variables prefixed with
    GRADING_SERVICE_.
    """

    SERVICE_NAME: str = "grading_service"

    @property
    def DATABASE_URL(self) -> str:
        """Return the PostgreSQL database URL for both runtime and migrations."""
        env_type = os.getenv("ENV_TYPE", "development").lower()
        if env_type == "docker":
            dev_host = os.getenv("GRADING_SERVICE_DB_HOST", "grading_db")
            dev_port_str = os.getenv("GRADING_SERVICE_DB_PORT", "5432")
        else:
            dev_host = "localhost"
            dev_port_str = "5446"

        return self.build_database_url(
            database_name="unitrack_grading",
            service_env_var_prefix="GRADING_SERVICE",
            dev_port=int(dev_port_str),
            dev_host=dev_host,
        )

    # Database Pool Configuration
    DATABASE_POOL_SIZE: int = Field(default=10, description="Database connection pool size")
    DATABASE_MAX_OVERFLOW: int = Field(default=20, description="Maximum overflow connections")
    DATABASE_POOL_PRE_PING: bool = Field(default=True, description="Pre-ping connections")
    DATABASE_POOL_RECYCLE: int = Field(
        default=3600, description="Recycle connections after seconds"
    )
    DATABASE_ECHO: bool = Field(default=False, description="Log emitted SQL statements")

    # Grading Configuration
    SCORE_RESOLUTION: Decimal = Field(
        default=Decimal("0.01"),
        gt=0,
        description="Largest distance between adjacent bands treated as contiguous",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_prefix="GRADING_SERVICE_",
    )


settings = Settings()
