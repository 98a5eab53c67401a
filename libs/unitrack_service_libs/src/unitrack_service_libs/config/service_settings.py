"""Base settings class shared by UniTrack services."""

from __future__ import annotations

from common_core.config_enums import Environment
from pydantic import Field
from pydantic_settings import BaseSettings

from .database_utils import build_database_url


class ServiceSettings(BaseSettings):
    """
    Common settings for UniTrack services.

    Subclasses set their own ``model_config`` with a service ``env_prefix``;
    ENVIRONMENT is always read from the global ENVIRONMENT variable.
    """

    SERVICE_NAME: str = "unitrack_service"
    LOG_LEVEL: str = "INFO"
    ENVIRONMENT: Environment = Field(
        default=Environment.DEVELOPMENT,
        validation_alias="ENVIRONMENT",
        description="Runtime environment for the service",
    )

    def is_production(self) -> bool:
        return self.ENVIRONMENT == Environment.PRODUCTION

    def build_database_url(
        self,
        *,
        database_name: str,
        service_env_var_prefix: str,
        dev_port: int,
        dev_host: str = "localhost",
    ) -> str:
        """Build the service database URL for the current environment."""
        return build_database_url(
            database_name=database_name,
            service_env_var_prefix=service_env_var_prefix,
            is_production=self.is_production(),
            dev_port=dev_port,
            dev_host=dev_host,
        )
