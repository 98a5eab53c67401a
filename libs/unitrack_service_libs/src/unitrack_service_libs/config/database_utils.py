"""Database URL assembly shared by UniTrack services."""

from __future__ import annotations

import os
from urllib.parse import quote_plus


def build_database_url(
    *,
    database_name: str,
    service_env_var_prefix: str,
    is_production: bool,
    dev_port: int,
    dev_host: str = "localhost",
    url_encode_password: bool = True,
) -> str:
    """
    Build an asyncpg database URL for a service.

    Resolution order:
    1. ``{service_env_var_prefix}_DATABASE_URL``
    2. ``SERVICE_DATABASE_URL``
    3. Assembled from ``UNITRACK_DB_*`` (development) or
       ``UNITRACK_PROD_DB_*`` (production) variables

    Raises:
        ValueError: If the credentials needed to assemble the URL are missing
    """
    service_override = os.getenv(f"{service_env_var_prefix}_DATABASE_URL")
    if service_override:
        return service_override

    generic_override = os.getenv("SERVICE_DATABASE_URL")
    if generic_override:
        return generic_override

    user = os.getenv("UNITRACK_DB_USER")
    if is_production:
        host = os.getenv("UNITRACK_PROD_DB_HOST")
        port = os.getenv("UNITRACK_PROD_DB_PORT", "5432")
        password = os.getenv("UNITRACK_PROD_DB_PASSWORD")
        if not (user and host and password):
            raise ValueError(
                "Production database requires UNITRACK_DB_USER, UNITRACK_PROD_DB_HOST "
                "and UNITRACK_PROD_DB_PASSWORD"
            )
    else:
        host = dev_host
        port = str(dev_port)
        password = os.getenv("UNITRACK_DB_PASSWORD")
        if not (user and password):
            raise ValueError(
                "Missing required database credentials: UNITRACK_DB_USER and "
                "UNITRACK_DB_PASSWORD must be set"
            )

    if url_encode_password:
        password = quote_plus(password)

    return f"postgresql+asyncpg://{user}:{password}@{host}:{port}/{database_name}"
