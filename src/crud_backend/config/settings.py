"""
Configuration settings for the CRUD backend
"""

import os
import logging
from dataclasses import dataclass
from typing import Optional

logger = logging.getLogger(__name__)

STORE_BACKENDS = ("memory", "postgres")


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}


@dataclass
class Settings:
    """Runtime configuration, read once at process start"""
    env: str = "PROD"
    port: int = 8080
    log_level: str = "INFO"

    # Persistence
    store_backend: str = "memory"
    database_url: Optional[str] = None
    db_pool_min_size: int = 2
    db_pool_max_size: int = 10
    db_command_timeout: float = 60

    # Optional bearer-token auth for the users routes
    enable_auth: bool = False
    jwt_secret: Optional[str] = None
    jwt_algorithm: str = "HS256"
    jwt_audience: Optional[str] = None
    jwt_issuer: Optional[str] = None
    access_token_ttl_seconds: int = 900

    def validate(self) -> "Settings":
        """Reject configurations the app cannot start with"""
        if self.store_backend not in STORE_BACKENDS:
            raise ValueError(
                f"STORE_BACKEND must be one of {', '.join(STORE_BACKENDS)}, got {self.store_backend!r}"
            )
        if self.store_backend == "postgres" and not self.database_url:
            raise ValueError("DATABASE_URL environment variable is required for the postgres store")
        if self.enable_auth and not self.jwt_secret:
            raise ValueError("JWT_SECRET environment variable is required when ENABLE_AUTH is set")
        if self.db_pool_min_size > self.db_pool_max_size:
            raise ValueError("DB_POOL_MIN_SIZE cannot exceed DB_POOL_MAX_SIZE")
        return self


def load_settings() -> Settings:
    """Build Settings from environment variables"""
    settings = Settings(
        env=os.getenv("ENV", "PROD"),
        port=int(os.getenv("PORT", 8080)),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        store_backend=os.getenv("STORE_BACKEND", "memory").strip().lower(),
        database_url=os.getenv("DATABASE_URL"),
        db_pool_min_size=int(os.getenv("DB_POOL_MIN_SIZE", 2)),
        db_pool_max_size=int(os.getenv("DB_POOL_MAX_SIZE", 10)),
        db_command_timeout=float(os.getenv("DB_COMMAND_TIMEOUT", 60)),
        enable_auth=_env_flag("ENABLE_AUTH"),
        jwt_secret=os.getenv("JWT_SECRET"),
        jwt_algorithm=os.getenv("JWT_ALGORITHM", "HS256"),
        jwt_audience=os.getenv("JWT_AUDIENCE"),
        jwt_issuer=os.getenv("JWT_ISSUER"),
        access_token_ttl_seconds=int(os.getenv("ACCESS_TOKEN_TTL_SECONDS", 900)),
    ).validate()

    logger.info(f"Environment: {settings.env}")
    logger.info(f"Store backend: {settings.store_backend}, auth enabled: {settings.enable_auth}")
    return settings
