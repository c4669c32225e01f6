"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support and the GATEKEEPER_ env prefix. Relation names and
entity type names are required and validated at load time; only the
cache TTL and infrastructure knobs carry defaults.
"""

from functools import lru_cache

from pydantic import SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from gatekeeper.core.constants import CACHE_BACKENDS


class Settings(BaseSettings):
    """Settings loaded from environment and .env.

    role_user_table and permission_role_table name the two join tables and
    double as cache tags. The *_entity fields name the entity types passed
    to lifecycle hooks and to the assignment store.
    """

    # App
    app_name: str = "gatekeeper"
    app_version: str = "1.0.0"
    debug: bool = False

    # Relations and entity types (required)
    role_user_table: str
    permission_role_table: str
    principal_entity: str
    role_entity: str
    permission_entity: str

    # Cache
    cache_backend: str = "memory"
    cache_ttl: int = 60

    # Redis (cache_backend == "redis")
    redis_host: str = "localhost"
    redis_port: int = 6379
    redis_db: int = 0
    redis_password: SecretStr | None = None

    # Reference SQL assignment store
    database_url: str = "sqlite+aiosqlite:///:memory:"
    database_echo: bool = False

    # Legacy role restore behaviour: invalidate only when restore reports failure.
    role_restore_inverted: bool = False

    # OpenTelemetry
    telemetry_enabled: bool = False
    telemetry_exporter: str = "console"
    telemetry_otlp_endpoint: str | None = None
    telemetry_sample_rate: float = 1.0
    telemetry_environment: str = "development"

    model_config = SettingsConfigDict(
        env_prefix="GATEKEEPER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def validate_relations_and_cache(self) -> "Settings":
        """Validate relation names, entity names, and cache backend.

        - Relation and entity names must be non-empty.
        - The two relation names must differ (they are distinct cache tags).
        - cache_backend must be one of redis, memory, array.
        - cache_ttl must not be negative.
        """
        for field in (
            "role_user_table",
            "permission_role_table",
            "principal_entity",
            "role_entity",
            "permission_entity",
        ):
            if not getattr(self, field).strip():
                raise ValueError(f"{field} must be a non-empty string")
        if self.role_user_table == self.permission_role_table:
            raise ValueError(
                "role_user_table and permission_role_table must name different relations"
            )
        if len({self.principal_entity, self.role_entity, self.permission_entity}) != 3:
            raise ValueError("principal_entity, role_entity and permission_entity must differ")
        if self.cache_backend not in CACHE_BACKENDS:
            raise ValueError(
                f"Invalid cache_backend '{self.cache_backend}'. "
                f"Must be one of: {', '.join(CACHE_BACKENDS)}"
            )
        if self.cache_ttl < 0:
            raise ValueError("cache_ttl must be >= 0")
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached settings (single instance per process).

    Validation runs on first call, not at import time. In tests, call
    get_settings.cache_clear() before overriding env vars so the next
    get_settings() uses the new values.

    Returns:
        Loaded and validated Settings instance.
    """
    return Settings()
