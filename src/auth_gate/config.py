"""Centralized application configuration via environment variables."""

from enum import StrEnum
from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

from auth_gate.routing.config import (
    DEFAULT_PUBLIC_ROUTES,
    DEFAULT_SKIP_PREFIXES,
    SESSION_COOKIE_NAME,
    RoutingConfig,
)
from auth_gate.routing.project_file import read_project_file


class Environment(StrEnum):
    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TESTING = "testing"


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Feature flags come from ``RBAC_ENABLED`` / ``MULTITENANT_ENABLED``
    unless ``PROJECT_CONFIG_PATH`` points at a generator snapshot, in
    which case the snapshot wins.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # --- App ---
    environment: Environment = Environment.DEVELOPMENT
    log_level: str = "DEBUG"

    # --- Features ---
    rbac_enabled: bool = False
    multitenant_enabled: bool = False
    project_config_path: Path | None = None

    # --- Routes ---
    public_route_prefixes: list[str] = list(DEFAULT_PUBLIC_ROUTES)
    # Empty means "defaults for the enabled features".
    protected_route_prefixes: list[str] = []
    middleware_skip_prefixes: list[str] = [*DEFAULT_SKIP_PREFIXES, "/health"]

    # --- Session ---
    session_cookie_name: str = SESSION_COOKIE_NAME

    def routing_config(self) -> RoutingConfig:
        """Build the immutable engine configuration from these settings."""
        rbac, multitenant = self.rbac_enabled, self.multitenant_enabled
        if self.project_config_path is not None:
            frontend = read_project_file(self.project_config_path).frontend
            rbac, multitenant = frontend.rbac, frontend.multitenant

        return RoutingConfig.for_features(
            rbac=rbac,
            multitenant=multitenant,
            public_route_prefixes=tuple(self.public_route_prefixes),
            protected_route_prefixes=tuple(self.protected_route_prefixes) or None,
            session_cookie_name=self.session_cookie_name,
        )

    # --- Convenience properties ---
    @property
    def is_dev(self) -> bool:
        return self.environment == Environment.DEVELOPMENT

    @property
    def is_prod(self) -> bool:
        return self.environment == Environment.PRODUCTION

    @property
    def is_testing(self) -> bool:
        return self.environment == Environment.TESTING


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Cached settings singleton.

    Usage::

        from auth_gate.config import get_settings
        settings = get_settings()
    """
    return Settings()
