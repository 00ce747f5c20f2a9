"""Loader for the generator's ``.auth-bp-config.json`` snapshot."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

import structlog
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from auth_gate.errors import ProjectConfigError
from auth_gate.routing.config import RoutingConfig

logger = structlog.get_logger()

PROJECT_CONFIG_FILENAME = ".auth-bp-config.json"


class FrontendConfig(BaseModel):
    """``frontend`` section written by the project generator."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    framework: str = "nextjs"
    whitelabel: bool = False
    rbac: bool = False
    multitenant: bool = False
    backend_url: str | None = Field(default=None, alias="backendUrl")


class ProjectConfigFile(BaseModel):
    """Top-level shape of the snapshot file."""

    model_config = ConfigDict(extra="ignore")

    version: str
    timestamp: datetime | None = None
    frontend: FrontendConfig

    def routing_config(self) -> RoutingConfig:
        return RoutingConfig.for_features(
            rbac=self.frontend.rbac,
            multitenant=self.frontend.multitenant,
        )


def read_project_file(path: Path) -> ProjectConfigFile:
    """Parse the snapshot at ``path`` (a file or a project root).

    Raises:
        ProjectConfigError: file missing, unreadable, or not matching
            the expected shape.
    """
    if path.is_dir():
        path = path / PROJECT_CONFIG_FILENAME
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ProjectConfigError(f"Cannot read {path}: {exc}") from exc

    try:
        project = ProjectConfigFile.model_validate_json(raw)
    except ValidationError as exc:
        raise ProjectConfigError(f"Invalid project config {path}: {exc}") from exc

    logger.info(
        "project_config_loaded",
        path=str(path),
        version=project.version,
        rbac=project.frontend.rbac,
        multitenant=project.frontend.multitenant,
    )
    return project


def load_project_config(path: Path) -> RoutingConfig:
    """Build a :class:`RoutingConfig` from the snapshot at ``path``."""
    return read_project_file(path).routing_config()
