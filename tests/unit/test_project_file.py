"""Tests for the generator config snapshot loader."""

import json
from pathlib import Path

import pytest

from auth_gate.errors import ProjectConfigError
from auth_gate.routing.project_file import (
    PROJECT_CONFIG_FILENAME,
    load_project_config,
    read_project_file,
)


def _write(path: Path, content: object) -> Path:
    target = path / PROJECT_CONFIG_FILENAME
    target.write_text(json.dumps(content) if not isinstance(content, str) else content)
    return target


SNAPSHOT = {
    "version": "1.0.0",
    "timestamp": "2026-01-15T10:30:00.000Z",
    "frontend": {
        "framework": "nextjs",
        "whitelabel": False,
        "rbac": True,
        "multitenant": True,
        "backendUrl": "http://localhost:8000",
    },
}


class TestReadProjectFile:
    def test_reads_snapshot(self, tmp_path: Path) -> None:
        project = read_project_file(_write(tmp_path, SNAPSHOT))
        assert project.version == "1.0.0"
        assert project.frontend.rbac is True
        assert project.frontend.backend_url == "http://localhost:8000"

    def test_directory_resolves_filename(self, tmp_path: Path) -> None:
        _write(tmp_path, SNAPSHOT)
        assert read_project_file(tmp_path).frontend.multitenant is True

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ProjectConfigError, match="Cannot read"):
            read_project_file(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path: Path) -> None:
        with pytest.raises(ProjectConfigError, match="Invalid project config"):
            read_project_file(_write(tmp_path, "{not json"))

    def test_missing_frontend(self, tmp_path: Path) -> None:
        with pytest.raises(ProjectConfigError):
            read_project_file(_write(tmp_path, {"version": "1.0.0"}))


class TestLoadProjectConfig:
    def test_builds_routing_config(self, tmp_path: Path) -> None:
        config = load_project_config(_write(tmp_path, SNAPSHOT))
        assert config.rbac_enabled is True
        assert config.multitenant_enabled is True
        assert config.protected_route_prefixes == (
            "/dashboard",
            "/profile",
            "/admin",
            "/mp",
        )

    def test_feature_flags_default_off(self, tmp_path: Path) -> None:
        config = load_project_config(
            _write(tmp_path, {"version": "1.0.0", "frontend": {}})
        )
        assert config.rbac_enabled is False
        assert config.multitenant_enabled is False
