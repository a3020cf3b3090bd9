"""Shared test fixtures for the folderproxy test suite.

Provides a small directory tree under a base directory, gateway
configurations with and without a token, and a fake launcher so no
real file manager is ever started.
"""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient
from pydantic import SecretStr

from folderproxy.config.settings import GatewayConfig
from folderproxy.gateway.server import create_app
from folderproxy.launcher.base import FolderLauncher

TOKEN = "secret"


# ---------------------------------------------------------------------------
# Filesystem Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def base_dir(tmp_path: Path) -> Path:
    """A base directory laid out as::

        tmp/base/site-a/report.pdf
        tmp/base/site-a/notes.txt
        tmp/base/only-txt/readme.txt
        tmp/base/empty/
        tmp/base/file.md
        tmp/outside/
    """
    base = tmp_path / "base"
    (base / "site-a").mkdir(parents=True)
    (base / "site-a" / "report.pdf").write_bytes(b"%PDF")
    (base / "site-a" / "notes.txt").write_text("notes")
    (base / "only-txt").mkdir()
    (base / "only-txt" / "readme.txt").write_text("readme")
    (base / "empty").mkdir()
    (base / "file.md").write_text("# file")
    (tmp_path / "outside").mkdir()
    return base


# ---------------------------------------------------------------------------
# Gateway Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def gateway_config(base_dir: Path) -> GatewayConfig:
    """Configuration with a token and the default path confinement."""
    return GatewayConfig(base_path=base_dir, token=SecretStr(TOKEN))


@pytest.fixture
def fake_launcher() -> MagicMock:
    """A FolderLauncher that records launches instead of spawning processes."""
    return MagicMock(spec=FolderLauncher)


@pytest.fixture
def client(gateway_config: GatewayConfig, fake_launcher: MagicMock) -> TestClient:
    """A test client for the gateway with the fake launcher injected."""
    return TestClient(create_app(gateway_config, launcher=fake_launcher))
