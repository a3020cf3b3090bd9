"""Tests for the command-line entry point."""

from __future__ import annotations

import logging
import socket
from collections.abc import Iterator
from pathlib import Path
from unittest.mock import patch

import pytest

from folderproxy.cli import main, parse_args


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Iterator[None]:
    for var in ("FOLDERPROXY_BASE_PATH", "FOLDERPROXY_PORT", "FOLDERPROXY_TOKEN", "FOLDERPROXY_CONFINE_TO_BASE"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)
    yield
    # main() installs handlers bound to the captured stderr
    logger = logging.getLogger("folderproxy")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)


class TestParseArgs:
    def test_defaults_are_unset(self) -> None:
        args = parse_args([])
        assert args.base is None
        assert args.port is None
        assert args.token is None
        assert args.allow_parent_traversal is False
        assert args.verbose is False

    def test_single_dash_flags(self) -> None:
        args = parse_args(["-base", "/srv", "-port", "1234", "-token", "foo"])
        assert args.base == Path("/srv")
        assert args.port == 1234
        assert args.token == "foo"

    def test_double_dash_flags(self) -> None:
        args = parse_args(["--base", "x", "--port", "1", "--token", "t", "--allow-parent-traversal", "-v"])
        assert args.base == Path("x")
        assert args.allow_parent_traversal is True
        assert args.verbose is True


class TestMain:
    def test_missing_base_exits(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as excinfo:
            main(["-base", str(tmp_path / "missing")])
        assert excinfo.value.code == 1
        assert "base path does not exist" in capsys.readouterr().out

    def test_base_is_file_exits(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        (tmp_path / "file.txt").write_text("x")
        with pytest.raises(SystemExit) as excinfo:
            main(["-base", str(tmp_path / "file.txt")])
        assert excinfo.value.code == 1
        assert "not a directory" in capsys.readouterr().out

    def test_invalid_port_exits(self) -> None:
        with pytest.raises(SystemExit) as excinfo:
            main(["-port", "0"])
        assert excinfo.value.code == 1

    def test_starts_server_on_localhost(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        with patch("folderproxy.gateway.server.uvicorn.run") as run:
            main(["-base", str(tmp_path), "-port", "1234", "-token", "foo"])

        out = capsys.readouterr().out
        assert f"Base path: {tmp_path}" in out
        assert "Listening on http://localhost:1234" in out
        assert "Example:\n http://localhost:1234/open?name=.&token=foo" in out

        run.assert_called_once()
        app = run.call_args.args[0]
        assert run.call_args.kwargs == {"host": "localhost", "port": 1234}
        assert app.state.config.base_path == tmp_path
        assert app.state.config.confine_to_base is True

    def test_allow_parent_traversal(self, tmp_path: Path) -> None:
        with patch("folderproxy.gateway.server.uvicorn.run") as run:
            main(["-base", str(tmp_path), "--allow-parent-traversal"])
        app = run.call_args.args[0]
        assert app.state.config.confine_to_base is False

    def test_default_base_is_cwd(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        with patch("folderproxy.gateway.server.uvicorn.run") as run:
            main([])
        app = run.call_args.args[0]
        assert app.state.config.base_path == tmp_path
        assert run.call_args.kwargs["port"] == 4455
        assert "token=\n" in capsys.readouterr().out

    def test_malformed_config_file_exits(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        config_file = tmp_path / "folderproxy.yaml"
        config_file.write_text("just a string\n")
        with pytest.raises(SystemExit) as excinfo:
            main(["-c", str(config_file), "-base", str(tmp_path)])
        assert excinfo.value.code == 1
        assert "Error in configuration" in capsys.readouterr().out

    def test_port_in_use_exits_non_zero(self, tmp_path: Path) -> None:
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as held:
            held.bind(("127.0.0.1", 0))
            held.listen(1)
            port = held.getsockname()[1]
            with pytest.raises(SystemExit) as excinfo:
                main(["-base", str(tmp_path), "-port", str(port)])
        assert excinfo.value.code not in (0, None)
