"""Per-platform file-manager commands.

    Windows  -> explorer <path>
    Darwin   -> open <path>
    others   -> xdg-open <path>
"""

from __future__ import annotations

import logging
import platform
import subprocess
from collections.abc import Sequence
from pathlib import Path

from folderproxy.launcher.base import FolderLauncher, LaunchError

logger = logging.getLogger(__name__)

PLATFORM_COMMANDS: dict[str, tuple[str, ...]] = {
    "Windows": ("explorer",),
    "Darwin": ("open",),
}
DEFAULT_COMMAND: tuple[str, ...] = ("xdg-open",)


class CommandLauncher(FolderLauncher):
    """Reveals a directory by spawning an external command.

    The path is appended as the last argument. The child is started with
    :class:`subprocess.Popen` and never waited on, so only failures of the
    spawn step itself (missing executable, permissions) are reported.
    The child's standard streams are attached to the null device.
    """

    def __init__(self, command: Sequence[str]) -> None:
        if not command:
            raise ValueError("command must not be empty")
        self._command = tuple(command)

    @property
    def command(self) -> tuple[str, ...]:
        return self._command

    def launch(self, path: Path) -> None:
        argv = [*self._command, str(path)]
        try:
            subprocess.Popen(
                argv,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
            )
        except OSError as e:
            raise LaunchError(str(e), command=self._command[0]) from e
        logger.info("Launched %s on %s", self._command[0], path)


def command_for_platform(system: str | None = None) -> tuple[str, ...]:
    """Return the file-manager command for ``system`` (default: this host)."""
    if system is None:
        system = platform.system()
    return PLATFORM_COMMANDS.get(system, DEFAULT_COMMAND)


def launcher_for_platform(system: str | None = None) -> CommandLauncher:
    """Build the launcher for ``system`` (default: this host)."""
    command = command_for_platform(system)
    logger.debug("Using file-manager command %s", command[0])
    return CommandLauncher(command)
