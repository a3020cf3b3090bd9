"""Abstract base class for revealing a directory in the file manager.

The HTTP handlers only talk to this interface. The concrete launcher is
picked once at startup for the host platform, and tests inject a fake.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from pathlib import Path

logger = logging.getLogger(__name__)


class FolderLauncher(ABC):
    """Opens a directory in the host's native file manager.

    Launching is fire-and-forget: ``launch`` returns as soon as the
    external program has been started. Whatever that program does
    afterwards (crash, hang, error output) is never observed.
    """

    @abstractmethod
    def launch(self, path: Path) -> None:
        """Start the file manager on ``path`` without waiting for it.

        Args:
            path: Absolute path of an existing directory.

        Raises:
            LaunchError: If the external program could not be started.
        """
        ...


class LaunchError(Exception):
    """Raised when the file-manager process cannot be spawned."""

    def __init__(self, message: str, command: str = "") -> None:
        super().__init__(message)
        self.command = command
