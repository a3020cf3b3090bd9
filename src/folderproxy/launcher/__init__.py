"""File-manager launchers for folderproxy.

Public API:
    FolderLauncher -- Abstract base class
    CommandLauncher -- Spawns the platform's reveal command
    launcher_for_platform -- Picks the CommandLauncher for this host
"""

from folderproxy.launcher.base import FolderLauncher, LaunchError
from folderproxy.launcher.command import CommandLauncher, launcher_for_platform

__all__ = ["CommandLauncher", "FolderLauncher", "LaunchError", "launcher_for_platform"]
