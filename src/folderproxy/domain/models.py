"""Per-request domain models for the folderproxy gateway.

Each incoming request is parsed into one of these frozen values. None of
them outlive the HTTP request/response cycle. Missing query parameters
are represented as empty strings so the handlers can report them with
their own messages instead of a generic validation error.
"""

from __future__ import annotations

import enum

from pydantic import BaseModel, ConfigDict, Field


class BadgeColor(str, enum.Enum):
    """Fill colour of a folder badge."""

    RED = "red"  # Path does not exist
    GREEN = "green"  # Path exists (and a matching file was found, if asked)
    ORANGE = "orange"  # Path exists but no qualifying file matched


class OpenRequest(BaseModel):
    """Ask the gateway to reveal ``name`` (relative to the base) in the file manager."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(default="", description="Path relative to the base directory")
    token: str = Field(default="", description="Shared secret supplied by the caller")


class BadgeRequest(BaseModel):
    """Ask whether ``name`` exists and optionally holds a file matching ``glob``."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(default="", description="Path relative to the base directory")
    glob: str = Field(default="", description="Filename pattern looked up inside name")
    token: str = Field(default="", description="Shared secret supplied by the caller")


class StyleRequest(BaseModel):
    """Ask for a CSS rule that un-hides elements carrying ``class_name``."""

    model_config = ConfigDict(frozen=True)

    class_name: str = Field(default="", description="CSS class to reveal")
    token: str = Field(default="", description="Shared secret supplied by the caller")
