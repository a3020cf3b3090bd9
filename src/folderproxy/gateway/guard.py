"""Request validation shared by all gateway endpoints.

Two checks run before any filesystem or process operation: the shared
secret token, then the shape of the caller-supplied path.
"""

from __future__ import annotations

import hmac
import logging
import os.path
from pathlib import Path

logger = logging.getLogger(__name__)


class InvalidTokenError(Exception):
    """Raised when the supplied token does not match the configured one."""


class InvalidNameError(Exception):
    """Raised when a caller-supplied name cannot be mapped below the base."""

    def __init__(self, message: str, name: str = "") -> None:
        super().__init__(message)
        self.name = name


def check_token(expected: str, given: str) -> None:
    """Verify the caller's token.

    An empty ``expected`` token disables authentication.

    Raises:
        InvalidTokenError: If a token is configured and ``given`` differs.
    """
    if not expected:
        return
    if not hmac.compare_digest(expected.encode("utf-8"), given.encode("utf-8")):
        raise InvalidTokenError("token mismatch")


def resolve_name(base_path: Path, name: str, confine_to_base: bool = True) -> Path:
    """Map a relative ``name`` onto ``base_path``.

    The name is cleaned lexically (``.``/``..`` collapsed, duplicate
    separators removed) and joined onto the base. Absolute names are
    rejected based on the string the caller sent, not its cleaned form.

    Without ``confine_to_base`` a name such as ``../etc`` still climbs
    above the base after joining. With it, the joined path must be the
    base itself or lie lexically below it. Symlinks are not resolved.

    Args:
        base_path: Absolute, already normalised base directory.
        name: Raw ``name`` query parameter.
        confine_to_base: Reject results outside ``base_path``.

    Returns:
        The absolute candidate path. Nothing is checked on disk.

    Raises:
        InvalidNameError: If the name is absolute or escapes the base.
    """
    cleaned = os.path.normpath(name)
    if os.path.isabs(name):
        logger.warning("Rejected absolute name %r (cleaned: %r)", name, cleaned)
        raise InvalidNameError("absolute path", name=name)

    base = str(base_path)
    full = os.path.normpath(os.path.join(base, cleaned))

    if confine_to_base and not _is_within(base, full):
        logger.warning("Rejected name %r escaping base %s", name, base)
        raise InvalidNameError("path escapes base directory", name=name)

    return Path(full)


def _is_within(base: str, path: str) -> bool:
    try:
        return os.path.commonpath([base, path]) == base
    except ValueError:
        # Different drives on Windows
        return False
