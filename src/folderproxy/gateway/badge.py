"""Status badges for the ``/test`` endpoint.

A badge is a 16x16 SVG whose fill colour tells an embedding web page
whether a link target is usable:

    red     the path does not exist (labelled with the glob)
    green   the path exists; with a glob, a matching file was found
    orange  the path exists but no file other than *.txt matches the glob

Glob patterns use shell-style syntax: ``*``, ``?``, ``[abc]``, ``[a-z]``,
``[^abc]`` and (outside Windows) backslash escapes. They are matched
against the entry names of a single directory.
"""

from __future__ import annotations

import logging
import os
import re
from pathlib import Path
from xml.sax.saxutils import escape

from folderproxy.domain.models import BadgeColor

logger = logging.getLogger(__name__)

SVG_MEDIA_TYPE = "image/svg+xml"
EXCLUDED_SUFFIX = ".txt"

LABELLED_TEMPLATE = (
    "<svg viewBox='0 0 16 16' xmlns='http://www.w3.org/2000/svg' font-family='monospace'>"
    "<rect width='16' height='16' fill='{color}' />"
    "<text x='1' y='12'>{label}</text>"
    "</svg>"
)
PLAIN_GREEN = (
    "<svg viewBox='0 0 16 16' xmlns='http://www.w3.org/2000/svg'>"
    "<rect width='16' height='16' fill='green' />"
    "</svg>"
)

_ESCAPES_ENABLED = os.sep != "\\"
_META_CHARS = "*?[\\" if _ESCAPES_ENABLED else "*?["


class GlobPatternError(ValueError):
    """Raised for a malformed glob pattern."""

    def __init__(self, message: str, pattern: str = "") -> None:
        super().__init__(message)
        self.pattern = pattern


def render_badge(color: BadgeColor, label: str) -> str:
    """Render a labelled badge. The label is XML-escaped."""
    return LABELLED_TEMPLATE.format(color=color.value, label=escape(label))


def glob_base(pattern: str) -> str:
    """Return the last element of ``pattern``, ignoring trailing separators."""
    stripped = pattern.rstrip("/\\" if os.sep == "\\" else "/")
    if not stripped:
        return os.sep
    return os.path.basename(stripped) or os.sep


def compile_pattern(pattern: str) -> re.Pattern[str]:
    """Translate a glob pattern into an anchored regular expression.

    Raises:
        GlobPatternError: For an unterminated or empty character class,
            a range with a missing bound, or a dangling escape.
    """
    out: list[str] = []
    i, n = 0, len(pattern)
    while i < n:
        c = pattern[i]
        i += 1
        if c == "*":
            out.append(".*")
        elif c == "?":
            out.append(".")
        elif c == "[":
            cls, i = _parse_class(pattern, i)
            out.append(cls)
        elif c == "\\" and _ESCAPES_ENABLED:
            if i >= n:
                raise GlobPatternError("dangling escape", pattern=pattern)
            out.append(re.escape(pattern[i]))
            i += 1
        else:
            out.append(re.escape(c))
    return re.compile("".join(out) + r"\Z", re.DOTALL)


def _parse_class(pattern: str, i: int) -> tuple[str, int]:
    n = len(pattern)
    negate = i < n and pattern[i] == "^"
    if negate:
        i += 1
    ranges: list[tuple[str, str]] = []
    while True:
        if i >= n:
            raise GlobPatternError("unterminated character class", pattern=pattern)
        if pattern[i] == "]" and ranges:
            i += 1
            break
        lo, i = _class_char(pattern, i)
        hi = lo
        if i < n and pattern[i] == "-":
            hi, i = _class_char(pattern, i + 1)
        ranges.append((lo, hi))

    # Reversed ranges are legal but match nothing.
    parts = [
        re.escape(lo) if lo == hi else f"{re.escape(lo)}-{re.escape(hi)}"
        for lo, hi in ranges
        if lo <= hi
    ]
    if not parts:
        return ("." if negate else "(?!)"), i
    return f"[{'^' if negate else ''}{''.join(parts)}]", i


def _class_char(pattern: str, i: int) -> tuple[str, int]:
    if i >= len(pattern) or pattern[i] in "-]":
        raise GlobPatternError("bad character class", pattern=pattern)
    if pattern[i] == "\\" and _ESCAPES_ENABLED:
        i += 1
        if i >= len(pattern):
            raise GlobPatternError("dangling escape", pattern=pattern)
    return pattern[i], i + 1


def has_match_except(directory: Path, pattern: str, excluded_suffix: str = EXCLUDED_SUFFIX) -> bool:
    """Tell whether ``directory`` holds an entry matching ``pattern``.

    Entries whose name ends with ``excluded_suffix`` do not count. An
    unreadable directory, or a ``directory`` that is a plain file, has no
    entries.

    Raises:
        GlobPatternError: If ``pattern`` is malformed.
    """
    if not any(c in pattern for c in _META_CHARS):
        # Literal name: look it up directly so '.' and '..' behave like paths.
        candidate = os.path.join(directory, pattern)
        return os.path.lexists(candidate) and not candidate.endswith(excluded_suffix)

    regex = compile_pattern(pattern)
    try:
        names = os.listdir(directory)
    except OSError as e:
        logger.debug("Cannot list %s: %s", directory, e)
        return False
    return any(regex.match(name) and not name.endswith(excluded_suffix) for name in names)


def folder_badge(path: Path, glob: str) -> str:
    """Build the badge describing ``path`` for the given ``glob``.

    Raises:
        GlobPatternError: If ``glob`` is non-empty and malformed.
    """
    try:
        os.stat(path)
    except (OSError, ValueError):
        return render_badge(BadgeColor.RED, glob)

    if not glob:
        return PLAIN_GREEN

    if has_match_except(path, glob_base(glob)):
        return render_badge(BadgeColor.GREEN, glob)
    return render_badge(BadgeColor.ORANGE, glob)
