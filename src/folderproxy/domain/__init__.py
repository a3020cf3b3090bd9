"""Domain models for folderproxy.

All models use Pydantic v2 for validation and are immutable.
"""

from folderproxy.domain.models import (
    BadgeColor,
    OpenRequest,
    BadgeRequest,
    StyleRequest,
)

__all__ = [
    "BadgeColor",
    "OpenRequest",
    "BadgeRequest",
    "StyleRequest",
]
