"""Permission requirements inferred from card field templates."""

from __future__ import annotations

from types import MappingProxyType
from typing import TYPE_CHECKING

from ..permissions import CLIPBOARD_READ
from .markers import extract_markers

if TYPE_CHECKING:
    from collections.abc import Mapping

__all__ = [
    "FIELD_MARKER_PERMISSIONS",
    "get_required_permissions_for_field_value",
]

FIELD_MARKER_PERMISSIONS: Mapping[str, str] = MappingProxyType(
    {
        "clipboard-image": CLIPBOARD_READ,
        "clipboard-text": CLIPBOARD_READ,
    }
)
"""Markers whose evaluation needs an optional permission, keyed by marker name."""


def get_required_permissions_for_field_value(field_value: str) -> list[str]:
    """Return the permissions needed to evaluate one field template.

    Every recognised marker contributes its permission; the result is
    deduplicated and sorted. Templates without recognised markers need
    nothing and yield an empty list.

    Parameters
    ----------
    field_value
        Card field template text

    Returns
    -------
    list[str]
        Distinct permission tokens
    """
    required = {
        FIELD_MARKER_PERMISSIONS[marker]
        for marker in extract_markers(field_value)
        if marker in FIELD_MARKER_PERMISSIONS
    }
    return sorted(required)

