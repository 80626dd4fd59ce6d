"""Field marker extraction for card templates.

A marker is a ``{name}`` placeholder inside a card field template, e.g.
``{expression}`` or ``{clipboard-image}``. Names consist of letters, digits,
underscores and hyphens; an empty name (``{}``) is a valid marker.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator

__all__ = [
    "MARKER_PATTERN",
    "extract_markers",
    "iter_field_markers",
]

# Unicode-aware: \w covers letters, digits and underscore in every script.
MARKER_PATTERN = re.compile(r"\{([\w-]*)\}")


def iter_field_markers(field_value: str) -> Iterator[str]:
    """Yield marker names in order of appearance, duplicates included.

    Parameters
    ----------
    field_value
        Card field template text

    Yields
    ------
    str
        Marker name without braces
    """
    if not field_value:
        return

    for match in MARKER_PATTERN.finditer(field_value):
        yield match.group(1)


def extract_markers(field_value: str) -> set[str]:
    """Return the set of marker names embedded in ``field_value``.

    Unbalanced or otherwise malformed braces simply do not match, so this
    function never raises.
    """
    return set(iter_field_markers(field_value))
