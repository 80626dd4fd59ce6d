"""Permission tokens understood by the host runtime."""

from __future__ import annotations

from typing import TYPE_CHECKING, Final, Literal

if TYPE_CHECKING:
    from collections.abc import Iterable

PermissionName = Literal[
    "clipboardRead",
    "nativeMessaging",
]
"""Literal union of permission tokens the profile options can require."""

CLIPBOARD_READ: Final = "clipboardRead"
NATIVE_MESSAGING: Final = "nativeMessaging"

ALL_PERMISSIONS: tuple[PermissionName, ...] = (
    CLIPBOARD_READ,
    NATIVE_MESSAGING,
)
"""Tuple containing every optional permission the profile options reference."""

_PERMISSION_DESCRIPTIONS: dict[PermissionName, str] = {
    CLIPBOARD_READ: "Read text and images from the system clipboard.",
    NATIVE_MESSAGING: "Exchange messages with native helper applications (e.g. MeCab).",
}

__all__ = [
    "ALL_PERMISSIONS",
    "CLIPBOARD_READ",
    "NATIVE_MESSAGING",
    "PermissionName",
    "describe",
    "ensure_permissions",
]


def describe(permission: str) -> str:
    """Return a human readable description for ``permission``.

    Unknown tokens are described by their own name.
    """

    return _PERMISSION_DESCRIPTIONS.get(permission, permission)  # type: ignore[call-overload]


def ensure_permissions(required: Iterable[str], granted: Iterable[str]) -> set[str]:
    """Return the subset of ``required`` permissions that are missing."""

    granted_set = set(granted)
    return {permission for permission in required if permission not in granted_set}
