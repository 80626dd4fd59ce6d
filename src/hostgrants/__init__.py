"""hostgrants: infer and reconcile optional host permissions for profile options.

Example:
    >>> from hostgrants import Permissions, ProfileOptions, has_required_permissions_for_options
    >>> options = ProfileOptions.from_dict({"anki": {"terms": {"fields": {"image": "{clipboard-image}"}}}})
    >>> has_required_permissions_for_options(Permissions.of("clipboardRead"), options)
    True
"""

from .core import (
    FIELD_MARKER_PERMISSIONS,
    HostPermissionQueryFailed,
    InMemoryPermissionHost,
    PermissionHost,
    Permissions,
    PermissionStore,
    PermissionViolation,
    ProfileOptions,
    extract_markers,
    get_missing_permissions_for_options,
    get_required_permissions_for_field_value,
    get_required_permissions_for_options,
    has_required_permissions_for_options,
)

__version__ = "0.1.0"

__all__ = [
    "FIELD_MARKER_PERMISSIONS",
    "HostPermissionQueryFailed",
    "InMemoryPermissionHost",
    "PermissionHost",
    "PermissionStore",
    "PermissionViolation",
    "Permissions",
    "ProfileOptions",
    "extract_markers",
    "get_missing_permissions_for_options",
    "get_required_permissions_for_field_value",
    "get_required_permissions_for_options",
    "has_required_permissions_for_options",
]
