"""Permission inference and reconciliation core."""

from .host import HostPermissionQueryFailed, InMemoryPermissionHost, PermissionHost, PermissionStore, Permissions
from .markers import extract_markers, iter_field_markers
from .options import ProfileOptions
from .policy import (
    PermissionViolation,
    get_missing_permissions_for_options,
    get_required_permissions_for_options,
    has_required_permissions_for_options,
)
from .requirements import FIELD_MARKER_PERMISSIONS, get_required_permissions_for_field_value

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
    "iter_field_markers",
]
