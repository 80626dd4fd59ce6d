"""Reconcile profile options against held permissions.

Features that need optional permissions:
- ``parsing.enableMecabParser`` needs ``nativeMessaging``
- either clipboard monitor needs ``clipboardRead``
- card field templates using ``{clipboard-image}`` / ``{clipboard-text}``
  need ``clipboardRead``
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from ..observability import get_logger
from ..permissions import CLIPBOARD_READ, NATIVE_MESSAGING
from .host import Permissions
from .requirements import get_required_permissions_for_field_value

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from .options import ProfileOptions

__all__ = [
    "PermissionViolation",
    "get_missing_permissions_for_options",
    "get_required_permissions_for_options",
    "has_required_permissions_for_options",
]

log = get_logger("policy")


@dataclass
class PermissionViolation:
    """An enabled feature whose permission is not held."""

    permission: str
    reason: str
    context: dict[str, Any] = field(default_factory=dict)


def _granted_set(permissions: Permissions | Iterable[str]) -> frozenset[str]:
    if isinstance(permissions, Permissions):
        return permissions.permissions
    # A bare token is one permission, not a sequence of characters
    if isinstance(permissions, str):
        return frozenset({permissions})
    return frozenset(permissions)


def _iter_requirements(options: ProfileOptions) -> Iterator[PermissionViolation]:
    """Yield every permission requirement of ``options`` in evaluation order.

    Flags come first, then each field of the term templates and the kanji
    templates.
    """
    if options.parsing.enable_mecab_parser:
        yield PermissionViolation(
            permission=NATIVE_MESSAGING,
            reason="MeCab parser is enabled",
            context={"option": "parsing.enableMecabParser"},
        )

    if options.clipboard.enable_background_monitor:
        yield PermissionViolation(
            permission=CLIPBOARD_READ,
            reason="Background clipboard monitor is enabled",
            context={"option": "clipboard.enableBackgroundMonitor"},
        )

    if options.clipboard.enable_search_page_monitor:
        yield PermissionViolation(
            permission=CLIPBOARD_READ,
            reason="Search page clipboard monitor is enabled",
            context={"option": "clipboard.enableSearchPageMonitor"},
        )

    for category, fields in options.anki.iter_field_collections():
        for field_name, field_value in fields.items():
            for permission in get_required_permissions_for_field_value(field_value):
                yield PermissionViolation(
                    permission=permission,
                    reason=f"Anki {category} field '{field_name}' uses a clipboard marker",
                    context={"option": f"anki.{category}.fields", "field": field_name},
                )


def has_required_permissions_for_options(permissions: Permissions | Iterable[str], options: ProfileOptions) -> bool:
    """Return whether ``permissions`` cover every feature ``options`` enables.

    Checks short-circuit on the first violation: the MeCab parser flag, then
    the clipboard monitor flags, then every term and kanji field template.
    Field templates are only scanned when ``clipboardRead`` is not held.

    Parameters
    ----------
    permissions
        Held permissions snapshot
    options
        Profile options snapshot

    Returns
    -------
    bool
        ``True`` if sufficient
    """
    granted = _granted_set(permissions)

    if NATIVE_MESSAGING not in granted and options.parsing.enable_mecab_parser:
        log.debug("Insufficient permissions: MeCab parser enabled without nativeMessaging")
        return False

    if CLIPBOARD_READ not in granted:
        if options.clipboard.any_monitor_enabled:
            log.debug("Insufficient permissions: clipboard monitor enabled without clipboardRead")
            return False

        for category, fields in options.anki.iter_field_collections():
            for field_name, field_value in fields.items():
                if CLIPBOARD_READ in get_required_permissions_for_field_value(field_value):
                    log.debug(f"Insufficient permissions: anki.{category}.fields.{field_name} needs clipboardRead")
                    return False

    return True


def get_required_permissions_for_options(options: ProfileOptions) -> set[str]:
    """Return every permission ``options`` needs, regardless of what is held."""
    return {requirement.permission for requirement in _iter_requirements(options)}


def get_missing_permissions_for_options(
    permissions: Permissions | Iterable[str],
    options: ProfileOptions,
) -> list[PermissionViolation]:
    """Report every unmet requirement of ``options``.

    Unlike :func:`has_required_permissions_for_options` this does not stop at
    the first violation. The list is empty exactly when that function returns
    ``True``.

    Returns
    -------
    list[PermissionViolation]
        Violations in evaluation order
    """
    granted = _granted_set(permissions)
    return [requirement for requirement in _iter_requirements(options) if requirement.permission not in granted]
