"""Asynchronous access to the host's permission grants.

The host runtime owns the grants; :class:`PermissionStore` is the single
point of access for querying, requesting, releasing and listing them. Any
failure reported by the host surfaces as :class:`HostPermissionQueryFailed`.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from ..observability import get_logger, timing_context

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Iterable

__all__ = [
    "HostPermissionQueryFailed",
    "InMemoryPermissionHost",
    "PermissionHost",
    "PermissionStore",
    "Permissions",
]

log = get_logger("host")


class HostPermissionQueryFailed(Exception):
    """Raised when the host reports an error for a permission operation."""

    def __init__(self, message: str, operation: str = "") -> None:
        self.message = message
        self.operation = operation
        msg = f"Host permission query failed: {message}"
        if operation:
            msg = f"Host permission query failed during {operation}: {message}"
        super().__init__(msg)


@dataclass(frozen=True)
class Permissions:
    """Point-in-time snapshot of permission tokens and host origins."""

    permissions: frozenset[str] = field(default_factory=frozenset)
    origins: frozenset[str] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        # Accept any iterable from callers while keeping the snapshot immutable
        if not isinstance(self.permissions, frozenset):
            object.__setattr__(self, "permissions", frozenset(self.permissions))
        if not isinstance(self.origins, frozenset):
            object.__setattr__(self, "origins", frozenset(self.origins))

    @classmethod
    def of(cls, *permissions: str) -> Permissions:
        return cls(permissions=frozenset(permissions))

    def __contains__(self, permission: object) -> bool:
        return permission in self.permissions

    def to_dict(self) -> dict[str, Any]:
        return {"permissions": sorted(self.permissions), "origins": sorted(self.origins)}


@runtime_checkable
class PermissionHost(Protocol):
    """Raw permission surface exposed by the host runtime.

    Implementations may raise any exception to report a host error.
    """

    async def contains(self, permissions: Permissions) -> bool:
        """Return whether every requested permission is held."""

    async def request(self, permissions: Permissions) -> bool:
        """Ask for ``permissions``; return whether they were granted."""

    async def remove(self, permissions: Permissions) -> bool:
        """Release ``permissions``; return whether all were released."""

    async def get_all(self) -> Permissions:
        """Return every permission currently held."""


class InMemoryPermissionHost:
    """Process-local :class:`PermissionHost` backed by a set of tokens.

    Parameters
    ----------
    granted
        Optional permissions held from the start
    required
        Permissions that are always held and can never be removed
    grantable
        Permissions a request may obtain; ``None`` allows any
    origins
        Host origins reported by :meth:`get_all`
    """

    def __init__(
        self,
        granted: Iterable[str] = (),
        *,
        required: Iterable[str] = (),
        grantable: Iterable[str] | None = None,
        origins: Iterable[str] = (),
    ) -> None:
        self._granted: set[str] = set(granted)
        self._required = frozenset(required)
        self._grantable = frozenset(grantable) if grantable is not None else None
        self._origins = frozenset(origins)
        self.failure: str | None = None

    def fail_with(self, message: str | None) -> None:
        """Make every subsequent call raise ``RuntimeError(message)``; ``None`` clears it."""
        self.failure = message

    async def _round_trip(self) -> None:
        await asyncio.sleep(0)
        if self.failure is not None:
            raise RuntimeError(self.failure)

    def _held(self) -> frozenset[str]:
        return frozenset(self._granted | self._required)

    async def contains(self, permissions: Permissions) -> bool:
        await self._round_trip()
        return permissions.permissions <= self._held()

    async def request(self, permissions: Permissions) -> bool:
        await self._round_trip()
        missing = permissions.permissions - self._held()
        if self._grantable is not None and not missing <= self._grantable:
            return False
        self._granted |= missing
        return True

    async def remove(self, permissions: Permissions) -> bool:
        await self._round_trip()
        self._granted -= permissions.permissions
        return not (permissions.permissions & self._required)

    async def get_all(self) -> Permissions:
        await self._round_trip()
        return Permissions(permissions=self._held(), origins=self._origins)


class PermissionStore:
    """Query and change host permission grants.

    Every operation suspends until the host answers. Results are snapshots:
    a concurrent request or release may change them immediately after.
    """

    def __init__(self, host: PermissionHost) -> None:
        self.host = host

    async def _call(self, operation: str, call: Callable[[], Awaitable[Any]]) -> Any:
        with timing_context(f"permissions.{operation}", component="host") as ctx:
            try:
                result = await call()
            except HostPermissionQueryFailed:
                raise
            except Exception as exc:
                log.warning(f"Host rejected permissions.{operation}: {exc}")
                raise HostPermissionQueryFailed(str(exc), operation) from exc
            ctx["result"] = result.to_dict() if isinstance(result, Permissions) else result
            return result

    async def has_permissions(self, permissions: Permissions) -> bool:
        """Return whether the host currently holds every permission in ``permissions``.

        Raises
        ------
        HostPermissionQueryFailed
            If the host reports an error
        """
        return bool(await self._call("contains", lambda: self.host.contains(permissions)))

    async def set_permissions_granted(self, permissions: Permissions, should_have: bool) -> bool:
        """Request or release ``permissions``.

        Parameters
        ----------
        permissions
            Permissions to change
        should_have
            ``True`` to request, ``False`` to release

        Returns
        -------
        bool
            ``True`` if the host granted the request, or if the release
            succeeded completely. Both directions are idempotent.

        Raises
        ------
        HostPermissionQueryFailed
            If the host reports an error
        """
        if should_have:
            granted = await self._call("request", lambda: self.host.request(permissions))
            if not granted:
                log.info(f"Host declined permissions: {sorted(permissions.permissions)}")
            return bool(granted)
        return bool(await self._call("remove", lambda: self.host.remove(permissions)))

    async def get_all_permissions(self) -> Permissions:
        """Return a snapshot of every permission the host holds.

        Raises
        ------
        HostPermissionQueryFailed
            If the host reports an error
        """
        return await self._call("get_all", self.host.get_all)
