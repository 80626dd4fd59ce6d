"""Tests for the permission catalogue."""

from hostgrants.permissions import ALL_PERMISSIONS, CLIPBOARD_READ, NATIVE_MESSAGING, describe, ensure_permissions


def test_all_permissions():
    assert set(ALL_PERMISSIONS) == {CLIPBOARD_READ, NATIVE_MESSAGING}


def test_describe_known_permission():
    assert "clipboard" in describe(CLIPBOARD_READ)


def test_describe_unknown_permission_falls_back_to_name():
    assert describe("storage") == "storage"


def test_ensure_permissions_returns_missing():
    assert ensure_permissions([CLIPBOARD_READ, NATIVE_MESSAGING], [CLIPBOARD_READ]) == {NATIVE_MESSAGING}
    assert ensure_permissions([CLIPBOARD_READ], [CLIPBOARD_READ, NATIVE_MESSAGING]) == set()
