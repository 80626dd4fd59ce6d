"""Profile options relevant to optional permissions.

Only the sections the permission checks read are modelled; every other key
of a profile is ignored by :meth:`ProfileOptions.from_dict`. Modelled keys
must have the right shape, otherwise :class:`ConfigError` names the key.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from ..config.settings import ConfigError

__all__ = [
    "AnkiCardOptions",
    "AnkiOptions",
    "ClipboardOptions",
    "ParsingOptions",
    "ProfileOptions",
]


def _section(data: Any, path: str) -> Mapping[str, Any]:
    """Return ``data`` as a mapping; ``None`` means an empty section."""
    if data is None:
        return {}
    if not isinstance(data, Mapping):
        raise ConfigError(f"'{path}' must be a mapping, got {type(data).__name__}")
    return data


def _flag(data: Mapping[str, Any], key: str, path: str) -> bool:
    """Read a boolean flag; missing or null means disabled."""
    value = data.get(key)
    if value is None:
        return False
    if not isinstance(value, bool):
        raise ConfigError(f"'{path}.{key}' must be true or false, got {value!r}")
    return value


def _freeze_fields(fields: Mapping[str, Any] | None) -> Mapping[str, str]:
    """Copy a field mapping into a read-only ``name -> template`` view."""
    if not fields:
        return MappingProxyType({})
    return MappingProxyType({str(name): "" if value is None else str(value) for name, value in fields.items()})


@dataclass(frozen=True)
class ParsingOptions:
    """Text parsing settings."""

    enable_mecab_parser: bool = False

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None, path: str = "parsing") -> ParsingOptions:
        data = _section(data, path)
        return cls(enable_mecab_parser=_flag(data, "enableMecabParser", path))


@dataclass(frozen=True)
class ClipboardOptions:
    """Clipboard monitoring settings."""

    enable_background_monitor: bool = False
    enable_search_page_monitor: bool = False

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None, path: str = "clipboard") -> ClipboardOptions:
        data = _section(data, path)
        return cls(
            enable_background_monitor=_flag(data, "enableBackgroundMonitor", path),
            enable_search_page_monitor=_flag(data, "enableSearchPageMonitor", path),
        )

    @property
    def any_monitor_enabled(self) -> bool:
        return self.enable_background_monitor or self.enable_search_page_monitor


@dataclass(frozen=True)
class AnkiCardOptions:
    """One card template category: field name mapped to its template text."""

    fields: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))

    def __post_init__(self) -> None:
        if not isinstance(self.fields, MappingProxyType):
            object.__setattr__(self, "fields", _freeze_fields(self.fields))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None, path: str = "anki.terms") -> AnkiCardOptions:
        data = _section(data, path)
        return cls(fields=_freeze_fields(_section(data.get("fields"), f"{path}.fields")))


@dataclass(frozen=True)
class AnkiOptions:
    """Anki card templates, split into term and kanji cards."""

    terms: AnkiCardOptions = field(default_factory=AnkiCardOptions)
    kanji: AnkiCardOptions = field(default_factory=AnkiCardOptions)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None, path: str = "anki") -> AnkiOptions:
        data = _section(data, path)
        return cls(
            terms=AnkiCardOptions.from_dict(data.get("terms"), f"{path}.terms"),
            kanji=AnkiCardOptions.from_dict(data.get("kanji"), f"{path}.kanji"),
        )

    def iter_field_collections(self) -> tuple[tuple[str, Mapping[str, str]], ...]:
        """Return ``(category, fields)`` pairs in evaluation order."""
        return (("terms", self.terms.fields), ("kanji", self.kanji.fields))


@dataclass(frozen=True)
class ProfileOptions:
    """Read-only snapshot of the profile options that drive permission needs.

    Attributes
    ----------
    parsing : ParsingOptions
        ``parsing.enableMecabParser`` requires native messaging
    clipboard : ClipboardOptions
        Clipboard monitors require clipboard read access
    anki : AnkiOptions
        Card field templates; clipboard markers require clipboard read access
    """

    parsing: ParsingOptions = field(default_factory=ParsingOptions)
    clipboard: ClipboardOptions = field(default_factory=ClipboardOptions)
    anki: AnkiOptions = field(default_factory=AnkiOptions)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> ProfileOptions:
        """Create options from the camelCase profile layout.

        Parameters
        ----------
        data
            Profile dictionary, e.g. loaded from YAML or JSON

        Returns
        -------
        ProfileOptions
            Options with missing sections defaulted to disabled / empty

        Raises
        ------
        ConfigError
            If a section or ``fields`` is not a mapping, or a flag is not a boolean
        """
        data = _section(data, "profile")
        return cls(
            parsing=ParsingOptions.from_dict(data.get("parsing")),
            clipboard=ClipboardOptions.from_dict(data.get("clipboard")),
            anki=AnkiOptions.from_dict(data.get("anki")),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert back to the camelCase profile layout."""
        return {
            "parsing": {"enableMecabParser": self.parsing.enable_mecab_parser},
            "clipboard": {
                "enableBackgroundMonitor": self.clipboard.enable_background_monitor,
                "enableSearchPageMonitor": self.clipboard.enable_search_page_monitor,
            },
            "anki": {
                "terms": {"fields": dict(self.anki.terms.fields)},
                "kanji": {"fields": dict(self.anki.kanji.fields)},
            },
        }
