"""Generator configuration loader for waitgen.

Reads an optional ``waitgen.toml`` and exposes every setting as a plain
attribute, so the emitters never hardcode prefixes, exclusions or output
file names.  Every key is optional; a missing file yields
:data:`DEFAULT_CONFIG`, which reproduces the stock PostgreSQL layout.

Example ``waitgen.toml``::

    [generator]
    enum_prefix = "WAIT_EVENT_"
    include = "utils/wait_event.h"

    [categories]
    passthrough = ["WaitEventLWLock", "WaitEventLock"]
    excluded = ["WaitEventExtension", "WaitEventInjectionPoint",
                "WaitEventLWLock", "WaitEventLock"]

    [outputs]
    docs = "wait_event_types.sgml"

Usage::

    from waitgen.config import load_config
    cfg = load_config()                      # search cwd and parents
    cfg = load_config(Path("waitgen.toml"))  # explicit file
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

CONFIG_FILENAME = "waitgen.toml"


class ConfigError(ValueError):
    """Raised when ``waitgen.toml`` exists but cannot be used."""


@dataclass(frozen=True)
class GeneratorConfig:
    """Resolved generator settings."""

    # --- [generator] ---
    enum_prefix: str = "WAIT_EVENT_"
    class_prefix: str = "WaitEvent"
    class_constant_prefix: str = "PG_WAIT_"
    lookup_prefix: str = "pgstat_get_wait_"
    unknown_label: str = "unknown wait event"
    include: str = "utils/wait_event.h"

    # --- [categories] ---
    # Labels of these classes are the raw event key, not camel-cased.
    passthrough: frozenset[str] = field(
        default_factory=lambda: frozenset({"WaitEventLWLock", "WaitEventLock"})
    )
    # Enums and lookup functions for these classes are written by hand.
    excluded: frozenset[str] = field(
        default_factory=lambda: frozenset(
            {
                "WaitEventExtension",
                "WaitEventInjectionPoint",
                "WaitEventLWLock",
                "WaitEventLock",
            }
        )
    )

    # --- [outputs] ---
    types_header: str = "wait_event_types.h"
    lookup_source: str = "pgstat_wait_event.c"
    funcs_data: str = "wait_event_funcs_data.c"
    docs: str = "wait_event_types.sgml"

    # File the settings came from; None for built-in defaults.
    source: Path | None = None


DEFAULT_CONFIG = GeneratorConfig()

_SECTIONS: dict[str, tuple[str, ...]] = {
    "generator": (
        "enum_prefix",
        "class_prefix",
        "class_constant_prefix",
        "lookup_prefix",
        "unknown_label",
        "include",
    ),
    "categories": ("passthrough", "excluded"),
    "outputs": ("types_header", "lookup_source", "funcs_data", "docs"),
}
_SET_KEYS = {"passthrough", "excluded"}


def find_config(start: Path | None = None) -> Path | None:
    """Walk up from *start* (or cwd) looking for ``waitgen.toml``.

    Returns ``None`` when no parent directory has one.
    """
    candidate = (start or Path.cwd()).resolve()
    while True:
        path = candidate / CONFIG_FILENAME
        if path.is_file():
            return path
        if candidate == candidate.parent:
            return None
        candidate = candidate.parent


def _coerce(section: str, key: str, value: Any) -> Any:
    if key in _SET_KEYS:
        if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
            raise ConfigError(f"[{section}] {key} must be a list of strings")
        return frozenset(value)
    if not isinstance(value, str):
        raise ConfigError(f"[{section}] {key} must be a string, got {type(value).__name__}")
    if section == "outputs" and (not value or Path(value).name != value):
        raise ConfigError(f"[outputs] {key} must be a bare file name: {value!r}")
    return value


def config_from_dict(raw: dict[str, Any], source: Path | None = None) -> GeneratorConfig:
    """Build a :class:`GeneratorConfig` from parsed TOML data."""
    overrides: dict[str, Any] = {}
    for section, table in raw.items():
        if section not in _SECTIONS:
            raise ConfigError(f"Unknown section [{section}] in {source or CONFIG_FILENAME}")
        if not isinstance(table, dict):
            raise ConfigError(f"[{section}] must be a table")
        allowed = _SECTIONS[section]
        for key, value in table.items():
            if key not in allowed:
                raise ConfigError(
                    f"Unknown key '{key}' in [{section}].  Known keys: {list(allowed)}"
                )
            overrides[key] = _coerce(section, key, value)

    return GeneratorConfig(**overrides, source=source)


def load_config(path: Path | None = None, *, search_from: Path | None = None) -> GeneratorConfig:
    """Load generator settings.

    Args:
        path: Explicit config file.  Must exist when given.
        search_from: Directory to start the upward search from when *path*
                     is ``None``.  Defaults to the current directory.
    """
    if path is None:
        path = find_config(search_from)
        if path is None:
            return DEFAULT_CONFIG
    elif not path.is_file():
        raise FileNotFoundError(f"Config not found: {path}")

    try:
        with open(path, "rb") as f:
            raw = tomllib.load(f)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Invalid TOML in {path}: {exc}") from exc

    return config_from_dict(raw, source=path)
