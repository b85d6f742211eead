"""registry.py - Group and order wait events by class.

Builds the :class:`Catalog` the emitters consume.  Ordering rules:

* Classes iterate case-insensitively by name.
* Within a class, events sort case-insensitively by key.  ``str.upper`` is
  the sort key so that ``_`` sorts after letters (``ABD`` < ``AB_C``).
* In code mode, events listed after ``ABI_compatibility:`` keep their file
  order and come last, so already-compiled enum values do not shift.
  Docs mode ignores that region entirely.
"""

from __future__ import annotations

import enum
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from types import MappingProxyType

from waitgen.config import DEFAULT_CONFIG, GeneratorConfig
from waitgen.naming import NormalizedRecord, enum_name, normalize
from waitgen.parser import RawRecord


class GenerationMode(str, enum.Enum):
    CODE = "code"
    DOCS = "docs"


class DuplicateEventError(ValueError):
    """Two catalog entries would produce the same enum member."""

    def __init__(self, enum_name: str, first_line: int, second_line: int) -> None:
        self.enum_name = enum_name
        self.first_line = first_line
        self.second_line = second_line
        super().__init__(
            f"duplicate wait event {enum_name} (lines {first_line} and {second_line})"
        )


def _sort_key(name: str) -> str:
    return name.upper()


@dataclass(frozen=True)
class Catalog:
    """Ordered, read-only wait events per class for one generation mode."""

    mode: GenerationMode
    classes: Mapping[str, tuple[NormalizedRecord, ...]]

    def categories(self) -> list[str]:
        """Class names in emission order."""
        return sorted(self.classes, key=_sort_key)

    def items(self) -> Iterator[tuple[str, tuple[NormalizedRecord, ...]]]:
        for category in self.categories():
            yield category, self.classes[category]

    def __len__(self) -> int:
        return sum(len(events) for events in self.classes.values())


def check_unique(records: Iterable[RawRecord], cfg: GeneratorConfig = DEFAULT_CONFIG) -> None:
    """Raise :class:`DuplicateEventError` if two records share an enum name."""
    seen: dict[str, int] = {}
    for record in records:
        name = enum_name(record.event_key, cfg)
        if name in seen:
            raise DuplicateEventError(name, seen[name], record.line_no)
        seen[name] = record.line_no


def build_catalog(
    records: Iterable[RawRecord],
    mode: GenerationMode | str,
    cfg: GeneratorConfig = DEFAULT_CONFIG,
) -> Catalog:
    """Normalize, group and order *records* for *mode*."""
    mode = GenerationMode(mode)
    records = tuple(records)
    check_unique(records, cfg)

    sortable: dict[str, list[NormalizedRecord]] = {}
    pinned: dict[str, list[NormalizedRecord]] = {}
    for record in records:
        sortable.setdefault(record.category, [])
        if mode is GenerationMode.CODE and record.abi_region:
            pinned.setdefault(record.category, []).append(normalize(record, cfg))
        else:
            sortable[record.category].append(normalize(record, cfg))

    classes: dict[str, tuple[NormalizedRecord, ...]] = {}
    for category, events in sortable.items():
        ordered = sorted(events, key=lambda ev: _sort_key(ev.event_key))
        classes[category] = tuple(ordered) + tuple(pinned.get(category, ()))

    return Catalog(mode=mode, classes=MappingProxyType(classes))
