"""naming.py - Derive C symbols and display labels from catalog entries.

Every name the emitters print comes from here, so the header, the lookup
functions, the flat table and the docs can never disagree on spelling.
"""

from __future__ import annotations

from dataclasses import dataclass

from waitgen.config import DEFAULT_CONFIG, GeneratorConfig
from waitgen.parser import RawRecord


@dataclass(frozen=True)
class NormalizedRecord:
    """A catalog entry with its derived names attached."""

    event_key: str
    enum_name: str
    display_label: str
    doc_sentence: str
    line_no: int = 0


def enum_name(event_key: str, cfg: GeneratorConfig = DEFAULT_CONFIG) -> str:
    """``CLIENT_READ`` -> ``WAIT_EVENT_CLIENT_READ``.  Casing is preserved."""
    return cfg.enum_prefix + event_key


def camel_label(event_key: str) -> str:
    """Collapse an underscore-separated key into a camel-case label.

    Each segment keeps its first character as-is and lower-cases the rest,
    so ``WAL_SENDER_WAIT_WAL`` -> ``WalSenderWaitWal`` and
    ``BTREE_PAGE`` -> ``BtreePage``.  A lower-case first character stays
    lower-case and the rest of every segment is lowered: ``wAL_wRITE`` ->
    ``wAlwrite``.
    """
    return "".join(part[:1] + part[1:].lower() for part in event_key.split("_"))


def display_label(category: str, event_key: str, cfg: GeneratorConfig = DEFAULT_CONFIG) -> str:
    """Return the human-facing label for *event_key* within *category*.

    Lock-style classes already use their final spelling in the catalog and
    pass through untouched.
    """
    if category in cfg.passthrough:
        return event_key
    return camel_label(event_key)


def class_suffix(category: str, cfg: GeneratorConfig = DEFAULT_CONFIG) -> str:
    """``WaitEventClient`` -> ``Client``."""
    return category.removeprefix(cfg.class_prefix)


def class_constant(category: str, cfg: GeneratorConfig = DEFAULT_CONFIG) -> str:
    """``WaitEventClient`` -> ``PG_WAIT_CLIENT``: base value of the class enum."""
    return cfg.class_constant_prefix + class_suffix(category, cfg).upper()


def lookup_function_name(category: str, cfg: GeneratorConfig = DEFAULT_CONFIG) -> str:
    """``WaitEventClient`` -> ``pgstat_get_wait_client``."""
    return cfg.lookup_prefix + class_suffix(category, cfg).lower()


def normalize(record: RawRecord, cfg: GeneratorConfig = DEFAULT_CONFIG) -> NormalizedRecord:
    return NormalizedRecord(
        event_key=record.event_key,
        enum_name=enum_name(record.event_key, cfg),
        display_label=display_label(record.category, record.event_key, cfg),
        doc_sentence=record.doc_sentence,
        line_no=record.line_no,
    )
