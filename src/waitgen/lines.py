"""lines.py - Classify single lines of a wait event catalog.

Every input line maps to exactly one :class:`LineKind`.  The parser only
dispatches on the kind, so grammar changes stay in this module and each
kind can be tested on its own.

Catalog line grammar::

    # comment
    Section: ClassName - WaitEventClient
    ABI_compatibility:
    CLIENT_READ<TAB>"Waiting to read data from the client."

A data line may also carry a leading class column
(``WaitEventClient<TAB>CLIENT_READ<TAB>"..."``); it is accepted and ignored,
the category always comes from the most recent section header.
"""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass


class LineKind(enum.Enum):
    COMMENT = "comment"
    BLANK = "blank"
    SECTION_HEADER = "section_header"
    ABI_MARKER = "abi_marker"
    DATA = "data"
    INVALID = "invalid"


# ---------------------------------------------------------------------------
# Regex patterns
# ---------------------------------------------------------------------------

SECTION_RE = re.compile(r"^Section: ClassName(.*)")
# Category is whatever follows the last "- " on the header line.
SECTION_NAME_RE = re.compile(r"^.*- ")
CATEGORY_RE = re.compile(r"^\w+$", re.ASCII)
ABI_MARKER = "ABI_compatibility:"
# Optional legacy class column, event key, quoted sentence ending in a period.
DATA_RE = re.compile(
    r'^(?:(?P<klass>\w+)\t+)?(?P<key>\w+)\t+(?P<doc>"\w.*\.")$',
    re.ASCII,
)


@dataclass(frozen=True)
class ClassifiedLine:
    """One catalog line tagged with its kind.

    Only the fields relevant to ``kind`` are populated: ``category`` for
    section headers, ``event_key``/``doc_sentence`` for data lines and
    ``reason`` for invalid lines.
    """

    kind: LineKind
    text: str
    category: str = ""
    event_key: str = ""
    doc_sentence: str = ""
    reason: str = ""


def classify_line(text: str) -> ClassifiedLine:
    """Return the :class:`ClassifiedLine` for one line (trailing newline allowed)."""
    line = text.rstrip("\r\n")

    if line.startswith("#"):
        return ClassifiedLine(LineKind.COMMENT, line)

    if not line.strip():
        return ClassifiedLine(LineKind.BLANK, line)

    if SECTION_RE.match(line):
        category = SECTION_NAME_RE.sub("", line, count=1)
        if category == line or not CATEGORY_RE.match(category):
            return ClassifiedLine(
                LineKind.INVALID, line, reason="malformed section header"
            )
        return ClassifiedLine(LineKind.SECTION_HEADER, line, category=category)

    if line == ABI_MARKER:
        return ClassifiedLine(LineKind.ABI_MARKER, line)

    m = DATA_RE.match(line)
    if m is None:
        return ClassifiedLine(LineKind.INVALID, line, reason="unable to parse wait event line")
    return ClassifiedLine(
        LineKind.DATA,
        line,
        event_key=m.group("key"),
        doc_sentence=m.group("doc"),
    )
