"""parser.py - Turn catalog text into immutable raw records.

The parser is a pure function of its input lines: it tracks the current
section header and the ABI-compatibility flag while walking the lines and
returns every data line as a :class:`RawRecord`.  Nothing is sorted or
grouped here; see :mod:`waitgen.registry` for that.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from waitgen.lines import LineKind, classify_line


class CatalogParseError(ValueError):
    """A catalog line does not follow the expected grammar."""

    def __init__(self, line_no: int, line: str, reason: str) -> None:
        self.line_no = line_no
        self.line = line
        self.reason = reason
        super().__init__(f"line {line_no}: {reason}: {line}")


@dataclass(frozen=True)
class RawRecord:
    """One data line, tagged with the section it was read under."""

    category: str
    event_key: str
    # Verbatim, including the surrounding double quotes and any markup.
    doc_sentence: str
    # Read after an ``ABI_compatibility:`` marker in the same section.
    abi_region: bool = False
    line_no: int = 0


def parse_catalog(lines: Iterable[str]) -> tuple[RawRecord, ...]:
    """Parse catalog lines into records, in file order.

    Raises :class:`CatalogParseError` on the first malformed line and on data
    lines that appear before any ``Section:`` header.
    """
    records: list[RawRecord] = []
    category: str | None = None
    abi_region = False

    for line_no, text in enumerate(lines, start=1):
        parsed = classify_line(text)
        kind = parsed.kind

        if kind in (LineKind.COMMENT, LineKind.BLANK):
            continue
        if kind is LineKind.SECTION_HEADER:
            category = parsed.category
            abi_region = False
            continue
        if kind is LineKind.ABI_MARKER:
            abi_region = True
            continue
        if kind is LineKind.INVALID:
            raise CatalogParseError(line_no, parsed.text, parsed.reason)

        if category is None:
            raise CatalogParseError(line_no, parsed.text, "wait event before any section header")
        records.append(
            RawRecord(
                category=category,
                event_key=parsed.event_key,
                doc_sentence=parsed.doc_sentence,
                abi_region=abi_region,
                line_no=line_no,
            )
        )

    return tuple(records)


def read_catalog(path: Path) -> tuple[RawRecord, ...]:
    """Read and parse a UTF-8 catalog file.  ``OSError`` propagates.

    Lines break on ``\\n`` only; form feeds and other Unicode line
    separators inside a sentence stay part of that line.
    """
    text = path.read_text(encoding="utf-8")
    return parse_catalog(text.split("\n"))
