"""Tests for waitgen.parser - catalog text to raw records."""

from pathlib import Path

import pytest

from waitgen.parser import CatalogParseError, RawRecord, parse_catalog, read_catalog

CATALOG = """\
# Wait events, grouped by class.

Section: ClassName - WaitEventClient

CLIENT_READ\t"Waiting to read data from the client."
WAL_SENDER_WAIT_WAL\t"Waiting for WAL to be flushed."

ABI_compatibility:

CLIENT_LATE\t"Added late."

Section: ClassName - WaitEventIO

BUFFILE_READ\t"Waiting for a read from a buffered file."
"""


class TestParseCatalog:
    def test_records_in_file_order(self) -> None:
        records = parse_catalog(CATALOG.splitlines())
        assert [r.event_key for r in records] == [
            "CLIENT_READ",
            "WAL_SENDER_WAIT_WAL",
            "CLIENT_LATE",
            "BUFFILE_READ",
        ]

    def test_returns_immutable_tuple(self) -> None:
        assert isinstance(parse_catalog(CATALOG.splitlines()), tuple)

    def test_category_from_latest_header(self) -> None:
        records = parse_catalog(CATALOG.splitlines())
        assert [r.category for r in records] == [
            "WaitEventClient",
            "WaitEventClient",
            "WaitEventClient",
            "WaitEventIO",
        ]

    def test_abi_region_flag(self) -> None:
        records = parse_catalog(CATALOG.splitlines())
        flags = {r.event_key: r.abi_region for r in records}
        assert flags == {
            "CLIENT_READ": False,
            "WAL_SENDER_WAIT_WAL": False,
            "CLIENT_LATE": True,
            # Reset by the next section header.
            "BUFFILE_READ": False,
        }

    def test_line_numbers(self) -> None:
        records = parse_catalog(CATALOG.splitlines())
        assert records[0].line_no == 5
        assert records[-1].line_no == 14

    def test_doc_sentence_verbatim(self) -> None:
        lines = [
            "Section: ClassName - WaitEventIPC",
            'CHECKPOINT_DONE\t"Waiting for a <quote>checkpoint</quote> to complete."',
        ]
        (record,) = parse_catalog(lines)
        assert record == RawRecord(
            category="WaitEventIPC",
            event_key="CHECKPOINT_DONE",
            doc_sentence='"Waiting for a <quote>checkpoint</quote> to complete."',
            abi_region=False,
            line_no=2,
        )

    def test_accepts_lines_with_newlines(self) -> None:
        records = parse_catalog(CATALOG.splitlines(keepends=True))
        assert len(records) == 4

    def test_empty_input(self) -> None:
        assert parse_catalog([]) == ()


class TestParseErrors:
    def test_malformed_line(self) -> None:
        lines = ["Section: ClassName - WaitEventClient", 'Foo Bar "no trailing period"']
        with pytest.raises(CatalogParseError) as exc_info:
            parse_catalog(lines)
        err = exc_info.value
        assert err.line_no == 2
        assert err.line == 'Foo Bar "no trailing period"'
        assert 'Foo Bar "no trailing period"' in str(err)
        assert "line 2" in str(err)

    def test_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            parse_catalog(["Section: ClassName - WaitEventClient", "garbage"])

    def test_data_before_header(self) -> None:
        with pytest.raises(CatalogParseError, match="before any section header"):
            parse_catalog(['CLIENT_READ\t"Waiting."'])

    def test_malformed_header(self) -> None:
        with pytest.raises(CatalogParseError, match="section header"):
            parse_catalog(["Section: ClassName"])

    def test_stops_at_first_error(self) -> None:
        lines = ["Section: ClassName - WaitEventClient", "bad one", "bad two"]
        with pytest.raises(CatalogParseError) as exc_info:
            parse_catalog(lines)
        assert exc_info.value.line == "bad one"


class TestReadCatalog:
    def test_reads_file(self, tmp_path: Path) -> None:
        path = tmp_path / "wait_event_names.txt"
        path.write_text(CATALOG, encoding="utf-8")
        assert len(read_catalog(path)) == 4

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(OSError):
            read_catalog(tmp_path / "missing.txt")

    @pytest.mark.parametrize("sep", ["\x0b", "\x0c", "\x1c", "\x85", "\u2028", "\u2029"])
    def test_only_newline_breaks_lines(self, tmp_path: Path, sep: str) -> None:
        path = tmp_path / "wait_event_names.txt"
        path.write_text(
            "Section: ClassName - WaitEventIO\n"
            f'DATA_READ\t"Waiting{sep}for a read."\n'
            'DATA_WRITE\t"Waiting for a write."\n',
            encoding="utf-8",
        )
        records = read_catalog(path)
        assert [r.event_key for r in records] == ["DATA_READ", "DATA_WRITE"]
        assert records[0].doc_sentence == f'"Waiting{sep}for a read."'
        assert records[1].line_no == 3

    def test_crlf_line_endings(self, tmp_path: Path) -> None:
        path = tmp_path / "wait_event_names.txt"
        path.write_bytes(b'Section: ClassName - WaitEventIO\r\nDATA_READ\t"Reading."\r\n')
        (record,) = read_catalog(path)
        assert record.doc_sentence == '"Reading."'
