"""Tests for the waitgen.toml loader."""

from pathlib import Path

import pytest

from waitgen.config import (
    DEFAULT_CONFIG,
    ConfigError,
    GeneratorConfig,
    config_from_dict,
    find_config,
    load_config,
)

# ---------------------------------------------------------------------------
# Helper: write a waitgen.toml and return its path
# ---------------------------------------------------------------------------


def _write_config(directory: Path, content: str) -> Path:
    path = directory / "waitgen.toml"
    path.write_text(content, encoding="utf-8")
    return path


class TestDefaults:
    def test_default_values(self) -> None:
        cfg = GeneratorConfig()
        assert cfg.enum_prefix == "WAIT_EVENT_"
        assert cfg.types_header == "wait_event_types.h"
        assert cfg.docs == "wait_event_types.sgml"
        assert cfg.passthrough == {"WaitEventLWLock", "WaitEventLock"}
        assert cfg.excluded == {
            "WaitEventExtension",
            "WaitEventInjectionPoint",
            "WaitEventLWLock",
            "WaitEventLock",
        }
        assert cfg.source is None

    def test_no_file_gives_defaults(self, tmp_path: Path) -> None:
        assert load_config(search_from=tmp_path) is DEFAULT_CONFIG


class TestFindConfig:
    def test_in_start_dir(self, tmp_path: Path) -> None:
        path = _write_config(tmp_path, "")
        assert find_config(tmp_path) == path.resolve()

    def test_in_parent(self, tmp_path: Path) -> None:
        path = _write_config(tmp_path, "")
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)
        assert find_config(nested) == path.resolve()

    def test_from_cwd(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        path = _write_config(tmp_path, "")
        monkeypatch.chdir(tmp_path)
        assert find_config() == path.resolve()


class TestLoadConfig:
    def test_overrides(self, tmp_path: Path) -> None:
        path = _write_config(
            tmp_path,
            """\
[generator]
enum_prefix = "WE_"
include = "storage/waits.h"

[categories]
excluded = ["WaitEventLock"]

[outputs]
docs = "waits.sgml"
""",
        )
        cfg = load_config(path)
        assert cfg.enum_prefix == "WE_"
        assert cfg.include == "storage/waits.h"
        assert cfg.excluded == frozenset({"WaitEventLock"})
        assert cfg.docs == "waits.sgml"
        # Untouched keys keep their defaults.
        assert cfg.passthrough == DEFAULT_CONFIG.passthrough
        assert cfg.lookup_source == "pgstat_wait_event.c"
        assert cfg.source == path

    def test_found_by_search(self, tmp_path: Path) -> None:
        _write_config(tmp_path, '[outputs]\ntypes_header = "w.h"\n')
        assert load_config(search_from=tmp_path).types_header == "w.h"

    def test_explicit_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "waitgen.toml")

    def test_invalid_toml(self, tmp_path: Path) -> None:
        path = _write_config(tmp_path, "[generator\n")
        with pytest.raises(ConfigError, match="Invalid TOML"):
            load_config(path)


class TestConfigFromDict:
    def test_unknown_section(self) -> None:
        with pytest.raises(ConfigError, match="Unknown section"):
            config_from_dict({"compiler": {}})

    def test_unknown_key(self) -> None:
        with pytest.raises(ConfigError, match="Unknown key 'prefix'"):
            config_from_dict({"generator": {"prefix": "X"}})

    def test_section_must_be_table(self) -> None:
        with pytest.raises(ConfigError, match="must be a table"):
            config_from_dict({"generator": "x"})

    def test_list_required(self) -> None:
        with pytest.raises(ConfigError, match="list of strings"):
            config_from_dict({"categories": {"excluded": "WaitEventLock"}})

    def test_string_required(self) -> None:
        with pytest.raises(ConfigError, match="must be a string"):
            config_from_dict({"generator": {"enum_prefix": 3}})

    def test_output_must_be_bare_name(self) -> None:
        with pytest.raises(ConfigError, match="bare file name"):
            config_from_dict({"outputs": {"docs": "../docs.sgml"}})

    def test_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            config_from_dict({"outputs": {"docs": ""}})
