"""Tests for TOML config file loading."""

from __future__ import annotations

import argparse
from pathlib import Path

import pytest

from sqlpretty.cli import build_parser, load_config, resolve_options
from sqlpretty.errors import ConfigError


class TestLoadConfig:
    def test_missing_config_returns_empty(self, tmp_path: Path) -> None:
        assert load_config(None, tmp_path) == {}

    def test_explicit_path(self, tmp_path: Path) -> None:
        cfg = tmp_path / "custom.toml"
        cfg.write_text('language = "db2"\n')
        assert load_config(cfg, tmp_path) == {"language": "db2"}

    def test_auto_discover_sqlpretty_toml(self, tmp_path: Path) -> None:
        cfg = tmp_path / "sqlpretty.toml"
        cfg.write_text('[params]\nid = "1"\n')
        assert load_config(None, tmp_path)["params"] == {"id": "1"}

    def test_explicit_missing_raises(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="config file not found"):
            load_config(tmp_path / "nope.toml", tmp_path)

    def test_invalid_toml_raises(self, tmp_path: Path) -> None:
        cfg = tmp_path / "sqlpretty.toml"
        cfg.write_text("language = \n")
        with pytest.raises(ConfigError) as exc_info:
            load_config(None, tmp_path)
        assert "invalid TOML" in exc_info.value.message
        assert exc_info.value.path == cfg

    def test_non_utf8_raises(self, tmp_path: Path) -> None:
        cfg = tmp_path / "sqlpretty.toml"
        cfg.write_bytes(b'language = "\xff"\n')
        with pytest.raises(ConfigError, match="not valid UTF-8"):
            load_config(None, tmp_path)

    def test_unreadable_raises(self, tmp_path: Path, monkeypatch) -> None:
        cfg = tmp_path / "custom.toml"
        cfg.write_text('language = "sql"\n')

        def deny(f):
            raise PermissionError(13, "Permission denied")

        monkeypatch.setattr("sqlpretty.cli.tomllib.load", deny)
        with pytest.raises(ConfigError) as exc_info:
            load_config(cfg, tmp_path)
        assert exc_info.value.message == "cannot read config file: Permission denied"


def _resolve(tmp_path: Path, toml: str | None, *flags: str):
    if toml is not None:
        (tmp_path / "sqlpretty.toml").write_text(toml)
    query = tmp_path / "q.sql"
    query.write_text("")
    ns = build_parser().parse_args([str(query), *flags])
    return resolve_options(ns)


class TestConfigMerge:
    def test_defaults_without_config(self, tmp_path: Path) -> None:
        opts = _resolve(tmp_path, None)
        assert opts.language == "sql"
        assert opts.indent == "  "
        assert opts.params is None
        assert opts.output_file is None

    def test_config_language(self, tmp_path: Path) -> None:
        opts = _resolve(tmp_path, 'language = "n1ql"\n')
        assert opts.language == "n1ql"

    def test_cli_overrides_config_language(self, tmp_path: Path) -> None:
        opts = _resolve(tmp_path, 'language = "n1ql"\n', "-l", "db2")
        assert opts.language == "db2"

    def test_config_indent_string(self, tmp_path: Path) -> None:
        opts = _resolve(tmp_path, 'indent = "\\t"\n')
        assert opts.indent == "\t"

    def test_config_indent_width(self, tmp_path: Path) -> None:
        opts = _resolve(tmp_path, "indent = 4\n")
        assert opts.indent == "    "

    def test_cli_overrides_config_indent(self, tmp_path: Path) -> None:
        opts = _resolve(tmp_path, "indent = 4\n", "--tabs")
        assert opts.indent == "\t"

    def test_cli_indent_string(self, tmp_path: Path) -> None:
        opts = _resolve(tmp_path, None, "--indent", "   ")
        assert opts.indent == "   "

    def test_config_params_merged_with_cli(self, tmp_path: Path) -> None:
        opts = _resolve(tmp_path, '[params]\na = "1"\nb = "2"\n', "-p", "b=3")
        assert opts.params == {"a": "1", "b": "3"}

    def test_config_param_values_stringified(self, tmp_path: Path) -> None:
        opts = _resolve(tmp_path, "[params]\nid = 42\n")
        assert opts.params == {"id": "42"}

    def test_config_args(self, tmp_path: Path) -> None:
        opts = _resolve(tmp_path, 'args = ["x", 2]\n')
        assert opts.params == ["x", "2"]

    def test_cli_args_replace_config_args(self, tmp_path: Path) -> None:
        opts = _resolve(tmp_path, 'args = ["x"]\n', "-a", "y")
        assert opts.params == ["y"]

    def test_config_mixed_params_rejected(self, tmp_path: Path) -> None:
        with pytest.raises(argparse.ArgumentTypeError):
            _resolve(tmp_path, 'args = ["x"]\n[params]\na = "1"\n')

    def test_explicit_config_flag(self, tmp_path: Path) -> None:
        cfg = tmp_path / "alt.toml"
        cfg.write_text('language = "pl/sql"\n')
        opts = _resolve(tmp_path, None, "--config", str(cfg))
        assert opts.language == "pl/sql"

    def test_output_path(self, tmp_path: Path) -> None:
        opts = _resolve(tmp_path, None, "-o", "out.sql")
        assert opts.output_file == Path("out.sql")

    def test_config_indent_bool_rejected(self, tmp_path: Path) -> None:
        with pytest.raises(argparse.ArgumentTypeError, match="non-negative integer"):
            _resolve(tmp_path, "indent = true\n")

    def test_config_indent_negative_rejected(self, tmp_path: Path) -> None:
        with pytest.raises(argparse.ArgumentTypeError):
            _resolve(tmp_path, "indent = -1\n")

    def test_config_indent_zero(self, tmp_path: Path) -> None:
        opts = _resolve(tmp_path, "indent = 0\n")
        assert opts.indent == ""

    def test_negative_spaces_rejected(self, tmp_path: Path) -> None:
        with pytest.raises(argparse.ArgumentTypeError, match="must not be negative"):
            _resolve(tmp_path, None, "--spaces", "-1")
