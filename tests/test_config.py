"""Tests for TOML config file loading."""

from __future__ import annotations

import argparse
from pathlib import Path

import pytest

from scanlab.cli import build_parser, load_config, resolve_options


class TestLoadConfig:
    def test_missing_config_returns_empty(self, tmp_path: Path) -> None:
        assert load_config(None, tmp_path) == {}

    def test_explicit_path(self, tmp_path: Path) -> None:
        cfg = tmp_path / "custom.toml"
        cfg.write_text('[lexer]\ncomment = "#"\n')
        result = load_config(cfg, tmp_path)
        assert result["lexer"] == {"comment": "#"}

    def test_auto_discover_scanlab_toml(self, tmp_path: Path) -> None:
        cfg = tmp_path / "scanlab.toml"
        cfg.write_text("[arena]\nsize = 1024\n")
        result = load_config(None, tmp_path)
        assert result["arena"] == {"size": 1024}


class TestConfigMerge:
    def _resolve(self, tmp_path: Path, *extra: str):
        src = tmp_path / "calc.scan"
        src.write_text("")
        ns = build_parser().parse_args([str(src), *extra])
        return resolve_options(ns)

    def test_defaults_without_config(self, tmp_path: Path) -> None:
        opts = self._resolve(tmp_path)
        assert opts.comment_marker == "//"
        assert opts.strict_strings is False
        assert opts.arena_size == 0

    def test_config_lexer_merged(self, tmp_path: Path) -> None:
        (tmp_path / "scanlab.toml").write_text('[lexer]\ncomment = ";;"\nstrict_strings = true\n')
        opts = self._resolve(tmp_path)
        assert opts.comment_marker == ";;"
        assert opts.strict_strings is True

    def test_cli_overrides_config_comment(self, tmp_path: Path) -> None:
        (tmp_path / "scanlab.toml").write_text('[lexer]\ncomment = ";;"\n')
        opts = self._resolve(tmp_path, "--comment", "#")
        assert opts.comment_marker == "#"

    def test_config_arena_size_string(self, tmp_path: Path) -> None:
        (tmp_path / "scanlab.toml").write_text('[arena]\nsize = "2K"\n')
        assert self._resolve(tmp_path).arena_size == 2048

    def test_cli_overrides_config_arena(self, tmp_path: Path) -> None:
        (tmp_path / "scanlab.toml").write_text("[arena]\nsize = 2048\n")
        assert self._resolve(tmp_path, "--arena-size", "0").arena_size == 0

    def test_explicit_config_flag(self, tmp_path: Path) -> None:
        cfg = tmp_path / "alt.toml"
        cfg.write_text("[lexer]\nstrict_strings = true\n")
        opts = self._resolve(tmp_path, "--config", str(cfg))
        assert opts.strict_strings is True

    def test_wrong_types_ignored(self, tmp_path: Path) -> None:
        (tmp_path / "scanlab.toml").write_text('[lexer]\ncomment = 5\nstrict_strings = "yes"\n')
        opts = self._resolve(tmp_path)
        assert opts.comment_marker == "//"
        assert opts.strict_strings is False

    def test_malformed_config(self, tmp_path: Path) -> None:
        (tmp_path / "scanlab.toml").write_text("[lexer\n")
        with pytest.raises(argparse.ArgumentTypeError):
            self._resolve(tmp_path)
