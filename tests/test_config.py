"""Tests for qsave.config: defaults, TOML file, env overrides."""

from __future__ import annotations

from pathlib import Path

import pytest

from qsave.config import load_config


class TestLoadConfig:
    def test_defaults(self, isolated_env):
        cfg = load_config()
        assert cfg.db_path == Path.home() / "qsave.db"
        assert cfg.editor == ""
        assert cfg.source is None

    def test_reads_toml(self, isolated_env, tmp_path):
        cfg_file = isolated_env / "config.toml"
        cfg_file.write_text(f'[qsave]\ndb_path = "{tmp_path / "other.db"}"\neditor = "nvim"\n')
        cfg = load_config()
        assert cfg.db_path == tmp_path / "other.db"
        assert cfg.editor == "nvim"
        assert cfg.source == cfg_file

    def test_expands_home(self, isolated_env):
        (isolated_env / "config.toml").write_text('[qsave]\ndb_path = "~/snips.db"\n')
        assert load_config().db_path == isolated_env / "snips.db"

    def test_env_db_beats_file(self, isolated_env, tmp_path, monkeypatch):
        (isolated_env / "config.toml").write_text('[qsave]\ndb_path = "/nowhere/file.db"\n')
        monkeypatch.setenv("QSAVE_DB", str(tmp_path / "env.db"))
        assert load_config().db_path == tmp_path / "env.db"

    def test_explicit_path(self, tmp_path):
        cfg_file = tmp_path / "custom.toml"
        cfg_file.write_text('[qsave]\neditor = "micro"\n')
        assert load_config(cfg_file).editor == "micro"

    def test_invalid_toml(self, isolated_env):
        (isolated_env / "config.toml").write_text("[qsave\n")
        with pytest.raises(ValueError, match="invalid config file"):
            load_config()

