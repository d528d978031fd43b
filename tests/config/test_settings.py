"""Tests for PropcheckSettings source priority."""

from __future__ import annotations

from pathlib import Path

import click
import pytest
from pydantic import ValidationError

from propcheck.config.discovery import CONFIG_ENV_VAR, CONFIG_FILENAME
from propcheck.config.settings import PropcheckSettings


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    monkeypatch.delenv("PROPCHECK_BATCH__MAX_BATCH_SIZE", raising=False)
    monkeypatch.delenv("PROPCHECK_CACHE__VALIDATION_RESULTS", raising=False)


def _write_config(directory: Path, text: str) -> Path:
    cfg = directory / CONFIG_FILENAME
    cfg.write_text(text, encoding="utf-8")
    return cfg


class TestDefaults:
    def test_no_file(self, tmp_path: Path) -> None:
        settings = PropcheckSettings.from_cli(start=tmp_path)
        assert settings.config_path is None
        assert settings.cache.validation_results is True
        assert settings.batch.max_batch_size == 1000
        assert settings.json_output is False

    def test_frozen(self, tmp_path: Path) -> None:
        settings = PropcheckSettings.from_cli(start=tmp_path)
        with pytest.raises(Exception):  # noqa: B017
            settings.quiet = True  # type: ignore[misc]


class TestTomlSource:
    def test_discovered_file(self, tmp_path: Path) -> None:
        cfg = _write_config(
            tmp_path, '[cache]\nvalidation_results = false\n[logging]\nlevel = "DEBUG"\n'
        )
        settings = PropcheckSettings.from_cli(start=tmp_path)
        assert settings.config_path == cfg.resolve()
        assert settings.cache.validation_results is False
        assert settings.logging.level == "DEBUG"

    def test_explicit_path(self, tmp_path: Path) -> None:
        cfg = tmp_path / "custom.toml"
        cfg.write_text("[batch]\nmax_batch_size = 10\n", encoding="utf-8")
        settings = PropcheckSettings.from_cli(config_path=str(cfg))
        assert settings.batch.max_batch_size == 10

    def test_explicit_missing_path_uses_defaults(self, tmp_path: Path) -> None:
        settings = PropcheckSettings.from_cli(config_path=str(tmp_path / "missing.toml"))
        assert settings.config_path is None
        assert settings.batch.max_batch_size == 1000

    def test_invalid_toml(self, tmp_path: Path) -> None:
        _write_config(tmp_path, "[batch\n")
        with pytest.raises(click.ClickException, match="Invalid TOML"):
            PropcheckSettings.from_cli(start=tmp_path)

    def test_sparse_overrides_keep_defaults(self, tmp_path: Path) -> None:
        _write_config(tmp_path, "[batch]\nmax_batch_size = 50\n")
        settings = PropcheckSettings.from_cli(start=tmp_path)
        assert settings.batch.max_batch_size == 50
        assert settings.cache.validation_results is True
        assert settings.logging.level == "WARNING"

    @pytest.mark.parametrize(
        "text", ["[batch]\nmax_batch_size = 0\n", '[logging]\nlevel = "LOUD"\n']
    )
    def test_invalid_values_rejected(self, tmp_path: Path, text: str) -> None:
        _write_config(tmp_path, text)
        with pytest.raises(ValidationError):
            PropcheckSettings.from_cli(start=tmp_path)


class TestPriority:
    def test_env_beats_toml(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        _write_config(tmp_path, "[batch]\nmax_batch_size = 10\n")
        monkeypatch.setenv("PROPCHECK_BATCH__MAX_BATCH_SIZE", "25")
        settings = PropcheckSettings.from_cli(start=tmp_path)
        assert settings.batch.max_batch_size == 25

    def test_cli_flags_beat_env(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PROPCHECK_QUIET", "true")
        settings = PropcheckSettings.from_cli(start=tmp_path, quiet=False)
        assert settings.quiet is False

    def test_env_flag(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PROPCHECK_QUIET", "true")
        assert PropcheckSettings.from_cli(start=tmp_path).quiet is True
