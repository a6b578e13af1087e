"""Tests for environment settings and logging setup."""

from __future__ import annotations

from pathlib import Path

import pytest
import structlog
from pydantic import ValidationError

from image_hasher import HasherConfig, Settings
from image_hasher.core.logger import configure_logging


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.chdir(tmp_path)
    for var in ["WIDTH", "HEIGHT", "FACTOR", "THREADS", "LOG_LEVEL"]:
        monkeypatch.delenv(f"IMAGE_HASHER_{var}", raising=False)


class TestSettings:
    def test_defaults(self) -> None:
        settings = Settings()
        assert settings.hasher_config() == HasherConfig(width=8, height=8, factor=4)
        assert settings.log_level == "WARNING"

    def test_environment_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("IMAGE_HASHER_FACTOR", "2")
        monkeypatch.setenv("IMAGE_HASHER_LOG_LEVEL", "debug")
        settings = Settings()
        assert settings.factor == 2
        assert settings.log_level == "DEBUG"

    def test_dotenv_file(self, tmp_path: Path) -> None:
        (tmp_path / ".env").write_text("IMAGE_HASHER_WIDTH=16\n")
        assert Settings().hasher_config().width == 16

    def test_rejects_zero(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("IMAGE_HASHER_HEIGHT", "0")
        with pytest.raises(ValidationError):
            Settings()

    def test_rejects_unknown_log_level(self) -> None:
        with pytest.raises(ValidationError):
            Settings(log_level="chatty")


class TestConfigureLogging:
    def test_filters_below_level(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging("WARNING")
        log = structlog.get_logger("test")
        log.info("hidden_event")
        log.warning("shown_event", path="x.png")
        err = capsys.readouterr().err
        assert "shown_event" in err
        assert "hidden_event" not in err

    def test_unknown_level_falls_back_to_info(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging("nonsense")
        structlog.get_logger("test").info("info_event")
        assert "info_event" in capsys.readouterr().err


def test_threads_default_to_available_cpus() -> None:
    from image_hasher.core.utils import cpu_threads

    assert Settings().threads == cpu_threads() >= 1
