"""Unit tests for chessroom/core/config.py"""

import logging
import os
from typing import Generator

import pytest

from chessroom.chess.occupancy import CapturePolicy
from chessroom.core.config import Settings, configure_logging, get_settings


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> Generator[pytest.MonkeyPatch, None, None]:
    """No CHESSROOM_* variables, and no .env file to pick up"""
    for name in (
        "CHESSROOM_DATABASE_URL",
        "CHESSROOM_ECHO_SQL",
        "CHESSROOM_LOG_LEVEL",
        "CHESSROOM_CAPTURE_POLICY",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()
    yield monkeypatch
    get_settings.cache_clear()


def test_defaults(clean_env: pytest.MonkeyPatch) -> None:
    settings = Settings.from_env()
    assert settings == Settings()
    assert settings.capture_policy == CapturePolicy.CAPTURE
    assert not settings.echo_sql


def test_from_environment(clean_env: pytest.MonkeyPatch) -> None:
    clean_env.setenv("CHESSROOM_DATABASE_URL", "sqlite:///:memory:")
    clean_env.setenv("CHESSROOM_ECHO_SQL", "True")
    clean_env.setenv("CHESSROOM_LOG_LEVEL", "debug")
    clean_env.setenv("CHESSROOM_CAPTURE_POLICY", "BLOCKING")

    settings = Settings.from_env()
    assert settings.database_url == "sqlite:///:memory:"
    assert settings.echo_sql
    assert settings.log_level == "DEBUG"
    assert settings.capture_policy == CapturePolicy.BLOCKING


def test_unknown_capture_policy(clean_env: pytest.MonkeyPatch) -> None:
    clean_env.setenv("CHESSROOM_CAPTURE_POLICY", "sometimes")
    with pytest.raises(ValueError):
        Settings.from_env()


def test_dotenv_file(clean_env: pytest.MonkeyPatch, tmp_path) -> None:
    (tmp_path / ".env").write_text("CHESSROOM_CAPTURE_POLICY=blocking\n")
    try:
        assert Settings.from_env().capture_policy == CapturePolicy.BLOCKING
    finally:
        # load_dotenv writes to os.environ directly
        os.environ.pop("CHESSROOM_CAPTURE_POLICY", None)


def test_get_settings_is_cached(clean_env: pytest.MonkeyPatch) -> None:
    assert get_settings() is get_settings()


def test_configure_logging() -> None:
    package_logger = logging.getLogger("chessroom")
    try:
        configure_logging("DEBUG")
        assert package_logger.level == logging.DEBUG
        assert logging.getLogger("chessroom.chess.executor").isEnabledFor(logging.DEBUG)
    finally:
        package_logger.setLevel(logging.NOTSET)
