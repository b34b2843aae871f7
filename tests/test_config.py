# tests/test_config.py

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from app_initializers.config import Settings
from app_initializers.core.observers import LoggingEventsObserver
from app_initializers.logging_setup import _ConsoleNoiseFilter, setup_logging
from app_initializers.manager import InitManager

from .fakes import FailingInitializer, RecordingInitializer


def test_settings_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "APPINIT_APP_NAME",
        "APPINIT_LOG_LEVEL",
        "APPINIT_LOG_DIR",
        "APPINIT_FILE_LOGGING",
        "APPINIT_MANIFEST_PATH",
        "APPINIT_AUTOSTART_FOREGROUND",
    ):
        monkeypatch.delenv(name, raising=False)

    s = Settings.from_env()

    assert s.app_name == "app-initializers"
    assert s.log_level == "INFO"
    assert s.file_logging is False
    assert s.manifest_path is None
    assert s.autostart_foreground is True


def test_settings_from_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("APPINIT_LOG_LEVEL", "debug")
    monkeypatch.setenv("APPINIT_FILE_LOGGING", "yes")
    monkeypatch.setenv("APPINIT_LOG_DIR", str(tmp_path))
    monkeypatch.setenv("APPINIT_MANIFEST_PATH", str(tmp_path / "m.json"))
    monkeypatch.setenv("APPINIT_AUTOSTART_FOREGROUND", "off")

    s = Settings.from_env()

    assert s.log_level == "DEBUG"
    assert s.file_logging is True
    assert s.log_dir == tmp_path
    assert s.manifest_path == tmp_path / "m.json"
    assert s.autostart_foreground is False


def _record(name: str, level: int) -> logging.LogRecord:
    return logging.LogRecord(name, level, __file__, 1, "msg", None, None)


def test_console_filter_keeps_own_logs_and_drops_noise() -> None:
    f = _ConsoleNoiseFilter()

    assert f.filter(_record("app_initializers.manager", logging.DEBUG))
    assert not f.filter(_record("urllib3", logging.WARNING))
    assert f.filter(_record("urllib3", logging.ERROR))
    assert not f.filter(_record("py.warnings", logging.WARNING))


def test_setup_logging_writes_file(tmp_path: Path) -> None:
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    try:
        setup_logging(log_dir=tmp_path)
        logging.getLogger("app_initializers.test").info("hello file")
        for h in root.handlers:
            h.flush()
        assert "hello file" in (tmp_path / "app_initializers.log").read_text("utf-8")
    finally:
        for h in list(root.handlers):
            root.removeHandler(h)
            h.close()
        for h in saved_handlers:
            root.addHandler(h)
        root.setLevel(saved_level)
        logging.captureWarnings(False)


@pytest.mark.asyncio
async def test_logging_observer_and_failure_warning(run_log, caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.DEBUG, logger="app_initializers")
    obs = LoggingEventsObserver()
    manager = InitManager(
        [RecordingInitializer("config", run_log), FailingInitializer("db", run_log, dependencies=("config",))],
        observer=obs,
    )

    await manager.wait_for_launch()

    assert obs.executed == 2
    assert "Launch initializers started." in caplog.text
    assert "Launch initializers finished: Failed" in caplog.text
    warnings = [r for r in caplog.records if r.levelno == logging.WARNING and r.name == "app_initializers.manager"]
    assert warnings and "db" in warnings[0].getMessage()


def test_malformed_bool_falls_back_to_default(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("APPINIT_AUTOSTART_FOREGROUND", "maybe")
    monkeypatch.setenv("APPINIT_FILE_LOGGING", "sometimes")

    s = Settings.from_env()

    assert s.autostart_foreground is True
    assert s.file_logging is False
