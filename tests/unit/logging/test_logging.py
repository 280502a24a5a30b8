"""Tests for logging utilities."""

import logging

from smaqc.logging import get_logger, reset_logger, set_level
from smaqc.logging.config import load_log_level, save_log_level


def test_reset_logger_allows_reconfiguration(tmp_path):
    log1 = tmp_path / "first.log"
    log2 = tmp_path / "second.log"

    # Initial configuration writes to the first file
    logger = get_logger("smaqc-test", level=logging.INFO, log_file=log1, console=False)
    logger.info("first run")
    for handler in logger.handlers:
        handler.flush()

    assert "first run" in log1.read_text()

    reset_logger("smaqc-test")
    assert logging.getLogger("smaqc-test").handlers == []

    logger2 = get_logger("smaqc-test", level=logging.INFO, log_file=log2, console=False)
    logger2.info("second run")
    for handler in logger2.handlers:
        handler.flush()

    assert "second run" in log2.read_text()
    assert "second run" not in log1.read_text()
    reset_logger("smaqc-test")


def test_set_level_applies_to_named_logger(tmp_path):
    logger = get_logger("smaqc-level", log_file=tmp_path / "level.log", console=False)
    set_level(logging.WARNING, name="smaqc-level")
    assert logger.level == logging.WARNING
    reset_logger("smaqc-level")


def test_persisted_level_round_trip(tmp_path, monkeypatch):
    config_file = tmp_path / "logging.json"
    monkeypatch.setenv("SMAQC_LOG_CONFIG", str(config_file))

    path = save_log_level("debug")

    assert path == config_file
    assert load_log_level() == logging.DEBUG


def test_module_loggers_are_children_of_smaqc():
    from smaqc.logging.logging import _logger_name

    assert _logger_name("/opt/src/smaqc/metrics/ms1.py") == "smaqc.metrics.ms1"
    assert _logger_name("/opt/src/smaqc/cli/__init__.py") == "smaqc.cli"
    assert _logger_name("/elsewhere/tool.py") == "tool"
    assert _logger_name("plain-name") == "plain-name"

    child = get_logger("/opt/src/smaqc/metrics/ms1.py")
    assert child.name == "smaqc.metrics.ms1"
    assert child.parent is logging.getLogger("smaqc")


def test_broken_settings_file_is_ignored(tmp_path, monkeypatch):
    config_file = tmp_path / "logging.json"
    config_file.write_text('{"log_level": "LOUD"}')
    monkeypatch.setenv("SMAQC_LOG_CONFIG", str(config_file))

    assert load_log_level() is None


def test_saving_level_keeps_directory(tmp_path, monkeypatch):
    from smaqc.logging.config import load_settings, save_log_dir

    monkeypatch.setenv("SMAQC_LOG_CONFIG", str(tmp_path / "logging.json"))
    save_log_dir(tmp_path / "logs")
    save_log_level(logging.ERROR)

    settings = load_settings()
    assert settings.log_level == "ERROR"
    assert settings.log_dir == str((tmp_path / "logs").resolve())
