import pytest

from smaqc.cli.main import main
from smaqc.logging import reset_logger


@pytest.fixture(autouse=True)
def isolated_logging(tmp_path, monkeypatch):
    monkeypatch.setenv("SMAQC_LOG_CONFIG", str(tmp_path / "config" / "logging.json"))
    monkeypatch.setenv("SMAQC_LOG_DIR", str(tmp_path / "logs"))
    reset_logger()
    yield
    reset_logger()


def test_logging_show_level_reports_configured_level(capsys):
    """`smaqc logging show-level` should print the saved level after set-level."""

    main(["logging", "set-level", "DEBUG"])
    capsys.readouterr()

    main(["logging", "show-level"])
    assert capsys.readouterr().out.strip() == "DEBUG"


def test_logging_show_path_follows_log_dir(tmp_path, capsys):
    main(["logging", "set-level", "INFO"])
    capsys.readouterr()

    main(["logging", "show-path"])
    assert capsys.readouterr().out.strip() == str((tmp_path / "logs" / "smaqc.log").resolve())


def test_logging_set_dir_is_saved(tmp_path, monkeypatch, capsys):
    monkeypatch.delenv("SMAQC_LOG_DIR")
    target = tmp_path / "saved-logs"

    main(["logging", "set-dir", str(target)])
    capsys.readouterr()
    main(["logging", "show-path"])

    assert capsys.readouterr().out.strip() == str((target / "smaqc.log").resolve())
