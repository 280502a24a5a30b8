"""Persisted logging settings (``~/.smaqc/logging.json``).

The settings file is optional. A missing or unreadable file means "use the
defaults", so a broken config never stops a measurement run.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ValidationError, field_validator

LEVEL_NAMES = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class LogSettings(BaseModel):
    log_level: Optional[str] = None
    log_dir: Optional[str] = None

    @field_validator("log_level", mode="before")
    @classmethod
    def _level_name(cls, value):
        if value is None:
            return None
        if isinstance(value, int):
            value = logging.getLevelName(value)
        name = str(value).strip().upper()
        if name not in LEVEL_NAMES:
            raise ValueError(f"Unknown logging level: {value!r}")
        return name

    @property
    def level(self) -> Optional[int]:
        if self.log_level is None:
            return None
        return getattr(logging, self.log_level)


def settings_path(config_file: os.PathLike[str] | str | None = None) -> Path:
    """Where the settings live.

    ``config_file`` wins, then ``SMAQC_LOG_CONFIG``, then
    ``$SMAQC_CONFIG_DIR/logging.json`` and finally ``~/.smaqc/logging.json``.
    """

    if config_file is not None:
        return Path(config_file)
    override = os.environ.get("SMAQC_LOG_CONFIG", "").strip()
    if override:
        return Path(override).expanduser()
    config_dir = os.environ.get("SMAQC_CONFIG_DIR", "").strip()
    base = Path(config_dir).expanduser() if config_dir else Path.home() / ".smaqc"
    return base / "logging.json"


def load_settings(config_file: os.PathLike[str] | str | None = None) -> LogSettings:
    path = settings_path(config_file)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        return LogSettings.model_validate(data)
    except (OSError, json.JSONDecodeError, ValidationError):
        return LogSettings()


def save_settings(
    settings: LogSettings, config_file: os.PathLike[str] | str | None = None
) -> Path:
    path = settings_path(config_file)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(settings.model_dump_json(indent=2, exclude_none=True) + "\n", encoding="utf-8")
    return path


def load_log_level(config_file: os.PathLike[str] | str | None = None) -> Optional[int]:
    """Persisted level as a ``logging`` constant, or ``None`` when unset."""
    return load_settings(config_file).level


def save_log_level(level: str | int, config_file: os.PathLike[str] | str | None = None) -> Path:
    """Persist ``level``, keeping any other saved settings, and return the file written.

    Raises
    ------
    ValueError
        If ``level`` is not a standard logging level.
    """

    try:
        settings = load_settings(config_file).model_copy(
            update={"log_level": LogSettings(log_level=level).log_level}
        )
    except ValidationError as exc:
        raise ValueError(f"Unknown logging level: {level!r}") from exc
    return save_settings(settings, config_file)


def save_log_dir(log_dir: os.PathLike[str] | str, config_file: os.PathLike[str] | str | None = None) -> Path:
    settings = load_settings(config_file).model_copy(
        update={"log_dir": str(Path(log_dir).expanduser().resolve())}
    )
    return save_settings(settings, config_file)
