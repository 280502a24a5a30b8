"""Run settings and measurement list loading."""

from __future__ import annotations

import json
import os
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Iterable, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator

from smaqc.errors import ConfigError
from smaqc.logging import get_logger
from smaqc.metrics.mode import IdentificationMode
from smaqc.metrics.registry import CATALOG

logger = get_logger(__file__)

OUTPUT_FORMATS = ("text", "csv", "tsv", "json")


class DatasetRef(BaseModel):
    """A dataset id (``random_id``) with an optional display name."""

    dataset_id: int = Field(..., ge=0)
    name: Optional[str] = None

    @property
    def label(self) -> str:
        return self.name or str(self.dataset_id)

    @classmethod
    def parse(cls, value: str) -> "DatasetRef":
        """Parse ``ID`` or ``ID:NAME``."""

        raw_id, _, name = str(value).partition(":")
        try:
            dataset_id = int(raw_id.strip())
        except ValueError:
            raise ConfigError(f"dataset must look like ID or ID:NAME, got {value!r}") from None
        try:
            return cls(dataset_id=dataset_id, name=name.strip() or None)
        except ValidationError as exc:
            raise ConfigError(str(exc)) from exc


class RunConfig(BaseModel):
    db_path: str
    mode: IdentificationMode = IdentificationMode.PHRP
    instrument_id: str = ""
    datasets: list[DatasetRef] = Field(default_factory=list)
    measurements: list[str] = Field(default_factory=lambda: list(CATALOG))
    output: Optional[Path] = None
    output_format: str = "text"

    @field_validator("mode", mode="before")
    @classmethod
    def _parse_mode(cls, value):
        return IdentificationMode.parse(value)

    @field_validator("output_format")
    @classmethod
    def _check_format(cls, value: str) -> str:
        value = value.lower()
        if value not in OUTPUT_FORMATS:
            raise ValueError(f"output_format must be one of {', '.join(OUTPUT_FORMATS)}")
        return value

    @classmethod
    def build(
        cls,
        db_path: str | None = None,
        mode: str | None = None,
        datasets: Iterable[str] = (),
        measurements_file: str | Path | None = None,
        **kwargs,
    ) -> "RunConfig":
        """Assemble settings from explicit values with environment fallbacks.

        ``SMAQC_DB_PATH`` and ``SMAQC_MODE`` fill in ``db_path`` and
        ``mode`` when they are not given.

        Raises
        ------
        ConfigError
            If a value is missing or invalid.
        """

        db_path = db_path or os.getenv("SMAQC_DB_PATH")
        if not db_path:
            raise ConfigError("no database given; pass --db or set SMAQC_DB_PATH")

        values = dict(kwargs)
        values["db_path"] = db_path
        values["mode"] = mode or os.getenv("SMAQC_MODE") or IdentificationMode.PHRP
        values["datasets"] = [DatasetRef.parse(item) for item in datasets]
        if measurements_file is not None:
            values["measurements"] = load_measurement_names(measurements_file)

        try:
            return cls(**values)
        except ValidationError as exc:
            raise ConfigError(str(exc)) from exc


def _names_from_xml(text: str) -> list[str]:
    try:
        root = ET.fromstring(text)
    except ET.ParseError as exc:
        raise ConfigError(f"invalid measurements XML: {exc}") from exc
    return [element.get("name", "") for element in root.iter("measurement")]


def _names_from_json(text: str) -> list[str]:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"invalid measurements JSON: {exc}") from exc
    if isinstance(data, dict):
        data = data.get("measurements")
    if not isinstance(data, list):
        raise ConfigError("measurements JSON must be a list of names")
    return [str(item) for item in data]


def load_measurement_names(path: str | Path) -> list[str]:
    """Read the measurement names to run from ``path``.

    Three layouts are accepted:

    - XML with ``<measurement name="C_1A"/>`` elements
    - a JSON list of names (or an object with a ``measurements`` list)
    - plain text, one name per line; blank lines and ``#`` comments ignored

    Unknown names are kept; the engine reports them as ``Null``.
    """

    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"cannot read measurements file {path}: {exc}") from exc

    stripped = text.lstrip()
    if stripped.startswith("<"):
        names = _names_from_xml(stripped)
    elif stripped.startswith(("[", "{")):
        names = _names_from_json(stripped)
    else:
        names = [
            line.strip()
            for line in text.splitlines()
            if line.strip() and not line.strip().startswith("#")
        ]

    names = [name.strip() for name in names if name and name.strip()]
    if not names:
        raise ConfigError(f"no measurements listed in {path}")

    unknown = [name for name in names if name not in CATALOG]
    if unknown:
        logger.warning("unknown measurement(s) in %s: %s", path, ", ".join(unknown))
    return names
