"""Pydantic models for Beadwork configuration data."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

READY_FORMAT_VALUES = ("table", "json")
ReadyFormat = Literal["table", "json"]


class BeadsSection(BaseModel):
    """Location of the beads store.

    Attributes:
        dir: Beads directory (holds ``formulas/`` and ``issues.jsonl``).
        bd_path: ``bd`` executable used to query the store.

    Example:
        >>> BeadsSection(dir=" /town/.beads ", bd_path="")
        BeadsSection(dir='/town/.beads', bd_path='bd')
    """

    model_config = ConfigDict(extra="allow")

    dir: str | None = None
    bd_path: str = "bd"

    @field_validator("dir", mode="before")
    @classmethod
    def normalize_dir(cls, value: object) -> object:
        if value is None:
            return None
        if isinstance(value, str):
            normalized = value.strip()
            return normalized or None
        return value

    @field_validator("bd_path", mode="before")
    @classmethod
    def normalize_bd_path(cls, value: object) -> object:
        if value is None:
            return "bd"
        if isinstance(value, str):
            normalized = value.strip()
            return normalized or "bd"
        return value


class ReadySection(BaseModel):
    """Defaults for the ``beadwork ready`` command.

    Attributes:
        format: Output format (table|json).
    """

    model_config = ConfigDict(extra="allow")

    format: ReadyFormat = "table"

    @field_validator("format", mode="before")
    @classmethod
    def normalize_format(cls, value: object) -> object:
        if value is None:
            return "table"
        if isinstance(value, str):
            return value.strip().lower()
        return value


class BeadworkConfig(BaseModel):
    """User configuration stored in ``config.user.json``.

    Example:
        >>> BeadworkConfig.model_validate({"ready": {"format": "JSON"}}).ready.format
        'json'
    """

    model_config = ConfigDict(extra="allow")

    beads: BeadsSection = Field(default_factory=BeadsSection)
    ready: ReadySection = Field(default_factory=ReadySection)
