# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Configuration models and loading for the lintpipe processing stage."""

from __future__ import annotations

import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Final, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError

CONFIG_FILENAME: Final[str] = ".lintpipe.toml"
PYPROJECT_FILENAME: Final[str] = "pyproject.toml"
PYPROJECT_TOOL_KEY: Final[str] = "tool"
PYPROJECT_SECTION_KEY: Final[str] = "lintpipe"


class ConfigError(Exception):
    """Raised when configuration input is invalid."""


class ProcessingConfig(BaseModel):
    """Toggles for the post-analysis processor chain."""

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    exclude_generated: bool = True


class OutputConfig(BaseModel):
    """Presentation settings for command line output."""

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    color: bool = True
    emoji: bool = True
    format: Literal["text", "json"] = "text"
    debug: list[str] = Field(default_factory=list)


class Config(BaseModel):
    """Top-level configuration object."""

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    processing: ProcessingConfig = Field(default_factory=ProcessingConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any], *, source: str) -> Config:
        """Validate ``data`` into a :class:`Config`, naming ``source`` on failure."""
        try:
            return cls.model_validate(dict(data))
        except ValidationError as exc:
            raise ConfigError(f"invalid configuration in {source}: {exc}") from exc


def _read_toml(path: Path) -> dict[str, Any]:
    try:
        with path.open("rb") as handle:
            return tomllib.load(handle)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"malformed TOML in {path}: {exc}") from exc
    except OSError as exc:
        raise ConfigError(f"can't read {path}: {exc}") from exc


def _pyproject_section(path: Path) -> Mapping[str, Any] | None:
    data = _read_toml(path)
    tool_section = data.get(PYPROJECT_TOOL_KEY)
    if not isinstance(tool_section, Mapping):
        return None
    section = tool_section.get(PYPROJECT_SECTION_KEY)
    if section is None:
        return None
    if not isinstance(section, Mapping):
        raise ConfigError(f"[tool.{PYPROJECT_SECTION_KEY}] in {path} must be a table")
    return section


def load_config(project_root: Path) -> Config:
    """Load configuration for ``project_root``.

    ``.lintpipe.toml`` wins over the ``[tool.lintpipe]`` table of
    ``pyproject.toml``; defaults apply when neither exists.

    Args:
        project_root: Directory searched for configuration files.

    Returns:
        Config: Validated configuration.

    Raises:
        ConfigError: If a configuration file is malformed or invalid.
    """

    config_path = project_root / CONFIG_FILENAME
    if config_path.is_file():
        return Config.from_mapping(_read_toml(config_path), source=str(config_path))

    pyproject_path = project_root / PYPROJECT_FILENAME
    if pyproject_path.is_file():
        section = _pyproject_section(pyproject_path)
        if section is not None:
            return Config.from_mapping(section, source=f"{pyproject_path} [tool.{PYPROJECT_SECTION_KEY}]")

    return Config()


__all__ = [
    "Config",
    "ConfigError",
    "OutputConfig",
    "ProcessingConfig",
    "load_config",
]
