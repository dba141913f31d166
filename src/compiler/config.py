"""Configuration loading for source model builds."""

from __future__ import annotations

from pathlib import Path
from typing import Literal

import tomllib
from pydantic import BaseModel, ConfigDict, Field

from model.source_model import CollisionPolicy
from parse.builder import SuppressionMode

CONFIG_FILENAME = "srcmodel.toml"

LogLevel = Literal["debug", "info", "warning", "error"]


class SourceModelConfig(BaseModel):
    """Configuration for building source models."""

    model_config = ConfigDict(extra="forbid")

    max_workers: int = Field(
        default=4,
        ge=1,
        description="Number of files walked in parallel (1 walks serially)",
    )
    fail_on_syntax_errors: bool = Field(
        default=True,
        description="Treat parse trees containing syntax errors as malformed input",
    )
    name_collisions: CollisionPolicy = Field(
        default="last-write-wins",
        description="Policy for two components claiming the same qualified name",
    )
    suppression: SuppressionMode = Field(
        default="flag",
        description=(
            "How ignored constructs nest: 'flag' (any exit ends suppression) "
            "or 'depth' (counted enters and exits)"
        ),
    )
    log_level: LogLevel = Field(
        default="warning",
        description="Minimum level of structured log events",
    )


class ConfigError(Exception):
    """Raised when config file exists but cannot be parsed."""


def load_config(root: Path) -> SourceModelConfig:
    """Load configuration from srcmodel.toml if it exists."""
    config_path = Path(root) / CONFIG_FILENAME

    if not config_path.is_file():
        return SourceModelConfig()

    try:
        with config_path.open("rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        msg = f"Invalid TOML in {config_path}: {e}"
        raise ConfigError(msg) from e

    try:
        return SourceModelConfig.model_validate(data)
    except Exception as e:
        msg = f"Invalid config in {config_path}: {e}"
        raise ConfigError(msg) from e


__all__ = ["CONFIG_FILENAME", "ConfigError", "SourceModelConfig", "load_config"]
