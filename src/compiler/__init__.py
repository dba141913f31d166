"""Entry points for building source models from source files."""

from compiler.build import FileResult, build_file, build_model
from compiler.config import ConfigError, SourceModelConfig, load_config
from compiler.languages import get_walker, supported_languages
from compiler.logging import configure_logging

__all__ = [
    "ConfigError",
    "FileResult",
    "SourceModelConfig",
    "build_file",
    "build_model",
    "configure_logging",
    "get_walker",
    "load_config",
    "supported_languages",
]
