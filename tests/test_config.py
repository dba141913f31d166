from __future__ import annotations

from pathlib import Path

import pytest

from compiler.config import CONFIG_FILENAME, ConfigError, SourceModelConfig, load_config


def _write_config(root: Path, toml_content: str) -> None:
    (root / CONFIG_FILENAME).write_text(toml_content, encoding="utf-8")


def test_missing_config_uses_defaults(tmp_path: Path) -> None:
    config = load_config(tmp_path)

    assert config == SourceModelConfig()
    assert config.max_workers == 4
    assert config.fail_on_syntax_errors is True
    assert config.name_collisions == "last-write-wins"
    assert config.suppression == "flag"
    assert config.log_level == "warning"


def test_empty_config_accepted(tmp_path: Path) -> None:
    _write_config(tmp_path, "")

    assert load_config(tmp_path) == SourceModelConfig()


def test_valid_config_accepted(tmp_path: Path) -> None:
    _write_config(
        tmp_path,
        """
max_workers = 1
fail_on_syntax_errors = false
name_collisions = "error"
suppression = "depth"
log_level = "debug"
""".strip(),
    )

    config = load_config(tmp_path)

    assert config.max_workers == 1
    assert config.fail_on_syntax_errors is False
    assert config.name_collisions == "error"
    assert config.suppression == "depth"
    assert config.log_level == "debug"


def test_unknown_top_level_key_rejected(tmp_path: Path) -> None:
    _write_config(tmp_path, "bogus_key = true")

    with pytest.raises(ConfigError):
        load_config(tmp_path)


@pytest.mark.parametrize(
    "toml_content",
    [
        "max_workers = 0",
        'name_collisions = "first-write-wins"',
        'suppression = "stack"',
        'log_level = "trace"',
    ],
)
def test_invalid_values_rejected(tmp_path: Path, toml_content: str) -> None:
    _write_config(tmp_path, toml_content)

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_invalid_toml_rejected(tmp_path: Path) -> None:
    _write_config(tmp_path, "max_workers = [")

    with pytest.raises(ConfigError, match="Invalid TOML"):
        load_config(tmp_path)
