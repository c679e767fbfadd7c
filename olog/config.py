"""Configuration management for olog."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import tomli_w

from olog.exceptions import (
    ConfigParseError,
    ConfigValidationError,
)
from olog.store.session import get_default_db_path


def get_default_config_path() -> Path:
    """Get the default configuration file path."""
    return Path.home() / ".config" / "olog" / "config.toml"


@dataclass
class Config:
    """Application configuration.

    Attributes:
        db_path: Path to the SQLite log store.
        default_limit: Page size used by ``olog search`` when only
            ``--page`` is given. None means no default.
        search_timeout: Deadline in seconds for a single search, or None.
        colored_output: Whether to use colored terminal output.
        config_path: Path where config was loaded from (None if defaults).
    """

    db_path: Path = field(default_factory=get_default_db_path)
    default_limit: int | None = None
    search_timeout: float | None = None
    colored_output: bool = True
    config_path: Path | None = None

    def validate(self) -> list[str]:
        """Validate configuration values.

        Returns:
            List of warning messages for non-fatal issues.

        Raises:
            ConfigValidationError: If a critical validation fails.
        """
        warnings: list[str] = []

        self.db_path = self.db_path.expanduser().resolve()

        # The store is created on first use, so a missing file is only a warning
        if not self.db_path.exists():
            warnings.append(f"Log store not found, it will be created: {self.db_path}")

        if self.default_limit is not None and self.default_limit < 1:
            raise ConfigValidationError(
                "search.default_limit", self.default_limit, "must be a positive integer"
            )

        if self.search_timeout is not None and self.search_timeout <= 0:
            raise ConfigValidationError(
                "search.timeout", self.search_timeout, "must be a positive number of seconds"
            )

        return warnings


def load_config(config_path: Path | None = None) -> tuple[Config, list[str]]:
    """Load configuration from file or use defaults.

    Args:
        config_path: Explicit config file path. If None, uses default location.

    Returns:
        Tuple of (Config object, list of warning messages).

    Raises:
        ConfigParseError: If config file exists but has invalid syntax.
        ConfigValidationError: If config values are invalid.
    """
    warnings: list[str] = []

    if config_path is None:
        config_path = get_default_config_path()

    config_path = config_path.expanduser().resolve()

    if not config_path.exists():
        config = Config()
        warnings.append(
            f"No config file found at {config_path}. Using defaults. "
            f"Create config with: olog init-config"
        )
        config_warnings = config.validate()
        return config, warnings + config_warnings

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(config_path, str(e)) from e

    config = _parse_config_dict(data, config_path)
    config_warnings = config.validate()

    return config, warnings + config_warnings


def _parse_config_dict(data: dict[str, Any], config_path: Path) -> Config:
    """Parse configuration dictionary into Config object."""
    config = Config(config_path=config_path)

    # Parse [store] section
    store = data.get("store", {})
    if "path" in store:
        value = store["path"]
        if not isinstance(value, str):
            raise ConfigValidationError("store.path", value, "must be a string path")
        config.db_path = Path(value)

    # Parse [search] section
    search = data.get("search", {})
    if "default_limit" in search:
        value = search["default_limit"]
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConfigValidationError("search.default_limit", value, "must be an integer")
        config.default_limit = value

    if "timeout" in search:
        value = search["timeout"]
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ConfigValidationError("search.timeout", value, "must be a number of seconds")
        config.search_timeout = float(value)

    # Parse [display] section
    display = data.get("display", {})
    if "colored_output" in display:
        value = display["colored_output"]
        if not isinstance(value, bool):
            raise ConfigValidationError("display.colored_output", value, "must be a boolean")
        config.colored_output = value

    return config


def save_config(config: Config, config_path: Path | None = None) -> None:
    """Save configuration to file.

    Args:
        config: Configuration to save.
        config_path: Path to save to. If None, uses config.config_path or default.
    """
    if config_path is None:
        config_path = config.config_path or get_default_config_path()

    config_path = config_path.expanduser().resolve()

    config_path.parent.mkdir(parents=True, exist_ok=True)

    data: dict[str, Any] = {
        "store": {
            "path": str(config.db_path),
        },
        "display": {
            "colored_output": config.colored_output,
        },
    }

    # Only write [search] keys that differ from the defaults
    search_data: dict[str, Any] = {}
    if config.default_limit is not None:
        search_data["default_limit"] = config.default_limit
    if config.search_timeout is not None:
        search_data["timeout"] = config.search_timeout
    if search_data:
        data["search"] = search_data

    with open(config_path, "wb") as f:
        tomli_w.dump(data, f)
