"""Unit tests for configuration."""

from pathlib import Path

import pytest

from olog.config import Config, load_config, save_config
from olog.exceptions import ConfigParseError, ConfigValidationError


def test_default_config() -> None:
    """Test that default config has sensible values."""
    config = Config()
    assert config.colored_output is True
    assert config.default_limit is None
    assert config.search_timeout is None
    assert config.db_path.name == "olog.db"


def test_load_missing_config(temp_dir: Path) -> None:
    """Test loading when config file doesn't exist."""
    config_path = temp_dir / "nonexistent.toml"
    config, warnings = load_config(config_path)

    assert config is not None
    assert config.config_path is None
    assert any("No config file found" in w for w in warnings)


def test_load_valid_config(sample_config: Path, temp_dir: Path) -> None:
    """Test loading a valid config file."""
    config, warnings = load_config(sample_config)

    assert config.db_path == (temp_dir / "olog.db").resolve()
    assert config.search_timeout == 30.0
    assert config.colored_output is False
    assert config.config_path == sample_config.resolve()


def test_missing_store_is_a_warning(sample_config: Path) -> None:
    """The store is created on first use, so only warn."""
    _, warnings = load_config(sample_config)
    assert any("Log store not found" in w for w in warnings)


def test_existing_store_no_warning(sample_config: Path, seeded_db: Path) -> None:
    _, warnings = load_config(sample_config)
    assert warnings == []


def test_load_invalid_toml(temp_dir: Path) -> None:
    """Test loading invalid TOML raises error."""
    config_path = temp_dir / "invalid.toml"
    config_path.write_text("this is not valid [ toml")

    with pytest.raises(ConfigParseError):
        load_config(config_path)


def test_config_validation_invalid_type(temp_dir: Path) -> None:
    """Test that invalid types raise validation error."""
    config_path = temp_dir / "bad_types.toml"
    config_path.write_text("""[display]
colored_output = "not a boolean"
""")

    with pytest.raises(ConfigValidationError):
        load_config(config_path)


def test_default_limit_must_be_integer(temp_dir: Path) -> None:
    config_path = temp_dir / "bad_limit.toml"
    config_path.write_text("""[search]
default_limit = true
""")

    with pytest.raises(ConfigValidationError) as exc_info:
        load_config(config_path)
    assert exc_info.value.key == "search.default_limit"


def test_default_limit_must_be_positive(temp_dir: Path) -> None:
    config_path = temp_dir / "zero_limit.toml"
    config_path.write_text("""[search]
default_limit = 0
""")

    with pytest.raises(ConfigValidationError):
        load_config(config_path)


def test_timeout_must_be_positive(temp_dir: Path) -> None:
    config_path = temp_dir / "bad_timeout.toml"
    config_path.write_text("""[search]
timeout = -1
""")

    with pytest.raises(ConfigValidationError) as exc_info:
        load_config(config_path)
    assert exc_info.value.key == "search.timeout"


def test_config_path_expansion() -> None:
    """Test that paths are expanded."""
    config = Config(db_path=Path("~/olog.db"))
    config.validate()

    assert "~" not in str(config.db_path)


def test_save_and_reload(temp_dir: Path) -> None:
    config = Config(
        db_path=temp_dir / "store.db",
        default_limit=25,
        search_timeout=5.0,
        colored_output=False,
    )
    config_path = temp_dir / "saved" / "config.toml"
    save_config(config, config_path)

    loaded, _ = load_config(config_path)
    assert loaded.db_path == (temp_dir / "store.db").resolve()
    assert loaded.default_limit == 25
    assert loaded.search_timeout == 5.0
    assert loaded.colored_output is False


def test_save_omits_unset_search_options(temp_dir: Path) -> None:
    config_path = temp_dir / "config.toml"
    save_config(Config(db_path=temp_dir / "store.db"), config_path)
    assert "[search]" not in config_path.read_text()
