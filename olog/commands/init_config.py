"""Initialize configuration file for olog."""

from __future__ import annotations

from importlib import resources
from pathlib import Path

import click

from olog.cli import Context, pass_context
from olog.config import get_default_config_path
from olog.utils.fileops import secure_mkdir
from olog.utils.output import error, info, success


def _load_example_config() -> str:
    """Load the example configuration from package data."""
    return resources.files("olog").joinpath("config.example.toml").read_text()


@click.command("init-config")
@click.option(
    "--force",
    "-f",
    is_flag=True,
    default=False,
    help="Overwrite existing config file",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(path_type=Path),
    default=None,
    help="Output path for config file (default: ~/.config/olog/config.toml)",
)
@pass_context
def cli(ctx: Context, force: bool, output: Path | None) -> None:
    """Create a new configuration file with default settings.

    Creates a configuration file at the default location
    (~/.config/olog/config.toml) or at a custom path specified
    with --output.

    Examples:

    \b
      # Create config at default location
      olog init-config

    \b
      # Overwrite existing config
      olog init-config --force
    """
    # Determine output path
    config_path = output if output is not None else get_default_config_path()
    config_path = config_path.expanduser().resolve()

    # Check if file already exists
    if config_path.exists() and not force:
        error(
            f"Config file already exists: {config_path}",
            hint="Use --force to overwrite",
        )
        raise SystemExit(1)

    # Ensure parent directory exists with owner-only permissions
    secure_mkdir(config_path.parent)

    config_content = _load_example_config()

    try:
        config_path.write_text(config_content)
        config_path.chmod(0o600)
    except OSError as e:
        error(f"Failed to write config file: {e}")
        raise SystemExit(1)

    success(f"Created config file: {config_path}")
    info("Edit this file to customize your settings.")
