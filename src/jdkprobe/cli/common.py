"""Options and helpers shared by jdkprobe subcommands."""

from __future__ import annotations

import sys
from pathlib import Path

import click

from jdkprobe.config import DiscoveryConfig, load_config
from jdkprobe.exceptions import ConfigError

config_option = click.option(
    "--config", "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="YAML configuration file.",
)


def load_config_or_exit(path: Path | None) -> DiscoveryConfig:
    """Load configuration, exiting with code 1 on a malformed file."""
    try:
        return load_config(path)
    except ConfigError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)
