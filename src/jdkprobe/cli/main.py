"""jdkprobe CLI -- Discover and validate installed Java runtimes.

Entry point for the ``jdkprobe`` command-line tool. Registers all
subcommands under a single Click group.

Commands:
    scan        -- Probe every Java hint and print the inventory.
    candidates  -- List deduplicated hints without probing.

Usage::

    jdkprobe scan
    jdkprobe scan --format json --timeout 5
    jdkprobe scan --upload https://collector.example.com/
    jdkprobe candidates
    jdkprobe -v scan --config jdkprobe.yaml
"""

from __future__ import annotations

import logging

import click
from rich.console import Console
from rich.logging import RichHandler

from jdkprobe import __version__
from jdkprobe.cli.candidates_cmd import candidates_command
from jdkprobe.cli.scan import scan_command


def _configure_logging(verbose: bool) -> None:
    """Route jdkprobe logs to stderr through Rich."""
    handler = RichHandler(console=Console(stderr=True), show_path=False)
    root = logging.getLogger("jdkprobe")
    root.handlers[:] = [handler]
    root.setLevel(logging.DEBUG if verbose else logging.WARNING)


@click.group()
@click.version_option(version=__version__)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    default=False,
    help="Log each probe to stderr.",
)
def cli(verbose: bool) -> None:
    """jdkprobe: Discover and validate installed Java runtimes.

    Finds Java installations from HMCL_JAVA_HOME, JAVA_HOME and PATH,
    runs each one to confirm its identity, and reports valid and broken
    installations with the hints that led to them.
    """
    _configure_logging(verbose)


# Register all subcommands
cli.add_command(scan_command)
cli.add_command(candidates_command)
