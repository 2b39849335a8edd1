"""``jdkprobe candidates`` -- List deduplicated hints without probing.

Shows which locations a ``scan`` would probe and which hint sources
contributed to each. Nothing is executed.

Exit Codes:
    0 -- Always (informational command).
"""

from __future__ import annotations

import json
from pathlib import Path

import click

from jdkprobe.cli.common import config_option, load_config_or_exit
from jdkprobe.discovery import collect_candidates, deduplicate


@click.command("candidates")
@config_option
@click.option(
    "--format", "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format: text (default) or json.",
)
def candidates_command(config_path: Path | None, output_format: str) -> None:
    """List the runtime locations found in the environment."""
    from jdkprobe.cli.output import candidates_to_json, print_candidates

    config = load_config_or_exit(config_path)
    candidates = deduplicate(collect_candidates(config=config))
    if output_format == "json":
        click.echo(json.dumps(candidates_to_json(candidates), indent=2))
    else:
        print_candidates(candidates)
