"""``jdkprobe scan`` -- Discover and validate Java runtimes on this host.

Collects hints from the environment, probes every unique candidate
concurrently, and prints the inventory. With ``--upload`` the report is
also submitted to a collector and the returned key is printed.

Exit Codes:
    0 -- At least one valid runtime was found.
    1 -- Configuration, self-path, or upload failure.
    2 -- No valid runtime was found (including when no hints exist).
"""

from __future__ import annotations

import asyncio
import json
import logging
import sys
from pathlib import Path

import click

from jdkprobe.cli.common import config_option, load_config_or_exit
from jdkprobe.discovery import DiscoveryEngine, DiscoveryReport
from jdkprobe.exceptions import ReportError, SelfPathError
from jdkprobe.report import report_to_dict, submit_report
from jdkprobe.selfpath import (
    CLASSPATH_ENV_VAR,
    is_loadable_classpath,
    resolve_self_path,
)

logger = logging.getLogger(__name__)

# Value of a bare --upload: use report_url from the config file.
_CONFIGURED_URL = "@config"


def _resolve_classpath(classpath: str | None, main_class: str) -> str:
    if not classpath:
        try:
            classpath = resolve_self_path()
        except SelfPathError as exc:
            click.echo(f"Error: {exc}", err=True)
            sys.exit(1)
    if not is_loadable_classpath(classpath):
        logger.warning(
            "Class path %s is not a .jar archive or directory; runtimes "
            "cannot load %s from it. Use --classpath or %s.",
            classpath, main_class, CLASSPATH_ENV_VAR,
        )
    return classpath


def _upload(report: DiscoveryReport, url: str, output_format: str) -> None:
    """Submit the report and print the collector's key."""
    try:
        key = asyncio.run(submit_report(report, url))
    except ReportError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)
    if output_format == "json":
        click.echo(f"Report key: {key}", err=True)
    else:
        click.echo(f"Report key: {key}")


@click.command("scan")
@config_option
@click.option(
    "--format", "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format: text (default) or json.",
)
@click.option(
    "--timeout",
    type=click.FloatRange(min=0),
    default=None,
    help="Seconds before a probe is killed (0 disables the limit).",
)
@click.option(
    "--classpath",
    default=None,
    help="Location of the identity payload (defaults to this program).",
)
@click.option(
    "--upload", "upload_url",
    is_flag=False,
    flag_value=_CONFIGURED_URL,
    default=None,
    metavar="[URL]",
    help="Submit the report to URL (or the configured report_url).",
)
def scan_command(
    config_path: Path | None,
    output_format: str,
    timeout: float | None,
    classpath: str | None,
    upload_url: str | None,
) -> None:
    """Discover every Java runtime reachable from the environment.

    Reads HMCL_JAVA_HOME, JAVA_HOME and matching PATH entries, runs each
    unique candidate to obtain its self-reported identity, and reports
    valid and broken installations side by side.
    """
    config = load_config_or_exit(config_path).with_overrides(timeout=timeout)

    url: str | None = None
    if upload_url is not None:
        url = config.report_url if upload_url == _CONFIGURED_URL else upload_url
        if not url:
            raise click.UsageError(
                "--upload needs a URL or a report_url in the config file"
            )

    self_path = _resolve_classpath(classpath, config.main_class)
    engine = DiscoveryEngine(self_path, config)
    report = asyncio.run(engine.discover())

    if output_format == "json":
        click.echo(json.dumps(report_to_dict(report), indent=2))
    else:
        from jdkprobe.cli.output import print_report
        print_report(report)

    if url is not None:
        _upload(report, url, output_format)

    sys.exit(0 if report.valid else 2)
