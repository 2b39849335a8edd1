"""Java runtime discovery and validation.

Collects runtime hints from the environment, collapses them by canonical
path, runs each unique candidate to obtain its self-reported identity, and
aggregates the outcomes with provenance.

Public API::

    from jdkprobe.discovery import DiscoveryEngine

    engine = DiscoveryEngine(self_path="/opt/launcher/probe.jar")
    report = asyncio.run(engine.discover())
    for record in report.valid:
        print(f"{record.vendor} {record.version}: {record.home}")
"""

from __future__ import annotations

from jdkprobe.discovery.collector import collect_candidates
from jdkprobe.discovery.dedup import deduplicate
from jdkprobe.discovery.engine import DiscoveryEngine, discover_runtimes
from jdkprobe.discovery.models import (
    BrokenRecord,
    Candidate,
    DiscoveryReport,
    DiscoveryResult,
    ErrorDetail,
    ErrorKind,
    IdentityRecord,
    RawHint,
    SourceTag,
)
from jdkprobe.discovery.paths import normalize_path
from jdkprobe.discovery.payload import ProbeIdentity, parse_probe_output
from jdkprobe.discovery.probe import ProbeExecutor

__all__ = [
    "BrokenRecord",
    "Candidate",
    "DiscoveryEngine",
    "DiscoveryReport",
    "DiscoveryResult",
    "ErrorDetail",
    "ErrorKind",
    "IdentityRecord",
    "ProbeExecutor",
    "ProbeIdentity",
    "RawHint",
    "SourceTag",
    "collect_candidates",
    "deduplicate",
    "discover_runtimes",
    "normalize_path",
    "parse_probe_output",
]
