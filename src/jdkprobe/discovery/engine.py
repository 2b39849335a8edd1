"""Discovery engine: collect, deduplicate, probe concurrently, aggregate.

Discovery Algorithm:
    1. Collect raw hints from the environment (override variable,
       ``JAVA_HOME``, matching search-path entries).
    2. Collapse hints by canonical path, merging their source tags.
    3. Start one probe task per unique candidate, with no cap on
       concurrency.
    4. Join every task. This join is the only synchronization point; no
       partial result is visible before it completes.
    5. Attach each candidate's merged tags to its result and derive the
       error list from broken records.
"""

from __future__ import annotations

import asyncio
import dataclasses
import logging
from collections.abc import Mapping

from jdkprobe.config import DiscoveryConfig
from jdkprobe.discovery.collector import collect_candidates
from jdkprobe.discovery.dedup import deduplicate
from jdkprobe.discovery.models import (
    BrokenRecord,
    Candidate,
    DiscoveryReport,
    DiscoveryResult,
)
from jdkprobe.discovery.probe import ProbeExecutor

logger = logging.getLogger(__name__)


def build_error_list(
    results: list[DiscoveryResult],
) -> list[tuple[str, str]]:
    """Return ``(original path, cause)`` for broken records with a cause."""
    return [
        (r.path, r.error.cause)
        for r in results
        if isinstance(r, BrokenRecord) and r.error.cause is not None
    ]


class DiscoveryEngine:
    """Discovers and validates every Java runtime reachable from hints.

    Args:
        self_path: Location of the identity payload, resolved once by the
            caller (see ``jdkprobe.selfpath``).
        config: Discovery settings. Defaults to ``DiscoveryConfig()``.
        env: Environment mapping to read hints from. Defaults to
            ``os.environ`` at collection time.

    Usage::

        engine = DiscoveryEngine(self_path=resolve_self_path())
        report = await engine.discover()
        for record in report.valid:
            print(record.home, record.version)
    """

    def __init__(
        self,
        self_path: str,
        config: DiscoveryConfig | None = None,
        env: Mapping[str, str] | None = None,
    ) -> None:
        self._config = config or DiscoveryConfig()
        self._env = env
        self._executor = ProbeExecutor(self_path, self._config)

    def candidates(self) -> list[Candidate]:
        """Collect and deduplicate hints without probing anything."""
        return deduplicate(collect_candidates(self._env, self._config))

    async def _probe_tagged(self, candidate: Candidate) -> DiscoveryResult:
        result = await self._executor.probe(candidate)
        return dataclasses.replace(result, sources=candidate.sources)

    async def discover(self) -> DiscoveryReport:
        """Run a full discovery pass.

        Returns:
            A ``DiscoveryReport`` holding every result in completion order
            and the derived error list. Never raises for per-candidate
            failures.
        """
        candidates = self.candidates()
        if not candidates:
            logger.info("No Java hints configured")
            return DiscoveryReport()

        logger.debug("Probing %d candidate(s)", len(candidates))
        completed: list[DiscoveryResult] = []

        async def run(candidate: Candidate) -> None:
            completed.append(await self._probe_tagged(candidate))

        await asyncio.gather(*(run(c) for c in candidates))

        logger.info(
            "Discovery finished: %d valid, %d broken",
            sum(1 for r in completed if r.is_valid),
            sum(1 for r in completed if not r.is_valid),
        )
        return DiscoveryReport(
            inventory=tuple(completed),
            errors=tuple(build_error_list(completed)),
        )


def discover_runtimes(
    self_path: str,
    config: DiscoveryConfig | None = None,
    env: Mapping[str, str] | None = None,
) -> DiscoveryReport:
    """Synchronous wrapper around ``DiscoveryEngine.discover``."""
    engine = DiscoveryEngine(self_path, config=config, env=env)
    return asyncio.run(engine.discover())
