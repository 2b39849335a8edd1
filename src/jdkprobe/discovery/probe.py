"""Validate a candidate by running it and reading back its identity.

For each candidate the executor:

    1. Locates a Java executable under the candidate root, trying each
       configured sub-path in order (``bin/java`` before ``java``).
    2. Spawns it as ``java -cp <self path> <main class>`` so the JVM runs
       the bundled identity payload.
    3. Captures the combined stdout/stderr until the process exits,
       killing it if it outlives the configured timeout. A pipe left open
       by a background child does not delay the result.
    4. Decodes the identity with ``parse_probe_output``.

Every failure is converted into a ``BrokenRecord`` that names the
candidate's original path. Nothing raised while probing one candidate
escapes ``ProbeExecutor.probe``, so a broken installation never takes
down its siblings.
"""

from __future__ import annotations

import asyncio
import logging
import traceback
from collections.abc import AsyncIterator, Sequence
from contextlib import asynccontextmanager, suppress
from pathlib import Path

from jdkprobe.config import DiscoveryConfig
from jdkprobe.discovery.models import (
    BrokenRecord,
    Candidate,
    DiscoveryResult,
    ErrorDetail,
    ErrorKind,
    IdentityRecord,
)
from jdkprobe.discovery.payload import parse_probe_output
from jdkprobe.exceptions import (
    ExecutableNotFoundError,
    ProbeError,
    ProbeSpawnError,
    ProbeTimeoutError,
)

logger = logging.getLogger(__name__)

_EXIT_POLL_INTERVAL = 0.02
_DRAIN_GRACE = 0.5
_READ_CHUNK = 64 * 1024


def locate_executable(root: str, subpaths: Sequence[str]) -> Path | None:
    """Return the first existing executable under ``root``, if any."""
    base = Path(root)
    for rel in subpaths:
        candidate = base / rel
        try:
            if candidate.exists():
                return candidate
        except (PermissionError, OSError):
            continue
    return None


def _format_cause(exc: BaseException) -> str:
    return "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))


def _broken(path: str, kind: ErrorKind, exc: BaseException) -> BrokenRecord:
    return BrokenRecord(
        path=path,
        error=ErrorDetail(kind=kind, message=str(exc), cause=_format_cause(exc)),
    )


@asynccontextmanager
async def spawned_process(
    argv: Sequence[str],
) -> AsyncIterator[asyncio.subprocess.Process]:
    """Start ``argv`` with stderr merged into stdout.

    The process is reaped when the block exits, and killed first if it is
    still running, whether the block completed or raised.

    Raises:
        ProbeSpawnError: If the executable cannot be started.
    """
    try:
        process = await asyncio.create_subprocess_exec(
            *argv,
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.STDOUT,
        )
    except OSError as exc:
        raise ProbeSpawnError(f"Failed to start {argv[0]}: {exc}") from exc

    try:
        yield process
    finally:
        if process.returncode is None:
            with suppress(ProcessLookupError):
                process.kill()
            await _wait_for_exit(process)


async def _wait_for_exit(process: asyncio.subprocess.Process) -> int:
    # Process.wait() also waits for the output pipe to close on some
    # interpreters, and a background child of the JVM may hold it open.
    while process.returncode is None:
        await asyncio.sleep(_EXIT_POLL_INTERVAL)
    return process.returncode


async def _drain(stream: asyncio.StreamReader, sink: bytearray) -> None:
    while True:
        chunk = await stream.read(_READ_CHUNK)
        if not chunk:
            return
        sink.extend(chunk)


async def _read_to_exit(process: asyncio.subprocess.Process) -> str:
    """Collect output until the process exits.

    Output still in the pipe is read for up to ``_DRAIN_GRACE`` seconds
    after exit. Anything written later, by a child that inherited the
    pipe, is ignored.
    """
    assert process.stdout is not None
    output = bytearray()
    reader = asyncio.ensure_future(_drain(process.stdout, output))
    try:
        await _wait_for_exit(process)
        try:
            await asyncio.wait_for(reader, _DRAIN_GRACE)
        except asyncio.TimeoutError:
            logger.debug("Output pipe of pid %s still open after exit", process.pid)
    finally:
        reader.cancel()
    return bytes(output).decode("utf-8", errors="replace").strip()


class ProbeExecutor:
    """Runs one identity probe per candidate.

    The executor holds no per-probe state, so any number of ``probe``
    coroutines may run concurrently on the same instance.

    Usage::

        executor = ProbeExecutor(self_path="/opt/launcher/probe.jar")
        result = await executor.probe(candidate)
    """

    def __init__(
        self,
        self_path: str,
        config: DiscoveryConfig | None = None,
    ) -> None:
        self._self_path = self_path
        self._config = config or DiscoveryConfig()

    def build_command(self, executable: Path) -> list[str]:
        """Return the argv that makes ``executable`` run the identity payload."""
        return [str(executable), "-cp", self._self_path, self._config.main_class]

    async def probe(self, candidate: Candidate) -> DiscoveryResult:
        """Probe one candidate, converting every failure into data.

        Args:
            candidate: The deduplicated candidate to validate.

        Returns:
            An ``IdentityRecord`` carrying the runtime-reported home, or a
            ``BrokenRecord`` carrying ``candidate.path``. Source tags are
            left empty for the caller to attach.
        """
        try:
            return await self._identify(candidate.path)
        except ProbeError as exc:
            logger.warning("Probe failed for %s: %s", candidate.path, exc)
            return _broken(candidate.path, exc.kind, exc)
        except Exception as exc:
            logger.warning(
                "Unexpected error probing %s", candidate.path, exc_info=True,
            )
            kind = (
                ErrorKind.SPAWN_FAILURE
                if isinstance(exc, OSError)
                else ErrorKind.OUTPUT_UNPARSEABLE
            )
            return _broken(candidate.path, kind, exc)

    async def _identify(self, path: str) -> IdentityRecord:
        subpaths = self._config.executable_subpaths
        executable = locate_executable(path, subpaths)
        if executable is None:
            raise ExecutableNotFoundError(
                f"Executable not found (checked {' and '.join(subpaths)})"
            )

        argv = self.build_command(executable)
        logger.debug("Probing %s with %s", path, argv)
        output = await self._run(argv)
        identity = parse_probe_output(output)
        logger.debug(
            "Identified %s as %s %s at %s",
            path, identity.vendor, identity.version, identity.home,
        )
        return IdentityRecord(
            home=identity.home,
            version=identity.version,
            vendor=identity.vendor,
        )

    async def _run(self, argv: Sequence[str]) -> str:
        timeout = self._config.effective_timeout
        async with spawned_process(argv) as process:
            try:
                return await asyncio.wait_for(_read_to_exit(process), timeout)
            except asyncio.TimeoutError as exc:
                raise ProbeTimeoutError(
                    f"Probe did not exit within {timeout:g}s"
                ) from exc
