"""jdkprobe exception hierarchy.

All public exceptions inherit from JdkProbeError, giving callers a single
base class to catch when they want to handle any jdkprobe-specific failure
without swallowing unrelated errors.

Probe failures (``ProbeError`` and subclasses) never escape the probe
executor: they are converted into ``BrokenRecord`` values. The remaining
errors are run-level and may legitimately abort a discovery run.
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(Enum):
    """Why a candidate ended up as a ``BrokenRecord``."""

    EXECUTABLE_NOT_FOUND = "executable_not_found"
    SPAWN_FAILURE = "spawn_failure"
    OUTPUT_EMPTY = "output_empty"
    OUTPUT_UNPARSEABLE = "output_unparseable"
    TIMEOUT = "timeout"


class JdkProbeError(Exception):
    """Base exception for all jdkprobe errors."""


class ProbeError(JdkProbeError):
    """Raised when a single candidate cannot be validated.

    Attributes:
        kind: The ``ErrorKind`` recorded on the resulting ``BrokenRecord``.
    """

    kind: ErrorKind = ErrorKind.OUTPUT_UNPARSEABLE


class ExecutableNotFoundError(ProbeError):
    """Raised when no known executable sub-path exists under a candidate."""

    kind = ErrorKind.EXECUTABLE_NOT_FOUND


class ProbeSpawnError(ProbeError):
    """Raised when the candidate executable cannot be started."""

    kind = ErrorKind.SPAWN_FAILURE


class ProbeOutputEmptyError(ProbeError):
    """Raised when the probed process produced no output at all."""

    kind = ErrorKind.OUTPUT_EMPTY


class ProbeOutputUnparseableError(ProbeError):
    """Raised when probe output carries no decodable identity payload."""

    kind = ErrorKind.OUTPUT_UNPARSEABLE


class ProbeTimeoutError(ProbeError):
    """Raised when the probed process outlives the configured timeout."""

    kind = ErrorKind.TIMEOUT


class SelfPathError(JdkProbeError):
    """Raised when the current program's own location cannot be resolved."""


class ConfigError(JdkProbeError):
    """Raised for unreadable or malformed configuration files.

    Covers YAML syntax errors, non-mapping documents, unknown keys,
    and values of the wrong type.
    """


class ReportError(JdkProbeError):
    """Raised when a discovery report cannot be submitted.

    Covers transport failures, non-success HTTP status codes, and
    responses that do not carry a ``key`` field.
    """
