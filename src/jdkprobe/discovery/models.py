"""Data models for the discovery module.

Contains the hint and candidate types consumed by the probe executor and
the result types it produces: a tagged union of ``IdentityRecord`` (the
runtime answered with its identity) and ``BrokenRecord`` (it did not),
plus the aggregate ``DiscoveryReport``.

All records are frozen. Provenance is attached by building a new record
with ``dataclasses.replace``, never by mutating an emitted one.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Union

from jdkprobe.exceptions import ErrorKind

__all__ = [
    "BrokenRecord",
    "Candidate",
    "DiscoveryReport",
    "DiscoveryResult",
    "ErrorDetail",
    "ErrorKind",
    "IdentityRecord",
    "RawHint",
    "SourceTag",
    "UNKNOWN",
    "sorted_tags",
]

UNKNOWN = "Unknown"


# ---------------------------------------------------------------------------
# Provenance
# ---------------------------------------------------------------------------


class SourceTag(Enum):
    """Hint mechanism that produced a candidate.

    The enum values are the wire names used in serialized reports.
    Declaration order is the priority order used when tags are listed.
    """

    OVERRIDE_HOME = "HMCL_JAVA_HOME"
    JAVA_HOME = "JAVA_HOME"
    PATH_PRIMARY = "PATH_ENV_PRIMARY"
    PATH = "PATH_ENV"


_TAG_ORDER: dict[SourceTag, int] = {tag: i for i, tag in enumerate(SourceTag)}


def sorted_tags(tags: frozenset[SourceTag]) -> list[SourceTag]:
    """Return tags in declaration (priority) order."""
    return sorted(tags, key=_TAG_ORDER.__getitem__)


@dataclass(frozen=True)
class RawHint:
    """A single raw hint emitted by the collector.

    Attributes:
        path: The hint value as found, never normalized. Search-path
            entries are trimmed; single-path variables are kept verbatim.
        tags: Source tags for this hint, in the order they applied.
    """

    path: str
    tags: tuple[SourceTag, ...]


@dataclass(frozen=True)
class Candidate:
    """A unique location to probe, after deduplication.

    Attributes:
        path: Representative raw path (the first-seen form of its group).
        canonical: Normalized grouping key.
        sources: Union of every tag that contributed to the group.
    """

    path: str
    canonical: str
    sources: frozenset[SourceTag] = field(default_factory=frozenset)


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ErrorDetail:
    """Why a probe failed.

    Attributes:
        kind: Enumerated failure class.
        message: Human-readable summary.
        cause: Formatted traceback of the underlying exception, if one was
            captured.
    """

    kind: ErrorKind
    message: str
    cause: str | None = None


@dataclass(frozen=True)
class IdentityRecord:
    """A runtime that answered the probe with its identity.

    ``home`` is the path the runtime reported, which may differ from the
    alias (symlink, ``bin`` directory, PATH entry) that led to it.
    """

    home: str
    version: str
    vendor: str = UNKNOWN
    sources: frozenset[SourceTag] = field(default_factory=frozenset)

    @property
    def is_valid(self) -> bool:
        return True

    @property
    def path(self) -> str:
        return self.home


@dataclass(frozen=True)
class BrokenRecord:
    """A candidate that could not be validated.

    ``path`` is always the original input path of the candidate.
    """

    path: str
    error: ErrorDetail
    sources: frozenset[SourceTag] = field(default_factory=frozenset)

    @property
    def is_valid(self) -> bool:
        return False


DiscoveryResult = Union[IdentityRecord, BrokenRecord]


@dataclass(frozen=True)
class DiscoveryReport:
    """Complete result of a discovery run.

    Attributes:
        inventory: Every probe result, in completion order.
        errors: ``(original path, cause)`` pairs for broken records that
            carried a captured cause.
    """

    inventory: tuple[DiscoveryResult, ...] = ()
    errors: tuple[tuple[str, str], ...] = ()

    @property
    def valid(self) -> list[IdentityRecord]:
        return [r for r in self.inventory if isinstance(r, IdentityRecord)]

    @property
    def broken(self) -> list[BrokenRecord]:
        return [r for r in self.inventory if isinstance(r, BrokenRecord)]
