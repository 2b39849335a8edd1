"""Group raw hints into unique probe candidates.

Hints that normalize to the same canonical path collapse into a single
``Candidate``. The candidate keeps the first-seen raw form of its group,
so error messages name the path exactly as the highest-priority hint
spelled it, and carries the union of every contributing tag.
"""

from __future__ import annotations

from collections.abc import Iterable

from jdkprobe.discovery.models import Candidate, RawHint, SourceTag
from jdkprobe.discovery.paths import normalize_path


def deduplicate(hints: Iterable[RawHint]) -> list[Candidate]:
    """Collapse hints by canonical path.

    Args:
        hints: Raw hints in priority order.

    Returns:
        One candidate per canonical path, ordered by first appearance.
    """
    representatives: dict[str, str] = {}
    tags: dict[str, set[SourceTag]] = {}
    for hint in hints:
        key = normalize_path(hint.path)
        if key not in representatives:
            representatives[key] = hint.path
            tags[key] = set()
        tags[key].update(hint.tags)

    return [
        Candidate(path=raw, canonical=key, sources=frozenset(tags[key]))
        for key, raw in representatives.items()
    ]
