"""Collect raw runtime hints from the process environment.

Three hint sources are read, highest priority first:

    1. The override variable (``HMCL_JAVA_HOME`` by default).
    2. The standard ``JAVA_HOME`` variable.
    3. The search-path list, filtered to entries that mention a Java
       token. The first matching entry is tagged ``PATH_PRIMARY``,
       later matches ``PATH``.

A missing or blank hint is a normal condition and is skipped silently.
No filesystem access happens here; existence is the probe's business.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping

from jdkprobe.config import DiscoveryConfig
from jdkprobe.discovery.models import RawHint, SourceTag

logger = logging.getLogger(__name__)


def _get_env(env: Mapping[str, str], key: str) -> str | None:
    """Return an environment value as set, or None when blank or unset."""
    value = env.get(key)
    if value is None or not value.strip():
        return None
    return value


def _matches_tokens(entry: str, tokens: tuple[str, ...]) -> bool:
    lower = entry.lower()
    return any(token in lower for token in tokens)


def collect_path_hints(
    value: str | None,
    separator: str,
    tokens: tuple[str, ...],
) -> list[RawHint]:
    """Split a search-path list into tagged Java hints.

    Args:
        value: Raw search-path variable value (may be None).
        separator: Entry separator (``;`` on Windows, ``:`` elsewhere).
        tokens: Lowercase substrings that mark an entry as relevant.

    Returns:
        Matching entries in their original order.
    """
    if not value:
        return []
    hints: list[RawHint] = []
    for entry in value.split(separator):
        trimmed = entry.strip()
        if not trimmed or not _matches_tokens(trimmed, tokens):
            continue
        tag = SourceTag.PATH_PRIMARY if not hints else SourceTag.PATH
        hints.append(RawHint(path=trimmed, tags=(tag,)))
    return hints


def collect_candidates(
    env: Mapping[str, str] | None = None,
    config: DiscoveryConfig | None = None,
) -> list[RawHint]:
    """Gather every raw hint in priority order.

    Args:
        env: Environment mapping to read. Defaults to ``os.environ``.
        config: Variable names and PATH tokens. Defaults to
            ``DiscoveryConfig()``.

    Returns:
        Ordered list of ``RawHint``; empty when no hint is configured.
    """
    env = os.environ if env is None else env
    config = config or DiscoveryConfig()
    hints: list[RawHint] = []

    override = _get_env(env, config.override_home_var)
    if override is not None:
        hints.append(RawHint(path=override, tags=(SourceTag.OVERRIDE_HOME,)))

    java_home = _get_env(env, config.java_home_var)
    if java_home is not None:
        hints.append(RawHint(path=java_home, tags=(SourceTag.JAVA_HOME,)))

    hints.extend(
        collect_path_hints(
            env.get(config.path_var),
            config.path_separator,
            config.path_tokens,
        )
    )
    logger.debug("Collected %d raw hint(s)", len(hints))
    return hints
