"""Resolve the location of the running program.

The identity payload ships inside the launcher itself, so the probed JVM
is pointed at the launcher's own file as its class path. The location is
resolved once per run and passed explicitly to the discovery engine.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from jdkprobe.exceptions import SelfPathError

# Overrides the resolved location, e.g. to point at a standalone probe jar.
CLASSPATH_ENV_VAR = "JDKPROBE_CLASSPATH"

_ARCHIVE_SUFFIXES = (".jar", ".zip")


def resolve_self_path(argv0: str | None = None) -> str:
    """Return the absolute path of the running program.

    Resolution order: the ``JDKPROBE_CLASSPATH`` environment variable,
    then ``argv0`` (``sys.argv[0]`` by default), then ``sys.executable``.

    Raises:
        SelfPathError: If no candidate location exists on disk.
    """
    override = os.environ.get(CLASSPATH_ENV_VAR, "").strip()
    if override:
        return override

    tried: list[str] = []
    for raw in (argv0 if argv0 is not None else sys.argv[0], sys.executable):
        if not raw:
            continue
        tried.append(raw)
        try:
            path = Path(raw).resolve()
            if path.exists():
                return str(path)
        except OSError:
            continue
    raise SelfPathError(
        "Failed to resolve executable path (tried: "
        f"{', '.join(tried) or 'nothing'})"
    )


def is_loadable_classpath(path: str) -> bool:
    """Return True when a JVM could load classes from ``path``.

    Only archives (``.jar``, ``.zip``) and directories qualify. A Python
    entry-point script does not, so probes run against it cannot answer.
    """
    location = Path(path)
    if location.suffix.lower() in _ARCHIVE_SUFFIXES:
        return True
    try:
        return location.is_dir()
    except OSError:
        return False
