"""Shared test helpers for creating fake Java installations.

Each helper creates a minimal directory that looks like a JDK to the probe
executor: an executable ``java`` shell script that prints whatever the
test wants the JVM to report. Scripts only use shell builtins so they run
even when a test narrows ``PATH`` to the fake installations.
"""

from __future__ import annotations

import json
import stat
from pathlib import Path


def _quote(text: str) -> str:
    return "'" + text.replace("'", "'\\''") + "'"


def write_java_script(executable: Path, body: str) -> Path:
    """Write an executable ``#!/bin/sh`` script at ``executable``."""
    executable.parent.mkdir(parents=True, exist_ok=True)
    executable.write_text("#!/bin/sh\n" + body + "\n")
    executable.chmod(executable.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP)
    return executable


def printing_script(output: str, *, stderr: bool = False) -> str:
    """Script body that prints ``output`` verbatim and exits."""
    redirect = " >&2" if stderr else ""
    return f"printf '%s\\n' {_quote(output)}{redirect}"


def identity_json(
    home: str,
    version: str = "17.0.1",
    vendor: str | None = "Eclipse Adoptium",
    **extra: str,
) -> str:
    """Build the JSON document a probe payload prints."""
    data: dict[str, str] = {"home": home, "version": version}
    if vendor is not None:
        data["vendor"] = vendor
    data.update(extra)
    return json.dumps(data)


def create_java_home(
    root: Path,
    *,
    version: str = "17.0.1",
    vendor: str | None = "Eclipse Adoptium",
    reported_home: str | None = None,
    noise: str = "",
    layout: str = "bin",
) -> Path:
    """Create a fake JDK whose ``java`` reports a valid identity.

    Args:
        root: Installation root to create.
        version: Version the fake JVM reports.
        vendor: Vendor it reports (omitted from the payload when None).
        reported_home: Home it reports; defaults to ``root``.
        noise: Text printed before the JSON payload.
        layout: ``"bin"`` for ``root/bin/java``, ``"flat"`` for ``root/java``.

    Returns:
        The installation root.
    """
    home = reported_home if reported_home is not None else str(root)
    payload = noise + identity_json(home, version, vendor)
    executable = root / "bin" / "java" if layout == "bin" else root / "java"
    write_java_script(executable, printing_script(payload))
    return root


def create_silent_java_home(root: Path) -> Path:
    """Create a fake JDK whose ``java`` prints nothing."""
    write_java_script(root / "bin" / "java", "exit 0")
    return root


def create_garbage_java_home(root: Path, output: str = "Error: no main class") -> Path:
    """Create a fake JDK whose ``java`` prints non-JSON text on stderr."""
    write_java_script(root / "bin" / "java", printing_script(output, stderr=True))
    return root


def create_hanging_java_home(root: Path, pid_file: Path | None = None) -> Path:
    """Create a fake JDK whose ``java`` never exits on its own.

    When ``pid_file`` is given the script records its process id there
    before it starts sleeping.
    """
    record = f"echo $$ > {_quote(str(pid_file))}\n" if pid_file is not None else ""
    write_java_script(root / "bin" / "java", record + "exec /bin/sleep 30")
    return root


def create_forking_java_home(root: Path, linger: int = 3) -> Path:
    """Create a fake JDK that prints a valid identity and exits while a
    background child keeps the output pipe open for ``linger`` seconds.
    """
    body = printing_script(identity_json(str(root))) + f"\n/bin/sleep {linger} &\nexit 0"
    write_java_script(root / "bin" / "java", body)
    return root


def create_non_executable_java_home(root: Path) -> Path:
    """Create a JDK layout whose ``java`` exists but cannot be executed."""
    executable = root / "bin" / "java"
    executable.parent.mkdir(parents=True, exist_ok=True)
    executable.write_text("not a program\n")
    executable.chmod(0o644)
    return root
