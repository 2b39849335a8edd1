"""Lenient decoding of the identity payload printed by a probed runtime.

The probe class prints a single JSON object, but a JVM may emit arbitrary
diagnostics first (``Picked up JAVA_TOOL_OPTIONS``, agent banners, warnings
on stderr, which is merged into the captured stream). Decoding therefore
starts at the first ``{`` and ignores anything after the object closes.

Only the first ``{`` is tried. Output such as ``warn {x} {"home": ...}``
is reported as unparseable rather than scanned for a later object.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

from jdkprobe.discovery.models import UNKNOWN
from jdkprobe.exceptions import ProbeOutputEmptyError, ProbeOutputUnparseableError

# Preferred key first, then the payload's legacy spelling.
_FIELD_ALIASES: dict[str, tuple[str, ...]] = {
    "home": ("home", "java_home"),
    "version": ("version", "java_version"),
    "vendor": ("vendor", "java_vendor"),
}

_RAW_PREVIEW_CHARS = 100

_decoder = json.JSONDecoder()


@dataclass(frozen=True)
class ProbeIdentity:
    """Identity fields reported by a runtime."""

    home: str
    version: str
    vendor: str = UNKNOWN


def _preview(text: str) -> str:
    if len(text) <= _RAW_PREVIEW_CHARS:
        return text
    return f"{text[:_RAW_PREVIEW_CHARS]}..."


def _lookup(data: dict[str, Any], name: str) -> Any:
    for key in _FIELD_ALIASES[name]:
        if key in data:
            return data[key]
    return None


def _required_str(data: dict[str, Any], name: str) -> str:
    value = _lookup(data, name)
    if not isinstance(value, str):
        raise ProbeOutputUnparseableError(
            f"Payload field '{name}' missing or not a string"
        )
    return value


def parse_probe_output(text: str) -> ProbeIdentity:
    """Extract the runtime identity from captured probe output.

    Args:
        text: Combined stdout/stderr of the probe process.

    Returns:
        The decoded ``ProbeIdentity``. ``vendor`` defaults to ``"Unknown"``.

    Raises:
        ProbeOutputEmptyError: If the output is blank.
        ProbeOutputUnparseableError: If no ``{`` exists, the JSON starting
            there does not decode to an object, or ``home``/``version`` are
            missing.
    """
    if not text or not text.strip():
        raise ProbeOutputEmptyError("Process output is empty")

    start = text.find("{")
    if start == -1:
        raise ProbeOutputUnparseableError(
            f"No JSON found in output. Raw: {_preview(text.strip())}"
        )

    try:
        data, _ = _decoder.raw_decode(text, start)
    except json.JSONDecodeError as exc:
        raise ProbeOutputUnparseableError(
            f"Invalid JSON payload: {exc.msg} at char {exc.pos}"
        ) from exc

    vendor = _lookup(data, "vendor")
    return ProbeIdentity(
        home=_required_str(data, "home"),
        version=_required_str(data, "version"),
        vendor=vendor if isinstance(vendor, str) and vendor else UNKNOWN,
    )
