"""Discovery configuration.

``DiscoveryConfig`` carries every knob the discovery engine reads: which
environment variables hold hints, which PATH entries look like Java
installations, where the executable lives under a candidate root, and
how the probe payload is invoked. Defaults reproduce a stock discovery
run, so a configuration file is optional.

Configuration files are YAML mappings whose keys mirror the dataclass
fields::

    override_home_var: HMCL_JAVA_HOME
    path_tokens: [java, jdk, jre, zulu]
    timeout: 5
"""

from __future__ import annotations

import dataclasses
import logging
import os
import platform
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from jdkprobe.exceptions import ConfigError

logger = logging.getLogger(__name__)

# Case-insensitive substrings that mark a PATH entry as a Java location.
DEFAULT_PATH_TOKENS: tuple[str, ...] = (
    "java",
    "jdk",
    "jre",
    "zulu",
    "temurin",
    "corretto",
    "graalvm",
    "liberica",
    "semeru",
)

DEFAULT_TIMEOUT: float = 10.0

WINDOWS_EXECUTABLE_SUBPATHS: tuple[str, ...] = ("bin/java.exe", "java.exe")
POSIX_EXECUTABLE_SUBPATHS: tuple[str, ...] = ("bin/java", "java")


def default_executable_subpaths() -> tuple[str, ...]:
    """Return the ordered executable sub-paths for the current platform."""
    if platform.system().lower() == "windows":
        return WINDOWS_EXECUTABLE_SUBPATHS
    return POSIX_EXECUTABLE_SUBPATHS


_TUPLE_FIELDS = frozenset({"path_tokens", "executable_subpaths"})


@dataclass(frozen=True)
class DiscoveryConfig:
    """Settings for a discovery run.

    Attributes:
        override_home_var: Highest-priority single-path hint variable.
        java_home_var: Standard Java home variable.
        path_var: Search-path list variable.
        path_separator: Separator between search-path entries.
        path_tokens: Lowercase substrings that select search-path entries.
        executable_subpaths: Ordered executable locations relative to a
            candidate root; the first existing one is used.
        main_class: Class the probe payload runs inside the candidate JVM.
        timeout: Seconds before a probe is killed. ``None`` or ``0``
            disables the limit.
        report_url: Default collector endpoint for ``scan --upload``.
    """

    override_home_var: str = "HMCL_JAVA_HOME"
    java_home_var: str = "JAVA_HOME"
    path_var: str = "PATH"
    path_separator: str = os.pathsep
    path_tokens: tuple[str, ...] = DEFAULT_PATH_TOKENS
    executable_subpaths: tuple[str, ...] = field(
        default_factory=default_executable_subpaths,
    )
    main_class: str = "Main"
    timeout: float | None = DEFAULT_TIMEOUT
    report_url: str | None = None

    @property
    def effective_timeout(self) -> float | None:
        """Timeout in seconds, or ``None`` when probes may run forever."""
        if not self.timeout:
            return None
        return float(self.timeout)

    def with_overrides(self, **overrides: Any) -> DiscoveryConfig:
        """Return a copy with every non-``None`` override applied."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        if not changes:
            return self
        return _build(self, changes)


def _field_names() -> set[str]:
    return {f.name for f in dataclasses.fields(DiscoveryConfig)}


def _coerce(name: str, value: Any) -> Any:
    """Validate and coerce one raw config value."""
    if name in _TUPLE_FIELDS:
        if isinstance(value, str) or not isinstance(value, (list, tuple)):
            raise ConfigError(f"{name} must be a list of strings")
        if not all(isinstance(v, str) for v in value):
            raise ConfigError(f"{name} must be a list of strings")
        if name == "path_tokens":
            return tuple(v.lower() for v in value)
        return tuple(value)
    if name == "timeout":
        if value is None:
            return None
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ConfigError("timeout must be a number of seconds")
        if value < 0:
            raise ConfigError("timeout must not be negative")
        return float(value)
    if name == "report_url":
        if value is not None and not isinstance(value, str):
            raise ConfigError("report_url must be a string")
        return value
    if not isinstance(value, str) or not value:
        raise ConfigError(f"{name} must be a non-empty string")
    return value


def _build(base: DiscoveryConfig, raw: dict[str, Any]) -> DiscoveryConfig:
    unknown = set(raw) - _field_names()
    if unknown:
        raise ConfigError(
            f"Unknown configuration key(s): {', '.join(sorted(unknown))}"
        )
    changes = {name: _coerce(name, value) for name, value in raw.items()}
    return dataclasses.replace(base, **changes)


def load_config(path: Path | None = None) -> DiscoveryConfig:
    """Load a configuration file, falling back to defaults.

    Args:
        path: YAML file to read. ``None`` returns the defaults.

    Returns:
        The merged ``DiscoveryConfig``.

    Raises:
        ConfigError: If the file cannot be read, is not valid YAML, is not
            a mapping, or contains unknown keys or badly typed values.
    """
    if path is None:
        return DiscoveryConfig()
    try:
        raw = path.read_text(encoding="utf-8")
        data = yaml.safe_load(raw)
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"Cannot read config {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"Malformed YAML in {path}: {exc}") from exc

    if data is None:
        logger.debug("Config %s is empty, using defaults", path)
        return DiscoveryConfig()
    if not isinstance(data, dict):
        raise ConfigError(f"Config {path} must contain a mapping")
    return _build(DiscoveryConfig(), data)
