"""jdkprobe: Discover, probe, and inventory Java runtimes installed on a host."""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"
