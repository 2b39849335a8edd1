"""Path canonicalization used to group candidate hints.

The canonical form exists only as a grouping key. Raw hint strings are
always kept alongside it so broken records can report the path the user
actually configured.
"""

from __future__ import annotations

_BIN_SUFFIX = "/bin"


def normalize_path(raw: str) -> str:
    """Return the canonical grouping key for a runtime location.

    Backslashes become forward slashes, surrounding whitespace and
    trailing separators are removed, and a trailing ``bin`` segment
    (any case) is dropped. Stripping repeats until the value is stable,
    so ``normalize_path(normalize_path(p)) == normalize_path(p)``.

    Examples::

        normalize_path("C:\\\\Java\\\\jdk17\\\\BIN\\\\")  # -> "C:/Java/jdk17"
        normalize_path("/usr/lib/jvm/java-17/bin/")    # -> "/usr/lib/jvm/java-17"
    """
    p = raw.replace("\\", "/")
    while True:
        previous = p
        p = p.strip().rstrip("/")
        if p[-len(_BIN_SUFFIX):].lower() == _BIN_SUFFIX:
            p = p[: -len(_BIN_SUFFIX)]
        if p == previous:
            return p
