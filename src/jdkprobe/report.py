"""Serialize discovery reports and submit them to a collector endpoint.

The wire format is a JSON document::

    {
        "javaInfoList": [
            {"path": "...", "version": "17.0.1", "vendor": "Eclipse Adoptium",
             "sources": ["JAVA_HOME"], "isBroken": false},
            ...
        ],
        "errors": [["C:\\\\broken\\\\jdk", "Traceback ..."]]
    }

The collector receives that document URL-encoded as a ``text/plain`` body
and answers ``{"key": "..."}``. Submission failures raise ``ReportError``;
discovery itself never depends on them.
"""

from __future__ import annotations

import json
import logging
from typing import Any
from urllib.parse import quote

import httpx

from jdkprobe import __version__
from jdkprobe.discovery.models import (
    UNKNOWN,
    BrokenRecord,
    DiscoveryReport,
    DiscoveryResult,
    sorted_tags,
)
from jdkprobe.exceptions import ReportError

logger = logging.getLogger(__name__)

# Timeout for the report upload (seconds).
DEFAULT_TIMEOUT: float = 30.0

# User-Agent sent with every request.
USER_AGENT: str = f"jdkprobe/{__version__}"


def record_to_dict(record: DiscoveryResult) -> dict[str, Any]:
    """Convert one discovery result to its wire representation."""
    out: dict[str, Any] = {
        "path": record.path,
        "version": UNKNOWN,
        "vendor": UNKNOWN,
        "sources": [tag.value for tag in sorted_tags(record.sources)],
        "isBroken": not record.is_valid,
    }
    if isinstance(record, BrokenRecord):
        out["errorKind"] = record.error.kind.value
        out["message"] = record.error.message
    else:
        out["version"] = record.version
        out["vendor"] = record.vendor
    return out


def report_to_dict(report: DiscoveryReport) -> dict[str, Any]:
    """Convert a full report to a JSON-serializable dict."""
    return {
        "javaInfoList": [record_to_dict(r) for r in report.inventory],
        "errors": [[path, cause] for path, cause in report.errors],
    }


def encode_report_body(report: DiscoveryReport) -> str:
    """Return the URL-encoded JSON body sent to the collector."""
    return quote(json.dumps(report_to_dict(report)), safe="")


async def submit_report(
    report: DiscoveryReport,
    url: str,
    *,
    timeout: float = DEFAULT_TIMEOUT,
) -> str:
    """POST a report to the collector and return the key it assigns.

    Args:
        report: The discovery report to upload.
        url: Collector endpoint.
        timeout: Request timeout in seconds.

    Returns:
        The ``key`` field of the collector's JSON response.

    Raises:
        ReportError: On timeouts, transport errors, non-2xx responses, or
            a response without a string ``key``.
    """
    body = encode_report_body(report)
    try:
        async with httpx.AsyncClient(
            timeout=timeout,
            headers={"User-Agent": USER_AGENT},
            follow_redirects=True,
        ) as client:
            resp = await client.post(
                url,
                content=body,
                headers={"Content-Type": "text/plain"},
            )
            resp.raise_for_status()
            data = resp.json()
    except httpx.TimeoutException as exc:
        logger.warning("Timeout submitting report to %s", url)
        raise ReportError(f"Timed out submitting report to {url}") from exc
    except httpx.HTTPStatusError as exc:
        logger.warning("HTTP %d from %s", exc.response.status_code, url)
        raise ReportError(
            f"Collector returned HTTP {exc.response.status_code}"
        ) from exc
    except (httpx.RequestError, ValueError) as exc:
        logger.warning("Request error for %s: %s", url, exc)
        raise ReportError(f"Failed to submit report to {url}: {exc}") from exc

    key = data.get("key") if isinstance(data, dict) else None
    if not isinstance(key, str):
        raise ReportError("Collector response has no 'key' field")
    return key
