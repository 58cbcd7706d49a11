# === NAVMAP v1 ===
# {
#   "module": "DocsToDOI.DoiExtraction.snapshot",
#   "purpose": "Immutable page snapshots and helpers that capture them",
#   "sections": [
#     {
#       "id": "documentsnapshot",
#       "name": "DocumentSnapshot",
#       "anchor": "class-documentsnapshot",
#       "kind": "class"
#     },
#     {
#       "id": "capture-from-path",
#       "name": "capture_from_path",
#       "anchor": "function-capture-from-path",
#       "kind": "function"
#     },
#     {
#       "id": "fetch-snapshot",
#       "name": "fetch_snapshot",
#       "anchor": "function-fetch-snapshot",
#       "kind": "function"
#     }
#   ]
# }
# === /NAVMAP ===

"""Immutable page snapshots consumed by every DOI strategy.

A snapshot is captured once per extraction attempt and bundles the raw
markup, the parsed element tree, the page title and the hostname. Strategies
read only from the snapshot, never from a live document, which keeps them
pure functions of their input.
"""

from __future__ import annotations

import logging
import warnings
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional
from urllib.parse import urlsplit

import httpx
from bs4 import BeautifulSoup, XMLParsedAsHTMLWarning

from DocsToDOI.DoiExtraction.errors import SnapshotCaptureError

LOGGER = logging.getLogger(__name__)

DEFAULT_PARSER = "lxml"
DEFAULT_USER_AGENT = "DocsToDOI/DoiExtraction"


def _normalise_title(text: Optional[str]) -> str:
    if not text:
        return ""
    return " ".join(text.split())


def hostname_from_url(url: Optional[str]) -> str:
    """Return the lower-cased hostname of ``url`` without port, or ``""``."""

    if not url:
        return ""
    try:
        return urlsplit(url).hostname or ""
    except ValueError:
        return ""


def _parse(markup: str, parser: str, content_type: str = "") -> BeautifulSoup:
    parser_name = parser
    if "xml" in content_type.lower() and parser == "lxml":
        parser_name = "lxml-xml"
    with warnings.catch_warnings():
        warnings.filterwarnings("ignore", category=XMLParsedAsHTMLWarning)
        return BeautifulSoup(markup, parser_name)


@dataclass(frozen=True)
class DocumentSnapshot:
    """Frozen view of a rendered page.

    Attributes:
        raw_markup: Serialised markup searched by the regex strategies.
        title: Whitespace-normalised document title.
        hostname: Lower-cased hostname the page was served from.
        tree: Parsed element tree; treat as read-only.
    """

    raw_markup: str
    title: str
    hostname: str
    tree: Optional[BeautifulSoup]

    @classmethod
    def from_html(
        cls,
        html: Optional[str],
        *,
        url: Optional[str] = None,
        hostname: Optional[str] = None,
        title: Optional[str] = None,
        parser: str = DEFAULT_PARSER,
        content_type: str = "",
    ) -> "DocumentSnapshot":
        """Capture a snapshot from markup text.

        Args:
            html: Page markup. ``None`` produces an empty snapshot.
            url: Page URL, used to derive the hostname when not given.
            hostname: Explicit hostname; wins over ``url``.
            title: Explicit title; defaults to the ``<title>`` element text.
            parser: BeautifulSoup parser name.
            content_type: Optional Content-Type used to pick an XML parser.

        Returns:
            DocumentSnapshot: The frozen snapshot.
        """

        host = (hostname or hostname_from_url(url)).strip().lower()
        if html is None:
            return cls(raw_markup="", title=_normalise_title(title), hostname=host, tree=None)

        tree = _parse(html, parser, content_type)
        if title is None:
            title_tag = tree.title
            title = title_tag.get_text() if title_tag is not None else ""
        return cls(
            raw_markup=html,
            title=_normalise_title(title),
            hostname=host,
            tree=tree,
        )

    @classmethod
    def empty(cls, hostname: str = "") -> "DocumentSnapshot":
        return cls(raw_markup="", title="", hostname=hostname, tree=None)

    @property
    def is_empty(self) -> bool:
        return self.tree is None and not self.raw_markup and not self.title


def capture_from_path(
    path: str | Path,
    *,
    url: Optional[str] = None,
    hostname: Optional[str] = None,
    title: Optional[str] = None,
    parser: str = DEFAULT_PARSER,
) -> DocumentSnapshot:
    """Read a saved HTML page from disk and snapshot it."""

    p = Path(path)
    try:
        markup = p.read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        raise SnapshotCaptureError(
            f"Cannot read page {p}: {exc}", source=str(p), details={"error": str(exc)}
        ) from exc
    LOGGER.debug("Captured %d characters of markup from %s", len(markup), p)
    return DocumentSnapshot.from_html(
        markup, url=url, hostname=hostname, title=title, parser=parser
    )


def fetch_snapshot(
    url: str,
    *,
    client: Optional[httpx.Client] = None,
    timeout: float = 30.0,
    headers: Optional[Mapping[str, str]] = None,
    parser: str = DEFAULT_PARSER,
    title: Optional[str] = None,
) -> DocumentSnapshot:
    """Fetch ``url`` and snapshot the response body.

    The hostname is taken from the final URL after redirects, matching what a
    browser would report for the rendered page.

    Raises:
        SnapshotCaptureError: On timeouts, transport failures or HTTP errors.
    """

    request_headers: dict[str, str] = {"User-Agent": DEFAULT_USER_AGENT}
    if headers:
        request_headers.update({k: str(v) for k, v in headers.items()})

    owns_client = client is None
    http = client or httpx.Client(follow_redirects=True)
    try:
        resp = http.get(url, headers=request_headers, timeout=timeout)
        resp.raise_for_status()
    except httpx.TimeoutException as exc:
        raise SnapshotCaptureError(
            f"Timed out fetching {url}", source=url, details={"timeout": timeout}
        ) from exc
    except httpx.HTTPStatusError as exc:
        status = exc.response.status_code if exc.response is not None else None
        raise SnapshotCaptureError(
            f"HTTP {status} fetching {url}", source=url, details={"http_status": status}
        ) from exc
    except httpx.RequestError as exc:
        raise SnapshotCaptureError(
            f"Cannot fetch {url}: {exc}", source=url, details={"error": str(exc)}
        ) from exc
    finally:
        if owns_client:
            http.close()

    details: dict[str, Any] = {"status": resp.status_code, "bytes": len(resp.content)}
    LOGGER.debug("Fetched %s: %s", resp.url, details)
    return DocumentSnapshot.from_html(
        resp.text,
        url=str(resp.url),
        title=title,
        parser=parser,
        content_type=resp.headers.get("Content-Type") or "",
    )


__all__ = [
    "DEFAULT_PARSER",
    "DEFAULT_USER_AGENT",
    "DocumentSnapshot",
    "capture_from_path",
    "fetch_snapshot",
    "hostname_from_url",
]
