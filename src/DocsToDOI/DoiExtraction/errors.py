# === NAVMAP v1 ===
# {
#   "module": "DocsToDOI.DoiExtraction.errors",
#   "purpose": "Exception taxonomy for snapshot capture and strategy configuration.",
#   "sections": [
#     {
#       "id": "doiextractionerror",
#       "name": "DoiExtractionError",
#       "anchor": "class-doiextractionerror",
#       "kind": "class"
#     },
#     {
#       "id": "snapshotcaptureerror",
#       "name": "SnapshotCaptureError",
#       "anchor": "class-snapshotcaptureerror",
#       "kind": "class"
#     },
#     {
#       "id": "strategyconfigurationerror",
#       "name": "StrategyConfigurationError",
#       "anchor": "class-strategyconfigurationerror",
#       "kind": "class"
#     }
#   ]
# }
# === /NAVMAP ===

"""Exception taxonomy for the DOI extraction glue layers.

Responsibilities
----------------
- Give snapshot capture (file, stdin, HTTP) a single exception type that
  carries the source that failed, so the runner and CLI can report it.
- Flag strategy configuration mistakes (unknown names, reordered chains)
  before any page is inspected.

Design Notes
------------
- Strategies themselves never raise for missing markup; absence is a
  ``NotFound`` result. These exceptions belong to the code around the core.
"""

from __future__ import annotations

from typing import Any

__all__ = (
    "DoiExtractionError",
    "SnapshotCaptureError",
    "StrategyConfigurationError",
)


class DoiExtractionError(Exception):
    """Base class for DOI extraction failures."""


class SnapshotCaptureError(DoiExtractionError):
    """Raised when page markup cannot be obtained or parsed."""

    def __init__(
        self, message: str, *, source: str | None = None, details: dict[str, Any] | None = None
    ):
        super().__init__(message)
        self.source = source
        self.details = details or {}


class StrategyConfigurationError(DoiExtractionError, ValueError):
    """Raised when a strategy chain references unknown names or breaks ordering."""

    def __init__(self, message: str, *, strategies: list[str] | None = None):
        super().__init__(message)
        self.strategies = list(strategies or [])
