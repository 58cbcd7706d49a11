# === NAVMAP v1 ===
# {
#   "module": "DocsToDOI.DoiExtraction.scheduling",
#   "purpose": "Host-dependent delay and the single extraction attempt per page load",
#   "sections": [
#     {
#       "id": "delaypolicy",
#       "name": "DelayPolicy",
#       "anchor": "class-delaypolicy",
#       "kind": "class"
#     },
#     {
#       "id": "onceonlytrigger",
#       "name": "OnceOnlyTrigger",
#       "anchor": "class-onceonlytrigger",
#       "kind": "class"
#     },
#     {
#       "id": "run-once",
#       "name": "run_once",
#       "anchor": "function-run-once",
#       "kind": "function"
#     }
#   ]
# }
# === /NAVMAP ===

"""Scheduling glue around the extraction pipeline.

Extraction runs exactly once per page load, after a short delay that is
longer on single-page-application hosts whose content is rendered after the
initial load. There is no polling, retry or cancellation.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Callable, FrozenSet, Optional, Protocol

from DocsToDOI.DoiExtraction.config.models import SchedulingConfig
from DocsToDOI.DoiExtraction.errors import SnapshotCaptureError
from DocsToDOI.DoiExtraction.pipeline import DoiPipeline
from DocsToDOI.DoiExtraction.snapshot import DocumentSnapshot
from DocsToDOI.DoiExtraction.types import PipelineOutcome

LOGGER = logging.getLogger(__name__)


class PresentationTrigger(Protocol):
    """Receives the DOI once found, e.g. to mount an overlay widget."""

    def __call__(self, doi: str) -> object: ...


@dataclass(frozen=True)
class DelayPolicy:
    """Maps a hostname to the delay before the extraction attempt."""

    default_delay_ms: int = 200
    long_delay_ms: int = 3000
    long_delay_hosts: FrozenSet[str] = field(default_factory=lambda: frozenset({"psycnet.apa.org"}))

    @classmethod
    def from_config(cls, config: SchedulingConfig) -> "DelayPolicy":
        return cls(
            default_delay_ms=config.default_delay_ms,
            long_delay_ms=config.long_delay_ms,
            long_delay_hosts=frozenset(config.long_delay_hosts),
        )

    def delay_ms(self, hostname: str) -> int:
        if hostname in self.long_delay_hosts:
            return self.long_delay_ms
        return self.default_delay_ms

    def delay_seconds(self, hostname: str) -> float:
        return self.delay_ms(hostname) / 1000.0


class OnceOnlyTrigger:
    """Forwards the first DOI to ``present`` and ignores later calls."""

    def __init__(self, present: Callable[[str], object]) -> None:
        self._present = present
        self.shown = False

    def __call__(self, doi: str) -> bool:
        if self.shown:
            LOGGER.debug("Presentation already shown; ignoring DOI %s", doi)
            return False
        self._present(doi)
        self.shown = True
        return True


def run_once(
    capture: Callable[[], Optional[DocumentSnapshot]],
    trigger: PresentationTrigger,
    *,
    hostname: str = "",
    policy: Optional[DelayPolicy] = None,
    pipeline: Optional[DoiPipeline] = None,
    sleep: Callable[[float], None] = time.sleep,
) -> PipelineOutcome:
    """Wait the host's delay, snapshot the page, and present the DOI if found.

    Args:
        capture: Called once after the delay to snapshot the page.
        trigger: Called with the DOI only when one was found.
        hostname: Host used to resolve the delay.
        policy: Delay policy; defaults to :class:`DelayPolicy`.
        pipeline: Strategy chain; defaults to the canonical chain.
        sleep: Blocking sleep function, injectable for tests.

    Returns:
        PipelineOutcome: The arbitration outcome (empty when capture failed).
    """

    policy = policy or DelayPolicy()
    delay = policy.delay_seconds(hostname)
    if delay > 0:
        LOGGER.debug("Waiting %.3fs before extracting a DOI from %s", delay, hostname or "page")
        sleep(delay)

    try:
        snapshot = capture()
    except SnapshotCaptureError as exc:
        LOGGER.warning("Could not capture page %s: %s", exc.source or hostname, exc)
        return PipelineOutcome()

    outcome = (pipeline or DoiPipeline()).run(snapshot)
    if outcome.doi:
        trigger(outcome.doi)
    return outcome


__all__ = ["DelayPolicy", "OnceOnlyTrigger", "PresentationTrigger", "run_once"]
