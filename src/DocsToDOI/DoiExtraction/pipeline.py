"""
DOI Arbitration Pipeline

This module runs the registered detection strategies against one page
snapshot in a fixed priority order and returns the first DOI found.

Key Features:
- High-precision strategies (structured metadata, host-specific markup) run
  before the broad title fallback; the first ``Found`` short-circuits.
- Fails closed: absent documents and strategy exceptions are recorded as
  ``NotFound`` so callers only ever see "a DOI" or "no DOI".
- Pure over its input; running twice on one snapshot gives the same outcome.

Usage:
    from DocsToDOI.DoiExtraction.pipeline import DoiPipeline
    from DocsToDOI.DoiExtraction.snapshot import DocumentSnapshot

    snapshot = DocumentSnapshot.from_html(html, url="https://example.org/a")
    outcome = DoiPipeline().run(snapshot)
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from DocsToDOI.DoiExtraction.config.models import DoiExtractionConfig
from DocsToDOI.DoiExtraction.registry import DoiStrategy, build_strategies
from DocsToDOI.DoiExtraction.snapshot import DocumentSnapshot
from DocsToDOI.DoiExtraction.types import PipelineOutcome, StrategyReason, StrategyResult

LOGGER = logging.getLogger(__name__)


class DoiPipeline:
    """Ordered, short-circuiting chain of DOI strategies.

    Args:
        strategies: Explicit chain; defaults to the chain built from ``config``.
        config: Extraction configuration used when ``strategies`` is omitted.

    Attributes:
        strategies: The strategies consulted, in order.
    """

    def __init__(
        self,
        strategies: Optional[Sequence[DoiStrategy]] = None,
        *,
        config: Optional[DoiExtractionConfig] = None,
    ) -> None:
        if strategies is None:
            strategies = build_strategies(config)
        self.strategies: List[DoiStrategy] = list(strategies)

    @property
    def names(self) -> List[str]:
        return [strategy.name for strategy in self.strategies]

    def _attempt(self, strategy: DoiStrategy, snapshot: DocumentSnapshot) -> StrategyResult:
        try:
            return strategy.extract(snapshot)
        except Exception as exc:
            LOGGER.exception("Strategy %s raised while extracting a DOI", strategy.name)
            return StrategyResult.not_found(
                strategy=strategy.name,
                reason=StrategyReason.STRATEGY_EXCEPTION,
                error=str(exc),
                error_type=type(exc).__name__,
            )

    def run(self, snapshot: Optional[DocumentSnapshot]) -> PipelineOutcome:
        """Run strategies in order until one finds a DOI.

        Args:
            snapshot: Page snapshot; ``None`` or an empty snapshot yields no DOI.

        Returns:
            PipelineOutcome: The winning DOI and strategy plus every attempt made.
        """

        if snapshot is None or snapshot.is_empty:
            LOGGER.debug("No document available; skipping DOI extraction")
            return PipelineOutcome(
                attempts=[StrategyResult.not_found(reason=StrategyReason.NO_DOCUMENT)]
            )

        attempts: List[StrategyResult] = []
        for strategy in self.strategies:
            result = self._attempt(strategy, snapshot)
            attempts.append(result)
            if result.found:
                LOGGER.debug(
                    "DOI %s found by %s on %s",
                    result.doi,
                    strategy.name,
                    snapshot.hostname or "<unknown host>",
                )
                return PipelineOutcome(doi=result.doi, strategy=strategy.name, attempts=attempts)

        LOGGER.debug("No DOI found on %s", snapshot.hostname or "<unknown host>")
        return PipelineOutcome(attempts=attempts)

    def find_doi(self, snapshot: Optional[DocumentSnapshot]) -> Optional[str]:
        return self.run(snapshot).doi


def find_doi(
    snapshot: Optional[DocumentSnapshot],
    config: Optional[DoiExtractionConfig] = None,
) -> Optional[str]:
    """Return the best DOI for ``snapshot`` using the default chain, or ``None``."""

    return DoiPipeline(config=config).find_doi(snapshot)


__all__ = ["DoiPipeline", "find_doi"]
