"""Result types and the canonical strategy order for DOI extraction."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

# Precision first: structured metadata and host-specific markup before the
# broad title fallback. PsycNET deliberately precedes PubMed.
DEFAULT_STRATEGY_ORDER: Tuple[str, ...] = (
    "meta_tags",
    "data_doi",
    "sciencedirect",
    "ieee",
    "nber",
    "psycnet",
    "pubmed",
    "title",
)


class StrategyReason(str):
    """Structured reason taxonomy for ``NotFound`` results."""

    AMBIGUOUS = "ambiguous"
    DISABLED = "disabled"
    HOST_MISMATCH = "host-mismatch"
    NO_DOCUMENT = "no-document"
    NO_MATCH = "no-match"
    STRATEGY_EXCEPTION = "strategy-exception"


@dataclass(frozen=True)
class StrategyResult:
    """Either a DOI candidate (``Found``) or a reasoned ``NotFound``.

    Attributes:
        doi: DOI candidate emitted by the strategy (``None`` when not found).
        strategy: Registry name of the strategy that produced the result.
        reason: Why nothing was found; ``None`` for hits.
        metadata: Diagnostic details such as the matched sub-check.

    Examples:
        >>> StrategyResult.found_doi("10.1234/abc", strategy="meta_tags").found
        True
        >>> StrategyResult.not_found(strategy="title").found
        False
    """

    doi: Optional[str] = None
    strategy: Optional[str] = None
    reason: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def found(self) -> bool:
        return isinstance(self.doi, str) and bool(self.doi)

    @classmethod
    def found_doi(
        cls, doi: str, *, strategy: Optional[str] = None, **metadata: Any
    ) -> "StrategyResult":
        return cls(doi=doi, strategy=strategy, metadata=dict(metadata))

    @classmethod
    def not_found(
        cls,
        *,
        strategy: Optional[str] = None,
        reason: str = StrategyReason.NO_MATCH,
        **metadata: Any,
    ) -> "StrategyResult":
        return cls(doi=None, strategy=strategy, reason=reason, metadata=dict(metadata))

    @classmethod
    def from_value(
        cls,
        value: Optional[str],
        *,
        strategy: Optional[str] = None,
        **metadata: Any,
    ) -> "StrategyResult":
        """Wrap an optional DOI string, treating ``None`` and ``""`` as not found."""

        if isinstance(value, str) and value:
            return cls.found_doi(value, strategy=strategy, **metadata)
        return cls.not_found(strategy=strategy, **metadata)


@dataclass(frozen=True)
class PipelineOutcome:
    """Aggregate result of one arbitration run.

    Attributes:
        doi: Winning DOI, or ``None`` when every strategy reported ``NotFound``.
        strategy: Name of the winning strategy.
        attempts: Results of every strategy that actually ran, in order.
    """

    doi: Optional[str] = None
    strategy: Optional[str] = None
    attempts: List[StrategyResult] = field(default_factory=list)

    @property
    def found(self) -> bool:
        return self.doi is not None


__all__ = [
    "DEFAULT_STRATEGY_ORDER",
    "PipelineOutcome",
    "StrategyReason",
    "StrategyResult",
]
