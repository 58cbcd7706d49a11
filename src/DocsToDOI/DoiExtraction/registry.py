"""
Strategy Registry

Provides strategy registration and chain construction for DoiExtraction:
- @register_strategy(name) decorator for detector functions
- Optional host scoping applied at registration time
- Config-driven chain construction preserving the canonical order
"""

from __future__ import annotations

import importlib
import logging
from dataclasses import dataclass, replace
from typing import Dict, List, Optional

from DocsToDOI.DoiExtraction.config.models import DoiExtractionConfig
from DocsToDOI.DoiExtraction.errors import StrategyConfigurationError
from DocsToDOI.DoiExtraction.matcher import HostScope, StrategyFn, scoped
from DocsToDOI.DoiExtraction.snapshot import DocumentSnapshot
from DocsToDOI.DoiExtraction.types import DEFAULT_STRATEGY_ORDER, StrategyResult

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class DoiStrategy:
    """A named detector: ``extract(snapshot)`` yields ``Found`` or ``NotFound``."""

    name: str
    fn: StrategyFn
    host_scope: Optional[HostScope] = None
    description: str = ""

    def extract(self, snapshot: DocumentSnapshot) -> StrategyResult:
        result = self.fn(snapshot)
        if result.strategy != self.name:
            result = replace(result, strategy=self.name)
        return result

    __call__ = extract


# ============================================================================
# Registry
# ============================================================================

_REGISTRY: Dict[str, DoiStrategy] = {}


def register_strategy(name: str, *, scope: Optional[HostScope] = None):
    """Decorator to register a detector function under ``name``."""

    def deco(fn: StrategyFn) -> StrategyFn:
        if name in _REGISTRY:
            _LOGGER.warning(f"Overriding already-registered strategy: {name}")
        wrapped = scoped(scope)(fn) if scope is not None else fn
        doc = (fn.__doc__ or "").strip().splitlines()
        _REGISTRY[name] = DoiStrategy(
            name=name,
            fn=wrapped,
            host_scope=scope,
            description=doc[0] if doc else "",
        )
        _LOGGER.debug(f"Registered strategy: {name} → {fn.__name__}")
        return wrapped

    return deco


def _ensure_loaded() -> None:
    importlib.import_module("DocsToDOI.DoiExtraction.strategies")


def get_registry() -> Dict[str, DoiStrategy]:
    """Get the strategy registry (copy)."""
    _ensure_loaded()
    return dict(_REGISTRY)


def get_strategy(name: str) -> DoiStrategy:
    """Lookup a registered strategy by name."""
    registry = get_registry()
    if name not in registry:
        available = sorted(registry.keys())
        raise StrategyConfigurationError(
            f"Unknown strategy: {name!r}. Available: {available}", strategies=[name]
        )
    return registry[name]


# ============================================================================
# Builder
# ============================================================================


def build_strategies(config: Optional[DoiExtractionConfig] = None) -> List[DoiStrategy]:
    """Build the ordered strategy chain from config, skipping disabled entries."""
    if config is None:
        return [get_strategy(name) for name in DEFAULT_STRATEGY_ORDER]

    enabled = config.strategies.enabled_order()
    skipped = [name for name in config.strategies.order if name not in enabled]
    if skipped:
        _LOGGER.debug(f"Skipping disabled strategies: {skipped}")
    strategies = [get_strategy(name) for name in enabled]

    _LOGGER.debug(f"Built {len(strategies)} strategies in order: {[s.name for s in strategies]}")
    return strategies


__all__ = [
    "DoiStrategy",
    "build_strategies",
    "get_registry",
    "get_strategy",
    "register_strategy",
]
