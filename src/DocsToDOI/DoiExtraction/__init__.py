"""DOI extraction public exports."""

from __future__ import annotations

import importlib
import sys
from typing import Any

__all__ = [
    "DEFAULT_STRATEGY_ORDER",
    "DelayPolicy",
    "DocumentSnapshot",
    "DoiExtractionConfig",
    "DoiPipeline",
    "DoiStrategy",
    "HostScope",
    "OnceOnlyTrigger",
    "PipelineOutcome",
    "SnapshotCaptureError",
    "StrategyReason",
    "StrategyResult",
    "build_strategies",
    "find_doi",
    "get_registry",
    "load_config",
    "register_strategy",
    "run_once",
    "run_regex_on_markup",
]

_EXPORT_MAP: dict[str, tuple[str, str]] = {
    "DEFAULT_STRATEGY_ORDER": (".types", "DEFAULT_STRATEGY_ORDER"),
    "DelayPolicy": (".scheduling", "DelayPolicy"),
    "DocumentSnapshot": (".snapshot", "DocumentSnapshot"),
    "DoiExtractionConfig": (".config", "DoiExtractionConfig"),
    "DoiPipeline": (".pipeline", "DoiPipeline"),
    "DoiStrategy": (".registry", "DoiStrategy"),
    "HostScope": (".matcher", "HostScope"),
    "OnceOnlyTrigger": (".scheduling", "OnceOnlyTrigger"),
    "PipelineOutcome": (".types", "PipelineOutcome"),
    "SnapshotCaptureError": (".errors", "SnapshotCaptureError"),
    "StrategyReason": (".types", "StrategyReason"),
    "StrategyResult": (".types", "StrategyResult"),
    "build_strategies": (".registry", "build_strategies"),
    "find_doi": (".pipeline", "find_doi"),
    "get_registry": (".registry", "get_registry"),
    "load_config": (".config", "load_config"),
    "register_strategy": (".registry", "register_strategy"),
    "run_once": (".scheduling", "run_once"),
    "run_regex_on_markup": (".matcher", "run_regex_on_markup"),
}


def __getattr__(name: str) -> Any:  # pragma: no cover - exercised in tests
    if name in _EXPORT_MAP:
        module_path, attr_name = _EXPORT_MAP[name]
        module = importlib.import_module(f"{__name__}{module_path}")
        value = getattr(module, attr_name)
        setattr(sys.modules[__name__], name, value)
        return value
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")


def __dir__() -> list[str]:  # pragma: no cover - tooling helper
    return sorted(set(globals()) | set(__all__))
