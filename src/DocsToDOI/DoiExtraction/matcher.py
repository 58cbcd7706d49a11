"""Regex matching over snapshot markup, optionally gated to one host."""

from __future__ import annotations

import functools
import logging
import re
from dataclasses import dataclass
from typing import Callable, Literal, Optional, Pattern, Union

from DocsToDOI.DoiExtraction.snapshot import DocumentSnapshot
from DocsToDOI.DoiExtraction.types import StrategyReason, StrategyResult

LOGGER = logging.getLogger(__name__)

StrategyFn = Callable[[DocumentSnapshot], StrategyResult]


@dataclass(frozen=True)
class HostScope:
    """Restricts a heuristic to pages served from one publisher host.

    ``exact`` scopes require the snapshot hostname to equal ``host``;
    ``contains`` scopes accept any hostname containing ``host``. Both checks
    are case-sensitive.
    """

    host: str
    match: Literal["exact", "contains"] = "exact"

    def matches(self, hostname: str) -> bool:
        if not hostname:
            return False
        if self.match == "contains":
            return self.host in hostname
        return hostname == self.host

    def describe(self) -> str:
        return self.host if self.match == "exact" else f"*{self.host}*"


def run_regex_on_markup(
    snapshot: DocumentSnapshot,
    pattern: Union[str, Pattern[str]],
    scope: Optional[HostScope] = None,
) -> Optional[str]:
    """Return the first capture group of ``pattern`` in the snapshot markup.

    Args:
        snapshot: Page snapshot to search.
        pattern: Regex containing at least one capture group.
        scope: Optional host scope; off-host snapshots are not searched.

    Returns:
        Optional[str]: The first group's text, or ``None`` when the scope does
        not match, nothing matches, or the capture is empty.
    """

    if scope is not None and not scope.matches(snapshot.hostname):
        return None
    if not snapshot.raw_markup:
        return None
    regex = re.compile(pattern) if isinstance(pattern, str) else pattern
    match = regex.search(snapshot.raw_markup)
    if match is None or regex.groups < 1:
        return None
    return match.group(1) or None


def scoped(scope: HostScope) -> Callable[[StrategyFn], StrategyFn]:
    """Decorate a strategy so it reports ``NotFound`` off its host."""

    def deco(fn: StrategyFn) -> StrategyFn:
        @functools.wraps(fn)
        def wrapper(snapshot: DocumentSnapshot) -> StrategyResult:
            if not scope.matches(snapshot.hostname):
                return StrategyResult.not_found(
                    reason=StrategyReason.HOST_MISMATCH,
                    host=snapshot.hostname,
                    scope=scope.describe(),
                )
            return fn(snapshot)

        wrapper.host_scope = scope  # type: ignore[attr-defined]
        return wrapper

    return deco


__all__ = ["HostScope", "StrategyFn", "run_regex_on_markup", "scoped"]
