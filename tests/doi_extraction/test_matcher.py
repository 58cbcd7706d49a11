"""Pattern matcher and host scope tests."""

from __future__ import annotations

import re

from DocsToDOI.DoiExtraction.matcher import HostScope, run_regex_on_markup, scoped
from DocsToDOI.DoiExtraction.types import StrategyReason, StrategyResult


def test_host_scope_exact_and_contains() -> None:
    exact = HostScope("ieeexplore.ieee.org")
    contains = HostScope("sciencedirect", match="contains")

    assert exact.matches("ieeexplore.ieee.org")
    assert not exact.matches("www.ieeexplore.ieee.org")
    assert contains.matches("www.sciencedirect.com")
    assert not contains.matches("example.org")
    assert not contains.matches("")
    assert exact.describe() == "ieeexplore.ieee.org"
    assert contains.describe() == "*sciencedirect*"


def test_run_regex_returns_first_group(make_snapshot) -> None:
    snapshot = make_snapshot("<script>var a = 'x1'; var a = 'x2';</script>")

    assert run_regex_on_markup(snapshot, r"var a = '([^']+)'") == "x1"
    assert run_regex_on_markup(snapshot, re.compile(r"var b = '([^']+)'")) is None


def test_run_regex_without_group_is_not_found(make_snapshot) -> None:
    snapshot = make_snapshot("<p>10.1234/abc</p>")

    assert run_regex_on_markup(snapshot, r"10\.\d+/abc") is None


def test_run_regex_skips_search_off_host(make_snapshot) -> None:
    snapshot = make_snapshot("<script>'doi':'10.1109/5.771073'</script>", host="example.org")
    scope = HostScope("ieeexplore.ieee.org")

    assert run_regex_on_markup(snapshot, r"'doi':'([^']+)'", scope) is None
    on_host = make_snapshot(snapshot.raw_markup, host="ieeexplore.ieee.org")
    assert run_regex_on_markup(on_host, r"'doi':'([^']+)'", scope) == "10.1109/5.771073"


def test_scoped_decorator_reports_host_mismatch(make_snapshot) -> None:
    calls = []

    @scoped(HostScope("www.nber.org"))
    def strategy(snapshot):
        calls.append(snapshot.hostname)
        return StrategyResult.found_doi("10.3386/w1")

    result = strategy(make_snapshot("<p></p>", host="example.org"))

    assert not result.found
    assert result.reason == StrategyReason.HOST_MISMATCH
    assert calls == []
    assert strategy(make_snapshot("<p></p>", host="www.nber.org")).doi == "10.3386/w1"
    assert strategy.host_scope.host == "www.nber.org"
