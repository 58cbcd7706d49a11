"""Tests for the docstodoi command line."""

from __future__ import annotations

import json
from pathlib import Path

import httpx
import pytest
from typer.testing import CliRunner

from DocsToDOI.DoiExtraction import cli
from DocsToDOI.DoiExtraction.types import StrategyReason

runner = CliRunner()

SCIENCEDIRECT_PAGE = (
    "<html><head><title>Article | ScienceDirect</title></head><body>"
    "<script>SDM.doi = '10.1016/j.foo.2016.01.001';</script></body></html>"
)


@pytest.fixture
def saved_page(tmp_path: Path) -> Path:
    path = tmp_path / "article.html"
    path.write_text(SCIENCEDIRECT_PAGE, encoding="utf-8")
    return path


def test_extract_from_saved_page(saved_page: Path) -> None:
    result = runner.invoke(
        cli.app,
        ["extract", str(saved_page), "--url", "https://www.sciencedirect.com/science/article/pii/S1"],
    )

    assert result.exit_code == 0, result.output
    assert "10.1016/j.foo.2016.01.001" in result.output


def test_extract_off_host_reports_not_found(saved_page: Path) -> None:
    result = runner.invoke(cli.app, ["extract", str(saved_page), "--host", "www.example.com"])

    assert result.exit_code == cli.EXIT_NOT_FOUND
    assert "No DOI found" in result.output


def test_extract_json_lists_attempts(saved_page: Path) -> None:
    result = runner.invoke(
        cli.app, ["extract", str(saved_page), "--host", "www.sciencedirect.com", "--json"]
    )

    assert result.exit_code == 0, result.output
    payload = json.loads(result.stdout)
    assert payload["doi"] == "10.1016/j.foo.2016.01.001"
    assert payload["strategy"] == "sciencedirect"
    assert [a["strategy"] for a in payload["attempts"]] == ["meta_tags", "data_doi", "sciencedirect"]
    assert [a["reason"] for a in payload["attempts"]] == [
        StrategyReason.NO_MATCH,
        StrategyReason.NO_MATCH,
        None,
    ]
    assert payload["attempts"][0]["reason"] == "no-match"


def test_extract_explain_table(saved_page: Path) -> None:
    result = runner.invoke(
        cli.app, ["extract", str(saved_page), "--host", "www.sciencedirect.com", "--explain"]
    )

    assert result.exit_code == 0, result.output
    assert "10.1016/j.foo.2016.01.001" in result.output


def test_extract_from_stdin() -> None:
    html = "<html><head><meta name='citation_doi' content='doi:10.1000/stdin'></head></html>"

    result = runner.invoke(cli.app, ["extract", "-"], input=html)

    assert result.exit_code == 0, result.output
    assert "10.1000/stdin" in result.output


def test_extract_missing_file_fails(tmp_path: Path) -> None:
    result = runner.invoke(cli.app, ["extract", str(tmp_path / "missing.html")])

    assert result.exit_code == 1


def test_extract_from_url(monkeypatch) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text=SCIENCEDIRECT_PAGE, headers={"Content-Type": "text/html"})

    monkeypatch.setattr(
        cli,
        "_http_client",
        lambda: httpx.Client(transport=httpx.MockTransport(handler), follow_redirects=True),
    )

    result = runner.invoke(
        cli.app, ["extract", "https://www.sciencedirect.com/science/article/pii/S1"]
    )

    assert result.exit_code == 0, result.output
    assert "10.1016/j.foo.2016.01.001" in result.output


def test_extract_respects_config_toggles(tmp_path: Path) -> None:
    page = tmp_path / "page.html"
    page.write_text("<html><head><title>On 10.1000/182</title></head></html>", encoding="utf-8")
    config = tmp_path / "config.json"
    config.write_text(json.dumps({"strategies": {"title": {"enabled": False}}}), encoding="utf-8")

    assert runner.invoke(cli.app, ["extract", str(page)]).exit_code == 0
    result = runner.invoke(cli.app, ["extract", str(page), "--config", str(config)])
    assert result.exit_code == cli.EXIT_NOT_FOUND


def test_strategies_command() -> None:
    result = runner.invoke(cli.app, ["strategies"])

    assert result.exit_code == 0, result.output
    assert "DOI Strategy Chain" in result.output


def test_print_config_raw() -> None:
    result = runner.invoke(cli.app, ["print-config", "--raw"])

    assert result.exit_code == 0, result.output
    data = json.loads(result.stdout)
    assert data["strategies"]["order"][0] == "meta_tags"


def test_validate_config_rejects_reordered_chain(tmp_path: Path) -> None:
    config = tmp_path / "bad.json"
    config.write_text(json.dumps({"strategies": {"order": ["title", "meta_tags"]}}), encoding="utf-8")

    result = runner.invoke(cli.app, ["validate-config", str(config)])

    assert result.exit_code == 1
