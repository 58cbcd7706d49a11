"""Strategy reading DOIs from scholarly ``<meta>`` tags."""

from __future__ import annotations

import logging
from typing import Optional

from DocsToDOI.DoiExtraction.registry import register_strategy
from DocsToDOI.DoiExtraction.snapshot import DocumentSnapshot
from DocsToDOI.DoiExtraction.types import StrategyReason, StrategyResult

LOGGER = logging.getLogger(__name__)

# Names publishers use for DOI-bearing meta tags, compared lower-cased.
DOI_META_NAMES = frozenset(
    {
        "citation_doi",
        "doi",
        "dc.doi",
        "dc.identifier",
        "dc.identifier.doi",
        "bepress_citation_doi",
        "rft_id",
        "dcsext.wt_doi",
    }
)


def _candidate_from_content(content: str) -> str:
    value = content.strip()
    if value.startswith("doi:"):
        value = value[len("doi:") :].strip()
    return value


@register_strategy("meta_tags")
def find_doi_from_meta_tags(snapshot: DocumentSnapshot) -> StrategyResult:
    """Scan DOI meta tags in document order; the last qualifying tag wins.

    Tags carrying a ``scheme`` other than ``doi`` are ignored: some platforms
    (SAGE, for one) publish encoded publisher ids there that only look like
    DOIs. Last-wins reproduces observed behaviour on pages with conflicting
    tags and is kept as is.
    """

    if snapshot.tree is None:
        return StrategyResult.not_found(reason=StrategyReason.NO_DOCUMENT)

    doi: Optional[str] = None
    source: Optional[str] = None
    for meta in snapshot.tree.find_all("meta"):
        name = meta.get("name")
        if not isinstance(name, str) or name.lower() not in DOI_META_NAMES:
            continue

        scheme = meta.get("scheme")
        if scheme and scheme != "doi":
            continue

        content = meta.get("content")
        if not isinstance(content, str):
            continue
        candidate = _candidate_from_content(content)
        if candidate.startswith("10."):
            doi = candidate
            source = name

    if doi is None:
        return StrategyResult.not_found()
    LOGGER.debug("found a DOI from a meta tag: %s (%s)", doi, source)
    return StrategyResult.found_doi(doi, meta_name=source)
