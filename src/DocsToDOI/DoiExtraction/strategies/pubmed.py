"""PubMed lists article ids as anchors tagged with ``ref="aid_type=…"``.

Example: https://www.ncbi.nlm.nih.gov/pubmed/17375194
"""

from __future__ import annotations

from DocsToDOI.DoiExtraction.matcher import HostScope
from DocsToDOI.DoiExtraction.registry import register_strategy
from DocsToDOI.DoiExtraction.snapshot import DocumentSnapshot
from DocsToDOI.DoiExtraction.types import StrategyResult

SCOPE = HostScope("www.ncbi.nlm.nih.gov", match="contains")


@register_strategy("pubmed", scope=SCOPE)
def find_doi_from_pubmed(snapshot: DocumentSnapshot) -> StrategyResult:
    """Return the inner HTML of the ``aid_type=doi`` anchor verbatim."""

    if snapshot.tree is None:
        return StrategyResult.not_found()
    anchor = snapshot.tree.select_one('a[ref="aid_type=doi"]')
    if anchor is None:
        return StrategyResult.not_found()
    return StrategyResult.from_value(anchor.decode_contents())
