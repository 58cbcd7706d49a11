"""ScienceDirect: legacy template JS variable, then the newer ``a.doi`` link.

Examples:
    http://www.sciencedirect.com/science/article/pii/S1751157709000881
    http://www.sciencedirect.com/science/article/pii/S0742051X16306692
"""

from __future__ import annotations

import logging
import re

from DocsToDOI.DoiExtraction.matcher import HostScope, run_regex_on_markup
from DocsToDOI.DoiExtraction.registry import register_strategy
from DocsToDOI.DoiExtraction.snapshot import DocumentSnapshot
from DocsToDOI.DoiExtraction.types import StrategyResult

LOGGER = logging.getLogger(__name__)

SCOPE = HostScope("sciencedirect", match="contains")
SDM_DOI_RE = re.compile(r"SDM.doi\s*=\s*'([^']+)'")
DOI_LINK_RE = re.compile(r"doi\.org/(.+)")


@register_strategy("sciencedirect", scope=SCOPE)
def find_doi_from_sciencedirect(snapshot: DocumentSnapshot) -> StrategyResult:
    """Read the ``SDM.doi`` script variable or the ``a.doi`` anchor text."""

    doi = run_regex_on_markup(snapshot, SDM_DOI_RE)
    if doi:
        return StrategyResult.found_doi(doi, template="legacy")

    if snapshot.tree is None:
        return StrategyResult.not_found()
    anchor = snapshot.tree.select_one("a.doi")
    if anchor is not None:
        match = DOI_LINK_RE.search(anchor.decode_contents())
        if match and match.group(1):
            return StrategyResult.found_doi(match.group(1), template="react")
    return StrategyResult.not_found()
