"""Strategy reading DOIs from ``data-doi`` attributes (e.g. altmetric badges)."""

from __future__ import annotations

import logging

from DocsToDOI.DoiExtraction.registry import register_strategy
from DocsToDOI.DoiExtraction.snapshot import DocumentSnapshot
from DocsToDOI.DoiExtraction.types import StrategyReason, StrategyResult

LOGGER = logging.getLogger(__name__)


@register_strategy("data_doi")
def find_doi_from_data_doi_attributes(snapshot: DocumentSnapshot) -> StrategyResult:
    """Accept the ``data-doi`` value only when the page carries exactly one."""

    if snapshot.tree is None:
        return StrategyResult.not_found(reason=StrategyReason.NO_DOCUMENT)

    values = [
        node.get("data-doi")
        for node in snapshot.tree.find_all(attrs={"data-doi": True})
        if isinstance(node.get("data-doi"), str)
    ]
    unique = set(values)

    # several distinct DOIs means a table of contents or listing page
    if len(unique) > 1:
        return StrategyResult.not_found(
            reason=StrategyReason.AMBIGUOUS, distinct=len(unique)
        )
    if len(unique) == 1:
        doi = values[0]
        if doi.strip():
            LOGGER.debug("found a DOI from a [data-doi] attribute: %s", doi)
            return StrategyResult.found_doi(doi, occurrences=len(values))
    return StrategyResult.not_found()
