"""Last-resort strategy: a DOI-shaped substring in the page title.

Only the title is searched. Body text produces too many false positives
(reference lists, related articles) for this to run any earlier.
"""

from __future__ import annotations

import logging
import re

from DocsToDOI.DoiExtraction.registry import register_strategy
from DocsToDOI.DoiExtraction.snapshot import DocumentSnapshot
from DocsToDOI.DoiExtraction.types import StrategyResult

LOGGER = logging.getLogger(__name__)

# Crossref's recommended pattern, see
# https://www.crossref.org/blog/dois-and-matching-regular-expressions/
DOI_TITLE_RE = re.compile(r"(10.\d{4,9}/[-._;()/:A-Z0-9]+)", re.IGNORECASE)

_TRAILING_PUNCTUATION = ".,;:"


def trim_trailing_punctuation(value: str) -> str:
    """Drop sentence punctuation and unbalanced closing parentheses at the end.

    >>> trim_trailing_punctuation("10.1001/jama.2020.1234).")
    '10.1001/jama.2020.1234'
    >>> trim_trailing_punctuation("10.1016/S0140-6736(20)30183-5")
    '10.1016/S0140-6736(20)30183-5'
    """

    while value:
        if value[-1] in _TRAILING_PUNCTUATION:
            value = value[:-1]
        elif value[-1] == ")" and value.count(")") > value.count("("):
            value = value[:-1]
        else:
            break
    return value


@register_strategy("title")
def find_doi_from_title(snapshot: DocumentSnapshot) -> StrategyResult:
    """Return the first DOI-shaped substring of the page title."""

    if not snapshot.title:
        return StrategyResult.not_found()
    match = DOI_TITLE_RE.search(snapshot.title)
    if match is None:
        return StrategyResult.not_found()
    doi = trim_trailing_punctuation(match.group(1))
    LOGGER.debug("found a DOI in the page title: %s", doi)
    return StrategyResult.from_value(doi)
