"""NBER working papers print the DOI as a labelled paragraph.

Example: http://www.nber.org/papers/w23298
"""

from __future__ import annotations

import re

from DocsToDOI.DoiExtraction.matcher import HostScope, run_regex_on_markup
from DocsToDOI.DoiExtraction.registry import register_strategy
from DocsToDOI.DoiExtraction.snapshot import DocumentSnapshot
from DocsToDOI.DoiExtraction.types import StrategyResult

SCOPE = HostScope("www.nber.org")
NBER_DOI_RE = re.compile(r"Document Object Identifier \(DOI\): (10.*?)</p>")


@register_strategy("nber", scope=SCOPE)
def find_doi_from_nber(snapshot: DocumentSnapshot) -> StrategyResult:
    """Capture the text after the ``Document Object Identifier (DOI):`` label."""
    return StrategyResult.from_value(run_regex_on_markup(snapshot, NBER_DOI_RE))
