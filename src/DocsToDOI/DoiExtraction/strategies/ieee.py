"""IEEE Xplore embeds document metadata as a JS object literal.

Example: http://ieeexplore.ieee.org/document/6512846/
"""

from __future__ import annotations

import re

from DocsToDOI.DoiExtraction.matcher import HostScope, run_regex_on_markup
from DocsToDOI.DoiExtraction.registry import register_strategy
from DocsToDOI.DoiExtraction.snapshot import DocumentSnapshot
from DocsToDOI.DoiExtraction.types import StrategyResult

SCOPE = HostScope("ieeexplore.ieee.org")
IEEE_DOI_RE = re.compile(r"'doi':'([^']+)'")


@register_strategy("ieee", scope=SCOPE)
def find_doi_from_ieee(snapshot: DocumentSnapshot) -> StrategyResult:
    """Capture the ``'doi':'...'`` fragment from page scripts."""
    return StrategyResult.from_value(run_regex_on_markup(snapshot, IEEE_DOI_RE))
