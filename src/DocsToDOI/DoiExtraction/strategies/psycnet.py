"""APA PsycNET links records through ``/doi/10.…`` paths.

Example: http://psycnet.apa.org/record/2000-13328-008
"""

from __future__ import annotations

import re

from DocsToDOI.DoiExtraction.matcher import HostScope, run_regex_on_markup
from DocsToDOI.DoiExtraction.registry import register_strategy
from DocsToDOI.DoiExtraction.snapshot import DocumentSnapshot
from DocsToDOI.DoiExtraction.types import StrategyResult

SCOPE = HostScope("psycnet.apa.org")
# capture keeps the 10. prefix and stops at the closing quote
PSYCNET_DOI_RE = re.compile(r"href='/doi/(10\.[^'\"\s>]+)")


@register_strategy("psycnet", scope=SCOPE)
def find_doi_from_psycnet(snapshot: DocumentSnapshot) -> StrategyResult:
    """Capture the DOI from the first ``href='/doi/10.…'`` link."""
    return StrategyResult.from_value(run_regex_on_markup(snapshot, PSYCNET_DOI_RE))
