"""Registered DOI detection strategies, one publisher convention per module.

Importing this package registers every strategy with
:mod:`DocsToDOI.DoiExtraction.registry`.
"""

from __future__ import annotations

from . import (  # noqa: F401
    data_attributes,
    ieee,
    meta_tags,
    nber,
    psycnet,
    pubmed,
    sciencedirect,
    title,
)
from .data_attributes import find_doi_from_data_doi_attributes
from .ieee import find_doi_from_ieee
from .meta_tags import DOI_META_NAMES, find_doi_from_meta_tags
from .nber import find_doi_from_nber
from .psycnet import find_doi_from_psycnet
from .pubmed import find_doi_from_pubmed
from .sciencedirect import find_doi_from_sciencedirect
from .title import DOI_TITLE_RE, find_doi_from_title

__all__ = [
    "DOI_META_NAMES",
    "DOI_TITLE_RE",
    "find_doi_from_data_doi_attributes",
    "find_doi_from_ieee",
    "find_doi_from_meta_tags",
    "find_doi_from_nber",
    "find_doi_from_psycnet",
    "find_doi_from_pubmed",
    "find_doi_from_sciencedirect",
    "find_doi_from_title",
]
