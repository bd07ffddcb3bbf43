# ABOUTME: Metadata package for catalog lookup, caching, and match confidence.
# ABOUTME: Exports the normalized record types, the resolver, and the confidence tiers.

from spinescan.metadata.confidence import Confidence, strategy_for
from spinescan.metadata.provider import CatalogSource
from spinescan.metadata.resolver import CatalogResolver, Resolution, sources_for
from spinescan.metadata.types import CatalogRecord, LookupResult

__all__ = [
    "CatalogRecord",
    "CatalogResolver",
    "CatalogSource",
    "Confidence",
    "LookupResult",
    "Resolution",
    "sources_for",
    "strategy_for",
]
