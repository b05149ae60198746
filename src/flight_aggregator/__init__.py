"""
Flight Aggregator - busca agregada de voos em múltiplos provedores
"""
from .domain.models import Flight, SearchQuery, SearchResult, SortOption
from .domain.exceptions import ProviderError, QueryValidationError

__version__ = "0.1.0"

__all__ = [
    "Flight",
    "ProviderError",
    "QueryValidationError",
    "SearchQuery",
    "SearchResult",
    "SortOption",
]
