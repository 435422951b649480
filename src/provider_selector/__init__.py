"""Cloud provider selector: weighted multi-criteria scoring and ranking."""

from provider_selector.catalog import default_catalog, load_catalog
from provider_selector.engine import ProviderSelector
from provider_selector.schema import (
    AnalysisFailure,
    AnalysisResult,
    Criterion,
    Provider,
    ProviderCatalog,
)

__version__ = "1.0.0"

__all__ = [
    "default_catalog",
    "load_catalog",
    "ProviderSelector",
    "AnalysisFailure",
    "AnalysisResult",
    "Criterion",
    "Provider",
    "ProviderCatalog",
]
