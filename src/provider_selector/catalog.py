"""Provider catalog construction and loading.

The built-in catalog holds six cloud providers with sample metrics. A catalog
can also be loaded from a JSON or YAML file, either as a bare mapping of
provider id to record or as ``{version, providers}``. Records may nest their
metrics under ``metrics`` or list them flat next to ``name``/``description``.
"""

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Optional, Union

import yaml
from pydantic import ValidationError

from .app_logging import get_logger
from .exceptions import CatalogLoadError
from .schema import Criterion, Provider, ProviderCatalog

logger = get_logger("catalog")

DEFAULT_CATALOG_VERSION = "1.0.0"

# ── Limits ──────────────────────────────────────────────────────────────────
MAX_PROVIDER_COUNT = 100
MAX_CATALOG_BYTES = 1 * 1024 * 1024

SUPPORTED_SUFFIXES = (".json", ".yaml", ".yml")

# Sample metrics. price: lower is better; reliability: uptime percentage;
# everything else: higher is better, 0-100.
DEFAULT_PROVIDERS: dict[str, dict[str, Any]] = {
    "AWS": {
        "name": "Amazon Web Services",
        "price": 75,
        "efficiency": 92,
        "speed": 95,
        "reliability": 99.99,
        "security": 92,
        "scalability": 98,
        "global_reach": 99,
        "support": 90,
        "service_variety": 98,
        "ease_of_use": 80,
        "sustainability": 70,
        "description": "Market leader with comprehensive services",
    },
    "Azure": {
        "name": "Microsoft Azure",
        "price": 78,
        "efficiency": 88,
        "speed": 90,
        "reliability": 99.95,
        "security": 90,
        "scalability": 95,
        "global_reach": 98,
        "support": 88,
        "service_variety": 95,
        "ease_of_use": 78,
        "sustainability": 68,
        "description": "Strong enterprise integration and hybrid capabilities",
    },
    "GCP": {
        "name": "Google Cloud Platform",
        "price": 72,
        "efficiency": 94,
        "speed": 93,
        "reliability": 99.95,
        "security": 91,
        "scalability": 96,
        "global_reach": 97,
        "support": 85,
        "service_variety": 94,
        "ease_of_use": 82,
        "sustainability": 75,
        "description": "Excellent data analytics and AI/ML capabilities",
    },
    "Oracle": {
        "name": "Oracle Cloud",
        "price": 60,
        "efficiency": 90,
        "speed": 92,
        "reliability": 99.95,
        "security": 94,
        "scalability": 94,
        "global_reach": 85,
        "support": 86,
        "service_variety": 88,
        "ease_of_use": 70,
        "sustainability": 60,
        "description": "Enterprise-grade cloud with strong database and hybrid features",
    },
    "Linode": {
        "name": "Linode",
        "price": 45,
        "efficiency": 83,
        "speed": 85,
        "reliability": 99.9,
        "security": 80,
        "scalability": 70,
        "global_reach": 65,
        "support": 82,
        "service_variety": 70,
        "ease_of_use": 85,
        "sustainability": 55,
        "description": "Cost-effective with good performance",
    },
    "IBM": {
        "name": "IBM Cloud",
        "price": 85,
        "efficiency": 86,
        "speed": 88,
        "reliability": 99.9,
        "security": 89,
        "scalability": 90,
        "global_reach": 80,
        "support": 87,
        "service_variety": 86,
        "ease_of_use": 68,
        "sustainability": 66,
        "description": "Strong for enterprise and hybrid cloud solutions",
    },
}


def build_catalog(
    data: Any,
    version: str = DEFAULT_CATALOG_VERSION,
) -> ProviderCatalog:
    """Validate provider records and build a read-only catalog.

    Args:
        data: Mapping of provider id to provider record
        version: Catalog version label

    Returns:
        ProviderCatalog preserving the order of ``data``

    Raises:
        CatalogLoadError: If the records are malformed
    """
    if not isinstance(data, Mapping):
        raise CatalogLoadError("Catalog providers must be a mapping of id to provider record.")
    if not data:
        raise CatalogLoadError("Catalog contains no providers.")
    if len(data) > MAX_PROVIDER_COUNT:
        raise CatalogLoadError(
            f"Catalog has {len(data)} providers, which exceeds the maximum of {MAX_PROVIDER_COUNT}."
        )

    providers: dict[str, Provider] = {}
    for provider_id, record in data.items():
        if not isinstance(record, Mapping):
            raise CatalogLoadError(f"Provider '{provider_id}' is not a mapping.")
        try:
            providers[str(provider_id)] = Provider.model_validate({**record, "id": str(provider_id)})
        except ValidationError as exc:
            raise CatalogLoadError(f"Provider '{provider_id}' failed validation: {exc}") from exc

    return ProviderCatalog(version=str(version), providers=providers)


def default_catalog() -> ProviderCatalog:
    """Return the built-in six-provider catalog."""
    return build_catalog(DEFAULT_PROVIDERS)


def _read_document(path: Path) -> Any:
    suffix = path.suffix.lower()
    if suffix not in SUPPORTED_SUFFIXES:
        raise CatalogLoadError(
            f"Unsupported catalog format '{suffix}'. Use one of: {', '.join(SUPPORTED_SUFFIXES)}"
        )
    if path.stat().st_size > MAX_CATALOG_BYTES:
        raise CatalogLoadError(f"Catalog file exceeds {MAX_CATALOG_BYTES // 1024} KB.")

    with open(path, "r", encoding="utf-8") as f:
        try:
            if suffix == ".json":
                return json.load(f)
            return yaml.safe_load(f)
        except (json.JSONDecodeError, yaml.YAMLError) as exc:
            raise CatalogLoadError(f"Could not parse catalog file {path}: {exc}") from exc


def load_catalog(path: Union[str, Path]) -> ProviderCatalog:
    """Load a provider catalog from a JSON or YAML file.

    Raises:
        CatalogLoadError: On a missing, unreadable or invalid file
    """
    path = Path(path)
    if not path.is_file():
        raise CatalogLoadError(f"Catalog file not found: {path}")

    document = _read_document(path)

    version = DEFAULT_CATALOG_VERSION
    if isinstance(document, Mapping) and "providers" in document:
        version = document.get("version") or DEFAULT_CATALOG_VERSION
        document = document["providers"]

    catalog = build_catalog(document, version=version)
    logger.debug("Loaded %d providers from %s", len(catalog), path)
    return catalog


def resolve_catalog(path: Optional[Union[str, Path]] = None) -> ProviderCatalog:
    """Load the catalog at ``path``, or the built-in one when no path is given."""
    if path:
        return load_catalog(path)
    return default_catalog()


def catalog_issues(catalog: ProviderCatalog) -> list[str]:
    """List data-quality problems that scoring would silently absorb."""
    issues = []
    known = set(Criterion.keys())

    for provider in catalog.providers.values():
        for key, value in provider.metrics.items():
            if key not in known:
                issues.append(f"{provider.id}: unrecognised metric '{key}' is never scored")
                continue
            if value is None:
                continue
            if key == Criterion.RELIABILITY.value and not 0 <= value <= 100:
                issues.append(f"{provider.id}: reliability {value} is not an uptime percentage")
            elif not 0 <= value <= 100:
                issues.append(f"{provider.id}: {key} {value} is outside 0-100")

        missing = [k for k in Criterion.keys() if provider.metric(k) is None]
        if missing:
            issues.append(f"{provider.id}: missing metrics scored as neutral: {', '.join(missing)}")

    return issues


def validate_catalog(path: Union[str, Path]) -> tuple[bool, list[str]]:
    """Validate a catalog file.

    Returns:
        Tuple of (is_valid, issues). Data-quality issues are reported
        without making the catalog invalid; load errors do.
    """
    try:
        catalog = load_catalog(path)
    except CatalogLoadError as exc:
        return False, [str(exc)]
    return True, catalog_issues(catalog)
