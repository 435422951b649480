"""Shared fixtures for provider selector tests."""

import pytest

from provider_selector.catalog import build_catalog, default_catalog
from provider_selector.config import reset_config
from provider_selector.engine import ProviderSelector


@pytest.fixture(autouse=True)
def fresh_config():
    """Every test starts from the default configuration."""
    reset_config()
    yield
    reset_config()


@pytest.fixture
def catalog():
    return default_catalog()


@pytest.fixture
def selector(catalog):
    return ProviderSelector(catalog)


@pytest.fixture
def tied_catalog():
    """Two providers with identical metrics, 'first' defined before 'second'."""
    metrics = {"price": 40, "speed": 80, "reliability": 99.5}
    return build_catalog({
        "first": {"name": "First Cloud", "description": "Defined first", "metrics": dict(metrics)},
        "second": {"name": "Second Cloud", "description": "Defined second", "metrics": dict(metrics)},
        "third": {"name": "Third Cloud", "description": "Slower", "metrics": {"price": 40, "speed": 10, "reliability": 99.5}},
    })
