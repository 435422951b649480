"""Tests for catalog construction, loading and validation."""

import json

import pytest
import yaml

from provider_selector.catalog import (
    DEFAULT_PROVIDERS,
    MAX_PROVIDER_COUNT,
    build_catalog,
    catalog_issues,
    default_catalog,
    load_catalog,
    resolve_catalog,
    validate_catalog,
)
from provider_selector.exceptions import CatalogLoadError
from provider_selector.schema import Provider


NESTED_CATALOG = {
    "version": "2024.1",
    "providers": {
        "alpha": {
            "name": "Alpha Cloud",
            "description": "Cheap and cheerful",
            "metrics": {"price": 20, "speed": 60, "reliability": 99.5},
        },
        "beta": {
            "name": "Beta Cloud",
            "description": "Fast",
            "metrics": {"price": 80, "speed": 98, "reliability": 99.99},
        },
    },
}

FLAT_CATALOG = {
    "alpha": {"name": "Alpha Cloud", "price": 20, "speed": 60, "reliability": 99.5,
              "description": "Cheap and cheerful"},
    "beta": {"name": "Beta Cloud", "price": 80, "speed": 98, "reliability": 99.99,
             "description": "Fast"},
}


class TestDefaultCatalog:
    """Tests for the built-in dataset."""

    def test_six_providers_in_order(self):
        catalog = default_catalog()
        assert catalog.ids == ["AWS", "Azure", "GCP", "Oracle", "Linode", "IBM"]

    def test_every_provider_defines_every_criterion(self):
        catalog = default_catalog()
        assert catalog_issues(catalog) == []

    def test_flat_records_become_metrics(self):
        aws = default_catalog().get("AWS")
        assert aws.name == "Amazon Web Services"
        assert aws.description == "Market leader with comprehensive services"
        assert aws.metric("price") == 75
        assert "name" not in aws.metrics
        assert "description" not in aws.metrics

    def test_to_record_round_trips_source_record(self):
        aws = default_catalog().get("AWS")
        assert aws.to_record() == DEFAULT_PROVIDERS["AWS"]

    def test_catalog_is_frozen(self):
        catalog = default_catalog()
        with pytest.raises(Exception):
            catalog.version = "other"
        with pytest.raises(Exception):
            catalog.get("AWS").name = "Other"


class TestBuildCatalog:
    """Tests for record validation."""

    def test_rejects_non_mapping(self):
        with pytest.raises(CatalogLoadError, match="mapping"):
            build_catalog([{"name": "x"}])

    def test_rejects_empty(self):
        with pytest.raises(CatalogLoadError, match="no providers"):
            build_catalog({})

    def test_rejects_non_mapping_record(self):
        with pytest.raises(CatalogLoadError, match="'bad' is not a mapping"):
            build_catalog({"bad": "not a record"})

    def test_rejects_record_without_name(self):
        with pytest.raises(CatalogLoadError, match="failed validation"):
            build_catalog({"nameless": {"price": 10}})

    def test_rejects_non_numeric_metric(self):
        with pytest.raises(CatalogLoadError, match="failed validation"):
            build_catalog({"x": {"name": "X", "metrics": {"price": "cheap"}}})

    @pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
    def test_rejects_non_finite_metric(self, value):
        with pytest.raises(CatalogLoadError, match="failed validation"):
            build_catalog({"x": {"name": "X", "metrics": {"speed": value}}})

    def test_rejects_too_many_providers(self):
        data = {f"p{i}": {"name": f"P{i}"} for i in range(MAX_PROVIDER_COUNT + 1)}
        with pytest.raises(CatalogLoadError, match="exceeds the maximum"):
            build_catalog(data)

    def test_id_comes_from_key(self):
        catalog = build_catalog({"alpha": {"id": "ignored", "name": "Alpha"}})
        assert catalog.get("alpha").id == "alpha"

    def test_null_metrics_allowed(self):
        catalog = build_catalog({"x": {"name": "X", "metrics": {"support": None}}})
        assert catalog.get("x").metric("support") is None


class TestLoadCatalog:
    """Tests for loading catalog files."""

    def test_load_nested_json(self, tmp_path):
        path = tmp_path / "providers.json"
        path.write_text(json.dumps(NESTED_CATALOG), encoding="utf-8")
        catalog = load_catalog(path)
        assert catalog.version == "2024.1"
        assert catalog.ids == ["alpha", "beta"]
        assert catalog.get("beta").metric("speed") == 98

    def test_load_flat_yaml(self, tmp_path):
        path = tmp_path / "providers.yaml"
        path.write_text(yaml.safe_dump(FLAT_CATALOG, sort_keys=False), encoding="utf-8")
        catalog = load_catalog(str(path))
        assert catalog.ids == ["alpha", "beta"]
        assert catalog.version == "1.0.0"

    def test_nested_and_flat_are_equivalent(self, tmp_path):
        nested = tmp_path / "nested.yml"
        nested.write_text(yaml.safe_dump(NESTED_CATALOG, sort_keys=False), encoding="utf-8")
        flat = tmp_path / "flat.json"
        flat.write_text(json.dumps(FLAT_CATALOG), encoding="utf-8")
        assert load_catalog(nested).providers == load_catalog(flat).providers

    def test_missing_file(self, tmp_path):
        with pytest.raises(CatalogLoadError, match="not found"):
            load_catalog(tmp_path / "missing.json")

    def test_unsupported_suffix(self, tmp_path):
        path = tmp_path / "providers.csv"
        path.write_text("id,name\n", encoding="utf-8")
        with pytest.raises(CatalogLoadError, match="Unsupported"):
            load_catalog(path)

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "providers.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(CatalogLoadError, match="Could not parse"):
            load_catalog(path)

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "providers.yaml"
        path.write_text("alpha: [unclosed", encoding="utf-8")
        with pytest.raises(CatalogLoadError, match="Could not parse"):
            load_catalog(path)

    def test_yaml_nan_metric_rejected(self, tmp_path):
        path = tmp_path / "providers.yaml"
        path.write_text("alpha:\n  name: Alpha\n  speed: .nan\n", encoding="utf-8")
        with pytest.raises(CatalogLoadError, match="failed validation"):
            load_catalog(path)

    def test_resolve_without_path_is_default(self):
        assert resolve_catalog(None).ids == default_catalog().ids


class TestValidateCatalog:
    """Tests for catalog file validation."""

    def test_valid_file(self, tmp_path):
        path = tmp_path / "providers.json"
        path.write_text(json.dumps(NESTED_CATALOG), encoding="utf-8")
        is_valid, issues = validate_catalog(path)
        assert is_valid
        assert any("missing metrics" in issue for issue in issues)

    def test_invalid_file(self, tmp_path):
        is_valid, issues = validate_catalog(tmp_path / "missing.yaml")
        assert not is_valid
        assert "not found" in issues[0]

    def test_reports_out_of_range_and_unknown_metrics(self):
        catalog = build_catalog({
            "x": {"name": "X", "metrics": {"speed": 140, "reliability": 101, "latency": 5}},
        })
        issues = catalog_issues(catalog)
        assert "x: speed 140 is outside 0-100" in issues
        assert "x: reliability 101 is not an uptime percentage" in issues
        assert "x: unrecognised metric 'latency' is never scored" in issues


def test_provider_metric_lookup():
    provider = Provider(id="p", name="P", metrics={"speed": 10})
    assert provider.metric("speed") == 10
    assert provider.metric("price") is None
