"""
Unit tests for TechnologyCatalog.

Tests dataset loading, case-insensitive lookup with substring fallback,
derived read views and fatal load failures.
"""

import json

import pytest

from clonescope.core.exceptions import CatalogLoadError
from clonescope.schemas.catalog import Difficulty
from clonescope.services.technology_catalog import TechnologyCatalog


class TestCatalogLoading:
    """Tests for load-once behavior."""

    def test_load_is_idempotent(self, catalog):
        before = catalog.get_all_technologies()
        catalog.load()

        assert catalog.is_loaded
        assert len(catalog.get_all_technologies()) == len(before)

    def test_lookups_trigger_lazy_load(self):
        """A read view loads the dataset on first use."""
        fresh = TechnologyCatalog()
        assert not fresh.is_loaded

        assert fresh.get_technology("React") is not None
        assert fresh.is_loaded

    def test_missing_dataset_is_fatal(self, tmp_path):
        broken = TechnologyCatalog(tmp_path / "missing.json")

        with pytest.raises(CatalogLoadError) as exc_info:
            broken.load()

        assert "missing.json" in str(exc_info.value)
        assert not broken.is_loaded

    def test_invalid_json_is_fatal(self, tmp_path):
        path = tmp_path / "catalog.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(CatalogLoadError):
            TechnologyCatalog(path).load()

    def test_invalid_record_is_fatal(self, tmp_path):
        path = tmp_path / "catalog.json"
        path.write_text(json.dumps({"technologies": [{"name": "X", "difficulty": "impossible"}]}), encoding="utf-8")

        with pytest.raises(CatalogLoadError):
            TechnologyCatalog(path).load()

    def test_loads_custom_dataset(self, tmp_path):
        path = tmp_path / "catalog.json"
        path.write_text(
            json.dumps({
                "technologies": [{
                    "name": "Acme Framework",
                    "category": "backend-framework",
                    "difficulty": "hard",
                    "costEstimate": {"development": "high", "hosting": "low", "maintenance": "medium"},
                    "learningResources": ["https://acme.dev/docs"],
                    "marketDemand": "low",
                }]
            }),
            encoding="utf-8",
        )

        custom = TechnologyCatalog(path)
        profile = custom.get_technology("acme framework")

        assert profile.difficulty == Difficulty.HARD
        assert profile.cost_estimate.development == "high"
        assert custom.get_categories() == ["backend-framework"]


class TestCatalogLookup:
    """Tests for getTechnology semantics."""

    def test_exact_lookup_is_case_insensitive(self, catalog):
        assert catalog.get_technology("rEaCt").name == "React"

    def test_partial_match_longer_search_term(self, catalog):
        """'React Native' contains 'react'."""
        assert catalog.get_technology("React Native").name == "React"

    def test_partial_match_versioned_name(self, catalog):
        assert catalog.get_technology("Next.js 13.4.1").name == "Next.js"

    def test_partial_match_shorter_search_term(self, catalog):
        """'vue' is contained in 'vue.js'."""
        assert catalog.get_technology("Vue").name == "Vue.js"

    def test_surrounding_whitespace_is_ignored(self, catalog):
        assert catalog.get_technology("  Stripe  ").name == "Stripe"

    @pytest.mark.parametrize("name", ["", "   ", "Qwertyuiop"])
    def test_no_match_returns_none(self, catalog, name):
        assert catalog.get_technology(name) is None

    def test_fallback_profile_is_neutral(self, catalog):
        profile = catalog.get_fallback_profile("Mystery Tool")

        assert profile.name == "Mystery Tool"
        assert profile.category == "unknown"
        assert profile.difficulty == Difficulty.MEDIUM
        assert profile.cost_estimate.development == "medium"
        assert profile.cost_estimate.hosting == "medium"
        assert profile.cost_estimate.maintenance == "medium"

    def test_fallback_profile_keeps_category(self, catalog):
        assert catalog.get_fallback_profile("Mystery Tool", "database").category == "database"


class TestCatalogViews:
    """Tests for derived read views."""

    def test_technologies_by_category(self, catalog):
        names = {p.name for p in catalog.get_technologies_by_category("authentication-service")}
        assert {"Auth0", "Clerk"} <= names

    def test_unknown_category_is_empty(self, catalog):
        assert catalog.get_technologies_by_category("quantum-computing") == []

    def test_categories_include_core_groups(self, catalog):
        categories = catalog.get_categories()
        for expected in ("frontend-framework", "backend-framework", "database", "hosting-platform"):
            assert expected in categories

    def test_alternatives_are_enriched(self, catalog):
        alternatives = {alt.name: alt for alt in catalog.get_technology_alternatives("React")}

        assert alternatives["Vue.js"].difficulty == "easy"
        assert alternatives["Vue.js"].market_demand != "unknown"

    def test_unknown_alternative_is_marked_unknown(self, catalog):
        alternatives = {alt.name: alt for alt in catalog.get_technology_alternatives("Stripe")}

        assert alternatives["Paddle"].difficulty == "unknown"
        assert alternatives["Paddle"].market_demand == "unknown"
        assert alternatives["PayPal"].difficulty == "easy"

    def test_alternatives_of_unknown_technology(self, catalog):
        assert catalog.get_technology_alternatives("Qwertyuiop") == []

    def test_saas_alternatives_only_for_service_categories(self, catalog):
        saas = catalog.get_saas_alternatives("authentication-service")
        assert {s.name for s in saas} >= {"Auth0", "Clerk"}
        assert catalog.get_saas_alternatives("frontend-framework") == []

    def test_learning_resource_types_are_inferred(self, catalog):
        resources = catalog.get_learning_resources("Auth0")

        assert resources
        assert resources[0].type == "documentation"

    def test_learning_resources_of_unknown_technology(self, catalog):
        assert catalog.get_learning_resources("Qwertyuiop") == []
