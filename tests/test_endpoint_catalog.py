"""Tests for the endpoint documentation catalog."""

import pytest

from catalog import CatalogError, EndpointCatalog, EndpointMeta


def _meta(path, method="GET", category="misc", **kwargs):
    return EndpointMeta(
        path=path,
        method=method,
        summary=kwargs.pop("summary", f"{method} {path}"),
        description=kwargs.pop("description", ""),
        category=category,
        doc_page=kwargs.pop("doc_page", "/guidelines/misc"),
        **kwargs
    )


class TestCatalogConstruction:
    """Building catalogs from endpoint tables."""

    def test_default_catalog_loads_table(self, catalog):
        assert len(catalog) == 18
        assert catalog.categories() == {
            "campaigns", "reports", "audiences", "creatives",
            "conversions", "inventory", "dashboard",
        }

    def test_duplicate_entries_rejected(self):
        with pytest.raises(CatalogError, match="Duplicate"):
            EndpointCatalog([_meta("/api/v1/a"), _meta("/api/v1/a")])

    def test_same_path_different_method_allowed(self):
        catalog = EndpointCatalog([_meta("/api/v1/a"), _meta("/api/v1/a", method="POST")])
        assert len(catalog) == 2

    def test_relative_path_rejected(self):
        with pytest.raises(CatalogError):
            EndpointCatalog([_meta("api/v1/a")])

    def test_missing_method_rejected(self):
        with pytest.raises(CatalogError):
            EndpointCatalog([_meta("/api/v1/a", method="")])


class TestLookup:
    """Exact, partial and prefixed path lookups."""

    def test_every_registered_entry_resolves(self, catalog):
        for meta in catalog:
            assert catalog.lookup(meta.path, meta.method) is meta

    def test_exact_path(self, catalog):
        meta = catalog.lookup("/api/v3/campaign")
        assert meta is not None
        assert meta.path == "/api/v3/campaign"
        assert meta.method == "POST"

    def test_exact_method_and_path(self, catalog):
        meta = catalog.lookup("/api/v3/campaign/budget", method="patch")
        assert meta.key == "PATCH:/api/v3/campaign/budget"

    def test_partial_path(self, catalog):
        meta = catalog.lookup("campaign/budget")
        assert meta.path == "/api/v3/campaign/budget"

    def test_prefixed_path(self, catalog):
        meta = catalog.lookup("https://api.iqm.com/api/v2/rb/resultDashboard")
        assert meta.path == "/api/v2/rb/resultDashboard"

    def test_exact_match_wins_over_containment(self):
        catalog = EndpointCatalog([_meta("/api/v1/items/list"), _meta("/api/v1/items")])
        assert catalog.lookup("/api/v1/items").path == "/api/v1/items"

    def test_unknown_path(self, catalog):
        assert catalog.lookup("/no/such/endpoint") is None

    def test_empty_path(self, catalog):
        assert catalog.lookup("") is None


class TestSearch:
    """Keyword search over endpoint text."""

    def test_search_matches_every_campaign_endpoint(self, catalog):
        expected = {
            meta.key for meta in catalog
            if "campaign" in " ".join([meta.path, meta.summary, meta.description, *meta.tags]).lower()
        }
        found = {meta.key for meta in catalog.search("campaign")}
        assert found == expected
        assert "POST:/api/v3/campaign" in found

    def test_search_is_case_insensitive(self, catalog):
        lower = [meta.key for meta in catalog.search("campaign")]
        upper = [meta.key for meta in catalog.search("CAMPAIGN")]
        assert lower == upper

    def test_search_matches_tags(self):
        catalog = EndpointCatalog([_meta("/api/v1/a", tags=("Reporting",)), _meta("/api/v1/b")])
        assert [meta.path for meta in catalog.search("reporting")] == ["/api/v1/a"]

    def test_search_no_match(self, catalog):
        assert catalog.search("zzz-nothing") == []


class TestCategories:

    def test_by_category(self, catalog):
        paths = [meta.path for meta in catalog.by_category("reports")]
        assert paths == ["/api/v3/ra/report/execute", "/api/v3/ra/report/schedule"]

    def test_unknown_category(self, catalog):
        assert catalog.by_category("billing") == []


def test_to_dict_uses_wire_names(catalog):
    data = catalog.lookup("/api/v3/campaign").to_dict()
    assert data["docPage"] == "/guidelines/campaign-api#create-a-campaign"
    assert data["requiresAuth"] is True
    assert "requestBody" in data
    assert "responseBody" in data
    assert isinstance(data["tags"], list)


def test_to_summary(catalog):
    summary = catalog.lookup("/api/v3/campaign").to_summary()
    assert set(summary) == {"path", "method", "summary", "docPage"}
