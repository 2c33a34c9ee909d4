"""Tests for the tool registry and built-in documentation tools."""

import pytest
from unittest.mock import Mock

from clients.search_client import DocSearchResult
from server.tools import (
    ToolRegistrationError,
    ToolRegistry,
    ToolSpec,
    UnknownToolError,
    create_default_registry,
)


@pytest.fixture
def registry(catalog, search_client):
    return create_default_registry(catalog, search_client)


class TestToolRegistry:

    def test_builtin_tools_registered(self, registry):
        assert registry.names() == ["search_docs", "get_api_info", "list_endpoints", "get_example_code"]
        assert "search_docs" in registry

    def test_tool_specs_exclude_handlers(self, registry):
        for spec in registry.get_tool_specs():
            assert set(spec) == {"name", "description", "parameters"}

    def test_duplicate_registration(self):
        registry = ToolRegistry()
        tool = ToolSpec(name="echo", description="", parameters={}, handler=lambda args: args)
        registry.register(tool)
        with pytest.raises(ToolRegistrationError):
            registry.register(tool)

    def test_unknown_tool(self, registry):
        with pytest.raises(UnknownToolError) as exc_info:
            registry.invoke("delete_everything", {})
        assert exc_info.value.name == "delete_everything"

    def test_handler_errors_propagate(self):
        registry = ToolRegistry()
        registry.register(ToolSpec(name="broken", description="", parameters={},
                                   handler=Mock(side_effect=RuntimeError("boom"))))
        with pytest.raises(RuntimeError, match="boom"):
            registry.invoke("broken", {})

    def test_invocations_do_not_share_arguments(self):
        seen = []

        def handler(args):
            args["touched"] = True
            seen.append(args)
            return len(seen)

        registry = ToolRegistry()
        registry.register(ToolSpec(name="mutating", description="", parameters={}, handler=handler))
        arguments = {"x": 1}
        registry.invoke("mutating", arguments)
        registry.invoke("mutating", arguments)

        assert arguments == {"x": 1}
        assert seen[0] is not seen[1]


class TestGetApiInfo:

    def test_keyword_returns_search_results(self, registry):
        result = registry.invoke("get_api_info", {"endpoint": "budget"})

        assert isinstance(result, list)
        assert result
        assert "/api/v3/campaign/budget" in [item["path"] for item in result]
        for item in result:
            assert set(item) == {"path", "method", "summary", "docPage"}

    def test_path_returns_single_endpoint(self, registry):
        result = registry.invoke("get_api_info", {"endpoint": "/api/v3/campaign"})

        assert isinstance(result, dict)
        assert result["path"] == "/api/v3/campaign"
        assert result["method"] == "POST"
        assert "requestBody" in result

    def test_unknown_path(self, registry):
        result = registry.invoke("get_api_info", {"endpoint": "/no/such/endpoint"})
        assert result == {"error": "Endpoint not found", "path": "/no/such/endpoint"}


class TestListEndpoints:

    def test_all_categories(self, registry, catalog):
        result = registry.invoke("list_endpoints", {})

        assert list(result) == sorted(catalog.categories())
        assert "/api/v3/campaign" in result["campaigns"]

    def test_single_category(self, registry):
        result = registry.invoke("list_endpoints", {"category": "dashboard"})
        assert result == {"dashboard": [{
            "path": "/api/v2/rb/resultDashboard",
            "method": "POST",
            "summary": "Get dashboard performance data",
        }]}

    def test_unknown_category(self, registry):
        assert registry.invoke("list_endpoints", {"category": "billing"}) == {"billing": []}


class TestExampleCode:

    def test_curl_example(self, registry):
        result = registry.invoke("get_example_code", {"endpoint": "/api/v3/campaign"})
        assert result == {"example": "curl -X POST '/api/v3/campaign' -H 'Authorization: Bearer TOKEN'"}

    def test_unsupported_language(self, registry):
        result = registry.invoke("get_example_code", {"endpoint": "/api/v3/campaign", "language": "python"})
        assert result == {"error": "Language not supported"}


def test_search_docs_tool(registry, search_client):
    search_client.search.return_value = [
        DocSearchResult(title="Budget", url="https://docs.iqm.com/b", content="y" * 300),
    ]

    result = registry.invoke("search_docs", {"query": "budget"})

    search_client.search.assert_called_once_with("budget", 5)
    assert result == [{"title": "Budget", "url": "https://docs.iqm.com/b", "snippet": "y" * 200}]
