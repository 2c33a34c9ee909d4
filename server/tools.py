"""
Tool system for the documentation assistant.
Provides ToolSpec and ToolRegistry plus the built-in documentation tools.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List

from catalog import EndpointCatalog
from clients.search_client import DocumentSearchClient
from observability.prometheus_metrics import record_tool_metrics

logger = logging.getLogger(__name__)

SNIPPET_CHARS = 200


class UnknownToolError(LookupError):
    """Raised when invoking a tool name that was never registered."""

    def __init__(self, name: str):
        super().__init__(f"Unknown tool: {name}")
        self.name = name


class ToolRegistrationError(ValueError):
    """Raised when registering a tool under a name already in use."""


@dataclass
class ToolSpec:
    """Tool specification exposed to the model"""

    name: str
    description: str
    parameters: Dict[str, Any]
    handler: Callable[[Dict[str, Any]], Any]

    def describe(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "parameters": self.parameters,
        }


class ToolRegistry:
    """
    Routes tool calls to their handlers by name.

    Register everything before serving traffic; afterwards the registry is
    only read, so request threads share it without locking.
    """

    def __init__(self):
        self.tools: Dict[str, ToolSpec] = {}

    def register(self, tool: ToolSpec) -> None:
        if tool.name in self.tools:
            raise ToolRegistrationError(f"Tool already registered: {tool.name}")
        self.tools[tool.name] = tool

    def __contains__(self, name: str) -> bool:
        return name in self.tools

    def names(self) -> List[str]:
        return list(self.tools)

    def get_tool_specs(self) -> List[Dict[str, Any]]:
        return [tool.describe() for tool in self.tools.values()]

    def invoke(self, name: str, arguments: Dict[str, Any]) -> Any:
        """Call a tool with a JSON argument map and return its JSON result."""
        tool = self.tools.get(name)
        if tool is None:
            raise UnknownToolError(name)

        try:
            result = tool.handler(dict(arguments or {}))
        except Exception:
            record_tool_metrics(name, success=False)
            raise

        record_tool_metrics(name, success=True)
        logger.debug(f"Tool {name} completed")
        return result


# ============================================================================
# BUILT-IN TOOL HANDLERS
# ============================================================================


def make_search_docs_handler(search_client: DocumentSearchClient) -> Callable[[Dict[str, Any]], Any]:
    def search_docs(arguments: Dict[str, Any]) -> List[Dict[str, Any]]:
        query = str(arguments.get("query", ""))
        max_results = int(arguments.get("max_results", 5))
        return [
            {
                "title": result.title,
                "url": result.url,
                "snippet": result.content[:SNIPPET_CHARS],
            }
            for result in search_client.search(query, max_results)
        ]

    return search_docs


def make_get_api_info_handler(catalog: EndpointCatalog) -> Callable[[Dict[str, Any]], Any]:
    def get_api_info(arguments: Dict[str, Any]) -> Any:
        endpoint = str(arguments.get("endpoint", ""))
        method = arguments.get("method") or None

        # Free text goes to keyword search, anything path-like to lookup
        if "/" not in endpoint:
            return [meta.to_summary() for meta in catalog.search(endpoint)]

        meta = catalog.lookup(endpoint, method)
        if meta is None:
            return {"error": "Endpoint not found", "path": endpoint}
        return meta.to_dict()

    return get_api_info


def make_list_endpoints_handler(catalog: EndpointCatalog) -> Callable[[Dict[str, Any]], Any]:
    def list_endpoints(arguments: Dict[str, Any]) -> Dict[str, Any]:
        category = arguments.get("category")
        if category:
            return {
                category: [
                    {"path": meta.path, "method": meta.method, "summary": meta.summary}
                    for meta in catalog.by_category(category)
                ]
            }

        return {
            name: [meta.path for meta in catalog.by_category(name)]
            for name in sorted(catalog.categories())
        }

    return list_endpoints


def get_example_code(arguments: Dict[str, Any]) -> Dict[str, str]:
    endpoint = str(arguments.get("endpoint", ""))
    language = arguments.get("language") or "curl"

    if language == "curl":
        return {"example": f"curl -X POST '{endpoint}' -H 'Authorization: Bearer TOKEN'"}

    return {"error": "Language not supported"}


def create_builtin_tools(catalog: EndpointCatalog, search_client: DocumentSearchClient) -> List[ToolSpec]:
    """Create built-in tool specifications"""
    return [
        ToolSpec(
            name="search_docs",
            description="Search the API documentation",
            parameters={
                "type": "object",
                "properties": {
                    "query": {"type": "string", "description": "Search query"},
                    "max_results": {
                        "type": "integer",
                        "description": "Maximum number of results",
                        "default": 5,
                    },
                },
                "required": ["query"],
            },
            handler=make_search_docs_handler(search_client),
        ),
        ToolSpec(
            name="get_api_info",
            description="Get details about an API endpoint, or search endpoints by keyword",
            parameters={
                "type": "object",
                "properties": {
                    "endpoint": {
                        "type": "string",
                        "description": "Endpoint path (e.g. /api/v3/campaign) or a keyword",
                    },
                    "method": {"type": "string", "description": "HTTP method"},
                },
                "required": ["endpoint"],
            },
            handler=make_get_api_info_handler(catalog),
        ),
        ToolSpec(
            name="list_endpoints",
            description="List API endpoints, optionally for a single category",
            parameters={
                "type": "object",
                "properties": {
                    "category": {
                        "type": "string",
                        "description": "Category name (campaigns, reports, audiences, ...)",
                    },
                },
            },
            handler=make_list_endpoints_handler(catalog),
        ),
        ToolSpec(
            name="get_example_code",
            description="Get an example request for an API endpoint",
            parameters={
                "type": "object",
                "properties": {
                    "endpoint": {"type": "string", "description": "Endpoint path"},
                    "language": {
                        "type": "string",
                        "description": "Example language",
                        "default": "curl",
                    },
                },
                "required": ["endpoint"],
            },
            handler=get_example_code,
        ),
    ]


def create_default_registry(catalog: EndpointCatalog, search_client: DocumentSearchClient) -> ToolRegistry:
    registry = ToolRegistry()
    for tool in create_builtin_tools(catalog, search_client):
        registry.register(tool)
    return registry
