"""Read-only catalog of API endpoint documentation metadata.

The catalog is built once at process start from an in-source table and then
shared (without locking) by the chat orchestration layer and the tools.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Set, Tuple

logger = logging.getLogger(__name__)


class CatalogError(ValueError):
    """Raised when the endpoint table is malformed."""


@dataclass(frozen=True)
class EndpointMeta:
    """Documentation metadata for a single API endpoint."""
    path: str
    method: str
    summary: str
    description: str
    category: str
    doc_page: str
    tags: Tuple[str, ...] = ()
    request_schema: Dict[str, Any] = field(default_factory=dict)
    response_schema: Dict[str, Any] = field(default_factory=dict)
    parameters: List[Dict[str, Any]] = field(default_factory=list)
    requires_auth: bool = True

    @property
    def key(self) -> str:
        return f"{self.method}:{self.path}"

    def search_text(self) -> str:
        """Lower-cased haystack used by keyword search."""
        parts = [self.path, self.summary, self.description, *self.tags]
        return " ".join(parts).lower()

    def to_summary(self) -> Dict[str, Any]:
        return {
            "path": self.path,
            "method": self.method,
            "summary": self.summary,
            "docPage": self.doc_page,
        }

    def to_dict(self) -> Dict[str, Any]:
        """Full JSON representation handed to the model and tool callers."""
        return {
            "path": self.path,
            "method": self.method,
            "summary": self.summary,
            "description": self.description,
            "category": self.category,
            "docPage": self.doc_page,
            "tags": list(self.tags),
            "requestBody": self.request_schema,
            "responseBody": self.response_schema,
            "parameters": self.parameters,
            "requiresAuth": self.requires_auth,
        }


class EndpointCatalog:
    """Index of endpoints keyed by ``METHOD:path`` with a category index."""

    def __init__(self, endpoints: Iterable[EndpointMeta]):
        self._endpoints: Dict[str, EndpointMeta] = {}
        self._category_index: Dict[str, List[str]] = {}

        for meta in endpoints:
            self._register(meta)

        logger.debug(f"Endpoint catalog built with {len(self._endpoints)} entries")

    @classmethod
    def default(cls) -> "EndpointCatalog":
        """Build the catalog from the canonical endpoint table."""
        from .endpoint_table import ENDPOINTS
        return cls(ENDPOINTS)

    def _register(self, meta: EndpointMeta) -> None:
        if not meta.path or not meta.method:
            raise CatalogError(f"Endpoint entry is missing path or method: {meta!r}")
        if not meta.path.startswith("/"):
            raise CatalogError(f"Endpoint path must be absolute: {meta.path}")
        if meta.key in self._endpoints:
            raise CatalogError(f"Duplicate endpoint entry: {meta.key}")

        self._endpoints[meta.key] = meta
        self._category_index.setdefault(meta.category, []).append(meta.key)

    def __len__(self) -> int:
        return len(self._endpoints)

    def __iter__(self):
        return iter(self._endpoints.values())

    def lookup(self, path: str, method: Optional[str] = None) -> Optional[EndpointMeta]:
        """Find an endpoint by path, tolerating partial or prefixed paths.

        Resolution order:
            1. exact ``(method, path)`` match when a method is given
            2. first entry whose stored path equals ``path``
            3. first entry where either path contains the other
        """
        if not path:
            return None

        if method:
            meta = self._endpoints.get(f"{method.upper()}:{path}")
            if meta is not None:
                return meta

        for meta in self._endpoints.values():
            if meta.path == path:
                return meta

        for meta in self._endpoints.values():
            if meta.path in path or path in meta.path:
                return meta

        return None

    def search(self, keyword: str) -> List[EndpointMeta]:
        """Case-insensitive substring search over path, summary, description and tags."""
        needle = keyword.lower()
        return [meta for meta in self._endpoints.values() if needle in meta.search_text()]

    def by_category(self, category: str) -> List[EndpointMeta]:
        return [self._endpoints[key] for key in self._category_index.get(category, [])]

    def categories(self) -> Set[str]:
        return set(self._category_index)
