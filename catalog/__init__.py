"""API endpoint documentation catalog."""

from .endpoint_catalog import CatalogError, EndpointCatalog, EndpointMeta

__all__ = [
    'CatalogError',
    'EndpointCatalog',
    'EndpointMeta',
]
