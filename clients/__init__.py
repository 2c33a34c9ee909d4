"""Clients for the external search and text-generation services."""

from .search_client import DocumentSearchClient, DocSearchResult
from .generation_client import GenerationClient, GenerationParams, GenerationResult

__all__ = [
    'DocumentSearchClient',
    'DocSearchResult',
    'GenerationClient',
    'GenerationParams',
    'GenerationResult',
]
