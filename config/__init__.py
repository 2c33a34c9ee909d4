"""Configuration module for the documentation assistant.

Provides the environment-driven service configuration.
"""

from .settings import (
    AssistantConfig,
    DEFAULT_GENERATION_URL,
    DEFAULT_SEARCH_INDEX
)

__all__ = [
    'AssistantConfig',
    'DEFAULT_GENERATION_URL',
    'DEFAULT_SEARCH_INDEX'
]
