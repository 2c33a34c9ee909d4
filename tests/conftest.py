"""Shared fixtures for the documentation assistant tests."""

import pytest
from unittest.mock import Mock
from fastapi.testclient import TestClient

from catalog import EndpointCatalog
from clients.generation_client import GenerationClient, GenerationResult
from clients.search_client import DocumentSearchClient, DocSearchResult
from config import AssistantConfig
from server.assistant import DocAssistant
from server.rag_api import create_app


@pytest.fixture
def catalog():
    """Catalog built from the canonical endpoint table."""
    return EndpointCatalog.default()


@pytest.fixture
def doc_results():
    return [
        DocSearchResult(
            title="Update campaign budget",
            url="https://docs.iqm.com/guidelines/campaign-api#update-campaign-budget",
            content="PATCH /api/v3/campaign/budget updates the total or daily budget.",
            relevance_score=1.0,
        ),
        DocSearchResult(
            title="Create a campaign",
            url="https://docs.iqm.com/quickstart-guides/create-a-campaign-quickstart",
            content="Campaigns are created with POST /api/v3/campaign.",
            relevance_score=0.5,
        ),
    ]


@pytest.fixture
def search_client(doc_results):
    """Search client double returning canned documentation hits."""
    client = Mock(spec=DocumentSearchClient)
    client.configured = True
    client.search.return_value = doc_results
    return client


@pytest.fixture
def generation_client():
    """Generation client double with a healthy backend."""
    client = Mock(spec=GenerationClient)
    client.model_name = "mistral-7b-local"
    client.complete.return_value = GenerationResult(
        text="Use PATCH /api/v3/campaign/budget to change a budget.",
        model="mistral-7b-local",
        success=True,
    )
    client.is_available.return_value = True
    return client


@pytest.fixture
def assistant(catalog, search_client, generation_client):
    return DocAssistant(catalog, search_client, generation_client)


@pytest.fixture
def config():
    return AssistantConfig(server_threads=2)


@pytest.fixture
def client(config, assistant):
    """Test client running the app lifespan."""
    with TestClient(create_app(config, assistant), raise_server_exceptions=False) as test_client:
        yield test_client
