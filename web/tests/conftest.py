"""Fixtures for end-to-end API tests against an in-process engine."""

import pytest
from fastapi.testclient import TestClient

from kbengine import KnowledgeEngine
from kbengine.config import ComponentConfig, EngineConfig
from web.app import create_app


@pytest.fixture
def engine():
    return KnowledgeEngine(
        EngineConfig(
            embedder=ComponentConfig(type="mock", params={"dimension": 64}),
            vector_store=ComponentConfig(type="in_memory"),
            collection_name="api-test",
        )
    )


@pytest.fixture
def client(engine):
    with TestClient(create_app(engine=engine)) as test_client:
        yield test_client
