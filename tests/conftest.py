"""Pytest configuration and global fixtures for kbengine tests."""

from pathlib import Path

import pytest

from kbengine.chunker import RecursiveCharacterChunker
from kbengine.config.models import ComponentConfig, EngineConfig
from kbengine.embedder import MockEmbedder
from kbengine.engine import KnowledgeEngine
from kbengine.vdb import InMemoryVectorStore

COLLECTION = "test-knowledge"


@pytest.fixture
def sample_text():
    return (
        "Kubernetes Deployments manage ReplicaSets.\n\n"
        "A Deployment provides declarative updates for Pods and ReplicaSets. "
        "You describe a desired state and the controller changes the actual state "
        "to the desired state at a controlled rate.\n\n"
        "Services expose an application running on a set of Pods as a network service."
    )


@pytest.fixture
def long_document():
    """A 3000-character document made of numbered sentences."""
    sentences = []
    i = 0
    while sum(len(s) for s in sentences) < 3000:
        sentences.append(f"Sentence {i} explains how operators reconcile cluster state. ")
        i += 1
    return "".join(sentences)[:3000]


# ==================== Component Fixtures ====================

@pytest.fixture
def mock_embedder():
    """Deterministic offline embedder."""
    return MockEmbedder(dimension=64)


@pytest.fixture
def recursive_chunker():
    return RecursiveCharacterChunker(chunk_size=1000, chunk_overlap=200)


@pytest.fixture
def small_chunker():
    return RecursiveCharacterChunker(chunk_size=120, chunk_overlap=20)


@pytest.fixture
def in_memory_vector_store():
    return InMemoryVectorStore()


@pytest.fixture
def mock_vector_store(mocker):
    """Mock the BaseVectorStore interface."""
    from kbengine.vdb.base import BaseVectorStore
    return mocker.Mock(spec=BaseVectorStore)


@pytest.fixture
def engine_config():
    return EngineConfig(
        embedder=ComponentConfig(type="mock", params={"dimension": 64}),
        vector_store=ComponentConfig(type="in_memory"),
        collection_name=COLLECTION,
        request_timeout=5.0,
    )


@pytest.fixture
def engine(engine_config):
    """Engine wired with the mock embedder and an in-memory store."""
    return KnowledgeEngine(engine_config)


# ==================== Pytest Configuration ====================

def pytest_configure(config):
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "integration: Integration tests")


def pytest_collection_modifyitems(config, items):
    root = Path(__file__).parent
    for item in items:
        try:
            rel_path = Path(item.fspath).relative_to(root)
        except ValueError:
            continue
        if "unit" in rel_path.parts:
            item.add_marker(pytest.mark.unit)
        elif "integration" in rel_path.parts:
            item.add_marker(pytest.mark.integration)
