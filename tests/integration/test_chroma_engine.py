"""Engine against a real in-process Chroma client."""

import uuid

import chromadb
import pytest

from kbengine import KnowledgeEngine
from kbengine.vdb import ChromaVectorStore

URI = "https://docs.example.com/guide"


@pytest.fixture
def chroma_engine(engine_config):
    store = ChromaVectorStore(client=chromadb.EphemeralClient())
    config = engine_config.model_copy(update={"collection_name": f"kb-{uuid.uuid4().hex[:8]}"})
    engine = KnowledgeEngine(config, vector_store=store)
    yield engine
    store.delete_collection(config.collection_name)


@pytest.mark.asyncio
async def test_chroma_lifecycle(chroma_engine, sample_text):
    ingested = await chroma_engine.ingest(URI, sample_text, {"team": "platform", "tags": ["k8s"]})
    assert chroma_engine.vector_store.collection_exists(chroma_engine.config.collection_name)

    document = await chroma_engine.get_by_uri(URI)
    assert [c.id for c in document.chunks] == ingested.chunk_ids
    assert document.chunks[0].metadata == {"team": "platform", "tags": ["k8s"]}

    target = document.chunks[-1]
    results = await chroma_engine.search(target.content, uri_filter=URI)
    assert results.chunks[0].id == target.id
    assert results.chunks[0].score == pytest.approx(1.0, abs=1e-3)

    chunk = await chroma_engine.get_chunk(target.id)
    assert chunk.chunk == target

    deleted = await chroma_engine.delete_by_uri(URI)
    assert deleted.chunks_deleted == ingested.chunks_created
    assert (await chroma_engine.get_by_uri(URI)).chunks == []


@pytest.mark.asyncio
async def test_chroma_missing_collection(chroma_engine):
    response = await chroma_engine.get_by_uri(URI)
    assert response.chunks == []
