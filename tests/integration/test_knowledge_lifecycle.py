"""End-to-end document lifecycle through KnowledgeEngine.handle."""

import pytest

from kbengine.identity import checksum_of, chunk_id_for

URI = "https://x/doc"


@pytest.mark.asyncio
async def test_long_document_round_trip(engine, long_document):
    assert len(long_document) == 3000

    ingested = await engine.handle({"operation": "ingest", "uri": URI, "content": long_document})
    n = ingested.chunks_created
    assert n >= 3
    assert ingested.chunk_ids == [chunk_id_for(URI, i) for i in range(n)]

    document = await engine.handle({"operation": "getByUri", "uri": URI})
    assert [c.chunk_index for c in document.chunks] == list(range(n))
    assert all(c.total_chunks == n for c in document.chunks)
    assert all(len(c.content) <= 1000 for c in document.chunks)
    assert all(c.checksum == checksum_of(c.content) for c in document.chunks)

    middle = document.chunks[1]
    results = await engine.handle({"operation": "search", "query": middle.content})
    assert results.chunks[0].id == middle.id

    deleted = await engine.handle({"operation": "deleteByUri", "uri": URI})
    assert deleted.chunks_deleted == n

    empty = await engine.handle({"operation": "getByUri", "uri": URI})
    assert empty.chunks == []


@pytest.mark.asyncio
async def test_reingest_is_idempotent(engine, sample_text):
    first = await engine.ingest(URI, sample_text)
    second = await engine.ingest(URI, sample_text)

    assert first.chunk_ids == second.chunk_ids
    assert engine.vector_store.count("test-knowledge") == first.chunks_created


@pytest.mark.asyncio
async def test_delete_then_reingest_replaces_document(engine, long_document):
    await engine.ingest(URI, long_document)
    await engine.delete_by_uri(URI)
    replaced = await engine.ingest(URI, "A much shorter revision.")

    document = await engine.get_by_uri(URI)
    assert replaced.chunks_created == 1
    assert [c.content for c in document.chunks] == ["A much shorter revision."]


@pytest.mark.asyncio
async def test_documents_are_isolated(engine, sample_text):
    await engine.ingest("https://x/a", sample_text)
    await engine.ingest("https://x/b", "Services expose Pods on the network.")

    filtered = await engine.search("Services expose Pods", score_threshold=0.0, uri_filter="https://x/b")
    assert {c.uri for c in filtered.chunks} == {"https://x/b"}

    await engine.delete_by_uri("https://x/b")
    remaining = await engine.get_by_uri("https://x/a")
    assert remaining.total_chunks >= 1


@pytest.mark.asyncio
async def test_operations_on_empty_knowledge_base(engine):
    search = await engine.handle({"operation": "search", "query": "anything"})
    deleted = await engine.handle({"operation": "deleteByUri", "uri": URI})
    chunk = await engine.handle({"operation": "getChunk", "id": chunk_id_for(URI, 0)})

    assert search.success and search.chunks == []
    assert deleted.success and deleted.chunks_deleted == 0
    assert chunk.success and chunk.chunk is None
