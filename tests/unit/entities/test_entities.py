"""Tests for chunk, point and operation message models."""

import pytest
from pydantic import ValidationError

from kbengine.entities import (
    ErrorDetail,
    ErrorResponse,
    IngestResponse,
    KnowledgeChunk,
    KnowledgeRequest,
    MatchType,
    PayloadFilter,
    SearchResultItem,
)


@pytest.fixture
def chunk():
    return KnowledgeChunk(
        id="4f1c1f7e-0000-5000-8000-000000000000",
        content="Deployments manage ReplicaSets.",
        uri="https://x/doc",
        checksum="abc",
        chunk_index=0,
        total_chunks=2,
        ingested_at="2024-01-01T00:00:00+00:00",
        metadata={"source": "git", "tags": ["k8s"]},
    )


class TestKnowledgeChunk:

    def test_payload_is_camel_case_without_id(self, chunk):
        payload = chunk.to_payload()

        assert "id" not in payload
        assert set(payload) == {
            "content", "uri", "checksum", "chunkIndex", "totalChunks", "ingestedAt", "metadata"
        }
        assert payload["chunkIndex"] == 0
        assert payload["metadata"] == {"source": "git", "tags": ["k8s"]}

    def test_from_payload_restores_chunk(self, chunk):
        restored = KnowledgeChunk.from_payload(chunk.id, chunk.to_payload())
        assert restored == chunk

    def test_from_payload_defaults_missing_metadata(self, chunk):
        payload = chunk.to_payload()
        payload["metadata"] = None

        assert KnowledgeChunk.from_payload(chunk.id, payload).metadata == {}

    def test_is_frozen(self, chunk):
        with pytest.raises(ValidationError):
            chunk.content = "changed"

    def test_rejects_negative_index(self, chunk):
        data = chunk.model_dump()
        data["chunk_index"] = -1
        with pytest.raises(ValidationError):
            KnowledgeChunk(**data)


class TestPayloadFilter:

    def test_match_builds_conditions(self):
        assert PayloadFilter.match(uri="https://x/doc").must == {"uri": "https://x/doc"}

    def test_matches_exact_values_only(self):
        f = PayloadFilter.match(uri="https://x/doc")

        assert f.matches({"uri": "https://x/doc", "content": "a"})
        assert not f.matches({"uri": "https://x/doc/sub"})
        assert not f.matches({})

    def test_empty_filter_matches_everything(self):
        assert PayloadFilter().matches({"anything": 1})


class TestOperationMessages:

    def test_request_accepts_camel_case(self):
        request = KnowledgeRequest.model_validate({
            "operation": "search",
            "query": "rollouts",
            "scoreThreshold": 0.5,
            "uriFilter": "https://x/doc",
        })

        assert request.score_threshold == 0.5
        assert request.uri_filter == "https://x/doc"
        assert request.limit is None

    def test_request_accepts_snake_case(self):
        request = KnowledgeRequest(operation="search", query="q", uri_filter="u")
        assert request.uri_filter == "u"

    def test_ingest_response_wire_format(self):
        wire = IngestResponse(chunks_created=1, chunk_ids=["a"], uri="u", message="m").to_wire()

        assert wire == {
            "success": True,
            "operation": "ingest",
            "chunksCreated": 1,
            "chunkIds": ["a"],
            "uri": "u",
            "message": "m",
        }

    def test_search_item_defaults_to_semantic(self):
        item = SearchResultItem(
            id="a", content="c", score=0.9, uri="u", chunk_index=0, total_chunks=1
        )

        assert item.match_type == MatchType.SEMANTIC
        assert item.to_wire()["matchType"] == "semantic"

    def test_error_response_wire_format(self):
        wire = ErrorResponse(
            error=ErrorDetail(type="InvalidRequestError", message="Missing", hint="Fix it")
        ).to_wire()

        assert wire["success"] is False
        assert wire["error"]["message"] == "Missing"
        assert wire["error"]["hint"] == "Fix it"
        assert wire["error"]["details"] == {}
