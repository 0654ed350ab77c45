"""End-to-end tests of the HTTP API."""

API = "/api/v1/knowledge"
URI = "https://docs.example.com/runbooks/restart.md"

RUNBOOK = (
    "Restarting the ingestion worker.\n\n"
    "Drain the queue before restarting so no batch is processed twice. "
    "Then restart the worker and watch the logs for the ready message."
)


def test_ingest_search_delete_flow(client):
    ingested = client.post(API, json={
        "operation": "ingest", "uri": URI, "content": RUNBOOK, "metadata": {"team": "ops"},
    })
    assert ingested.status_code == 200
    body = ingested.json()
    assert body["success"] is True
    assert body["chunksCreated"] == len(body["chunkIds"]) == 1

    searched = client.post(API, json={"operation": "search", "query": RUNBOOK, "limit": 5})
    assert searched.status_code == 200
    hit = searched.json()["chunks"][0]
    assert hit["uri"] == URI
    assert hit["metadata"] == {"team": "ops"}
    assert hit["matchType"] == "semantic"
    assert hit["chunkIndex"] == 0
    assert hit["totalChunks"] == 1

    by_uri = client.post(API, json={"operation": "getByUri", "uri": URI}).json()
    assert by_uri["totalChunks"] == 1
    assert by_uri["chunks"][0]["ingestedAt"]

    chunk = client.post(API, json={"operation": "getChunk", "id": body["chunkIds"][0]}).json()
    assert chunk["chunk"]["content"] == RUNBOOK

    deleted = client.post(API, json={"operation": "deleteByUri", "uri": URI}).json()
    assert deleted["chunksDeleted"] == 1

    after = client.post(API, json={"operation": "search", "query": RUNBOOK}).json()
    assert after["chunks"] == []
    assert after["message"] == "No matching documents found"


def test_missing_field_is_400(client):
    response = client.post(API, json={"operation": "search"})

    assert response.status_code == 400
    assert response.json()["error"]["message"] == "Missing required parameter: query"


def test_unsupported_operation_is_400(client):
    response = client.post(API, json={"operation": "reindex"})

    assert response.status_code == 400
    error = response.json()["error"]
    assert error["message"] == "Unsupported operation: reindex"
    assert "ingest" in error["details"]["supportedOperations"]


def test_malformed_body_is_400(client):
    response = client.post(API, json={"operation": "search", "query": "q", "limit": "many"})

    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert body["error"]["type"] == "InvalidRequestError"
    assert body["error"]["details"]["errors"][0]["loc"] == ["body", "limit"]


def test_oversized_document_is_400(client, engine):
    engine.ingestion.max_document_size = 16

    response = client.post(API, json={"operation": "ingest", "uri": URI, "content": "x" * 17})

    assert response.status_code == 400
    assert response.json()["error"]["details"] == {"maxSize": 16, "actualSize": 17}


def test_healthz(client):
    response = client.get("/healthz")

    assert response.status_code == 200
    assert response.json()["embedder"]["provider"] == "MockEmbedder"
