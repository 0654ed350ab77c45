"""Request and response messages of the knowledge base operations.

Every message serialises with camelCase keys (``chunkIds``, ``totalMatches``)
so one operation-discriminated endpoint can expose all of them.
"""

from enum import StrEnum
from typing import Any, Literal

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from .chunk import KnowledgeChunk


class Operation(StrEnum):
    INGEST = "ingest"
    SEARCH = "search"
    DELETE_BY_URI = "deleteByUri"
    GET_BY_URI = "getByUri"
    GET_CHUNK = "getChunk"


class MatchType(StrEnum):
    """How a search hit was matched. Only SEMANTIC is produced today."""
    SEMANTIC = "semantic"
    KEYWORD = "keyword"
    HYBRID = "hybrid"


class WireModel(BaseModel):
    """Base for messages exchanged with callers."""

    model_config = {
        "populate_by_name": True,
        "alias_generator": to_camel,
    }

    def to_wire(self) -> dict[str, Any]:
        """JSON-compatible dict with camelCase keys."""
        return self.model_dump(by_alias=True, mode="json")


class KnowledgeRequest(WireModel):
    """
    Operation-discriminated request.

    Field requirements depend on ``operation`` and are checked by the
    pipelines, so a missing field is reported with a specific reason
    instead of a generic schema error.

    Attributes:
        operation: One of ``Operation`` (kept as ``str`` so unknown values
            reach the dispatcher)
        uri: Document locator (ingest, deleteByUri, getByUri)
        content: Document text (ingest)
        metadata: Caller context stored with every chunk (ingest)
        query: Natural language query (search)
        limit: Maximum results (search)
        score_threshold: Minimum similarity (search)
        uri_filter: Restrict search to one document (search)
        id: Chunk id (getChunk)
    """

    operation: str
    uri: str | None = None
    content: str | None = None
    metadata: dict[str, Any] | None = None
    query: str | None = None
    limit: int | None = None
    score_threshold: float | None = None
    uri_filter: str | None = None
    id: str | None = None


class IngestResponse(WireModel):
    success: bool = True
    operation: Literal["ingest"] = "ingest"
    chunks_created: int
    chunk_ids: list[str] = Field(default_factory=list)
    uri: str
    message: str


class SearchResultItem(WireModel):
    id: str
    content: str
    score: float
    match_type: MatchType = MatchType.SEMANTIC
    uri: str
    metadata: dict[str, Any] = Field(default_factory=dict)
    chunk_index: int
    total_chunks: int


class SearchResponse(WireModel):
    success: bool = True
    operation: Literal["search"] = "search"
    chunks: list[SearchResultItem] = Field(default_factory=list)
    total_matches: int = 0
    query: str
    message: str


class DeleteByUriResponse(WireModel):
    success: bool = True
    operation: Literal["deleteByUri"] = "deleteByUri"
    uri: str
    chunks_deleted: int = 0
    message: str


class GetByUriResponse(WireModel):
    success: bool = True
    operation: Literal["getByUri"] = "getByUri"
    uri: str
    chunks: list[KnowledgeChunk] = Field(default_factory=list)
    total_chunks: int = 0
    message: str


class GetChunkResponse(WireModel):
    success: bool = True
    operation: Literal["getChunk"] = "getChunk"
    chunk: KnowledgeChunk | None = None
    message: str


class ErrorDetail(WireModel):
    type: str
    message: str
    operation: str | None = None
    hint: str | None = None
    details: dict[str, Any] = Field(default_factory=dict)


class ErrorResponse(WireModel):
    success: Literal[False] = False
    error: ErrorDetail


KnowledgeResponse = (
    IngestResponse
    | SearchResponse
    | DeleteByUriResponse
    | GetByUriResponse
    | GetChunkResponse
    | ErrorResponse
)
