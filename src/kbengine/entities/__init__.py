"""Entities shared across the engine: chunks, points and operation messages."""

from .chunk import KnowledgeChunk, utc_now_iso
from .operations import (
    DeleteByUriResponse,
    ErrorDetail,
    ErrorResponse,
    GetByUriResponse,
    GetChunkResponse,
    IngestResponse,
    KnowledgeRequest,
    KnowledgeResponse,
    MatchType,
    Operation,
    SearchResponse,
    SearchResultItem,
)
from .point import PayloadFilter, ScoredPoint, VectorPoint

__all__ = [
    "KnowledgeChunk",
    "utc_now_iso",
    "VectorPoint",
    "ScoredPoint",
    "PayloadFilter",
    "Operation",
    "MatchType",
    "KnowledgeRequest",
    "KnowledgeResponse",
    "IngestResponse",
    "SearchResultItem",
    "SearchResponse",
    "DeleteByUriResponse",
    "GetByUriResponse",
    "GetChunkResponse",
    "ErrorDetail",
    "ErrorResponse",
]
