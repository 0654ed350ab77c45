"""KnowledgeChunk entity - the unit of storage and retrieval."""

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


def utc_now_iso() -> str:
    """ISO 8601 timestamp in UTC, used for ``ingestedAt``."""
    return datetime.now(timezone.utc).isoformat()


class KnowledgeChunk(BaseModel):
    """
    A bounded segment of a source document.

    There is no separate document record: the set of chunks sharing a ``uri``
    is the document. The embedding lives only in the vector store as the
    point's vector and is never part of this model.

    Attributes:
        id: UUID v5 of ``"<uri>#<chunk_index>"``
        content: Chunk text
        uri: Absolute locator of the source document (grouping key)
        checksum: SHA-256 hex of ``content``
        chunk_index: Zero-based position within the document
        total_chunks: Number of chunks the document was split into
        ingested_at: ISO 8601 timestamp set at storage time
        metadata: Caller-supplied, source-specific context
    """

    id: str
    content: str
    uri: str
    checksum: str
    chunk_index: int = Field(..., ge=0)
    total_chunks: int = Field(..., ge=1)
    ingested_at: str
    metadata: dict[str, Any] = Field(default_factory=dict)

    model_config = {
        "frozen": True,
        "populate_by_name": True,
        "alias_generator": to_camel,
    }

    def to_payload(self) -> dict[str, Any]:
        """Build the vector store payload: every field except ``id``, camelCase keys."""
        return self.model_dump(by_alias=True, exclude={"id"})

    @classmethod
    def from_payload(cls, point_id: str, payload: dict[str, Any]) -> "KnowledgeChunk":
        """Rebuild a chunk from a stored point id and payload."""
        return cls.model_validate(
            {**payload, "id": point_id, "metadata": payload.get("metadata") or {}}
        )
