"""Deterministic chunk identity and content checksums.

Chunk ids are UUID v5 values over ``"<uri>#<chunkIndex>"``. Re-ingesting a
document with the same chunk boundaries therefore rewrites the same points
instead of inserting duplicates.
"""

import hashlib
import uuid

# Value of uuid.NAMESPACE_DNS; must never change or every stored id is orphaned
KNOWLEDGE_NAMESPACE = uuid.UUID("6ba7b810-9dad-11d1-80b4-00c04fd430c8")


def chunk_id_for(uri: str, chunk_index: int) -> str:
    """Return the stable identifier of chunk ``chunk_index`` of ``uri``.

    Args:
        uri: Absolute locator of the source document
        chunk_index: Zero-based position of the chunk

    Returns:
        Canonical string form of the UUID v5

    Raises:
        ValueError: If uri is empty or chunk_index is negative
    """
    if not uri:
        raise ValueError("uri must be a non-empty string")
    if chunk_index < 0:
        raise ValueError("chunk_index must be >= 0")
    return str(uuid.uuid5(KNOWLEDGE_NAMESPACE, f"{uri}#{chunk_index}"))


def checksum_of(text: str) -> str:
    """Return the SHA-256 hex digest of ``text`` encoded as UTF-8."""
    return hashlib.sha256(text.encode("utf-8")).hexdigest()
