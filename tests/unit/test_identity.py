"""Tests for chunk identity and checksums."""

import uuid

import pytest

from kbengine.identity import KNOWLEDGE_NAMESPACE, checksum_of, chunk_id_for


class TestChunkId:

    def test_matches_uuid5_of_uri_and_index(self):
        expected = str(uuid.uuid5(uuid.NAMESPACE_DNS, "https://x/doc#0"))
        assert chunk_id_for("https://x/doc", 0) == expected
        assert KNOWLEDGE_NAMESPACE == uuid.NAMESPACE_DNS

    def test_is_stable(self):
        assert chunk_id_for("git://org/repo/a.md", 3) == chunk_id_for("git://org/repo/a.md", 3)

    def test_differs_by_index_and_uri(self):
        ids = {
            chunk_id_for("https://x/doc", 0),
            chunk_id_for("https://x/doc", 1),
            chunk_id_for("https://x/other", 0),
        }
        assert len(ids) == 3

    def test_is_version_5_uuid(self):
        assert uuid.UUID(chunk_id_for("https://x/doc", 7)).version == 5

    def test_rejects_empty_uri(self):
        with pytest.raises(ValueError):
            chunk_id_for("", 0)

    def test_rejects_negative_index(self):
        with pytest.raises(ValueError):
            chunk_id_for("https://x/doc", -1)


class TestChecksum:

    def test_sha256_hex(self):
        assert checksum_of("hello") == (
            "2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824"
        )

    def test_changes_with_content(self):
        assert checksum_of("a") != checksum_of("b")

    def test_utf8_encoding(self):
        assert len(checksum_of("Größe")) == 64
