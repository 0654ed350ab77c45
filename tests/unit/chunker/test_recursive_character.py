"""Tests for the RecursiveCharacterChunker."""

import pytest

from kbengine.chunker import ChunkerFactory, RecursiveCharacterChunker


class TestValidation:
    """Constructor parameter validation."""

    @pytest.mark.parametrize("size", [0, -5, "100", 10.5, True])
    def test_invalid_chunk_size(self, size):
        with pytest.raises(ValueError):
            RecursiveCharacterChunker(chunk_size=size, chunk_overlap=0)

    @pytest.mark.parametrize("overlap", [-1, 100, 150])
    def test_invalid_overlap(self, overlap):
        with pytest.raises(ValueError):
            RecursiveCharacterChunker(chunk_size=100, chunk_overlap=overlap)

    def test_defaults(self):
        chunker = RecursiveCharacterChunker()
        assert chunker.chunk_size == 1000
        assert chunker.chunk_overlap == 200
        assert chunker.separators[0] == "\n\n"
        assert chunker.separators[-1] == ""


class TestSplitText:
    """Behaviour of split_text."""

    @pytest.mark.parametrize("text", ["", "   ", "\n\n\t  \n"])
    def test_empty_or_whitespace_yields_nothing(self, recursive_chunker, text):
        assert recursive_chunker.split_text(text) == []

    def test_short_text_is_single_chunk(self, recursive_chunker):
        assert recursive_chunker.split_text("  Hello world.  ") == ["Hello world."]

    def test_chunks_never_exceed_size(self, small_chunker, sample_text):
        text = (sample_text + "\n") * 20
        chunks = small_chunker.split_text(text)

        assert len(chunks) > 1
        assert all(len(c) <= small_chunker.chunk_size for c in chunks)
        assert all(c == c.strip() and c for c in chunks)

    def test_deterministic(self, small_chunker, sample_text):
        text = sample_text * 5
        assert small_chunker.split_text(text) == small_chunker.split_text(text)

    def test_prefers_paragraph_boundaries(self):
        chunker = RecursiveCharacterChunker(chunk_size=500, chunk_overlap=0)
        text = "A" * 300 + "\n\n" + "B" * 300

        assert chunker.split_text(text) == ["A" * 300, "B" * 300]

    def test_consecutive_chunks_overlap(self):
        chunker = RecursiveCharacterChunker(chunk_size=50, chunk_overlap=10)
        text = " ".join(f"w{i}" for i in range(100))

        chunks = chunker.split_text(text)

        assert len(chunks) > 2
        for previous, current in zip(chunks, chunks[1:]):
            assert current.split()[0] in previous.split()

    def test_hard_split_without_separators(self):
        chunker = RecursiveCharacterChunker(chunk_size=1000, chunk_overlap=200)
        text = "x" * 2500

        chunks = chunker.split_text(text)

        assert [len(c) for c in chunks] == [1000, 1000, 900]

    def test_custom_separators_fall_back_to_character_split(self):
        chunker = RecursiveCharacterChunker(chunk_size=10, chunk_overlap=2, separators=["\n"])
        text = "abcdefghijklmnopqrstuvwxyz"

        assert chunker.split_text(text) == ["abcdefghij", "ijklmnopqr", "qrstuvwxyz"]

    def test_three_thousand_character_document(self, recursive_chunker, long_document):
        chunks = recursive_chunker.split_text(long_document)

        assert len(long_document) == 3000
        assert len(chunks) >= 3
        assert all(len(c) <= 1000 for c in chunks)

    def test_unicode_text(self):
        chunker = RecursiveCharacterChunker(chunk_size=20, chunk_overlap=5)
        text = "Überprüfung der Größe. " * 10

        chunks = chunker.split_text(text)

        assert all(len(c) <= 20 for c in chunks)
        assert "Größe" in "".join(chunks)


class TestChunkerFactory:
    """Tests for ChunkerFactory."""

    def test_create_recursive(self):
        chunker = ChunkerFactory.create("recursive", chunk_size=300, chunk_overlap=30)
        assert isinstance(chunker, RecursiveCharacterChunker)
        assert chunker.chunk_size == 300

    def test_unknown_type(self):
        with pytest.raises(ValueError, match="Unknown chunker type"):
            ChunkerFactory.create("semantic")

    def test_register_rejects_non_chunker(self):
        with pytest.raises(TypeError):
            ChunkerFactory.register("bad", dict)

    def test_list_types(self):
        assert "recursive" in ChunkerFactory.list_types()
