"""Recursive character-based text chunker with semantic awareness.

This chunker implements a hierarchical splitting strategy similar to LangChain's
RecursiveCharacterTextSplitter, prioritizing semantic boundaries.
"""

from loguru import logger

from ...utils.performance import timed
from ..base import BaseChunker


class RecursiveCharacterChunker(BaseChunker):
    """Recursively chunks text using a hierarchy of separators.

    The largest separator present in the text is tried first; pieces that are
    still too large are split again with the next, smaller separators:
    1. Double newlines (paragraphs)
    2. Single newlines (lines)
    3. Sentence and clause ends (". ", "! ", "? ", "; ", ", ")
    4. Spaces (words)
    5. Characters (last resort)

    Consecutive chunks share up to ``chunk_overlap`` characters of context.
    No chunk is ever longer than ``chunk_size``.

    Attributes:
        chunk_size: Maximum characters per chunk
        chunk_overlap: Maximum characters shared by consecutive chunks
        separators: List of separator strings in order of preference
        keep_separator: Whether to keep the separator in the chunks
    """

    DEFAULT_SEPARATORS = [
        "\n\n",
        "\n",
        ". ",
        "! ",
        "? ",
        "; ",
        ", ",
        " ",
        "",
    ]

    def __init__(
        self,
        chunk_size: int = 1000,
        chunk_overlap: int = 200,
        separators: list[str] | None = None,
        keep_separator: bool = True,
    ):
        """Initialize the recursive character chunker.

        Args:
            chunk_size: Maximum characters per chunk
            chunk_overlap: Characters to overlap between chunks
            separators: Custom separator list (uses defaults if None)
            keep_separator: Whether to keep separators in chunks

        Raises:
            ValueError: If chunk_size is not a positive int or overlap is
                outside [0, chunk_size)
        """
        if isinstance(chunk_size, bool) or not isinstance(chunk_size, int) or chunk_size <= 0:
            raise ValueError("chunk_size must be a positive integer")
        if isinstance(chunk_overlap, bool) or not isinstance(chunk_overlap, int):
            raise ValueError("chunk_overlap must be an integer")
        if chunk_overlap < 0 or chunk_overlap >= chunk_size:
            raise ValueError("chunk_overlap must be in [0, chunk_size)")

        self.chunk_size = chunk_size
        self.chunk_overlap = chunk_overlap
        self.separators = list(separators) if separators else list(self.DEFAULT_SEPARATORS)
        self.keep_separator = keep_separator

        logger.debug(
            f"Initialized RecursiveCharacterChunker: "
            f"size={chunk_size}, overlap={chunk_overlap}, "
            f"separators={len(self.separators)}"
        )

    @timed("Chunking", threshold_ms=50)
    def split_text(self, text: str) -> list[str]:
        """Split text into stripped, non-empty chunks.

        Args:
            text: Document text

        Returns:
            Chunks in document order, each at most ``chunk_size`` characters
        """
        if not text or not text.strip():
            return []

        pieces = self._split_text_recursive(text, self.separators)
        chunks = [piece.strip() for piece in pieces if piece.strip()]

        logger.debug(
            f"Split {len(text)} characters into {len(chunks)} chunks "
            f"(avg size: {sum(len(c) for c in chunks) / len(chunks):.0f})"
        )
        return chunks

    def _split_text_recursive(self, text: str, separators: list[str]) -> list[str]:
        """Recursively split text using a hierarchy of separators.

        Args:
            text: Text to split
            separators: List of separators to try in order

        Returns:
            List of text chunks
        """
        # Pick the first separator that actually occurs in the text
        separator = separators[-1] if separators else ""
        remaining: list[str] = []
        for i, candidate in enumerate(separators):
            if candidate == "":
                separator = ""
                break
            if candidate in text:
                separator = candidate
                remaining = separators[i + 1:]
                break

        splits = self._split_by_separator(text, separator)
        joiner = "" if self.keep_separator else separator

        final_chunks: list[str] = []
        fitting: list[str] = []

        for split in splits:
            if len(split) <= self.chunk_size:
                fitting.append(split)
                continue

            # Flush what fits before descending into the oversize piece
            if fitting:
                final_chunks.extend(self._merge_splits(fitting, joiner))
                fitting = []

            if remaining:
                final_chunks.extend(self._split_text_recursive(split, remaining))
            else:
                final_chunks.extend(self._split_by_character(split))

        if fitting:
            final_chunks.extend(self._merge_splits(fitting, joiner))

        return final_chunks

    def _split_by_separator(self, text: str, separator: str) -> list[str]:
        """Split text by a separator, handling edge cases.

        Args:
            text: Text to split
            separator: Separator string

        Returns:
            List of split pieces (non-empty)
        """
        if separator == "":
            return list(text)

        if separator not in text:
            return [text]

        if self.keep_separator:
            # Keep separator at the end of each piece
            splits = text.split(separator)
            result = [split + separator for split in splits[:-1] if split]
            if splits[-1]:
                result.append(splits[-1])
            return result

        return [s for s in text.split(separator) if s]

    def _merge_splits(self, splits: list[str], joiner: str) -> list[str]:
        """Merge small splits into chunks of at most ``chunk_size``.

        When a chunk is emitted, splits are dropped from its front until what
        is left fits in ``chunk_overlap`` and leaves room for the next split;
        the remainder opens the following chunk.

        Args:
            splits: Pieces no longer than ``chunk_size``
            joiner: String placed between merged pieces

        Returns:
            Merged chunks
        """
        joiner_len = len(joiner)
        chunks: list[str] = []
        current: list[str] = []
        total = 0

        for split in splits:
            split_len = len(split)
            added = split_len + (joiner_len if current else 0)

            if current and total + added > self.chunk_size:
                chunks.append(joiner.join(current))

                while current and (
                    total > self.chunk_overlap
                    or total + split_len + joiner_len > self.chunk_size
                ):
                    total -= len(current[0]) + (joiner_len if len(current) > 1 else 0)
                    current.pop(0)

            current.append(split)
            total += split_len + (joiner_len if len(current) > 1 else 0)

        if current:
            chunks.append(joiner.join(current))

        return chunks

    def _split_by_character(self, text: str) -> list[str]:
        """Split text by character count when all else fails.

        Args:
            text: Text to split

        Returns:
            List of character-based chunks
        """
        chunks = []
        step = self.chunk_size - self.chunk_overlap
        start = 0

        while start < len(text):
            chunks.append(text[start:start + self.chunk_size])
            if start + self.chunk_size >= len(text):
                break
            start += step

        return chunks
