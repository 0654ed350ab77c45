"""Chunker module for text splitting.

Chunkers turn a document's text into bounded, overlapping segments; the
factory selects the implementation named in configuration.
"""

from .base import BaseChunker
from .factory import ChunkerFactory
from .providers.recursive_character import RecursiveCharacterChunker

__all__ = ["BaseChunker", "RecursiveCharacterChunker", "ChunkerFactory"]
