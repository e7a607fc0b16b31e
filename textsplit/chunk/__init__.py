"""
Chunking module for splitting texts into size-bounded, overlapping chunks.

Splitters share one configuration and one length function; every chunk they
produce can be mapped back to its offsets and lines in the source text.
"""

from .base import ChunkHeaderOptions, SplitterConfig, TextSplitter
from .character import (
    CharacterTextSplitter,
    LatexTextSplitter,
    MarkdownTextSplitter,
    RecursiveCharacterTextSplitter,
    select_separator,
)
from .merge import merge_splits, split_on_separator
from .metadata import TextChunkContext, add_line_numbers_to_metadata, count_newlines, enrich_chunks
from .separators import SEPARATORS_BY_LANGUAGE, SUPPORTED_LANGUAGES, get_separators_for_language
from .token import TokenTextSplitter
from .utils import analyze_chunks, find_oversized_chunks, preview_chunks


__all__ = [
    # Splitters
    "TextSplitter",
    "CharacterTextSplitter",
    "RecursiveCharacterTextSplitter",
    "MarkdownTextSplitter",
    "LatexTextSplitter",
    "TokenTextSplitter",
    # Configuration
    "SplitterConfig",
    "ChunkHeaderOptions",
    "SEPARATORS_BY_LANGUAGE",
    "SUPPORTED_LANGUAGES",
    "get_separators_for_language",
    # Building blocks
    "select_separator",
    "split_on_separator",
    "merge_splits",
    "TextChunkContext",
    "enrich_chunks",
    "count_newlines",
    "add_line_numbers_to_metadata",
    # Utility functions
    "analyze_chunks",
    "find_oversized_chunks",
    "preview_chunks",
]
