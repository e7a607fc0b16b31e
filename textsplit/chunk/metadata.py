"""
Positional metadata for chunks.

Chunks are located back in their source text by forward substring search,
and a running line counter is kept in step with the located offsets.
"""

from dataclasses import dataclass
from typing import Any, Optional

from .merge import Measure


@dataclass
class TextChunkContext:
    """Where a chunk sits in its source text and in the overall output."""

    chunk: str
    chunk_start_index: int
    chunk_end_index: int
    chunk_start_line: int
    chunk_line_count: int
    text_ordinal: int
    global_chunk_ordinal: int
    text_chunk_ordinal: int


def count_newlines(text: str, start: Optional[int] = None, end: Optional[int] = None) -> int:
    """Count "\\n" characters in text[start:end]."""
    return text[start:end].count("\n")


def add_line_numbers_to_metadata(metadata: dict[str, Any], context: TextChunkContext) -> dict[str, Any]:
    """
    Default metadata hook: record the chunk's line range under "loc".

    An existing "loc" mapping keeps its keys and receives "from"/"to"
    directly; otherwise "loc" becomes {"lines": {"from": ..., "to": ...}}.
    """
    lines = {
        "from": context.chunk_start_line,
        "to": context.chunk_start_line + context.chunk_line_count,
    }
    existing = metadata.get("loc")
    if isinstance(existing, dict):
        metadata["loc"] = {**existing, **lines}
    else:
        metadata["loc"] = {"lines": lines}
    return metadata


async def enrich_chunks(
    text: str,
    chunks: list[str],
    measure: Measure,
    text_ordinal: int = 1,
    global_offset: int = 0,
) -> list[TextChunkContext]:
    """
    Locate each chunk in its source text and attribute a line range to it.

    Args:
        text: Source text the chunks were produced from
        chunks: Chunks in emission order
        measure: Async length function used for chunk end offsets
        text_ordinal: 1-based position of the source text
        global_offset: Number of chunks already produced for earlier texts

    Returns:
        One TextChunkContext per chunk, in the same order

    Note:
        Each search starts one character after the previous chunk's start,
        so repeated text is matched left to right and never re-matched to an
        earlier occurrence.
    """
    contexts = []
    line_counter = 1
    prev_chunk = None
    prev_index = -1

    for j, chunk in enumerate(chunks):
        index = text.find(chunk, prev_index + 1)

        if prev_chunk is None:
            line_counter += count_newlines(text, 0, index)
        else:
            prev_end = prev_index + await measure(prev_chunk)
            if prev_end < index:
                line_counter += count_newlines(text, int(prev_end), index)
            elif prev_end > index:
                # Overlap: the start of this chunk repeats lines already counted
                line_counter -= count_newlines(text, index, int(prev_end))

        line_count = count_newlines(chunk)
        contexts.append(
            TextChunkContext(
                chunk=chunk,
                chunk_start_index=index,
                chunk_end_index=index + await measure(chunk),
                chunk_start_line=line_counter,
                chunk_line_count=line_count,
                text_ordinal=text_ordinal,
                global_chunk_ordinal=global_offset + j,
                text_chunk_ordinal=j + 1,
            )
        )
        line_counter += line_count
        prev_chunk = chunk
        prev_index = index

    return contexts
