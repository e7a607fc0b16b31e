"""
Helpers for inspecting chunk output.
"""

from statistics import pstdev
from typing import Callable


def analyze_chunks(chunks: list[str], length_function: Callable[[str], int] = len) -> dict:
    """
    Size statistics for a list of chunks.

    Args:
        chunks: Chunk texts
        length_function: Size measure; characters by default

    Returns:
        num_chunks, total_size, avg/min/max_chunk_size and size_std, with
        zeros for an empty list
    """
    sizes = [length_function(chunk) for chunk in chunks]
    if not sizes:
        return dict.fromkeys(
            ["num_chunks", "total_size", "avg_chunk_size", "min_chunk_size", "max_chunk_size", "size_std"], 0
        )

    return {
        "num_chunks": len(sizes),
        "total_size": sum(sizes),
        "avg_chunk_size": round(sum(sizes) / len(sizes), 1),
        "min_chunk_size": min(sizes),
        "max_chunk_size": max(sizes),
        "size_std": round(pstdev(sizes), 1),
    }


def find_oversized_chunks(
    chunks: list[str], chunk_size: int, length_function: Callable[[str], int] = len
) -> list[int]:
    """Indices of chunks whose length exceeds chunk_size."""
    return [i for i, chunk in enumerate(chunks) if length_function(chunk) > chunk_size]


def preview_chunks(chunks: list[str], max_preview: int = 100) -> list[str]:
    """One-line previews, truncated to max_preview characters with escaped whitespace."""
    previews = []
    for number, chunk in enumerate(chunks, 1):
        text = chunk[:max_preview] + ("..." if len(chunk) > max_preview else "")
        text = text.replace("\n", "\\n").replace("\t", "\\t")
        previews.append(f"Chunk {number}: {text}")
    return previews
