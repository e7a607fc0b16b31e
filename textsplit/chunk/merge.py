"""
Fragment splitting and the greedy merge window.

Fragments are measured one at a time and in order: the running total and
the eviction loop below depend on every earlier measurement.
"""

import logging
import re
from typing import Awaitable, Callable, Optional, Union


logger = logging.getLogger(__name__)

Measure = Callable[[str], Awaitable[Union[int, float]]]


def split_on_separator(text: str, separator: str, keep_separator: bool) -> list[str]:
    """
    Split text on a literal separator, dropping empty fragments.

    Args:
        text: Text to split
        separator: Literal delimiter; the empty string splits into characters
        keep_separator: Keep the separator at the start of the following
            fragment instead of discarding it

    Returns:
        List of non-empty fragments in source order
    """
    if separator:
        if keep_separator:
            splits = re.split(f"(?={re.escape(separator)})", text)
        else:
            splits = text.split(separator)
    else:
        splits = list(text)
    return [s for s in splits if s != ""]


def join_fragments(fragments: list[str], separator: str) -> Optional[str]:
    """Join fragments and strip the result; None if nothing is left."""
    text = separator.join(fragments).strip()
    return text or None


async def merge_splits(
    splits: list[str],
    separator: str,
    chunk_size: int,
    chunk_overlap: int,
    measure: Measure,
) -> list[str]:
    """
    Greedily pack fragments into chunks of at most chunk_size, carrying up to
    chunk_overlap of trailing content into the next chunk.

    Args:
        splits: Fragments in source order
        separator: Glue placed between fragments of one chunk
        chunk_size: Maximum measured length of a multi-fragment chunk
        chunk_overlap: Maximum measured length carried into the next chunk
        measure: Async length function

    Returns:
        List of stripped, non-empty chunks

    Note:
        A single fragment longer than chunk_size is emitted on its own and
        reported with a warning; it is never cut.
    """
    separator_len = await measure(separator)

    docs: list[str] = []
    current_doc: list[str] = []
    total = 0
    for d in splits:
        _len = await measure(d)
        joiner_len = separator_len if current_doc else 0
        if total + _len + joiner_len > chunk_size and current_doc:
            _warn_if_oversized(total, chunk_size)
            doc = join_fragments(current_doc, separator)
            if doc is not None:
                docs.append(doc)
            # Keep evicting while the window is larger than the overlap, or
            # while the next fragment still would not fit. The separator that
            # would join it is counted, so a multi-fragment chunk never
            # exceeds chunk_size.
            while current_doc and (
                total > chunk_overlap
                or (total + _len + (separator_len if current_doc else 0) > chunk_size and total > 0)
            ):
                evicted_len = await measure(current_doc[0])
                total -= evicted_len + (separator_len if len(current_doc) > 1 else 0)
                current_doc.pop(0)
        current_doc.append(d)
        total += _len + (separator_len if len(current_doc) > 1 else 0)

    if current_doc:
        _warn_if_oversized(total, chunk_size)
    doc = join_fragments(current_doc, separator)
    if doc is not None:
        docs.append(doc)
    return docs


def _warn_if_oversized(total, chunk_size):
    if total > chunk_size:
        logger.warning(f"Created a chunk of size {total}, which is longer than the specified {chunk_size}")
