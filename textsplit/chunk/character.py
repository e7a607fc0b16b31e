"""
Separator-based splitters.

CharacterTextSplitter splits once on a single literal separator.
RecursiveCharacterTextSplitter walks a priority list of separators and
descends into any fragment that is still too large, finishing with
character-level splitting.
"""

import logging
from typing import Optional, Sequence

from .base import TextSplitter
from .merge import merge_splits, split_on_separator
from .separators import DEFAULT_SEPARATORS, get_separators_for_language


logger = logging.getLogger(__name__)


def select_separator(text: str, separators: Sequence[str]) -> tuple[str, Optional[list[str]]]:
    """
    Pick the separator to split text on.

    Args:
        text: Text about to be split
        separators: Candidate separators, most preferred first

    Returns:
        (separator, remaining) where remaining is the list to recurse with,
        or None when no finer separator is left

    Note:
        The empty string is a final choice wherever it appears. When no
        candidate occurs in the text, the last entry is used with nothing
        remaining.
    """
    separator = separators[-1]
    remaining = None
    for i, s in enumerate(separators):
        if s == "":
            separator = s
            break
        if s in text:
            separator = s
            remaining = list(separators[i + 1:]) or None
            break
    return separator, remaining


class CharacterTextSplitter(TextSplitter):
    """Split on one literal separator, then merge fragments up to chunk_size."""

    def __init__(self, separator: str = "\n\n", **kwargs):
        super().__init__(**kwargs)
        self.separator = separator

    async def split_text(self, text: str) -> list[str]:
        splits = split_on_separator(text, self.separator, self.keep_separator)
        return await merge_splits(
            splits,
            "" if self.keep_separator else self.separator,
            self.chunk_size,
            self.chunk_overlap,
            self.measure,
        )


class RecursiveCharacterTextSplitter(TextSplitter):
    """
    Split text on the most preferred separator present, recursing into
    oversized fragments with the remaining, finer separators.

    Separators are kept by default, attached to the start of the fragment
    that follows them.
    """

    def __init__(self, separators: Optional[Sequence[str]] = None, keep_separator: bool = True, **kwargs):
        super().__init__(
            separators=DEFAULT_SEPARATORS if separators is None else separators,
            keep_separator=keep_separator,
            **kwargs,
        )

    @property
    def separators(self) -> list[str]:
        return list(self.config.separators)

    async def _split_text(self, text: str, separators: Sequence[str]) -> list[str]:
        final_chunks = []

        separator, new_separators = select_separator(text, separators)
        splits = split_on_separator(text, separator, self.keep_separator)

        # Merge fragments that fit; recurse into the ones that do not
        good_splits = []
        glue = "" if self.keep_separator else separator
        for s in splits:
            s_len = await self.measure(s)
            if s_len < self.chunk_size:
                good_splits.append(s)
                continue

            if good_splits:
                final_chunks.extend(
                    await merge_splits(good_splits, glue, self.chunk_size, self.chunk_overlap, self.measure)
                )
                good_splits = []
            if new_separators is None:
                if s_len > self.chunk_size:
                    logger.warning(
                        f"Created a chunk of size {s_len}, which is longer than the specified {self.chunk_size}"
                    )
                final_chunks.append(s)
            else:
                final_chunks.extend(await self._split_text(s, new_separators))

        if good_splits:
            final_chunks.extend(
                await merge_splits(good_splits, glue, self.chunk_size, self.chunk_overlap, self.measure)
            )
        return final_chunks

    async def split_text(self, text: str) -> list[str]:
        chunks = await self._split_text(text, self.config.separators)
        logger.debug(f"Split {len(text)} characters into {len(chunks)} chunks")
        return chunks

    @staticmethod
    def get_separators_for_language(language: str) -> list[str]:
        return get_separators_for_language(language)

    @classmethod
    def from_language(cls, language: str, **kwargs) -> "RecursiveCharacterTextSplitter":
        """
        Build a recursive splitter using a preset separator table.

        Raises:
            ConfigurationError: If the language key is not recognized
        """
        kwargs["separators"] = get_separators_for_language(language)
        return cls(**kwargs)


class MarkdownTextSplitter(RecursiveCharacterTextSplitter):
    """Recursive splitter preconfigured for Markdown headings and rules."""

    def __init__(self, **kwargs):
        kwargs["separators"] = get_separators_for_language("markdown")
        super().__init__(**kwargs)


class LatexTextSplitter(RecursiveCharacterTextSplitter):
    """Recursive splitter preconfigured for LaTeX sections and environments."""

    def __init__(self, **kwargs):
        kwargs["separators"] = get_separators_for_language("latex")
        super().__init__(**kwargs)
