"""
Shared splitter configuration and the document assembly pipeline.

Every splitter measures text through one length function, which may be a
plain function or a coroutine function. Measurements are always awaited in
order, so synchronous and asynchronous measurers behave identically.
"""

import copy
import inspect
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Optional, Sequence, Union

from ..data.documents import Document
from ..exceptions import ChunkingError, ConfigurationError
from .metadata import TextChunkContext, add_line_numbers_to_metadata, enrich_chunks
from .separators import DEFAULT_SEPARATORS


logger = logging.getLogger(__name__)

LengthFunction = Callable[[str], Any]
UpdateMetadataFunction = Callable[[dict[str, Any], TextChunkContext], dict[str, Any]]


def copy_metadata(metadata: Optional[dict[str, Any]]) -> dict[str, Any]:
    """
    Copy caller metadata for one chunk; None becomes an empty mapping.

    Values are deep-copied so chunks never share mutable state. A value that
    cannot be deep-copied (a lock, an open file) is shared as-is.
    """
    copied = {}
    for key, value in (metadata or {}).items():
        try:
            copied[key] = copy.deepcopy(value)
        except (TypeError, copy.Error):
            logger.debug(f"Metadata value {key!r} cannot be deep-copied; sharing it")
            copied[key] = value
    return copied


@dataclass(frozen=True)
class SplitterConfig:
    """Immutable settings shared by all splitters."""

    chunk_size: int = 1000
    chunk_overlap: int = 200
    keep_separator: bool = False
    separators: tuple[str, ...] = tuple(DEFAULT_SEPARATORS)
    length_function: LengthFunction = len
    update_metadata_function: UpdateMetadataFunction = add_line_numbers_to_metadata

    def __post_init__(self):
        if isinstance(self.chunk_size, bool) or not isinstance(self.chunk_size, int):
            raise ConfigurationError(
                f"chunk_size must be an integer, got {type(self.chunk_size).__name__}"
            )
        if self.chunk_size <= 0:
            raise ConfigurationError(f"chunk_size must be positive, got {self.chunk_size}")
        if isinstance(self.chunk_overlap, bool) or not isinstance(self.chunk_overlap, int):
            raise ConfigurationError(
                f"chunk_overlap must be an integer, got {type(self.chunk_overlap).__name__}"
            )
        if self.chunk_overlap < 0:
            raise ConfigurationError(f"chunk_overlap must be non-negative, got {self.chunk_overlap}")
        if self.chunk_overlap >= self.chunk_size:
            raise ConfigurationError(
                f"Cannot have chunk_overlap >= chunk_size "
                f"({self.chunk_overlap} >= {self.chunk_size})"
            )
        if not callable(self.length_function):
            raise ConfigurationError("length_function must be callable")
        if not callable(self.update_metadata_function):
            raise ConfigurationError("update_metadata_function must be callable")
        if isinstance(self.separators, str) or not self.separators:
            raise ConfigurationError("separators must be a non-empty list of strings")
        # Lists are accepted for convenience and frozen here
        object.__setattr__(self, "separators", tuple(self.separators))


@dataclass
class ChunkHeaderOptions:
    """Prefixes applied to chunk text when assembling documents."""

    chunk_header: str = ""
    chunk_overlap_header: str = "(cont'd) "
    append_chunk_overlap_header: bool = False


class TextSplitter(ABC):
    """
    Base class for splitters.

    Subclasses implement split_text; everything else (measurement, metadata
    enrichment, header prefixes and ordinals) is shared.
    """

    def __init__(
        self,
        chunk_size: int = 1000,
        chunk_overlap: int = 200,
        keep_separator: bool = False,
        length_function: Optional[LengthFunction] = None,
        update_metadata_function: Optional[UpdateMetadataFunction] = None,
        separators: Optional[Sequence[str]] = None,
    ):
        self.config = SplitterConfig(
            chunk_size=chunk_size,
            chunk_overlap=chunk_overlap,
            keep_separator=keep_separator,
            separators=tuple(DEFAULT_SEPARATORS if separators is None else separators),
            length_function=length_function or len,
            update_metadata_function=update_metadata_function or add_line_numbers_to_metadata,
        )

    @classmethod
    def from_config(cls, config: SplitterConfig, **kwargs) -> "TextSplitter":
        """Build a splitter from an existing SplitterConfig."""
        splitter = cls(**kwargs)
        splitter.config = config
        return splitter

    @property
    def chunk_size(self) -> int:
        return self.config.chunk_size

    @property
    def chunk_overlap(self) -> int:
        return self.config.chunk_overlap

    @property
    def keep_separator(self) -> bool:
        return self.config.keep_separator

    async def measure(self, text: str) -> Union[int, float]:
        """Measured length of text under the configured length function."""
        result = self.config.length_function(text)
        if inspect.isawaitable(result):
            result = await result
        return result

    @abstractmethod
    async def split_text(self, text: str) -> list[str]:
        """Split text into chunks, in left-to-right source order."""

    async def create_documents(
        self,
        texts: Sequence[str],
        metadatas: Optional[Sequence[dict[str, Any]]] = None,
        chunk_header_options: Optional[ChunkHeaderOptions] = None,
    ) -> list[Document]:
        """
        Split texts and pair every chunk with its enriched metadata.

        Args:
            texts: Source texts
            metadatas: One metadata mapping per text (default: empty for each)
            chunk_header_options: Header prefixes (default: none)

        Returns:
            List of Document objects across all texts, in order

        Raises:
            ChunkingError: If metadatas does not line up with texts
        """
        if not metadatas:
            metadatas = [{} for _ in texts]
        if len(metadatas) != len(texts):
            raise ChunkingError(
                f"Got {len(metadatas)} metadata records for {len(texts)} texts"
            )
        options = chunk_header_options or ChunkHeaderOptions()

        documents: list[Document] = []
        for i, text in enumerate(texts):
            if not isinstance(text, str):
                raise ChunkingError(f"text must be a string, got {type(text).__name__}")

            chunks = await self.split_text(text)
            contexts = await enrich_chunks(
                text,
                chunks,
                self.measure,
                text_ordinal=i + 1,
                global_offset=len(documents),
            )
            for j, context in enumerate(contexts):
                page_content = options.chunk_header
                if j > 0 and options.append_chunk_overlap_header:
                    page_content += options.chunk_overlap_header
                page_content += context.chunk

                metadata = self.config.update_metadata_function(
                    copy_metadata(metadatas[i]), context
                )
                documents.append(Document(page_content=page_content, metadata=metadata))

            logger.debug(f"Text {i + 1}/{len(texts)}: {len(chunks)} chunks")

        return documents

    async def split_documents(
        self,
        documents: Sequence[Document],
        chunk_header_options: Optional[ChunkHeaderOptions] = None,
    ) -> list[Document]:
        """Split documents, skipping any without content."""
        selected = [doc for doc in documents if doc.page_content is not None]
        texts = [doc.page_content for doc in selected]
        metadatas = [doc.metadata for doc in selected]
        return await self.create_documents(texts, metadatas, chunk_header_options)

    async def transform_documents(
        self,
        documents: Sequence[Document],
        chunk_header_options: Optional[ChunkHeaderOptions] = None,
    ) -> list[Document]:
        return await self.split_documents(documents, chunk_header_options)
