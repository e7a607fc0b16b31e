"""
Token-window splitter.

Encodes the whole text once and slices the token sequence into windows of
chunk_size tokens, each starting chunk_overlap tokens before the previous
window ended.
"""

import threading
from typing import AbstractSet, Callable, Collection, Literal, Optional, Protocol, Sequence, Union

import tiktoken

from ..logging_config import get_logger
from .base import TextSplitter


logger = get_logger(__name__)

SpecialTokens = Union[Literal["all"], Collection[str]]


class Tokenizer(Protocol):
    """What the splitter needs from a tokenizer; tiktoken.Encoding satisfies it."""

    def encode(
        self,
        text: str,
        *,
        allowed_special: Union[Literal["all"], AbstractSet[str]] = ...,
        disallowed_special: Union[Literal["all"], Collection[str]] = ...,
    ) -> list[int]: ...

    def decode(self, tokens: Sequence[int]) -> str: ...


class TokenTextSplitter(TextSplitter):
    """
    Split text on token boundaries.

    chunk_size and chunk_overlap are counted in tokens. The tokenizer is
    created on first use and reused for the lifetime of the splitter.
    """

    def __init__(
        self,
        encoding_name: str = "gpt2",
        allowed_special: SpecialTokens = (),
        disallowed_special: SpecialTokens = "all",
        tokenizer_factory: Optional[Callable[[str], Tokenizer]] = None,
        **kwargs,
    ):
        super().__init__(**kwargs)
        self.encoding_name = encoding_name
        self.allowed_special = allowed_special if allowed_special == "all" else set(allowed_special)
        self.disallowed_special = disallowed_special if disallowed_special == "all" else set(disallowed_special)
        self._tokenizer_factory = tokenizer_factory or tiktoken.get_encoding
        self._tokenizer: Optional[Tokenizer] = None
        self._tokenizer_lock = threading.Lock()

    @property
    def tokenizer(self) -> Tokenizer:
        """The cached tokenizer, created once under a lock."""
        if self._tokenizer is None:
            with self._tokenizer_lock:
                if self._tokenizer is None:
                    logger.info(f"Loading tokenizer for encoding '{self.encoding_name}'...")
                    self._tokenizer = self._tokenizer_factory(self.encoding_name)
        return self._tokenizer

    async def split_text(self, text: str) -> list[str]:
        tokenizer = self.tokenizer
        input_ids = tokenizer.encode(
            text,
            allowed_special=self.allowed_special,
            disallowed_special=self.disallowed_special,
        )

        splits = []
        start_idx = 0
        while start_idx < len(input_ids):
            end_idx = min(start_idx + self.chunk_size, len(input_ids))
            splits.append(tokenizer.decode(input_ids[start_idx:end_idx]))
            if end_idx == len(input_ids):
                break
            # Step back by the overlap, but always move forward
            start_idx = max(end_idx - self.chunk_overlap, start_idx + 1)

        logger.debug(f"Split {len(input_ids)} tokens into {len(splits)} windows")
        return splits
