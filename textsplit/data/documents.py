"""
Document container shared by splitters, loaders and the CLI.
"""

from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass
class Document:
    """A piece of text plus an arbitrary metadata mapping."""

    page_content: Optional[str]
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {"content": self.page_content, "metadata": self.metadata}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Document":
        """Build a Document from a {"content"|"page_content", "metadata"} record."""
        content = data.get("content", data.get("page_content"))
        return cls(page_content=content, metadata=dict(data.get("metadata") or {}))
