"""
Source document container and loading.
"""

from .documents import Document
from .loader import DocumentLoader, load_documents


__all__ = [
    "Document",
    "DocumentLoader",
    "load_documents",
]
