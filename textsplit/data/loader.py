"""
Loader for source documents.

Reads plain text files as single documents and JSON / JSON Lines files as
collections of {"content", "metadata"} records.
"""

import json
from pathlib import Path
from typing import Any, Iterable, List, Union

from ..exceptions import DatasetError
from ..logging_config import get_logger
from .documents import Document


logger = get_logger(__name__)


class DocumentLoader:
    """Loader for source documents on disk."""

    def __init__(self, base_dir: Union[str, Path] = "."):
        """
        Initialize loader.

        Args:
            base_dir: Directory that relative paths are resolved against
        """
        self.base_dir = Path(base_dir)

    def resolve(self, path: Union[str, Path]) -> Path:
        path = Path(path)
        return path if path.is_absolute() else self.base_dir / path

    def load_path(self, path: Union[str, Path]) -> List[Document]:
        """
        Load every document stored at a path.

        Args:
            path: Text, .json or .jsonl file

        Returns:
            List of Document objects, in file order

        Raises:
            DatasetError: If the file is missing or cannot be parsed
        """
        file_path = self.resolve(path)
        if not file_path.is_file():
            raise DatasetError(f"Source file not found: {file_path}")

        suffix = file_path.suffix.lower()
        if suffix == ".json":
            documents = self._load_json(file_path)
        elif suffix == ".jsonl":
            documents = self._load_jsonl(file_path)
        else:
            documents = [self._load_text(file_path)]

        logger.debug(f"Loaded {len(documents)} documents from {file_path}")
        return documents

    def load_paths(self, paths: Iterable[Union[str, Path]]) -> List[Document]:
        """Load documents from several paths, concatenated in order."""
        documents = []
        for path in paths:
            documents.extend(self.load_path(path))
        return documents

    def _load_text(self, file_path: Path) -> Document:
        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                content = f.read()
        except UnicodeDecodeError as e:
            raise DatasetError(f"File is not valid UTF-8 text: {file_path}") from e
        return Document(page_content=content, metadata={"source": str(file_path)})

    def _load_json(self, file_path: Path) -> List[Document]:
        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise DatasetError(f"Invalid JSON in {file_path}: {e}") from e
        except UnicodeDecodeError as e:
            raise DatasetError(f"File is not valid UTF-8 text: {file_path}") from e

        if isinstance(data, dict):
            if "documents" not in data:
                raise DatasetError(f"JSON object in {file_path} has no 'documents' list")
            data = data["documents"]

        if not isinstance(data, list):
            raise DatasetError(f"Expected a list of documents in {file_path}, got {type(data).__name__}")

        return [self._record_to_document(record, file_path) for record in data]

    def _load_jsonl(self, file_path: Path) -> List[Document]:
        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                lines = f.readlines()
        except UnicodeDecodeError as e:
            raise DatasetError(f"File is not valid UTF-8 text: {file_path}") from e

        documents = []
        for line_number, line in enumerate(lines, 1):
            if not line.strip():
                continue
            try:
                record = json.loads(line)
            except json.JSONDecodeError as e:
                raise DatasetError(f"Invalid JSON on line {line_number} of {file_path}: {e}") from e
            documents.append(self._record_to_document(record, file_path))
        return documents

    def _record_to_document(self, record: Any, file_path: Path) -> Document:
        if not isinstance(record, dict):
            raise DatasetError(f"Document records must be objects, got {type(record).__name__} in {file_path}")
        document = Document.from_dict(record)
        document.metadata.setdefault("source", str(file_path))
        return document


def load_documents(paths: Iterable[Union[str, Path]], base_dir: Union[str, Path] = ".") -> List[Document]:
    """
    Convenience function to load documents from several paths.

    Args:
        paths: Files to load
        base_dir: Directory that relative paths are resolved against

    Returns:
        List of Document objects
    """
    loader = DocumentLoader(base_dir)
    return loader.load_paths(paths)
