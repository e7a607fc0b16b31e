"""
Custom exceptions for the textsplit package.

These exceptions provide more specific error handling and better debugging
information than generic Python exceptions.
"""


class TextSplitError(Exception):
    """Base exception for all textsplit package errors."""
    pass


class ConfigurationError(TextSplitError):
    """Configuration-related errors (invalid splitter settings, unknown language)."""
    pass


class ChunkingError(TextSplitError):
    """Chunking-related errors (invalid inputs, processing failures)."""
    pass


class ValidationError(TextSplitError):
    """Data validation errors (invalid application settings, malformed records)."""
    pass


class DatasetError(TextSplitError):
    """Source loading errors (missing files, unreadable or malformed input)."""
    pass
