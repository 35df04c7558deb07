from __future__ import annotations


class DatasetError(ValueError):
    """Base class for errors raised while reading an uploaded dataset."""


class FormatError(DatasetError):
    """Raised when a file extension or format tag is not a supported table format."""


class ParseError(DatasetError):
    """Raised when the bytes cannot be decoded as the declared format."""
