"""Utility functions and helpers."""

from pagecraft.utils.exceptions import (
    ConflictError,
    DuplicateBlockTypeError,
    NotFoundError,
    PagecraftError,
    UnknownBlockTypeError,
    ValidationError,
)

__all__ = [
    "PagecraftError",
    "NotFoundError",
    "ValidationError",
    "ConflictError",
    "DuplicateBlockTypeError",
    "UnknownBlockTypeError",
]
