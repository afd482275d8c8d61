"""DynamoDB repositories."""

from pagecraft.repositories.base import BaseRepository
from pagecraft.repositories.page import PageRepository

__all__ = [
    "BaseRepository",
    "PageRepository",
]
