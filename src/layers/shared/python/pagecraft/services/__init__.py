"""Persistence and preview services."""

from pagecraft.services.page_service import PageService, get_page_service
from pagecraft.services.preview import PreviewTokenService

__all__ = [
    "PageService",
    "PreviewTokenService",
    "get_page_service",
]
