"""Pydantic models for Pagecraft entities."""

from pagecraft.models.base import BaseModel, TimestampMixin, generate_ulid, utc_now
from pagecraft.models.block import STYLE_KEY, BlockInstance
from pagecraft.models.page import (
    Page,
    PageStatus,
    SavePageRequest,
    SeoMeta,
    StoreTarget,
)
from pagecraft.models.theme import Theme, ThemeFonts, ThemeTokens

__all__ = [
    # Base
    "BaseModel",
    "TimestampMixin",
    "generate_ulid",
    "utc_now",
    # Block
    "BlockInstance",
    "STYLE_KEY",
    # Page
    "Page",
    "PageStatus",
    "SavePageRequest",
    "SeoMeta",
    "StoreTarget",
    # Theme
    "Theme",
    "ThemeFonts",
    "ThemeTokens",
]
