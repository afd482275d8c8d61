"""Page model for composed CMS pages."""

import re
from datetime import datetime
from enum import Enum

from pydantic import BaseModel as PydanticBaseModel, Field, field_validator

from pagecraft.models.base import BaseModel
from pagecraft.models.block import BlockInstance

# Lowercase alphanumerics and hyphens
SLUG_PATTERN = re.compile(r"^[a-z0-9-]+$")

# All pages share one partition so the page list is a single query
PAGES_PARTITION = "CMS#PAGES"


class PageStatus(str, Enum):
    """Page status enum."""

    DRAFT = "draft"
    PUBLISHED = "published"
    SCHEDULED = "scheduled"
    UNPUBLISHED = "unpublished"


class StoreTarget(str, Enum):
    """Storefront a page is shown on."""

    TECH = "tech"
    LIFESTYLE = "lifestyle"
    ALL = "all"


class SeoMeta(PydanticBaseModel):
    """SEO metadata for a page."""

    title: str | None = Field(None, max_length=100, description="SEO title")
    description: str | None = Field(None, max_length=300, description="SEO description")
    og_image_url: str | None = Field(None, description="Open Graph image URL")
    no_index: bool = Field(default=False, description="Ask crawlers not to index")


class Page(BaseModel):
    """Page entity - an ordered composition of blocks.

    Key Pattern:
        PK: CMS#PAGES
        SK: PAGE#{id}
        GSI1PK: PAGE_SLUG
        GSI1SK: {slug}
    """

    title: str = Field(..., min_length=1, max_length=255, description="Page title")
    slug: str = Field(
        ...,
        min_length=1,
        max_length=100,
        pattern=r"^[a-z0-9-]+$",
        description="URL-safe slug",
    )
    status: PageStatus = Field(default=PageStatus.DRAFT, description="Page status")
    store_target: StoreTarget = Field(default=StoreTarget.ALL, description="Target storefront")
    locale: str = Field(default="en", min_length=2, max_length=5, description="Page locale")
    template: str = Field(default="full-width", description="Layout template")

    # Content
    blocks: list[BlockInstance] = Field(default_factory=list, description="Ordered blocks")
    theme_overrides: dict[str, str] = Field(
        default_factory=dict, description="Sparse token overrides over the base theme"
    )
    meta: SeoMeta = Field(default_factory=SeoMeta, description="SEO metadata")

    # Publishing
    published_at: datetime | None = Field(None, description="Last publish time")
    scheduled_at: datetime | None = Field(None, description="Scheduled publish time")

    created_by: str | None = Field(None, description="User who created the page")
    updated_by: str | None = Field(None, description="User who last updated the page")

    @property
    def is_published(self) -> bool:
        """Check whether the page is publicly visible."""
        return self.status == PageStatus.PUBLISHED.value

    def get_pk(self) -> str:
        """Get partition key: CMS#PAGES."""
        return PAGES_PARTITION

    def get_sk(self) -> str:
        """Get sort key: PAGE#{id}."""
        return f"PAGE#{self.id}"

    def get_gsi1_keys(self) -> dict[str, str]:
        """Get GSI1 keys for slug lookup."""
        return {
            "GSI1PK": "PAGE_SLUG",
            "GSI1SK": self.slug,
        }


class SavePageRequest(PydanticBaseModel):
    """Request model for creating or updating a page.

    Creates a page when ``id`` is missing, otherwise updates it. Fields left
    as None keep their stored value on update.
    """

    id: str | None = None
    title: str = Field(..., min_length=1, max_length=255)
    slug: str = Field(..., min_length=1, max_length=100)
    status: PageStatus | None = None
    store_target: StoreTarget | None = None
    locale: str | None = Field(None, min_length=2, max_length=5)
    template: str | None = None
    blocks: list[BlockInstance] | None = None
    theme_overrides: dict[str, str] | None = None
    meta: SeoMeta | None = None
    updated_by: str | None = None

    @field_validator("slug")
    @classmethod
    def validate_slug(cls, v: str) -> str:
        """Normalize and validate the slug."""
        v = v.strip().lower()
        if not SLUG_PATTERN.match(v):
            raise ValueError("Slug must be lowercase alphanumeric and hyphens")
        return v
