"""Page persistence and preview facade.

The editor talks to storage only through this service: listing, loading,
saving, publishing and preview-token handling.
"""

from datetime import datetime, timezone
from typing import Any

import pydantic
import structlog

from pagecraft.models.base import utc_now
from pagecraft.models.page import Page, PageStatus, SavePageRequest, SeoMeta, StoreTarget
from pagecraft.models.theme import Theme
from pagecraft.repositories.page import PageRepository
from pagecraft.services.preview import PreviewTokenService
from pagecraft.themes.presets import BUILTIN_THEMES
from pagecraft.utils.exceptions import ConflictError, NotFoundError, ValidationError

logger = structlog.get_logger()

# Fields copied from a save request onto a stored page when provided
_UPDATABLE_FIELDS = (
    "title",
    "slug",
    "status",
    "store_target",
    "locale",
    "template",
    "blocks",
    "theme_overrides",
    "meta",
)


def parse_iso_datetime(value: str | datetime) -> datetime:
    """Parse an ISO 8601 timestamp, treating naive values as UTC.

    Raises:
        ValidationError: If the value is not a valid timestamp.
    """
    if isinstance(value, datetime):
        parsed = value
    else:
        try:
            parsed = datetime.fromisoformat(str(value).strip())
        except ValueError:
            raise ValidationError(
                message="Invalid schedule date",
                errors=[{"field": "scheduled_at", "message": f"'{value}' is not an ISO 8601 date"}],
            ) from None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


class PageService:
    """Service for page persistence, publishing and previews."""

    def __init__(
        self,
        repo: PageRepository | None = None,
        preview_tokens: PreviewTokenService | None = None,
    ):
        """Initialize page service.

        Args:
            repo: Optional PageRepository (created lazily if not provided).
            preview_tokens: Optional PreviewTokenService (created lazily).
        """
        self._repo = repo
        self._preview_tokens = preview_tokens
        self.logger = logger.bind(service="page_service")

    @property
    def repo(self) -> PageRepository:
        """Get page repository (lazy init)."""
        if self._repo is None:
            self._repo = PageRepository()
        return self._repo

    @property
    def preview_tokens(self) -> PreviewTokenService:
        """Get preview token service (lazy init)."""
        if self._preview_tokens is None:
            self._preview_tokens = PreviewTokenService()
        return self._preview_tokens

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def list_pages(self) -> list[Page]:
        """List all pages, most recently updated first."""
        pages = self.repo.list_pages()
        return sorted(pages, key=lambda p: p.updated_at, reverse=True)

    def get_page_by_id(self, page_id: str) -> Page | None:
        """Get a page by ID regardless of status."""
        return self.repo.get_by_id(page_id)

    def get_page_by_slug(self, slug: str, include_draft: bool = False) -> Page | None:
        """Get a page by slug.

        Args:
            slug: Page slug.
            include_draft: Also return pages that are not published.

        Returns:
            Page, or None if missing or hidden.
        """
        page = self.repo.get_by_slug(slug)
        if page is None:
            return None
        if not include_draft and not page.is_published:
            return None
        return page

    def _get_or_raise(self, page_id: str) -> Page:
        page = self.repo.get_by_id(page_id)
        if page is None:
            raise NotFoundError("Page", page_id)
        return page

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    def save_page(self, request: SavePageRequest | dict[str, Any]) -> Page:
        """Create or update a page.

        Creates when the request has no ID, otherwise updates the stored
        page with every field the request provides.

        Args:
            request: Save payload.

        Returns:
            The stored page.

        Raises:
            ValidationError: If the payload is invalid.
            NotFoundError: If updating a page that does not exist.
            ConflictError: If the slug is taken or the page changed concurrently.
        """
        if not isinstance(request, SavePageRequest):
            try:
                request = SavePageRequest.model_validate(request)
            except pydantic.ValidationError as e:
                raise ValidationError.from_pydantic(e) from e

        if request.id is None:
            return self._create_page(request)
        return self._update_page(request)

    def _create_page(self, request: SavePageRequest) -> Page:
        status = PageStatus(request.status or PageStatus.DRAFT)
        page = Page(
            title=request.title,
            slug=request.slug,
            status=status,
            store_target=request.store_target or StoreTarget.ALL,
            locale=request.locale or "en",
            template=request.template or "full-width",
            blocks=request.blocks or [],
            theme_overrides=request.theme_overrides or {},
            meta=request.meta or SeoMeta(),
            published_at=utc_now() if status == PageStatus.PUBLISHED else None,
            created_by=request.updated_by,
            updated_by=request.updated_by,
        )

        page = self.repo.create_page(page)
        self.logger.info("Page created", page_id=page.id, slug=page.slug, status=page.status)
        return page

    def _update_page(self, request: SavePageRequest) -> Page:
        page = self._get_or_raise(request.id)
        previous_slug = page.slug
        was_published = page.is_published

        for field_name in _UPDATABLE_FIELDS:
            value = getattr(request, field_name)
            if value is not None:
                setattr(page, field_name, value)
        if request.updated_by:
            page.updated_by = request.updated_by

        if page.is_published and not was_published:
            page.published_at = utc_now()

        page = self.repo.update_page(page, previous_slug=previous_slug)
        self.logger.info("Page updated", page_id=page.id, slug=page.slug, version=page.version)
        return page

    def update_status(self, page_id: str, status: PageStatus | str) -> Page:
        """Change a page's status.

        Publishing stamps ``published_at`` and clears any schedule.

        Raises:
            ValidationError: If the status is not a known value.
            NotFoundError: If the page does not exist.
        """
        try:
            status = PageStatus(status)
        except ValueError:
            raise ValidationError(
                message="Invalid status",
                errors=[{"field": "status", "message": f"'{status}' is not a page status"}],
            ) from None

        page = self._get_or_raise(page_id)
        page.status = status
        if status == PageStatus.PUBLISHED:
            page.published_at = utc_now()
            page.scheduled_at = None

        page = self.repo.update_page(page)
        self.logger.info("Page status changed", page_id=page_id, status=status.value)
        return page

    def schedule_publish(self, page_id: str, iso_date: str | datetime) -> Page:
        """Schedule a page to be published later.

        Raises:
            ValidationError: If the date is invalid.
            NotFoundError: If the page does not exist.
        """
        scheduled_at = parse_iso_datetime(iso_date)

        page = self._get_or_raise(page_id)
        page.status = PageStatus.SCHEDULED
        page.scheduled_at = scheduled_at

        page = self.repo.update_page(page)
        self.logger.info("Page publish scheduled", page_id=page_id, scheduled_at=scheduled_at.isoformat())
        return page

    def publish_due_pages(self, now: datetime | None = None) -> list[Page]:
        """Publish every scheduled page whose time has come.

        Pages modified concurrently are skipped and picked up on the next run.

        Args:
            now: Reference time (defaults to now).

        Returns:
            Pages that were published.
        """
        now = now or utc_now()
        published = []

        for page in self.repo.list_scheduled():
            if page.scheduled_at is None or page.scheduled_at > now:
                continue

            page.status = PageStatus.PUBLISHED
            page.published_at = now
            try:
                published.append(self.repo.update_page(page))
            except ConflictError:
                self.logger.warning("Scheduled publish skipped, page changed", page_id=page.id)

        if published:
            self.logger.info("Scheduled pages published", count=len(published))
        return published

    # -------------------------------------------------------------------------
    # Themes
    # -------------------------------------------------------------------------

    def list_themes(self) -> list[Theme]:
        """List the base themes a page can be built on."""
        return list(BUILTIN_THEMES.values())

    # -------------------------------------------------------------------------
    # Previews
    # -------------------------------------------------------------------------

    def issue_preview_token(self, page_id: str) -> str:
        """Issue a preview token for an existing page.

        Raises:
            NotFoundError: If the page does not exist.
        """
        self._get_or_raise(page_id)
        return self.preview_tokens.issue(page_id)

    def verify_preview_token(self, token: str | None) -> str | None:
        """Get the page ID a preview token grants, or None if invalid."""
        return self.preview_tokens.verify(token)


# Global instance for Lambda handlers
_page_service: PageService | None = None


def get_page_service() -> PageService:
    """Get the global PageService instance."""
    global _page_service
    if _page_service is None:
        _page_service = PageService()
    return _page_service
