"""Page repository for DynamoDB operations."""

import structlog
from botocore.exceptions import ClientError

from pagecraft.models.page import PAGES_PARTITION, Page, PageStatus
from pagecraft.repositories.base import BaseRepository, serialize_item
from pagecraft.utils.exceptions import ConflictError

logger = structlog.get_logger()

SLUG_INDEX_PK = "PAGE_SLUG"


def slug_reservation_key(slug: str) -> dict[str, str]:
    """Key of the item that reserves a slug for one page."""
    return {"PK": f"SLUG#{slug}", "SK": f"SLUG#{slug}"}


class PageRepository(BaseRepository[Page]):
    """Repository for Page entities."""

    def __init__(self, table_name: str | None = None):
        """Initialize page repository."""
        super().__init__(Page, table_name)

    def get_by_id(self, page_id: str) -> Page | None:
        """Get page by ID.

        Args:
            page_id: The page ID.

        Returns:
            Page or None if not found.
        """
        return self.get(pk=PAGES_PARTITION, sk=f"PAGE#{page_id}")

    def get_by_slug(self, slug: str) -> Page | None:
        """Get page by slug using GSI1.

        Args:
            slug: The page slug.

        Returns:
            Page or None if not found.
        """
        items, _ = self.query(
            pk=SLUG_INDEX_PK,
            sk_equals=slug,
            index_name="GSI1",
        )
        return items[0] if items else None

    def list_pages(self, status: PageStatus | None = None) -> list[Page]:
        """List all pages, optionally filtered by status.

        Args:
            status: Optional status filter.

        Returns:
            List of pages.
        """
        if status is None:
            return self.query_all(PAGES_PARTITION, sk_begins_with="PAGE#")

        return self.query_all(
            PAGES_PARTITION,
            sk_begins_with="PAGE#",
            filter_expression="#status = :status",
            expression_values={":status": PageStatus(status).value},
            expression_names={"#status": "status"},
        )

    def list_scheduled(self) -> list[Page]:
        """List pages waiting for a scheduled publish."""
        return self.list_pages(status=PageStatus.SCHEDULED)

    def create_page(self, page: Page) -> Page:
        """Create a new page with slug uniqueness enforced.

        Uses a DynamoDB TransactWriteItems to atomically create both the page
        and a slug reservation item, preventing duplicate slugs from race
        conditions.

        Args:
            page: The page to create.

        Returns:
            The created page.

        Raises:
            ConflictError: If the slug is already taken.
        """
        page.update_timestamp()
        db_item = self._to_item(page, page.get_gsi1_keys())
        slug_item = {**slug_reservation_key(page.slug), "page_id": page.id}

        try:
            self.client.transact_write_items(
                TransactItems=[
                    {
                        "Put": {
                            "TableName": self.table_name,
                            "Item": serialize_item(db_item),
                            "ConditionExpression": "attribute_not_exists(PK)",
                        }
                    },
                    {
                        "Put": {
                            "TableName": self.table_name,
                            "Item": serialize_item(slug_item),
                            "ConditionExpression": "attribute_not_exists(PK)",
                        }
                    },
                ]
            )

            logger.debug("Page created with slug reservation", page_id=page.id, slug=page.slug)
            return page

        except ClientError as e:
            if e.response["Error"]["Code"] == "TransactionCanceledException":
                reasons = e.response.get("CancellationReasons", [])
                # Second item is the slug reservation
                if len(reasons) > 1 and reasons[1].get("Code") == "ConditionalCheckFailed":
                    raise ConflictError(f"Slug '{page.slug}' is already in use", conflict_type="slug")
                raise ConflictError("Page already exists or slug conflict")
            logger.error("DynamoDB create page failed", error=str(e), page_id=page.id)
            raise

    def update_page(self, page: Page, previous_slug: str | None = None) -> Page:
        """Update an existing page.

        When the slug changed, the page write, the new slug reservation and
        the release of the old one happen in one transaction.

        Args:
            page: The page to update.
            previous_slug: The stored slug before this update.

        Returns:
            The updated page.

        Raises:
            ConflictError: If the new slug is taken or the page was modified
                concurrently.
        """
        if previous_slug is None or previous_slug == page.slug:
            return self.update(page, gsi_keys=page.get_gsi1_keys())

        old_version = page.version
        page.increment_version()
        page.update_timestamp()
        db_item = self._to_item(page, page.get_gsi1_keys())
        slug_item = {**slug_reservation_key(page.slug), "page_id": page.id}

        try:
            self.client.transact_write_items(
                TransactItems=[
                    {
                        "Put": {
                            "TableName": self.table_name,
                            "Item": serialize_item(db_item),
                            "ConditionExpression": "version = :old_version",
                            "ExpressionAttributeValues": serialize_item({":old_version": old_version}),
                        }
                    },
                    {
                        "Put": {
                            "TableName": self.table_name,
                            "Item": serialize_item(slug_item),
                            "ConditionExpression": "attribute_not_exists(PK)",
                        }
                    },
                    {
                        "Delete": {
                            "TableName": self.table_name,
                            "Key": serialize_item(slug_reservation_key(previous_slug)),
                        }
                    },
                ]
            )

            logger.debug(
                "Page updated with slug change",
                page_id=page.id,
                old_slug=previous_slug,
                new_slug=page.slug,
            )
            return page

        except ClientError as e:
            page.version = old_version
            if e.response["Error"]["Code"] == "TransactionCanceledException":
                reasons = e.response.get("CancellationReasons", [])
                if len(reasons) > 1 and reasons[1].get("Code") == "ConditionalCheckFailed":
                    raise ConflictError(f"Slug '{page.slug}' is already in use", conflict_type="slug")
                raise ConflictError("Page was modified by another process", conflict_type="version")
            logger.error("DynamoDB update page failed", error=str(e), page_id=page.id)
            raise
