"""Tests for Pydantic models."""

from decimal import Decimal

import pytest
from pydantic import ValidationError as PydanticValidationError

from pagecraft.models.base import generate_ulid
from pagecraft.models.block import BlockInstance
from pagecraft.models.page import Page, PageStatus, SavePageRequest, StoreTarget


class TestBaseModel:
    """Tests for BaseModel."""

    def test_generate_ulid(self):
        """Test ULID generation."""
        ulid1 = generate_ulid()
        ulid2 = generate_ulid()

        assert len(ulid1) == 26
        assert ulid1 != ulid2

    def test_model_timestamps(self):
        """Test automatic timestamps and version."""
        page = Page(title="Home", slug="home")

        assert page.created_at is not None
        assert page.updated_at is not None
        assert page.version == 1

    def test_floats_become_decimals(self):
        """Test nested floats are stored as Decimal."""
        page = Page(
            title="Home",
            slug="home",
            blocks=[BlockInstance(id="b1", type="gallery", props={"columns": 2.5})],
        )

        db_item = page.to_dynamodb()

        assert db_item["blocks"][0]["props"]["columns"] == Decimal("2.5")
        assert "published_at" not in db_item

    def test_model_deserialization(self):
        """Test DynamoDB deserialization keeps string props as strings."""
        db_item = {
            "PK": "CMS#PAGES",
            "SK": "PAGE#page-1",
            "id": "page-1",
            "title": "Home",
            "slug": "home",
            "status": "published",
            "blocks": [
                {
                    "id": "b1",
                    "type": "richText",
                    "props": {"content": "2024-01-01T12:00:00+00:00", "limit": Decimal("4")},
                }
            ],
            "created_at": "2024-01-01T12:00:00+00:00",
            "updated_at": "2024-01-01T12:00:00+00:00",
            "version": Decimal("3"),
        }

        page = Page.from_dynamodb(db_item)

        assert page.id == "page-1"
        assert page.version == 3
        assert page.created_at.year == 2024
        assert page.blocks[0].props["content"] == "2024-01-01T12:00:00+00:00"
        assert page.blocks[0].props["limit"] == 4


class TestBlockInstance:
    """Tests for BlockInstance."""

    def test_wire_shape(self):
        """Test the serialized shape is exactly id, type and props."""
        block = BlockInstance(id="b1", type="hero", props={"title": "Hi"})

        assert block.model_dump() == {"id": "b1", "type": "hero", "props": {"title": "Hi"}}

    def test_create_deep_copies_defaults(self):
        """Test new instances never share nested props with the defaults."""
        defaults = {"images": [{"url": "https://example.com/a.jpg"}]}

        first = BlockInstance.create("gallery", defaults)
        second = BlockInstance.create("gallery", defaults)
        first.props["images"][0]["url"] = "changed"

        assert second.props["images"][0]["url"] == "https://example.com/a.jpg"
        assert defaults["images"][0]["url"] == "https://example.com/a.jpg"
        assert first.id != second.id

    def test_with_props_keeps_identity(self):
        """Test with_props keeps id and type."""
        block = BlockInstance(id="b1", type="hero", props={"title": "Old"})

        updated = block.with_props({"title": "New"})

        assert updated.id == "b1"
        assert updated.type == "hero"
        assert updated.props == {"title": "New"}
        assert block.props == {"title": "Old"}

    def test_style_property(self):
        """Test the reserved style key."""
        assert BlockInstance(type="hero", props={"style": {"padding": "2rem"}}).style == {"padding": "2rem"}
        assert BlockInstance(type="hero", props={"style": "bad"}).style == {}
        assert BlockInstance(type="hero").style == {}

    def test_empty_type_rejected(self):
        """Test a block must name its type."""
        with pytest.raises(PydanticValidationError):
            BlockInstance(type="")


class TestPage:
    """Tests for Page."""

    def test_defaults(self):
        """Test page defaults."""
        page = Page(title="Home", slug="home")

        assert page.status == PageStatus.DRAFT.value
        assert page.store_target == StoreTarget.ALL.value
        assert page.locale == "en"
        assert page.template == "full-width"
        assert page.blocks == []
        assert page.is_published is False

    def test_keys(self):
        """Test table and slug index keys."""
        page = Page(id="p1", title="Home", slug="home")

        assert page.get_keys() == {"PK": "CMS#PAGES", "SK": "PAGE#p1"}
        assert page.get_gsi1_keys() == {"GSI1PK": "PAGE_SLUG", "GSI1SK": "home"}

    @pytest.mark.parametrize("slug", ["Home", "home page", "home_page", ""])
    def test_invalid_slug(self, slug):
        """Test slugs must be lowercase alphanumerics and hyphens."""
        with pytest.raises(PydanticValidationError):
            Page(title="Home", slug=slug)


class TestSavePageRequest:
    """Tests for SavePageRequest."""

    def test_slug_normalized(self):
        """Test the slug is trimmed and lowercased."""
        request = SavePageRequest(title="Home", slug="  Summer-Sale ")

        assert request.slug == "summer-sale"

    def test_slug_rejected(self):
        """Test an unsafe slug is rejected."""
        with pytest.raises(PydanticValidationError):
            SavePageRequest(title="Home", slug="summer/sale")

    def test_optional_fields_unset(self):
        """Test fields left out stay None."""
        request = SavePageRequest(title="Home", slug="home")

        assert request.id is None
        assert request.status is None
        assert request.blocks is None
