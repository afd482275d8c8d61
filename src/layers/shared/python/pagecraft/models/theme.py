"""Theme models."""

from pydantic import BaseModel as PydanticBaseModel, Field

from pagecraft.models.base import TimestampMixin, generate_ulid


class ThemeFonts(PydanticBaseModel):
    """Font families for a theme."""

    heading: str | None = None
    body: str | None = None


class ThemeTokens(PydanticBaseModel):
    """Named style variables defining a visual theme."""

    colors: dict[str, str] = Field(default_factory=dict, description="Color name to value")
    fonts: ThemeFonts = Field(default_factory=ThemeFonts, description="Font families")
    spacing: dict[str, str] | None = None
    radii: dict[str, str] | None = None
    shadows: dict[str, str] | None = None


class Theme(TimestampMixin):
    """A site-wide base theme."""

    id: str = Field(default_factory=generate_ulid)
    name: str = Field(..., min_length=1, max_length=100)
    description: str | None = None
    tokens: ThemeTokens = Field(default_factory=ThemeTokens)
