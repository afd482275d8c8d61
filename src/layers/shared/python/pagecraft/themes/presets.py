"""Built-in base themes."""

from pagecraft.models.theme import Theme, ThemeFonts, ThemeTokens

DEFAULT_THEME_ID = "theme-default"

DEFAULT_THEME = Theme(
    id=DEFAULT_THEME_ID,
    name="Prime Default",
    description="Clean storefront theme with green accents.",
    tokens=ThemeTokens(
        colors={
            "primary": "#16a34a",
            "secondary": "#0f172a",
            "accent": "#f97316",
            "background": "#f8fafc",
            "foreground": "#0f172a",
        },
        fonts=ThemeFonts(
            heading="Space Grotesk, sans-serif",
            body="Inter, sans-serif",
        ),
        spacing={
            "md": "1.5rem",
            "lg": "2.5rem",
        },
    ),
)

BUILTIN_THEMES: dict[str, Theme] = {
    DEFAULT_THEME.id: DEFAULT_THEME,
}


def get_theme(theme_id: str | None) -> Theme:
    """Get a built-in theme, falling back to the default.

    Args:
        theme_id: Theme ID or None.

    Returns:
        Theme.
    """
    if theme_id is None:
        return DEFAULT_THEME
    return BUILTIN_THEMES.get(theme_id, DEFAULT_THEME)
