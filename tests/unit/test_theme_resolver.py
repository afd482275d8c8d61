"""Tests for theme override resolution."""

from pagecraft.models.theme import Theme, ThemeFonts, ThemeTokens
from pagecraft.themes.presets import DEFAULT_THEME, get_theme
from pagecraft.themes.resolver import flatten_tokens, resolve, seed_overrides


class TestFlattenTokens:
    """Tests for flatten_tokens."""

    def test_groups(self):
        """Test every token group maps to its flat prefix."""
        tokens = ThemeTokens(
            colors={"primary": "#111"},
            fonts=ThemeFonts(heading="Georgia"),
            spacing={"md": "1rem"},
            radii={"lg": "12px"},
            shadows={"card": "0 1px 2px #000"},
        )

        assert flatten_tokens(tokens) == {
            "color-primary": "#111",
            "spacing-md": "1rem",
            "radius-lg": "12px",
            "shadow-card": "0 1px 2px #000",
            "font-heading": "Georgia",
        }

    def test_none(self):
        """Test no base theme flattens to nothing."""
        assert flatten_tokens(None) == {}


class TestResolve:
    """Tests for resolve."""

    def test_override_wins(self):
        """Test overridden keys win and the rest fall back to the base."""
        tokens = resolve(DEFAULT_THEME, {"color-primary": "#ff0000", "spacing-xl": "4rem"})

        assert tokens.get("color-primary") == "#ff0000"
        assert tokens.get("color-accent") == "#f97316"
        assert tokens.get("spacing-xl") == "4rem"
        assert tokens.get("font-body") == "Inter, sans-serif"

    def test_inputs_untouched(self):
        """Test neither the base nor the overrides are mutated."""
        overrides = {"color-primary": "#ff0000"}
        before = DEFAULT_THEME.model_dump()

        resolve(DEFAULT_THEME, overrides)

        assert overrides == {"color-primary": "#ff0000"}
        assert DEFAULT_THEME.model_dump() == before

    def test_css_variables(self):
        """Test tokens are exposed as --cms- custom properties."""
        tokens = resolve(None, {"color-primary": "#ff0000"})

        assert tokens.css_variables() == {"--cms-color-primary": "#ff0000"}
        assert tokens.css_declarations() == "--cms-color-primary: #ff0000"

    def test_unsafe_values_skipped(self):
        """Test values that could break out of a declaration are skipped."""
        tokens = resolve(None, {"color-primary": "red; } body { display: none", "bad key": "x"})

        assert tokens.css_variables() == {}


class TestSeedOverrides:
    """Tests for seed_overrides."""

    def test_seeds_panel_keys(self):
        """Test the five panel keys are copied from the theme."""
        seeded = seed_overrides(DEFAULT_THEME, {"spacing-md": "2rem"})

        assert seeded == {
            "spacing-md": "2rem",
            "color-primary": "#16a34a",
            "color-secondary": "#0f172a",
            "color-background": "#f8fafc",
            "font-heading": "Space Grotesk, sans-serif",
            "font-body": "Inter, sans-serif",
        }

    def test_missing_tokens_skipped(self):
        """Test keys the theme lacks keep their existing value."""
        theme = Theme(name="Sparse", tokens=ThemeTokens(colors={"primary": "#000"}))

        seeded = seed_overrides(theme, {"font-body": "Arial"})

        assert seeded == {"color-primary": "#000", "font-body": "Arial"}


class TestPresets:
    """Tests for built-in themes."""

    def test_get_theme(self):
        """Test lookups fall back to the default theme."""
        assert get_theme("theme-default") is DEFAULT_THEME
        assert get_theme("missing") is DEFAULT_THEME
        assert get_theme(None) is DEFAULT_THEME
        assert DEFAULT_THEME.name == "Prime Default"
