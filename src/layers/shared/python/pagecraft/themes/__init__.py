"""Theme tokens, presets and override resolution."""

from pagecraft.themes.presets import BUILTIN_THEMES, DEFAULT_THEME, get_theme
from pagecraft.themes.resolver import (
    CSS_VARIABLE_PREFIX,
    SEEDED_KEYS,
    EffectiveTokens,
    flatten_tokens,
    resolve,
    seed_overrides,
)

__all__ = [
    "BUILTIN_THEMES",
    "CSS_VARIABLE_PREFIX",
    "DEFAULT_THEME",
    "EffectiveTokens",
    "SEEDED_KEYS",
    "flatten_tokens",
    "get_theme",
    "resolve",
    "seed_overrides",
]
