"""Theme override resolution.

Base themes are structured token trees; page overrides are a sparse flat map
of keys like ``color-primary`` or ``font-heading``. Resolution flattens the
base and layers the overrides on top without touching either input.
"""

import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Iterator, Mapping

from pagecraft.models.theme import Theme, ThemeTokens

CSS_VARIABLE_PREFIX = "--cms-"

# Token groups and the flat key prefix each maps to
TOKEN_GROUPS: dict[str, str] = {
    "colors": "color",
    "spacing": "spacing",
    "radii": "radius",
    "shadows": "shadow",
}

# Keys the theme panel edits, seeded from a base theme on request
SEEDED_KEYS: tuple[str, ...] = (
    "color-primary",
    "color-secondary",
    "color-background",
    "font-heading",
    "font-body",
)

_TOKEN_KEY = re.compile(r"^[a-zA-Z0-9-]+$")
_UNSAFE_CSS_VALUE = re.compile(r"[;{}<>\"\\]")


@dataclass(frozen=True)
class EffectiveTokens:
    """Flattened tokens after overrides are applied."""

    values: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self):
        if not isinstance(self.values, MappingProxyType):
            object.__setattr__(self, "values", MappingProxyType(dict(self.values)))

    def get(self, key: str, default: str | None = None) -> str | None:
        """Get one token value by flat key."""
        return self.values.get(key, default)

    def css_variables(self) -> dict[str, str]:
        """Get the tokens as ``--cms-<key>`` custom properties.

        Keys that are not valid identifiers and values that could break out
        of a declaration are skipped.
        """
        variables = {}
        for key, value in self.values.items():
            if not _TOKEN_KEY.match(key) or _UNSAFE_CSS_VALUE.search(value):
                continue
            variables[f"{CSS_VARIABLE_PREFIX}{key}"] = value
        return variables

    def css_declarations(self) -> str:
        """Get the custom properties as an inline style string."""
        return "; ".join(f"{name}: {value}" for name, value in self.css_variables().items())

    def __iter__(self) -> Iterator[str]:
        return iter(self.values)

    def __len__(self) -> int:
        return len(self.values)


def _tokens_of(base: Theme | ThemeTokens | None) -> ThemeTokens | None:
    if isinstance(base, Theme):
        return base.tokens
    return base


def flatten_tokens(tokens: Theme | ThemeTokens | None) -> dict[str, str]:
    """Flatten a token tree into the override key space.

    Args:
        tokens: Theme or its tokens.

    Returns:
        Dict like ``{"color-primary": "#16a34a", "font-body": "Inter"}``.
    """
    tokens = _tokens_of(tokens)
    if tokens is None:
        return {}

    flat: dict[str, str] = {}
    for group, prefix in TOKEN_GROUPS.items():
        values: dict[str, Any] | None = getattr(tokens, group)
        for name, value in (values or {}).items():
            if value is not None:
                flat[f"{prefix}-{name}"] = str(value)

    for name in ("heading", "body"):
        value = getattr(tokens.fonts, name)
        if value is not None:
            flat[f"font-{name}"] = value

    return flat


def resolve(base: Theme | ThemeTokens | None, overrides: Mapping[str, str] | None) -> EffectiveTokens:
    """Resolve the effective tokens for a page.

    Every key present in ``overrides`` wins; every other key falls back to
    the base theme. Neither input is modified.

    Args:
        base: Base theme (or its tokens), or None.
        overrides: Sparse flat override map.

    Returns:
        EffectiveTokens.
    """
    values = flatten_tokens(base)
    for key, value in (overrides or {}).items():
        if value is None:
            continue
        values[key] = value
    return EffectiveTokens(values)


def seed_overrides(theme: Theme | ThemeTokens, overrides: Mapping[str, str] | None = None) -> dict[str, str]:
    """Copy the panel-edited token values of a theme into an override map.

    This is the explicit "apply base theme" action; keys the theme does not
    define are left as they were.

    Args:
        theme: Theme to seed from.
        overrides: Existing overrides (not modified).

    Returns:
        New override map.
    """
    seeded = dict(overrides or {})
    flat = flatten_tokens(theme)
    for key in SEEDED_KEYS:
        if key in flat:
            seeded[key] = flat[key]
    return seeded
