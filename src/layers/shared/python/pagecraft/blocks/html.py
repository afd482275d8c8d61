"""HTML helpers shared by block renderers."""

import html as html_module
import re
from typing import Any

_HEX_COLOR = re.compile(r"^#[0-9a-fA-F]{3,8}$")
_FUNC_COLOR = re.compile(r"^(rgb|rgba|hsl|hsla)\([^)]+\)$")
_NAMED_COLOR = re.compile(r"^[a-zA-Z]+$")

# Lengths like 2rem, 16px, 1.5em, 0
_CSS_LENGTH = re.compile(r"^(0|\d+(\.\d+)?(px|rem|em|%|vh|vw))(\s+(0|\d+(\.\d+)?(px|rem|em|%|vh|vw))){0,3}$")

TEXT_ALIGNMENTS = ("left", "center", "right")


def escape_html(value: Any) -> str:
    """Escape a value for safe HTML insertion.

    Args:
        value: Value to escape.

    Returns:
        HTML-escaped string ("" for None).
    """
    if value is None:
        return ""
    return html_module.escape(str(value))


def sanitize_url(url: Any) -> str:
    """Sanitize a URL to prevent XSS via javascript: protocol.

    Args:
        url: URL to sanitize.

    Returns:
        Escaped URL or '#' if missing or unsafe.
    """
    if not url or not isinstance(url, str):
        return "#"
    url = url.strip()
    if url.lower().startswith(("javascript:", "data:", "vbscript:")):
        return "#"
    return escape_html(url)


def sanitize_color(color: Any, default: str = "") -> str:
    """Sanitize a color value (hex, rgb/hsl functions or named colors)."""
    if not color or not isinstance(color, str):
        return default
    color = color.strip()
    if _HEX_COLOR.match(color) or _NAMED_COLOR.match(color):
        return color
    if _FUNC_COLOR.match(color):
        return escape_html(color)
    return default


def sanitize_length(value: Any) -> str:
    """Sanitize a CSS length or shorthand (e.g. "2rem", "8px 16px")."""
    if not isinstance(value, str):
        return ""
    value = value.strip()
    return value if _CSS_LENGTH.match(value) else ""


def as_list(value: Any) -> list:
    """Return value if it's a list, else an empty list.

    Props edited through the JSON editor may hold raw text while the
    operator is mid-edit.
    """
    return value if isinstance(value, list) else []


def as_dict(value: Any) -> dict:
    """Return value if it's a dict, else an empty dict."""
    return value if isinstance(value, dict) else {}


def render_links(actions: list, css_class: str) -> str:
    """Render a list of ``{label, href, variant}`` actions as anchors."""
    parts = []
    for action in actions:
        if not isinstance(action, dict) or not action.get("label"):
            continue
        variant = "outline" if action.get("variant") == "outline" else "default"
        parts.append(
            f'<a href="{sanitize_url(action.get("href"))}" '
            f'class="{css_class} {css_class}--{variant}">{escape_html(action["label"])}</a>'
        )
    return "".join(parts)
