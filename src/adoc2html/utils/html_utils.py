"""HTML-related utility helpers."""

from __future__ import annotations

from html import escape as _html_escape


def escape_html(text: str, *, enabled: bool = True) -> str:
    """Escape HTML special characters when enabled."""
    if not enabled:
        return text
    return _html_escape(text, quote=False)


def escape_attr(value: str) -> str:
    """Escape a value for use inside a double-quoted HTML attribute."""
    return _html_escape(value, quote=True)


def html_attrs(**attrs: str | None) -> str:
    """Render keyword arguments as an HTML attribute string.

    ``None`` values are omitted, a trailing underscore in a name is dropped
    (``class_`` becomes ``class``) and underscores become hyphens.

    Examples
    --------
        >>> html_attrs(class_="ulist", id=None)
        ' class="ulist"'

    """
    parts = []
    for name, value in attrs.items():
        if value is None:
            continue
        name = name.rstrip("_").replace("_", "-")
        parts.append(f' {name}="{escape_attr(value)}"')
    return "".join(parts)


__all__ = ["escape_html", "escape_attr", "html_attrs"]
