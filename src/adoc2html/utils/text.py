#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adoc2html/utils/text.py
"""Text processing utilities for class names and element IDs.

Functions
---------
to_class_name : Normalize text into a block-convention class token
slugify : Convert a section title into an element ID
make_unique_slug : Generate unique slug with duplicate handling

Examples
--------
Class names for convention blocks:

    >>> from adoc2html.utils.text import to_class_name
    >>> to_class_name("Release Notes (v2)")
    'release-notes-v2'

Section IDs:

    >>> slugify("Getting Started")
    '_getting_started'

"""

from __future__ import annotations

import re
import unicodedata

_CLASS_NAME_INVALID = re.compile(r"[^0-9a-z]+")


def to_class_name(text: str) -> str:
    """Normalize text into a convention-safe class token.

    Lowercases the text, turns every run of characters outside ``[0-9a-z]``
    into a single hyphen and strips hyphens from both ends.

    Parameters
    ----------
    text : str
        Block name, variant name or table title

    Returns
    -------
    str
        Class token, possibly empty

    Examples
    --------
        >>> to_class_name("Headless")
        'headless'
        >>> to_class_name("  Key  Features!  ")
        'key-features'
        >>> to_class_name("---")
        ''

    """
    if not text:
        return ""
    return _CLASS_NAME_INVALID.sub("-", text.lower()).strip("-")


def make_unique_slug(slug: str, seen_slugs: dict[str, int], separator: str = "_") -> str:
    """Generate unique slug with duplicate handling.

    The seen_slugs dictionary tracks occurrence counts and is mutated in-place.

    Parameters
    ----------
    slug : str
        Base slug to make unique
    seen_slugs : dict[str, int]
        Dictionary mapping base slug to count of occurrences
    separator : str, default = "_"
        Separator to use before numeric suffix

    Returns
    -------
    str
        Unique slug (with numeric suffix if needed)

    Examples
    --------
        >>> seen = {}
        >>> make_unique_slug("_intro", seen)
        '_intro'
        >>> make_unique_slug("_intro", seen)
        '_intro_2'

    """
    if slug not in seen_slugs:
        seen_slugs[slug] = 1
        return slug

    seen_slugs[slug] += 1
    count = seen_slugs[slug]
    unique_slug = f"{slug}{separator}{count}"
    while unique_slug in seen_slugs:
        count += 1
        unique_slug = f"{slug}{separator}{count}"
    seen_slugs[unique_slug] = 1
    return unique_slug


def slugify(text: str, *, prefix: str = "_", separator: str = "_") -> str:
    """Create an element ID from a section title.

    Produces IDs in the style AsciiDoc processors generate for sections:
    the title is NFD-normalized, accents are dropped, the text is lowercased
    and runs of other characters collapse to the separator.

    Parameters
    ----------
    text : str
        Section title (plain text, no markup)
    prefix : str, default = "_"
        Prefix prepended to the ID
    separator : str, default = "_"
        Separator between words

    Returns
    -------
    str
        Element ID

    Examples
    --------
        >>> slugify("Café résumé")
        '_cafe_resume'
        >>> slugify("API Reference (v2.0)")
        '_api_reference_v2_0'

    """
    normalized = unicodedata.normalize("NFD", text)
    normalized = "".join(char for char in normalized if unicodedata.category(char) != "Mn")

    slug = re.sub(r"[^a-z0-9]+", separator, normalized.lower()).strip(separator)
    if not slug:
        slug = "section"

    return f"{prefix}{slug}"


__all__ = [
    "to_class_name",
    "slugify",
    "make_unique_slug",
]
