#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adoc2html/utils/__init__.py
"""Utility modules for adoc2html package.

This package contains helpers for class names and element IDs, HTML
escaping, link rewriting and timing of the conversion stages.
"""

from adoc2html.utils.links import normalize_url, resolve_image_source, resolve_include, rewrite_link_target
from adoc2html.utils.text import make_unique_slug, slugify, to_class_name

__all__ = [
    "normalize_url",
    "resolve_image_source",
    "resolve_include",
    "rewrite_link_target",
    "slugify",
    "make_unique_slug",
    "to_class_name",
]
