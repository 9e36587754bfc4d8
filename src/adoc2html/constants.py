#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for adoc2html.

This module centralizes hardcoded values and default configuration
constants used across the adoc2html library.

Constants are organized by category:
1. Type Definitions - All Literal types and type aliases
2. Reader Defaults - AsciiDoc parsing behavior
3. Conversion Defaults - Backend selection and output
4. Block Convention - Class names and suffixes used by the Franklin convention
5. Page Scaffold - Fixed markup of the full-page output
6. Docs Service - Upstream fetch and HTTP server defaults
"""

from __future__ import annotations

from typing import Literal

# =============================================================================
# Type Definitions - All Literal Types and Type Aliases
# =============================================================================

AttributeMissingPolicy = Literal["keep", "blank", "warn"]
HtmlParser = Literal["html.parser", "html5lib", "lxml"]
BackendName = Literal["franklin", "html5", "html"]

# =============================================================================
# Reader Defaults
# =============================================================================

DEFAULT_ASCIIDOC_ATTRIBUTE_MISSING_POLICY: AttributeMissingPolicy = "keep"
DEFAULT_ASCIIDOC_PARSE_ADMONITIONS = True
DEFAULT_ASCIIDOC_HONOR_HARD_BREAKS = True
DEFAULT_ASCIIDOC_PARSE_TABLE_SPANS = True

ADMONITION_STYLES = frozenset({"NOTE", "TIP", "IMPORTANT", "WARNING", "CAUTION"})

# Attribute references that resolve without being declared in the document
BUILTIN_ATTRIBUTES: dict[str, str] = {
    "empty": "",
    "sp": " ",
    "nbsp": " ",
    "zwsp": "​",
    "amp": "&",
    "lt": "<",
    "gt": ">",
    "startsb": "[",
    "endsb": "]",
    "vbar": "|",
    "plus": "+",
    "caret": "^",
    "tilde": "~",
    "apos": "'",
    "quot": '"',
}

# =============================================================================
# Conversion Defaults
# =============================================================================

DEFAULT_BACKEND: BackendName = "franklin"
FALLBACK_BACKENDS = frozenset({"html5", "html"})
DEFAULT_PLAIN = False
DEFAULT_HTML_PARSER: HtmlParser = "html.parser"

# =============================================================================
# Block Convention
# =============================================================================

FRANKLIN_SUFFIX = ".franklin"
ADOC_SUFFIX = ".adoc"
INCLUDE_ROLE = "bare include"
PROCEDURE_ROLE = "procedure"
GRAPHICS_PATH = "/_graphics/"

BLOCK_FRAGMENT = "fragment"
BLOCK_TABLE = "table"
BLOCK_PROCEDURE = "procedure"
VARIANT_INCLUDE = "include"
VARIANT_DOCS = "docs"
VARIANT_HEADLESS = "headless"

# =============================================================================
# Page Scaffold
# =============================================================================

PAGE_SCRIPT_SRC = "/scripts/scripts.js"
PAGE_STYLESHEET_HREF = "/styles/styles.css"
PAGE_VIEWPORT = "width=device-width, initial-scale=1"

# =============================================================================
# Docs Service
# =============================================================================

DEFAULT_REPO_REF = "main"
DEFAULT_UPSTREAM_TIMEOUT = 10.0
DEFAULT_SERVER_HOST = "127.0.0.1"
DEFAULT_SERVER_PORT = 8000
ATTRIBUTE_QUERY_PREFIX = "attr-"
HTML_CONTENT_TYPE = "text/html; charset=utf-8"

CONFIG_FILENAMES = [".adoc2html.toml", ".adoc2html.yaml", ".adoc2html.yml", ".adoc2html.json", "pyproject.toml"]
ENV_PREFIX = "DOC_"
