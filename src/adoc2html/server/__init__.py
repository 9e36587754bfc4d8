#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Docs service: converts topics fetched from an upstream repository on request."""

from adoc2html.server.app import create_server, serve
from adoc2html.server.docs import DocsResponse, collect_attributes, handle_docs_request, resolve_upstream_url

__all__ = [
    "DocsResponse",
    "collect_attributes",
    "create_server",
    "handle_docs_request",
    "resolve_upstream_url",
    "serve",
]
