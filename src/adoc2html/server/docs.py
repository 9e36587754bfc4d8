#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adoc2html/server/docs.py
"""Docs route: fetch an AsciiDoc topic from the upstream repository and convert it.

The route is independent of any HTTP server: it takes the request path and
query, and returns a :class:`DocsResponse` (or None for "not found") that
the caller writes out.

"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Optional, Union
from urllib.parse import parse_qsl

import httpx

from adoc2html.api import convert
from adoc2html.book import SiteBook
from adoc2html.config import ServerSettings
from adoc2html.constants import ADOC_SUFFIX, ATTRIBUTE_QUERY_PREFIX, DEFAULT_BACKEND, HTML_CONTENT_TYPE
from adoc2html.exceptions import UpstreamError

logger = logging.getLogger(__name__)

QueryInput = Union[str, Iterable[tuple[str, str]]]


@dataclass(frozen=True)
class DocsResponse:
    """Response produced by the docs route.

    Parameters
    ----------
    status : int
        HTTP status code
    body : bytes
        Response body
    content_type : str
        Value of the Content-Type header

    """

    status: int
    body: bytes
    content_type: str


def _query_pairs(query: QueryInput) -> list[tuple[str, str]]:
    if isinstance(query, str):
        return parse_qsl(query.lstrip("?"), keep_blank_values=True)
    return list(query)


def resolve_upstream_url(path: str, settings: ServerSettings) -> str:
    """Build the upstream URL of the source of ``path`` (without the ``.adoc`` suffix).

    Examples
    --------
        >>> settings = ServerSettings(upstream="https://raw.example.com", repo_owner="acme",
        ...                           repo_name="docs", repo_root_path="/book/")
        >>> resolve_upstream_url("/guide/intro", settings)
        'https://raw.example.com/acme/docs/main/book/guide/intro'

    """
    root_path = settings.repo_root_path
    if root_path.startswith("/"):
        root_path = root_path[1:]
    if root_path.endswith("/"):
        root_path = root_path[:-1]

    relative = path[1:] if path.startswith("/") else path
    full_path = f"{root_path}/{relative}" if root_path else relative
    return f"{settings.upstream}/{settings.repo_owner}/{settings.repo_name}/{settings.repo_ref}/{full_path}"


def collect_attributes(query: QueryInput) -> dict[str, str]:
    """Collect ``attr-<name>=<value>`` query parameters as document attributes.

    Examples
    --------
        >>> collect_attributes("attr-product=Franklin&backend=html5")
        {'product': 'Franklin'}

    """
    attributes: dict[str, str] = {}
    for key, value in _query_pairs(query):
        if not key.startswith(ATTRIBUTE_QUERY_PREFIX):
            continue
        name = key[len(ATTRIBUTE_QUERY_PREFIX) :]
        if name:
            attributes[name] = value
    return attributes


def _query_value(query: QueryInput, name: str) -> Optional[str]:
    for key, value in _query_pairs(query):
        if key == name:
            return value
    return None


def topic_path_for(path: str) -> str:
    """Return the topic path (relative to the book root) served at ``path``."""
    return f"{path.lstrip('/')}{ADOC_SUFFIX}"


def handle_docs_request(
    path: str,
    query: QueryInput,
    settings: ServerSettings,
    client: httpx.Client,
) -> Optional[DocsResponse]:
    """Serve the converted topic at ``path``.

    Parameters
    ----------
    path : str
        Request path, e.g. ``/guide/intro``
    query : str or iterable of (str, str)
        Raw query string or its key/value pairs. ``backend`` selects the
        converter, ``attr-<name>`` parameters set document attributes.
    settings : ServerSettings
        Upstream repository and site settings
    client : httpx.Client
        HTTP client used for the upstream request

    Returns
    -------
    DocsResponse or None
        None when the upstream has no such document; the upstream response
        for any other failure status; the converted HTML otherwise

    Raises
    ------
    UpstreamError
        If the upstream request fails without a response
    FormatError
        If the requested backend is unknown

    """
    query_pairs = _query_pairs(query)
    backend = _query_value(query_pairs, "backend") or DEFAULT_BACKEND
    logger.debug("[Docs] handle GET: %s", path)

    upstream = f"{resolve_upstream_url(path, settings)}{ADOC_SUFFIX}"
    logger.debug("[Docs] upstream: %s", upstream)
    attributes = collect_attributes(query_pairs)

    try:
        response = client.get(upstream, timeout=settings.timeout)
    except httpx.HTTPError as e:
        raise UpstreamError(f"Failed to fetch {upstream}: {e}", url=upstream, original_error=e) from e

    if not response.is_success:
        if response.status_code == 404:
            return None
        logger.info("[Docs] upstream answered %d for %s", response.status_code, upstream)
        return DocsResponse(
            status=response.status_code,
            body=response.content,
            content_type=response.headers.get("content-type", "text/plain"),
        )

    html = convert(
        response.text,
        topic_path=topic_path_for(path),
        backend=backend,
        attributes=attributes,
        book=SiteBook(settings.site_url),
    )
    return DocsResponse(status=200, body=html.encode("utf-8"), content_type=HTML_CONTENT_TYPE)


__all__ = [
    "DocsResponse",
    "collect_attributes",
    "handle_docs_request",
    "resolve_upstream_url",
    "topic_path_for",
]
