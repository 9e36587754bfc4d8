#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adoc2html/server/app.py
"""HTTP server for the docs route.

Serves converted topics on demand: ``GET /guide/intro?backend=franklin``
fetches ``guide/intro.adoc`` from the configured upstream repository and
answers with the converted HTML.
"""

from __future__ import annotations

import http.server
import logging
from typing import Any, Optional
from urllib.parse import urlsplit

import httpx

from adoc2html.config import ServerSettings
from adoc2html.constants import DEFAULT_SERVER_HOST, DEFAULT_SERVER_PORT, HTML_CONTENT_TYPE
from adoc2html.exceptions import Adoc2HtmlError, FormatError, UpstreamError, ValidationError
from adoc2html.server.docs import DocsResponse, handle_docs_request
from adoc2html.utils.html_utils import escape_html

logger = logging.getLogger(__name__)


def error_page(status: int, title: str, message: str) -> DocsResponse:
    """Build a minimal HTML error response."""
    html = f"<html><body><h1>{status} {escape_html(title)}</h1><p>{escape_html(message)}</p></body></html>"
    return DocsResponse(status=status, body=html.encode("utf-8"), content_type=HTML_CONTENT_TYPE)


def dispatch(path_with_query: str, settings: ServerSettings, client: httpx.Client) -> DocsResponse:
    """Answer a GET request, mapping failures to HTTP error pages.

    Parameters
    ----------
    path_with_query : str
        Request target as received (path and optional query string)
    settings : ServerSettings
        Docs service settings
    client : httpx.Client
        Shared HTTP client

    Returns
    -------
    DocsResponse
        Response to write back

    """
    target = urlsplit(path_with_query)
    try:
        response = handle_docs_request(target.path, target.query, settings, client)
    except UpstreamError as e:
        logger.error("Upstream request failed: %s", e)
        return error_page(502, "Bad Gateway", "The document source could not be reached.")
    except (FormatError, ValidationError) as e:
        return error_page(400, "Bad Request", str(e))
    except Adoc2HtmlError as e:
        logger.error("Error converting %s: %s", target.path, e)
        return error_page(500, "Internal Server Error", f"Error converting document: {e}")

    if response is None:
        return error_page(404, "Not Found", "The requested document was not found.")
    return response


def make_handler(settings: ServerSettings, client: httpx.Client) -> type[http.server.BaseHTTPRequestHandler]:
    """Create a request handler class bound to ``settings`` and ``client``."""

    class DocsHandler(http.server.BaseHTTPRequestHandler):
        def do_GET(self) -> None:
            response = dispatch(self.path, settings, client)
            self.send_response(response.status)
            self.send_header("Content-type", response.content_type)
            self.send_header("Content-Length", str(len(response.body)))
            self.end_headers()
            self.wfile.write(response.body)

        def log_message(self, format: str, *args: Any) -> None:
            logger.info("[%s] %s", self.log_date_time_string(), format % args)

    return DocsHandler


def create_server(
    settings: ServerSettings,
    host: str = DEFAULT_SERVER_HOST,
    port: int = DEFAULT_SERVER_PORT,
    client: Optional[httpx.Client] = None,
) -> http.server.ThreadingHTTPServer:
    """Create (but do not start) the threaded docs server.

    Raises
    ------
    ConfigError
        If the upstream repository settings are incomplete
    OSError
        If the address cannot be bound

    """
    settings.validate_upstream()
    client = client or httpx.Client(follow_redirects=True)
    return http.server.ThreadingHTTPServer((host, port), make_handler(settings, client))


def serve(
    settings: ServerSettings,
    host: str = DEFAULT_SERVER_HOST,
    port: int = DEFAULT_SERVER_PORT,
) -> None:
    """Run the docs server until interrupted."""
    with httpx.Client(follow_redirects=True) as client:
        with create_server(settings, host, port, client) as httpd:
            logger.info("Serving docs from %s/%s/%s at http://%s:%d/", settings.upstream, settings.repo_owner,
                        settings.repo_name, host, port)
            try:
                httpd.serve_forever()
            except KeyboardInterrupt:
                logger.info("Shutting down server...")


__all__ = ["create_server", "dispatch", "error_page", "make_handler", "serve"]
