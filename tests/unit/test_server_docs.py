#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Unit tests for the docs route and its HTTP error mapping."""

import httpx
import pytest

from adoc2html.config import ServerSettings
from adoc2html.exceptions import RenderingError, UpstreamError
from adoc2html.server.app import dispatch, error_page
from adoc2html.server.docs import collect_attributes, handle_docs_request, resolve_upstream_url, topic_path_for

UPSTREAM = "https://raw.example.com/acme/docs/main/book"

DOCUMENTS = {
    f"{UPSTREAM}/guide/intro.adoc": "== Intro\n\nHello {product}\n\ninclude::./sub.adoc[]\n",
}


@pytest.fixture
def settings():
    return ServerSettings(
        upstream="https://raw.example.com",
        repo_owner="acme",
        repo_name="docs",
        repo_root_path="/book/",
        site_url="https://docs.example.com",
    )


@pytest.fixture
def requests():
    return []


@pytest.fixture
def client(requests):
    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        url = str(request.url)
        if url.endswith("/broken.adoc"):
            return httpx.Response(500, text="upstream exploded")
        if url.endswith("/offline.adoc"):
            raise httpx.ConnectError("connection refused", request=request)
        if url in DOCUMENTS:
            return httpx.Response(200, text=DOCUMENTS[url])
        return httpx.Response(404, text="not found")

    with httpx.Client(transport=httpx.MockTransport(handler)) as http_client:
        yield http_client


@pytest.mark.unit
class TestUpstreamUrl:
    """Tests for upstream URL building."""

    def test_root_path_slashes_trimmed(self, settings):
        """Test the repository root path joined without extra slashes."""
        assert resolve_upstream_url("/guide/intro", settings) == f"{UPSTREAM}/guide/intro"

    def test_without_root_path(self):
        """Test a book at the repository root."""
        settings = ServerSettings(upstream="https://raw.example.com", repo_owner="acme", repo_name="docs")
        assert resolve_upstream_url("/intro", settings) == "https://raw.example.com/acme/docs/main/intro"

    def test_repo_ref(self):
        """Test a non-default ref."""
        settings = ServerSettings(upstream="https://u.test", repo_owner="o", repo_name="r", repo_ref="v2")
        assert resolve_upstream_url("intro", settings) == "https://u.test/o/r/v2/intro"

    def test_topic_path(self):
        """Test the topic path of a request path."""
        assert topic_path_for("/guide/intro") == "guide/intro.adoc"


@pytest.mark.unit
class TestQueryAttributes:
    """Tests for attr- query parameters."""

    def test_query_string(self):
        """Test attributes from a raw query string."""
        assert collect_attributes("attr-product=Franklin&backend=html5&attr-icons=") == {
            "product": "Franklin",
            "icons": "",
        }

    def test_pairs(self):
        """Test attributes from key/value pairs."""
        assert collect_attributes([("attr-a", "1"), ("attr-", "ignored"), ("b", "2")]) == {"a": "1"}


@pytest.mark.unit
class TestDocsRequest:
    """Tests for handle_docs_request."""

    def test_converts_upstream_document(self, settings, client, requests):
        """Test fetching and converting a topic."""
        response = handle_docs_request("/guide/intro", "attr-product=Franklin", settings, client)

        assert str(requests[0].url) == f"{UPSTREAM}/guide/intro.adoc"
        assert response.status == 200
        assert response.content_type == "text/html; charset=utf-8"
        body = response.body.decode("utf-8")
        assert body.count("<main>") == 1
        assert "<p>Hello Franklin</p>" in body
        assert 'href="https://docs.example.com/guide/sub"' in body

    def test_backend_query(self, settings, client):
        """Test selecting the backend from the query."""
        response = handle_docs_request("/guide/intro", "backend=html5", settings, client)
        assert b'<div class="sect1">' in response.body

    def test_not_found(self, settings, client):
        """Test that an upstream 404 means not found."""
        assert handle_docs_request("/missing", "", settings, client) is None

    def test_failure_status_passed_through(self, settings, client):
        """Test that other upstream failures are returned as is."""
        response = handle_docs_request("/broken", "", settings, client)

        assert response.status == 500
        assert response.body == b"upstream exploded"
        assert response.content_type.startswith("text/plain")

    def test_transport_error(self, settings, client):
        """Test that an unreachable upstream raises."""
        with pytest.raises(UpstreamError) as exc_info:
            handle_docs_request("/offline", "", settings, client)
        assert exc_info.value.url == f"{UPSTREAM}/offline.adoc"


@pytest.mark.unit
class TestDispatch:
    """Tests for mapping results to HTTP responses."""

    def test_success(self, settings, client):
        """Test a converted page."""
        response = dispatch("/guide/intro?attr-product=X", settings, client)
        assert response.status == 200
        assert b"Hello X" in response.body

    def test_not_found(self, settings, client):
        """Test the not found page."""
        response = dispatch("/missing", settings, client)
        assert response.status == 404
        assert b"Not Found" in response.body

    def test_bad_gateway(self, settings, client):
        """Test the page for an unreachable upstream."""
        assert dispatch("/offline", settings, client).status == 502

    def test_unknown_backend(self, settings, client):
        """Test that an unknown backend is a bad request."""
        response = dispatch("/guide/intro?backend=docbook", settings, client)
        assert response.status == 400
        assert b"docbook" in response.body

    def test_conversion_failure(self, settings, client, monkeypatch):
        """Test that other conversion errors are server errors."""

        def failing(*args, **kwargs):
            raise RenderingError("no tree builder")

        monkeypatch.setattr("adoc2html.server.app.handle_docs_request", failing)

        response = dispatch("/guide/intro", settings, client)

        assert response.status == 500
        assert b"no tree builder" in response.body

    def test_error_page_escapes(self):
        """Test that error messages are escaped."""
        response = error_page(400, "Bad Request", "<script>")
        assert b"&lt;script&gt;" in response.body
        assert response.content_type == "text/html; charset=utf-8"
