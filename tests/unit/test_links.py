#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Unit tests for link target and include rewriting."""

import pytest
from utils import RecordingBook

from adoc2html.book import SiteBook
from adoc2html.utils.links import (
    collapse_hyphens,
    is_http_url,
    normalize_hostname,
    normalize_url,
    resolve_image_source,
    resolve_include,
    rewrite_link_target,
    strip_suffix,
    topic_directory,
)


@pytest.mark.unit
class TestHostnameNormalization:
    """Tests for hostname and URL normalization."""

    def test_lowercases_and_collapses_hyphens(self):
        """Test that hostnames are lowercased and long hyphen runs collapsed."""
        assert normalize_hostname("Main---Docs.Example.COM") == "main--docs.example.com"

    def test_double_hyphens_are_kept(self):
        """Test that a run of exactly two hyphens is left alone."""
        assert normalize_hostname("main--docs.example.com") == "main--docs.example.com"

    @pytest.mark.parametrize("hostname", ["Example.com", "a-----b.Test", "x---y---z.io", "plain.host"])
    def test_normalization_is_idempotent(self, hostname):
        """Test that normalizing twice gives the same result as once."""
        once = normalize_hostname(hostname)
        assert normalize_hostname(once) == once

    def test_collapse_hyphens(self):
        """Test collapsing arbitrary runs of three or more hyphens."""
        assert collapse_hyphens("a---b----c-d--e") == "a--b--c-d--e"

    def test_normalize_url_host_and_path(self):
        """Test that host case and hyphen runs in host and path are normalized."""
        assert normalize_url("https://Example.com/a---b") == "https://example.com/a--b"

    def test_normalize_url_keeps_userinfo_port_query_fragment(self):
        """Test that the rest of the URL survives normalization."""
        url = "https://user@Host---X.com:8080/p?q=A---B#Frag"
        assert normalize_url(url) == "https://user@host--x.com:8080/p?q=A---B#Frag"

    @pytest.mark.parametrize("target", ["guide/page", "#section", "mailto:someone@example.com", "../up"])
    def test_relative_and_non_hierarchical_targets_unchanged(self, target):
        """Test that targets without scheme and host are returned verbatim."""
        assert normalize_url(target) == target

    @pytest.mark.parametrize("target", ["http://[::1", "http://host:port/x"])
    def test_unparseable_url_left_verbatim(self, target):
        """Test that malformed URLs are not an error and stay untouched."""
        assert normalize_url(target) == target


@pytest.mark.unit
class TestLinkRewriting:
    """Tests for the link target rules."""

    def test_convention_suffix_stripped(self):
        """Test that the .franklin suffix is removed."""
        assert rewrite_link_target("guide/page.franklin") == "guide/page"

    def test_suffix_strip_and_normalization_combined(self):
        """Test the combined rules on an absolute URL."""
        assert rewrite_link_target("https://Example.com/a---b.franklin") == "https://example.com/a--b"

    def test_empty_target(self):
        """Test that an empty target stays empty."""
        assert rewrite_link_target("") == ""

    def test_strip_suffix_only_at_end(self):
        """Test that the suffix is only stripped when it ends the target."""
        assert strip_suffix("a.franklin.html", ".franklin") == "a.franklin.html"
        assert strip_suffix("a.adoc", ".adoc") == "a"

    def test_is_http_url(self):
        """Test http(s) URL detection."""
        assert is_http_url("https://example.com")
        assert is_http_url("HTTP://example.com")
        assert not is_http_url("ftp://example.com")
        assert not is_http_url("guide/sub")

    def test_topic_directory(self):
        """Test the directory of a topic path."""
        assert topic_directory("guide/intro.adoc") == "guide"
        assert topic_directory("intro.adoc") == ""


@pytest.mark.unit
class TestIncludeResolution:
    """Tests for include reference resolution."""

    def test_sibling_include_resolved_through_book(self):
        """Test that a sibling include is joined with the topic directory."""
        book = RecordingBook()
        href, variants = resolve_include("./sub.adoc", "guide/intro.adoc", book)

        assert href == "https://book.test/guide/sub"
        assert variants == ["include", "docs"]
        assert book.calls == ["guide/sub"]

    def test_parent_directory_include(self):
        """Test that .. segments are resolved before the book is asked."""
        book = RecordingBook()
        href, _ = resolve_include("../shared/common.adoc", "guide/intro.adoc", book)

        assert book.calls == ["shared/common"]
        assert href == "https://book.test/shared/common"

    def test_include_from_book_root(self):
        """Test an include in a topic at the book root."""
        href, variants = resolve_include("sub.adoc", "intro.adoc", SiteBook(""))
        assert href == "/sub"
        assert variants == ["include", "docs"]

    def test_absolute_include_bypasses_book(self):
        """Test that http(s) includes are normalized but not resolved."""
        book = RecordingBook()
        href, variants = resolve_include("https://Other---Site.com/x.adoc", "guide/intro.adoc", book)

        assert href == "https://other--site.com/x"
        assert variants == ["include"]
        assert book.calls == []

    def test_image_source_below_graphics(self):
        """Test that block images resolve below the graphics directory."""
        assert resolve_image_source("arch.png", SiteBook("")) == "/_graphics/arch.png"
        assert resolve_image_source("arch.png", SiteBook("https://docs.example.com")) == (
            "https://docs.example.com/_graphics/arch.png"
        )
