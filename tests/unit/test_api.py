#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Unit tests for the public conversion API."""

import pytest

import adoc2html
from adoc2html import convert, to_ast
from adoc2html.book import SiteBook
from adoc2html.exceptions import FormatError, ValidationError
from adoc2html.options import ConversionOptions


@pytest.mark.unit
class TestConvert:
    """Tests for convert()."""

    def test_plain_fragment(self):
        """Test a plain Franklin fragment."""
        html = convert("== Intro\n\nHello *world*", topic_path="guide/intro.adoc", plain=True)
        assert html == "<div><h2>Intro</h2>\n<p>Hello <strong>world</strong></p></div>"

    def test_full_page_by_default(self):
        """Test that the page scaffold is the default."""
        html = convert("Hello", topic_path="intro.adoc")
        assert html.startswith("<!DOCTYPE html>")
        assert html.count("<main>") == 1

    def test_topic_path_required(self):
        """Test that a missing topic path is rejected."""
        with pytest.raises(ValidationError) as exc_info:
            convert("Hello")
        assert exc_info.value.parameter_name == "topic_path"

    def test_unknown_option(self):
        """Test that unknown keyword options are rejected."""
        with pytest.raises(ValidationError, match="colour"):
            convert("Hello", topic_path="a.adoc", colour="red")

    def test_invalid_option_value(self):
        """Test that invalid option values become validation errors."""
        with pytest.raises(ValidationError):
            convert("Hello", topic_path="a.adoc", html_parser="regex")

    def test_unknown_backend(self):
        """Test that an unknown backend is a format error."""
        with pytest.raises(FormatError) as exc_info:
            convert("Hello", topic_path="a.adoc", backend="docbook")
        assert exc_info.value.format_type == "docbook"
        assert "franklin" in exc_info.value.supported_formats

    @pytest.mark.parametrize("backend", ["html5", "html"])
    def test_html5_backend(self, backend):
        """Test the generic HTML5 backend and its alias."""
        html = convert("Hello", topic_path="a.adoc", backend=backend, plain=True)
        assert html == '<div class="paragraph">\n<p>Hello</p>\n</div>'

    def test_options_object_with_overrides(self):
        """Test that keyword arguments override an options object."""
        options = ConversionOptions(topic_path="guide/intro.adoc", book=SiteBook("https://docs.example.com"))
        html = convert("include::./sub.adoc[]", options, plain=True)
        assert 'href="https://docs.example.com/guide/sub"' in html

        page = convert("include::./sub.adoc[]", options)
        assert page.startswith("<!DOCTYPE html>")

    def test_attributes(self):
        """Test attribute overrides."""
        html = convert("{product} docs", topic_path="a.adoc", attributes={"product": "Franklin"}, plain=True)
        assert html == "<p>Franklin docs</p>"

    def test_top_level_list_wrapped(self):
        """Test that the final pass wraps top-level lists."""
        assert convert("* a", topic_path="a.adoc", plain=True) == "<div><ul><li><p>a</p></li></ul></div>"

    def test_stage_timing_logged(self, debug_logs):
        """Test that each conversion stage reports its duration at DEBUG."""
        convert("Hello", topic_path="a.adoc", plain=True)
        messages = [record.getMessage() for record in debug_logs.records]
        assert any(m.startswith("Parsing (asciidoc) completed in") and m.endswith("(5 chars)") for m in messages)
        assert any(m.startswith("Rendering (franklin) completed in") for m in messages)
        assert any(m.startswith("Normalizing HTML completed in") for m in messages)

    def test_converter_not_shared_state(self):
        """Test that repeated conversions give identical results."""
        first = convert("== A\n\nText", topic_path="a.adoc", plain=True)
        second = convert("== A\n\nText", topic_path="a.adoc", plain=True)
        assert first == second


@pytest.mark.unit
class TestToAst:
    """Tests for to_ast()."""

    def test_document(self):
        """Test reading a document."""
        document = to_ast("= Guide\n\nHello")
        assert document.title == "Guide"
        assert document.blocks[0].text == "Hello"

    def test_reader_options(self):
        """Test forwarding reader options."""
        document = to_ast("NOTE: x", parse_admonitions=False)
        assert document.blocks[0].node_name == "paragraph"

    def test_invalid_reader_option(self):
        """Test that an invalid reader option is a validation error."""
        with pytest.raises(ValidationError):
            to_ast("x", attribute_missing_policy="explode")


@pytest.mark.unit
def test_package_exports():
    """Test the names exported by the package."""
    assert adoc2html.convert is convert
    assert isinstance(adoc2html.__version__, str)
