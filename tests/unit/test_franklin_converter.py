#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Unit tests for the Franklin block convention converter."""

import logging

import pytest
from utils import RecordingBook, make_context

from adoc2html.api import to_ast
from adoc2html.ast.nodes import Block, Inline, List, ListItem, NodeKind, Section
from adoc2html.book import SiteBook
from adoc2html.renderers.base import BaseConverter, RenderContext
from adoc2html.renderers.franklin import FranklinConverter
from adoc2html.renderers.html5 import Html5Converter


def render(source, book=None, topic_path="guide/intro.adoc", **kwargs):
    document = to_ast(source, **kwargs)
    converter = FranklinConverter()
    ctx = make_context(converter, book or SiteBook(""), topic_path, document)
    return converter.render(document, ctx, NodeKind.EMBEDDED)


def paragraph(text):
    return Block(NodeKind.PARAGRAPH, inlines=[text])


@pytest.mark.unit
class TestDispatch:
    """Tests for handler lookup and the HTML5 fallback."""

    def test_default_fallback(self, franklin):
        """Test that the fallback is an HTML5 converter."""
        assert isinstance(franklin.fallback, Html5Converter)

    def test_handlers_are_read_only(self, franklin):
        """Test that the handler table cannot be changed."""
        with pytest.raises(TypeError):
            franklin.handlers[NodeKind.QUOTE] = lambda node, ctx: ""

    def test_fallback_renders_children_with_franklin(self, franklin, ctx, caplog):
        """Test a kind without convention rule goes through the fallback."""
        quote = Block(NodeKind.QUOTE, blocks=[paragraph("Wise")])

        html = franklin.render(quote, ctx)

        assert html == '<div class="quoteblock">\n<blockquote>\n<p>Wise</p>\n</blockquote>\n</div>'
        assert "handling node with html5 converter: quote" in caplog.text

    def test_no_handler_and_no_fallback(self, caplog):
        """Test that an unhandled kind is dropped with a warning."""
        converter = BaseConverter()
        html = converter.render(Block(NodeKind.QUOTE), make_context(converter))

        assert html == ""
        assert "No base handler for node kind 'quote', dropping it" in caplog.text

    def test_debug_log_per_node(self, franklin, ctx, debug_logs):
        """Test the debug line logged for every rendered node."""
        franklin.render(paragraph("Hi"), ctx)
        franklin.render(paragraph("Hi"), ctx, NodeKind.PARAGRAPH)

        messages = [record.getMessage() for record in debug_logs.records if record.levelno == logging.DEBUG]
        assert "convert node: transform=None name=paragraph" in messages
        assert "convert node: transform=paragraph name=paragraph" in messages

    def test_render_as_other_kind(self, franklin, ctx):
        """Test rendering a node as a different kind."""
        assert franklin.render(paragraph("ignored"), ctx, "thematic_break") == "<hr>"


@pytest.mark.unit
class TestSections:
    """Tests for section panes."""

    def test_subsections_become_sibling_panes(self, franklin, ctx):
        """Test that nesting never produces nested divs."""
        section = Section(
            level=1,
            title_inlines=["Intro"],
            blocks=[
                paragraph("Text"),
                Section(level=2, title_inlines=["Sub"], blocks=[paragraph("More")]),
                paragraph("After"),
            ],
        )

        html = franklin.render(section, ctx)

        assert html == (
            "<div><h2>Intro</h2>\n<p>Text</p></div>"
            "<div><h3>Sub</h3>\n<p>More</p>\n<p>After</p></div>"
        )

    def test_section_from_source(self):
        """Test panes of a parsed document."""
        html = render("== One\n\nFirst\n\n=== Two\n\nSecond\n\n== Three")
        assert html == (
            "<div><h2>One</h2>\n<p>First</p></div><div><h3>Two</h3>\n<p>Second</p></div>\n<div><h2>Three</h2></div>"
        )

    def test_untitled_section(self, franklin, ctx):
        """Test a section without title."""
        assert franklin.render(Section(blocks=[paragraph("x")]), ctx) == "<div><p>x</p></div>"


@pytest.mark.unit
class TestBlocks:
    """Tests for paragraphs, admonitions and literal content."""

    def test_paragraph(self):
        """Test that text is escaped."""
        assert render("a < b & c") == "<p>a &lt; b &amp; c</p>"

    def test_admonition_paragraph(self):
        """Test a paragraph-form admonition."""
        html = render("NOTE: Read this first.")
        assert html == '<div class="admonition note"><div><div>Read this first.</div></div></div>'

    def test_admonition_with_title(self):
        """Test that the title becomes an h6 heading."""
        html = render(".Heads up\nWARNING: Careful.")
        assert html == '<div class="admonition warning"><div><div><h6>Heads up</h6>\nCareful.</div></div></div>'

    def test_compound_admonition(self):
        """Test an admonition holding blocks."""
        html = render("[TIP]\n====\nInside.\n====")
        assert html == '<div class="admonition tip"><div><div><p>Inside.</p></div></div></div>'

    def test_literal_replaces_tabs(self):
        """Test literal content escaping and tab replacement."""
        assert render("....\n\tx < y\n....") == "<pre><code> x &lt; y</code></pre>"

    def test_listing(self):
        """Test that listings render like literal blocks."""
        assert render("[source,python]\n----\nprint(1)\n----") == "<pre><code>print(1)</code></pre>"

    def test_thematic_break(self):
        """Test a thematic break."""
        assert render("'''") == "<hr>"

    def test_floating_title_dropped(self, caplog):
        """Test that floating titles are logged and dropped."""
        html = render("[discrete]\n== Floating\n\nText")

        assert html == "\n<p>Text</p>"
        assert any(
            record.levelno == logging.ERROR and "Floating titles are not supported" in record.getMessage()
            for record in caplog.records
        )


@pytest.mark.unit
class TestImages:
    """Tests for block images."""

    def test_image_below_graphics(self):
        """Test the graphics directory and attributes."""
        html = render("image::arch.png[Architecture,600]")
        assert html == '<img src="/_graphics/arch.png" alt="Architecture" width="600">'

    def test_image_without_width(self):
        """Test that no width attribute is written when absent."""
        assert render("image::arch.png[Diagram]") == '<img src="/_graphics/arch.png" alt="Diagram">'

    def test_image_resolved_by_book(self):
        """Test that the book resolves the image path."""
        book = RecordingBook()
        html = render("image::arch.png[A]", book=book)

        assert book.calls == ["/_graphics/arch.png"]
        assert 'src="https://book.test/_graphics/arch.png"' in html


@pytest.mark.unit
class TestLists:
    """Tests for list conversion."""

    def test_nested_unordered_list(self):
        """Test list items with nested lists."""
        html = render("* one\n** two")
        assert html == "<ul><li><p>one</p><ul><li><p>two</p></li></ul></li></ul>"

    def test_ordered_list(self):
        """Test a plain ordered list."""
        assert render(". one\n. two") == "<ol><li><p>one</p></li><li><p>two</p></li></ol>"

    def test_procedure(self):
        """Test that a procedure list becomes a single-cell block."""
        html = render("[.procedure]\n. One\n. Two")
        assert html == (
            '<div class="procedure"><div><div>'
            "<ol><li><p>One</p></li><li><p>Two</p></li></ol></div></div></div>"
        )

    def test_item_with_attached_block(self):
        """Test a list item with a continuation block."""
        html = render("* item\n+\n....\ncode\n....")
        assert html == "<ul><li><p>item</p><pre><code>code</code></pre></li></ul>"

    def test_empty_item(self, franklin, ctx):
        """Test that an item without text or blocks renders nothing."""
        assert franklin.render(List(blocks=[ListItem()]), ctx) == ""

    def test_description_list(self):
        """Test the two-column description grid."""
        html = render("CPU:: Processor")
        assert html == '<div class="dlist"><div><div><p>CPU</p></div><div><p>Processor</p></div></div></div>'

    def test_description_list_without_description(self):
        """Test an empty description column."""
        html = render("Lonely::")
        assert html == '<div class="dlist"><div><div><p>Lonely</p></div><div></div></div></div>'

    def test_description_list_multiple_terms(self):
        """Test that several terms share the first column."""
        html = render("Alpha::\nBeta:: Both")
        assert html == '<div class="dlist"><div><div><p>Alpha</p><p>Beta</p></div><div><p>Both</p></div></div></div>'


@pytest.mark.unit
class TestTables:
    """Tests for table conversion."""

    def test_table_with_header(self):
        """Test head and body rows of a table block."""
        html = render("|===\n|Name |Value\n\n|alpha |1\n|===")
        assert html == (
            '<div class="table"><div><div>Name</div><div>Value</div></div>\n'
            "<div><div>alpha</div><div>1</div></div></div>"
        )

    def test_headless_table(self):
        """Test the headless variant."""
        html = render("|===\n|alpha |1\n|===")
        assert html == '<div class="table headless"><div><div>alpha</div><div>1</div></div></div>'

    def test_titled_headless_table(self):
        """Test that a titled headless table is named after its title."""
        html = render(".Key Features\n|===\n|Fast |Yes\n|===")
        assert html == '<div class="key-features headless"><div><div>Fast</div><div>Yes</div></div></div>'

    def test_titled_table_with_header(self):
        """Test that a table with header keeps the table name."""
        html = render('.Key Features\n[%header]\n|===\n|Name |Value\n|alpha |1\n|===')
        assert html.startswith('<div class="table">')

    def test_ragged_rows_padded(self):
        """Test that a short final row is padded."""
        html = render('[cols="3*"]\n|===\n|alpha |beta |gamma\n|delta\n|===')
        assert html.endswith("<div><div>delta</div><div></div><div></div></div></div>")

    def test_single_letter_cells(self):
        """Test that letters between pipes stay cell text."""
        html = render("|===\n|a|b\n|===")
        assert html == '<div class="table headless"><div><div>a</div><div>b</div></div></div>'

    def test_row_span_not_padded(self):
        """Test that a row completed by a row span gets no extra column."""
        html = render("|===\n.2+|x|y\n|z\n|===")
        assert html == (
            '<div class="table headless"><div><div>x</div><div>y</div></div>\n<div><div>z</div></div></div>'
        )

    def test_asciidoc_cell(self):
        """Test an AsciiDoc cell holding a list."""
        html = render('[cols="1,1"]\n|===\n|Plain\na|* item\n|===')
        assert "<div><ul><li><p>item</p></li></ul></div>" in html


@pytest.mark.unit
class TestInlineContent:
    """Tests for quoted text, links and cross references."""

    def test_quoted_text(self, caplog):
        """Test supported spans and the warning for other spans."""
        html = render("*b* _e_ `c` #m#")

        assert html == "<p><strong>b</strong> <em>e</em> <code>c</code> m</p>"
        assert "[inline_quoted] unhandled span type: mark" in caplog.text

    def test_link_rewriting(self):
        """Test that the Franklin suffix is stripped from link targets."""
        html = render("See link:guide/page.franklin[the guide].")
        assert html == '<p>See <a href="guide/page">the guide</a>.</p>'

    def test_bare_url(self):
        """Test that a bare URL is its own text."""
        assert render("https://example.com") == '<p><a href="https://example.com">https://example.com</a></p>'

    def test_mailto_link(self):
        """Test that a mailto: macro renders through the link rules."""
        html = render("Write to mailto:docs@example.com[the team]")
        assert html == '<p>Write to <a href="mailto:docs@example.com">the team</a></p>'

    def test_xref_uses_section_title(self):
        """Test cross reference text from the document catalog."""
        html = render("[[setup]]\n== Setup Steps\n\nSee <<setup>>.")
        assert '<p>See <a href="#setup">Setup Steps</a>.</p>' in html

    def test_xref_unknown_id(self):
        """Test the fallback text of an unknown reference."""
        assert render("See <<missing>>.") == '<p>See <a href="#missing">[missing]</a>.</p>'

    def test_xref_with_text(self):
        """Test explicit cross reference text."""
        assert render("<<setup,Go there>>") == '<p><a href="#setup">Go there</a></p>'


@pytest.mark.unit
class TestIncludes:
    """Tests for include references."""

    def test_relative_include(self):
        """Test a sibling include in a site-absolute book."""
        html = render("include::./sub.adoc[]")
        assert html == (
            '<p><div class="fragment include docs"><div><div>'
            '<a href="/guide/sub">./sub.adoc</a>'
            "</div></div></div></p>"
        )

    def test_include_resolved_by_book(self):
        """Test that the book resolves the include path."""
        book = RecordingBook()
        html = render("include::../shared/note.adoc[]", book=book)

        assert book.calls == ["shared/note"]
        assert 'href="https://book.test/shared/note"' in html

    def test_absolute_include(self):
        """Test that an absolute include bypasses the book."""
        book = RecordingBook()
        html = render("include::https://example.com/other.adoc[]", book=book)

        assert book.calls == []
        assert '<div class="fragment include">' in html
        assert 'href="https://example.com/other"' in html

    def test_include_from_inline_role(self, franklin, ctx):
        """Test that any anchor with the include role is a reference."""
        link = Inline(NodeKind.INLINE_ANCHOR, attributes={"role": "bare include"}, type="link", target="b.adoc")
        assert franklin.render(link, ctx) == (
            '<div class="fragment include docs"><div><div>'
            '<a href="https://book.test/guide/b">b.adoc</a></div></div></div>'
        )


@pytest.mark.unit
class TestRenderContext:
    """Tests for the immutable conversion context."""

    def test_negative_depth_rejected(self, franklin, book):
        """Test that section depth cannot be negative."""
        with pytest.raises(ValueError):
            RenderContext(converter=franklin, book=book, topic_path="a.adoc", section_depth=-1)

    def test_nested_returns_new_context(self, ctx):
        """Test that nesting leaves the caller's context untouched."""
        child = ctx.nested()

        assert child.section_depth == 1
        assert child.in_section
        assert ctx.section_depth == 0
        assert not ctx.in_section

    def test_handlers_see_section_depth(self):
        """Test the depth a handler sees inside nested sections."""

        class DepthRecorder(FranklinConverter):
            def __init__(self):
                self.seen = []
                super().__init__()

            def _build_handlers(self):
                return {**super()._build_handlers(), NodeKind.PARAGRAPH: self.record_depth}

            def record_depth(self, node, ctx):
                self.seen.append((ctx.section_depth, ctx.in_section))
                return ""

        document = to_ast("Top\n\n== One\n\nA\n\n=== Two\n\nB\n\n== Three\n\nC")
        converter = DepthRecorder()
        converter.render(document, make_context(converter, SiteBook(""), "a.adoc", document), NodeKind.EMBEDDED)

        assert converter.seen == [(0, False), (1, True), (2, True), (1, True)]

    def test_bind_detached_node(self, ctx):
        """Test that a detached node keeps the current document."""
        assert ctx.bind(paragraph("x")) is ctx

    def test_bind_switches_document(self, ctx):
        """Test that binding a node selects its owning document."""
        document = to_ast("Hello")
        bound = ctx.bind(document.blocks[0])

        assert bound.document is document
        assert ctx.document is None

    def test_topic_dir(self, ctx):
        """Test the directory of the topic."""
        assert ctx.topic_dir == "guide"

    def test_icons_enabled(self, franklin, book):
        """Test the icons flag of the document."""
        document = to_ast("Text", attributes={"icons": "font"})
        assert make_context(franklin, book, document=document).icons_enabled
        assert not make_context(franklin, book).icons_enabled
