#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adoc2html/parsers/asciidoc.py
"""AsciiDoc reader producing the node tree.

Reading is a two-stage process: the :class:`AsciiDocLexer` classifies every
source line into a :class:`Token`, then the :class:`AsciiDocParser` walks the
tokens and builds :mod:`adoc2html.ast` nodes, delegating inline markup to
:class:`~adoc2html.parsers.inline.InlineParser`.

"""

from __future__ import annotations

import logging
import re
import textwrap
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Optional

from adoc2html.ast.nodes import (
    Block,
    DescriptionEntry,
    DescriptionList,
    Document,
    Inline,
    InlineContent,
    List,
    ListItem,
    Node,
    NodeKind,
    Section,
    Table,
    TableCell,
    TableRow,
    TableRows,
    plain_text,
)
from adoc2html.constants import ADMONITION_STYLES, INCLUDE_ROLE
from adoc2html.exceptions import ParsingError
from adoc2html.options.asciidoc import AsciiDocOptions
from adoc2html.parsers.inline import InlineParser, default_image_alt, parse_macro_attributes, split_attrlist, unquote
from adoc2html.utils.text import make_unique_slug, slugify

logger = logging.getLogger(__name__)


class TokenType(Enum):
    """Token types for the AsciiDoc lexer."""

    # Structure
    SECTION_TITLE = auto()
    BLOCK_TITLE = auto()
    BLOCK_ATTRIBUTE = auto()
    ANCHOR = auto()
    ATTRIBUTE_ENTRY = auto()

    # Delimited blocks
    DELIMITER = auto()
    TABLE_DELIMITER = auto()

    # Lists
    UNORDERED_ITEM = auto()
    ORDERED_ITEM = auto()
    DESCRIPTION_TERM = auto()
    LIST_CONTINUATION = auto()

    # Single-line blocks
    BLOCK_MACRO = auto()
    THEMATIC_BREAK = auto()
    PAGE_BREAK = auto()

    # Special
    COMMENT = auto()
    BLANK_LINE = auto()
    TEXT_LINE = auto()
    EOF = auto()


# Delimiter character -> node kind of the block it opens
DELIMITED_BLOCKS: dict[str, NodeKind] = {
    "----": NodeKind.LISTING,
    "....": NodeKind.LITERAL,
    "____": NodeKind.QUOTE,
    "****": NodeKind.SIDEBAR,
    "====": NodeKind.EXAMPLE,
    "++++": NodeKind.PASS,
    "////": NodeKind.PASS,
}
OPEN_BLOCK_DELIMITER = "--"
VERBATIM_KINDS = frozenset({NodeKind.LISTING, NodeKind.LITERAL, NodeKind.PASS})

ORDERED_LIST_STYLES = ["arabic", "loweralpha", "lowerroman", "upperalpha", "upperroman"]


@dataclass
class Token:
    """A classified source line.

    Parameters
    ----------
    type : TokenType
        Type of the token
    content : str
        Token content (line without indentation and markers)
    line_num : int
        Line number in source (0-based)
    raw : str
        The original line
    indent : int
        Indentation width
    metadata : dict
        Additional token metadata (marker, level, ...)

    """

    type: TokenType
    content: str
    line_num: int
    raw: str = ""
    indent: int = 0
    metadata: dict[str, Any] = field(default_factory=dict)


class AsciiDocLexer:
    """Line-level tokenizer for AsciiDoc content.

    Parameters
    ----------
    content : str
        AsciiDoc content to tokenize

    """

    def __init__(self, content: str):
        """Initialize the lexer with content."""
        self.lines = content.splitlines()

        self.section_pattern = re.compile(r"^(={1,6})\s+(\S.*?)(?:\s+=+)?\s*$")
        self.block_title_pattern = re.compile(r"^\.([^\s.].*)$")
        self.anchor_pattern = re.compile(r"^\[\[([\w:.-]+)(?:,\s*(.+))?\]\]$")
        self.block_attr_pattern = re.compile(r"^\[(.*)\]$")
        self.attribute_pattern = re.compile(r"^:(!?)([\w][\w-]*)(!?):(?:\s+(.*))?$")
        self.ul_pattern = re.compile(r"^(\*{1,5}|-)\s+(.*)$")
        self.ol_pattern = re.compile(r"^(\.{1,5}|\d+\.)\s+(.*)$")
        self.dlist_pattern = re.compile(r"^(?!//)(\S.*?)(:{2,4}|;;)(?:\s+(.*))?$")
        self.block_macro_pattern = re.compile(r"^(image|toc|include)::(\S*?)\[(.*)\]$")

    def tokenize(self) -> list[Token]:
        """Tokenize the content into a list of tokens.

        Returns
        -------
        list[Token]
            One token per line followed by an EOF token

        """
        tokens = [self._tokenize_line(line, line_num) for line_num, line in enumerate(self.lines)]
        tokens.append(Token(TokenType.EOF, "", len(self.lines)))
        return tokens

    def _tokenize_line(self, line: str, line_num: int) -> Token:
        """Tokenize a single line.

        Parameters
        ----------
        line : str
            Line content
        line_num : int
            Line number

        Returns
        -------
        Token
            Token for this line

        """
        line = line.rstrip()
        stripped = line.lstrip()
        indent = len(line) - len(stripped)

        def token(token_type: TokenType, content: str, **metadata: Any) -> Token:
            return Token(token_type, content, line_num, line, indent, metadata)

        if not stripped:
            return token(TokenType.BLANK_LINE, "")

        if indent == 0:
            # Delimiters: four or more identical characters, or the table fence
            if stripped.startswith("|===") and stripped[1:] == "=" * (len(stripped) - 1):
                return token(TokenType.TABLE_DELIMITER, stripped)
            if len(stripped) >= 4 and stripped == stripped[0] * len(stripped) and stripped[:4] in DELIMITED_BLOCKS:
                return token(TokenType.DELIMITER, stripped)
            if stripped == OPEN_BLOCK_DELIMITER:
                return token(TokenType.DELIMITER, stripped)

            if stripped.startswith("//"):
                return token(TokenType.COMMENT, stripped[2:].strip())

            if stripped == "+":
                return token(TokenType.LIST_CONTINUATION, "+")

            if re.fullmatch(r"'{3,}|-{3}|\*{3}", stripped):
                return token(TokenType.THEMATIC_BREAK, stripped)
            if stripped == "<<<":
                return token(TokenType.PAGE_BREAK, stripped)

            section_match = self.section_pattern.match(stripped)
            if section_match:
                level = len(section_match.group(1)) - 1
                return token(TokenType.SECTION_TITLE, section_match.group(2), level=level)

            macro_match = self.block_macro_pattern.match(stripped)
            if macro_match:
                return token(
                    TokenType.BLOCK_MACRO,
                    macro_match.group(2),
                    name=macro_match.group(1),
                    attrlist=macro_match.group(3),
                )

            anchor_match = self.anchor_pattern.match(stripped)
            if anchor_match:
                return token(TokenType.ANCHOR, anchor_match.group(1), reftext=anchor_match.group(2))

            attr_match = self.block_attr_pattern.match(stripped)
            if attr_match:
                return token(TokenType.BLOCK_ATTRIBUTE, attr_match.group(1))

            entry_match = self.attribute_pattern.match(stripped)
            if entry_match:
                unset = bool(entry_match.group(1) or entry_match.group(3))
                return token(
                    TokenType.ATTRIBUTE_ENTRY,
                    entry_match.group(2),
                    value=None if unset else (entry_match.group(4) or ""),
                )

            title_match = self.block_title_pattern.match(stripped)
            if title_match:
                return token(TokenType.BLOCK_TITLE, title_match.group(1))

        ul_match = self.ul_pattern.match(stripped)
        if ul_match:
            return token(TokenType.UNORDERED_ITEM, ul_match.group(2), marker=ul_match.group(1))

        ol_match = self.ol_pattern.match(stripped)
        if ol_match:
            marker = ol_match.group(1)
            number = None
            if marker[0].isdigit():
                number = int(marker[:-1])
                marker = "1."
            return token(TokenType.ORDERED_ITEM, ol_match.group(2), marker=marker, number=number)

        dlist_match = self.dlist_pattern.match(stripped)
        if dlist_match:
            return token(
                TokenType.DESCRIPTION_TERM,
                dlist_match.group(1),
                marker=dlist_match.group(2),
                description=dlist_match.group(3) or "",
            )

        return token(TokenType.TEXT_LINE, stripped)


@dataclass
class BlockMetadata:
    """Block attributes, title and anchor collected ahead of a block."""

    attributes: dict[str, str] = field(default_factory=dict)
    title: Optional[str] = None

    @property
    def style(self) -> Optional[str]:
        """First positional attribute (the block style)."""
        return self.attributes.get("style")

    def is_empty(self) -> bool:
        """True when nothing has been collected."""
        return not self.attributes and self.title is None


class AsciiDocParser:
    r"""Read AsciiDoc source into a :class:`~adoc2html.ast.Document`.

    Supported Features
    ------------------
    - Document header (``= Title``, author line) and attribute entries
      (``:name: value``, ``:name!:``) anywhere in the document
    - Sections (``==`` through ``======``), discrete headings, anchors and
      block titles
    - Block attribute lines: ``[style#id.role%option,pos,key=value]``
    - Paragraphs, indented literal paragraphs, admonition paragraphs
      (``NOTE: text``) and styled paragraphs (``[NOTE]``, ``[source]``)
    - Lists: unordered (``*``, ``-``), ordered (``.``, ``1.``), description
      (``term::``), nesting and list continuation (``+``)
    - Delimited blocks: listing, literal, quote, sidebar, example, open,
      passthrough and comment blocks
    - Tables with column specs, header/footer options, implicit headers,
      AsciiDoc cells (``a|``) and cell spans
    - Block macros: ``image::``, ``toc::[]`` and ``include::``

    Include directives are never resolved: each becomes a link to the
    target with the role ``bare include``, which converters turn into a
    reference to the other document.

    Parameters
    ----------
    options : AsciiDocOptions or None, default = None
        Reader configuration

    Examples
    --------
        >>> parser = AsciiDocParser()
        >>> doc = parser.parse("= Title\n\nThis is *bold*.")
        >>> doc.title
        'Title'

    """

    def __init__(self, options: AsciiDocOptions | None = None):
        """Initialize the AsciiDoc parser."""
        if options is not None and not isinstance(options, AsciiDocOptions):
            raise TypeError(f"AsciiDocParser expected AsciiDocOptions, got {type(options).__name__}")
        self.options: AsciiDocOptions = options or AsciiDocOptions()

        self.tokens: list[Token] = []
        self.current_token_index = 0
        self.attributes: dict[str, str] = {}
        self.locked_attributes: set[str] = set()
        self.pending = BlockMetadata()
        self.document = Document()
        self._seen_ids: dict[str, int] = {}
        self.inline_parser = InlineParser(
            self.attributes,
            missing_policy=self.options.attribute_missing_policy,
            honor_hard_breaks=self.options.honor_hard_breaks,
        )

    def parse(self, content: str) -> Document:
        """Parse AsciiDoc text into a document.

        Parameters
        ----------
        content : str
            AsciiDoc source

        Returns
        -------
        Document
            Root of the node tree

        Raises
        ------
        ParsingError
            If ``content`` is not text

        """
        if not isinstance(content, str):
            raise ParsingError(f"AsciiDoc input must be str, got {type(content).__name__}", parsing_stage="input")

        self._reset()
        self.tokens = AsciiDocLexer(content).tokenize()

        self._parse_header()
        self._parse_blocks(self.document, section_level=None)

        self.document.attributes = dict(self.attributes)
        return self.document

    def _reset(self) -> None:
        """Reset parser state so one instance can read several documents."""
        self.attributes.clear()
        self.locked_attributes = set()
        self._apply_attribute_overrides()
        self.current_token_index = 0
        self.pending = BlockMetadata()
        self.document = Document()
        self._seen_ids = {}

    def _apply_attribute_overrides(self) -> None:
        """Seed attributes from the caller's overrides.

        A value ending in ``@`` is a soft set that the document may
        redefine; any other value is locked against attribute entries.
        """
        for name, value in self.options.attributes.items():
            if value.endswith("@"):
                self.attributes[name] = value[:-1]
            else:
                self.attributes[name] = value
                self.locked_attributes.add(name)

    # ------------------------------------------------------------------
    # Token navigation
    # ------------------------------------------------------------------

    def _current_token(self) -> Token:
        """Get the current token."""
        if self.current_token_index < len(self.tokens):
            return self.tokens[self.current_token_index]
        return self.tokens[-1]

    def _peek_token(self, offset: int = 1) -> Token:
        """Peek at a token ahead without consuming anything."""
        index = self.current_token_index + offset
        if index < len(self.tokens):
            return self.tokens[index]
        return self.tokens[-1]

    def _advance(self) -> Token:
        """Advance to the next token and return the previous one."""
        token = self._current_token()
        if token.type != TokenType.EOF:
            self.current_token_index += 1
        return token

    def _skip_blank_lines(self) -> None:
        """Skip over blank lines and line comments."""
        while self._current_token().type in (TokenType.BLANK_LINE, TokenType.COMMENT):
            self._advance()

    # ------------------------------------------------------------------
    # Attributes and metadata
    # ------------------------------------------------------------------

    def _parse_inline(self, text: str) -> InlineContent:
        return self.inline_parser.parse(text)

    def _set_attribute(self, name: str, value: Optional[str]) -> None:
        """Apply an attribute entry unless the caller locked the attribute."""
        if name in self.locked_attributes:
            logger.debug("Attribute %s is set by the caller, ignoring document entry", name)
            return
        if value is None:
            self.attributes.pop(name, None)
        else:
            self.attributes[name] = self.inline_parser.substitute_attributes(value)

    def _parse_attribute_entry(self) -> None:
        """Consume an attribute entry, joining continuation lines ending in `` \\``."""
        token = self._advance()
        value = token.metadata.get("value")
        if value is not None:
            parts = [value]
            while parts[-1].endswith(" \\") or parts[-1].endswith(" +"):
                parts[-1] = parts[-1][:-2].rstrip()
                next_token = self._current_token()
                if next_token.type in (TokenType.BLANK_LINE, TokenType.EOF):
                    break
                parts.append(self._advance().raw.strip())
            value = " ".join(parts)
        self._set_attribute(token.content, value)

    def _parse_block_attributes(self, content: str) -> dict[str, str]:
        """Parse a block attribute line such as ``[source#id.role,python]``.

        Parameters
        ----------
        content : str
            Content inside the brackets

        Returns
        -------
        dict[str, str]
            ``style``, ``id``, ``role``, ``options``, positional attributes
            (``1``, ``2``, ...) and named attributes

        """
        attributes: dict[str, str] = {}
        content = self.inline_parser.substitute_attributes(content.strip())
        if not content:
            return attributes

        roles: list[str] = []
        options: list[str] = []
        position = 0

        for index, part in enumerate(split_attrlist(content)):
            if re.match(r"^[\w-]+\s*=", part):
                key, value = part.split("=", 1)
                key = key.strip()
                value = unquote(value)
                if key == "role":
                    roles.extend(value.split())
                elif key in ("options", "opts"):
                    options.extend(opt.strip() for opt in value.split(",") if opt.strip())
                else:
                    attributes[key] = value
                continue

            position += 1
            if index == 0:
                style, shorthand_id, shorthand_roles, shorthand_options = self._parse_shorthand(part)
                if style:
                    attributes["style"] = style
                    attributes["1"] = style
                if shorthand_id:
                    attributes["id"] = shorthand_id
                roles.extend(shorthand_roles)
                options.extend(shorthand_options)
            else:
                attributes[str(position)] = unquote(part)

        if roles:
            attributes["role"] = " ".join(roles)
        if options:
            attributes["options"] = ",".join(options)
        return attributes

    @staticmethod
    def _parse_shorthand(part: str) -> tuple[str, Optional[str], list[str], list[str]]:
        """Split ``style#id.role%option`` into its components."""
        part = unquote(part)
        if "=" in part:
            return "", None, [], []

        pieces = re.split(r"(?=[#.%])", part)
        style = pieces[0] if pieces and pieces[0][:1] not in ("#", ".", "%") else ""
        shorthand_id: Optional[str] = None
        roles: list[str] = []
        options: list[str] = []
        for piece in pieces:
            if piece.startswith("#") and len(piece) > 1:
                shorthand_id = piece[1:]
            elif piece.startswith(".") and len(piece) > 1:
                roles.append(piece[1:])
            elif piece.startswith("%") and len(piece) > 1:
                options.append(piece[1:])
        return style.strip(), shorthand_id, roles, options

    def _collect_metadata(self) -> bool:
        """Collect a block attribute line, anchor or block title.

        Returns
        -------
        bool
            True if the current token was consumed as block metadata

        """
        token = self._current_token()
        if token.type == TokenType.BLOCK_ATTRIBUTE:
            self._advance()
            parsed = self._parse_block_attributes(token.content)
            if "role" in parsed and "role" in self.pending.attributes:
                parsed["role"] = f"{self.pending.attributes['role']} {parsed['role']}"
            self.pending.attributes.update(parsed)
            return True
        if token.type == TokenType.ANCHOR:
            self._advance()
            self.pending.attributes["id"] = token.content
            if token.metadata.get("reftext"):
                self.pending.attributes["reftext"] = token.metadata["reftext"]
            return True
        if token.type == TokenType.BLOCK_TITLE:
            self._advance()
            self.pending.title = self.inline_parser.substitute_attributes(token.content)
            return True
        return False

    def _consume_metadata(self) -> BlockMetadata:
        """Consume and clear pending block metadata."""
        metadata = self.pending
        self.pending = BlockMetadata()
        return metadata

    def _register(self, node: Node) -> None:
        """Record a node carrying an ID for cross reference lookup."""
        if node.id:
            self._seen_ids.setdefault(node.id, 1)
            self.document.catalog.setdefault(node.id, node)

    def _make_block(self, kind: NodeKind, metadata: BlockMetadata, **kwargs: Any) -> Block:
        title = metadata.title
        block = Block(
            kind,
            attributes=dict(metadata.attributes),
            title=title,
            title_inlines=self._parse_inline(title) if title else [],
            style=kwargs.pop("style", metadata.style),
            **kwargs,
        )
        self._register(block)
        return block

    # ------------------------------------------------------------------
    # Document structure
    # ------------------------------------------------------------------

    def _parse_header(self) -> None:
        """Parse the document title, author line and header attribute entries."""
        self._skip_blank_lines()
        while self._current_token().type == TokenType.ATTRIBUTE_ENTRY:
            self._parse_attribute_entry()
            self._skip_blank_lines()

        token = self._current_token()
        if token.type != TokenType.SECTION_TITLE or token.metadata.get("level") != 0:
            return

        self._advance()
        title = self.inline_parser.substitute_attributes(token.content)
        self.document.title = title
        self.document.title_inlines = self._parse_inline(title)
        for item in self.document.title_inlines:
            if isinstance(item, Inline):
                item.parent = self.document
        self._set_attribute("doctitle", title)

        # Author line, then revision line
        if self._current_token().type == TokenType.TEXT_LINE:
            self._set_attribute("author", self._advance().content)
            if self._current_token().type == TokenType.TEXT_LINE:
                self._set_attribute("revnumber", self._advance().content)

        while self._current_token().type in (TokenType.ATTRIBUTE_ENTRY, TokenType.COMMENT):
            if self._current_token().type == TokenType.COMMENT:
                self._advance()
            else:
                self._parse_attribute_entry()

    def _parse_blocks(self, parent: Node, section_level: Optional[int], closing: Optional[str] = None) -> None:
        """Parse blocks into ``parent`` until its content ends.

        Parameters
        ----------
        parent : Node
            Container receiving the blocks
        section_level : int or None
            Level of the enclosing section; a section title at this level or
            above ends the content. None at document level.
        closing : str or None
            Delimiter line that closes the enclosing delimited block

        """
        while True:
            self._skip_blank_lines()
            token = self._current_token()

            if token.type == TokenType.EOF:
                if closing is not None:
                    logger.warning("Unterminated delimited block (expected %r)", closing)
                return

            if closing is not None and token.type == TokenType.DELIMITER and token.content == closing:
                self._advance()
                return

            if token.type == TokenType.SECTION_TITLE and closing is None:
                level = token.metadata["level"]
                if section_level is not None and level <= section_level:
                    return
                metadata = self._consume_metadata()
                if metadata.style in ("discrete", "float"):
                    self._advance()
                    parent.append(self._make_floating_title(token, metadata))
                    continue
                parent.append(self._parse_section(metadata))
                continue

            for block in self._parse_block():
                parent.append(block)

    def _parse_section(self, metadata: BlockMetadata) -> Section:
        """Parse a section title and its content."""
        token = self._advance()
        level = token.metadata["level"]
        title = self.inline_parser.substitute_attributes(token.content)

        attributes = dict(metadata.attributes)
        section_id = attributes.get("id") or make_unique_slug(slugify(self._plain(title)), self._seen_ids)
        attributes["id"] = section_id

        section = Section(attributes=attributes, level=level, title=title, title_inlines=self._parse_inline(title))
        self._register(section)
        self._parse_blocks(section, section_level=level)
        return section

    def _make_floating_title(self, token: Token, metadata: BlockMetadata) -> Block:
        title = self.inline_parser.substitute_attributes(token.content)
        attributes = dict(metadata.attributes)
        attributes.setdefault("id", make_unique_slug(slugify(self._plain(title)), self._seen_ids))
        block = Block(
            NodeKind.FLOATING_TITLE,
            attributes=attributes,
            title=title,
            title_inlines=self._parse_inline(title),
            style=metadata.style,
            level=token.metadata["level"],
        )
        self._register(block)
        return block

    def _plain(self, text: str) -> str:
        return plain_text(self._parse_inline(text))

    def _parse_block(self) -> list[Node]:
        """Parse the next block.

        Returns
        -------
        list[Node]
            Parsed blocks: usually one, several for open blocks, none for
            metadata lines, comments and attribute entries

        """
        token = self._current_token()

        if self._collect_metadata():
            return []

        if token.type == TokenType.ATTRIBUTE_ENTRY:
            self._parse_attribute_entry()
            return []

        if token.type == TokenType.COMMENT:
            self._advance()
            return []

        if token.type == TokenType.DELIMITER:
            return self._parse_delimited_block()

        if token.type == TokenType.TABLE_DELIMITER:
            return [self._parse_table()]

        if token.type in (TokenType.UNORDERED_ITEM, TokenType.ORDERED_ITEM):
            return [self._parse_list(ancestors=[])]

        if token.type == TokenType.DESCRIPTION_TERM:
            return [self._parse_description_list(ancestors=[])]

        if token.type == TokenType.BLOCK_MACRO:
            return self._parse_block_macro()

        if token.type == TokenType.THEMATIC_BREAK:
            self._advance()
            return [self._make_block(NodeKind.THEMATIC_BREAK, self._consume_metadata())]

        if token.type == TokenType.PAGE_BREAK:
            self._advance()
            return [self._make_block(NodeKind.PAGE_BREAK, self._consume_metadata())]

        if token.type == TokenType.SECTION_TITLE:
            # Section titles inside delimited blocks can only be discrete headings
            self._advance()
            return [self._make_floating_title(token, self._consume_metadata())]

        if token.type == TokenType.LIST_CONTINUATION:
            self._advance()
            return []

        return [self._parse_paragraph()]

    # ------------------------------------------------------------------
    # Paragraphs
    # ------------------------------------------------------------------

    def _paragraph_ends(self, token: Token) -> bool:
        return token.type in (
            TokenType.BLANK_LINE,
            TokenType.EOF,
            TokenType.DELIMITER,
            TokenType.TABLE_DELIMITER,
            TokenType.BLOCK_ATTRIBUTE,
            TokenType.ANCHOR,
            TokenType.LIST_CONTINUATION,
            TokenType.BLOCK_MACRO,
        ) or (token.type in (TokenType.UNORDERED_ITEM, TokenType.ORDERED_ITEM) and token.indent == 0)

    def _read_paragraph_lines(self) -> list[Token]:
        lines = [self._advance()]
        while not self._paragraph_ends(self._current_token()):
            token = self._advance()
            if token.type == TokenType.COMMENT:
                continue
            lines.append(token)
        return lines

    def _parse_paragraph(self) -> Block:
        """Parse a paragraph, applying its style (admonition, literal, source, ...)."""
        metadata = self._consume_metadata()
        first = self._current_token()
        lines = self._read_paragraph_lines()
        style = metadata.style

        if style is None and first.indent > 0:
            source = textwrap.dedent("\n".join(token.raw for token in lines))
            return self._make_block(NodeKind.LITERAL, metadata, style="literal", source=source)

        text = "\n".join(token.raw.strip() for token in lines)

        if style is None and self.options.parse_admonitions:
            admonition = re.match(r"^(NOTE|TIP|IMPORTANT|WARNING|CAUTION):\s+", text)
            if admonition:
                name = admonition.group(1)
                return self._make_admonition(metadata, name, inlines=self._parse_inline(text[admonition.end() :]))

        if style in ADMONITION_STYLES and self.options.parse_admonitions:
            return self._make_admonition(metadata, style, inlines=self._parse_inline(text))
        if style == "literal":
            return self._make_block(NodeKind.LITERAL, metadata, source="\n".join(token.raw for token in lines))
        if style in ("source", "listing"):
            if "2" in metadata.attributes:
                metadata.attributes.setdefault("language", metadata.attributes["2"])
            return self._make_block(NodeKind.LISTING, metadata, source="\n".join(token.raw for token in lines))
        if style == "pass":
            return self._make_block(NodeKind.PASS, metadata, source=text)
        if style in ("quote", "verse"):
            return self._make_block(NodeKind.QUOTE, metadata, inlines=self._parse_inline(text))

        return self._make_block(NodeKind.PARAGRAPH, metadata, inlines=self._parse_inline(text))

    def _make_admonition(self, metadata: BlockMetadata, name: str, **kwargs: Any) -> Block:
        block = self._make_block(NodeKind.ADMONITION, metadata, style=name, **kwargs)
        block.attributes["name"] = name.lower()
        block.attributes["textlabel"] = name.capitalize()
        return block

    # ------------------------------------------------------------------
    # Delimited blocks and macros
    # ------------------------------------------------------------------

    def _read_verbatim_lines(self, delimiter: str) -> list[str]:
        """Collect raw lines up to the closing ``delimiter``."""
        lines: list[str] = []
        while True:
            token = self._current_token()
            if token.type == TokenType.EOF:
                logger.warning("Unterminated delimited block (expected %r)", delimiter)
                return lines
            self._advance()
            if token.raw == delimiter:
                return lines
            lines.append(token.raw)

    def _parse_delimited_block(self) -> list[Node]:
        """Parse a delimited block opened by the current token."""
        metadata = self._consume_metadata()
        delimiter = self._advance().content
        style = metadata.style

        if delimiter == OPEN_BLOCK_DELIMITER:
            if style in ADMONITION_STYLES and self.options.parse_admonitions:
                block = self._make_admonition(metadata, style)
                self._parse_blocks(block, section_level=None, closing=delimiter)
                return [block]
            # Plain open blocks only group content; their children join the parent
            container = Block(NodeKind.EXAMPLE)
            self._parse_blocks(container, section_level=None, closing=delimiter)
            return list(container.blocks)

        kind = DELIMITED_BLOCKS[delimiter[:4]]
        if delimiter.startswith("////"):
            self._read_verbatim_lines(delimiter)
            return []

        if kind in VERBATIM_KINDS:
            source = "\n".join(self._read_verbatim_lines(delimiter))
            if kind == NodeKind.LISTING:
                if style in (None, "source") and "2" in metadata.attributes:
                    metadata.attributes.setdefault("language", metadata.attributes["2"])
                return [self._make_block(kind, metadata, style=style or "listing", source=source)]
            if kind == NodeKind.PASS:
                return [self._make_block(kind, metadata, source=source)]
            return [self._make_block(kind, metadata, style=style or "literal", source=source)]

        if kind == NodeKind.EXAMPLE and style in ADMONITION_STYLES and self.options.parse_admonitions:
            block = self._make_admonition(metadata, style)
        else:
            if kind == NodeKind.QUOTE:
                if "2" in metadata.attributes:
                    metadata.attributes.setdefault("attribution", metadata.attributes["2"])
                if "3" in metadata.attributes:
                    metadata.attributes.setdefault("citetitle", metadata.attributes["3"])
            block = self._make_block(kind, metadata)

        self._parse_blocks(block, section_level=None, closing=delimiter)
        return [block]

    def _parse_block_macro(self) -> list[Node]:
        """Parse ``image::``, ``toc::`` and ``include::`` lines."""
        metadata = self._consume_metadata()
        token = self._advance()
        name = token.metadata["name"]
        target = self.inline_parser.substitute_attributes(token.content)
        attrlist = self.inline_parser.substitute_attributes(token.metadata["attrlist"])

        if name == "image":
            attributes = parse_macro_attributes(attrlist, ("alt", "width", "height"))
            if target:
                attributes["target"] = target
                attributes.setdefault("alt", default_image_alt(target))
            metadata.attributes.update(attributes)
            return [self._make_block(NodeKind.IMAGE, metadata)]

        if name == "toc":
            return [self._make_block(NodeKind.OUTLINE, metadata)]

        # include:: directives are not resolved; they become references to the target
        link = Inline(
            NodeKind.INLINE_ANCHOR,
            attributes={"role": INCLUDE_ROLE},
            type="link",
            target=target,
            inlines=[target],
        )
        return [self._make_block(NodeKind.PARAGRAPH, metadata, inlines=[link])]

    # ------------------------------------------------------------------
    # Lists
    # ------------------------------------------------------------------

    @staticmethod
    def _list_key(token: Token) -> Optional[tuple[TokenType, str]]:
        if token.type in (TokenType.UNORDERED_ITEM, TokenType.ORDERED_ITEM, TokenType.DESCRIPTION_TERM):
            return token.type, token.metadata["marker"]
        return None

    def _next_list_token(self) -> Token:
        """Return the next token after blank lines without consuming them."""
        offset = 0
        while self._peek_token(offset).type in (TokenType.BLANK_LINE, TokenType.COMMENT):
            offset += 1
        return self._peek_token(offset)

    def _parse_list(self, ancestors: list[tuple[TokenType, str]]) -> List:
        """Parse an ordered or unordered list starting at the current token.

        Parameters
        ----------
        ancestors : list of (TokenType, str)
            Markers of the enclosing lists; meeting one of them ends this list

        """
        metadata = self._consume_metadata()
        first = self._current_token()
        key = self._list_key(first)
        assert key is not None
        ordered = first.type == TokenType.ORDERED_ITEM

        if ordered:
            depth = len(key[1]) if key[1] != "1." else 1
            metadata.attributes.setdefault("style", ORDERED_LIST_STYLES[(depth - 1) % len(ORDERED_LIST_STYLES)])
            if first.metadata.get("number") not in (None, 1):
                metadata.attributes.setdefault("start", str(first.metadata["number"]))

        list_node = List(
            NodeKind.OLIST if ordered else NodeKind.ULIST,
            attributes=dict(metadata.attributes),
            title=metadata.title,
            style=metadata.attributes.get("style"),
        )
        self._register(list_node)

        while self._list_key(self._current_token()) == key:
            token = self._advance()
            item = ListItem(inlines=[], marker=key[1])
            list_node.append(item)
            self._parse_list_item_body(item, token.content, [*ancestors, key])

            upcoming = self._next_list_token()
            if self._list_key(upcoming) != key:
                break
            self._skip_blank_lines()

        return list_node

    def _parse_list_item_body(self, item: ListItem, text: str, markers: list[tuple[TokenType, str]]) -> None:
        """Read an item's text, attached blocks and nested lists."""
        lines = [text] if text else []
        while self._current_token().type == TokenType.TEXT_LINE:
            lines.append(self._advance().content)
        item.inlines = self._parse_inline("\n".join(lines))
        for inline in item.inlines:
            if isinstance(inline, Inline):
                inline.parent = item

        while True:
            token = self._current_token()

            if token.type == TokenType.LIST_CONTINUATION:
                self._advance()
                self._skip_blank_lines()
                while self._collect_metadata():
                    pass
                for block in self._parse_block():
                    item.append(block)
                continue

            upcoming = self._next_list_token()
            upcoming_key = self._list_key(upcoming)
            if upcoming_key is None or upcoming_key in markers:
                return

            # A list with a new marker nests below this item
            self._skip_blank_lines()
            if upcoming.type == TokenType.DESCRIPTION_TERM:
                item.append(self._parse_description_list(markers))
            else:
                item.append(self._parse_list(markers))

    def _parse_description_list(self, ancestors: list[tuple[TokenType, str]]) -> DescriptionList:
        """Parse a description list starting at the current token."""
        metadata = self._consume_metadata()
        key = self._list_key(self._current_token())
        assert key is not None
        dlist = DescriptionList(attributes=dict(metadata.attributes), title=metadata.title)
        self._register(dlist)
        markers = [*ancestors, key]

        while self._list_key(self._current_token()) == key:
            terms: list[ListItem] = []
            description_text = ""
            while self._list_key(self._current_token()) == key:
                token = self._advance()
                terms.append(ListItem(inlines=self._parse_inline(token.content), marker=key[1]))
                description_text = token.metadata["description"]
                if description_text or self._current_token().type != TokenType.DESCRIPTION_TERM:
                    break

            if not description_text:
                upcoming = self._next_list_token()
                if upcoming.type == TokenType.TEXT_LINE:
                    self._skip_blank_lines()
                    description_text = self._advance().content

            description: Optional[ListItem] = None
            if description_text or self._has_attached_content(markers):
                description = ListItem(inlines=[], marker=key[1])
                self._parse_list_item_body(description, description_text, markers)

            dlist.entries.append(dlist.adopt_entry(DescriptionEntry(terms=terms, description=description)))

            if self._list_key(self._next_list_token()) != key:
                break
            self._skip_blank_lines()

        return dlist

    def _has_attached_content(self, markers: list[tuple[TokenType, str]]) -> bool:
        if self._current_token().type == TokenType.LIST_CONTINUATION:
            return True
        upcoming_key = self._list_key(self._next_list_token())
        return upcoming_key is not None and upcoming_key not in markers

    # ------------------------------------------------------------------
    # Tables
    # ------------------------------------------------------------------

    _CELL_SPEC = re.compile(
        r"(?:(?P<dup>\d+)\*)?"
        r"(?:(?P<colspan>\d+)?(?:\.(?P<rowspan>\d+))?\+)?"
        r"(?:[<^>])?(?:\.[<^>])?"
        r"(?P<style>[adehlmsv])?$"
    )

    def _match_cell_spec(self, text: str) -> Optional[re.Match[str]]:
        """Match a cell spec that makes up the whole of ``text``."""
        if not text:
            return None
        match = self._CELL_SPEC.fullmatch(text)
        if match is None or not match.group(0):
            return None
        return match

    def _split_trailing_spec(self, segment: str) -> tuple[str, str]:
        """Split the spec of the following cell off the end of a segment."""
        match = re.search(r"(?<=\s)(\S+)$", segment)
        if match and self._match_cell_spec(match.group(1)):
            return segment[: match.start(1)], match.group(1)
        return segment, ""

    @staticmethod
    def _split_cells(line: str) -> list[str]:
        r"""Split a table line on unescaped ``|`` characters, unescaping ``\|``."""
        parts = re.split(r"(?<!\\)\|", line)
        return [part.replace(r"\|", "|") for part in parts]

    def _parse_column_specs(self, cols: str) -> list[Optional[str]]:
        """Expand a ``cols`` attribute into per-column styles."""
        styles: list[Optional[str]] = []
        if cols.strip().isdigit():
            return [None] * int(cols.strip())
        for spec in re.split(r"[,;]", cols):
            spec = spec.strip()
            if not spec:
                continue
            match = re.match(r"^(?:(\d+)\*)?\s*[<^>]?(?:\.[<^>])?(?:\d+%?|~)?([adehlmsv])?$", spec)
            repeat = int(match.group(1)) if match and match.group(1) else 1
            style = match.group(2) if match else None
            styles.extend([style] * repeat)
        return styles

    def _parse_table(self) -> Table:
        """Parse a ``|===`` table."""
        metadata = self._consume_metadata()
        delimiter = self._advance().content
        raw_lines = self._read_table_lines(delimiter)

        column_styles = self._parse_column_specs(metadata.attributes["cols"]) if "cols" in metadata.attributes else []

        raw_cells: list[tuple[str, list[str]]] = []
        first_line_width = 0
        first_line_seen = False
        implicit_header = False

        for index, line in enumerate(raw_lines):
            if not line.strip():
                continue
            parts = self._split_cells(line)
            if len(parts) == 1:
                if raw_cells:
                    raw_cells[-1][1].append(line)
                continue

            lead = parts[0].strip()
            spec = ""
            if lead:
                if self._match_cell_spec(lead):
                    spec = lead
                elif raw_cells:
                    raw_cells[-1][1].append(parts[0])

            created = 0
            for position, segment in enumerate(parts[1:]):
                is_last = position == len(parts) - 2
                text, next_spec = (segment, "") if is_last else self._split_trailing_spec(segment)
                raw_cells.append((spec, [text]))
                spec = next_spec
                created += 1

            if not first_line_seen:
                first_line_seen = True
                first_line_width = sum(self._colspan(spec_text) for spec_text, _ in raw_cells[-created:])
                next_line = raw_lines[index + 1] if index + 1 < len(raw_lines) else None
                implicit_header = next_line is not None and not next_line.strip()

        column_count = len(column_styles) or first_line_width
        rows = self._assemble_rows(raw_cells, column_count, column_styles)

        head: list[TableRow] = []
        foot: list[TableRow] = []
        options = metadata.attributes.get("options", "").split(",")
        has_header = "header" in options or (implicit_header and "noheader" not in options)
        if has_header and rows:
            head = [[self._as_header_cell(cell) for cell in rows.pop(0)]]
        if "footer" in options and rows:
            foot = [rows.pop()]

        title = metadata.title
        table = Table(
            attributes=dict(metadata.attributes),
            rows=TableRows(head=head, body=rows, foot=foot),
            title=title,
            title_inlines=self._parse_inline(title) if title else [],
        )
        self._register(table)
        return table

    def _read_table_lines(self, delimiter: str) -> list[str]:
        lines: list[str] = []
        while True:
            token = self._current_token()
            if token.type == TokenType.EOF:
                logger.warning("Unterminated table (expected %r)", delimiter)
                return lines
            self._advance()
            if token.type == TokenType.TABLE_DELIMITER and token.content == delimiter:
                return lines
            lines.append(token.raw)

    def _colspan(self, spec: str) -> int:
        match = self._match_cell_spec(spec) if spec else None
        if match is None:
            return 1
        if match.group("dup"):
            return int(match.group("dup"))
        if match.group("colspan"):
            return int(match.group("colspan"))
        return 1

    def _assemble_rows(
        self,
        raw_cells: list[tuple[str, list[str]]],
        column_count: int,
        column_styles: list[Optional[str]],
    ) -> list[TableRow]:
        """Group cells into rows of ``column_count`` columns.

        Rowspans reserve columns in the following rows. Cells left over at
        the end form a final, shorter row.
        """
        rows: list[TableRow] = []
        current: TableRow = []
        used = 0
        reserved: list[int] = []
        capacity = max(column_count, 1)

        spans = self.options.parse_table_spans

        for spec, text_lines in raw_cells:
            match = self._match_cell_spec(spec) if spec else None
            duplicate = int(match.group("dup")) if match and match.group("dup") else 1
            colspan = int(match.group("colspan")) if spans and match and match.group("colspan") else 1
            rowspan = int(match.group("rowspan")) if spans and match and match.group("rowspan") else 1
            style = match.group("style") if match and match.group("style") else None

            for _ in range(duplicate):
                column_index = min(used, len(column_styles) - 1) if column_styles else 0
                cell_style = style or (column_styles[column_index] if column_styles else None)
                current.append(self._build_cell("\n".join(text_lines), cell_style, colspan, rowspan))
                used += colspan

                for offset in range(rowspan - 1):
                    while len(reserved) <= offset:
                        reserved.append(0)
                    reserved[offset] += colspan

                if used >= capacity:
                    rows.append(current)
                    current = []
                    used = reserved.pop(0) if reserved else 0

        if current:
            rows.append(current)
        return rows

    def _build_cell(self, text: str, style: Optional[str], colspan: int, rowspan: int) -> TableCell:
        text = text.strip()
        if style == "a":
            nested = AsciiDocParser(self.options.create_updated(attributes=self._cell_attributes()))
            document = nested.parse(text)
            return TableCell(blocks=list(document.blocks), style=style, colspan=colspan, rowspan=rowspan)
        if style in ("l", "m"):
            return TableCell(inlines=[text], style=style, colspan=colspan, rowspan=rowspan)
        return TableCell(inlines=self._parse_inline(text), style=style, colspan=colspan, rowspan=rowspan)

    def _cell_attributes(self) -> dict[str, str]:
        # Soft-set so nested documents see the current values but may redefine them
        return {name: f"{value}@" for name, value in self.attributes.items()}

    def _as_header_cell(self, cell: TableCell) -> TableCell:
        # Header cells never hold nested blocks
        if cell.is_asciidoc:
            text = " ".join(plain_text(getattr(block, "inlines", [])) for block in cell.blocks)
            return TableCell(inlines=[text], colspan=cell.colspan, rowspan=cell.rowspan)
        return cell


__all__ = ["AsciiDocLexer", "AsciiDocParser", "Token", "TokenType"]
