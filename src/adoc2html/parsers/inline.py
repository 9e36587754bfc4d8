#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adoc2html/parsers/inline.py
"""Inline markup parsing for AsciiDoc text.

Turns the text of a paragraph, title, list item or table cell into inline
content: a list of plain strings, :class:`~adoc2html.ast.RawHtml`
passthroughs and :class:`~adoc2html.ast.Inline` nodes.

Processing happens in passes over the text:

1. backslash escapes are replaced by placeholders;
2. hard line breaks (a trailing `` +``) and passthroughs (``pass:[]``,
   ``+++``, ``++``, ``+``) are replaced by placeholders;
3. attribute references (``{name}``) are substituted;
4. the remaining text is scanned for links, cross references, images and
   quoted text with a single combined pattern, recursing into nested
   content.

Placeholders are restored to the items they stand for when plain text is
emitted.

"""

from __future__ import annotations

import logging
import os
import re
from typing import Mapping, Optional

from adoc2html.ast.nodes import Inline, InlineContent, InlineItem, NodeKind, RawHtml, plain_text
from adoc2html.constants import BUILTIN_ATTRIBUTES, AttributeMissingPolicy

logger = logging.getLogger(__name__)

_PLACEHOLDER = "\x00"
_PLACEHOLDER_PATTERN = re.compile(r"\x00(\d+)\x00")

_ESCAPE_PATTERN = re.compile(r"\\([\\*_`#~^{}\[\]+<:])")
_HARD_BREAK_PATTERN = re.compile(r"[ \t]\+[ \t]*(?=\n|$)")
_PASSTHROUGH_PATTERN = re.compile(
    r"pass:[a-z,]*\[(?P<macro>.*?)\]"
    r"|\+\+\+(?P<triple>.+?)\+\+\+"
    r"|\+\+(?P<double>.+?)\+\+"
    r"|(?<![\w+])\+(?P<single>\S(?:.*?\S)?)\+(?![\w+])",
    re.DOTALL,
)
_ATTRIBUTE_REF_PATTERN = re.compile(r"\{(?P<name>[\w][\w-]*)\}")

_URL_CHARS = r"[^\s\[\]<>\x00]"
_URL_TAIL = r"[^\s\[\]<>\x00.,;:!?)'\"]"

# Alternation order decides precedence when two constructs start at the same position
_INLINE_PATTERN = re.compile(
    "|".join(
        [
            r"(?P<link>link:(?P<link_target>[^\s\[]+)\[(?P<link_text>[^\]]*)\])",
            r"(?P<mailto>mailto:(?P<mailto_address>[^\s\[]+)\[(?P<mailto_text>[^\]]*)\])",
            r"(?P<xref_macro>xref:(?P<xref_macro_target>[^\s\[]+)\[(?P<xref_macro_text>[^\]]*)\])",
            r"(?P<image>image:(?P<image_target>[^\s\[:][^\s\[]*)\[(?P<image_attrs>[^\]]*)\])",
            rf"(?P<url>(?<![\w/\"'=])(?P<url_target>(?:https?|ftp|irc)://{_URL_CHARS}*{_URL_TAIL})"
            r"(?:\[(?P<url_text>[^\]]*)\])?)",
            r"(?P<xref><<(?P<xref_id>[^,>\s]+)(?:,\s*(?P<xref_text>[^>]+))?>>)",
            r"(?P<strong_u>\*\*(?P<strong_u_text>.+?)\*\*)",
            r"(?P<strong>(?<![\w*])\*(?P<strong_text>\S(?:.*?\S)?)\*(?![\w*]))",
            r"(?P<emphasis_u>__(?P<emphasis_u_text>.+?)__)",
            r"(?P<emphasis>(?<![\w])_(?P<emphasis_text>\S(?:.*?\S)?)_(?!\w))",
            r"(?P<monospaced_u>``(?P<monospaced_u_text>.+?)``)",
            r"(?P<monospaced>(?<![\w`])`(?P<monospaced_text>\S(?:.*?\S)?)`(?![\w`]))",
            r"(?P<mark_u>(?:\[(?P<mark_u_role>[^\]]+)\])?##(?P<mark_u_text>.+?)##)",
            r"(?P<mark>(?:\[(?P<mark_role>[^\]]+)\])?(?<![\w#])#(?P<mark_text>\S(?:.*?\S)?)#(?![\w#]))",
            r"(?P<superscript>\^(?P<superscript_text>[^\s^]+)\^)",
            r"(?P<subscript>~(?P<subscript_text>[^\s~]+)~)",
        ]
    ),
    re.DOTALL,
)

_QUOTE_TYPES = {
    "strong": "strong",
    "strong_u": "strong",
    "emphasis": "emphasis",
    "emphasis_u": "emphasis",
    "monospaced": "monospaced",
    "monospaced_u": "monospaced",
    "mark": "mark",
    "mark_u": "mark",
    "superscript": "superscript",
    "subscript": "subscript",
}


def split_attrlist(text: str) -> list[str]:
    """Split an attribute list on commas that are not inside quotes.

    Examples
    --------
        >>> split_attrlist('"Hello, world",role=intro')
        ['"Hello, world"', 'role=intro']

    """
    parts: list[str] = []
    current: list[str] = []
    quote: Optional[str] = None
    for char in text:
        if quote:
            current.append(char)
            if char == quote:
                quote = None
        elif char in "\"'":
            quote = char
            current.append(char)
        elif char == ",":
            parts.append("".join(current).strip())
            current = []
        else:
            current.append(char)
    parts.append("".join(current).strip())
    return parts


def unquote(value: str) -> str:
    """Strip one pair of matching single or double quotes."""
    value = value.strip()
    if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
        return value[1:-1]
    return value


def parse_macro_attributes(text: str, positional: tuple[str, ...] = ()) -> dict[str, str]:
    """Parse the attribute list of an inline or block macro.

    Parameters
    ----------
    text : str
        Content between the square brackets
    positional : tuple of str
        Names given to positional attributes, in order

    Returns
    -------
    dict[str, str]
        Named and positional attributes

    Examples
    --------
        >>> parse_macro_attributes("Diagram,300,role=thumb", ("alt", "width", "height"))
        {'alt': 'Diagram', 'width': '300', 'role': 'thumb'}

    """
    attributes: dict[str, str] = {}
    if not text.strip():
        return attributes

    index = 0
    for part in split_attrlist(text):
        if "=" in part and re.match(r"^[\w-]+\s*=", part):
            key, value = part.split("=", 1)
            attributes[key.strip()] = unquote(value)
            continue
        if index < len(positional) and part:
            attributes[positional[index]] = unquote(part)
        index += 1
    return attributes


def default_image_alt(target: str) -> str:
    """Derive alt text from an image path the way AsciiDoc processors do.

    Examples
    --------
        >>> default_image_alt("images/system_overview-v2.png")
        'system overview v2'

    """
    stem = os.path.splitext(os.path.basename(target))[0]
    return re.sub(r"[_-]+", " ", stem)


class InlineParser:
    """Parse inline AsciiDoc markup into inline content.

    Parameters
    ----------
    attributes : Mapping[str, str]
        Document attributes available to ``{name}`` references. The mapping
        is read on every call, so later attribute entries are honored.
    missing_policy : {"keep", "blank", "warn"}, default "keep"
        What to do with references to undefined attributes
    honor_hard_breaks : bool, default True
        Whether a trailing `` +`` on a line produces a hard line break

    Examples
    --------
        >>> parser = InlineParser({"product": "Franklin"})
        >>> parser.parse("Welcome to *{product}*")
        ['Welcome to ', Inline(kind=<NodeKind.INLINE_QUOTED: 'inline_quoted'>, ...)]

    """

    def __init__(
        self,
        attributes: Mapping[str, str],
        missing_policy: AttributeMissingPolicy = "keep",
        honor_hard_breaks: bool = True,
    ):
        """Initialize the inline parser."""
        self.attributes = attributes
        self.missing_policy = missing_policy
        self.honor_hard_breaks = honor_hard_breaks
        self._items: list[InlineItem] = []

    def parse(self, text: str) -> InlineContent:
        """Parse ``text`` into inline content.

        Parameters
        ----------
        text : str
            Raw inline markup (may span several lines)

        Returns
        -------
        InlineContent
            Plain strings, passthroughs and inline nodes

        """
        if not text:
            return []

        self._items = []
        prepared = _ESCAPE_PATTERN.sub(lambda m: self._stash(m.group(1)), text)
        if self.honor_hard_breaks:
            prepared = _HARD_BREAK_PATTERN.sub(lambda m: self._stash(Inline(NodeKind.INLINE_BREAK)), prepared)
        prepared = _PASSTHROUGH_PATTERN.sub(self._replace_passthrough, prepared)
        prepared = self.substitute_attributes(prepared)
        return self._parse_recursive(prepared)

    def substitute_attributes(self, text: str) -> str:
        """Replace ``{name}`` references with attribute values.

        Parameters
        ----------
        text : str
            Text containing attribute references

        Returns
        -------
        str
            Text with references resolved according to the missing policy

        """

        def replace(match: re.Match[str]) -> str:
            name = match.group("name")
            if name in self.attributes:
                return self.attributes[name]
            if name in BUILTIN_ATTRIBUTES:
                return BUILTIN_ATTRIBUTES[name]
            if self.missing_policy == "blank":
                return ""
            if self.missing_policy == "warn":
                logger.warning("Undefined attribute reference: {%s}", name)
            return match.group(0)

        return _ATTRIBUTE_REF_PATTERN.sub(replace, text)

    def _stash(self, item: InlineItem) -> str:
        self._items.append(item)
        return f"{_PLACEHOLDER}{len(self._items) - 1}{_PLACEHOLDER}"

    def _replace_passthrough(self, match: re.Match[str]) -> str:
        if match.group("macro") is not None:
            return self._stash(RawHtml(self._restore(match.group("macro"))))
        if match.group("triple") is not None:
            return self._stash(RawHtml(self._restore(match.group("triple"))))
        content = match.group("double") if match.group("double") is not None else match.group("single")
        return self._stash(self._restore(content))

    def _restore(self, text: str) -> str:
        """Restore placeholders in ``text`` to their plain string form."""

        def replace(match: re.Match[str]) -> str:
            item = self._items[int(match.group(1))]
            if isinstance(item, Inline):
                return plain_text([item])
            return str(item)

        return _PLACEHOLDER_PATTERN.sub(replace, text)

    def _emit_text(self, text: str, nodes: InlineContent) -> None:
        """Append plain text to ``nodes``, expanding placeholders."""
        pos = 0
        for match in _PLACEHOLDER_PATTERN.finditer(text):
            if match.start() > pos:
                self._append(nodes, text[pos : match.start()])
            self._append(nodes, self._items[int(match.group(1))])
            pos = match.end()
        if pos < len(text):
            self._append(nodes, text[pos:])

    @staticmethod
    def _append(nodes: InlineContent, item: InlineItem) -> None:
        # Adjacent plain strings are merged; passthroughs stay separate
        if (
            isinstance(item, str)
            and not isinstance(item, RawHtml)
            and nodes
            and isinstance(nodes[-1], str)
            and not isinstance(nodes[-1], RawHtml)
        ):
            nodes[-1] = nodes[-1] + item
        else:
            nodes.append(item)

    def _parse_recursive(self, text: str) -> InlineContent:
        nodes: InlineContent = []
        pos = 0

        while pos < len(text):
            match = _INLINE_PATTERN.search(text, pos)
            if match is None:
                break
            if match.start() > pos:
                self._emit_text(text[pos : match.start()], nodes)
            node = self._build_node(match)
            if node is None:
                self._emit_text(match.group(0), nodes)
            else:
                nodes.append(node)
            pos = match.end()

        if pos < len(text):
            self._emit_text(text[pos:], nodes)

        return nodes

    def _build_node(self, match: re.Match[str]) -> Optional[Inline]:
        kind = match.lastgroup
        if kind is None:
            return None

        if kind in _QUOTE_TYPES:
            return self._build_quoted(match, kind)
        if kind == "link":
            return self._build_link(self._restore(match.group("link_target")), match.group("link_text"))
        if kind == "mailto":
            return self._build_mailto(self._restore(match.group("mailto_address")), match.group("mailto_text"))
        if kind == "url":
            return self._build_link(self._restore(match.group("url_target")), match.group("url_text") or "")
        if kind == "xref":
            return self._build_xref(self._restore(match.group("xref_id")), match.group("xref_text") or "")
        if kind == "xref_macro":
            return self._build_xref(
                self._restore(match.group("xref_macro_target")), match.group("xref_macro_text") or ""
            )
        if kind == "image":
            return self._build_image(self._restore(match.group("image_target")), match.group("image_attrs"))
        return None

    def _build_quoted(self, match: re.Match[str], kind: str) -> Inline:
        inner = self._parse_recursive(match.group(f"{kind}_text"))
        attributes: dict[str, str] = {}
        quote_type = _QUOTE_TYPES[kind]

        role_group = f"{kind}_role"
        role = match.groupdict().get(role_group)
        if role:
            # [.role]#text# marks up a span rather than highlighted text
            attributes["role"] = " ".join(part.lstrip(".") for part in role.split())
            quote_type = "unquoted"

        return Inline(NodeKind.INLINE_QUOTED, attributes=attributes, type=quote_type, inlines=inner)

    def _build_link(self, target: str, text: str) -> Inline:
        attributes: dict[str, str] = {}

        if "=" in text:
            named = parse_macro_attributes(text, ("text",))
            text = named.pop("text", "")
            attributes.update({key: self._restore(value) for key, value in named.items()})
        elif text.startswith(('"', "'")):
            text = unquote(text)

        if text.endswith("^"):
            text = text[:-1]
            attributes["window"] = "_blank"

        if text:
            inlines = self._parse_recursive(text)
        else:
            inlines = [target]
            attributes["role"] = " ".join(filter(None, ["bare", attributes.get("role", "")]))

        return Inline(NodeKind.INLINE_ANCHOR, attributes=attributes, type="link", target=target, inlines=inlines)

    def _build_mailto(self, address: str, text: str) -> Inline:
        target = f"mailto:{address}"
        if text:
            return self._build_link(target, text)
        # Without text the address is shown, not the full target
        return Inline(NodeKind.INLINE_ANCHOR, type="link", target=target, inlines=[address])

    def _build_xref(self, refid: str, text: str) -> Inline:
        path, _, fragment = refid.partition("#")
        attributes = {"refid": fragment if path.endswith(".adoc") or fragment else refid}

        if path.endswith(".adoc"):
            path = path[: -len(".adoc")]
            attributes["path"] = path
            target = f"{path}#{fragment}" if fragment else path
        elif fragment:
            target = f"{path}#{fragment}" if path else f"#{fragment}"
        else:
            target = f"#{refid}"

        inlines = self._parse_recursive(text) if text else []
        return Inline(NodeKind.INLINE_ANCHOR, attributes=attributes, type="xref", target=target, inlines=inlines)

    def _build_image(self, target: str, attrlist: str) -> Inline:
        attributes = parse_macro_attributes(self._restore(attrlist), ("alt", "width", "height"))
        attributes.setdefault("alt", default_image_alt(target))
        attributes["target"] = target
        return Inline(NodeKind.INLINE_IMAGE, attributes=attributes, target=target)


__all__ = [
    "InlineParser",
    "default_image_alt",
    "parse_macro_attributes",
    "split_attrlist",
    "unquote",
]
