"""Rich-text document model with an HTML parser and serializer.

A document is an ordered tree of text runs and elements. Images are embedded
objects identified by their ``src``; callers enumerate them with
``image_embeds()`` and swap one for coloured text with ``replace_embed()``.

Round-tripping through ``from_html``/``to_html`` keeps the element structure
but not the exact source bytes: character references are decoded and
re-escaped, unclosed elements are closed, attribute quoting is normalised.
Comments, declarations, processing instructions and CDATA sections are
kept as opaque nodes.
"""

from __future__ import annotations

import html
from collections.abc import Iterator
from dataclasses import dataclass, field
from html.parser import HTMLParser
from typing import Any, Protocol

# Elements that never have children or a closing tag.
_VOID_TAGS = frozenset(
    {
        "area",
        "base",
        "br",
        "col",
        "embed",
        "hr",
        "img",
        "input",
        "link",
        "meta",
        "param",
        "source",
        "track",
        "wbr",
    }
)

# Elements whose text content is written back without escaping.
_RAW_TEXT_TAGS = frozenset({"script", "style"})

# Android's Spanned.toString() puts U+FFFC where an embedded object sits.
OBJECT_REPLACEMENT_CHAR = "\ufffc"


@dataclass(eq=False, slots=True)
class Element:
    """An element node: tag, attributes in source order, child nodes."""

    tag: str
    attrs: list[tuple[str, str | None]] = field(default_factory=list)
    children: list[Node] = field(default_factory=list)

    def get(self, name: str) -> str | None:
        for key, value in self.attrs:
            if key == name:
                return value
        return None


@dataclass(frozen=True, slots=True)
class Comment:
    text: str


@dataclass(frozen=True, slots=True)
class Declaration:
    text: str  # e.g. "DOCTYPE html"


@dataclass(frozen=True, slots=True)
class ProcessingInstruction:
    text: str  # e.g. "php echo 1 ?" for <?php echo 1 ?>


@dataclass(frozen=True, slots=True)
class MarkedSection:
    text: str  # e.g. "CDATA[x" for <![CDATA[x]]>


Node = str | Element | Comment | Declaration | ProcessingInstruction | MarkedSection


@dataclass(frozen=True, slots=True)
class ImageEmbed:
    """Handle to one embedded image inside a document."""

    source: str
    handle: Any = field(repr=False, compare=False)


class RichTextDocument(Protocol):
    """What emoticon substitution needs from a rich-text implementation."""

    def image_embeds(self) -> list[ImageEmbed]:
        """Return every embedded image, in document order."""
        ...

    def replace_embed(self, embed: ImageEmbed, text: str, *, color: str) -> None:
        """Replace ``embed`` with ``text`` drawn in foreground ``color``."""
        ...


# ---------------------------------------------------------------------------
# HTML -> node tree
# ---------------------------------------------------------------------------


class _RichTextBuilder(HTMLParser):
    """Convert HTML into a list of rich-text nodes."""

    def __init__(self) -> None:
        super().__init__(convert_charrefs=True)
        self._stack: list[Element] = []  # open elements
        self._root: list[Node] = []  # top-level nodes

    def _current(self) -> list[Node]:
        if self._stack:
            return self._stack[-1].children
        return self._root

    def handle_starttag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        node = Element(tag=tag, attrs=list(attrs))
        self._current().append(node)
        if tag not in _VOID_TAGS:
            self._stack.append(node)

    def handle_startendtag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        # <br/>, <img .../>, and the odd self-closed <span/>: never opened
        self._current().append(Element(tag=tag, attrs=list(attrs)))

    def handle_endtag(self, tag: str) -> None:
        if tag in _VOID_TAGS:
            return
        # Pop up to the matching open element; stray end tags are dropped
        for i in range(len(self._stack) - 1, -1, -1):
            if self._stack[i].tag == tag:
                del self._stack[i:]
                break

    def handle_data(self, data: str) -> None:
        if data:
            self._current().append(data)

    def handle_comment(self, data: str) -> None:
        self._current().append(Comment(data))

    def handle_decl(self, decl: str) -> None:
        self._current().append(Declaration(decl))

    def handle_pi(self, data: str) -> None:
        self._current().append(ProcessingInstruction(data))

    def unknown_decl(self, data: str) -> None:
        self._current().append(MarkedSection(data))

    def get_nodes(self) -> list[Node]:
        return self._root


# ---------------------------------------------------------------------------
# Node tree -> HTML
# ---------------------------------------------------------------------------


def _render_attrs(attrs: list[tuple[str, str | None]]) -> str:
    parts: list[str] = []
    for name, value in attrs:
        if value is None:
            parts.append(f" {name}")
        else:
            parts.append(f' {name}="{html.escape(value, quote=True)}"')
    return "".join(parts)


def _render(nodes: list[Node], out: list[str], *, raw: bool = False) -> None:
    for node in nodes:
        if isinstance(node, str):
            out.append(node if raw else html.escape(node, quote=False))
        elif isinstance(node, Comment):
            out.append(f"<!--{node.text}-->")
        elif isinstance(node, Declaration):
            out.append(f"<!{node.text}>")
        elif isinstance(node, ProcessingInstruction):
            out.append(f"<?{node.text}>")
        elif isinstance(node, MarkedSection):
            out.append(f"<![{node.text}]]>")
        else:
            out.append(f"<{node.tag}{_render_attrs(node.attrs)}>")
            if node.tag in _VOID_TAGS:
                continue
            _render(node.children, out, raw=node.tag in _RAW_TEXT_TAGS)
            out.append(f"</{node.tag}>")


def _walk(nodes: list[Node]) -> Iterator[tuple[list[Node], Element]]:
    """Yield (parent_children, element) pairs depth-first, in document order."""
    for node in nodes:
        if isinstance(node, Element):
            yield nodes, node
            yield from _walk(node.children)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


class RichText:
    """Tree-backed rich text. Implements ``RichTextDocument``."""

    def __init__(self, nodes: list[Node] | None = None) -> None:
        self.nodes: list[Node] = nodes if nodes is not None else []

    @classmethod
    def from_html(cls, text: str) -> RichText:
        builder = _RichTextBuilder()
        builder.feed(text)
        builder.close()
        return cls(builder.get_nodes())

    def to_html(self) -> str:
        out: list[str] = []
        _render(self.nodes, out)
        return "".join(out)

    def plain_text(self) -> str:
        """Text content only: ``<br>`` becomes a newline, images become U+FFFC."""
        out: list[str] = []

        def visit(nodes: list[Node]) -> None:
            for node in nodes:
                if isinstance(node, str):
                    out.append(node)
                elif isinstance(node, Element):
                    if node.tag == "br":
                        out.append("\n")
                    elif node.tag == "img":
                        out.append(OBJECT_REPLACEMENT_CHAR)
                    elif node.tag not in _RAW_TEXT_TAGS:
                        visit(node.children)

        visit(self.nodes)
        return "".join(out)

    def image_embeds(self) -> list[ImageEmbed]:
        return [
            ImageEmbed(source=element.get("src") or "", handle=(parent, element))
            for parent, element in _walk(self.nodes)
            if element.tag == "img"
        ]

    def replace_embed(self, embed: ImageEmbed, text: str, *, color: str) -> None:
        parent, element = embed.handle
        for i, node in enumerate(parent):
            if node is element:
                parent[i] = Element(tag="span", attrs=[("style", f"color: {color}")], children=[text])
                return
        msg = f"Image embed {embed.source!r} is not part of this document"
        raise ValueError(msg)
