"""DFXP/TTML caption file parser."""

import re
from typing import Dict, List, Optional, Union

from bs4 import BeautifulSoup, Comment, Declaration, Doctype, NavigableString, ProcessingInstruction, Tag

from ..errors import EmptyDocument, MalformedTimestamp, StructuralError
from ..models import Caption, CaptionSet, LineBreakNode, Node, Region, Style, StyleNode, TextNode
from ..timestamps import parse_timestamp_dfxp
from ..utils.logger import get_logger
from .reader import CaptionReader, decode_content

logger = get_logger(__name__)

# Newlines plus the indentation around them inside a text run
INDENTED_NEWLINE_RE = re.compile(r"[ \t]*\n\s*")

_NON_TEXT_STRINGS = (Comment, Declaration, Doctype, ProcessingInstruction)


def _local_name(name: str) -> str:
    """Strip any namespace prefix and lowercase, so tts:textAlign -> textalign."""
    return name.rsplit(":", 1)[-1].lower()


def _attributes(element: Tag) -> Dict[str, str]:
    return {_local_name(str(key)): value for key, value in element.attrs.items()}


def _children(element: Tag, name: str) -> List[Tag]:
    return [
        child for child in element.children
        if isinstance(child, Tag) and _local_name(child.name) == name
    ]


def _descendants(element: Tag, name: str) -> List[Tag]:
    return element.find_all(lambda tag: _local_name(tag.name) == name)


def _find(element: Tag, name: str) -> Optional[Tag]:
    return element.find(lambda tag: _local_name(tag.name) == name)


def _enclosing(element: Tag, name: str) -> Optional[Tag]:
    return element.find_parent(lambda tag: _local_name(tag.name) == name)


def _trim_text_edges(nodes: List[Node]) -> List[Node]:
    """Trim text at the paragraph edges and around line breaks, dropping emptied runs."""
    # Runs split only by a skipped element are one run
    merged: List[Node] = []
    for node in nodes:
        if isinstance(node, TextNode) and merged and isinstance(merged[-1], TextNode):
            merged[-1] = TextNode(content=merged[-1].content + node.content)
        else:
            merged.append(node)
    nodes = merged

    trimmed: List[Node] = []
    for index, node in enumerate(nodes):
        if isinstance(node, TextNode):
            before = nodes[index - 1] if index > 0 else None
            after = nodes[index + 1] if index + 1 < len(nodes) else None
            text = node.content
            if before is None or isinstance(before, LineBreakNode):
                text = text.lstrip()
            if after is None or isinstance(after, LineBreakNode):
                text = text.rstrip()
            if not text:
                continue
            node = TextNode(content=text)
        trimmed.append(node)
    return trimmed


def _style_from_attributes(attrs: Dict[str, str], style_id: str) -> Style:
    return Style(
        id=style_id,
        font_family=attrs.get("fontfamily", ""),
        font_size=attrs.get("fontsize", ""),
        text_align=attrs.get("textalign", ""),
        color=attrs.get("color", ""),
        italics=attrs.get("fontstyle", "").lower() == "italic",
        bold=attrs.get("fontweight", "").lower() == "bold",
        underline="underline" in attrs.get("textdecoration", "").lower(),
    )


class DFXPReader(CaptionReader):
    """
    Reader for DFXP/TTML documents.

    Structure consumed:
    ```
    tt
      head
        styling > style*
        layout > region*
      body
        div[xml:lang]
          p[begin, end, style?, region?] > (text | br | span)*
    ```

    The document goes through lxml's recovering XML parser, so stray or
    unbalanced markup costs at most the element it appears in.
    """

    def detect(self, content: Union[str, bytes]) -> bool:
        try:
            text = decode_content(content)
        except UnicodeDecodeError:
            return False
        return "</tt>" in text.lower()

    def read(self, content: Union[str, bytes]) -> CaptionSet:
        """
        Parse a DFXP document into a caption set.

        Raises:
            StructuralError: If the tt root or its body cannot be found
            MalformedTimestamp: If a paragraph has missing or invalid timing
            EmptyDocument: If the body holds no captions; the empty set is
                attached as ``caption_set``
        """
        # The XML declaration is only legal at the very start of the document
        text = decode_content(content).strip()
        soup = BeautifulSoup(text, "lxml-xml")

        root = _find(soup, "tt")
        if root is None:
            raise StructuralError("DFXP document has no <tt> root element")
        body = _find(root, "body")
        if body is None:
            raise StructuralError("DFXP document has no <body> element")

        caption_set = CaptionSet()

        head = _find(root, "head")
        if head is not None:
            self._read_head(head, caption_set)

        for div in _descendants(body, "div"):
            lang = _attributes(div).get("lang") or self.options.default_language
            captions = caption_set.get_captions(lang) + self._read_div(div)
            caption_set.set_captions(lang, captions)

        if caption_set.is_empty():
            raise EmptyDocument("DFXP document contains no captions", caption_set=caption_set)

        for lang in caption_set.get_languages():
            logger.info("Read %d DFXP captions for %s", len(caption_set.get_captions(lang)), lang)
        return caption_set

    def _read_head(self, head: Tag, caption_set: CaptionSet) -> None:
        for styling in _children(head, "styling"):
            for element in _children(styling, "style"):
                attrs = _attributes(element)
                caption_set.add_style(_style_from_attributes(attrs, attrs.get("id", "")))

        for layout in _children(head, "layout"):
            for element in _children(layout, "region"):
                attrs = _attributes(element)
                caption_set.add_region(Region(
                    id=attrs.get("id", ""),
                    display_align=attrs.get("displayalign", ""),
                    text_align=attrs.get("textalign", ""),
                ))

    def _read_div(self, div: Tag) -> List[Caption]:
        # Recovery can nest a p inside a broken sibling, so search the whole div
        return [
            self._read_paragraph(p) for p in _descendants(div, "p")
            if _enclosing(p, "div") is div
        ]

    def _read_paragraph(self, p: Tag) -> Caption:
        attrs = _attributes(p)

        begin = attrs.get("begin")
        if begin is None:
            raise MalformedTimestamp(f"<p> element without begin attribute: {p}")
        start = parse_timestamp_dfxp(begin)

        if "end" in attrs:
            end = parse_timestamp_dfxp(attrs["end"])
        elif "dur" in attrs:
            end = start + parse_timestamp_dfxp(attrs["dur"])
        else:
            raise MalformedTimestamp(f"<p> element without end attribute: {p}")

        nodes: List[Node] = []
        self._read_nodes(p, nodes)

        return Caption(
            start=start,
            end=end,
            nodes=_trim_text_edges(nodes),
            style_id=attrs.get("style"),
            region_id=attrs.get("region"),
        )

    def _read_nodes(self, element: Tag, nodes: List[Node]) -> None:
        """Walk the children of a paragraph or span in document order."""
        for child in element.children:
            if isinstance(child, _NON_TEXT_STRINGS):
                continue

            if isinstance(child, NavigableString):
                text = INDENTED_NEWLINE_RE.sub(" ", str(child))
                if text:
                    nodes.append(TextNode(content=text))
                continue

            name = _local_name(child.name)
            if name in ("p", "div"):
                # Read on its own by _read_div
                continue
            if name == "br":
                nodes.append(LineBreakNode())
            elif name == "span":
                attrs = _attributes(child)
                nodes.append(StyleNode(style=_style_from_attributes(attrs, attrs.get("style", ""))))
                self._read_nodes(child, nodes)
            else:
                logger.debug("Skipping unsupported <%s> element inside caption", child.name)
