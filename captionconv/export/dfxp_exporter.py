"""DFXP/TTML caption file exporter."""

import xml.etree.ElementTree as ET
from typing import Dict, Optional

from ..models import Caption, CaptionSet, LineBreakNode, Region, Style, StyleNode, TextNode
from ..timestamps import format_timestamp_dfxp
from .writer import CaptionWriter

TTML_NAMESPACE = "http://www.w3.org/ns/ttml"
TTML_STYLING_NAMESPACE = "http://www.w3.org/ns/ttml#styling"

XML_DECLARATION = '<?xml version="1.0" encoding="utf-8"?>\n'


def _style_attributes(style: Style) -> Dict[str, str]:
    attrs = {}
    if style.font_family:
        attrs["tts:fontFamily"] = style.font_family
    if style.font_size:
        attrs["tts:fontSize"] = style.font_size
    if style.text_align:
        attrs["tts:textAlign"] = style.text_align
    if style.color:
        attrs["tts:color"] = style.color
    if style.italics:
        attrs["tts:fontStyle"] = "italic"
    if style.bold:
        attrs["tts:fontWeight"] = "bold"
    if style.underline:
        attrs["tts:textDecoration"] = "underline"
    return attrs


def _region_attributes(region: Region) -> Dict[str, str]:
    attrs = {"xml:id": region.id}
    if region.display_align:
        attrs["tts:displayAlign"] = region.display_align
    if region.text_align:
        attrs["tts:textAlign"] = region.text_align
    return attrs


class _ParagraphBuilder:
    """Appends caption nodes to a <p>, keeping text after a style node inside its <span>."""

    def __init__(self, p: ET.Element):
        self.p = p
        self.span: Optional[ET.Element] = None
        self.last: Optional[ET.Element] = None

    def add_text(self, text: str) -> None:
        if self.last is None:
            container = self.span if self.span is not None else self.p
            container.text = (container.text or "") + text
        else:
            self.last.tail = (self.last.tail or "") + text

    def add_line_break(self) -> None:
        self._close_span()
        self.last = ET.SubElement(self.p, "br")

    def open_span(self, style: Style) -> None:
        self._close_span()
        attrs = _style_attributes(style)
        if style.id:
            attrs["style"] = style.id
        self.span = ET.SubElement(self.p, "span", attrs)
        self.last = None

    def _close_span(self) -> None:
        if self.span is not None:
            self.last = self.span
            self.span = None


def _caption_element(parent: ET.Element, caption: Caption) -> ET.Element:
    attrs = {
        "begin": format_timestamp_dfxp(caption.start),
        "end": format_timestamp_dfxp(caption.end),
    }
    if caption.style_id:
        attrs["style"] = caption.style_id
    if caption.region_id:
        attrs["region"] = caption.region_id
    p = ET.SubElement(parent, "p", attrs)

    builder = _ParagraphBuilder(p)
    for node in caption.nodes:
        if isinstance(node, TextNode):
            builder.add_text(node.content)
        elif isinstance(node, LineBreakNode):
            builder.add_line_break()
        elif isinstance(node, StyleNode):
            builder.open_span(node.style)
        else:
            raise TypeError(f"Unknown caption node: {node!r}")
    return p


def build_dfxp_tree(caption_set: CaptionSet) -> ET.Element:
    """Build the <tt> element tree for a caption set."""
    languages = caption_set.get_languages()
    root = ET.Element("tt", {
        "xmlns": TTML_NAMESPACE,
        "xmlns:tts": TTML_STYLING_NAMESPACE,
    })
    if languages:
        root.set("xml:lang", languages[0])

    head = ET.SubElement(root, "head")
    styling = ET.SubElement(head, "styling")
    for style in caption_set.get_styles():
        attrs = {"xml:id": style.id}
        attrs.update(_style_attributes(style))
        ET.SubElement(styling, "style", attrs)
    layout = ET.SubElement(head, "layout")
    for region in caption_set.get_regions():
        ET.SubElement(layout, "region", _region_attributes(region))

    body = ET.SubElement(root, "body")
    for lang in languages:
        div = ET.SubElement(body, "div", {"xml:lang": lang})
        for caption in caption_set.get_captions(lang):
            _caption_element(div, caption)

    return root


def _indent(element: ET.Element, level: int = 0) -> None:
    """Indent structural elements; paragraph content is mixed and left untouched."""
    if element.tag == "p" or not len(element):
        return
    padding = "\n" + "  " * (level + 1)
    element.text = padding
    for child in element:
        _indent(child, level + 1)
        child.tail = padding
    child.tail = "\n" + "  " * level


def export_dfxp(caption_set: CaptionSet) -> str:
    """
    Export a caption set to a DFXP document.

    Text is escaped by the serializer; the model holds it unescaped.

    Args:
        caption_set: Captions to export, all languages

    Returns:
        DFXP file content as string
    """
    root = build_dfxp_tree(caption_set)
    _indent(root)
    return XML_DECLARATION + ET.tostring(root, encoding="unicode") + "\n"


class DFXPWriter(CaptionWriter):
    """Writer producing DFXP documents with every language of the set."""

    def write(self, caption_set: CaptionSet) -> bytes:
        return export_dfxp(caption_set).encode("utf-8")
