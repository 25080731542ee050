"""Caption conversion between DFXP/TTML, SRT and WebVTT."""

from .config import ReaderOptions
from .converter import convert, detect_format, read_captions
from .errors import (
    CaptionError,
    EmptyDocument,
    InvalidTimingOrder,
    MalformedTimestamp,
    StructuralError,
    UnsupportedFormat,
)
from .export import DFXPWriter, SRTWriter, WebVTTWriter
from .models import (
    Caption,
    CaptionFormat,
    CaptionSet,
    LineBreakNode,
    Node,
    Region,
    Style,
    StyleNode,
    TextNode,
)
from .parsing import DFXPReader, SRTReader, WebVTTReader

__all__ = [
    "Caption",
    "CaptionError",
    "CaptionFormat",
    "CaptionSet",
    "DFXPReader",
    "DFXPWriter",
    "EmptyDocument",
    "InvalidTimingOrder",
    "LineBreakNode",
    "MalformedTimestamp",
    "Node",
    "ReaderOptions",
    "Region",
    "SRTReader",
    "SRTWriter",
    "StructuralError",
    "Style",
    "StyleNode",
    "TextNode",
    "UnsupportedFormat",
    "WebVTTReader",
    "WebVTTWriter",
    "convert",
    "detect_format",
    "read_captions",
]
