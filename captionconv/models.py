"""Pydantic models for the caption intermediate representation."""

from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, Field

from .timestamps import format_timestamp


class CaptionFormat(str, Enum):
    """Supported caption formats."""
    SRT = "srt"
    VTT = "vtt"
    DFXP = "dfxp"


class Style(BaseModel):
    """Appearance metadata, either a named head style or an inline span overlay."""
    id: str = Field(default="", description="Style identifier (xml:id or span style reference)")
    font_family: str = Field(default="", description="Font family")
    font_size: str = Field(default="", description="Font size, unit included (e.g. 10pt)")
    text_align: str = Field(default="", description="Horizontal text alignment")
    color: str = Field(default="", description="Text color")
    italics: bool = False
    bold: bool = False
    underline: bool = False

    def describe(self) -> str:
        """Human-readable summary, one property per line."""
        return "\n".join([
            f"class: {self.id}",
            f"text-align: {self.text_align}",
            f"font-family: {self.font_family}",
            f"font-size: {self.font_size}",
            f"color: {self.color}",
            f"italics: {str(self.italics).lower()}",
            f"bold: {str(self.bold).lower()}",
            f"underline: {str(self.underline).lower()}",
        ])


class Region(BaseModel):
    """On-screen positioning metadata referenced by captions."""
    id: str = Field(default="", description="Region identifier")
    display_align: str = Field(default="", description="Vertical alignment within the region")
    text_align: str = Field(default="", description="Horizontal text alignment")


class TextNode(BaseModel):
    """A run of caption text."""
    kind: Literal["text"] = "text"
    content: str

    def get_content(self) -> str:
        return self.content


class LineBreakNode(BaseModel):
    """A forced line break."""
    kind: Literal["line_break"] = "line_break"

    def get_content(self) -> str:
        return "\n"


class StyleNode(BaseModel):
    """An inline style overlay applying to the text that follows it."""
    kind: Literal["style"] = "style"
    style: Style

    def get_content(self) -> str:
        return self.style.describe()


Node = Annotated[Union[TextNode, LineBreakNode, StyleNode], Field(discriminator="kind")]


class Caption(BaseModel):
    """A single timed caption cue."""
    start: int = Field(..., ge=0, description="Start time in microseconds")
    end: int = Field(..., ge=0, description="End time in microseconds")
    nodes: list[Node] = Field(default_factory=list, description="Content nodes in display order")
    style_id: Optional[str] = Field(default=None, description="Reference into CaptionSet.styles")
    region_id: Optional[str] = Field(default=None, description="Reference into CaptionSet.regions")

    @property
    def duration(self) -> int:
        """Duration in microseconds."""
        return self.end - self.start

    def format_start(self, fmt: CaptionFormat = CaptionFormat.DFXP) -> str:
        return format_timestamp(self.start, fmt)

    def format_end(self, fmt: CaptionFormat = CaptionFormat.DFXP) -> str:
        return format_timestamp(self.end, fmt)

    def is_empty(self) -> bool:
        return not self.nodes

    def get_text(self) -> str:
        """Flatten the nodes to plain text, line breaks as newlines."""
        parts: list[str] = []
        for node in self.nodes:
            if isinstance(node, TextNode):
                parts.append(node.content)
            elif isinstance(node, LineBreakNode):
                parts.append("\n")
            elif isinstance(node, StyleNode):
                continue
            else:
                raise TypeError(f"Unknown caption node: {node!r}")
        return "".join(parts)


class CaptionSet(BaseModel):
    """Captions keyed by language, plus the styles and regions of the document."""
    captions: dict[str, list[Caption]] = Field(default_factory=dict, description="Captions per language tag")
    styles: list[Style] = Field(default_factory=list, description="Styles in discovery order")
    regions: list[Region] = Field(default_factory=list, description="Regions in discovery order")

    def set_captions(self, lang: str, captions: list[Caption]) -> None:
        """Replace the caption sequence for a language."""
        self.captions[lang] = list(captions)

    def get_captions(self, lang: str) -> list[Caption]:
        return self.captions.get(lang, [])

    def get_languages(self) -> list[str]:
        return list(self.captions)

    def add_style(self, style: Style) -> None:
        self.styles.append(style)

    def add_region(self, region: Region) -> None:
        self.regions.append(region)

    def get_styles(self) -> list[Style]:
        return self.styles

    def get_regions(self) -> list[Region]:
        return self.regions

    def get_style(self, style_id: str) -> Optional[Style]:
        for style in self.styles:
            if style.id == style_id:
                return style
        return None

    def get_region(self, region_id: str) -> Optional[Region]:
        for region in self.regions:
            if region.id == region_id:
                return region
        return None

    def is_empty(self) -> bool:
        """True when no language holds any caption."""
        return all(not captions for captions in self.captions.values())
