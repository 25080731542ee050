"""WebVTT subtitle file exporter."""

from html import escape
from typing import List, Optional

from ..models import CaptionSet
from ..timestamps import format_timestamp_vtt
from .writer import CaptionWriter, select_captions


def export_vtt(caption_set: CaptionSet, lang: Optional[str] = None) -> str:
    """
    Export one language of a caption set to WebVTT format.
    
    Args:
        caption_set: Captions to export
        lang: Language to export; the first language of the set if omitted
        
    Returns:
        VTT file content as string
    """
    lines: List[str] = []
    
    # VTT header
    lines.append("WEBVTT")
    lines.append("")
    
    for i, caption in enumerate(select_captions(caption_set, lang), 1):
        # Cue identifier (optional but helpful)
        lines.append(str(i))
        
        # Timing line
        start = format_timestamp_vtt(caption.start)
        end = format_timestamp_vtt(caption.end)
        lines.append(f"{start} --> {end}")
        
        # Cue text must not contain a blank line or raw markup characters
        for text_line in caption.get_text().split("\n"):
            if text_line.strip():
                lines.append(escape(text_line, quote=False))
        
        # Blank line between cues
        lines.append("")
    
    return "\n".join(lines)


class WebVTTWriter(CaptionWriter):
    """Writer producing WebVTT documents for a single language."""
    
    def __init__(self, lang: Optional[str] = None):
        self.lang = lang
    
    def write(self, caption_set: CaptionSet) -> bytes:
        return export_vtt(caption_set, self.lang).encode("utf-8")
