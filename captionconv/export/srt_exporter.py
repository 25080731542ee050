"""SRT subtitle file exporter."""

from typing import List, Optional

from ..models import CaptionSet
from ..timestamps import format_timestamp_srt
from .writer import CaptionWriter, select_captions


def export_srt(caption_set: CaptionSet, lang: Optional[str] = None) -> str:
    """
    Export one language of a caption set to SRT format.
    
    Args:
        caption_set: Captions to export
        lang: Language to export; the first language of the set if omitted
        
    Returns:
        SRT file content as string
    """
    lines: List[str] = []
    
    for i, caption in enumerate(select_captions(caption_set, lang), 1):
        # Cue index
        lines.append(str(i))
        
        # Timing line
        start = format_timestamp_srt(caption.start)
        end = format_timestamp_srt(caption.end)
        lines.append(f"{start} --> {end}")
        
        # A blank line would end the cue early
        for text_line in caption.get_text().split("\n"):
            if text_line.strip():
                lines.append(text_line)
        
        # Blank line between cues
        lines.append("")
    
    return "\n".join(lines)


class SRTWriter(CaptionWriter):
    """Writer producing SubRip documents for a single language."""
    
    def __init__(self, lang: Optional[str] = None):
        self.lang = lang
    
    def write(self, caption_set: CaptionSet) -> bytes:
        return export_srt(caption_set, self.lang).encode("utf-8")
