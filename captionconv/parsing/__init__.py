from .reader import CaptionReader
from .dfxp_parser import DFXPReader
from .srt_parser import SRTReader, parse_srt
from .vtt_parser import WebVTTReader

__all__ = ["CaptionReader", "DFXPReader", "SRTReader", "WebVTTReader", "parse_srt"]
