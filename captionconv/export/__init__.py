from .writer import CaptionWriter
from .dfxp_exporter import DFXPWriter, export_dfxp
from .srt_exporter import SRTWriter, export_srt
from .vtt_exporter import WebVTTWriter, export_vtt

__all__ = [
    "CaptionWriter",
    "DFXPWriter",
    "SRTWriter",
    "WebVTTWriter",
    "export_dfxp",
    "export_srt",
    "export_vtt",
]
