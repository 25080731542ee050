"""Format detection and conversion between caption formats."""

from typing import Dict, Optional, Type, Union

from .config import ReaderOptions
from .errors import UnsupportedFormat
from .export import CaptionWriter, DFXPWriter, SRTWriter, WebVTTWriter
from .models import CaptionFormat, CaptionSet
from .parsing import CaptionReader, DFXPReader, SRTReader, WebVTTReader
from .utils.logger import get_logger

logger = get_logger(__name__)

# Detection order matters: a WebVTT file may contain SRT-looking lines,
# and a DFXP file may mention WEBVTT in its text.
READERS: Dict[CaptionFormat, Type[CaptionReader]] = {
    CaptionFormat.DFXP: DFXPReader,
    CaptionFormat.VTT: WebVTTReader,
    CaptionFormat.SRT: SRTReader,
}

WRITERS: Dict[CaptionFormat, Type[CaptionWriter]] = {
    CaptionFormat.DFXP: DFXPWriter,
    CaptionFormat.VTT: WebVTTWriter,
    CaptionFormat.SRT: SRTWriter,
}


def detect_format(content: Union[str, bytes]) -> Optional[CaptionFormat]:
    """Return the first format whose reader recognises the content, or None."""
    for fmt, reader_class in READERS.items():
        if reader_class().detect(content):
            return fmt
    return None


def read_captions(
    content: Union[str, bytes],
    options: Optional[ReaderOptions] = None
) -> CaptionSet:
    """
    Detect the format of content and read it.
    
    Raises:
        UnsupportedFormat: If no reader recognises the content
        CaptionError: If the detected reader fails
    """
    fmt = detect_format(content)
    if fmt is None:
        raise UnsupportedFormat("Could not detect caption format")
    reader = READERS[fmt](options)
    logger.debug("Detected %s content, reading with %s", fmt.value, reader.get_reader_name())
    return reader.read(content)


def convert(
    content: Union[str, bytes],
    target: CaptionFormat,
    options: Optional[ReaderOptions] = None
) -> bytes:
    """Read content in any supported format and write it as target."""
    caption_set = read_captions(content, options)
    writer = WRITERS[CaptionFormat(target)]()
    logger.debug("Writing with %s", writer.get_writer_name())
    return writer.write(caption_set)
