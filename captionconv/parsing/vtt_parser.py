"""WebVTT subtitle file parser."""

import html
import re
from typing import List, Optional, Union

from ..errors import EmptyDocument, InvalidTimingOrder
from ..models import Caption, CaptionSet, LineBreakNode, TextNode
from ..timestamps import TIMING_ARROW, parse_timing_line_vtt
from ..utils.logger import get_logger
from .reader import CaptionReader, decode_content, split_lines

logger = get_logger(__name__)

WEBVTT_SIGNATURE = "WEBVTT"

VOICE_SPAN_RE = re.compile(r"<v(?:\.[\w-]+)*\s+([^>]*)>")
OTHER_SPAN_RE = re.compile(r"</?(?:[cibuv]|ruby|rt|lang)(?:[.\s][^>]*)?>")


def remove_styles(line: str) -> str:
    """Project a cue text line with inline markup to plain text."""
    line = VOICE_SPAN_RE.sub(r"\1: ", line)
    line = OTHER_SPAN_RE.sub("", line)
    return html.unescape(line)


class WebVTTReader(CaptionReader):
    """
    Reader for WebVTT content.

    VTT format:
    ```
    WEBVTT

    1
    00:00:01.000 --> 00:00:04.000
    First subtitle text

    00:00:05.000 --> 00:00:08.000
    <v Roger>Second subtitle
    with multiple lines
    ```

    Cue identifiers, header metadata and NOTE blocks are ignored.
    """

    def detect(self, content: Union[str, bytes]) -> bool:
        try:
            text = decode_content(content)
        except UnicodeDecodeError:
            return False
        return WEBVTT_SIGNATURE in text

    def read(self, content: Union[str, bytes], lang: Optional[str] = None) -> CaptionSet:
        """
        Parse WebVTT content into a caption set.

        Raises:
            MalformedTimestamp: If a timing line cannot be parsed
            InvalidTimingOrder: If cue timing is out of order and not ignored
            EmptyDocument: If no cue with text was found
        """
        captions = self.parse(decode_content(content))
        if not captions:
            raise EmptyDocument("WebVTT content contains no cues")

        caption_set = CaptionSet()
        caption_set.set_captions(lang or self.options.default_language, captions)
        logger.info("Read %d WebVTT cues", len(captions))
        return caption_set

    def parse(self, content: str) -> List[Caption]:
        captions: List[Caption] = []
        # None while outside a cue
        pending: Optional[Caption] = None

        for number, raw_line in enumerate(split_lines(content), 1):
            line = raw_line.strip()

            if TIMING_ARROW in line:
                if pending is not None and not pending.is_empty():
                    captions.append(pending)
                start, end = parse_timing_line_vtt(line)
                last_start = captions[-1].start if captions else 0
                self._validate_timings(start, end, last_start, number)
                pending = Caption(start=start, end=end)
            elif not line:
                if pending is not None and not pending.is_empty():
                    captions.append(pending)
                pending = None
            elif pending is not None:
                if not pending.is_empty():
                    pending.nodes.append(LineBreakNode())
                pending.nodes.append(TextNode(content=remove_styles(line)))

        if pending is not None and not pending.is_empty():
            captions.append(pending)

        return captions

    def _validate_timings(self, start: int, end: int, last_start: int, line_number: int) -> None:
        if self.options.ignore_timing_errors:
            return
        if start > end:
            raise InvalidTimingOrder(
                f"Line {line_number}: end timestamp is not greater than start timestamp"
            )
        if start < last_start:
            raise InvalidTimingOrder(
                f"Line {line_number}: start timestamp is earlier than the previous cue's start"
            )
