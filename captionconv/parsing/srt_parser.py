"""SRT subtitle file parser."""

import re
from typing import List, Optional, Union

from ..errors import EmptyDocument
from ..models import Caption, CaptionSet, LineBreakNode, TextNode
from ..timestamps import parse_timing_line_srt
from ..utils.logger import get_logger
from .reader import CaptionReader, decode_content, split_lines

logger = get_logger(__name__)

SRT_TIMING_LINE_RE = re.compile(r"^\s*\d+:\d{2}:\d{2},\d{3}\s*-->\s*\d+:\d{2}:\d{2},\d{3}", re.MULTILINE)


class SRTReader(CaptionReader):
    """
    Reader for SubRip (SRT) content.

    SRT format:
    ```
    1
    00:00:01,000 --> 00:00:04,000
    First subtitle text

    2
    00:00:05,000 --> 00:00:08,000
    Second subtitle
    with multiple lines
    ```
    """

    def detect(self, content: Union[str, bytes]) -> bool:
        try:
            text = decode_content(content)
        except UnicodeDecodeError:
            return False
        return SRT_TIMING_LINE_RE.search(text) is not None

    def read(self, content: Union[str, bytes], lang: Optional[str] = None) -> CaptionSet:
        """
        Parse SRT content into a caption set.

        Args:
            content: Raw SRT file content
            lang: Language key for the captions (defaults to the configured one)

        Returns:
            CaptionSet holding one language

        Raises:
            MalformedTimestamp: If a cue's timing line cannot be parsed
            EmptyDocument: If no cue was found
        """
        captions = parse_srt(decode_content(content))
        if not captions:
            raise EmptyDocument("SRT content contains no cues")

        caption_set = CaptionSet()
        caption_set.set_captions(lang or self.options.default_language, captions)
        logger.info("Read %d SRT cues", len(captions))
        return caption_set


def parse_srt(content: str) -> List[Caption]:
    """
    Scan SRT lines into captions.

    Outside a cue, a lone integer is the cue counter and the next non-blank
    line must be the timing line. Inside a cue every non-blank line is text,
    including numeric ones; a blank line closes the cue.
    """
    captions: List[Caption] = []
    pending: Optional[Caption] = None
    counter_seen = False

    for raw_line in split_lines(content):
        line = raw_line.strip()

        if pending is None:
            if not line:
                continue
            if line.isdigit() and not counter_seen:
                counter_seen = True
                continue
            start, end = parse_timing_line_srt(line)
            pending = Caption(start=start, end=end)
            counter_seen = False
            continue

        if not line:
            captions.append(pending)
            pending = None
            continue

        if pending.nodes:
            pending.nodes.append(LineBreakNode())
        pending.nodes.append(TextNode(content=line))

    if pending is not None:
        captions.append(pending)

    return captions
