"""Timestamp parsing and formatting shared by every caption format.

All timestamps are carried as integer microseconds.
"""

import re
from typing import Tuple

from .errors import MalformedTimestamp

MICROSECONDS_PER_SECOND = 1_000_000
MICROSECONDS_PER_MILLISECOND = 1_000

SRT_TIMESTAMP_RE = re.compile(r"(\d+):(\d{2}):(\d{2}),(\d{3})")
DFXP_CLOCK_TIME_RE = re.compile(r"(\d+):(\d{2}):(\d{2})(?:\.(\d+))?")
DFXP_OFFSET_TIME_RE = re.compile(r"(\d+(?:\.\d+)?)(h|m|s|ms)")
VTT_TIMESTAMP_RE = re.compile(r"(?:(\d+):)?(\d{2}):(\d{2})\.(\d{3})")

TIMING_ARROW = "-->"

_OFFSET_UNITS = {
    "h": 3600 * MICROSECONDS_PER_SECOND,
    "m": 60 * MICROSECONDS_PER_SECOND,
    "s": MICROSECONDS_PER_SECOND,
    "ms": MICROSECONDS_PER_MILLISECOND,
}


def parse_timestamp_srt(timestamp: str) -> int:
    """
    Parse SRT timestamp format (HH:MM:SS,mmm) to microseconds.

    Args:
        timestamp: Timestamp string in format "HH:MM:SS,mmm"

    Returns:
        Time in microseconds

    Raises:
        MalformedTimestamp: If timestamp format is invalid
    """
    match = SRT_TIMESTAMP_RE.fullmatch(timestamp.strip())
    if not match:
        raise MalformedTimestamp(f"Invalid SRT timestamp format: {timestamp!r}")

    hours, minutes, seconds, millis = (int(group) for group in match.groups())
    return (
        (hours * 3600 + minutes * 60 + seconds) * MICROSECONDS_PER_SECOND
        + millis * MICROSECONDS_PER_MILLISECOND
    )


def parse_timestamp_dfxp(timestamp: str) -> int:
    """
    Parse a DFXP/TTML time expression to microseconds.

    Accepts clock time (``HH:MM:SS.mmm``, where the fraction is decimal
    seconds of any precision, so ``0:00:02.07`` is 2.07s) and offset time
    (``12.5s``, ``300ms``, ``1h``).

    Raises:
        MalformedTimestamp: If the expression matches neither form
    """
    value = timestamp.strip()

    match = DFXP_CLOCK_TIME_RE.fullmatch(value)
    if match:
        hours, minutes, seconds, fraction = match.groups()
        # Fraction digits beyond microsecond precision are dropped
        micros = int((fraction or "")[:6].ljust(6, "0"))
        return (
            (int(hours) * 3600 + int(minutes) * 60 + int(seconds)) * MICROSECONDS_PER_SECOND
            + micros
        )

    match = DFXP_OFFSET_TIME_RE.fullmatch(value)
    if match:
        amount, unit = match.groups()
        return int(round(float(amount) * _OFFSET_UNITS[unit]))

    raise MalformedTimestamp(f"Invalid DFXP timestamp format: {timestamp!r}")


def parse_timestamp_vtt(timestamp: str) -> int:
    """
    Parse VTT timestamp format (HH:MM:SS.mmm or MM:SS.mmm) to microseconds.

    Fields are combined as floats so that the conversion mirrors
    ``(h*3600 + m*60 + s) * 1e6 + ms * 1e3``.

    Raises:
        MalformedTimestamp: If timestamp format is invalid
    """
    match = VTT_TIMESTAMP_RE.fullmatch(timestamp.strip())
    if not match:
        raise MalformedTimestamp(f"Invalid VTT timestamp format: {timestamp!r}")

    hours, minutes, seconds, millis = match.groups()
    total = (
        (float(hours or 0) * 3600 + float(minutes) * 60 + float(seconds)) * MICROSECONDS_PER_SECOND
        + float(millis) * MICROSECONDS_PER_MILLISECOND
    )
    return int(round(total))


def _format_timestamp(us: int, separator: str) -> str:
    if us < 0:
        raise ValueError(f"Cannot format negative timestamp: {us}")

    ms = us // MICROSECONDS_PER_MILLISECOND
    hours = ms // 3600000
    ms %= 3600000
    minutes = ms // 60000
    ms %= 60000
    seconds = ms // 1000
    millis = ms % 1000

    return f"{hours:02d}:{minutes:02d}:{seconds:02d}{separator}{millis:03d}"


def format_timestamp_srt(us: int) -> str:
    """Format microseconds to SRT timestamp format (HH:MM:SS,mmm)."""
    return _format_timestamp(us, ",")


def format_timestamp_dfxp(us: int) -> str:
    """Format microseconds to DFXP clock time (HH:MM:SS.mmm)."""
    return _format_timestamp(us, ".")


def format_timestamp_vtt(us: int) -> str:
    """Format microseconds to VTT timestamp format (HH:MM:SS.mmm)."""
    return _format_timestamp(us, ".")


def format_timestamp(us: int, fmt: str) -> str:
    """Format microseconds for the given caption format name (srt, vtt, dfxp)."""
    if fmt == "srt":
        return format_timestamp_srt(us)
    if fmt == "vtt":
        return format_timestamp_vtt(us)
    if fmt == "dfxp":
        return format_timestamp_dfxp(us)
    raise ValueError(f"Unknown caption format: {fmt!r}")


def _split_timing_line(line: str) -> Tuple[str, str]:
    parts = line.split(TIMING_ARROW)
    if len(parts) != 2:
        raise MalformedTimestamp(f"Invalid timing line: {line!r}")
    return parts[0].strip(), parts[1].strip()


def parse_timing_line_srt(line: str) -> Tuple[int, int]:
    """
    Parse SRT timing line (start --> end).

    Args:
        line: Timing line in format "HH:MM:SS,mmm --> HH:MM:SS,mmm"

    Returns:
        Tuple of (start_us, end_us)

    Raises:
        MalformedTimestamp: If timing line format is invalid
    """
    start, end = _split_timing_line(line)
    return parse_timestamp_srt(start), parse_timestamp_srt(end)


def parse_timing_line_vtt(line: str) -> Tuple[int, int]:
    """
    Parse VTT timing line (start --> end), ignoring optional cue settings.

    Args:
        line: Timing line in format "HH:MM:SS.mmm --> HH:MM:SS.mmm [settings]"

    Returns:
        Tuple of (start_us, end_us)

    Raises:
        MalformedTimestamp: If timing line format is invalid
    """
    start, end = _split_timing_line(line)

    # End time might have cue settings after it, separated by space
    end_parts = end.split()
    if not start or not end_parts:
        raise MalformedTimestamp(f"Invalid timing line: {line!r}")

    return parse_timestamp_vtt(start), parse_timestamp_vtt(end_parts[0])


__all__ = [
    "parse_timestamp_srt",
    "parse_timestamp_dfxp",
    "parse_timestamp_vtt",
    "format_timestamp",
    "format_timestamp_srt",
    "format_timestamp_dfxp",
    "format_timestamp_vtt",
    "parse_timing_line_srt",
    "parse_timing_line_vtt",
]
