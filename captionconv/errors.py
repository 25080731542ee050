"""Exceptions raised while reading and writing caption documents."""

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .models import CaptionSet


class CaptionError(ValueError):
    """Base class for every caption parsing/serialization error."""
    pass


class MalformedTimestamp(CaptionError):
    """A timing field does not match its format's grammar."""
    pass


class InvalidTimingOrder(CaptionError):
    """A cue ends before it starts, or starts before the previous cue."""
    pass


class StructuralError(CaptionError):
    """The document root or body could not be located."""
    pass


class UnsupportedFormat(CaptionError):
    """No reader recognised the content."""
    pass


class EmptyDocument(CaptionError):
    """
    The input was readable but produced no captions.
    
    Readers that manage to build a caption set before noticing it is empty
    attach it as ``caption_set`` so callers can still inspect the styles and
    regions that were discovered.
    """
    
    def __init__(self, message: str = "empty caption file", caption_set: Optional["CaptionSet"] = None):
        super().__init__(message)
        self.caption_set = caption_set
