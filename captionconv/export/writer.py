"""Abstract base class for caption writers."""

from abc import ABC, abstractmethod
from typing import List, Optional

from ..models import Caption, CaptionSet


class CaptionWriter(ABC):
    """
    Abstract base class for caption writers.
    
    Writers serialize a CaptionSet without modifying it.
    """
    
    @abstractmethod
    def write(self, caption_set: CaptionSet) -> bytes:
        """
        Serialize a caption set.
        
        Returns:
            The document encoded as UTF-8
        """
        pass
    
    def get_writer_name(self) -> str:
        """Return the name of this writer."""
        return self.__class__.__name__


def select_captions(caption_set: CaptionSet, lang: Optional[str] = None) -> List[Caption]:
    """Captions of one language, defaulting to the first language of the set."""
    if lang is None:
        languages = caption_set.get_languages()
        if not languages:
            return []
        lang = languages[0]
    return caption_set.get_captions(lang)
