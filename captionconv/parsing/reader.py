"""Abstract base class for caption readers."""

from abc import ABC, abstractmethod
from typing import Optional, Union

from ..config import ReaderOptions
from ..models import CaptionSet


class CaptionReader(ABC):
    """
    Abstract base class for caption readers.
    
    A reader turns the decoded text of one document into a fresh CaptionSet.
    Readers hold nothing but their construction-time options, so one
    instance may be shared between callers.
    """
    
    def __init__(self, options: Optional[ReaderOptions] = None):
        self.options = options or ReaderOptions()
    
    @abstractmethod
    def detect(self, content: Union[str, bytes]) -> bool:
        """
        Best-effort check whether the content looks like this reader's format.
        
        Never raises.
        """
        pass
    
    @abstractmethod
    def read(self, content: Union[str, bytes]) -> CaptionSet:
        """
        Parse a whole document.
        
        Args:
            content: Document text, or UTF-8 encoded bytes
            
        Returns:
            A new CaptionSet owned by the caller
            
        Raises:
            CaptionError: If the document cannot be parsed
        """
        pass
    
    def get_reader_name(self) -> str:
        """Return the name of this reader."""
        return self.__class__.__name__


def decode_content(content: Union[str, bytes]) -> str:
    """Return content as text, decoding bytes as UTF-8 and dropping a BOM."""
    if isinstance(content, bytes):
        content = content.decode("utf-8")
    if content.startswith('\ufeff'):
        content = content[1:]
    return content


def split_lines(content: str) -> list[str]:
    """Split text into physical lines, normalizing CRLF and CR endings."""
    content = content.replace('\r\n', '\n').replace('\r', '\n')
    return content.split('\n')
