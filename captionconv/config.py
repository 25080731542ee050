"""Reader configuration."""

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_LANGUAGE = "en-US"


class ReaderOptions(BaseModel):
    """Construction-time options shared by all caption readers."""
    model_config = ConfigDict(frozen=True)
    
    ignore_timing_errors: bool = Field(
        default=False,
        description="Accept cues whose timing is out of order instead of failing",
    )
    default_language: str = Field(
        default=DEFAULT_LANGUAGE,
        description="Language key used when the document does not declare one",
    )
