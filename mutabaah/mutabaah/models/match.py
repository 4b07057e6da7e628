"""
Match result data model.
"""

from pydantic import BaseModel, Field, computed_field

from mutabaah.models.verse import Verse


class MatchResult(BaseModel):
    """
    Result of matching a transcript against candidate verses.

    Produced per transcript event and never persisted.

    Attributes:
        verse: The best matching verse
        confidence: Alignment score between transcript and verse (0.0-1.0)
    """

    verse: Verse = Field(
        ...,
        description="The best matching verse",
    )
    confidence: float = Field(
        ...,
        description="Alignment score between transcript and verse (0.0-1.0)",
        ge=0.0,
        le=1.0,
    )

    @computed_field
    @property
    def is_exact(self) -> bool:
        """Whether the transcript matched the verse word for word."""
        return self.confidence >= 1.0

    def __str__(self) -> str:
        return f"MatchResult(verse={self.verse.number}, confidence={self.confidence:.2f})"
