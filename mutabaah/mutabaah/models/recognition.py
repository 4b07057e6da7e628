"""
Speech recognition event model.
"""

from pydantic import BaseModel, Field


class RecognitionResult(BaseModel):
    """
    A single (possibly partial) result delivered by the speech recognizer.

    The transcript is cumulative for the current utterance. Partial results
    are matched eagerly; is_final does not gate matching.
    """

    transcript: str = Field(
        ...,
        description="Recognized text so far for the current utterance",
    )
    is_final: bool = Field(
        default=False,
        description="Whether the recognizer considers this result final",
    )
    confidence: float = Field(
        default=0.8,
        description="Recognizer confidence (platforms that report none get 0.8)",
        ge=0.0,
        le=1.0,
    )

    def __str__(self) -> str:
        state = "final" if self.is_final else "partial"
        return f"RecognitionResult({state}, {len(self.transcript.split())} words)"
