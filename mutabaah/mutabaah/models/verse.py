"""
Verse data model.
"""
from pydantic import BaseModel, Field


class Verse(BaseModel):
    """
    Represents a single verse of the surah being recited.

    Verses are consumed read-only. Their order in a list is the recitation
    order, which the follow-along controller relies on for lookahead.

    Attributes:
        number: Verse number within the surah (1-based, unique)
        text: The Arabic text of the verse (diacritics allowed)
    """

    number: int = Field(
        ...,
        description="Verse number within the surah (1-based)",
        ge=1,
    )
    text: str = Field(
        ...,
        description="The Arabic text of the verse",
        min_length=1,
    )

    model_config = {
        "frozen": True,
        "json_schema_extra": {
            "examples": [
                {
                    "number": 2,
                    "text": "ٱلْحَمْدُ لِلَّهِ رَبِّ ٱلْعَٰلَمِينَ",
                }
            ]
        },
    }

    def __str__(self) -> str:
        return f"Verse({self.number})"
