"""
Surah context model.
"""

from pydantic import BaseModel, Field


class Surah(BaseModel):
    """
    Identifies the surah a follow-along session is reciting.

    Attributes:
        id: Surah number (1-114)
        name: Transliterated name of the surah
        name_arabic: Arabic name of the surah
    """

    id: int = Field(
        ...,
        description="Surah number (1-114)",
        ge=1,
        le=114,
    )
    name: str = Field(
        default="Unknown",
        description="Transliterated name of the surah",
    )
    name_arabic: str = Field(
        default="",
        description="Arabic name of the surah",
    )

    model_config = {
        "frozen": True,
        "json_schema_extra": {
            "examples": [
                {
                    "id": 1,
                    "name": "Al-Fatiha",
                    "name_arabic": "الفاتحة",
                }
            ]
        },
    }

    def __str__(self) -> str:
        return f"Surah {self.id}: {self.name_arabic or self.name}"
