"""
Arabic text normalization utilities.

This module provides functions for normalizing Arabic text, which is essential
for comparing recognizer transcripts against reference verse text regardless
of diacritics and letter-style variants.
"""

import re


# Tashkeel, superscript alef and Quranic annotation marks.
# Small waw/yeh (U+06E5, U+06E6) are letters and stay.
DIACRITICS_PATTERN = re.compile(
    r"[\u0610-\u061A\u064B-\u065F\u0670\u06D6-\u06DC\u06DF-\u06E4\u06E7\u06E8\u06EA-\u06ED]"
)

TATWEEL = "\u0640"

# Alef with hamza above/below, alef with madda, alef wasla
ALEF_VARIANTS_PATTERN = re.compile(r"[أإآٱ]")

TEH_MARBUTA = "ة"
HEH = "ه"


def normalize_arabic(text: str) -> str:
    """
    Normalize Arabic text for comparison.

    Performs the following normalizations, in order:
    - Remove Arabic diacritics (tashkeel) and Quranic annotation marks
    - Remove tatweel (ـ)
    - Replace alef variants (أ إ آ ٱ) with plain alef (ا)
    - Replace ta marbuta (ة) with ha (ه)
    - Collapse whitespace runs and strip

    Args:
        text: Arabic text to normalize

    Returns:
        Normalized text string

    Examples:
        >>> normalize_arabic("بِسْمِ اللَّهِ الرَّحْمَٰنِ الرَّحِيمِ")
        'بسم الله الرحمن الرحيم'
        >>> normalize_arabic("أَعُوذُ")
        'اعوذ'
    """
    if not text:
        return ""

    text = DIACRITICS_PATTERN.sub("", text)
    text = text.replace(TATWEEL, "")
    text = ALEF_VARIANTS_PATTERN.sub("ا", text)
    text = text.replace(TEH_MARBUTA, HEH)

    return re.sub(r"\s+", " ", text).strip()


def normalized_words(text: str) -> list[str]:
    """Split text into normalized words."""
    normalized = normalize_arabic(text)
    if not normalized:
        return []
    return normalized.split(" ")


def word_count(text: str) -> int:
    """
    Count Arabic words in text.

    Args:
        text: Arabic text

    Returns:
        Number of words after normalization
    """
    return len(normalized_words(text))
