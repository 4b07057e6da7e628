"""
Core modules for Mutabaah library.

This package contains the pure matching logic:
- Arabic text normalization
- Transcript-to-verse scoring
- Best-match selection over a candidate window

Primary API:
    from mutabaah.core import find_best_match

    match = find_best_match(transcript, verses[:5])
    if match:
        print(match.verse.number, match.confidence)
"""

from mutabaah.core.arabic import normalize_arabic, word_count
from mutabaah.core.matcher import find_best_match, score, verse_threshold

__all__ = [
    "normalize_arabic",
    "word_count",
    "score",
    "verse_threshold",
    "find_best_match",
]
