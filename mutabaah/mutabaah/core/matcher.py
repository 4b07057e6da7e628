"""
Transcript-to-verse matching.

This module scores how well a (noisy, partial) recognizer transcript lines
up with a verse, and picks the best verse out of a small candidate window.

Matching is word based and order sensitive. A transcript may carry a few
filler or misrecognized words between genuine verse words, and the user may
start reciting anywhere in the transcript buffer, so the verse is aligned
from every start offset while a bounded number of noise words is skipped.
When the transcript picks the verse up mid-way (the recognizer dropped its
opening words), the walk may also enter the verse where the first
transcript word of the attempt occurs.
"""

from typing import Sequence

from mutabaah.config import FollowAlongSettings, get_settings
from mutabaah.core.arabic import normalize_arabic, word_count
from mutabaah.models import MatchResult, Verse


def _align_from(
    transcript_words: list[str],
    verse_words: list[str],
    start: int,
    max_noise_words: int,
    verse_start: int = 0,
) -> int:
    """
    Walk the verse words against the transcript starting at ``start``.

    The walk enters the verse at ``verse_start``. Returns the number of verse
    words matched before the verse or the transcript ran out, or before more
    than ``max_noise_words`` transcript words had to be skipped.
    """
    matches = 0
    noise = 0
    t_idx = start
    v_idx = verse_start

    while v_idx < len(verse_words) and t_idx < len(transcript_words):
        if transcript_words[t_idx] == verse_words[v_idx]:
            matches += 1
            t_idx += 1
            v_idx += 1
        elif noise < max_noise_words:
            t_idx += 1
            noise += 1
        else:
            break

    return matches


def score(
    transcript: str,
    verse_text: str,
    settings: FollowAlongSettings | None = None,
) -> float:
    """
    Score how well a transcript aligns with a verse.

    Returns a ratio between 0.0 (nothing aligned) and 1.0 (exact match).
    A transcript that contains the whole verse (speech running past the end
    of the verse) scores ``settings.containment_score``. A verse containing
    the transcript is deliberately not special-cased, so a lone common word
    only scores its share of the verse.

    Args:
        transcript: Text from the speech recognizer
        verse_text: Reference verse text
        settings: Matching settings (default settings when omitted)

    Returns:
        Alignment score between 0.0 and 1.0

    Examples:
        >>> score("بسم الله الرحمن الرحيم", "بِسْمِ اللَّهِ الرَّحْمَٰنِ الرَّحِيمِ")
        1.0
        >>> score("رب العالمين", "الحمد لله رب العالمين")
        0.5
    """
    settings = settings or get_settings()

    normalized_transcript = normalize_arabic(transcript)
    normalized_verse = normalize_arabic(verse_text)

    if not normalized_transcript or not normalized_verse:
        return 0.0

    if normalized_transcript == normalized_verse:
        return 1.0

    if normalized_verse in normalized_transcript:
        return settings.containment_score

    transcript_words = normalized_transcript.split(" ")
    verse_words = normalized_verse.split(" ")

    first_position: dict[str, int] = {}
    for position, word in enumerate(verse_words):
        first_position.setdefault(word, position)

    best = 0.0
    for start in range(len(transcript_words)):
        # Enter the verse at its first word, and also where this transcript
        # word first occurs in it (recitation picked up mid-verse).
        entries = {0, first_position.get(transcript_words[start], 0)}
        for verse_start in entries:
            matches = _align_from(
                transcript_words,
                verse_words,
                start,
                settings.max_noise_words,
                verse_start,
            )
            best = max(best, matches / len(verse_words))
        if best >= 1.0:
            break

    return best


def verse_threshold(verse: Verse, settings: FollowAlongSettings | None = None) -> float:
    """
    Minimum score a verse must reach to be accepted as a match.

    Short verses need a larger share of their words matched, otherwise common
    short phrases would produce accidental partial hits.
    """
    settings = settings or get_settings()
    if word_count(verse.text) < settings.short_verse_word_count:
        return settings.short_verse_threshold
    return settings.long_verse_threshold


def find_best_match(
    transcript: str,
    candidates: Sequence[Verse],
    settings: FollowAlongSettings | None = None,
) -> MatchResult | None:
    """
    Find the candidate verse that best matches the transcript.

    Each candidate is scored and kept only if it reaches its own threshold
    (see ``verse_threshold``). The highest score wins; on a tie the earlier
    candidate is kept, so a window listing the current verse first favors
    staying on it.

    Args:
        transcript: Text from the speech recognizer
        candidates: Verses to consider, in recitation order
        settings: Matching settings (default settings when omitted)

    Returns:
        MatchResult for the winning verse, or None if no candidate qualifies
    """
    settings = settings or get_settings()
    best: MatchResult | None = None

    for verse in candidates:
        similarity = score(transcript, verse.text, settings)
        if similarity < verse_threshold(verse, settings):
            continue
        if best is None or similarity > best.confidence:
            best = MatchResult(verse=verse, confidence=similarity)

    return best
