"""
Cosine similarity scoring and language ranking.
"""
import logging
import math
from collections.abc import Mapping
from typing import Iterable, List, Optional, Sequence, Tuple

from .preprocessing import Line
from .profiles import (
    LanguageProfiles, build_trigram_profile, iter_language_profiles,
    normalize_trigram_profile
)

logger = logging.getLogger(__name__)


def get_cosine_similarity(text_profile: Mapping, language_profile: Mapping) -> float:
    """
    Dot product of two profiles over the trigrams they share.

    There is no division by the vector magnitudes: both sides are expected
    to have been scaled by ``normalize_trigram_profile`` already. Trigrams
    present on only one side contribute nothing.
    """
    if len(language_profile) < len(text_profile):
        text_profile, language_profile = language_profile, text_profile

    products = [
        weight * language_profile[trigram]
        for trigram, weight in text_profile.items()
        if trigram in language_profile
    ]

    # fsum is exactly rounded, so the result does not depend on iteration order
    try:
        return math.fsum(products)
    except OverflowError:
        # Finite products whose total overflows; plain summation yields +/-inf
        return sum(products)


def score_languages(text_profile: Mapping, languages: LanguageProfiles) -> List[Tuple[str, float]]:
    """Score a text profile against every language, in collection order."""
    scores = []
    for code, profile in iter_language_profiles(languages):
        score = get_cosine_similarity(text_profile, profile)
        logger.debug(f"Similarity with '{code}': {score:.6f}")
        scores.append((code, score))

    return scores


def select_best_language(scores: Sequence[Tuple[str, float]],
                         min_score: float = 0.0) -> Optional[Tuple[str, float]]:
    """
    Pick the winning (code, score) pair.

    A language wins only with a score strictly greater than ``min_score``
    and than every earlier language; among equal top scores the first one
    in collection order is kept. NaN scores never win. Returns None when
    nothing qualifies.
    """
    best = None
    best_score = min_score

    for code, score in scores:
        if score > best_score:
            best = (code, score)
            best_score = score

    return best


def rank_languages(text_profile: Mapping, languages: LanguageProfiles) -> List[Tuple[str, float]]:
    """Scores sorted from best to worst; equal scores keep collection order."""
    return sorted(score_languages(text_profile, languages), key=lambda item: -item[1])


def identify_language(text: Iterable[Line],
                      languages: LanguageProfiles,
                      normalize_text_profile: bool = False,
                      include_short_windows: bool = True) -> Optional[str]:
    """
    Identify the most probable language of a text.

    Args:
        text: Ordered sequence of lines
        languages: Normalized language profiles, in tie-break order
        normalize_text_profile: Scale the text profile like the language
            profiles before scoring. Off by default: the ranking is the
            same either way, only the scores change.
        include_short_windows: Count the trailing short windows of each line

    Returns:
        The winning language code, or None when no language scores above zero
    """
    text_profile = build_trigram_profile(text, include_short_windows)

    if normalize_text_profile and text_profile:
        normalize_trigram_profile(text_profile)

    best = select_best_language(score_languages(text_profile, languages))
    if best is None:
        logger.debug("No language scored above zero")
        return None

    return best[0]
