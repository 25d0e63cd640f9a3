"""
Trigram profile building and normalization.

A trigram profile maps every window of 3 consecutive code points found in
a text to a weight: a raw occurrence count straight out of
``build_trigram_profile``, or a scaled frequency after
``normalize_trigram_profile``.
"""
import logging
import math
from collections.abc import Mapping
from typing import Dict, Iterable, Iterator, List, NamedTuple, Tuple, Union

from .errors import EmptyProfileError, InvalidProfileError
from .preprocessing import Line, LinePreprocessor

logger = logging.getLogger(__name__)

TRIGRAM_LENGTH = 3

TrigramProfile = Dict[str, float]


class LanguageProfile(NamedTuple):
    """A language code paired with its (normalized) trigram profile."""
    code: str
    profile: Mapping


LanguageProfiles = Union[Mapping, Iterable[Tuple[str, Mapping]]]


def extract_trigrams(line: str, include_short_windows: bool = True) -> Iterator[str]:
    """Yield the trigram windows of a single decoded line.

    Lines shorter than 3 code points yield nothing. With
    ``include_short_windows`` the window keeps sliding over the last two
    offsets, yielding the clamped 2- and 1-code-point tails as keys of
    their own; existing language profiles were built that way.
    """
    if len(line) < TRIGRAM_LENGTH:
        return

    last_start = len(line) if include_short_windows else len(line) - TRIGRAM_LENGTH + 1
    for i in range(last_start):
        yield line[i:i + TRIGRAM_LENGTH]


def build_trigram_profile(text: Iterable[Line], include_short_windows: bool = True) -> TrigramProfile:
    """
    Build a trigram profile from a text.

    Args:
        text: Ordered sequence of lines (str or UTF-8 bytes)
        include_short_windows: Count the trailing short windows of each line

    Returns:
        Mapping from trigram to raw occurrence count

    Raises:
        DecodeError: If a line is not valid Unicode
    """
    preprocessor = LinePreprocessor()
    profile: TrigramProfile = {}

    for line in preprocessor.preprocess(text):
        for trigram in extract_trigrams(line, include_short_windows):
            profile[trigram] = profile.get(trigram, 0.0) + 1.0

    return profile


def normalize_trigram_profile(profile: TrigramProfile) -> None:
    """Scale every count in place by the square root of the total count.

    This is not L2 normalization (that would use the sum of squared
    counts). Language profiles in circulation were scaled this way, so the
    transform must stay as is for scores to remain comparable.

    Raises:
        EmptyProfileError: If the profile has zero total weight
    """
    total = math.fsum(profile.values())
    if not total > 0:
        raise EmptyProfileError(f"Cannot normalize a profile with total weight {total}")

    scale = math.sqrt(total)
    for trigram in profile:
        profile[trigram] /= scale


def build_language_profile(code: str, text: Iterable[Line], include_short_windows: bool = True) -> LanguageProfile:
    """Build a normalized language profile from a reference corpus."""
    if not code:
        raise InvalidProfileError("Language code must be a non-empty string")

    profile = build_trigram_profile(text, include_short_windows)
    normalize_trigram_profile(profile)

    logger.debug(f"Built profile for '{code}' with {len(profile)} trigrams")
    return LanguageProfile(code, profile)


def merge_trigram_profiles(*profiles: Mapping) -> TrigramProfile:
    """Add up the raw counts of several profiles into a new one."""
    merged: TrigramProfile = {}
    for profile in profiles:
        for trigram, count in profile.items():
            merged[trigram] = merged.get(trigram, 0.0) + count

    return merged


def top_trigrams(profile: Mapping, limit: int = 10) -> List[Tuple[str, float]]:
    """Return the heaviest trigrams, ties broken by trigram text."""
    if limit < 0:
        raise ValueError("limit must be non-negative")

    return sorted(profile.items(), key=lambda item: (-item[1], item[0]))[:limit]


def iter_language_profiles(languages: LanguageProfiles) -> Iterator[LanguageProfile]:
    """Yield LanguageProfile pairs in collection order, validating each one.

    Accepts an ordered mapping of code -> profile or an iterable of
    (code, profile) pairs.
    """
    items = languages.items() if isinstance(languages, Mapping) else languages

    for item in items:
        try:
            code, profile = item
        except (TypeError, ValueError) as e:
            raise InvalidProfileError(f"Expected a (code, profile) pair, got {item!r}") from e

        if not isinstance(code, str) or not code:
            raise InvalidProfileError(f"Language code must be a non-empty string, got {code!r}")
        if not isinstance(profile, Mapping):
            raise InvalidProfileError(f"Profile for '{code}' must be a mapping, got {type(profile).__name__}")

        yield LanguageProfile(code, profile)
