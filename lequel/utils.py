"""
Utility functions for the language identification pipeline.
"""
from typing import Dict, Iterable, Tuple


# Language codes and their full names
LANGUAGE_CODES = {
    'ar': 'Arabic',
    'bg': 'Bulgarian',
    'cs': 'Czech',
    'da': 'Danish',
    'de': 'German',
    'el': 'Greek',
    'en': 'English',
    'es': 'Spanish',
    'fi': 'Finnish',
    'fr': 'French',
    'he': 'Hebrew',
    'hi': 'Hindi',
    'hu': 'Hungarian',
    'it': 'Italian',
    'ja': 'Japanese',
    'ko': 'Korean',
    'nl': 'Dutch',
    'no': 'Norwegian',
    'pl': 'Polish',
    'pt': 'Portuguese',
    'ro': 'Romanian',
    'ru': 'Russian',
    'sv': 'Swedish',
    'tr': 'Turkish',
    'uk': 'Ukrainian',
    'zh': 'Chinese'
}


def language_name(code: str) -> str:
    """Return the English name of a language code, or the code itself if unknown."""
    return LANGUAGE_CODES.get(code, code)


def calculate_confidence_scores(scores: Iterable[Tuple[str, float]]) -> Dict[str, float]:
    """Turn similarity scores into each language's share of the positive total.

    Languages scoring zero or less get no share. Returns an empty dict
    when nothing scores above zero.
    """
    positive = {code: score for code, score in scores if score > 0}
    total = sum(positive.values())
    if total <= 0:
        return {}

    return {code: score / total for code, score in positive.items()}
