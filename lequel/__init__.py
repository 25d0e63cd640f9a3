"""
Lequel: trigram-based natural language identification

Builds character-trigram frequency profiles from text and ranks a set of
reference language profiles by cosine similarity.
"""

__version__ = "1.0.0"

from .errors import DecodeError, EmptyProfileError, InvalidProfileError, LequelError
from .language_identifier import LanguageIdentifier
from .profiles import (
    LanguageProfile, build_language_profile, build_trigram_profile,
    normalize_trigram_profile
)
from .similarity import get_cosine_similarity, identify_language, rank_languages
