"""
Main language identification pipeline integrating all components.
"""
import logging
from typing import Dict, Iterable, List, Mapping, Optional

from .errors import InvalidProfileError
from .preprocessing import Line
from .profiles import (
    LanguageProfile, LanguageProfiles, build_language_profile,
    build_trigram_profile, iter_language_profiles, normalize_trigram_profile
)
from .similarity import score_languages, select_best_language
from .utils import calculate_confidence_scores

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


class LanguageIdentifier:
    """
    Trigram-based language identification over a set of language profiles.

    Language profiles are kept in insertion order, which is also the
    tie-break order: when two languages score the same, the one added
    first wins.
    """

    def __init__(self,
                 languages: Optional[LanguageProfiles] = None,
                 include_short_windows: bool = True,
                 normalize_text_profile: bool = False,
                 min_score: float = 0.0):

        self.include_short_windows = include_short_windows
        self.normalize_text_profile = normalize_text_profile
        self.min_score = min_score

        self._profiles: Dict[str, Mapping] = {}
        if languages is not None:
            for code, profile in iter_language_profiles(languages):
                if code in self._profiles:
                    raise InvalidProfileError(f"Duplicate language code: '{code}'")
                self.add_language(code, profile)

        logger.info(f"Language identifier initialized with {len(self._profiles)} languages")

    def __len__(self) -> int:
        return len(self._profiles)

    def __contains__(self, code: str) -> bool:
        return code in self._profiles

    @property
    def languages(self) -> List[str]:
        return list(self._profiles)

    @property
    def profiles(self) -> List[LanguageProfile]:
        return [LanguageProfile(code, profile) for code, profile in self._profiles.items()]

    def add_language(self, code: str, profile: Mapping):
        """Register an already normalized language profile.

        Re-adding a code replaces its profile but keeps its original position.
        """
        # Validate through the same path used for bulk profiles
        for code, profile in iter_language_profiles([(code, profile)]):
            self._profiles[code] = profile

    def train_language(self, code: str, text: Iterable[Line]) -> LanguageProfile:
        """Build a normalized profile from a reference corpus and register it."""
        language = build_language_profile(code, text, self.include_short_windows)
        self.add_language(language.code, language.profile)
        logger.info(f"Trained profile for '{code}' with {len(language.profile)} trigrams")
        return language

    def remove_language(self, code: str):
        if code not in self._profiles:
            raise InvalidProfileError(f"Unknown language code: '{code}'")
        del self._profiles[code]

    def identify(self, text: Iterable[Line]) -> Optional[str]:
        """Return the most probable language code, or None if nothing matches."""
        return self.predict(text)['language']

    def predict(self, text: Iterable[Line]) -> Dict:
        """
        Identify the language of a text.

        Args:
            text: Ordered sequence of lines (str or UTF-8 bytes)

        Returns:
            Dictionary with the winning language and per-language scores
        """
        if not self._profiles:
            logger.warning("No language profiles loaded. Every text will be unmatched.")

        text_profile = build_trigram_profile(text, self.include_short_windows)
        total_trigrams = int(sum(text_profile.values()))
        if self.normalize_text_profile and text_profile:
            normalize_trigram_profile(text_profile)

        scores = score_languages(text_profile, self._profiles)
        best = select_best_language(scores, self.min_score)

        return {
            'language': best[0] if best else None,
            'score': best[1] if best else 0.0,
            'is_match': best is not None,
            'scores': scores,
            'confidences': calculate_confidence_scores(scores),
            'num_trigrams': len(text_profile),
            'total_trigrams': total_trigrams
        }

    def predict_batch(self, texts: Iterable[Iterable[Line]]) -> List[Dict]:
        """Predict every text independently."""
        results = []
        for i, text in enumerate(texts):
            results.append(self.predict(text))
            logger.debug(f"Processed text {i + 1}")
        return results
