import math
import random

import pytest

from lequel.errors import InvalidProfileError
from lequel.profiles import LanguageProfile, build_trigram_profile, normalize_trigram_profile
from lequel.similarity import (
    get_cosine_similarity, identify_language, rank_languages, score_languages,
    select_best_language
)


def test_similarity_sums_shared_trigrams():
    a = {"abc": 0.5, "bcd": 1.5}
    b = {"abc": 2.0, "xyz": 1.0}
    assert get_cosine_similarity(a, b) == 1.0


def test_similarity_without_overlap_is_zero():
    assert get_cosine_similarity({"abc": 1.0}, {"xyz": 1.0}) == 0.0
    assert get_cosine_similarity({}, {"xyz": 1.0}) == 0.0


def test_similarity_is_commutative():
    a = build_trigram_profile(["the cat sat on the mat", "a dog barked"])
    b = build_trigram_profile(["the mat was flat", "cats and dogs"])
    normalize_trigram_profile(a)
    normalize_trigram_profile(b)

    assert get_cosine_similarity(a, b) == get_cosine_similarity(b, a)


def test_self_similarity_beats_subset_profile():
    # All trigrams distinct so every count is 1
    a = build_trigram_profile(["abcdefghijkl"], include_short_windows=False)
    subset = {trigram: count for trigram, count in list(a.items())[:4]}
    normalize_trigram_profile(a)
    normalize_trigram_profile(subset)

    assert get_cosine_similarity(a, a) == pytest.approx(1.0)
    assert get_cosine_similarity(a, a) > get_cosine_similarity(a, subset)


def test_self_similarity_is_invariant_under_line_order():
    lines = ["the quick brown fox", "jumps over", "the lazy dog", "and runs away"]
    shuffled = list(lines)
    random.Random(7).shuffle(shuffled)

    a = build_trigram_profile(lines)
    b = build_trigram_profile(shuffled)
    normalize_trigram_profile(a)
    normalize_trigram_profile(b)

    assert a == b
    assert get_cosine_similarity(a, a) == pytest.approx(get_cosine_similarity(b, b))


def test_identify_single_language():
    languages = [LanguageProfile('en', {"the": 1.0})]
    assert identify_language(["the cat sat"], languages) == 'en'


def test_identify_with_no_languages_is_no_match():
    assert identify_language(["the cat sat"], []) is None
    assert identify_language(["the cat sat"], {}) is None


def test_identify_with_no_shared_trigrams_is_no_match():
    languages = [('es', {"los": 1.0}), ('de', {"die": 1.0})]
    assert identify_language(["the cat sat"], languages) is None


def test_identify_empty_text_is_no_match():
    assert identify_language([], [('en', {"the": 1.0})]) is None
    assert identify_language(["ab"], [('en', {"the": 1.0})], normalize_text_profile=True) is None


def test_equal_scores_keep_earliest_language():
    profile = {"the": 1.0, "cat": 0.5}
    assert identify_language(["the cat"], [('en', profile), ('en-GB', dict(profile))]) == 'en'
    assert identify_language(["the cat"], [('en-GB', dict(profile)), ('en', profile)]) == 'en-GB'


def test_strictly_greater_later_score_wins():
    languages = [('es', {"the": 0.1}), ('en', {"the": 0.9})]
    assert identify_language(["the cat"], languages) == 'en'


def test_identify_accepts_ordered_mapping():
    languages = {'es': {"el ": 1.0}, 'en': {"the": 1.0, "he ": 1.0}}
    assert identify_language(["the end"], languages) == 'en'


def test_identify_accepts_bytes_lines():
    languages = [('es', {"año": 1.0})]
    assert identify_language(["feliz año nuevo".encode('utf-8')], languages) == 'es'


def test_normalizing_text_profile_keeps_the_winner(english_profile, spanish_profile):
    languages = [english_profile, spanish_profile]
    text = ["the weather is nice in the town"]

    raw = identify_language(text, languages)
    scaled = identify_language(text, languages, normalize_text_profile=True)

    assert raw == scaled == 'en'


def test_identify_rejects_malformed_profiles():
    with pytest.raises(InvalidProfileError):
        identify_language(["the cat"], [('en', "the")])


def test_score_languages_keeps_collection_order():
    text_profile = {"the": 2.0, "cat": 1.0}
    languages = [('a', {"cat": 1.0}), ('b', {"the": 1.0}), ('c', {})]

    assert score_languages(text_profile, languages) == [('a', 1.0), ('b', 2.0), ('c', 0.0)]


def test_rank_languages_orders_best_first_and_is_stable():
    text_profile = {"the": 2.0, "cat": 1.0}
    languages = [('a', {"cat": 1.0}), ('b', {"the": 1.0}), ('c', {"cat": 1.0})]

    assert rank_languages(text_profile, languages) == [('b', 2.0), ('a', 1.0), ('c', 1.0)]


def test_select_best_language():
    assert select_best_language([]) is None
    assert select_best_language([('a', 0.0), ('b', 0.0)]) is None
    assert select_best_language([('a', 0.2), ('b', 0.7), ('c', 0.7)]) == ('b', 0.7)


def test_select_best_language_respects_min_score():
    scores = [('a', 0.2), ('b', 0.5)]
    assert select_best_language(scores, min_score=0.5) is None
    assert select_best_language(scores, min_score=0.4) == ('b', 0.5)


def test_nan_score_never_wins():
    languages = [('xx', {"the": math.nan}), ('en', {"the": 1.0})]
    assert identify_language(["the cat"], languages) == 'en'
    assert select_best_language([('xx', math.nan), ('en', 0.5)]) == ('en', 0.5)
    assert select_best_language([('xx', math.nan)]) is None


def test_similarity_overflowing_sum_is_infinite():
    a = {"abc": 1e154, "bcd": 1e154}
    b = {"abc": 1e154, "bcd": 1e154}
    assert get_cosine_similarity(a, b) == math.inf
