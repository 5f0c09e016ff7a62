"""Tests for the deterministic rules-based English query translator."""

from __future__ import annotations

import pytest

from src.query.errors import (
    FilterValidationError,
    InvalidQueryError,
    NegativeValueError,
    NoMatchError,
    QueryTranslationError,
)
from src.query.translator import extract_filters, translate


def _filters(query: str) -> dict:
    return translate(query).parsed_filters.as_dict()


def test_translate_single_word_palindromes() -> None:
    result = translate("All single word palindromic strings")
    assert result.original == "All single word palindromic strings"
    assert result.parsed_filters.as_dict() == {"is_palindrome": True, "word_count": 1}


def test_translate_palindrome_keywords() -> None:
    assert _filters("palindrome") == {"is_palindrome": True}
    assert _filters("text that reads the same forwards and backwards") == {"is_palindrome": True}


def test_negative_palindrome_phrasing_overrides_positive() -> None:
    assert _filters("palindrome but not palindrome") == {"is_palindrome": False}
    assert _filters("non-palindrome strings") == {"is_palindrome": False}
    assert _filters("non palindrome strings") == {"is_palindrome": False}


def test_translate_word_count_phrasings() -> None:
    assert _filters("single word string") == {"word_count": 1}
    assert _filters("one word strings") == {"word_count": 1}
    assert _filters("strings with exactly 3 words") == {"word_count": 3}
    assert _filters("2 words") == {"word_count": 2}
    assert _filters("word count of 4") == {"word_count": 4}
    assert _filters("word count is 5") == {"word_count": 5}


def test_strict_bounds_apply_offsets() -> None:
    assert _filters("longer than 5 characters") == {"min_length": 6}
    assert _filters("more than 3 characters") == {"min_length": 4}
    assert _filters("shorter than 5 characters") == {"max_length": 4}
    assert _filters("less than 3 characters") == {"max_length": 2}


def test_inclusive_bounds_keep_value() -> None:
    assert _filters("at least 10 characters") == {"min_length": 10}
    assert _filters("minimum of 2 characters") == {"min_length": 2}
    assert _filters("minimum length of 2") == {"min_length": 2}
    assert _filters("at most 8 characters") == {"max_length": 8}
    assert _filters("maximum of 12 characters") == {"max_length": 12}
    assert _filters("max length of 9") == {"max_length": 9}


def test_length_of_sets_exact_length() -> None:
    assert _filters("length of 7") == {"min_length": 7, "max_length": 7}
    assert _filters("strings of length 5") == {"min_length": 5, "max_length": 5}


def test_first_length_rule_wins() -> None:
    assert _filters("at least 3 characters and at most 10 characters") == {"min_length": 3}


def test_translate_explicit_letter() -> None:
    assert _filters("contains the letter z") == {"contains_character": "z"}
    assert _filters("strings containing the character k") == {"contains_character": "k"}
    assert _filters("strings with the letter Q") == {"contains_character": "q"}
    assert _filters("has the letter m") == {"contains_character": "m"}
    assert _filters("includes the letter x") == {"contains_character": "x"}
    assert _filters('contains the letter "y"') == {"contains_character": "y"}


def test_vowel_shorthand() -> None:
    assert _filters("strings containing the first vowel") == {"contains_character": "a"}
    assert _filters("strings with vowel a") == {"contains_character": "a"}
    assert _filters("strings with the vowel e") == {"contains_character": "e"}
    assert _filters("strings that contain a") == {"contains_character": "a"}


def test_generic_vowel_mention_is_ignored() -> None:
    with pytest.raises(NoMatchError):
        translate("strings with a vowel")


def test_bare_letter_mention() -> None:
    assert _filters("mention of letter k") == {"contains_character": "k"}


def test_explicit_letter_takes_precedence_over_vowel_shorthand() -> None:
    filters = _filters("strings containing the letter z and the first vowel")
    assert filters == {"contains_character": "z"}


def test_translate_combined_query() -> None:
    filters = _filters("palindromic strings that contain the first vowel")
    assert filters == {"is_palindrome": True, "contains_character": "a"}

    filters = _filters("Two word strings longer than 10 characters with the letter e")
    assert filters == {"min_length": 11, "contains_character": "e"}

    filters = _filters("2 word strings longer than 10 characters with the letter e")
    assert filters == {"word_count": 2, "min_length": 11, "contains_character": "e"}


def test_unrecognized_text_is_no_match() -> None:
    with pytest.raises(NoMatchError):
        translate("hello there")


@pytest.mark.parametrize("query", ["", "   ", None, 123])
def test_invalid_query(query: object) -> None:
    with pytest.raises(InvalidQueryError):
        translate(query)


def test_negative_bound_is_a_validation_failure() -> None:
    with pytest.raises(NegativeValueError):
        translate("strings shorter than 0 characters")


def test_error_kinds_are_distinguishable() -> None:
    with pytest.raises(QueryTranslationError) as not_understood:
        translate("hello there")
    with pytest.raises(QueryTranslationError) as contradictory:
        translate("shorter than 0 characters")

    assert not isinstance(not_understood.value, FilterValidationError)
    assert isinstance(contradictory.value, FilterValidationError)


def test_extract_filters_does_not_validate() -> None:
    assert extract_filters("shorter than 0 characters") == {"max_length": -1}
    assert extract_filters("nothing to see") == {}


def test_vowel_a_is_a_plain_phrase_match() -> None:
    assert _filters("strings with the vowel and nothing else") == {"contains_character": "a"}


def test_oversized_number_is_an_invalid_query() -> None:
    query = "longer than " + "9" * 5000 + " characters"
    with pytest.raises(InvalidQueryError):
        translate(query)
    with pytest.raises(InvalidQueryError):
        translate("exactly " + "7" * 5000 + " words")
