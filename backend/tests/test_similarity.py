import pytest

from faqih.services.similarity import edit_distance, similarity


def test_edit_distance():
    assert edit_distance("kitten", "sitting") == 3
    assert edit_distance("", "abc") == 3
    assert edit_distance("اجهاض", "اجهاض") == 0
    assert edit_distance("اجهاض", "اسقاط") == 3


@pytest.mark.parametrize("word", ["a", "dialysis", "انعاش"])
def test_identical_words_are_fully_similar(word):
    assert similarity(word, word) == 1.0


def test_empty_strings_are_identical():
    assert similarity("", "") == 1.0


def test_empty_against_non_empty():
    assert similarity("", "abc") == 0.0


def test_unrelated_words_score_low():
    assert similarity("abc", "xyz") <= 0.34


def test_similarity_is_relative_to_longest_word():
    assert similarity("kitten", "sitting") == pytest.approx(1 - 3 / 7)
    assert similarity("sitting", "kitten") == similarity("kitten", "sitting")
