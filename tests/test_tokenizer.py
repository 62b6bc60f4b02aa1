import pytest

from topology.tokenizer import is_stopword, shingles, tokenize, word_ngrams


def test_tokenize_basic():
    assert tokenize("Hello World! This is a test.") == ["hello", "world", "test"]


def test_tokenize_filters_short():
    assert tokenize("I am a x y z developer") == ["am", "developer"]


def test_tokenize_empty_string():
    assert tokenize("") == []


def test_tokenize_only_stopwords():
    assert tokenize("the is a of to in for on with at by") == []


def test_tokenize_unicode():
    assert tokenize("café résumé naïve") == ["café", "résumé", "naïve"]


def test_tokenize_mixed_case():
    assert tokenize("Rust PLUGIN NuShell") == ["rust", "plugin", "nushell"]


def test_tokenize_punctuation_stripped():
    tokens = tokenize("hello, world! great.")
    assert "hello" in tokens
    assert "world" in tokens
    assert "great" in tokens


def test_is_stopword():
    assert is_stopword("the")
    assert is_stopword("also")
    assert not is_stopword("rust")


def test_shingles_basic():
    assert shingles("hello", 3) == ["hel", "ell", "llo"]


def test_shingles_short_text():
    assert shingles("hi", 3) == ["hi"]


def test_shingles_empty_string():
    assert shingles("", 3) == [""]


def test_shingles_exact_length():
    assert shingles("abc", 3) == ["abc"]


def test_shingles_n_one():
    assert shingles("abc", 1) == ["a", "b", "c"]


def test_shingles_lowercases():
    assert shingles("ABc", 2) == ["ab", "bc"]


def test_shingles_zero_rejected():
    with pytest.raises(ValueError):
        shingles("abc", 0)


def test_word_ngrams_basic():
    assert word_ngrams(["rust", "plugin", "system"], 2) == ["rust plugin", "plugin system"]


def test_word_ngrams_single_token():
    assert word_ngrams(["rust"], 2) == ["rust"]


def test_word_ngrams_empty():
    assert word_ngrams([], 2) == [""]


def test_word_ngrams_trigrams():
    assert word_ngrams(["a", "b", "c", "d"], 3) == ["a b c", "b c d"]