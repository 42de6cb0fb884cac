import pytest

from vectext.features.analyzer import Analyzer
from vectext.features.text import LowercasePreprocessor, WhitespaceTokenizer


@pytest.fixture
def corpus():
    return [
        "This is the first document",
        "This document is the second document",
        "And this is the third one",
        "Is this the first document",
    ]


@pytest.fixture
def unigram_vocabulary():
    return {
        "and": 0, "document": 1, "first": 2, "is": 3, "one": 4,
        "second": 5, "the": 6, "third": 7, "this": 8,
    }


@pytest.fixture
def unigram_counts():
    return [
        [0, 1, 1, 1, 0, 0, 1, 0, 1],
        [0, 2, 0, 1, 0, 1, 1, 0, 1],
        [1, 0, 0, 1, 1, 0, 1, 1, 1],
        [0, 1, 1, 1, 0, 0, 1, 0, 1],
    ]


@pytest.fixture
def make_analyzer():
    def _make(ngram_range=(1, 1), stop_words=frozenset()):
        return Analyzer(LowercasePreprocessor(), WhitespaceTokenizer(), ngram_range, stop_words)
    return _make
