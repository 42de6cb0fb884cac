"""
Pluggable text processing used by the vectorizers.

The vectorizers only depend on the two capabilities defined here:
`Preprocessor.normalize(str) -> str` and `Tokenizer.tokenize(str) -> List[str]`.
Concrete implementations are provided for convenience; none of them is used
unless the caller passes it in.
"""

from abc import ABC, abstractmethod
import re
from typing import Callable, FrozenSet, List, Optional, Union

import nltk
from nltk.stem import PorterStemmer, WordNetLemmatizer


def _ensure_nltk_resource(path: str, package: str) -> None:
    try:
        nltk.data.find(path)
    except LookupError:
        nltk.download(package, quiet=True)


class Preprocessor(ABC):
    @abstractmethod
    def normalize(self, text: str) -> str:
        pass

    def __call__(self, text: str) -> str:
        return self.normalize(text)


class Tokenizer(ABC):
    @abstractmethod
    def tokenize(self, text: str) -> List[str]:
        pass

    def __call__(self, text: str) -> List[str]:
        return self.tokenize(text)


class FunctionPreprocessor(Preprocessor):
    """Adapts a plain `str -> str` callable."""

    def __init__(self, func: Callable[[str], str]):
        self.func = func

    def normalize(self, text: str) -> str:
        return self.func(text)

    def __repr__(self):
        return f"FunctionPreprocessor({getattr(self.func, '__name__', self.func)!r})"


class FunctionTokenizer(Tokenizer):
    """Adapts a plain `str -> sequence of str` callable."""

    def __init__(self, func: Callable[[str], List[str]]):
        self.func = func

    def tokenize(self, text: str) -> List[str]:
        return list(self.func(text))

    def __repr__(self):
        return f"FunctionTokenizer({getattr(self.func, '__name__', self.func)!r})"


# Preprocessors

class IdentityPreprocessor(Preprocessor):
    def normalize(self, text: str) -> str:
        return text


class LowercasePreprocessor(Preprocessor):
    def normalize(self, text: str) -> str:
        return text.lower()


class CleanTextPreprocessor(Preprocessor):
    """Drops non-alphanumeric characters, collapses whitespace and lowercases."""

    def __init__(self, lowercase: bool = True):
        self.lowercase = lowercase

    def normalize(self, text: str) -> str:
        text = re.sub(r'[^a-zA-Z0-9\s]', '', text)
        text = re.sub(r'\s+', ' ', text).strip()
        return text.lower() if self.lowercase else text


# Tokenizers

class WhitespaceTokenizer(Tokenizer):
    def tokenize(self, text: str) -> List[str]:
        return text.split()


class RegexTokenizer(Tokenizer):
    """Returns every match of `pattern`, in document order."""

    def __init__(self, pattern: str = r"(?u)\b\w\w+\b"):
        self.pattern = pattern
        self._regex = re.compile(pattern)

    def tokenize(self, text: str) -> List[str]:
        return self._regex.findall(text)


class StemmingTokenizer(Tokenizer):
    """Whitespace tokenizer followed by the Porter stemmer."""

    def __init__(self):
        self.stemmer = PorterStemmer()

    def tokenize(self, text: str) -> List[str]:
        return [self.stemmer.stem(word) for word in text.split()]


class LemmatizingTokenizer(Tokenizer):
    """Whitespace tokenizer followed by the WordNet lemmatizer."""

    def __init__(self):
        _ensure_nltk_resource('corpora/wordnet', 'wordnet')
        self.lemmatizer = WordNetLemmatizer()

    def tokenize(self, text: str) -> List[str]:
        return [self.lemmatizer.lemmatize(word) for word in text.split()]


PreprocessorLike = Union[Preprocessor, Callable[[str], str]]
TokenizerLike = Union[Tokenizer, Callable[[str], List[str]]]


def as_preprocessor(obj: Optional[PreprocessorLike]) -> Optional[Preprocessor]:
    if obj is None or isinstance(obj, Preprocessor):
        return obj
    if callable(obj):
        return FunctionPreprocessor(obj)
    raise TypeError(f"Preprocessor must be callable, got {type(obj).__name__}")


def as_tokenizer(obj: Optional[TokenizerLike]) -> Optional[Tokenizer]:
    if obj is None or isinstance(obj, Tokenizer):
        return obj
    if callable(obj):
        return FunctionTokenizer(obj)
    raise TypeError(f"Tokenizer must be callable, got {type(obj).__name__}")


# Stop words

KNOWN_STOP_WORD_LISTS = ('english',)


def load_stop_words(name: str) -> FrozenSet[str]:
    """Load a named stop-word list from the NLTK stopwords corpus."""
    if name not in KNOWN_STOP_WORD_LISTS:
        raise ValueError(f"Unknown stop word list: {name}")

    _ensure_nltk_resource('corpora/stopwords', 'stopwords')
    from nltk.corpus import stopwords
    return frozenset(stopwords.words(name))


# Factory methods to create processors based on config

def create_preprocessor(preprocessor_type: str, **kwargs) -> Preprocessor:
    if preprocessor_type == 'identity':
        return IdentityPreprocessor()
    elif preprocessor_type == 'lowercase':
        return LowercasePreprocessor()
    elif preprocessor_type == 'clean':
        return CleanTextPreprocessor(**kwargs)
    else:
        raise ValueError(f"Unsupported preprocessor type: {preprocessor_type}")


def create_tokenizer(tokenizer_type: str, **kwargs) -> Tokenizer:
    if tokenizer_type == 'whitespace':
        return WhitespaceTokenizer()
    elif tokenizer_type == 'regex':
        return RegexTokenizer(**kwargs)
    elif tokenizer_type == 'stemming':
        return StemmingTokenizer()
    elif tokenizer_type == 'lemmatization':
        return LemmatizingTokenizer()
    else:
        raise ValueError(f"Unsupported tokenizer type: {tokenizer_type}")
