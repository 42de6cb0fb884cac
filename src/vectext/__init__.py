"""
vectext - deterministic term-frequency and TF-IDF vectorization of text corpora.
"""

__version__ = "1.0.0"

from vectext.exceptions import (
    ConfigurationError,
    EmptyVocabularyError,
    NotFittedError,
    VectorizerError,
)
from vectext.features import (
    CountVectorizer,
    TfidfConfig,
    TfidfTransformer,
    TfidfVectorizer,
    Vectorizer,
    VectorizerConfig,
    create_vectorizer,
)

__all__ = [
    'ConfigurationError',
    'EmptyVocabularyError',
    'NotFittedError',
    'VectorizerError',
    'CountVectorizer',
    'TfidfConfig',
    'TfidfTransformer',
    'TfidfVectorizer',
    'Vectorizer',
    'VectorizerConfig',
    'create_vectorizer',
]
