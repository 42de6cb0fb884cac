"""
Features module - Core vectorization logic.

For file-based feature generation workflows, use `vectext.features.pipeline`.
"""

from .config import VectorizerConfig, TfidfConfig
from .ngrams import expand_ngrams, pad_sequence
from .vocabulary import Fixed, Learned, VocabularyBuilder
from .encoder import CountEncoder, document_frequency
from .selection import FeatureSelector, SelectionResult
from .tfidf import TfidfTransformer
from .vectorizer import (
    Vectorizer,
    CountVectorizer,
    TfidfVectorizer,
    create_vectorizer
)

__all__ = [
    'VectorizerConfig',
    'TfidfConfig',
    'expand_ngrams',
    'pad_sequence',
    'Fixed',
    'Learned',
    'VocabularyBuilder',
    'CountEncoder',
    'document_frequency',
    'FeatureSelector',
    'SelectionResult',
    'TfidfTransformer',
    'Vectorizer',
    'CountVectorizer',
    'TfidfVectorizer',
    'create_vectorizer'
]
