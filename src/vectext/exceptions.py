"""
Errors raised by the vectorization pipeline.
"""

from sklearn.exceptions import NotFittedError as SklearnNotFittedError


class VectorizerError(Exception):
    """Base class for all vectorizer errors."""


class ConfigurationError(VectorizerError, ValueError):
    """Invalid option value or combination of options."""


class NotFittedError(VectorizerError, SklearnNotFittedError):
    """A fitted-state dependent operation was called before `fit`."""


class EmptyVocabularyError(VectorizerError, ValueError):
    """Pruning removed every term from the vocabulary."""
