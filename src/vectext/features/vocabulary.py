"""
Vocabulary construction.

A vocabulary is a dict term -> column index whose indices are exactly
0..len-1. Where it comes from is a tagged choice:

- `Learned()`: discovered from the fitting corpus, terms sorted
  lexicographically so the result does not depend on document order
  or on how the corpus was chunked.
- `Fixed(terms)`: supplied by the caller and used as-is.
"""

import logging
from collections.abc import Mapping, Set
from dataclasses import dataclass
from numbers import Integral
from typing import Any, Dict, Iterable, Union

from vectext.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Learned:
    pass


@dataclass(frozen=True)
class Fixed:
    terms: Dict[str, int]


VocabularyMode = Union[Learned, Fixed]


def validate_vocabulary(vocabulary: Any) -> Dict[str, int]:
    """
    Turn a caller-supplied vocabulary into a term -> index dict.

    Mappings must already use the indices 0..n-1. Sequences are enumerated
    in the given order; sets are sorted first since they carry no order.
    """
    if isinstance(vocabulary, str):
        raise ConfigurationError("vocabulary must be a mapping or a collection of terms, not a string")

    if isinstance(vocabulary, Mapping):
        terms = dict(vocabulary)
        for term, index in terms.items():
            if isinstance(index, bool) or not isinstance(index, Integral):
                raise ConfigurationError(f"Index of term {term!r} must be an integer, got {index!r}")
        indices = [int(index) for index in terms.values()]
        if len(set(indices)) != len(indices):
            raise ConfigurationError("Vocabulary contains repeated indices")
        missing = set(range(len(indices))) - set(indices)
        if missing:
            raise ConfigurationError(f"Vocabulary of size {len(indices)} doesn't contain index {min(missing)}")
        terms = {term: int(index) for term, index in terms.items()}
    else:
        try:
            sequence = sorted(vocabulary) if isinstance(vocabulary, Set) else list(vocabulary)
        except TypeError:
            raise ConfigurationError(
                f"vocabulary must be a mapping or a collection of terms, got {type(vocabulary).__name__}"
            ) from None
        terms = {}
        for term in sequence:
            if term in terms:
                raise ConfigurationError(f"Duplicate term in vocabulary: {term!r}")
            terms[term] = len(terms)

    if not terms:
        raise ConfigurationError("Empty vocabulary passed")
    if not all(isinstance(term, str) for term in terms):
        raise ConfigurationError("Vocabulary terms must be strings")
    return terms


def vocabulary_mode(vocabulary: Any) -> VocabularyMode:
    if vocabulary is None:
        return Learned()
    return Fixed(validate_vocabulary(vocabulary))


class VocabularyBuilder:
    """Builds the vocabulary for a corpus with the given analyzer."""

    def __init__(self, analyzer):
        self.analyzer = analyzer

    def build(self, corpus: Iterable[str], mode: VocabularyMode) -> Dict[str, int]:
        if isinstance(mode, Fixed):
            return dict(mode.terms)
        elif isinstance(mode, Learned):
            return self.learn(corpus)
        else:
            raise TypeError(f"Unknown vocabulary mode: {mode!r}")

    def learn(self, corpus: Iterable[str]) -> Dict[str, int]:
        distinct = set()
        n_documents = 0
        for document in corpus:
            distinct.update(self.analyzer(document))
            n_documents += 1

        vocabulary = {term: index for index, term in enumerate(sorted(distinct))}
        logger.debug("Learned %d terms from %d documents", len(vocabulary), n_documents)
        return vocabulary
