"""
Document-frequency based feature pruning.
"""

import logging
from dataclasses import dataclass
from numbers import Integral
from typing import Dict, FrozenSet, Mapping, Optional, Union

import numpy as np
from scipy import sparse

from vectext.exceptions import EmptyVocabularyError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SelectionResult:
    tf: sparse.csr_matrix
    vocabulary: Dict[str, int]
    pruned_terms: FrozenSet[str]


def resolve_document_count(value: Optional[Union[int, float]], n_documents: int) -> Optional[float]:
    """Ints are absolute document counts, floats are proportions of n_documents."""
    if value is None:
        return None
    if isinstance(value, Integral):
        return value
    return value * n_documents


class FeatureSelector:
    """
    Prunes a vocabulary and its count matrix.

    Terms are kept when min_df <= df <= max_df. If more than max_features
    terms remain, the ones with the highest total count across the corpus are
    kept, ties going to the lower original index. Survivors keep their relative
    order and are re-indexed from 0.
    """

    def __init__(
        self,
        max_df: Optional[Union[int, float]] = None,
        min_df: Optional[Union[int, float]] = None,
        max_features: Optional[int] = None,
    ):
        self.max_df = max_df
        self.min_df = min_df
        self.max_features = max_features

    def select(
        self,
        vocabulary: Mapping[str, int],
        tf: sparse.spmatrix,
        df: np.ndarray,
    ) -> SelectionResult:
        tf = sparse.csr_matrix(tf)
        n_documents, n_terms = tf.shape

        if n_terms == 0:
            return SelectionResult(tf=tf, vocabulary=dict(vocabulary), pruned_terms=frozenset())

        max_count = resolve_document_count(self.max_df, n_documents)
        min_count = resolve_document_count(self.min_df, n_documents)

        mask = np.ones(n_terms, dtype=bool)
        if max_count is not None:
            mask &= df <= max_count
        if min_count is not None:
            mask &= df >= min_count

        if self.max_features is not None and mask.sum() > self.max_features:
            totals = np.asarray(tf.sum(axis=0)).ravel()
            candidates = np.flatnonzero(mask)
            order = np.argsort(-totals[candidates], kind="stable")
            mask = np.zeros(n_terms, dtype=bool)
            mask[candidates[order[:self.max_features]]] = True

        new_vocabulary = {}
        pruned_terms = set()
        for term, index in sorted(vocabulary.items(), key=lambda item: item[1]):
            if mask[index]:
                new_vocabulary[term] = len(new_vocabulary)
            else:
                pruned_terms.add(term)

        if not new_vocabulary:
            raise EmptyVocabularyError(
                "After pruning, no terms remain: min_df/max_df are too restrictive. "
                "Try a lower min_df or a higher max_df."
            )

        kept = np.flatnonzero(mask)
        logger.info("Kept %d of %d terms (%d pruned)", len(kept), n_terms, len(pruned_terms))

        return SelectionResult(
            tf=tf[:, kept],
            vocabulary=new_vocabulary,
            pruned_terms=frozenset(pruned_terms),
        )
