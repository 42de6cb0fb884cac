"""
TF-IDF weighting of count matrices.

    idf[j] = ln((n + s) / (df[j] + s)) + 1,  s = 1 if smooth_idf else 0

With smooth_idf every idf value is positive, even for terms that never occur.
"""

import logging
from typing import Optional

import numpy as np
from scipy import sparse
from sklearn.preprocessing import normalize

from vectext.exceptions import NotFittedError
from vectext.features.encoder import document_frequency

logger = logging.getLogger(__name__)


def compute_idf(df: np.ndarray, n_documents: int, smooth_idf: bool = True) -> np.ndarray:
    smoothing = 1 if smooth_idf else 0
    df = np.asarray(df, dtype=np.float64)
    with np.errstate(divide='ignore', invalid='ignore'):
        return np.log((n_documents + smoothing) / (df + smoothing)) + 1.0


class TfidfTransformer:
    """Learns an idf vector from a count matrix and applies TF-IDF weighting."""

    def __init__(
        self,
        use_idf: bool = True,
        smooth_idf: bool = True,
        sublinear_tf: bool = False,
        norm: Optional[str] = 'l2',
    ):
        self.use_idf = use_idf
        self.smooth_idf = smooth_idf
        self.sublinear_tf = sublinear_tf
        self.norm = norm
        self._idf: Optional[np.ndarray] = None

    def fit(self, tf: sparse.spmatrix, df: Optional[np.ndarray] = None) -> 'TfidfTransformer':
        if not self.use_idf:
            self._idf = None
            return self

        if df is None:
            df = document_frequency(tf)
        n_documents = tf.shape[0]
        self._idf = compute_idf(df, n_documents, self.smooth_idf)
        logger.debug("Fitted idf for %d terms over %d documents", len(self._idf), n_documents)
        return self

    def transform(self, tf: sparse.spmatrix) -> sparse.csr_matrix:
        """
        Weight a count matrix. Sublinear scaling replaces t > 0 with ln(t) + 1,
        then columns are scaled by idf and rows normalised. All-zero rows stay zero.
        """
        X = sparse.csr_matrix(tf, dtype=np.float64, copy=True)
        X.eliminate_zeros()

        if self.sublinear_tf:
            np.log(X.data, out=X.data)
            X.data += 1.0

        if self.use_idf:
            if self._idf is None:
                raise NotFittedError("idf vector is not fitted; call fit before transform")
            n_terms = X.shape[1]
            if n_terms != len(self._idf):
                raise ValueError(
                    f"Input has {n_terms} features, but the idf vector was fitted on {len(self._idf)}"
                )
            X.data *= self._idf[X.indices]

        if self.norm is not None and X.nnz:
            X = normalize(X, norm=self.norm, copy=False)

        return sparse.csr_matrix(X)

    def fit_transform(self, tf: sparse.spmatrix, df: Optional[np.ndarray] = None) -> sparse.csr_matrix:
        return self.fit(tf, df).transform(tf)

    @property
    def idf(self) -> Optional[np.ndarray]:
        return None if self._idf is None else self._idf.copy()

    @property
    def is_fitted(self) -> bool:
        return self._idf is not None

    def __repr__(self):
        return (
            f"TfidfTransformer(use_idf={self.use_idf}, smooth_idf={self.smooth_idf}, "
            f"sublinear_tf={self.sublinear_tf}, norm={self.norm!r})"
        )
