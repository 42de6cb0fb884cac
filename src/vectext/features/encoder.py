"""
Count encoding: corpus + vocabulary -> term-frequency matrix.

Each document is encoded independently into (doc_index, vocab_index, count)
triples, so documents can be split into chunks and encoded in parallel.
Triples are placed by their indices, never by completion order, which keeps
the resulting matrix identical for every chunking.
"""

import logging
import math
from collections import Counter
from typing import List, Mapping, Optional, Sequence, Tuple

import numpy as np
from joblib import Parallel, delayed, effective_n_jobs
from scipy import sparse

from vectext.features.analyzer import Analyzer

logger = logging.getLogger(__name__)

Triples = Tuple[np.ndarray, np.ndarray, np.ndarray]


def document_frequency(tf: sparse.spmatrix) -> np.ndarray:
    """Number of rows with a positive count, per column."""
    tf = sparse.csr_matrix(tf)
    return np.bincount(tf.indices[tf.data > 0], minlength=tf.shape[1]).astype(np.int64)


class CountEncoder:
    """
    Encodes documents into a sparse (n_documents x n_terms) count matrix.

    Out-of-vocabulary terms are dropped silently. With `binary=True` every
    positive count is clamped to 1.
    """

    def __init__(
        self,
        analyzer: Analyzer,
        binary: bool = False,
        n_jobs: int = 1,
        chunk_size: Optional[int] = None,
    ):
        self.analyzer = analyzer
        self.binary = binary
        self.n_jobs = n_jobs
        self.chunk_size = chunk_size

    def encode(
        self,
        corpus: Sequence[str],
        vocabulary: Mapping[str, int],
    ) -> Tuple[sparse.csr_matrix, np.ndarray]:
        """Return (tf_matrix, df_vector) for the corpus."""
        documents = list(corpus)
        shape = (len(documents), len(vocabulary))

        results = self._run_chunks(documents, vocabulary)

        if results:
            rows = np.concatenate([r for r, _, _ in results])
            cols = np.concatenate([c for _, c, _ in results])
            counts = np.concatenate([v for _, _, v in results])
        else:
            rows = cols = counts = np.empty(0, dtype=np.int64)

        tf = sparse.csr_matrix((counts, (rows, cols)), shape=shape, dtype=np.int64)
        tf.sum_duplicates()

        if self.binary:
            tf = (tf > 0).astype(np.int64)

        df = document_frequency(tf)
        logger.debug("Encoded %d documents into %s matrix (nnz=%d)", shape[0], shape, tf.nnz)
        return tf, df

    def _run_chunks(self, documents: List[str], vocabulary: Mapping[str, int]) -> List[Triples]:
        chunks = self._chunk_bounds(len(documents))

        if len(chunks) <= 1 or self.n_jobs == 1:
            return [
                self.encode_chunk(start, documents[start:stop], vocabulary)
                for start, stop in chunks
            ]

        return Parallel(n_jobs=self.n_jobs, prefer="threads")(
            delayed(self.encode_chunk)(start, documents[start:stop], vocabulary)
            for start, stop in chunks
        )

    def _chunk_bounds(self, n_documents: int) -> List[Tuple[int, int]]:
        if n_documents == 0:
            return []

        chunk_size = self.chunk_size
        if chunk_size is None:
            chunk_size = math.ceil(n_documents / effective_n_jobs(self.n_jobs))

        return [
            (start, min(start + chunk_size, n_documents))
            for start in range(0, n_documents, chunk_size)
        ]

    def encode_chunk(
        self,
        start: int,
        documents: Sequence[str],
        vocabulary: Mapping[str, int],
    ) -> Triples:
        """Encode documents[start:start+len(documents)] into triples."""
        rows, cols, counts = [], [], []

        for offset, document in enumerate(documents):
            term_counts = Counter(self.analyzer(document))
            for term, count in term_counts.items():
                index = vocabulary.get(term)
                if index is None:
                    continue
                rows.append(start + offset)
                cols.append(index)
                counts.append(count)

        return (
            np.asarray(rows, dtype=np.int64),
            np.asarray(cols, dtype=np.int64),
            np.asarray(counts, dtype=np.int64),
        )
