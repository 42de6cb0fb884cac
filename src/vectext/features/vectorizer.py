from abc import ABC, abstractmethod
from dataclasses import dataclass
import logging
from typing import Any, Dict, FrozenSet, Iterable, List, Optional, Tuple, Union

import numpy as np
from scipy import sparse

from vectext.exceptions import ConfigurationError, NotFittedError
from vectext.features.analyzer import Analyzer
from vectext.features.config import TfidfConfig, VectorizerConfig
from vectext.features.encoder import CountEncoder
from vectext.features.selection import FeatureSelector, SelectionResult
from vectext.features.text import (
    PreprocessorLike,
    TokenizerLike,
    as_preprocessor,
    as_tokenizer,
    create_preprocessor,
    create_tokenizer,
)
from vectext.features.tfidf import TfidfTransformer
from vectext.features.vocabulary import Fixed, VocabularyBuilder

logger = logging.getLogger(__name__)

Matrix = Union[sparse.csr_matrix, np.ndarray]


def _as_documents(documents: Iterable[str]) -> List[str]:
    if isinstance(documents, str):
        raise ValueError("Iterable over raw text documents expected, string object received")
    return list(documents)


@dataclass(frozen=True)
class FittedState:
    """
    Everything fit produces. Installed with a single assignment, so a reader
    holding one instance never sees a vocabulary and an idf from different fits.
    """

    vocabulary: Dict[str, int]
    pruned_terms: FrozenSet[str] = frozenset()
    transformer: Optional[TfidfTransformer] = None


class Vectorizer(ABC):
    config_class = VectorizerConfig

    def __init__(
        self,
        preprocessor: Optional[PreprocessorLike] = None,
        tokenizer: Optional[TokenizerLike] = None,
        config: Optional[VectorizerConfig] = None,
        **kwargs
    ):
        try:
            preprocessor = as_preprocessor(preprocessor)
            tokenizer = as_tokenizer(tokenizer)
        except TypeError as e:
            raise ConfigurationError(str(e)) from e
        if preprocessor is None or tokenizer is None:
            raise ConfigurationError("Both a preprocessor and a tokenizer must be supplied")

        if config is None:
            config = self.config_class.from_dict(kwargs)
        elif kwargs:
            raise ConfigurationError("Pass either a config object or keyword options, not both")
        elif not isinstance(config, self.config_class):
            raise ConfigurationError(
                f"{type(self).__name__} expects a {self.config_class.__name__}, got {type(config).__name__}"
            )

        self._config = config
        self.preprocessor = preprocessor
        self.tokenizer = tokenizer

        self._state: Optional[FittedState] = None

    @abstractmethod
    def fit(self, documents) -> 'Vectorizer': pass

    @abstractmethod
    def transform(self, documents) -> Matrix: pass

    def fit_transform(self, documents) -> Matrix:
        return self.fit(documents).transform(documents)

    @property
    def vocabulary(self) -> Optional[Dict[str, int]]:
        state = self._state
        return None if state is None else dict(state.vocabulary)

    @property
    def feature_names(self) -> Optional[List[str]]:
        state = self._state
        if state is None:
            return None
        return sorted(state.vocabulary, key=state.vocabulary.get)

    @property
    def pruned_terms(self) -> FrozenSet[str]:
        state = self._state
        return frozenset() if state is None else state.pruned_terms

    @property
    def is_fitted(self) -> bool:
        return self._state is not None

    @property
    def config(self) -> Dict[str, Any]:
        return self._config.to_dict()

    def __repr__(self):
        name = self.__class__.__name__
        return f"{name}(fitted={self.is_fitted}, config={self._config})"


class CountVectorizer(Vectorizer):
    """Term-frequency vectorizer: learns (or validates) a vocabulary, then counts."""

    def __init__(self, preprocessor=None, tokenizer=None, config=None, **kwargs):
        super().__init__(preprocessor, tokenizer, config, **kwargs)

        cfg = self._config
        self.analyzer = Analyzer(
            self.preprocessor,
            self.tokenizer,
            ngram_range=cfg.ngram_range,
            stop_words=cfg.resolved_stop_words(),
        )
        self.builder = VocabularyBuilder(self.analyzer)
        self.encoder = CountEncoder(
            self.analyzer,
            binary=cfg.binary,
            n_jobs=cfg.n_jobs,
            chunk_size=cfg.chunk_size,
        )
        self.selector = FeatureSelector(
            max_df=cfg.max_df,
            min_df=cfg.min_df,
            max_features=cfg.max_features,
        )

    def _fit_counts(self, documents) -> SelectionResult:
        """Build, count and prune without touching the fitted state."""
        documents = _as_documents(documents)
        cfg = self._config

        vocabulary = self.builder.build(documents, cfg.vocabulary_mode)
        tf, df = self.encoder.encode(documents, vocabulary)

        if cfg.prunes_vocabulary:
            return self.selector.select(vocabulary, tf, df)
        return SelectionResult(tf=tf, vocabulary=vocabulary, pruned_terms=frozenset())

    def _fitted_state(self, result: SelectionResult) -> FittedState:
        return FittedState(vocabulary=result.vocabulary, pruned_terms=result.pruned_terms)

    def _fit(self, documents) -> Tuple[FittedState, sparse.csr_matrix]:
        result = self._fit_counts(documents)
        state = self._fitted_state(result)

        self._state = state
        logger.info(
            "Fitted %s: %d terms, %d pruned",
            type(self).__name__, len(state.vocabulary), len(state.pruned_terms),
        )
        return state, result.tf

    def _snapshot(self) -> FittedState:
        """The state a transform works against from start to finish."""
        state = self._state
        if state is not None:
            return state
        if isinstance(self._config.vocabulary_mode, Fixed):
            return FittedState(vocabulary=self._config.vocabulary_mode.terms)
        raise NotFittedError(f"{type(self).__name__} must be fitted before transformation")

    def _encode(self, documents, state: FittedState) -> Tuple[sparse.csr_matrix, np.ndarray]:
        return self.encoder.encode(_as_documents(documents), state.vocabulary)

    def _output(self, matrix: sparse.csr_matrix) -> Matrix:
        return matrix.toarray() if self._config.dense_output else matrix

    def fit(self, documents) -> 'CountVectorizer':
        """
        Learn the vocabulary of the documents (or adopt the fixed one) and
        prune it. A failed fit leaves the previous state in place.
        """
        self._fit(documents)
        return self

    def count(self, documents) -> Tuple[sparse.csr_matrix, np.ndarray]:
        """Return (tf_matrix, df_vector) for the documents with the current vocabulary."""
        return self._encode(documents, self._snapshot())

    def transform(self, documents) -> Matrix:
        """
        Count vocabulary terms per document. Terms not in the vocabulary are ignored.
        """
        tf, _ = self.count(documents)
        return self._output(tf)

    def fit_transform(self, documents) -> Matrix:
        _, tf = self._fit(documents)
        return self._output(tf)


class TfidfVectorizer(CountVectorizer):
    """TF-IDF vectorizer: CountVectorizer followed by TfidfTransformer weighting."""

    config_class = TfidfConfig

    def __init__(self, preprocessor=None, tokenizer=None, config=None, **kwargs):
        """
        Configurable parameters include everything CountVectorizer accepts and:
            - use_idf: Whether to scale columns by inverse document frequency
            - smooth_idf: Add one to document counts to avoid zero divisions
            - sublinear_tf: Whether to apply sublinear TF scaling (ln(tf) + 1)
            - norm: Row normalisation, None, 'l1' or 'l2'
        """
        super().__init__(preprocessor, tokenizer, config, **kwargs)

    def _new_transformer(self) -> TfidfTransformer:
        cfg = self._config
        return TfidfTransformer(
            use_idf=cfg.use_idf,
            smooth_idf=cfg.smooth_idf,
            sublinear_tf=cfg.sublinear_tf,
            norm=cfg.norm,
        )

    def _fitted_state(self, result: SelectionResult) -> FittedState:
        return FittedState(
            vocabulary=result.vocabulary,
            pruned_terms=result.pruned_terms,
            transformer=self._new_transformer().fit(result.tf),
        )

    def _weighting(self, state: FittedState) -> TfidfTransformer:
        if state.transformer is not None:
            return state.transformer
        if self._config.use_idf:
            raise NotFittedError("TfidfVectorizer must be fitted before transformation")
        return self._new_transformer()

    def transform(self, documents) -> Matrix:
        """
        Transform documents to TF-IDF vectors. Raises NotFittedError if idf
        weighting is enabled and the vectorizer was never fitted.
        """
        state = self._snapshot()
        transformer = self._weighting(state)

        tf, _ = self._encode(documents, state)
        return self._output(transformer.transform(tf))

    def fit_transform(self, documents) -> Matrix:
        state, tf = self._fit(documents)
        return self._output(state.transformer.transform(tf))

    @property
    def idf(self) -> Optional[np.ndarray]:
        state = self._state
        if state is None or state.transformer is None:
            return None
        return state.transformer.idf


def _resolve_processor(value, factory):
    if value is None or callable(value):
        return value
    if isinstance(value, str):
        return factory(value)
    if isinstance(value, dict):
        return factory(value.get('type'), **value.get('params', {}))
    raise ConfigurationError(f"Cannot build a text processor from {value!r}")


def create_vectorizer(
    vectorizer_type: str,
    preprocessor=None,
    tokenizer=None,
    **kwargs
) -> Vectorizer:
    """
    Factory function to create vectorizer instances based on type.

    `preprocessor` and `tokenizer` may be objects, callables, registered names
    ('lowercase', 'whitespace', ...) or {'type': ..., 'params': {...}} dicts.
    """
    try:
        preprocessor = _resolve_processor(preprocessor, create_preprocessor)
        tokenizer = _resolve_processor(tokenizer, create_tokenizer)
    except ValueError as e:
        raise ConfigurationError(str(e)) from e

    if vectorizer_type == 'count':
        return CountVectorizer(preprocessor, tokenizer, **kwargs)
    elif vectorizer_type == 'tfidf':
        return TfidfVectorizer(preprocessor, tokenizer, **kwargs)
    else:
        raise ConfigurationError(f"Unknown vectorizer type: {vectorizer_type}")
