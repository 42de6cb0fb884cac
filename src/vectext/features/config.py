"""
Configuration objects for the vectorizers.

All validation happens on construction so that an invalid option fails
before any document is processed.
"""

from dataclasses import dataclass, field, fields
from numbers import Integral, Real
from typing import Any, Dict, FrozenSet, Optional, Tuple, Union

from vectext.exceptions import ConfigurationError
from vectext.features.text import KNOWN_STOP_WORD_LISTS, load_stop_words
from vectext.features.vocabulary import Fixed, Learned, VocabularyMode, vocabulary_mode

DEFAULT_MIN_DF = 1
DEFAULT_MAX_DF = 1.0

NORMS = (None, 'l1', 'l2')

DocumentFrequency = Union[int, float]


def _check_df(name: str, value: Any) -> None:
    if isinstance(value, bool):
        raise ConfigurationError(f"{name} must be an int or a float, got bool")
    if isinstance(value, Integral):
        if value < 0:
            raise ConfigurationError(f"{name} must be >= 0 as an absolute count, got {value}")
    elif isinstance(value, Real):
        if not 0.0 <= value <= 1.0:
            raise ConfigurationError(f"{name} must be in [0.0, 1.0] as a proportion, got {value}")
    else:
        raise ConfigurationError(f"{name} must be an int or a float, got {type(value).__name__}")


def _check_positive_int(name: str, value: Any) -> None:
    if isinstance(value, bool) or not isinstance(value, Integral) or value < 1:
        raise ConfigurationError(f"{name} must be a positive integer, got {value!r}")


@dataclass
class VectorizerConfig:
    """
    Options shared by every vectorizer.

    - ngram_range: (min_n, max_n), both >= 1 and min_n <= max_n
    - max_features: keep only the most frequent terms (None for all)
    - min_df / max_df: document frequency bounds, ints are absolute document
      counts and floats are proportions of the corpus
    - binary: clamp every positive count to 1
    - stop_words: collection of terms to drop, or a known list name ('english')
    - vocabulary: fixed term -> index mapping, or a sequence/set of terms
    - prune_fixed_vocabulary: whether df/max_features bounds apply to a fixed
      vocabulary. Must be True or False when a fixed vocabulary is combined
      with non-default bounds. Left as None with default bounds, a fixed
      vocabulary is never pruned, so terms that occur in no document keep
      their column (default min_df=1 would otherwise drop them)
    - n_jobs / chunk_size: parallel document encoding
    - dense_output: return numpy arrays instead of CSR matrices
    """

    ngram_range: Tuple[int, int] = (1, 1)
    max_features: Optional[int] = None
    min_df: DocumentFrequency = DEFAULT_MIN_DF
    max_df: DocumentFrequency = DEFAULT_MAX_DF
    binary: bool = False
    stop_words: Optional[Union[str, FrozenSet[str]]] = None
    vocabulary: Optional[Any] = None
    prune_fixed_vocabulary: Optional[bool] = None
    n_jobs: int = 1
    chunk_size: Optional[int] = None
    dense_output: bool = False

    vocabulary_mode: VocabularyMode = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        self._validate_ngram_range()

        if self.max_features is not None:
            _check_positive_int('max_features', self.max_features)
        _check_df('min_df', self.min_df)
        _check_df('max_df', self.max_df)

        self._validate_stop_words()

        if isinstance(self.n_jobs, bool) or not isinstance(self.n_jobs, Integral) or self.n_jobs == 0:
            raise ConfigurationError(f"n_jobs must be a non-zero integer, got {self.n_jobs!r}")
        if self.chunk_size is not None:
            _check_positive_int('chunk_size', self.chunk_size)

        self.vocabulary_mode = vocabulary_mode(self.vocabulary)
        self._validate_fixed_pruning()

    def _validate_ngram_range(self) -> None:
        try:
            min_n, max_n = self.ngram_range
        except (TypeError, ValueError):
            raise ConfigurationError(
                f"ngram_range must be a (min_n, max_n) pair, got {self.ngram_range!r}"
            ) from None

        for bound in (min_n, max_n):
            if isinstance(bound, bool) or not isinstance(bound, Integral) or bound < 1:
                raise ConfigurationError(f"ngram_range bounds must be integers >= 1, got {self.ngram_range!r}")
        if min_n > max_n:
            raise ConfigurationError(f"Invalid ngram_range {self.ngram_range!r}: min_n > max_n")

        self.ngram_range = (int(min_n), int(max_n))

    def _validate_stop_words(self) -> None:
        stop_words = self.stop_words
        if stop_words is None:
            return
        if isinstance(stop_words, str):
            if stop_words not in KNOWN_STOP_WORD_LISTS:
                raise ConfigurationError(f"Unknown stop word list: {stop_words!r}")
            return
        try:
            stop_words = frozenset(stop_words)
        except TypeError:
            raise ConfigurationError("stop_words must be a collection of strings") from None
        if not all(isinstance(word, str) for word in stop_words):
            raise ConfigurationError("stop_words must only contain strings")
        self.stop_words = stop_words

    def _validate_fixed_pruning(self) -> None:
        if not self.fixed_vocabulary or not self.has_pruning_bounds:
            return
        if self.prune_fixed_vocabulary is None:
            raise ConfigurationError(
                "A fixed vocabulary was given together with min_df/max_df/max_features; "
                "set prune_fixed_vocabulary to True or False to choose whether it is pruned"
            )

    @property
    def fixed_vocabulary(self) -> bool:
        return isinstance(self.vocabulary_mode, Fixed)

    @property
    def has_pruning_bounds(self) -> bool:
        return (
            self.max_features is not None
            or self.min_df != DEFAULT_MIN_DF
            or isinstance(self.min_df, float)
            or self.max_df != DEFAULT_MAX_DF
            or not isinstance(self.max_df, float)
        )

    @property
    def prunes_vocabulary(self) -> bool:
        """True when fitting runs the feature selector."""
        if isinstance(self.vocabulary_mode, Learned):
            return True
        return bool(self.prune_fixed_vocabulary)

    def resolved_stop_words(self) -> FrozenSet[str]:
        if self.stop_words is None:
            return frozenset()
        if isinstance(self.stop_words, str):
            return load_stop_words(self.stop_words)
        return self.stop_words

    def to_dict(self) -> Dict[str, Any]:
        data = {f.name: getattr(self, f.name) for f in fields(self) if f.init}
        if isinstance(self.stop_words, frozenset):
            data['stop_words'] = sorted(self.stop_words)
        data['ngram_range'] = list(self.ngram_range)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "VectorizerConfig":
        known = {f.name for f in fields(cls) if f.init}
        unknown = set(data) - known
        if unknown:
            raise ConfigurationError(f"Unknown {cls.__name__} options: {sorted(unknown)}")
        return cls(**data)


@dataclass
class TfidfConfig(VectorizerConfig):
    """VectorizerConfig plus the TF-IDF weighting options."""

    use_idf: bool = True
    smooth_idf: bool = True
    sublinear_tf: bool = False
    norm: Optional[str] = 'l2'

    def __post_init__(self):
        super().__post_init__()
        norm = self.norm.lower() if isinstance(self.norm, str) else self.norm
        if norm not in NORMS:
            raise ConfigurationError(f"norm must be one of None, 'l1', 'l2', got {self.norm!r}")
        self.norm = norm
