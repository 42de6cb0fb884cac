import numpy as np
import pytest
from scipy import sparse

from vectext.exceptions import EmptyVocabularyError
from vectext.features.encoder import document_frequency
from vectext.features.selection import FeatureSelector, resolve_document_count


@pytest.fixture
def counts():
    vocabulary = {"a": 0, "b": 1, "c": 2, "d": 3}
    tf = sparse.csr_matrix(np.array([
        [1, 0, 2, 0],
        [1, 1, 0, 0],
        [3, 0, 0, 1],
    ]))
    return vocabulary, tf, document_frequency(tf)


def test_no_bounds_keeps_everything(counts):
    vocabulary, tf, df = counts
    result = FeatureSelector().select(vocabulary, tf, df)

    assert result.vocabulary == vocabulary
    assert result.pruned_terms == frozenset()
    assert (result.tf != tf).nnz == 0


def test_max_features_keeps_most_frequent(counts):
    vocabulary, tf, df = counts
    result = FeatureSelector(max_features=2).select(vocabulary, tf, df)

    assert result.vocabulary == {"a": 0, "c": 1}
    assert result.pruned_terms == {"b", "d"}
    assert result.tf.toarray().tolist() == [[1, 2], [1, 0], [3, 0]]


def test_max_features_ties_go_to_lower_index(counts):
    vocabulary, tf, df = counts
    result = FeatureSelector(max_features=3).select(vocabulary, tf, df)

    assert result.vocabulary == {"a": 0, "b": 1, "c": 2}
    assert result.pruned_terms == {"d"}


def test_proportional_min_df(counts):
    vocabulary, tf, df = counts
    result = FeatureSelector(min_df=0.5).select(vocabulary, tf, df)

    assert result.vocabulary == {"a": 0}
    assert result.tf.toarray().tolist() == [[1], [1], [3]]


def test_absolute_max_df_reindexes_in_order(counts):
    vocabulary, tf, df = counts
    result = FeatureSelector(max_df=2).select(vocabulary, tf, df)

    assert result.vocabulary == {"b": 0, "c": 1, "d": 2}
    assert result.pruned_terms == {"a"}
    assert result.tf.toarray().tolist() == [[0, 2, 0], [1, 0, 0], [0, 0, 1]]


def test_reindexing_follows_existing_indices_not_terms():
    vocabulary = {"zulu": 0, "alpha": 1, "mike": 2}
    tf = sparse.csr_matrix(np.array([[1, 1, 1], [1, 0, 1]]))
    result = FeatureSelector(min_df=2).select(vocabulary, tf, document_frequency(tf))

    assert result.vocabulary == {"zulu": 0, "mike": 1}


def test_everything_pruned_raises(counts):
    vocabulary, tf, df = counts
    with pytest.raises(EmptyVocabularyError, match="min_df/max_df are too restrictive"):
        FeatureSelector(min_df=4).select(vocabulary, tf, df)


def test_max_df_below_min_df_leaves_no_terms(counts):
    vocabulary, tf, df = counts
    with pytest.raises(EmptyVocabularyError, match="too restrictive"):
        FeatureSelector(max_df=1, min_df=2).select(vocabulary, tf, df)


def test_empty_vocabulary_passes_through():
    tf = sparse.csr_matrix((3, 0), dtype=np.int64)
    result = FeatureSelector(min_df=2).select({}, tf, np.zeros(0, dtype=np.int64))

    assert result.vocabulary == {}
    assert result.tf.shape == (3, 0)


def test_resolve_document_count():
    assert resolve_document_count(None, 10) is None
    assert resolve_document_count(3, 10) == 3
    assert resolve_document_count(0.25, 10) == 2.5
    assert resolve_document_count(1.0, 10) == 10.0
