import math

import numpy as np
import pytest
from scipy import sparse

from vectext.exceptions import NotFittedError
from vectext.features.tfidf import TfidfTransformer, compute_idf


@pytest.fixture
def tf():
    return sparse.csr_matrix(np.array([[1, 0], [0, 0], [2, 1]]))


def test_smooth_idf(tf):
    transformer = TfidfTransformer(norm=None).fit(tf)
    np.testing.assert_allclose(transformer.idf, [math.log(4 / 3) + 1, math.log(4 / 2) + 1])


def test_unsmoothed_idf(tf):
    transformer = TfidfTransformer(smooth_idf=False, norm=None).fit(tf)
    np.testing.assert_allclose(transformer.idf, [math.log(3 / 2) + 1, math.log(3 / 1) + 1])


def test_smooth_idf_is_positive_for_unseen_terms():
    idf = compute_idf(np.array([0, 2, 2]), n_documents=2, smooth_idf=True)
    assert (idf > 0).all()
    assert idf[0] == pytest.approx(math.log(3) + 1)
    assert idf[2] == pytest.approx(1.0)


def test_weighting_without_norm(tf):
    transformer = TfidfTransformer(norm=None)
    X = transformer.fit_transform(tf).toarray()
    idf = transformer.idf

    np.testing.assert_allclose(X, [[idf[0], 0], [0, 0], [2 * idf[0], idf[1]]])


def test_l2_rows_have_unit_length_and_zero_rows_stay_zero(tf):
    X = TfidfTransformer(norm='l2').fit_transform(tf).toarray()

    np.testing.assert_allclose(np.linalg.norm(X, axis=1), [1.0, 0.0, 1.0])
    assert not np.isnan(X).any()


def test_l1_rows_sum_to_one(tf):
    X = TfidfTransformer(norm='l1').fit_transform(tf).toarray()
    np.testing.assert_allclose(np.abs(X).sum(axis=1), [1.0, 0.0, 1.0])


def test_sublinear_tf_leaves_zeros():
    tf = sparse.csr_matrix(np.array([[3, 0], [1, 1]]))
    X = TfidfTransformer(use_idf=False, sublinear_tf=True, norm=None).transform(tf).toarray()

    np.testing.assert_allclose(X, [[math.log(3) + 1, 0.0], [1.0, 1.0]])


def test_transform_before_fit_raises(tf):
    with pytest.raises(NotFittedError):
        TfidfTransformer().transform(tf)


def test_no_idf_needs_no_fit(tf):
    transformer = TfidfTransformer(use_idf=False, norm=None)
    assert transformer.idf is None
    np.testing.assert_allclose(transformer.transform(tf).toarray(), tf.toarray())


def test_feature_count_mismatch(tf):
    transformer = TfidfTransformer().fit(tf)
    with pytest.raises(ValueError, match="features"):
        transformer.transform(sparse.csr_matrix(np.ones((1, 3))))


def test_input_matrix_is_not_modified(tf):
    before = tf.toarray().copy()
    TfidfTransformer(sublinear_tf=True).fit_transform(tf)
    assert (tf.toarray() == before).all()
