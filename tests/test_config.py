import pytest

from vectext.exceptions import ConfigurationError
from vectext.features.config import TfidfConfig, VectorizerConfig
from vectext.features.vocabulary import Fixed, Learned


def test_defaults():
    config = VectorizerConfig()
    assert config.ngram_range == (1, 1)
    assert config.min_df == 1
    assert config.max_df == 1.0
    assert config.vocabulary_mode == Learned()
    assert not config.fixed_vocabulary
    assert not config.has_pruning_bounds
    assert config.prunes_vocabulary


def test_tfidf_defaults():
    config = TfidfConfig()
    assert config.use_idf and config.smooth_idf
    assert not config.sublinear_tf
    assert config.norm == 'l2'


@pytest.mark.parametrize("options", [
    {"ngram_range": (2, 1)},
    {"ngram_range": (0, 1)},
    {"ngram_range": (1,)},
    {"ngram_range": (1.5, 2)},
    {"max_features": 0},
    {"max_features": 2.5},
    {"min_df": -1},
    {"min_df": True},
    {"min_df": "2"},
    {"max_df": 1.5},
    {"max_df": -0.1},
    {"stop_words": "french"},
    {"stop_words": ["a", 1]},
    {"stop_words": 3},
    {"n_jobs": 0},
    {"chunk_size": 0},
    {"vocabulary": {"a": 0, "b": 2}},
])
def test_invalid_options(options):
    with pytest.raises(ConfigurationError):
        VectorizerConfig(**options)


@pytest.mark.parametrize("norm", ["l3", "max", 2])
def test_invalid_norm(norm):
    with pytest.raises(ConfigurationError):
        TfidfConfig(norm=norm)


def test_norm_is_case_insensitive():
    assert TfidfConfig(norm="L2").norm == "l2"
    assert TfidfConfig(norm=None).norm is None


def test_ngram_range_list_from_yaml():
    config = VectorizerConfig.from_dict({"ngram_range": [1, 3], "max_df": 0.5})
    assert config.ngram_range == (1, 3)
    assert config.has_pruning_bounds


def test_from_dict_rejects_unknown_keys():
    with pytest.raises(ConfigurationError, match="lowercase"):
        VectorizerConfig.from_dict({"lowercase": True})


def test_stop_words_become_frozenset():
    config = VectorizerConfig(stop_words=["the", "a", "the"])
    assert config.stop_words == frozenset({"the", "a"})
    assert config.resolved_stop_words() == {"the", "a"}
    assert config.to_dict()["stop_words"] == ["a", "the"]


def test_fixed_vocabulary_mode():
    config = VectorizerConfig(vocabulary=["b", "a"])
    assert config.fixed_vocabulary
    assert config.vocabulary_mode == Fixed({"b": 0, "a": 1})
    assert not config.prunes_vocabulary


@pytest.mark.parametrize("options", [
    {"min_df": 2},
    {"min_df": 1.0},
    {"max_df": 3},
    {"max_df": 0.5},
    {"max_features": 10},
])
def test_fixed_vocabulary_with_bounds_needs_decision(options):
    with pytest.raises(ConfigurationError, match="prune_fixed_vocabulary"):
        VectorizerConfig(vocabulary=["a", "b"], **options)

    config = VectorizerConfig(vocabulary=["a", "b"], prune_fixed_vocabulary=True, **options)
    assert config.prunes_vocabulary
