import pytest

from packages.shared.errors import ConfigurationError
from apps.worker.lib.similarity import SimilarityScorer, hybrid_similarity, jaccard_similarity

PAIRS = [
    ("", ""),
    ("", "craniotomy"),
    ("   ", "craniotomy"),
    ("patient underwent craniotomy", "craniotomy underwent patient"),
    ("vital signs stable", "vital signs stable overnight"),
    ("alpha", "omega"),
]


@pytest.mark.parametrize("method", ["jaccard", "hybrid"])
def test_symmetric_and_bounded(method) -> None:
    scorer = SimilarityScorer(method)
    for a, b in PAIRS:
        ab, ba = scorer.score(a, b), scorer.score(b, a)
        assert ab == ba
        assert 0.0 <= ab <= 1.0


@pytest.mark.parametrize("method", ["jaccard", "hybrid"])
def test_reflexive_and_total_on_empty(method) -> None:
    scorer = SimilarityScorer(method)
    assert scorer.score("", "") == 1.0
    assert scorer.score("", "x") == 0.0
    assert scorer.score("x", "") == 0.0
    assert scorer.score("pupils equal and reactive", "pupils equal and reactive") == 1.0


def test_jaccard_values() -> None:
    assert jaccard_similarity("vital signs stable", "vital signs stable overnight") == pytest.approx(0.75)
    assert jaccard_similarity("Alpha beta", "alpha BETA") == 1.0
    assert jaccard_similarity("alpha", "omega") == 0.0


def test_hybrid_rewards_near_spellings() -> None:
    # Token sets are disjoint but the characters are almost the same.
    assert jaccard_similarity("craniotomy", "craniotomies") == 0.0
    assert hybrid_similarity("craniotomy", "craniotomies") > 0.3


def test_none_inputs_do_not_raise() -> None:
    assert SimilarityScorer().score(None, None) == 1.0


def test_unknown_method_is_configuration_error() -> None:
    with pytest.raises(ConfigurationError):
        SimilarityScorer("cosine")
