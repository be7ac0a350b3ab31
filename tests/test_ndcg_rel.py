import math

import pytest

from treceval.ndcg import ndcg
from treceval.ndcg_rel import ndcg_rel
from treceval.ranking import Gains, ResRels


def _rels(ranking, rel_levels):
    gains = Gains.from_rel_levels(rel_levels)
    num_rel = sum(rel_levels[1:])
    res = ResRels(
        results_rel_list=tuple(ranking),
        rel_levels=tuple(rel_levels),
        num_rel=num_rel,
        num_rel_ret=sum(1 for rel in ranking if rel > 0),
    )
    return res, gains


def test_perfect_ranking_scores_one():
    res, gains = _rels([2, 1], (0, 1, 1))
    assert ndcg_rel(res, gains) == pytest.approx(1.0)


def test_empty_ranking_scores_zero():
    res, gains = _rels([], (0, 1, 1))
    assert ndcg_rel(res, gains) == 0.0


def test_no_relevant_retrieved_scores_zero():
    res, gains = _rels([0, 0], (2, 1, 1))
    assert ndcg_rel(res, gains) == 0.0


def test_reversed_ranking_is_worse_than_perfect():
    perfect, gains = _rels([2, 1], (0, 1, 1))
    reversed_res, _ = _rels([1, 2], (0, 1, 1))
    worse = ndcg_rel(reversed_res, gains)
    assert 0.0 < worse < ndcg_rel(perfect, gains)


def test_missing_relevant_doc_uses_final_ndcg():
    res, gains = _rels([2], (0, 1, 1))
    expected = (1.0 + ndcg(res, gains)) / 2
    assert ndcg_rel(res, gains) == pytest.approx(expected)


@pytest.mark.parametrize(
    "ranking",
    [[2, 1, 0], [0, 2, 1], [1, 0, 2], [0, 0, 1, 2], [2, 0, 0, 1]],
)
def test_score_within_unit_interval(ranking):
    res, gains = _rels(ranking, (3, 1, 1))
    value = ndcg_rel(res, gains)
    assert not math.isnan(value)
    assert 0.0 <= value <= 1.0 + 1e-12


def test_zero_gain_override_removes_level():
    res, _ = _rels([1], (0, 1))
    gains = Gains.from_rel_levels((0, 1), {1: 0.0})
    assert ndcg_rel(res, gains) == 0.0