import math

import pytest

from treceval.ndcg import dcg, ideal_dcg, ndcg, ndcg_cut, ndcg_p, rndcg
from treceval.ranking import Gains, ResRels

REL_LEVELS = (1, 1, 1)


def _res_rels(ranking, num_rel=2):
    num_rel_ret = sum(1 for rel in ranking if rel >= 1)
    return ResRels(
        results_rel_list=ranking,
        rel_levels=REL_LEVELS,
        num_rel=num_rel,
        num_rel_ret=num_rel_ret,
    )


@pytest.fixture
def gains():
    return Gains.from_rel_levels(REL_LEVELS)


def test_ndcg_perfect_ranking_is_one(gains):
    assert ndcg(_res_rels((2, 1, 0)), gains) == pytest.approx(1.0)


def test_ndcg_worse_ranking_scores_lower(gains):
    best = ndcg(_res_rels((2, 1, 0)), gains)
    worse = ndcg(_res_rels((0, 1, 2)), gains)
    assert 0.0 < worse < best


def test_ndcg_is_dcg_over_ideal(gains):
    res = _res_rels((1, 0, 2))
    assert ndcg(res, gains) == pytest.approx(dcg(res, gains) / ideal_dcg(res, gains))


def test_ideal_dcg_equals_dcg_of_perfect_ranking(gains):
    perfect = _res_rels((2, 1, 0))
    assert ideal_dcg(_res_rels((0,)), gains) == pytest.approx(dcg(perfect, gains))


def test_dcg_single_relevant_at_rank_one():
    gains = Gains.from_rel_levels((0, 1))
    res = ResRels(results_rel_list=(1,), rel_levels=(0, 1), num_rel=1, num_rel_ret=1)
    assert dcg(res, gains) == pytest.approx(1.0)


def test_ndcg_empty_ranking_is_zero(gains):
    assert ndcg(_res_rels(()), gains) == 0.0


def test_ndcg_without_positive_gains_is_zero():
    gains = Gains.from_rel_levels((3,))
    res = ResRels(results_rel_list=(0, 0), rel_levels=(3,))
    assert ndcg(res, gains) == 0.0


def test_ndcg_cut_perfect_ranking_all_one():
    values = ndcg_cut(_res_rels((2, 1, 0)), (1, 2, 5))
    assert list(values) == [1, 2, 5]
    assert all(value == pytest.approx(1.0) for value in values.values())


def test_ndcg_cut_first_cutoff_zero_when_top_doc_nonrelevant():
    values = ndcg_cut(_res_rels((0, 2, 1)), (1, 5))
    assert values[1] == 0.0
    assert 0.0 < values[5] < 1.0


def test_ndcg_cut_values_match_ndcg_at_full_depth(gains):
    res = _res_rels((1, 0, 2))
    values = ndcg_cut(res, (100,))
    assert values[100] == pytest.approx(ndcg(res, gains))


@pytest.mark.parametrize("cutoffs", [(0, 5), (-1,), (5, 5)])
def test_ndcg_cut_rejects_bad_cutoffs(cutoffs):
    with pytest.raises(ValueError):
        ndcg_cut(_res_rels((1,)), cutoffs)


def test_ndcg_p_perfect_ranking_is_one(gains):
    assert ndcg_p(_res_rels((2, 1, 0)), gains) == pytest.approx(1.0)


def test_ndcg_p_no_relevant_retrieved_is_zero(gains):
    assert ndcg_p(_res_rels((0, 0)), gains) == 0.0


def test_ndcg_p_worse_ranking_scores_lower(gains):
    assert ndcg_p(_res_rels((0, 1, 2)), gains) < ndcg_p(_res_rels((2, 1, 0)), gains)


def test_rndcg_perfect_ranking_is_one(gains):
    assert rndcg(_res_rels((2, 1, 0)), gains) == pytest.approx(1.0)


def test_rndcg_without_relevant_docs_is_zero(gains):
    assert rndcg(_res_rels((0, 0), num_rel=0), gains) == 0.0


def test_rndcg_worse_ranking_scores_lower(gains):
    value = rndcg(_res_rels((0, 1, 2)), gains)
    assert 0.0 <= value < 1.0


def test_rndcg_no_positive_gain_is_nan():
    gains = Gains.from_rel_levels((1, 1), {1: 0.0})
    res = ResRels(results_rel_list=(1, 0), rel_levels=(1, 1), num_rel=1, num_rel_ret=1)
    value = rndcg(res, gains)
    assert value == pytest.approx(math.nan, nan_ok=True)