import math

import pytest

from treceval.ap import MIN_GEO_MEAN, average_precision
from treceval.judged import bpref, gm_bpref, inf_ap
from treceval.ranking import RELVALUE_NONPOOL, RELVALUE_UNJUDGED, ResRels


def _res_rels(rel_list, num_nonrel, num_rel):
    rel_list = tuple(rel_list)
    return ResRels(
        results_rel_list=rel_list,
        rel_levels=(num_nonrel, num_rel),
        num_rel=num_rel,
        num_rel_ret=sum(1 for rel in rel_list if rel >= 1),
    )


MIXED = _res_rels((1, 0, 1, 0, 0, 1, 0), 5, 4)


def test_bpref_perfect_ranking():
    assert bpref(_res_rels((1, 1, 0, 0), 2, 2)) == 1.0


def test_bpref_all_nonrel_first_is_zero():
    assert bpref(_res_rels((0, 0, 1, 1), 2, 2)) == 0.0


def test_bpref_ignores_unpooled_and_unjudged_docs():
    with_gaps = _res_rels(
        (1, RELVALUE_NONPOOL, 0, RELVALUE_UNJUDGED, 1, 0, 0, 1, 0), 5, 4
    )
    assert bpref(with_gaps) == bpref(MIXED)


def test_bpref_within_unit_interval():
    assert 0.0 < bpref(MIXED) < 1.0


def test_bpref_improves_when_relevant_moves_up():
    better = _res_rels((1, 1, 0, 0, 0, 1, 0), 5, 4)
    assert bpref(better) > bpref(MIXED)


def test_bpref_no_relevant_docs():
    assert bpref(_res_rels((0, 0), 2, 0)) == 0.0


def test_bpref_relevance_level_two():
    rr = ResRels(
        results_rel_list=(2, 1, 2),
        rel_levels=(0, 1, 2),
        num_rel=2,
        num_rel_ret=2,
    )
    # level-1 docs count as nonrelevant at relevance level 2
    assert bpref(rr, relevance_level=2) < bpref(rr, relevance_level=1)


def test_gm_bpref_is_log_of_bpref():
    assert gm_bpref(MIXED) == pytest.approx(math.log(bpref(MIXED)))


def test_gm_bpref_floors_zero_scores():
    assert gm_bpref(_res_rels((0, 0, 1, 1), 2, 2)) == pytest.approx(
        math.log(MIN_GEO_MEAN)
    )


def test_inf_ap_first_doc_relevant_only():
    assert inf_ap(_res_rels((1, 0, 0), 2, 1)) == 1.0


def test_inf_ap_approximates_ap_with_complete_judgments():
    assert inf_ap(MIXED) == pytest.approx(average_precision(MIXED), abs=1e-4)


def test_inf_ap_skips_unpooled_first_rank_case():
    rr = _res_rels((RELVALUE_NONPOOL, 1), 1, 1)
    # the relevant doc is at rank 2 so it is not scored as a perfect hit
    assert 0.0 < inf_ap(rr) < 1.0


def test_inf_ap_unjudged_docs_raise_estimate_over_nonpool():
    unjudged = _res_rels((0, RELVALUE_UNJUDGED, 1, 1), 3, 2)
    nonpool = _res_rels((0, RELVALUE_NONPOOL, 1, 1), 3, 2)
    assert inf_ap(unjudged) >= inf_ap(nonpool)


def test_inf_ap_no_relevant_docs():
    assert inf_ap(_res_rels((0, 0, 0), 3, 0)) == 0.0