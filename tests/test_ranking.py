import pytest

from treceval.ranking import (
    RELVALUE_NONPOOL,
    RELVALUE_UNJUDGED,
    Gains,
    RelGain,
    ResRels,
    ResRelsJg,
    num_nonrel_judged_ret,
    num_q,
    num_rel,
    num_rel_ret,
    num_ret,
    total_num_rel,
)


def _sample():
    return ResRels(
        results_rel_list=[1, 0, RELVALUE_NONPOOL, RELVALUE_UNJUDGED, 2, 0],
        rel_levels=[4, 2, 1],
        num_rel=3,
        num_rel_ret=2,
        num_nonpool=1,
        num_unjudged_in_pool=1,
    )


def test_num_ret_is_length_of_list():
    rr = _sample()
    assert num_ret(rr) == len(rr.results_rel_list)


def test_num_rel_and_rel_ret_pass_through():
    rr = _sample()
    assert num_rel(rr) == 3
    assert num_rel_ret(rr) == 2


def test_num_nonrel_judged_ret_partitions_retrieved():
    rr = _sample()
    judged_nonrel = num_nonrel_judged_ret(rr)
    assert (
        judged_nonrel + rr.num_nonpool + rr.num_unjudged_in_pool + rr.num_rel_ret
        == rr.num_ret
    )
    assert judged_nonrel == sum(1 for r in rr.results_rel_list if r == 0)


def test_res_rels_lists_become_tuples():
    rr = _sample()
    assert rr.rel_levels == (4, 2, 1)
    assert rr.num_rel_levels == 3


def test_empty_res_rels():
    rr = ResRels()
    assert num_ret(rr) == 0
    assert num_nonrel_judged_ret(rr) == 0


def test_res_rels_jg_counts_groups():
    jg = ResRelsJg([_sample(), ResRels()])
    assert jg.num_jgs == 2
    assert jg.jgs[1].num_ret == 0


@pytest.mark.parametrize(
    "complete, expected", [(False, 5), (True, 8)]
)
def test_num_q(complete, expected):
    assert num_q(5, 8, complete) == expected


def test_total_num_rel_counts_positive_only():
    queries = [
        {"d1": 1, "d2": 0, "d3": -1},
        [{"d1": 2}, {"d3": 0, "d4": 1}],
    ]
    assert total_num_rel(queries) == 3


def test_total_num_rel_empty():
    assert total_num_rel([]) == 0


def test_total_num_rel_rejects_unknown_format():
    with pytest.raises(TypeError):
        total_num_rel([42])


def test_gains_default_to_level():
    gains = Gains.from_rel_levels([5, 3, 2])
    for level in range(3):
        assert gains.gain(level) == float(level)


def test_gains_override():
    gains = Gains.from_rel_levels([5, 3, 2, 1], {1: 3.5, 2: 9.0})
    assert gains.gain(1) == 3.5
    assert gains.gain(2) == 9.0
    assert gains.gain(3) == 3.0


def test_gain_of_unknown_level_is_zero():
    gains = Gains.from_rel_levels([5, 3])
    assert gains.gain(7) == 0.0


def test_gains_sorted_by_gain():
    gains = Gains.from_rel_levels([5, 3, 2, 1], {1: 3.5, 2: 9.0, 3: 7.0})
    values = [rg.gain for rg in gains.rel_gains]
    assert values == sorted(values)
    assert gains.rel_gains[-1].rel_level == 2


def test_gains_counts_at_levels():
    levels = [5, 3, 2]
    gains = Gains.from_rel_levels(levels, {6: 1.5})
    assert gains.num_gains == 4
    assert gains.total_num_at_levels == sum(levels)
    extra = next(rg for rg in gains.rel_gains if rg.rel_level == 6)
    assert extra == RelGain(rel_level=6, gain=1.5, num_at_level=0)