"""Normalized gain G, combining qualities of MAP and NDCG."""

from __future__ import annotations

import math

from treceval.ranking import Gains, ResRels

_MIN_COST = 1.0


def normalized_gain(res_rels: ResRels, gains: Gains) -> float:
    """G measure of one topic.

    A doc retrieved at rank i contributes
    ``gain(doc) / log2(2 + ideal_gain(i) - results_gain(i))``, where the
    gains are cumulative up to i and each step of ideal gain costs at least
    1.  The sum is normalized by the total ideal gain; 0.0 if that is not
    positive.
    """
    rel_gains = gains.rel_gains
    rel_list = res_rels.results_rel_list
    num_ret = res_rels.num_ret

    cur_level = len(rel_gains) - 1
    ideal_gain = rel_gains[cur_level].gain if cur_level >= 0 else 0.0
    num_at_level = 0
    results_g = 0.0
    sum_results = 0.0
    sum_ideal = 0.0
    sum_cost = 0.0

    def advance_ideal() -> None:
        nonlocal num_at_level, cur_level, ideal_gain
        num_at_level += 1
        while cur_level >= 0 and num_at_level > rel_gains[cur_level].num_at_level:
            num_at_level = 1
            cur_level -= 1
            ideal_gain = rel_gains[cur_level].gain if cur_level >= 0 else 0.0

    index = 0
    while index < num_ret and ideal_gain > 0.0:
        results_gain = gains.gain(rel_list[index])
        sum_results += results_gain
        advance_ideal()
        if ideal_gain > 0.0:
            sum_ideal += ideal_gain
        sum_cost += ideal_gain if ideal_gain >= _MIN_COST else _MIN_COST
        if results_gain != 0:
            results_g += results_gain / math.log2(2 + sum_cost - sum_results)
        index += 1

    for rel in rel_list[index:]:
        results_gain = gains.gain(rel)
        sum_results += results_gain
        sum_cost += _MIN_COST
        if results_gain != 0:
            results_g += results_gain / math.log2(2 + sum_cost - sum_results)

    while ideal_gain > 0.0:
        advance_ideal()
        if ideal_gain > 0.0:
            sum_ideal += ideal_gain

    if sum_ideal > 0.0:
        return results_g / sum_ideal
    return 0.0