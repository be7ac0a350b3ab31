"""NDCG averaged over the relevant documents of a topic."""

from __future__ import annotations

import math
from collections.abc import Iterator
from itertools import repeat

from treceval.ranking import Gains, ResRels


def _ideal_gains(gains: Gains) -> Iterator[float]:
    """Gains of the ideal ranking, position by position, then 0.0 forever."""
    for rel_gain in reversed(gains.rel_gains):
        yield from repeat(rel_gain.gain, rel_gain.num_at_level)
    yield from repeat(0.0)


def _divide(numerator: float, denominator: float) -> float:
    """Floating division that yields inf or nan instead of raising on zero."""
    if denominator:
        return numerator / denominator
    if numerator == 0 or math.isnan(numerator):
        return math.nan
    return math.copysign(math.inf, numerator)


def ndcg_rel(res_rels: ResRels, gains: Gains) -> float:
    """NDCG averaged at each relevant doc (a doc whose gain is positive).

    A relevant doc that was not retrieved contributes the NDCG at the end of
    the ranking.  Returns 0.0 when the sum is not positive.
    """
    rel_list = res_rels.results_rel_list
    num_ret = res_rels.num_ret
    ideal_iter = _ideal_gains(gains)
    ideal_gain = gains.rel_gains[-1].gain if gains.rel_gains else 0.0

    results_dcg = 0.0
    ideal = 0.0
    total = 0.0
    num_rel = 0
    num_rel_ret = 0

    index = 0
    while index < num_ret and ideal_gain > 0.0:
        results_gain = gains.gain(rel_list[index])
        if results_gain != 0:
            # Doc at index i has rank i + 1.
            results_dcg += results_gain / math.log2(index + 2)
        ideal_gain = next(ideal_iter)
        if ideal_gain > 0.0:
            num_rel += 1
            ideal += ideal_gain / math.log2(index + 2)
        if results_gain > 0:
            total += _divide(results_dcg, ideal)
            num_rel_ret += 1
        index += 1

    for position in range(index, num_ret):
        results_gain = gains.gain(rel_list[position])
        if results_gain != 0:
            results_dcg += results_gain / math.log2(position + 2)
        if results_gain > 0:
            total += _divide(results_dcg, ideal)
            num_rel_ret += 1
    index = max(index, num_ret)

    while ideal_gain > 0.0:
        ideal_gain = next(ideal_iter)
        if ideal_gain > 0.0:
            num_rel += 1
            ideal += ideal_gain / math.log2(index + 2)
        index += 1

    total += _divide((num_rel - num_rel_ret) * results_dcg, ideal)
    if total > 0.0:
        return _divide(total, num_rel)
    return 0.0