"""Normalized discounted cumulative gain and its variants."""

from __future__ import annotations

import math
from collections.abc import Iterable, Iterator
from itertools import repeat, takewhile

from treceval.cutoff import DEFAULT_CUTOFFS
from treceval.ranking import Gains, ResRels


def _ideal_gains(gains: Gains) -> Iterator[float]:
    """Gains of the ideal ranking, position by position, then 0.0 forever."""
    for rel_gain in reversed(gains.rel_gains):
        yield from repeat(rel_gain.gain, rel_gain.num_at_level)
    yield from repeat(0.0)


def _top_gain(gains: Gains) -> float:
    return gains.rel_gains[-1].gain if gains.rel_gains else 0.0


def _results_dcg(res_rels: ResRels, gains: Gains) -> float:
    total = 0.0
    for index, rel in enumerate(res_rels.results_rel_list):
        gain = gains.gain(rel)
        if gain != 0:
            # Doc at index i has rank i + 1.
            total += gain / math.log2(index + 2)
    return total


def _ideal_dcg(gains: Gains) -> float:
    if _top_gain(gains) <= 0.0:
        return 0.0
    total = 0.0
    positive = takewhile(lambda gain: gain > 0.0, _ideal_gains(gains))
    for index, gain in enumerate(positive):
        total += gain / math.log2(index + 2)
    return total


def _divide(numerator: float, denominator: float) -> float:
    """Floating division that yields inf or nan instead of raising on zero."""
    if denominator:
        return numerator / denominator
    if numerator == 0 or math.isnan(numerator):
        return math.nan
    return math.copysign(math.inf, numerator)


def ndcg(res_rels: ResRels, gains: Gains) -> float:
    """Normalized discounted cumulative gain; 0.0 when the ideal DCG is not positive."""
    ideal = _ideal_dcg(gains)
    if ideal > 0.0:
        return _results_dcg(res_rels, gains) / ideal
    return 0.0


def dcg(res_rels: ResRels, gains: Gains) -> float:
    """Discounted cumulative gain of the ranking."""
    return _results_dcg(res_rels, gains)


def ideal_dcg(res_rels: ResRels, gains: Gains) -> float:
    """Discounted cumulative gain of the ideal ranking for the topic."""
    return _ideal_dcg(gains)


def _checked_cutoffs(cutoffs: Iterable[int]) -> tuple[int, ...]:
    cuts = tuple(int(cutoff) for cutoff in cutoffs)
    if any(cutoff <= 0 for cutoff in cuts):
        raise ValueError("cutoffs must be positive")
    if len(set(cuts)) != len(cuts):
        raise ValueError("cutoffs must not contain duplicates")
    return tuple(sorted(cuts))


def ndcg_cut(
    res_rels: ResRels, cutoffs: Iterable[int] = DEFAULT_CUTOFFS
) -> dict[int, float]:
    """NDCG at each document cutoff, keyed by cutoff.

    Gains are the relevance values themselves.  Cutoffs must be positive
    without duplicates.
    """
    cuts = _checked_cutoffs(cutoffs)
    values: list[float] = []
    total = 0.0
    for index, rel in enumerate(res_rels.results_rel_list):
        if len(values) < len(cuts) and index == cuts[len(values)]:
            values.append(total)
            if len(values) == len(cuts):
                break
        if rel > 0:
            total += rel / math.log2(index + 2)
    values.extend(total for _ in range(len(cuts) - len(values)))

    rel_levels = res_rels.rel_levels
    cur_lvl = len(rel_levels) - 1
    lvl_count = 0
    ideal = 0.0
    normalized = 0
    index = 0
    while True:
        lvl_count += 1
        while cur_lvl > 0 and lvl_count > rel_levels[cur_lvl]:
            cur_lvl -= 1
            lvl_count = 1
        if cur_lvl <= 0:
            break
        if normalized < len(cuts) and index == cuts[normalized]:
            if ideal > 0.0:
                values[normalized] /= ideal
            normalized += 1
            if normalized == len(cuts):
                break
        ideal += cur_lvl / math.log2(index + 2)
        index += 1

    for position in range(normalized, len(cuts)):
        if ideal > 0.0:
            values[position] /= ideal
    return dict(zip(cuts, values))


def ndcg_p(res_rels: ResRels, gains: Gains) -> float:
    """NDCG where ranks 1 and 2 are both undiscounted (discount log2 of rank).

    Returns 0.0 when no relevant doc was retrieved.
    """
    total = 0.0
    for index, rel in enumerate(res_rels.results_rel_list):
        gain = gains.gain(rel)
        if gain != 0:
            total += gain / math.log2(index + 1) if index > 0 else gain

    rel_gains = gains.rel_gains
    cur_lvl = len(rel_gains) - 1
    lvl_count = 0
    ideal = 0.0
    for index in range(gains.total_num_at_levels):
        lvl_count += 1
        while lvl_count > rel_gains[cur_lvl].num_at_level:
            lvl_count = 1
            cur_lvl -= 1
            if cur_lvl < 0 or rel_gains[cur_lvl].gain <= 0.0:
                break
        if cur_lvl < 0 or rel_gains[cur_lvl].gain <= 0.0:
            break
        gain = rel_gains[cur_lvl].gain
        ideal += gain if index == 0 else gain / math.log2(index + 1)

    if res_rels.num_rel_ret > 0:
        return _divide(total, ideal)
    return 0.0


def rndcg(res_rels: ResRels, gains: Gains) -> float:
    """NDCG averaged at each change of gain level in the ideal ranking.

    Unjudged docs have gain 0, so there is a final implied change at the end
    of the ranking.  Returns 0.0 for a topic without relevant docs.
    """
    if res_rels.num_rel == 0:
        return 0.0

    rel_list = res_rels.results_rel_list
    num_ret = res_rels.num_ret
    ideal_iter = _ideal_gains(gains)
    ideal_gain = _top_gain(gains)
    old_ideal_gain = ideal_gain
    results_dcg = 0.0
    ideal = 0.0
    total = 0.0
    num_changed = 0

    index = 0
    while index < num_ret and ideal_gain > 0.0:
        results_gain = gains.gain(rel_list[index])
        ideal_gain = next(ideal_iter)
        if old_ideal_gain != ideal_gain:
            if ideal > 0.0:
                total += results_dcg / ideal
                num_changed += 1
            old_ideal_gain = ideal_gain
        if results_gain != 0:
            results_dcg += results_gain / math.log2(index + 2)
        if ideal_gain > 0.0:
            ideal += ideal_gain / math.log2(index + 2)
        index += 1

    if index < num_ret:
        for position in range(index, num_ret):
            results_gain = gains.gain(rel_list[position])
            if results_gain != 0:
                results_dcg += results_gain / math.log2(position + 2)
        index = num_ret
        if ideal > 0.0:
            total += results_dcg / ideal
            num_changed += 1

    while ideal_gain > 0.0:
        ideal_gain = next(ideal_iter)
        if old_ideal_gain != ideal_gain:
            if ideal > 0.0:
                total += results_dcg / ideal
                num_changed += 1
            old_ideal_gain = ideal_gain
        if ideal_gain > 0.0:
            ideal += ideal_gain / math.log2(index + 2)
        index += 1

    return _divide(total, num_changed)