"""Average precision and its variants."""

from __future__ import annotations

import math
from collections.abc import Iterable

from treceval.cutoff import DEFAULT_CUTOFFS
from treceval.ranking import ResRels, ResRelsJg

MIN_GEO_MEAN = 0.00001
"""Floor applied to a score before taking its logarithm for geometric means."""


def _precision_sums(res_rels: ResRels, relevance_level: int) -> list[float]:
    """Sum of precisions at relevant docs after each prefix of the ranking."""
    sums = [0.0]
    rel_so_far = 0
    total = 0.0
    for rank, rel in enumerate(res_rels.results_rel_list, start=1):
        if rel >= relevance_level:
            rel_so_far += 1
            total += rel_so_far / rank
        sums.append(total)
    return sums


def average_precision(res_rels: ResRels, relevance_level: int = 1) -> float:
    """Precision after each relevant doc retrieved, averaged over all relevant docs."""
    rel_so_far = 0
    total = 0.0
    for rank, rel in enumerate(res_rels.results_rel_list, start=1):
        if rel >= relevance_level:
            rel_so_far += 1
            total += rel_so_far / rank
    if rel_so_far:
        return total / res_rels.num_rel
    return 0.0


def map_avgjg(res_rels_jg: ResRelsJg, relevance_level: int = 1) -> float:
    """Average precision averaged over the judgment groups."""
    total = sum(average_precision(jg, relevance_level) for jg in res_rels_jg.jgs)
    if res_rels_jg.num_jgs > 1:
        total /= res_rels_jg.num_jgs
    return total


def map_cut(
    res_rels: ResRels,
    cutoffs: Iterable[int] = DEFAULT_CUTOFFS,
    relevance_level: int = 1,
) -> dict[int, float]:
    """Average precision at each document cutoff, keyed by cutoff.

    Cutoffs must be positive without duplicates; all values are 0.0 for a
    topic without relevant docs.
    """
    cuts = tuple(int(cutoff) for cutoff in cutoffs)
    if any(cutoff <= 0 for cutoff in cuts):
        raise ValueError("cutoffs must be positive")
    if len(set(cuts)) != len(cuts):
        raise ValueError("cutoffs must not contain duplicates")
    if res_rels.num_rel == 0:
        return dict.fromkeys(cuts, 0.0)

    sums = _precision_sums(res_rels, relevance_level)
    values: list[float] = []
    for position in range(res_rels.num_ret):
        if len(values) < len(cuts) and position == cuts[len(values)]:
            values.append(sums[position] / res_rels.num_rel)
    final = sums[-1] / res_rels.num_rel
    values.extend(final for _ in range(len(cuts) - len(values)))
    return dict(zip(cuts, values))


def gm_map(res_rels: ResRels, relevance_level: int = 1) -> float:
    """Log of average precision, floored at MIN_GEO_MEAN, for geometric averaging."""
    return math.log(max(average_precision(res_rels, relevance_level), MIN_GEO_MEAN))


def bin_g(res_rels: ResRels, relevance_level: int = 1) -> float:
    """Binary G: mean over relevant docs of 1 / log2(2 + nonrel retrieved before)."""
    rel_so_far = 0
    total = 0.0
    for index, rel in enumerate(res_rels.results_rel_list):
        if rel >= relevance_level:
            rel_so_far += 1
            total += 1.0 / math.log2(3 + index - rel_so_far)
    if rel_so_far:
        return total / res_rels.num_rel
    return 0.0