"""Interpolated precision at recall cutoffs and its 11-point average."""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence

from treceval.ranking import ResRels

DEFAULT_RECALL_CUTOFFS: tuple[float, ...] = (
    0.0, 0.1, 0.2, 0.3, 0.4, 0.5, 0.6, 0.7, 0.8, 0.9, 1.0,
)
"""Recall points used when none are given."""


def _lround(value: float) -> int:
    """Round to the nearest integer, halves away from zero."""
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def _interpolated_values(
    res_rels: ResRels, percents: Sequence[float], relevance_level: int
) -> list[float]:
    """Interpolated precision at each recall fraction, in the order given.

    Interpolated precision at rank X is the maximum precision at any rank
    Y >= X, so the ranking is walked from the bottom up.
    """
    cutoffs = [_lround(percent * res_rels.num_rel) for percent in percents]
    values = [0.0] * len(cutoffs)
    rel_list = res_rels.results_rel_list
    num_ret = res_rels.num_ret

    current_cut = len(cutoffs) - 1
    while current_cut >= 0 and cutoffs[current_cut] > res_rels.num_rel_ret:
        current_cut -= 1

    int_precis = res_rels.num_rel_ret / num_ret if num_ret else 0.0
    rel_so_far = res_rels.num_rel_ret
    rank = num_ret
    while rank > 0 and rel_so_far > 0:
        int_precis = max(int_precis, rel_so_far / rank)
        if rel_list[rank - 1] >= relevance_level:
            while current_cut >= 0 and rel_so_far == cutoffs[current_cut]:
                values[current_cut] = int_precis
                current_cut -= 1
            rel_so_far -= 1
        rank -= 1

    while current_cut >= 0:
        values[current_cut] = int_precis
        current_cut -= 1
    return values


def iprec_at_recall(
    res_rels: ResRels,
    cutoffs: Iterable[float] = DEFAULT_RECALL_CUTOFFS,
    relevance_level: int = 1,
) -> dict[float, float]:
    """Interpolated precision at each recall fraction, keyed by the fraction.

    A fraction f becomes the cutoff of round(f * R) relevant docs, halves
    rounded away from zero.  Recall levels never reached score 0.0.
    """
    percents = tuple(float(cutoff) for cutoff in cutoffs)
    return dict(zip(percents, _interpolated_values(res_rels, percents, relevance_level)))


def eleven_pt_avg(
    res_rels: ResRels,
    cutoffs: Iterable[float] = DEFAULT_RECALL_CUTOFFS,
    relevance_level: int = 1,
) -> float:
    """Interpolated precision averaged over the recall points.

    Raises ValueError when no recall points are given.
    """
    percents = tuple(float(cutoff) for cutoff in cutoffs)
    if not percents:
        raise ValueError("no cutoff values")
    values = _interpolated_values(res_rels, percents, relevance_level)
    return sum(values) / len(percents)