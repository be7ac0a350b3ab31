"""Precision at document cutoffs in the ranking."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from itertools import accumulate

from treceval.ranking import ResRels, ResRelsJg

DEFAULT_CUTOFFS: tuple[int, ...] = (5, 10, 15, 20, 30, 100, 200, 500, 1000)
"""Cutoffs used when none are given."""


def _checked_cutoffs(cutoffs: Iterable[int]) -> tuple[int, ...]:
    cuts = tuple(int(cutoff) for cutoff in cutoffs)
    if any(cutoff <= 0 for cutoff in cuts):
        raise ValueError("cutoffs must be positive")
    if len(set(cuts)) != len(cuts):
        raise ValueError("cutoffs must not contain duplicates")
    return cuts


def _precisions(
    rel_list: Sequence[int], cutoffs: tuple[int, ...], relevance_level: int
) -> list[float]:
    rel_counts = list(
        accumulate((rel >= relevance_level for rel in rel_list), initial=0)
    )
    num_ret = len(rel_list)
    return [rel_counts[min(cutoff, num_ret)] / cutoff for cutoff in cutoffs]


def precision_at(
    res_rels: ResRels,
    cutoffs: Iterable[int] = DEFAULT_CUTOFFS,
    relevance_level: int = 1,
) -> dict[int, float]:
    """Precision at each cutoff, keyed by cutoff.

    Beyond the end of the ranking the missing documents count as
    non-relevant.  Cutoffs must be positive without duplicates.
    """
    cuts = _checked_cutoffs(cutoffs)
    return dict(zip(cuts, _precisions(res_rels.results_rel_list, cuts, relevance_level)))


def precision_at_avgjg(
    res_rels_jg: ResRelsJg,
    cutoffs: Iterable[int] = DEFAULT_CUTOFFS,
    relevance_level: int = 1,
) -> dict[int, float]:
    """Precision at each cutoff, averaged over the judgment groups."""
    cuts = _checked_cutoffs(cutoffs)
    totals = [0.0] * len(cuts)
    for jg in res_rels_jg.jgs:
        values = _precisions(jg.results_rel_list, cuts, relevance_level)
        totals = [total + value for total, value in zip(totals, values)]
    if res_rels_jg.num_jgs > 1:
        totals = [total / res_rels_jg.num_jgs for total in totals]
    return dict(zip(cuts, totals))