"""Precision after R documents, and at multiples of R.

R is the number of relevant documents for the topic.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from treceval.ranking import ResRels, ResRelsJg

DEFAULT_RPREC_CUTOFFS: tuple[float, ...] = (
    0.2, 0.4, 0.6, 0.8, 1.0, 1.2, 1.4, 1.6, 1.8, 2.0,
)
"""Multiples of R used when none are given."""


def r_precision(res_rels: ResRels, relevance_level: int = 1) -> float:
    """Precision after R documents have been retrieved.

    Returns 0.0 when nothing was retrieved or the topic has no relevant docs.
    """
    num_to_look_at = min(res_rels.num_ret, res_rels.num_rel)
    if num_to_look_at == 0:
        return 0.0
    rel_so_far = sum(
        1
        for rel in res_rels.results_rel_list[:num_to_look_at]
        if rel >= relevance_level
    )
    return rel_so_far / res_rels.num_rel


def _rprec_mult_values(
    res_rels: ResRels, percents: Sequence[float], relevance_level: int
) -> list[float]:
    """Precision at each multiple of R; cutoffs are taken in ascending order."""
    cutoffs = [int(percent * res_rels.num_rel + 0.9) for percent in percents]
    values = [0.0] * len(cutoffs)
    num_ret = res_rels.num_ret
    rel_list = res_rels.results_rel_list

    current_cut = len(cutoffs) - 1
    while current_cut >= 0 and cutoffs[current_cut] > num_ret:
        values[current_cut] = res_rels.num_rel_ret / cutoffs[current_cut]
        current_cut -= 1

    # Walk the ranking backwards, assigning precision where a cutoff lands.
    rel_so_far = res_rels.num_rel_ret
    rank = num_ret
    while rank > 0 and rel_so_far > 0:
        precis = rel_so_far / rank
        while current_cut >= 0 and rank == cutoffs[current_cut]:
            values[current_cut] = precis
            current_cut -= 1
        if rel_list[rank - 1] >= relevance_level:
            rel_so_far -= 1
        rank -= 1
    return values


def rprec_mult(
    res_rels: ResRels,
    cutoffs: Iterable[float] = DEFAULT_RPREC_CUTOFFS,
    relevance_level: int = 1,
) -> dict[float, float]:
    """Precision at multiples of R, keyed by the multiple.

    A multiple m becomes the document cutoff ``int(m * R + 0.9)``.  Cutoffs
    past the end of the ranking are filled with non-relevant documents.
    """
    percents = tuple(float(cutoff) for cutoff in cutoffs)
    return dict(zip(percents, _rprec_mult_values(res_rels, percents, relevance_level)))


def rprec_mult_avgjg(
    res_rels_jg: ResRelsJg,
    cutoffs: Iterable[float] = DEFAULT_RPREC_CUTOFFS,
    relevance_level: int = 1,
) -> dict[float, float]:
    """Precision at multiples of R, averaged over the judgment groups."""
    percents = tuple(float(cutoff) for cutoff in cutoffs)
    totals = [0.0] * len(percents)
    for jg in res_rels_jg.jgs:
        values = _rprec_mult_values(jg, percents, relevance_level)
        totals = [total + value for total, value in zip(totals, values)]
    if res_rels_jg.num_jgs > 1:
        totals = [total / res_rels_jg.num_jgs for total in totals]
    return dict(zip(percents, totals))