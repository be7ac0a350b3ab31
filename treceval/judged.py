"""Measures that use only judged documents: bpref, gm_bpref and infAP."""

from __future__ import annotations

import math

from treceval.ap import MIN_GEO_MEAN
from treceval.ranking import RELVALUE_NONPOOL, RELVALUE_UNJUDGED, ResRels

INFAP_EPSILON = 0.00001
"""Smoothing term that keeps the inferred precision ratio defined."""


def bpref(res_rels: ResRels, relevance_level: int = 1) -> float:
    """Binary preference.

    For each judged relevant doc, the fraction of the top R judged
    nonrelevant docs retrieved after it, averaged over the R relevant docs.
    Documents outside the pool or unjudged are skipped.
    """
    num_nonrel = sum(res_rels.rel_levels[:relevance_level])
    num_rel = res_rels.num_rel
    nonrel_so_far = 0
    total = 0.0
    for rel in res_rels.results_rel_list:
        if rel in (RELVALUE_NONPOOL, RELVALUE_UNJUDGED):
            continue
        if 0 <= rel < relevance_level:
            nonrel_so_far += 1
        elif nonrel_so_far > 0:
            total += 1.0 - min(nonrel_so_far, num_rel) / min(num_nonrel, num_rel)
        else:
            total += 1.0
    if num_rel:
        total /= num_rel
    return total


def gm_bpref(res_rels: ResRels, relevance_level: int = 1) -> float:
    """Log of bpref, floored at MIN_GEO_MEAN, for geometric averaging."""
    return math.log(max(bpref(res_rels, relevance_level), MIN_GEO_MEAN))


def inf_ap(res_rels: ResRels, relevance_level: int = 1) -> float:
    """Inferred average precision over a sampled judgment pool.

    Precision at each relevant doc is estimated from the judged docs above
    it; docs outside the pool count as nonrelevant, pooled but unjudged docs
    are assumed relevant in the same proportion as the judged ones.
    """
    nonrel_so_far = 0
    rel_so_far = 0
    pool_unjudged_so_far = 0
    total = 0.0
    for index, rel in enumerate(res_rels.results_rel_list):
        if rel == RELVALUE_NONPOOL:
            continue
        if rel == RELVALUE_UNJUDGED:
            pool_unjudged_so_far += 1
            continue
        if 0 <= rel < relevance_level:
            nonrel_so_far += 1
            continue
        rel_so_far += 1
        if index == 0:
            total += 1.0
            continue
        fj = float(index)
        judged_above = rel_so_far - 1 + nonrel_so_far
        total += 1.0 / (fj + 1.0) + (fj / (fj + 1.0)) * (
            (judged_above + pool_unjudged_so_far) / fj
        ) * (
            (rel_so_far - 1 + INFAP_EPSILON)
            / (judged_above + 2 * INFAP_EPSILON)
        )
    if res_rels.num_rel:
        total /= res_rels.num_rel
    return total