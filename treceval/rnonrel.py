"""Preference measures with the number of nonrelevant docs set to R."""

from __future__ import annotations

import math
from collections.abc import Iterable
from itertools import takewhile

from treceval.prefs import JudgmentGroup, ResultsPrefs


def _divide(numerator: float, denominator: float) -> float:
    """Floating division that yields inf or nan instead of raising on zero."""
    if denominator:
        return numerator / denominator
    if numerator == 0 or math.isnan(numerator):
        return math.nan
    return math.copysign(math.inf, numerator)


def _recalculate_ecs(
    jg: JudgmentGroup, num_judged_ret: int, num_new_nonrel: int, retrieved_only: bool
) -> tuple[int, int]:
    """Recount preferences held as equivalence classes.

    The last class (the nonrelevant docs) is cut down to its first
    ``num_new_nonrel`` docs.
    """
    ecs = jg.ecs
    new_nonrel = ecs[-1].docid_ranks[:num_new_nonrel]

    def ranks(docid_ranks: Iterable[int]) -> Iterable[int]:
        if retrieved_only:
            return takewhile(lambda rank: rank < num_judged_ret, docid_ranks)
        return docid_ranks

    ful = 0
    poss = 0

    def count(first: tuple[int, ...], second: tuple[int, ...]) -> None:
        nonlocal ful, poss
        for rank1 in ranks(first):
            for rank2 in ranks(second):
                if rank1 < rank2 and (retrieved_only or rank1 < num_judged_ret):
                    ful += 1
                else:
                    poss += 1

    for ec1, first in enumerate(ecs):
        for second in ecs[ec1 + 1 : len(ecs) - 1]:
            count(first.docid_ranks, second.docid_ranks)
    for first in ecs:
        count(first.docid_ranks, new_nonrel)
    return ful, poss + ful


def _recalculate_array(
    jg: JudgmentGroup, num_judged_ret: int, retrieved_only: bool
) -> tuple[int, int]:
    """Recount preferences held as a preference array.

    Nonrelevant docs after the (num_rel + 1)th one are left out.
    """
    prefs = jg.prefs_array
    rel_array = jg.rel_array
    num_judged = jg.num_judged
    search_limit = num_judged_ret if retrieved_only else num_judged

    first_discarded = search_limit
    num_nonrel_seen = 0
    for index in range(search_limit):
        if rel_array[index] == 0.0:
            num_nonrel_seen += 1
            if num_nonrel_seen == jg.num_rel + 1:
                first_discarded = index
                break

    def kept(index: int) -> bool:
        return not (index >= first_discarded and rel_array[index] == 0.0)

    column_limit = num_judged_ret if retrieved_only else num_judged
    ful = 0
    poss = 0
    for i in filter(kept, range(num_judged_ret)):
        for j in filter(kept, range(column_limit)):
            if j == i or not prefs[i][j]:
                continue
            if j < i:
                poss += 1
            else:
                ful += 1
    if not retrieved_only:
        for i in filter(kept, range(num_judged_ret, num_judged)):
            poss += sum(1 for j in filter(kept, range(num_judged)) if prefs[i][j])
    return ful, poss + ful


def _recalculate(
    jg: JudgmentGroup, num_judged_ret: int, num_new_nonrel: int, retrieved_only: bool
) -> tuple[int, int]:
    if jg.num_ecs > 0:
        return _recalculate_ecs(jg, num_judged_ret, num_new_nonrel, retrieved_only)
    return _recalculate_array(jg, num_judged_ret, retrieved_only)


def _average(results_prefs: ResultsPrefs, ratios: Iterable[float]) -> float:
    total = sum(ratios)
    if total > 0.0:
        return total / results_prefs.num_jgs
    return 0.0


def prefs_avgjg_rnonrel(results_prefs: ResultsPrefs) -> float:
    """Fulfilled over possible preferences per group, with N nonrel docs set to R.

    If N < R, R * (R - N) fulfilled preferences are added; if N > R only the
    first R nonrelevant docs take part and the counts are recomputed.
    """

    def ratio(jg: JudgmentGroup) -> float:
        r_count, n_count = jg.num_rel, jg.num_nonrel
        if r_count >= n_count:
            ful = jg.fulfilled + jg.num_rel_ret * (r_count - n_count)
            poss = (
                jg.num_prefs_possible_ret
                + jg.num_prefs_possible_imp
                + jg.num_prefs_possible_notoccur
                + jg.num_rel * (r_count - n_count)
            )
        else:
            ful, poss = _recalculate(
                jg, results_prefs.num_judged_ret, jg.num_rel, retrieved_only=False
            )
        return _divide(ful, poss)

    return _average(results_prefs, (ratio(jg) for jg in results_prefs.jgs))


def prefs_avgjg_rnonrel_ret(results_prefs: ResultsPrefs) -> float:
    """Like ``prefs_avgjg_rnonrel`` but only retrieved docs count, and R, N are retrieved counts."""

    def ratio(jg: JudgmentGroup) -> float:
        r_count, n_count = jg.num_rel_ret, jg.num_nonrel_ret
        if r_count >= n_count:
            ful = jg.num_prefs_fulfilled_ret + jg.num_rel_ret * (r_count - n_count)
            poss = jg.num_prefs_possible_ret + jg.num_rel * (r_count - n_count)
        else:
            ful, poss = _recalculate(
                jg, results_prefs.num_judged_ret, jg.num_rel_ret, retrieved_only=True
            )
        return _divide(ful, poss)

    return _average(results_prefs, (ratio(jg) for jg in results_prefs.jgs))