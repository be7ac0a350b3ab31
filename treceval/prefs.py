"""Preference-based measures computed from per-judgment-group counts."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class EquivalenceClass:
    """Documents judged equally relevant, given by their ranks among judged docs."""

    rel_level: float
    docid_ranks: tuple[int, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "docid_ranks", tuple(self.docid_ranks))

    @property
    def num_in_ec(self) -> int:
        return len(self.docid_ranks)


@dataclass(frozen=True)
class JudgmentGroup:
    """Preference counts of one judgment group (one user) for a query.

    Preferences are held either as equivalence classes ``ecs`` or as a
    square ``prefs_array`` where ``prefs_array[i][j]`` means doc i is
    preferred to doc j; ``rel_array`` holds each judged doc's relevance.
    """

    num_prefs_fulfilled_ret: int = 0
    num_prefs_possible_ret: int = 0
    num_prefs_fulfilled_imp: int = 0
    num_prefs_possible_imp: int = 0
    num_prefs_possible_notoccur: int = 0
    num_nonrel: int = 0
    num_nonrel_ret: int = 0
    num_rel: int = 0
    num_rel_ret: int = 0
    ecs: tuple[EquivalenceClass, ...] = ()
    rel_array: tuple[float, ...] = ()
    prefs_array: tuple[tuple[bool, ...], ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "ecs", tuple(self.ecs))
        object.__setattr__(self, "rel_array", tuple(self.rel_array))
        object.__setattr__(
            self, "prefs_array", tuple(tuple(bool(v) for v in row) for row in self.prefs_array)
        )

    @property
    def num_ecs(self) -> int:
        return len(self.ecs)

    @property
    def num_judged(self) -> int:
        return len(self.prefs_array)

    @property
    def fulfilled(self) -> int:
        return self.num_prefs_fulfilled_ret + self.num_prefs_fulfilled_imp


@dataclass(frozen=True)
class ResultsPrefs:
    """Preference counts of a query's results over all judgment groups."""

    jgs: tuple[JudgmentGroup, ...] = ()
    num_judged: int = 0
    num_judged_ret: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "jgs", tuple(self.jgs))

    @property
    def num_jgs(self) -> int:
        return len(self.jgs)


def _average_ratio(results_prefs: ResultsPrefs, pairs) -> float:
    total = sum(ful / poss for ful, poss in pairs if poss)
    if total > 0.0:
        return total / results_prefs.num_jgs
    return 0.0


def prefs_avgjg(results_prefs: ResultsPrefs) -> float:
    """Fulfilled over possible preferences per group, averaged over groups.

    Implied preferences count; pairs where neither doc was retrieved fail.
    """
    return _average_ratio(
        results_prefs,
        (
            (
                jg.fulfilled,
                jg.num_prefs_possible_ret
                + jg.num_prefs_possible_imp
                + jg.num_prefs_possible_notoccur,
            )
            for jg in results_prefs.jgs
        ),
    )


def prefs_avgjg_imp(results_prefs: ResultsPrefs) -> float:
    """Like ``prefs_avgjg`` but pairs where neither doc was retrieved are ignored."""
    return _average_ratio(
        results_prefs,
        (
            (jg.fulfilled, jg.num_prefs_possible_ret + jg.num_prefs_possible_imp)
            for jg in results_prefs.jgs
        ),
    )


def prefs_avgjg_ret(results_prefs: ResultsPrefs) -> float:
    """Like ``prefs_avgjg`` but only pairs with both docs retrieved count."""
    return _average_ratio(
        results_prefs,
        (
            (jg.num_prefs_fulfilled_ret, jg.num_prefs_possible_ret)
            for jg in results_prefs.jgs
        ),
    )


def prefs_num_prefs_ful(results_prefs: ResultsPrefs) -> int:
    """Number of preferences fulfilled, implied ones included."""
    return sum(jg.fulfilled for jg in results_prefs.jgs)


def prefs_num_prefs_ful_ret(results_prefs: ResultsPrefs) -> int:
    """Number of preferences fulfilled among retrieved docs only."""
    return sum(jg.num_prefs_fulfilled_ret for jg in results_prefs.jgs)