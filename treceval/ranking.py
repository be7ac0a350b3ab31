"""Per-query relevance summaries, relevance gains and the counting measures."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field

RELVALUE_NONPOOL = -1
"""Relevance value of a retrieved document that was not in the judgment pool."""

RELVALUE_UNJUDGED = -2
"""Relevance value of a retrieved document in the pool that was never judged."""


@dataclass(frozen=True)
class ResRels:
    """Relevance of one query's retrieved documents, in rank order.

    ``rel_levels[k]`` is the number of judged documents at relevance level k.
    """

    results_rel_list: tuple[int, ...] = ()
    rel_levels: tuple[int, ...] = ()
    num_rel: int = 0
    num_rel_ret: int = 0
    num_nonpool: int = 0
    num_unjudged_in_pool: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "results_rel_list", tuple(self.results_rel_list))
        object.__setattr__(self, "rel_levels", tuple(self.rel_levels))

    @property
    def num_ret(self) -> int:
        return len(self.results_rel_list)

    @property
    def num_rel_levels(self) -> int:
        return len(self.rel_levels)


@dataclass(frozen=True)
class ResRelsJg:
    """Relevance summaries of one query, one per judgment group."""

    jgs: tuple[ResRels, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "jgs", tuple(self.jgs))

    @property
    def num_jgs(self) -> int:
        return len(self.jgs)


@dataclass(frozen=True)
class RelGain:
    """The gain given to one relevance level and how many judged docs have it."""

    rel_level: int
    gain: float
    num_at_level: int


@dataclass(frozen=True)
class Gains:
    """Gains of all relevance levels, sorted by increasing gain."""

    rel_gains: tuple[RelGain, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "rel_gains", tuple(self.rel_gains))

    @classmethod
    def from_rel_levels(
        cls,
        rel_levels: Sequence[int],
        overrides: Mapping[int, float] | None = None,
    ) -> "Gains":
        """Build gains where each level's gain is the level itself unless overridden."""
        counts = list(rel_levels)
        level_gains = {level: float(level) for level in range(len(counts))}
        for level, gain in (overrides or {}).items():
            level_gains[int(level)] = float(gain)
        rel_gains = sorted(
            (
                RelGain(
                    rel_level=level,
                    gain=gain,
                    num_at_level=counts[level] if 0 <= level < len(counts) else 0,
                )
                for level, gain in level_gains.items()
            ),
            key=lambda rel_gain: rel_gain.gain,
        )
        return cls(tuple(rel_gains))

    @property
    def num_gains(self) -> int:
        return len(self.rel_gains)

    @property
    def total_num_at_levels(self) -> int:
        return sum(rel_gain.num_at_level for rel_gain in self.rel_gains)

    def gain(self, rel_level: int) -> float:
        """Gain of a relevance level; levels without a gain count as 0."""
        return next(
            (rg.gain for rg in self.rel_gains if rg.rel_level == rel_level), 0.0
        )


def num_ret(res_rels: ResRels) -> int:
    """Number of documents retrieved for the topic."""
    return res_rels.num_ret


def num_rel(res_rels: ResRels) -> int:
    """Number of relevant documents for the topic."""
    return res_rels.num_rel


def num_rel_ret(res_rels: ResRels) -> int:
    """Number of relevant documents retrieved for the topic."""
    return res_rels.num_rel_ret


def num_nonrel_judged_ret(res_rels: ResRels) -> int:
    """Number of judged non-relevant documents retrieved for the topic."""
    return (
        res_rels.num_ret
        - res_rels.num_nonpool
        - res_rels.num_unjudged_in_pool
        - res_rels.num_rel_ret
    )


def num_q(num_queries: int, num_q_rels: int, average_complete: bool) -> int:
    """Number of topics averaged over.

    With complete averaging the number of judged topics is used instead of
    the number of evaluated ones.
    """
    return num_q_rels if average_complete else num_queries


def total_num_rel(
    query_judgments: Iterable[Mapping[str, int] | Sequence[Mapping[str, int]]],
) -> int:
    """Count relevant judgments (relevance > 0) over all queries.

    Each query is either a mapping of docno to relevance, or a sequence of
    such mappings, one per judgment group.
    """
    total = 0
    for judgments in query_judgments:
        if isinstance(judgments, Mapping):
            groups: Sequence[Mapping[str, int]] = (judgments,)
        elif isinstance(judgments, Sequence) and all(
            isinstance(group, Mapping) for group in judgments
        ):
            groups = judgments
        else:
            raise TypeError("judgments are neither qrels nor qrels_jg")
        total += sum(1 for group in groups for rel in group.values() if rel > 0)
    return total