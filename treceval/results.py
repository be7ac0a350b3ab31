"""Reading retrieval results in the six-column text format.

Each content line has the fields::

    qid  iter  docno  rank  sim  run_id

Only qid, docno and sim are kept per line.  The rank field is ignored:
ranks are assigned later by sorting on sim.  Any field after run_id is
ignored.  The run id is taken from the last content line only.  Blank lines
and lines whose first non-blank character is ``#`` are skipped.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from itertools import groupby
from operator import itemgetter
from os import PathLike
from typing import Iterator

_NUMBER = re.compile(
    r"\s*([+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf(?:inity)?|nan))",
    re.IGNORECASE,
)


def _atof(text: str) -> float:
    """Value of the longest numeric prefix of ``text``, or 0.0 if there is none."""
    match = _NUMBER.match(text)
    return float(match.group(1)) if match else 0.0


class ResultsFormatError(ValueError):
    """Results text that cannot be read; ``line`` is the offending content line."""

    def __init__(self, message: str, line: int | None = None) -> None:
        super().__init__(message)
        self.line = line


@dataclass(frozen=True)
class TextResult:
    """One retrieved document and its similarity."""

    docno: str
    sim: float


@dataclass(frozen=True)
class QueryResults:
    """Retrieved documents of one query, sorted by docno."""

    qid: str
    run_id: str
    results: tuple[TextResult, ...] = ()
    ret_format: str = "trec_results"

    def __post_init__(self) -> None:
        object.__setattr__(self, "results", tuple(self.results))

    @property
    def num_results(self) -> int:
        return len(self.results)


def _content_lines(text: str) -> Iterator[str]:
    for raw in text.split("\n"):
        stripped = raw.lstrip()
        if not stripped or stripped.startswith("#"):
            continue
        yield raw


def parse_trec_results(text: str) -> list[QueryResults]:
    """Parse results text into per-query results, sorted by qid.

    Raises ResultsFormatError for empty text or a line with fewer than six
    fields; the error's line number counts content lines only.
    """
    if not text:
        raise ResultsFormatError("results text is empty")

    entries: list[tuple[str, str, str]] = []
    run_id = ""
    for number, line in enumerate(_content_lines(text), start=1):
        fields = line.split()
        if len(fields) < 6:
            raise ResultsFormatError(f"Malformed line {number}", number)
        qid, _iteration, docno, _rank, sim, run_id = fields[:6]
        entries.append((qid, docno, sim))

    entries.sort(key=itemgetter(0, 1))
    return [
        QueryResults(
            qid=qid,
            run_id=run_id,
            results=tuple(TextResult(docno, _atof(sim)) for _, docno, sim in group),
        )
        for qid, group in groupby(entries, key=itemgetter(0))
    ]


def read_trec_results(path: str | PathLike[str]) -> list[QueryResults]:
    """Read and parse a results file; an empty file is an error."""
    with open(path, encoding="utf-8", newline="") as handle:
        text = handle.read()
    if not text:
        raise ResultsFormatError(f"Cannot read results file '{path}'")
    return parse_trec_results(text)