"""Reading per-query reference means and standard deviations of measures.

Each line has exactly the fields::

    qid  measure_name  mean  stddev

Every line must hold these four fields; blank lines are not allowed.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from itertools import groupby
from operator import itemgetter
from os import PathLike

_NUMBER = re.compile(
    r"\s*([+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf(?:inity)?|nan))",
    re.IGNORECASE,
)


def _atof(text: str) -> float:
    """Value of the longest numeric prefix of ``text``, or 0.0 if there is none."""
    match = _NUMBER.match(text)
    return float(match.group(1)) if match else 0.0


class ZScoresFormatError(ValueError):
    """Z-score text that cannot be read; ``line`` is the offending line number."""

    def __init__(self, message: str, line: int | None = None) -> None:
        super().__init__(message)
        self.line = line


@dataclass(frozen=True)
class ZScore:
    """Reference mean and standard deviation of one measure."""

    meas: str
    mean: float
    stddev: float


@dataclass(frozen=True)
class QueryZScores:
    """Reference values of one query, sorted by measure name."""

    qid: str
    zscores: tuple[ZScore, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "zscores", tuple(self.zscores))

    @property
    def num_zscores(self) -> int:
        return len(self.zscores)


def parse_zscores(text: str) -> list[QueryZScores]:
    """Parse z-score text into per-query values, sorted by qid.

    Raises ZScoresFormatError for empty text or any line that does not hold
    exactly four fields.
    """
    if not text:
        raise ZScoresFormatError("zscores text is empty")

    lines = text.split("\n")
    if text.endswith("\n"):
        lines.pop()

    entries: list[tuple[str, str, str, str]] = []
    for number, line in enumerate(lines, start=1):
        fields = line.split()
        if len(fields) != 4:
            raise ZScoresFormatError(f"Malformed line {number}", number)
        qid, meas, mean, stddev = fields
        entries.append((qid, meas, mean, stddev))

    entries.sort(key=itemgetter(0, 1))
    return [
        QueryZScores(
            qid=qid,
            zscores=tuple(
                ZScore(meas, _atof(mean), _atof(stddev))
                for _, meas, mean, stddev in group
            ),
        )
        for qid, group in groupby(entries, key=itemgetter(0))
    ]


def read_zscores(path: str | PathLike[str]) -> list[QueryZScores]:
    """Read and parse a z-score file; an empty file is an error."""
    with open(path, encoding="utf-8", newline="") as handle:
        text = handle.read()
    if not text:
        raise ZScoresFormatError(f"Cannot read zscores file '{path}'")
    return parse_zscores(text)