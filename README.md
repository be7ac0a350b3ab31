# treceval

`treceval` computes evaluation measures for ranked retrieval runs in the style
of TREC. It provides:

- Readers for six-column results files and for z-score reference files.
- Measures over a judged ranking of one topic. These include precision at
  cutoffs, R-precision, average precision, bpref, infAP, interpolated
  precision, G and the nDCG family.
- Measures over preference judgments of one topic.

The package has no runtime dependencies.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Reading input files

### Results files

A results file has one retrieved document per line:

```
qid  iter  docno  rank  sim  run_id
```

Fields are separated by whitespace. The reader skips blank lines and lines
whose first non-blank character is `#`. Fields after `run_id` are ignored.

Only three fields are kept from each line: `qid`, `docno` and `sim`. The
`rank` field is ignored. The run id is taken from the last content line.

```python
from treceval.results import parse_trec_results, read_trec_results

queries = read_trec_results("run.txt")
queries = parse_trec_results("301 Q0 DOC-1 1 12.5 myrun\n")
```

Both functions return a list of `QueryResults`, sorted by query id. Each one
holds:

- `qid`
- `run_id`
- `results`: a tuple of `TextResult(docno, sim)`, sorted by docno

`ResultsFormatError` is raised in these cases:

- the text is empty;
- the file is empty;
- a content line has fewer than six fields.

The error's `line` attribute holds the number of the offending content line.

### Z-score files

Every line of a z-score file must hold exactly four fields:
`qid measure mean stddev`.

Read the file with `read_zscores` or parse text with `parse_zscores`. Both
are in `treceval.zscores`. They return a list of `QueryZScores`, sorted by
qid. Each `QueryZScores` holds `ZScore(meas, mean, stddev)` entries, sorted
by measure name.

Any line that does not have four fields raises `ZScoresFormatError`. This
includes blank lines.

## Judged rankings

The ranking measures take a `ResRels` from `treceval.ranking`. It describes
one topic and holds:

- `results_rel_list`: the relevance value of each retrieved document, in
  rank order. `RELVALUE_NONPOOL` (-1) marks a document outside the judgment
  pool. `RELVALUE_UNJUDGED` (-2) marks a pooled document that was not judged.
- `rel_levels`: the number of judged documents at each relevance level.
- The counts `num_rel`, `num_rel_ret`, `num_nonpool` and
  `num_unjudged_in_pool`.
- The properties `num_ret` and `num_rel_levels`.

`ResRelsJg` collects one `ResRels` per judgment group. It is used by the
measures averaged over groups.

```python
from treceval.ranking import ResRels
from treceval.ap import average_precision
from treceval.cutoff import precision_at

res_rels = ResRels(
    results_rel_list=(1, 0, 1, 0),
    rel_levels=(5, 3),
    num_rel=3,
    num_rel_ret=2,
)
ap = average_precision(res_rels)
p = precision_at(res_rels, cutoffs=(1, 2, 5))  # {1: ..., 2: ..., 5: ...}
```

### Relevance levels and cutoffs

Most measures take `relevance_level`, which defaults to 1. A document counts
as relevant when its value is at least this level.

Measures at cutoffs return a dict keyed by the cutoff. Document cutoffs must
be positive and without duplicates; otherwise `ValueError` is raised. Give
them in ascending order.

### Measures

| Module | Functions |
| --- | --- |
| `treceval.ranking` | `num_ret`, `num_rel`, `num_rel_ret`, `num_nonrel_judged_ret`, `num_q`, `total_num_rel` |
| `treceval.cutoff` | `precision_at`, `precision_at_avgjg` |
| `treceval.rprec` | `r_precision`, `rprec_mult`, `rprec_mult_avgjg` |
| `treceval.ap` | `average_precision`, `map_avgjg`, `map_cut`, `gm_map`, `bin_g` |
| `treceval.interpolated` | `iprec_at_recall`, `eleven_pt_avg` |
| `treceval.judged` | `bpref`, `gm_bpref`, `inf_ap` |
| `treceval.gain` | `normalized_gain` |
| `treceval.ndcg` | `ndcg`, `dcg`, `ideal_dcg`, `ndcg_cut`, `ndcg_p`, `rndcg` |
| `treceval.ndcg_rel` | `ndcg_rel` |

Notes on particular functions:

- **`gm_map` and `gm_bpref`** return the natural log of the score, floored
  at `MIN_GEO_MEAN`. Average these logs over topics and exponentiate to get
  a geometric mean.
- **`total_num_rel`** counts judgments with relevance > 0 over all queries.
  Each query is either a mapping of docno to relevance, or a sequence of such
  mappings, one per judgment group.
- **`num_q`** returns either the number of evaluated topics or the number of
  judged topics. Which one depends on its `average_complete` flag.
- **`eleven_pt_avg`** raises `ValueError` when it is given no recall points.

### Gains

The graded measures take a `Gains` table: `normalized_gain`, `ndcg`, `dcg`,
`ideal_dcg`, `ndcg_p`, `rndcg` and `ndcg_rel`.

Build the table with `Gains.from_rel_levels(rel_levels, overrides)`. Each
level's gain is the level itself unless `overrides` maps it to another value.
Gains may be zero or negative.

```python
from treceval.ranking import Gains, ResRels
from treceval.ndcg import ndcg

res_rels = ResRels(
    results_rel_list=(2, 0, 1),
    rel_levels=(4, 1, 1),
    num_rel=2,
    num_rel_ret=2,
)
gains = Gains.from_rel_levels(res_rels.rel_levels, {1: 3.5, 2: 9.0})
score = ndcg(res_rels, gains)
```

`ndcg_cut` does not take a `Gains` table. It uses the relevance values
themselves as gains.

## Preference measures

Preference measures take a `ResultsPrefs` from `treceval.prefs`. It holds
one `JudgmentGroup` per group of preference judgments, together with
`num_judged` and `num_judged_ret`.

A `JudgmentGroup` carries:

- its fulfilled and possible preference counts;
- its relevant and nonrelevant counts;
- its preferences, in one of two forms:
  - as `EquivalenceClass` entries in `ecs`, or
  - as a square `prefs_array` with a matching `rel_array`.

The measures:

- `treceval.prefs` provides `prefs_avgjg`, `prefs_avgjg_imp`,
  `prefs_avgjg_ret`, `prefs_num_prefs_ful` and `prefs_num_prefs_ful_ret`.
- `treceval.rnonrel` provides `prefs_avgjg_rnonrel` and
  `prefs_avgjg_rnonrel_ret`. These treat the number of nonrelevant documents
  in each group as equal to the number of relevant ones.
  - If there are fewer, fulfilled preferences are added.
  - If there are more, only the first R nonrelevant documents take part, and
    the counts are recomputed from `ecs` or `prefs_array`.

## What the package does not do

The package works on data that is already prepared. It does not:

- read relevance judgment (qrels) or preference files;
- build `ResRels`, `ResRelsJg` or `ResultsPrefs` by matching a run against
  judgments;
- average measures over topics;
- format or print evaluation reports;
- provide a command-line program.

Callers build the per-topic inputs, call the measure functions and combine
the results themselves.