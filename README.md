# fuzzdist

Pure Python string distance and similarity metrics:

- **Levenshtein** distance, with optional insert/delete/replace weights,
  similarity and normalized scores, and minimal edit operations
  (`fuzzdist.levenshtein`). Unit-cost distances use bit-parallel algorithms
  over 64-bit words.
- **Hamming** distance, where a length difference counts as insertions or
  deletions, with edit operations (`fuzzdist.hamming`)
- **Jaro** similarity and distance (`fuzzdist.jaro`)

The metrics accept sequences of hashable items: `str`, `bytes`, lists of
integers or tuples of tokens. There are no dependencies outside the
standard library.

## Installation

```
pip install fuzzdist
```

## Usage

```python
from fuzzdist.levenshtein import levenshtein_distance, levenshtein_editops
from fuzzdist.hamming import hamming_distance, CachedHamming
from fuzzdist.jaro import jaro_similarity, CachedJaro
from fuzzdist.editops import editops_apply

levenshtein_distance("kitten", "sitting")        # 3
hamming_distance("aaaa", "abaa")                 # 1
jaro_similarity("martha", "marhta")              # 0.944...

ops = levenshtein_editops("kitten", "sitting")
len(ops)                                          # 3
editops_apply(ops, "kitten", "sitting")           # "sitting"
```

`editops_apply` and `opcodes_apply` return a `str` when both inputs are
strings, `bytes` when both are bytes, and a list otherwise. An `Editops`
value holds its operations in `ops` (each an `EditOp` with `type`,
`src_pos` and `dest_pos`) together with `src_len` and `dest_len`.

### Score cutoffs

Integer distance functions take a `score_cutoff`. When the distance is
larger than the cutoff, `score_cutoff + 1` is returned, which lets the
search stop early; the default `None` means no limit:

```python
levenshtein_distance("South Korea", "North Korea", score_cutoff=0)  # 1
```

Similarity functions return `0` (or `0.0`) when the result falls below
their `score_cutoff`. Normalized distances and the Jaro distance return
`1.0` when the result lies above their `score_cutoff`.

`levenshtein_distance` and `levenshtein_editops` also take a `score_hint`,
an expected distance that lets narrower, cheaper searches be tried first.

### Weights

```python
from fuzzdist.levenshtein import LevenshteinWeights, levenshtein_distance

levenshtein_distance("abc", "abd", weights=LevenshteinWeights(1, 1, 2))  # 2
```

Weights may also be given as an `(insert, delete, replace)` tuple.
`levenshtein_maximum`, `levenshtein_similarity`,
`levenshtein_normalized_distance` and `levenshtein_normalized_similarity`
take the same weights.

### Cached scorers

When one string is compared with many others, a cached scorer keeps the
first string ready for reuse. `CachedJaro` and `CachedHamming` offer
`similarity`, `distance`, `normalized_similarity` and
`normalized_distance`:

```python
scorer = CachedJaro("james")
[scorer.similarity(name) for name in ("jamie", "jones", "john")]
```

### Lower-level modules

- `fuzzdist.bitops`: 64-bit word helpers (`popcount`, `blsi`, `rotl`, ...)
- `fuzzdist.common`: cutoff and normalization helpers, `remove_common_affix`
- `fuzzdist.pattern_match`: occurrence bit masks per character
  (`PatternMatchVector`, `BlockPatternMatchVector`)
- `fuzzdist.levenshtein_bitparallel` and `fuzzdist.levenshtein_block`: the
  Levenshtein kernels used by `fuzzdist.levenshtein`

## What it does not do

The package is a library only: it has no command-line tool. It provides the
three metrics above and nothing more; there is no search for the best
matches in a list of choices. `Opcodes` can be built by hand and applied
with `opcodes_apply`, but no function computes opcodes from two strings.

## Running the tests

```
pip install -e ".[test]"
pytest
```