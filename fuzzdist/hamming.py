"""Hamming distance, where a length difference counts as insertions or deletions."""

from __future__ import annotations

import math
from collections.abc import Sequence

from fuzzdist.common import norm_sim_to_norm_dist
from fuzzdist.editops import EditOp, Editops, EditType

__all__ = [
    "CachedHamming",
    "hamming_distance",
    "hamming_editops",
    "hamming_normalized_distance",
    "hamming_normalized_similarity",
    "hamming_similarity",
]


def _maximum(s1: Sequence, s2: Sequence) -> int:
    return max(len(s1), len(s2))


def _distance(s1: Sequence, s2: Sequence, score_cutoff: int | None) -> int:
    dist = sum(a != b for a, b in zip(s1, s2)) + abs(len(s1) - len(s2))
    if score_cutoff is not None and dist > score_cutoff:
        return score_cutoff + 1
    return dist


def _similarity(s1: Sequence, s2: Sequence, score_cutoff: int) -> int:
    maximum = _maximum(s1, s2)
    if score_cutoff > maximum:
        return 0
    dist = _distance(s1, s2, maximum - score_cutoff)
    sim = maximum - dist
    return sim if sim >= score_cutoff else 0


def _normalized_distance(s1: Sequence, s2: Sequence, score_cutoff: float) -> float:
    maximum = _maximum(s1, s2)
    cutoff_distance = math.ceil(maximum * score_cutoff)
    dist = _distance(s1, s2, cutoff_distance)
    norm_dist = dist / maximum if maximum else 0.0
    return norm_dist if norm_dist <= score_cutoff else 1.0


def _normalized_similarity(s1: Sequence, s2: Sequence, score_cutoff: float) -> float:
    norm_dist = _normalized_distance(s1, s2, norm_sim_to_norm_dist(score_cutoff))
    norm_sim = 1.0 - norm_dist
    return norm_sim if norm_sim >= score_cutoff else 0.0


def hamming_distance(s1: Sequence, s2: Sequence, score_cutoff: int | None = None) -> int:
    """Number of differing positions plus the length difference.

    Results above ``score_cutoff`` are reported as ``score_cutoff + 1``.
    """
    return _distance(s1, s2, score_cutoff)


def hamming_similarity(s1: Sequence, s2: Sequence, score_cutoff: int = 0) -> int:
    """Longer length minus the distance; 0 when below ``score_cutoff``."""
    return _similarity(s1, s2, score_cutoff)


def hamming_normalized_distance(s1: Sequence, s2: Sequence, score_cutoff: float = 1.0) -> float:
    """Distance divided by the longer length; 1.0 when above ``score_cutoff``."""
    return _normalized_distance(s1, s2, score_cutoff)


def hamming_normalized_similarity(s1: Sequence, s2: Sequence, score_cutoff: float = 0.0) -> float:
    """One minus the normalized distance; 0.0 when below ``score_cutoff``."""
    return _normalized_similarity(s1, s2, score_cutoff)


def hamming_editops(s1: Sequence, s2: Sequence, score_hint: int | None = None) -> Editops:
    """Edit operations turning ``s1`` into ``s2`` under the Hamming metric.

    ``score_hint`` is accepted for interface symmetry and does not change the result.
    """
    len1, len2 = len(s1), len(s2)
    common = min(len1, len2)
    ops = Editops(src_len=len1, dest_len=len2)
    for pos, (a, b) in enumerate(zip(s1, s2)):
        if a != b:
            ops.append(EditOp(EditType.REPLACE, pos, pos))
    for pos in range(common, len1):
        ops.append(EditOp(EditType.DELETE, pos, len2))
    for pos in range(common, len2):
        ops.append(EditOp(EditType.INSERT, len1, pos))
    return ops


class CachedHamming:
    """Hamming scorer holding the first sequence for repeated comparisons."""

    def __init__(self, s1: Sequence) -> None:
        self._s1 = s1 if isinstance(s1, (str, bytes, tuple)) else tuple(s1)

    def distance(self, s2: Sequence, score_cutoff: int | None = None) -> int:
        return _distance(self._s1, s2, score_cutoff)

    def similarity(self, s2: Sequence, score_cutoff: int = 0) -> int:
        return _similarity(self._s1, s2, score_cutoff)

    def normalized_distance(self, s2: Sequence, score_cutoff: float = 1.0) -> float:
        return _normalized_distance(self._s1, s2, score_cutoff)

    def normalized_similarity(self, s2: Sequence, score_cutoff: float = 0.0) -> float:
        return _normalized_similarity(self._s1, s2, score_cutoff)