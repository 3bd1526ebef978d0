"""Levenshtein distance with weights, score cutoffs and edit-operation recovery."""

from __future__ import annotations

import math
from collections.abc import Hashable, Sequence
from dataclasses import dataclass

from fuzzdist.bitops import WORD_BITS, ceil_div
from fuzzdist.common import norm_sim_to_norm_dist, remove_common_affix
from fuzzdist.editops import EditOp, Editops, EditType
from fuzzdist.levenshtein_bitparallel import (
    UNLIMITED,
    levenshtein_hyrroe2003,
    levenshtein_hyrroe2003_small_band,
    levenshtein_mbleven2018,
)
from fuzzdist.levenshtein_block import levenshtein_hyrroe2003_block, levenshtein_row
from fuzzdist.pattern_match import BlockPatternMatchVector, PatternMatchVector

__all__ = [
    "LevenshteinWeights",
    "generalized_levenshtein_distance",
    "levenshtein_distance",
    "levenshtein_editops",
    "levenshtein_maximum",
    "levenshtein_normalized_distance",
    "levenshtein_normalized_similarity",
    "levenshtein_similarity",
    "uniform_levenshtein_distance",
]

_HINT_FLOOR = 31
_HIRSCHBERG_MIN_MATRIX = 1024 * 1024
_OBJECT_CODE_BASE = 1 << 32


@dataclass(frozen=True)
class LevenshteinWeights:
    """Costs of an insertion, a deletion and a substitution."""

    insert_cost: int = 1
    delete_cost: int = 1
    replace_cost: int = 1


WeightsLike = LevenshteinWeights | tuple[int, int, int] | None


def _weights(weights: WeightsLike) -> LevenshteinWeights:
    if weights is None:
        return LevenshteinWeights()
    if isinstance(weights, LevenshteinWeights):
        return weights
    return LevenshteinWeights(*weights)


def _limit(value: int | None) -> int:
    if value is None:
        return UNLIMITED
    if value < 0:
        raise ValueError("score cutoff must not be negative")
    return value


def _encode(*seqs: Sequence) -> tuple[list[int], ...]:
    """Map elements to integer codes so str, bytes and other sequences compare alike."""
    codes: dict[Hashable, int] = {}

    def code(x: Hashable) -> int:
        if isinstance(x, str) and len(x) == 1:
            return ord(x)
        if isinstance(x, int):
            return x
        return codes.setdefault(x, _OBJECT_CODE_BASE + len(codes))

    return tuple([code(x) for x in s] for s in seqs)


def levenshtein_maximum(len1: int, len2: int, weights: WeightsLike = None) -> int:
    """Largest possible weighted Levenshtein distance for the given lengths."""
    w = _weights(weights)
    max_dist = len1 * w.delete_cost + len2 * w.insert_cost
    if len1 >= len2:
        max_dist = min(max_dist, len2 * w.replace_cost + (len1 - len2) * w.delete_cost)
    else:
        max_dist = min(max_dist, len1 * w.replace_cost + (len2 - len1) * w.insert_cost)
    return max_dist


def _wagner_fischer(s1: list[int], s2: list[int], w: LevenshteinWeights, max_dist: int) -> int:
    cache = [i * w.delete_cost for i in range(len(s1) + 1)]
    for ch2 in s2:
        temp = cache[0]
        cache[0] += w.insert_cost
        for i, ch1 in enumerate(s1):
            if ch1 != ch2:
                temp = min(
                    cache[i] + w.delete_cost,
                    cache[i + 1] + w.insert_cost,
                    temp + w.replace_cost,
                )
            cache[i + 1], temp = temp, cache[i + 1]
    dist = cache[-1]
    return dist if dist <= max_dist else max_dist + 1


def generalized_levenshtein_distance(
    s1: Sequence, s2: Sequence, weights: WeightsLike = None, max_dist: int | None = None
) -> int:
    """Weighted Levenshtein distance by dynamic programming.

    Results above ``max_dist`` are reported as ``max_dist + 1``.
    """
    w = _weights(weights)
    limit = _limit(max_dist)
    a, b = _encode(s1, s2)
    min_edits = max((len(a) - len(b)) * w.delete_cost, (len(b) - len(a)) * w.insert_cost)
    if min_edits > limit:
        return limit + 1
    a, b, _ = remove_common_affix(a, b)
    return _wagner_fischer(a, b, w, limit)


def _uniform(s1: list[int], s2: list[int], score_cutoff: int, score_hint: int) -> int:
    if len(s1) < len(s2):
        s1, s2 = s2, s1

    score_cutoff = min(score_cutoff, max(len(s1), len(s2)))
    score_hint = max(score_hint, _HINT_FLOOR)

    if score_cutoff == 0:
        return int(s1 != s2)

    # at least the length difference in insertions or deletions is needed
    if score_cutoff < len(s1) - len(s2):
        return score_cutoff + 1

    s1, s2, _ = remove_common_affix(s1, s2)
    if not s1 or not s2:
        return len(s1) + len(s2)

    if score_cutoff < 4:
        return levenshtein_mbleven2018(s1, s2, score_cutoff)

    full_band = min(len(s1), 2 * score_cutoff + 1)

    if len(s2) <= WORD_BITS:
        return levenshtein_hyrroe2003(PatternMatchVector(s2), s2, s1, score_cutoff).dist
    if full_band <= WORD_BITS:
        return levenshtein_hyrroe2003_small_band(s1, s2, score_cutoff).dist

    pm = BlockPatternMatchVector(s1)
    while score_hint < score_cutoff:
        score = levenshtein_hyrroe2003_block(pm, s1, s2, score_hint).dist
        if score <= score_hint:
            return score
        score_hint *= 2
    return levenshtein_hyrroe2003_block(pm, s1, s2, score_cutoff).dist


def uniform_levenshtein_distance(
    s1: Sequence, s2: Sequence, score_cutoff: int | None = None, score_hint: int | None = None
) -> int:
    """Levenshtein distance with unit costs, using bit-parallel algorithms.

    Results above ``score_cutoff`` are reported as ``score_cutoff + 1``.
    ``score_hint`` is an expected distance used to try cheaper narrow bands first.
    """
    a, b = _encode(s1, s2)
    hint = UNLIMITED if score_hint is None else score_hint
    return _uniform(a, b, _limit(score_cutoff), hint)


def _distance(
    s1: list[int], s2: list[int], w: LevenshteinWeights, score_cutoff: int, score_hint: int
) -> int:
    if w.insert_cost == w.delete_cost:
        # with free insertions and deletions there can be no edit distance
        if w.insert_cost == 0:
            return 0
        if w.insert_cost == w.replace_cost:
            new_cutoff = ceil_div(score_cutoff, w.insert_cost)
            new_hint = ceil_div(score_hint, w.insert_cost)
            dist = _uniform(s1, s2, new_cutoff, new_hint) * w.insert_cost
            return dist if dist <= score_cutoff else score_cutoff + 1
    return _wagner_fischer(s1, s2, w, score_cutoff)


def levenshtein_distance(
    s1: Sequence,
    s2: Sequence,
    weights: WeightsLike = None,
    score_cutoff: int | None = None,
    score_hint: int | None = None,
) -> int:
    """Weighted Levenshtein distance between two sequences.

    Results above ``score_cutoff`` are reported as ``score_cutoff + 1``.
    """
    a, b = _encode(s1, s2)
    hint = UNLIMITED if score_hint is None else score_hint
    return _distance(a, b, _weights(weights), _limit(score_cutoff), hint)


def levenshtein_similarity(
    s1: Sequence, s2: Sequence, weights: WeightsLike = None, score_cutoff: int = 0
) -> int:
    """Maximum possible distance minus the distance; 0 when below ``score_cutoff``."""
    w = _weights(weights)
    maximum = levenshtein_maximum(len(s1), len(s2), w)
    if score_cutoff > maximum:
        return 0
    dist = levenshtein_distance(s1, s2, w, maximum - score_cutoff)
    sim = maximum - dist
    return sim if sim >= score_cutoff else 0


def levenshtein_normalized_distance(
    s1: Sequence, s2: Sequence, weights: WeightsLike = None, score_cutoff: float = 1.0
) -> float:
    """Distance divided by the maximum possible distance; 1.0 when above ``score_cutoff``."""
    w = _weights(weights)
    maximum = levenshtein_maximum(len(s1), len(s2), w)
    cutoff_distance = math.ceil(maximum * score_cutoff)
    dist = levenshtein_distance(s1, s2, w, max(cutoff_distance, 0))
    norm_dist = dist / maximum if maximum else 0.0
    return norm_dist if norm_dist <= score_cutoff else 1.0


def levenshtein_normalized_similarity(
    s1: Sequence, s2: Sequence, weights: WeightsLike = None, score_cutoff: float = 0.0
) -> float:
    """One minus the normalized distance; 0.0 when below ``score_cutoff``."""
    norm_dist = levenshtein_normalized_distance(
        s1, s2, weights, norm_sim_to_norm_dist(score_cutoff)
    )
    norm_sim = 1.0 - norm_dist
    return norm_sim if norm_sim >= score_cutoff else 0.0


def _recover_alignment(
    s1: list[int], s2: list[int], vp, vn, src_pos: int, dest_pos: int
) -> list[EditOp]:
    """Walk the recorded delta vectors back from the last cell, collecting edits."""
    col, row = len(s1), len(s2)
    ops: list[EditOp] = []

    while row and col:
        if vp.test_bit(row - 1, col - 1):
            col -= 1
            ops.append(EditOp(EditType.DELETE, col + src_pos, row + dest_pos))
            continue
        row -= 1
        if row and vn.test_bit(row - 1, col - 1):
            ops.append(EditOp(EditType.INSERT, col + src_pos, row + dest_pos))
        else:
            col -= 1
            if s1[col] != s2[row]:
                ops.append(EditOp(EditType.REPLACE, col + src_pos, row + dest_pos))

    while col:
        col -= 1
        ops.append(EditOp(EditType.DELETE, col + src_pos, row + dest_pos))
    while row:
        row -= 1
        ops.append(EditOp(EditType.INSERT, col + src_pos, row + dest_pos))

    ops.reverse()
    return ops


def _align(
    s1: list[int], s2: list[int], max_dist: int, src_pos: int, dest_pos: int
) -> list[EditOp]:
    max_dist = min(max_dist, max(len(s1), len(s2)))
    full_band = min(len(s1), 2 * max_dist + 1)

    if not s1 or not s2:
        return _recover_alignment(s1, s2, None, None, src_pos, dest_pos)
    if len(s1) <= WORD_BITS:
        matrix = levenshtein_hyrroe2003(PatternMatchVector(s1), s1, s2, record_matrix=True)
    elif full_band <= WORD_BITS:
        matrix = levenshtein_hyrroe2003_small_band(s1, s2, max_dist, record_matrix=True)
    else:
        matrix = levenshtein_hyrroe2003_block(
            BlockPatternMatchVector(s1), s1, s2, max_dist, record_matrix=True
        )

    if matrix.dist == 0:
        return []
    return _recover_alignment(s1, s2, matrix.vp, matrix.vn, src_pos, dest_pos)


@dataclass
class _HirschbergPos:
    left_score: int = 0
    right_score: int = 0
    s1_mid: int = 0
    s2_mid: int = 0


def _find_hirschberg_pos(s1: list[int], s2: list[int], max_dist: int) -> _HirschbergPos:
    len1 = len(s1)
    left_size = len(s2) // 2
    right_size = len(s2) - left_size
    rev1, rev2 = s1[::-1], s2[::-1]
    max_dist = max(max_dist, 1)

    while True:
        right_row = levenshtein_row(rev1, rev2, max_dist, right_size - 1)
        if right_row.dist > max_dist:
            max_dist *= 2
            continue

        right_first = right_row.first_block * WORD_BITS
        right_last = min(len1, right_row.last_block * WORD_BITS + WORD_BITS)
        right_scores = [right_row.prev_score]
        for i in range(right_first, right_last):
            word, bit = divmod(i, WORD_BITS)
            vec = right_row.vecs[word]
            right_scores.append(right_scores[-1] - ((vec.vn >> bit) & 1) + ((vec.vp >> bit) & 1))

        left_row = levenshtein_row(s1, s2, max_dist, left_size - 1)
        if left_row.dist > max_dist:
            max_dist *= 2
            continue

        left_first = left_row.first_block * WORD_BITS
        left_last = min(len1, left_row.last_block * WORD_BITS + WORD_BITS)
        left_score = left_row.prev_score
        best: int | None = None
        pos = _HirschbergPos(s2_mid=left_size)
        for i in range(left_first, left_last):
            word, bit = divmod(i, WORD_BITS)
            vec = left_row.vecs[word]
            left_score += ((vec.vp >> bit) & 1) - ((vec.vn >> bit) & 1)

            right_index = len1 - i - 1 - right_first
            if not 0 <= right_index < len(right_scores):
                continue
            total = right_scores[right_index] + left_score
            if best is None or total < best:
                best = total
                pos = _HirschbergPos(left_score, right_scores[right_index], i + 1, left_size)

        if pos.left_score + pos.right_score > max_dist:
            max_dist *= 2
            continue
        return pos


def _align_hirschberg(
    s1: list[int], s2: list[int], src_pos: int, dest_pos: int, max_dist: int
) -> list[EditOp]:
    # common prefix and suffix are matches and produce no edit operations
    s1, s2, affix = remove_common_affix(s1, s2)
    src_pos += affix.prefix_len
    dest_pos += affix.prefix_len

    max_dist = min(max_dist, max(len(s1), len(s2)))
    full_band = min(len(s1), 2 * max_dist + 1)
    matrix_size = 2 * full_band * len(s2) // 8

    if matrix_size < _HIRSCHBERG_MIN_MATRIX or len(s1) <= WORD_BITS or len(s2) < 10:
        return _align(s1, s2, max_dist, src_pos, dest_pos)

    hpos = _find_hirschberg_pos(s1, s2, max_dist)
    left = _align_hirschberg(
        s1[: hpos.s1_mid], s2[: hpos.s2_mid], src_pos, dest_pos, hpos.left_score
    )
    right = _align_hirschberg(
        s1[hpos.s1_mid :],
        s2[hpos.s2_mid :],
        src_pos + hpos.s1_mid,
        dest_pos + hpos.s2_mid,
        hpos.right_score,
    )
    return left + right


def levenshtein_editops(s1: Sequence, s2: Sequence, score_hint: int | None = None) -> Editops:
    """Minimal edit operations turning ``s1`` into ``s2`` with unit costs.

    ``score_hint`` is an expected distance; when it is small compared to the
    lengths, the distance is computed first to narrow the alignment band.
    """
    a, b = _encode(s1, s2)
    hint = max(UNLIMITED if score_hint is None else score_hint, _HINT_FLOOR)

    score_cutoff = max(len(a), len(b))
    if UNLIMITED // 2 > hint and 2 * hint < score_cutoff:
        score_cutoff = _distance(a, b, LevenshteinWeights(), score_cutoff, hint)

    ops = _align_hirschberg(a, b, 0, 0, score_cutoff)
    return Editops(ops=ops, src_len=len(a), dest_len=len(b))