"""Block-wise bit-parallel Levenshtein distance with an Ukkonen band over 64-bit words."""

from __future__ import annotations

from collections.abc import Sequence

from fuzzdist.bitops import MASK64, WORD_BITS, ceil_div, popcount
from fuzzdist.levenshtein_bitparallel import (
    UNLIMITED,
    BitMatrixRecord,
    LevenshteinResult,
    LevenshteinRow,
    PatternMatcher,
)
from fuzzdist.pattern_match import BlockPatternMatchVector

__all__ = ["levenshtein_hyrroe2003_block", "levenshtein_row"]


def _trunc_half(x: int) -> int:
    """Halve ``x``, rounding toward zero."""
    return -((-x) // 2) if x < 0 else x // 2


def levenshtein_hyrroe2003_block(
    pm: PatternMatcher,
    s1: Sequence,
    s2: Sequence,
    max_dist: int = UNLIMITED,
    stop_row: int = -1,
    record_matrix: bool = False,
    record_bit_row: bool = False,
) -> LevenshteinResult:
    """Hyyrö's bit-parallel Levenshtein distance for patterns of any length.

    ``pm`` holds the block occurrence masks of ``s1``. Only the blocks inside
    the Ukkonen band are computed. Results above ``max_dist`` are reported as
    ``max_dist + 1``. With ``record_bit_row`` the computation stops after row
    ``stop_row`` of ``s2`` and returns that row's delta vectors with ``dist`` 0.
    """
    len1, len2 = len(s1), len(s2)
    if not len1:
        raise ValueError("pattern must not be empty")
    words = len(pm)
    if words != ceil_div(len1, WORD_BITS):
        raise ValueError("pattern match vector does not match the pattern length")
    if max_dist < 0:
        raise ValueError("maximum distance must not be negative")

    vecs = [LevenshteinRow() for _ in range(words)]
    scores = [(i + 1) * WORD_BITS for i in range(words - 1)]
    scores.append(len1)
    last = 1 << ((len1 - 1) % WORD_BITS)

    res = LevenshteinResult(dist=0)
    if record_matrix:
        full_band = min(len1, 2 * max_dist + 1)
        full_band_words = min(words, full_band // WORD_BITS + 2)
        res.vp = BitMatrixRecord(len2, full_band_words, MASK64)
        res.vn = BitMatrixRecord(len2, full_band_words, 0)

    max_dist = min(max_dist, max(len1, len2))

    band = min(max_dist, _trunc_half(max_dist + len1 - len2)) + 1
    if band <= 0:
        # the length difference alone exceeds the maximum distance
        res.dist = max_dist + 1
        return res

    first_block = 0
    last_block = min(words, ceil_div(band, WORD_BITS)) - 1

    def advance(word: int, row: int, ch: object, hp_carry: int, hn_carry: int) -> tuple[int, int]:
        vec = vecs[word]
        vp, vn = vec.vp, vec.vn
        x = pm.get(word, ch) | hn_carry
        d0 = ((((x & vp) + vp) & MASK64) ^ vp) | x | vn
        hp = vn | (~(d0 | vp) & MASK64)
        hn = d0 & vp

        hp_in, hn_in = hp_carry, hn_carry
        if word < words - 1:
            hp_carry = hp >> 63
            hn_carry = hn >> 63
        else:
            hp_carry = int(bool(hp & last))
            hn_carry = int(bool(hn & last))

        hp = ((hp << 1) | hp_in) & MASK64
        hn = ((hn << 1) | hn_in) & MASK64

        vec.vp = hn | (~(d0 | hp) & MASK64)
        vec.vn = hp & d0

        if record_matrix:
            res.vp[row][word - first_block] = vec.vp
            res.vn[row][word - first_block] = vec.vn

        return hp_carry, hn_carry

    def row_num(word: int) -> int:
        if word + 1 == words:
            return len1 - 1
        return (word + 1) * WORD_BITS - 1

    for row, ch in enumerate(s2):
        hp_carry, hn_carry = 1, 0

        if record_matrix:
            res.vp.set_offset(row, first_block * WORD_BITS)
            res.vn.set_offset(row, first_block * WORD_BITS)

        for word in range(first_block, last_block + 1):
            hp_carry, hn_carry = advance(word, row, ch, hp_carry, hn_carry)
            scores[word] += hp_carry - hn_carry

        max_dist = min(
            max_dist,
            scores[last_block]
            + max(len2 - row - 1, len1 - ((1 + last_block) * WORD_BITS - 1) - 1),
        )

        # extend the band by the next block when it is not certainly beneath it
        if last_block + 1 < words and not (
            row_num(last_block)
            > max_dist - scores[last_block] + 2 * WORD_BITS - 2 - len2 + row + len1
        ):
            last_block += 1
            vecs[last_block] = LevenshteinRow()
            chars_in_block = (len1 - 1) % WORD_BITS + 1 if last_block + 1 == words else WORD_BITS
            scores[last_block] = scores[last_block - 1] + chars_in_block - (hp_carry - hn_carry)
            hp_carry, hn_carry = advance(last_block, row, ch, hp_carry, hn_carry)
            scores[last_block] += hp_carry - hn_carry

        while last_block >= first_block:
            in_band_score = scores[last_block] < max_dist + WORD_BITS
            in_band_row = (
                row_num(last_block)
                <= max_dist - scores[last_block] + 2 * WORD_BITS - 2 - len2 + row + len1 + 1
            )
            if in_band_score and in_band_row:
                break
            last_block -= 1

        while first_block <= last_block:
            in_band_score = scores[first_block] < max_dist + WORD_BITS
            in_band_row = row_num(first_block) >= scores[first_block] - max_dist - len2 + len1 + row
            if in_band_score and in_band_row:
                break
            first_block += 1

        if last_block < first_block:
            res.dist = max_dist + 1
            return res

        if record_bit_row and row == stop_row:
            if first_block == 0:
                res.prev_score = stop_row + 1
            else:
                # count backwards to the score at the last position of the previous block
                relevant_bits = min((first_block + 1) * WORD_BITS, len1) % WORD_BITS
                mask = MASK64
                if relevant_bits:
                    mask >>= WORD_BITS - relevant_bits
                vec = vecs[first_block]
                res.prev_score = (
                    scores[first_block] + popcount(vec.vn & mask) - popcount(vec.vp & mask)
                )
            res.first_block = first_block
            res.last_block = last_block
            res.vecs = vecs
            res.dist = 0
            return res

    res.dist = scores[words - 1]
    if res.dist > max_dist:
        res.dist = max_dist + 1
    return res


def levenshtein_row(
    s1: Sequence, s2: Sequence, max_dist: int = UNLIMITED, stop_row: int = -1
) -> LevenshteinResult:
    """Delta vectors of row ``stop_row`` of the Levenshtein matrix of ``s1`` and ``s2``."""
    return levenshtein_hyrroe2003_block(
        BlockPatternMatchVector(s1), s1, s2, max_dist, stop_row, record_bit_row=True
    )