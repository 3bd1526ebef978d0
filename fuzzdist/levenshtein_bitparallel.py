"""Bit-parallel Levenshtein kernels: mbleven, Hyyrö 2003 and its narrow-band variants."""

from __future__ import annotations

from collections.abc import Hashable, Sequence
from dataclasses import dataclass, field
from typing import Protocol

from fuzzdist.bitops import MASK64, WORD_BITS, shr64

__all__ = [
    "UNLIMITED",
    "BitMatrixRecord",
    "LevenshteinResult",
    "LevenshteinRow",
    "levenshtein_hyrroe2003",
    "levenshtein_hyrroe2003_small_band",
    "levenshtein_hyrroe2003_small_band_block",
    "levenshtein_mbleven2018",
]

UNLIMITED = (1 << 63) - 1

_DIAGONAL = 1 << 63
_HORIZONTAL = 1 << 62

# Edit sequences per (max distance, length difference); two bits per operation:
# 01 = delete, 10 = insert, 11 = substitute.
_MBLEVEN2018 = (
    (0x03,),
    (0x01,),
    (0x0F, 0x09, 0x06),
    (0x0D, 0x07),
    (0x05,),
    (0x3F, 0x27, 0x2D, 0x39, 0x36, 0x1E, 0x1B),
    (0x3D, 0x37, 0x1F, 0x25, 0x19, 0x16),
    (0x35, 0x1D, 0x17),
    (0x15,),
)


class PatternMatcher(Protocol):
    def get(self, block: int, key: object) -> int: ...

    def __len__(self) -> int: ...


@dataclass
class LevenshteinRow:
    """Vertical positive and negative delta vectors of one 64-bit block."""

    vp: int = MASK64
    vn: int = 0


class BitMatrixRecord:
    """Rows of 64-bit words, each row shifted by its own column offset."""

    def __init__(self, rows: int, cols: int, fill: int = 0) -> None:
        self.rows = rows
        self.cols = cols
        self._words = [[fill & MASK64] * cols for _ in range(rows)]
        self._offsets = [0] * rows

    def __len__(self) -> int:
        return self.rows

    def __getitem__(self, row: int) -> list[int]:
        return self._words[row]

    def set_offset(self, row: int, offset: int) -> None:
        self._offsets[row] = offset

    def offset(self, row: int) -> int:
        return self._offsets[row]

    def test_bit(self, row: int, col: int) -> bool:
        """Whether the bit for column ``col`` is set; False outside the stored band."""
        offset = self._offsets[row]
        if offset < 0:
            col -= offset
        elif col >= offset:
            col -= offset
        else:
            return False
        word, bit = divmod(col, WORD_BITS)
        words = self._words[row]
        if word >= len(words):
            return False
        return bool((words[word] >> bit) & 1)


@dataclass
class LevenshteinResult:
    """Distance plus whatever the kernel was asked to record."""

    dist: int
    vp: BitMatrixRecord | None = None
    vn: BitMatrixRecord | None = None
    first_block: int = 0
    last_block: int = 0
    prev_score: int = 0
    vecs: list[LevenshteinRow] = field(default_factory=list)


def _advance(x: int, vp: int, vn: int) -> tuple[int, int, int]:
    d0 = ((((x & vp) + vp) & MASK64) ^ vp) | x | vn
    hp = vn | (~(d0 | vp) & MASK64)
    hn = d0 & vp
    return d0, hp, hn


def _shift_band(d0: int, hp: int, hn: int) -> tuple[int, int]:
    shifted = d0 >> 1
    return hn | (~(shifted | hp) & MASK64), shifted & hp


def levenshtein_mbleven2018(s1: Sequence, s2: Sequence, max_dist: int) -> int:
    """Levenshtein distance for ``1 <= max_dist <= 3`` by trying every edit pattern.

    The sequences must be non-empty and have no common prefix or suffix.
    Results above ``max_dist`` are reported as ``max_dist + 1``.
    """
    if not 1 <= max_dist <= 3:
        raise ValueError("mbleven supports a maximum distance between 1 and 3")
    if not s1 or not s2:
        raise ValueError("mbleven requires non-empty sequences")

    if len(s1) < len(s2):
        s1, s2 = s2, s1
    len1, len2 = len(s1), len(s2)
    len_diff = len1 - len2

    if len_diff > max_dist:
        return max_dist + 1
    if max_dist == 1:
        return max_dist + int(len_diff == 1 or len1 != 1)

    ops_index = (max_dist + max_dist * max_dist) // 2 + len_diff - 1
    dist = max_dist + 1
    for ops in _MBLEVEN2018[ops_index]:
        pos1 = pos2 = cur_dist = 0
        while pos1 < len1 and pos2 < len2:
            if s1[pos1] != s2[pos2]:
                cur_dist += 1
                if not ops:
                    break
                if ops & 1:
                    pos1 += 1
                if ops & 2:
                    pos2 += 1
                ops >>= 2
            else:
                pos1 += 1
                pos2 += 1
        cur_dist += (len1 - pos1) + (len2 - pos2)
        dist = min(dist, cur_dist)

    return dist if dist <= max_dist else max_dist + 1


def levenshtein_hyrroe2003(
    pm: PatternMatcher,
    s1: Sequence,
    s2: Sequence,
    max_dist: int = UNLIMITED,
    record_matrix: bool = False,
    record_bit_row: bool = False,
) -> LevenshteinResult:
    """Hyyrö's bit-parallel Levenshtein distance for a pattern of 1 to 64 elements.

    ``pm`` holds the occurrence masks of ``s1`` in its block 0.
    """
    len1, len2 = len(s1), len(s2)
    if not 0 < len1 <= WORD_BITS:
        raise ValueError("pattern must hold between 1 and 64 elements")

    vp, vn = MASK64, 0
    res = LevenshteinResult(dist=len1)
    if record_matrix:
        res.vp = BitMatrixRecord(len2, 1, MASK64)
        res.vn = BitMatrixRecord(len2, 1, 0)

    mask = 1 << (len1 - 1)
    for i, ch in enumerate(s2):
        d0, hp, hn = _advance(pm.get(0, ch), vp, vn)

        res.dist += int(bool(hp & mask)) - int(bool(hn & mask))

        hp = ((hp << 1) | 1) & MASK64
        hn = (hn << 1) & MASK64
        vp = hn | (~(d0 | hp) & MASK64)
        vn = hp & d0

        if record_matrix:
            res.vp[i][0] = vp
            res.vn[i][0] = vn

    if res.dist > max_dist:
        res.dist = max_dist + 1

    if record_bit_row:
        res.first_block = 0
        res.last_block = 0
        res.prev_score = len2
        res.vecs.append(LevenshteinRow(vp, vn))

    return res


def _check_band(max_dist: int) -> None:
    if not 0 <= max_dist < WORD_BITS:
        raise ValueError("band width must be between 0 and 63")


def levenshtein_hyrroe2003_small_band_block(
    pm: PatternMatcher, s1: Sequence, s2: Sequence, max_dist: int
) -> int:
    """Levenshtein distance restricted to a diagonal band of width ``2 * max_dist + 1``.

    ``pm`` holds the block occurrence masks of ``s1``. Results above ``max_dist``
    are reported as ``max_dist + 1``.
    """
    _check_band(max_dist)
    len1, len2 = len(s1), len(s2)
    if abs(len1 - len2) > max_dist:
        return max_dist + 1
    if max_dist > min(len1, len2):
        raise ValueError("band width must not exceed either sequence length")

    words = len(pm)
    vp = (MASK64 << (WORD_BITS - max_dist - 1)) & MASK64
    vn = 0
    dist = max_dist
    horizontal = _HORIZONTAL
    start_pos = max_dist + 1 - WORD_BITS
    diagonal_steps = len1 - max_dist
    # the score can decrease along the horizontal, but not along the diagonal
    break_score = max_dist + len2 - diagonal_steps

    for i, ch in enumerate(s2):
        if start_pos < 0:
            x = (pm.get(0, ch) << -start_pos) & MASK64
        else:
            word, word_pos = divmod(start_pos, WORD_BITS)
            x = pm.get(word, ch) >> word_pos if word < words else 0
            if word + 1 < words and word_pos:
                x |= (pm.get(word + 1, ch) << (WORD_BITS - word_pos)) & MASK64

        d0, hp, hn = _advance(x, vp, vn)

        if i < diagonal_steps:
            dist += int(not d0 & _DIAGONAL)
        else:
            dist += int(bool(hp & horizontal)) - int(bool(hn & horizontal))
            horizontal >>= 1

        if dist > break_score:
            return max_dist + 1

        vp, vn = _shift_band(d0, hp, hn)
        start_pos += 1

    return dist if dist <= max_dist else max_dist + 1


def levenshtein_hyrroe2003_small_band(
    s1: Sequence, s2: Sequence, max_dist: int, record_matrix: bool = False
) -> LevenshteinResult:
    """Banded Levenshtein distance that builds its occurrence masks while scanning.

    With ``record_matrix`` the band's delta vectors are kept per row of ``s2``.
    """
    _check_band(max_dist)
    len1, len2 = len(s1), len(s2)

    res = LevenshteinResult(dist=max_dist)
    if record_matrix:
        res.vp = BitMatrixRecord(len2, 1, MASK64)
        res.vn = BitMatrixRecord(len2, 1, 0)
        start_offset = max_dist + 2 - WORD_BITS
        for i in range(len2):
            res.vp.set_offset(i, start_offset + i)
            res.vn.set_offset(i, start_offset + i)

    if abs(len1 - len2) > max_dist:
        res.dist = max_dist + 1
        return res
    if max_dist > min(len1, len2):
        raise ValueError("band width must not exceed either sequence length")

    vp = (MASK64 << (WORD_BITS - max_dist - 1)) & MASK64
    vn = 0
    horizontal = _HORIZONTAL
    diagonal_steps = len1 - max_dist
    break_score = max_dist + len2 - diagonal_steps

    positions: dict[Hashable, tuple[int, int]] = {}

    def register(ch: Hashable, pos: int) -> None:
        last, mask = positions.get(ch, (0, 0))
        shifted = shr64(mask, pos - last) if mask else 0
        positions[ch] = (pos, shifted | _DIAGONAL)

    for j in range(-max_dist, 0):
        register(s1[j + max_dist], j)

    for i, ch in enumerate(s2):
        if i + max_dist < len1:
            register(s1[i + max_dist], i)
        last, mask = positions.get(ch, (0, 0))
        x = shr64(mask, i - last)

        d0, hp, hn = _advance(x, vp, vn)

        if i < diagonal_steps:
            res.dist += int(not d0 & _DIAGONAL)
        else:
            res.dist += int(bool(hp & horizontal)) - int(bool(hn & horizontal))
            horizontal >>= 1

        if res.dist > break_score:
            res.dist = max_dist + 1
            return res

        vp, vn = _shift_band(d0, hp, hn)

        if record_matrix:
            res.vp[i][0] = vp
            res.vn[i][0] = vn

    if res.dist > max_dist:
        res.dist = max_dist + 1
    return res